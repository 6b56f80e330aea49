"""Unit tests for the runtime type predicates."""

import functools

import pytest

from formstate.predicates import (
    is_boolean,
    is_function,
    is_number,
    is_object,
    is_string,
    type_name,
)


class _Callable:
    def __call__(self, value, values):
        return False

    def method(self, value, values):
        return False


class TestIsString:
    """Test string classification."""

    @pytest.mark.parametrize("value", ["", "abc", "   "])
    def test_strings(self, value):
        """Should accept any str, including empty."""
        assert is_string(value) is True

    @pytest.mark.parametrize("value", [None, 1, b"abc", ["a"], False])
    def test_non_strings(self, value):
        """Should reject bytes, numbers, None and containers."""
        assert is_string(value) is False


class TestIsNumber:
    """Test number classification."""

    @pytest.mark.parametrize("value", [0, 1, -3, 1.5, float("inf")])
    def test_numbers(self, value):
        """Should accept ints and floats."""
        assert is_number(value) is True

    @pytest.mark.parametrize("value", [True, False, "1", None])
    def test_booleans_are_not_numbers(self, value):
        """Should reject booleans even though bool subclasses int."""
        assert is_number(value) is False


class TestIsObject:
    """Test object (mapping) classification."""

    def test_dict_is_object(self):
        """Should accept dicts, including empty ones."""
        assert is_object({}) is True
        assert is_object({"a": "b"}) is True

    def test_none_is_not_object(self):
        """Should reject None."""
        assert is_object(None) is False

    @pytest.mark.parametrize("value", [[], "abc", 1, (("a", "b"),)])
    def test_non_mappings(self, value):
        """Should reject sequences and scalars."""
        assert is_object(value) is False


class TestIsFunction:
    """Test function classification."""

    def test_plain_function(self):
        """Should accept def functions and lambdas."""
        def fn(value, values):
            return False

        assert is_function(fn) is True
        assert is_function(lambda v, vs: False) is True

    def test_builtin(self):
        """Should accept builtins."""
        assert is_function(len) is True

    def test_unusual_function_forms(self):
        """Should accept bound methods, partials and callable instances."""
        obj = _Callable()
        assert is_function(obj.method) is True
        assert is_function(functools.partial(lambda a, v, vs: False, 1)) is True
        assert is_function(obj) is True

    def test_async_function(self):
        """Should accept coroutine functions."""
        async def fn(values):
            return None

        assert is_function(fn) is True

    @pytest.mark.parametrize("value", [None, "fn", 1, True, str, _Callable])
    def test_non_functions(self, value):
        """Should reject non-callables and classes."""
        assert is_function(value) is False


class TestIsBoolean:
    """Test boolean classification."""

    def test_booleans(self):
        assert is_boolean(True) is True
        assert is_boolean(False) is True

    @pytest.mark.parametrize("value", [0, 1, "", None])
    def test_non_booleans(self, value):
        """Should reject falsy or truthy non-bools."""
        assert is_boolean(value) is False


def test_type_name():
    """Should report 'null' for None and the class name otherwise."""
    assert type_name(None) == "null"
    assert type_name(1) == "int"
    assert type_name("x") == "str"
