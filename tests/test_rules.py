"""Unit tests for rule variants and rule coercion."""

import functools

import pytest

from formstate.errors import FormConfigurationError
from formstate.rules import (
    AlwaysValidRule,
    FixedMessageRule,
    FunctionRule,
    always_valid,
    coerce_rule,
    disabled,
)
from formstate.types import RuleKind


class TestFunctionRule:
    """Test the function variant."""

    def test_string_result_is_error(self):
        """Should return a non-empty string result as the error."""
        rule = FunctionRule(lambda value, values: "bad")
        assert rule.evaluate("x", {"a": "x"}) == "bad"
        assert rule.kind == RuleKind.FUNCTION

    @pytest.mark.parametrize("result", [False, "", None, 0, True, ["msg"]])
    def test_non_message_results_are_valid(self, result):
        """Should treat any falsy or non-string result as no error."""
        rule = FunctionRule(lambda value, values: result)
        assert rule.evaluate("x", {}) is False

    def test_receives_value_and_all_values(self):
        """Should pass the field value and the full value snapshot."""
        calls = []

        def fn(value, values):
            calls.append((value, values))
            return False

        FunctionRule(fn).evaluate("pw", {"password": "pw", "confirm": "pw2"})
        assert calls == [("pw", {"password": "pw", "confirm": "pw2"})]

    @pytest.mark.parametrize("fn", [123, None, "fn", str])
    def test_rejects_non_function(self, fn):
        """Should raise a configuration error when fn is not a function."""
        with pytest.raises(FormConfigurationError, match="function rule"):
            FunctionRule(fn)

    def test_validator_exceptions_propagate(self):
        """Should not swallow exceptions raised by the validator."""
        def fn(value, values):
            raise ZeroDivisionError

        with pytest.raises(ZeroDivisionError):
            FunctionRule(fn).evaluate("x", {})


class TestFixedMessageRule:
    """Test the fixed-message variant."""

    def test_always_returns_message(self):
        """Should report the message regardless of value."""
        rule = FixedMessageRule("Field is disabled")
        assert rule.evaluate("", {}) == "Field is disabled"
        assert rule.evaluate("anything", {}) == "Field is disabled"
        assert rule.kind == RuleKind.FIXED_MESSAGE

    @pytest.mark.parametrize("message", ["", None, 1, False])
    def test_rejects_empty_or_non_string(self, message):
        """Should raise a configuration error for unusable messages."""
        with pytest.raises(FormConfigurationError):
            FixedMessageRule(message)

    def test_disabled_helper(self):
        """Should build a FixedMessageRule."""
        assert disabled("off") == FixedMessageRule("off")


class TestAlwaysValidRule:
    """Test the always-valid variant."""

    def test_never_errors(self):
        rule = always_valid()
        assert isinstance(rule, AlwaysValidRule)
        assert rule.evaluate("", {}) is False
        assert rule.kind == RuleKind.ALWAYS_VALID


class TestCoerceRule:
    """Test building variants from rule-set entries."""

    def test_function_entry(self):
        """Should wrap a validatorFn function in a FunctionRule."""
        def fn(value, values):
            return False

        rule = coerce_rule("email", {"validatorFn": fn})
        assert rule == FunctionRule(fn)

    def test_snake_case_key(self):
        """Should accept validator_fn as well as validatorFn."""
        rule = coerce_rule("email", {"validator_fn": False})
        assert isinstance(rule, AlwaysValidRule)

    def test_partial_entry(self):
        """Should accept unusual function forms."""
        fn = functools.partial(lambda msg, value, values: msg, "x")
        assert isinstance(coerce_rule("a", {"validatorFn": fn}), FunctionRule)

    def test_false_entry(self):
        """Should map False to the always-valid variant."""
        assert coerce_rule("a", {"validatorFn": False}) == AlwaysValidRule()

    def test_true_entry_rejected(self):
        """Should reject True at construction time."""
        with pytest.raises(FormConfigurationError) as exc_info:
            coerce_rule("a", {"validatorFn": True})
        assert exc_info.value.field == "a"
        assert "True" in str(exc_info.value)

    def test_missing_validator_rejected(self):
        """Should reject entries without a validatorFn."""
        with pytest.raises(FormConfigurationError, match="validatorFn"):
            coerce_rule("a", {})

    @pytest.mark.parametrize("validator", ["a message", 1, None, ["fn"]])
    def test_wrong_validator_type_rejected(self, validator):
        """Should reject validators that are neither function nor boolean."""
        with pytest.raises(FormConfigurationError) as exc_info:
            coerce_rule("a", {"validatorFn": validator})
        assert exc_info.value.field == "a"

    def test_rule_instances_pass_through(self):
        """Should return variant instances unchanged."""
        rule = FixedMessageRule("off")
        assert coerce_rule("a", rule) is rule

    @pytest.mark.parametrize("entry", [None, "x", False, lambda v, vs: False])
    def test_non_mapping_entry_rejected(self, entry):
        """Should reject entries that are neither rules nor mappings."""
        with pytest.raises(FormConfigurationError):
            coerce_rule("a", entry)
