"""Runtime type predicates.

Pure, total classifiers used to check caller-supplied construction inputs
and to pick a rule variant from a raw ``validatorFn`` entry.
"""

import functools
import inspect
from collections.abc import Mapping
from numbers import Number
from typing import Any


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_number(value: Any) -> bool:
    """True for real numbers. Booleans are not numbers here."""
    return isinstance(value, Number) and not isinstance(value, bool)


def is_object(value: Any) -> bool:
    """True for non-null mappings (``dict`` and other ``Mapping`` types)."""
    return value is not None and isinstance(value, Mapping)


def is_function(value: Any) -> bool:
    """True for anything usable as a function.

    Covers plain and lambda functions, builtins, bound methods,
    ``functools.partial`` objects and instances defining ``__call__``.
    Classes are callable but are not treated as functions.

    Examples:
        >>> is_function(len)
        True
        >>> is_function(lambda v, values: False)
        True
        >>> is_function(str)
        False
    """
    if inspect.isclass(value):
        return False
    if inspect.isroutine(value) or isinstance(value, functools.partial):
        return True
    return callable(value)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def type_name(value: Any) -> str:
    """Short type name for configuration error messages."""
    if value is None:
        return "null"
    return type(value).__name__


__all__ = [
    "is_string",
    "is_number",
    "is_object",
    "is_function",
    "is_boolean",
    "type_name",
]
