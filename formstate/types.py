"""Core type definitions for the formstate engine.

This module defines the fundamental types shared by every other module:
- Schema / ValueState / ErrorState: the mappings an engine owns
- ErrorValue: ``False`` (no error) or a message string
- RuleKind: the three declared forms of a field rule
- EventType: audit event types emitted by the engine
"""

from enum import Enum
from typing import Any, Callable, Dict, Union

from typing_extensions import Literal, TypeAlias

Schema: TypeAlias = Dict[str, str]
"""Field name -> default value. Defines the closed set of fields."""

ValueState: TypeAlias = Dict[str, str]
"""Field name -> current value."""

ErrorValue: TypeAlias = Union[Literal[False], str]

ErrorState: TypeAlias = Dict[str, ErrorValue]
"""Field name -> ``False`` or a non-empty error message."""

ValidatorFn: TypeAlias = Callable[[str, ValueState], Any]
SubmitCallback: TypeAlias = Callable[[ValueState], Any]
ErrorsCallback: TypeAlias = Callable[[ErrorState], Any]


class RuleKind(str, Enum):
    """Declared form of a field rule."""
    FUNCTION = "function"
    FIXED_MESSAGE = "fixed_message"
    ALWAYS_VALID = "always_valid"


class EventType(str, Enum):
    """Audit event types for the engine's event stream.

    Every public operation on a FormEngine emits exactly one event.
    """
    FIELD_CHANGED = "field.changed"
    ERRORS_CLEARED = "errors.cleared"
    STATE_CLEARED = "state.cleared"
    SUBMIT_SUCCEEDED = "submit.succeeded"
    SUBMIT_FAILED = "submit.failed"


def empty_errors(schema: Schema) -> ErrorState:
    """Build an all-``False`` ErrorState with the schema's key order."""
    return {key: False for key in schema}


__all__ = [
    "Schema",
    "ValueState",
    "ErrorValue",
    "ErrorState",
    "ValidatorFn",
    "SubmitCallback",
    "ErrorsCallback",
    "RuleKind",
    "EventType",
    "empty_errors",
]
