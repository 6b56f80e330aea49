"""Error types and result data classes for the formstate engine.

Two error taxonomies exist:

- Configuration errors are raised. They come from malformed construction
  inputs (schema, rule set, callbacks) and from ``change()`` with a key the
  schema does not define. A misconfigured engine is never returned.
- Validation errors are data. A failing field is an ErrorState entry and a
  ``SubmitResult`` with ``is_valid=False``; nothing is raised.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from formstate.types import ErrorState, ValueState


class FormConfigurationError(Exception):
    """Raised when an engine is constructed or driven with invalid configuration.

    Attributes:
        field: The schema or rule-set key at fault, if one applies
        reason: Human-readable description of the problem

    Examples:
        >>> err = FormConfigurationError("expected a string", field="email")
        >>> str(err)
        "FormEngine() invalid configuration for key 'email': expected a string"
    """

    def __init__(self, reason: str, field: Optional[str] = None):
        self.reason = reason
        self.field = field
        if field is None:
            message = f"FormEngine() invalid configuration: {reason}"
        else:
            message = f"FormEngine() invalid configuration for key '{field}': {reason}"
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class UnknownFieldError(FormConfigurationError, KeyError):
    """Raised by ``FormEngine.change()`` for a key absent from the schema.

    Also a ``KeyError``, so lookups guarded with ``except KeyError`` catch it.
    """

    def __init__(self, field: str):
        super().__init__("key is not defined in the form schema", field=field)


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of one ``FormEngine.submit()`` call.

    Attributes:
        is_valid: True when every field passed its rule
        values: Snapshot of ValueState taken at submit time
        errors: ErrorState computed by this submit (all ``False`` when valid)
        invalid_fields: Keys with an error, in schema order

    Examples:
        >>> result = SubmitResult(is_valid=True, values={"a": "x"}, errors={"a": False})
        >>> bool(result)
        True
    """
    is_valid: bool
    values: ValueState
    errors: ErrorState
    invalid_fields: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_valid

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "isValid": self.is_valid,
            "values": dict(self.values),
            "errors": dict(self.errors),
            "invalidFields": list(self.invalid_fields),
        }


__all__ = [
    "FormConfigurationError",
    "UnknownFieldError",
    "SubmitResult",
]
