"""formstate: form-state and validation engine.

formstate tracks the values of a fixed set of form fields, validates every
field on submit, and calls a completion callback only when all fields pass:
- FormEngine owning field values and field errors
- Field rules as explicit variants (function, fixed message, always valid)
- Reusable validators (required field, email format)
- Runtime type predicates for checking construction inputs
- Audit event stream for every engine operation

Basic usage:
    >>> from formstate import FormEngine, email_format_error, required_error
    >>> engine = FormEngine(
    ...     schema={"email": ""},
    ...     rule_set={
    ...         "email": {"validatorFn": lambda v, values: required_error(v) or email_format_error(v)},
    ...     },
    ...     on_submit=print,
    ... )
    >>> engine.change("email", "bad")
    >>> engine.submit().errors
    {'email': 'This is not a valid email address'}
"""

__version__ = "0.1.0"
__author__ = "formstate contributors"

# Version info
VERSION = (0, 1, 0)

# Core exports
from formstate.engine import FormEngine
from formstate.errors import FormConfigurationError, SubmitResult, UnknownFieldError
from formstate.rules import AlwaysValidRule, FixedMessageRule, FunctionRule, always_valid, disabled
from formstate.validators import email_format_error, first_error, required_error

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "FormEngine",
    "FormConfigurationError",
    "UnknownFieldError",
    "SubmitResult",
    "FunctionRule",
    "FixedMessageRule",
    "AlwaysValidRule",
    "always_valid",
    "disabled",
    "required_error",
    "email_format_error",
    "first_error",
]
