"""Reusable field validators.

Each validator takes ``(value, message=None)`` and returns ``False`` when the
value passes, or an error message string when it does not. They are pure and
independent of ``FormEngine``, and compose inside a function rule:

    >>> from formstate.validators import email_format_error, first_error, required_error
    >>> def email_rule(value, values):
    ...     return first_error(required_error(value), email_format_error(value))
    >>> email_rule("", {})
    'This is a required field'
    >>> email_rule("a@b.com", {})
    False
"""

import re
from typing import Any, Optional

from formstate.types import ErrorValue

REQUIRED_MESSAGE = "This is a required field"
EMAIL_MESSAGE = "This is not a valid email address"

# local-part: dot-separated atoms or a quoted string
# domain: bracketed IPv4 literal or dot-separated labels ending in a 2+ letter TLD
EMAIL_PATTERN = re.compile(
    r'(?:[^<>()\[\]\\.,;:\s@"]+(?:\.[^<>()\[\]\\.,;:\s@"]+)*|".+")'
    r"@"
    r"(?:\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\]"
    r"|(?:[a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,})"
)


def required_error(value: Any, message: Optional[str] = None) -> ErrorValue:
    """Check that a value has content once surrounding whitespace is trimmed.

    Values that cannot be trimmed (``None``, numbers, ...) count as empty.

    Args:
        value: The field value to check
        message: Optional custom error message

    Returns:
        ``False`` if the value is present, otherwise the error message

    Examples:
        >>> required_error("x")
        False
        >>> required_error("   ")
        'This is a required field'
        >>> required_error(None, "Name is required")
        'Name is required'
    """
    if isinstance(value, str) and value.strip():
        return False
    return message or REQUIRED_MESSAGE


def email_format_error(value: Any, message: Optional[str] = None) -> ErrorValue:
    """Check that a value is a conventionally formatted email address.

    A single full-string pattern test, not an address parser. Quoted local
    parts and bracketed IPv4 domain literals are accepted.

    Args:
        value: The field value to check
        message: Optional custom error message

    Returns:
        ``False`` if the value matches, otherwise the error message

    Examples:
        >>> email_format_error("a@b.com")
        False
        >>> email_format_error("a@[192.168.0.1]")
        False
        >>> email_format_error("not-an-email")
        'This is not a valid email address'
    """
    if isinstance(value, str) and EMAIL_PATTERN.fullmatch(value):
        return False
    return message or EMAIL_MESSAGE


def first_error(*results: ErrorValue) -> ErrorValue:
    """Return the first error message among validator results, else ``False``.

    Arguments are evaluated eagerly by the caller; use ``or`` chaining when a
    later check must not run after an earlier failure.
    """
    for result in results:
        if isinstance(result, str) and result:
            return result
    return False


__all__ = [
    "REQUIRED_MESSAGE",
    "EMAIL_MESSAGE",
    "EMAIL_PATTERN",
    "required_error",
    "email_format_error",
    "first_error",
]
