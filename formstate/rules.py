"""Field rules: the validation behaviour attached to one form field.

A rule is one of three explicit variants, chosen when the rule is built:

- ``FunctionRule``: runs ``fn(value, values)``; a non-empty string result is
  the field's error, anything else means valid.
- ``FixedMessageRule``: the field is always in error with a fixed message.
  Used to hard-disable a field.
- ``AlwaysValidRule``: the field never has an error.

Callers may also describe a rule as a mapping with a ``validatorFn`` entry
(a function, or ``False`` for always-valid). ``coerce_rule`` turns such an
entry into a variant and rejects everything else, including ``True``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from formstate.errors import FormConfigurationError
from formstate.predicates import is_boolean, is_function, is_string, type_name
from formstate.types import ErrorValue, RuleKind, ValidatorFn, ValueState

VALIDATOR_KEYS = ("validatorFn", "validator_fn")


@dataclass(frozen=True)
class FunctionRule:
    """Rule that delegates to a validator function.

    Examples:
        >>> rule = FunctionRule(lambda value, values: False if value else "empty")
        >>> rule.evaluate("", {})
        'empty'
        >>> rule.evaluate("x", {})
        False
    """
    fn: ValidatorFn

    def __post_init__(self):
        if not is_function(self.fn):
            raise FormConfigurationError(
                f"function rule expected a function, but got {type_name(self.fn)}"
            )

    @property
    def kind(self) -> RuleKind:
        return RuleKind.FUNCTION

    def evaluate(self, value: str, values: ValueState) -> ErrorValue:
        result = self.fn(value, values)
        if isinstance(result, str) and result:
            return result
        return False


@dataclass(frozen=True)
class FixedMessageRule:
    """Rule that always reports the same error message."""
    message: str

    def __post_init__(self):
        if not is_string(self.message) or not self.message:
            raise FormConfigurationError(
                f"fixed message rule expected a non-empty string, but got {self.message!r}"
            )

    @property
    def kind(self) -> RuleKind:
        return RuleKind.FIXED_MESSAGE

    def evaluate(self, value: str, values: ValueState) -> ErrorValue:
        return self.message


@dataclass(frozen=True)
class AlwaysValidRule:
    """Rule under which the field is always valid."""

    @property
    def kind(self) -> RuleKind:
        return RuleKind.ALWAYS_VALID

    def evaluate(self, value: str, values: ValueState) -> ErrorValue:
        return False


Rule = Union[FunctionRule, FixedMessageRule, AlwaysValidRule]

RULE_TYPES = (FunctionRule, FixedMessageRule, AlwaysValidRule)


def disabled(message: str) -> FixedMessageRule:
    """Rule that keeps a field permanently in error with ``message``."""
    return FixedMessageRule(message)


def always_valid() -> AlwaysValidRule:
    return AlwaysValidRule()


def _validator_entry(entry: Mapping) -> Optional[str]:
    for name in VALIDATOR_KEYS:
        if name in entry:
            return name
    return None


def coerce_rule(key: str, entry: Any) -> Rule:
    """Build a rule variant from a caller-supplied rule-set entry.

    Args:
        key: The field the rule belongs to (used in error messages)
        entry: A rule instance, or a mapping with a ``validatorFn`` entry

    Returns:
        The matching rule variant

    Raises:
        FormConfigurationError: If the entry has no validator, the validator
            is neither a function nor a boolean, or the validator is ``True``

    Examples:
        >>> coerce_rule("email", {"validatorFn": False})
        AlwaysValidRule()
        >>> coerce_rule("email", {"validatorFn": True})
        Traceback (most recent call last):
        ...
        formstate.errors.FormConfigurationError: FormEngine() invalid configuration for key 'email': validatorFn=True is not a valid rule, use False for an always-valid field
    """
    if isinstance(entry, RULE_TYPES):
        return entry

    if not isinstance(entry, Mapping):
        raise FormConfigurationError(
            f"expected a rule or a mapping with validatorFn, but got {type_name(entry)}",
            field=key,
        )

    name = _validator_entry(entry)
    if name is None:
        raise FormConfigurationError("expected validatorFn to be present in validation schema", field=key)

    validator = entry[name]
    if is_boolean(validator):
        if validator:
            raise FormConfigurationError(
                "validatorFn=True is not a valid rule, use False for an always-valid field",
                field=key,
            )
        return AlwaysValidRule()

    if is_function(validator):
        return FunctionRule(validator)

    raise FormConfigurationError(
        f"expected validatorFn of type function or boolean, but got {type_name(validator)}",
        field=key,
    )


__all__ = [
    "Rule",
    "FunctionRule",
    "FixedMessageRule",
    "AlwaysValidRule",
    "disabled",
    "always_valid",
    "coerce_rule",
]
