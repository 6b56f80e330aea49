"""Construction-input validation for FormEngine.

All checks run once, synchronously, before an engine creates any state, so a
misconfigured engine never becomes usable. The schema's shape is validated
with a Draft 7 JSON Schema; every failure is surfaced as a
``FormConfigurationError`` naming the offending key.
"""

import logging
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft7Validator

from formstate.errors import FormConfigurationError
from formstate.predicates import is_function, is_object, type_name
from formstate.rules import Rule, coerce_rule

logger = logging.getLogger(__name__)

FORM_SCHEMA_SHAPE: Dict[str, Any] = {
    "type": "object",
    "minProperties": 1,
    "additionalProperties": {"type": "string"},
}

_schema_validator = Draft7Validator(FORM_SCHEMA_SHAPE)


def _translate_schema_error(error: jsonschema.ValidationError) -> FormConfigurationError:
    if error.validator == "minProperties":
        return FormConfigurationError("expected formSchema to define at least one field")

    if error.validator == "type" and error.path:
        key = str(error.path[0])
        return FormConfigurationError(
            f"expected type string, but got {type_name(error.instance)}. All values need to be of type string",
            field=key,
        )

    return FormConfigurationError(f"formSchema is invalid: {error.message}")


def validate_schema(schema: Any) -> None:
    """Check that ``schema`` is a non-empty mapping of field name to string.

    Raises:
        FormConfigurationError: On the first problem found, in key order
    """
    if schema is None:
        raise FormConfigurationError("expected formSchema to be present")

    if not is_object(schema):
        raise FormConfigurationError(f"expected formSchema to be an object, but received {type_name(schema)}")

    for key in schema:
        if not isinstance(key, str):
            raise FormConfigurationError(f"expected field names to be strings, but got {type_name(key)}")

    errors = sorted(
        _schema_validator.iter_errors(dict(schema)),
        key=lambda e: (list(schema).index(e.path[0]) if e.path else -1),
    )
    if errors:
        raise _translate_schema_error(errors[0])


def validate_rule_set(schema: Dict[str, str], rule_set: Any) -> Dict[str, Rule]:
    """Check the rule set against the schema and normalize it.

    Returns:
        One rule variant per schema key, in schema key order

    Raises:
        FormConfigurationError: If the rule set is missing, not a mapping,
            lacks a schema key, or holds an invalid entry
    """
    if rule_set is None:
        raise FormConfigurationError("expected formValidation to be present")

    if not is_object(rule_set):
        raise FormConfigurationError(
            f"expected formValidation to be an object, but received {type_name(rule_set)}"
        )

    if not rule_set:
        raise FormConfigurationError("expected formValidation to define at least one rule")

    # Entries are checked in rule-set order, like the schema values are.
    coerced = {key: coerce_rule(key, entry) for key, entry in rule_set.items()}

    rules: Dict[str, Rule] = {}
    for key in schema:
        if key not in coerced:
            raise FormConfigurationError("expected a validation rule for this key", field=key)
        rules[key] = coerced[key]

    extra = [key for key in coerced if key not in schema]
    if extra:
        logger.warning("Ignoring validation rules for keys not in the form schema: %s", ", ".join(map(str, extra)))

    return rules


def validate_callbacks(on_submit: Any, on_errors: Optional[Any] = None) -> None:
    if on_submit is None:
        raise FormConfigurationError("expected onSubmitForm to be present")

    if not is_function(on_submit):
        raise FormConfigurationError(
            f"expected onSubmitForm to be a function, but received {type_name(on_submit)}"
        )

    if on_errors is not None and not is_function(on_errors):
        raise FormConfigurationError(
            f"expected onErrors to be a function, but received {type_name(on_errors)}"
        )


def validate_config(
    schema: Any,
    rule_set: Any,
    on_submit: Any,
    on_errors: Optional[Any] = None,
) -> Dict[str, Rule]:
    """Run every construction check and return the normalized rules.

    Args:
        schema: Field name -> default string value
        rule_set: Field name -> rule (variant instance or ``{"validatorFn": ...}``)
        on_submit: Success callback
        on_errors: Optional failure callback

    Returns:
        Rules keyed by schema field, in schema key order

    Raises:
        FormConfigurationError: If any input is malformed

    Examples:
        >>> rules = validate_config({"name": ""}, {"name": {"validatorFn": False}}, print)
        >>> rules["name"].kind.value
        'always_valid'
    """
    validate_schema(schema)
    rules = validate_rule_set(schema, rule_set)
    validate_callbacks(on_submit, on_errors)
    return rules


__all__ = [
    "FORM_SCHEMA_SHAPE",
    "validate_schema",
    "validate_rule_set",
    "validate_callbacks",
    "validate_config",
]
