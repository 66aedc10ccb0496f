"""Argument validation for tool calls.

Checks tool arguments against the tool's JSON Schema and turns the most
relevant schema violation into a single message fit for the caller.
"""

from __future__ import annotations

from typing import Any

from jsonschema import Draft202012Validator
from jsonschema import ValidationError as SchemaViolation
from jsonschema.exceptions import SchemaError


class ArgumentError(Exception):
    """Raised when tool arguments do not satisfy the tool schema."""

    pass


# Lower rank wins when several violations are reported at once
_VIOLATION_RANK = {
    "required": 0,
    "enum": 1,
    "const": 1,
    "type": 2,
    "minimum": 3,
    "maximum": 3,
    "exclusiveMinimum": 3,
    "exclusiveMaximum": 3,
}


def check_schema(schema: dict[str, Any]) -> None:
    """Check that a tool schema is itself valid.

    Raises:
        SchemaError: If the schema is not valid JSON Schema.
    """
    Draft202012Validator.check_schema(schema)


def _plural(word: str) -> str:
    if word.endswith("y"):
        return word[:-1] + "ies"
    return word + "s"


def _field_name(violation: SchemaViolation) -> str:
    path = list(violation.absolute_path)
    return str(path[-1]) if path else "arguments"


def _describe(violation: SchemaViolation, value_label: str) -> str:
    kind = violation.validator

    if kind == "required":
        instance = violation.instance if isinstance(violation.instance, dict) else {}
        missing = next(
            (name for name in violation.validator_value if name not in instance),
            "argument",
        )
        # Requirements that come from an if/then block depend on the action
        if "then" in violation.schema_path and "action" in instance:
            return f"{missing.capitalize()} is required when action is '{instance['action']}'"
        return f"Invalid arguments: {missing} is required"

    if kind == "enum":
        field = _field_name(violation)
        supported = ", ".join(str(v) for v in violation.validator_value)
        return f"Unknown {field}: {violation.instance}. Supported {_plural(field)}: {supported}"

    if kind == "type":
        return (
            f"Invalid arguments: {_field_name(violation)} must be of type "
            f"{violation.validator_value}"
        )

    if kind in ("minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum"):
        bounds = violation.schema
        low = bounds.get("minimum", bounds.get("exclusiveMinimum"))
        high = bounds.get("maximum", bounds.get("exclusiveMaximum"))
        if low is not None and high is not None:
            return f"{value_label} value must be between {low} and {high}"

    return f"Invalid arguments: {violation.message}"


def validate_arguments(
    schema: dict[str, Any],
    arguments: Any,
    value_label: str = "Value",
) -> None:
    """Validate tool arguments against a schema.

    Args:
        schema: The tool's input schema.
        arguments: Arguments received in the tools/call request.
        value_label: Word used for the numeric value in range messages.

    Raises:
        ArgumentError: If the arguments violate the schema.
    """
    if not isinstance(arguments, dict):
        raise ArgumentError("Invalid arguments: expected an object")

    try:
        violations = list(Draft202012Validator(schema).iter_errors(arguments))
    except SchemaError as e:
        raise ArgumentError(f"Invalid tool schema: {e.message}") from e

    if not violations:
        return

    violation = min(
        violations,
        key=lambda v: (_VIOLATION_RANK.get(str(v.validator), 9), len(v.absolute_path)),
    )
    raise ArgumentError(_describe(violation, value_label))
