"""
Validator - Declarative field rules for video payloads.

Each field is described by a ValidationRule. validate_field checks a single
value against its rule and reports at most one message; validate_video runs
the fixed rule set for videos and collects every message in rule order.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from videoapi.core.models import VideoQuality


@dataclass(frozen=True)
class ValidationRule:
    """Constraints for a single payload field."""

    field_name: str
    is_required: bool = False
    is_string: bool = False
    min_length: int | None = None
    max_length: int | None = None
    is_array: bool = False
    enum_values: tuple[str, ...] | None = None


# Order matters: messages are reported in this order
VIDEO_RULES: tuple[ValidationRule, ...] = (
    ValidationRule("title", is_required=True, is_string=True, min_length=1, max_length=40),
    ValidationRule("author", is_required=True, is_string=True, min_length=1, max_length=20),
    ValidationRule(
        "availableResolutions",
        is_required=True,
        is_array=True,
        enum_values=tuple(q.value for q in VideoQuality),
    ),
)


def validate_field(value: Any, rule: ValidationRule) -> str | None:
    """
    Check a value against a rule.

    Args:
        value: The payload value, None when the field is absent
        rule: Constraints for the field

    Returns:
        The first failing check's message, or None if the value is valid
    """
    name = rule.field_name

    if value is None:
        return f"{name} is required." if rule.is_required else None

    if rule.is_string:
        if not isinstance(value, str):
            return f"{name} must be a string."
        if rule.min_length is not None and len(value) < rule.min_length:
            return f"Invalid {name} length (minimum {rule.min_length} characters)."
        if rule.max_length is not None and len(value) > rule.max_length:
            return f"Invalid {name} length (maximum {rule.max_length} characters)."

    if rule.is_array and not isinstance(value, list):
        return f"{name} must be an array."

    if rule.enum_values is not None and rule.is_array:
        for item in value:
            if item not in rule.enum_values:
                return f"Invalid {name}: {item}"

    return None


def validate_video(payload: Any) -> list[str]:
    """
    Validate a create/update payload against VIDEO_RULES.

    A payload that is not a mapping is checked as if it were empty.

    Returns:
        Error messages in rule order, empty when the payload is valid
    """
    if not isinstance(payload, Mapping):
        payload = {}

    errors: list[str] = []
    for rule in VIDEO_RULES:
        error = validate_field(payload.get(rule.field_name), rule)
        if error:
            errors.append(error)
    return errors
