"""Validator - Declarative field rules for video payloads."""

from videoapi.core.validator.validator import (
    VIDEO_RULES,
    ValidationRule,
    validate_field,
    validate_video,
)

__all__ = ["VIDEO_RULES", "ValidationRule", "validate_field", "validate_video"]
