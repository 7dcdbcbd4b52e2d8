"""Validation utilities for Party Roulette.

This module provides reusable validation functions with consistent error handling.
"""

from typing import Optional

from partyroulette.constants import EDITABLE_FIELDS, MAX_HIT_RATE, MIN_HIT_RATE
from partyroulette.exceptions import (
    InvalidParticipantDataException,
    InvalidRuleException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[str] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Generic Validation ==========


def validate_non_empty(
    value: Optional[str], field_name: str = "Field"
) -> ValidationResult:
    """Validate that a field is not empty.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with the trimmed value
    """
    if value is None or not str(value).strip():
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} cannot be empty",
        )
    return ValidationResult(is_valid=True, sanitized_value=str(value).strip())


# ========== Participant Validation ==========


def validate_participant_fields(attribute: Optional[str], name: Optional[str]) -> None:
    """Validate the fields of a new participant.

    Raises:
        InvalidParticipantDataException: If attribute or name is blank
    """
    for value, field_name in ((attribute, "Attribute"), (name, "Name")):
        result = validate_non_empty(value, field_name)
        if not result:
            raise InvalidParticipantDataException(result.error_message)


def validate_editable_field(field_name: str) -> None:
    """Reject edits to anything but attribute or name."""
    if field_name not in EDITABLE_FIELDS:
        raise InvalidParticipantDataException(
            f"Participant field cannot be edited: {field_name}"
        )


def validate_participant_edit(field_name: str, value: Optional[str]) -> str:
    """Validate an edit to a participant field.

    Returns:
        The trimmed value

    Raises:
        InvalidParticipantDataException: If the field is not editable or the value is blank
    """
    validate_editable_field(field_name)
    result = validate_non_empty(value, field_name.capitalize())
    if not result:
        raise InvalidParticipantDataException(result.error_message)
    return result.sanitized_value


# ========== Rule Validation ==========


def validate_preference_fields(source: Optional[str], target: Optional[str]) -> None:
    """Validate both sides of a preference rule.

    Raises:
        InvalidRuleException: If either attribute is blank
    """
    fields = (
        (source, "Preferred 'from' attribute"),
        (target, "Preferred 'to' attribute"),
    )
    for value, field_name in fields:
        result = validate_non_empty(value, field_name)
        if not result:
            raise InvalidRuleException(result.error_message)


def clamp_hit_rate(value) -> int:
    """Clamp a hit rate into the 0-100 range.

    Non-numeric values fall back to the minimum.
    """
    try:
        rate = int(round(float(value)))
    except (ValueError, TypeError, OverflowError):
        return MIN_HIT_RATE
    return min(MAX_HIT_RATE, max(MIN_HIT_RATE, rate))
