"""Validation utilities for Class Bracket.

This module provides reusable validation functions with consistent error handling.
"""

from typing import List, Optional

from classbracket.exceptions import InvalidStudentDataException

MAX_NAME_LENGTH = 100


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


# ========== Student Name Validation ==========


def validate_student_name(name: Optional[str]) -> ValidationResult:
    """Validate a student's display name.

    Surrounding whitespace is trimmed and inner runs of whitespace are
    collapsed to a single space.

    Args:
        name: Name to validate

    Returns:
        ValidationResult with validation status and the cleaned name

    Example:
        >>> result = validate_student_name("  Ada   Lovelace ")
        >>> result.sanitized_value
        'Ada Lovelace'
    """
    if name is None or not name.strip():
        return ValidationResult(
            is_valid=False,
            error_message="Student name is required",
        )

    cleaned = " ".join(name.split())

    if len(cleaned) > MAX_NAME_LENGTH:
        return ValidationResult(
            is_valid=False,
            error_message=f"Student name too long (max {MAX_NAME_LENGTH} characters)",
        )

    return ValidationResult(is_valid=True, sanitized_value=cleaned)


def validate_student_name_strict(name: Optional[str]) -> str:
    """Validate a name and raise exception if invalid.

    Returns:
        The cleaned name

    Raises:
        InvalidStudentDataException: If the name is invalid
    """
    result = validate_student_name(name)
    if not result.is_valid:
        raise InvalidStudentDataException(result.error_message)
    return result.sanitized_value


# ========== Roster Text ==========


def parse_roster_text(text: Optional[str]) -> List[str]:
    """Split pasted roster text into names, one per line.

    Blank lines are dropped and each name is trimmed.
    """
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]
