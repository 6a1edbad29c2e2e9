"""Quiz validation: non-fatal reports and schema checks."""

from .validator import (
    ValidationError,
    ValidationReport,
    is_placeholder_option,
    validate_quiz,
    validate_quiz_data,
)

__all__ = [
    "ValidationError",
    "ValidationReport",
    "is_placeholder_option",
    "validate_quiz",
    "validate_quiz_data",
]
