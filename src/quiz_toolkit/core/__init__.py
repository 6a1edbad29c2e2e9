"""
Quiz Toolkit Core Package

Shared data models and validation. These models are the
single source of truth for every pipeline stage:

1. **Immutable Data Models**
   Frozen dataclasses; edits create new instances.

2. **Stable Interchange Shape**
   `to_dict()` produces the camelCase quiz shape consumed by
   persistence and UI collaborators.

3. **Non-fatal Validation**
   Problems are reported through ValidationReport; only strict
   schema checks raise.
"""

from .models import ExtractedQuestion, ExtractedQuiz, QuestionType
from .schemas import ValidationError, ValidationReport, validate_quiz

__all__ = [
    "ExtractedQuestion",
    "ExtractedQuiz",
    "QuestionType",
    "ValidationError",
    "ValidationReport",
    "validate_quiz",
]
