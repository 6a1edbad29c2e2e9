"""
Core Models Package

Immutable, validated data models shared by every pipeline stage.

All models in this package are frozen dataclasses. Each stage hands its
output to the next by value, so documents can be extracted concurrently
without shared mutable state.
"""

from .questions import ExtractedQuestion, QuestionType
from .quiz import DEFAULT_SUBJECT, ExtractedQuiz
from .merge import (
    BulkProcessingResult,
    ConflictType,
    FileResult,
    MergeConflict,
    MergeStrategy,
    Resolution,
)
from .analysis import QuestionAnalysis, QuizAnalysis

__all__ = [
    "ExtractedQuestion",
    "QuestionType",
    "DEFAULT_SUBJECT",
    "ExtractedQuiz",
    "BulkProcessingResult",
    "ConflictType",
    "FileResult",
    "MergeConflict",
    "MergeStrategy",
    "Resolution",
    "QuestionAnalysis",
    "QuizAnalysis",
]
