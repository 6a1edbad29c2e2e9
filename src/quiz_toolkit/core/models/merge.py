"""
Module: merge

Purpose:
    Value types produced while combining question sets from several
    documents: the conflict log entries, per-file outcomes and the batch
    result handed to persistence/UI collaborators.

Key Classes:
    - MergeStrategy: append / replace / merge-by-topic / smart-merge
    - ConflictType, Resolution: Conflict classification and decision
    - MergeConflict: Immutable conflict log entry
    - FileResult: Outcome of one document in a batch
    - BulkProcessingResult: Aggregate batch outcome

Dependencies:
    - dataclasses (std)
    - enum (std)
    - .quiz.ExtractedQuiz

Used By:
    - merge.policy
    - merge.engine
    - merge.bulk
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict

from .quiz import ExtractedQuiz


class MergeStrategy(str, Enum):
    """Named policy controlling how several question lists combine."""
    APPEND = "append"
    REPLACE = "replace"
    MERGE_BY_TOPIC = "merge-by-topic"
    SMART_MERGE = "smart-merge"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | MergeStrategy") -> MergeStrategy:
        """Resolve a strategy name, raising ValueError listing valid names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown merge strategy {value!r} (expected one of: {valid})") from None


class ConflictType(str, Enum):
    DUPLICATE = "duplicate"
    SIMILAR = "similar"
    FORMAT_MISMATCH = "format-mismatch"

    def __str__(self) -> str:
        return self.value


class Resolution(str, Enum):
    KEEP_ORIGINAL = "keep-original"
    USE_NEW = "use-new"
    MERGE = "merge"
    SKIP = "skip"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class MergeConflict:
    """
    A detected relationship between an incoming and an already-merged question.

    Attributes:
        question_id: Id of the incoming question
        original_text: Text of the already-merged question
        new_text: Text of the incoming question
        source_file: Name of the document the incoming question came from
        conflict_type: duplicate / similar / format-mismatch
        resolution: Decision applied by the merge policy
    """

    question_id: str
    original_text: str
    new_text: str
    source_file: str
    conflict_type: ConflictType
    resolution: Resolution

    def __post_init__(self) -> None:
        if not isinstance(self.conflict_type, ConflictType):
            object.__setattr__(self, "conflict_type", ConflictType(self.conflict_type))
        if not isinstance(self.resolution, Resolution):
            object.__setattr__(self, "resolution", Resolution(self.resolution))

    def with_resolution(self, resolution: "Resolution | str") -> MergeConflict:
        return replace(self, resolution=Resolution(resolution))

    def to_dict(self) -> dict:
        return {
            "questionId": self.question_id,
            "originalText": self.original_text,
            "newText": self.new_text,
            "sourceFile": self.source_file,
            "conflictType": self.conflict_type.value,
            "resolution": self.resolution.value,
        }


@dataclass(frozen=True, slots=True)
class FileResult:
    """Outcome of processing one document in a batch."""

    file_name: str
    success: bool
    questions: int = 0
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    processing_time: float = 0.0  # seconds
    detected_format: str = "unknown"
    confidence: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))
        if not isinstance(self.warnings, tuple):
            object.__setattr__(self, "warnings", tuple(self.warnings))

    def to_dict(self) -> dict:
        d: Dict[str, Any] = {
            "fileName": self.file_name,
            "success": self.success,
            "questions": self.questions,
            "processingTime": round(self.processing_time, 6),
            "detectedFormat": self.detected_format,
            "confidence": self.confidence,
        }
        if self.errors:
            d["errors"] = list(self.errors)
        if self.warnings:
            d["warnings"] = list(self.warnings)
        return d


@dataclass(frozen=True)
class BulkProcessingResult:
    """
    Aggregate outcome of a multi-document batch.

    Attributes:
        total_files: Documents submitted
        successful_files: Documents that produced questions
        failed_files: Documents rejected or failed during extraction
        total_questions: Questions extracted before merging
        unique_questions: Questions in the merged quiz
        duplicates_removed: Number of duplicate conflicts logged
        conflicts: Conflict log in detection order
        merge_strategy: Strategy used
        merged_quiz: Final quiz
        file_results: Per-document outcomes in submission order
        processing_stats: Timing summary (seconds)
    """

    total_files: int
    successful_files: int
    failed_files: int
    total_questions: int
    unique_questions: int
    duplicates_removed: int
    conflicts: tuple[MergeConflict, ...]
    merge_strategy: MergeStrategy
    merged_quiz: ExtractedQuiz
    file_results: tuple[FileResult, ...]
    processing_stats: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "totalFiles": self.total_files,
            "successfulFiles": self.successful_files,
            "failedFiles": self.failed_files,
            "totalQuestions": self.total_questions,
            "uniqueQuestions": self.unique_questions,
            "duplicatesRemoved": self.duplicates_removed,
            "conflicts": [c.to_dict() for c in self.conflicts],
            "mergeStrategy": self.merge_strategy.value,
            "mergedQuiz": self.merged_quiz.to_dict(),
            "fileResults": [r.to_dict() for r in self.file_results],
            "processingStats": dict(self.processing_stats),
        }
