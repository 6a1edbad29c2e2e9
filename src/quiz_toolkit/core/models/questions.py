"""
Module: questions

Purpose:
    Provides the ExtractedQuestion dataclass - the unit of output produced
    by the extractor and consumed by analysis, merge, export and search.
    Immutable; edits produce new instances via with_changes().

Key Functions:
    - ExtractedQuestion.answer_index: Position of correct_answer in options
    - ExtractedQuestion.with_changes(**kw): Copy with fields replaced
    - ExtractedQuestion.to_dict() / ExtractedQuestion.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.quiz.ExtractedQuiz
    - extractor.extraction.extractor
    - analysis.quality
    - merge.engine
    - export.renderers
    - search.replace

Invariants:
    A multiple-choice question should have >= 2 options and a correct
    answer that is one of them. Violations are tolerated here and reported
    by core.schemas.validator, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional


class QuestionType(str, Enum):
    """Question layout kind."""
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ExtractedQuestion:
    """
    A single extracted question (immutable).

    Attributes:
        id: Identifier unique within one extraction batch, like "q3"
        text: Question stem without numbering or options
        type: QuestionType (strings are coerced)
        options: Option texts in display order, or None for open questions
        correct_answer: Text of the correct option, "" when unknown
        points: Non-negative score weight

    Example:
        >>> q = ExtractedQuestion(
        ...     id="q1",
        ...     text="What is 2+2?",
        ...     options=("3", "4", "5", "6"),
        ...     correct_answer="4",
        ... )
        >>> q.answer_index
        1
    """

    id: str
    text: str
    type: QuestionType = QuestionType.MULTIPLE_CHOICE
    options: Optional[tuple[str, ...]] = None
    correct_answer: str = ""
    points: int = 1

    def __post_init__(self) -> None:
        """Coerce loose inputs and validate on construction."""
        if not self.id:
            raise ValueError(f"id must be non-empty: {self.id!r}")
        if not isinstance(self.type, QuestionType):
            try:
                object.__setattr__(self, "type", QuestionType(self.type))
            except ValueError:
                raise ValueError(f"Unknown question type: {self.type!r}") from None
        if self.options is not None and not isinstance(self.options, tuple):
            object.__setattr__(self, "options", tuple(self.options))
        if self.correct_answer is None:
            object.__setattr__(self, "correct_answer", "")
        if not isinstance(self.points, int) or self.points < 0:
            raise ValueError(f"points must be a non-negative integer: {self.points!r}")

    # ─────────────────────────────────────────────────────────────────────────
    # Derived Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def has_options(self) -> bool:
        return bool(self.options)

    @property
    def answer_index(self) -> Optional[int]:
        """Index of correct_answer within options, or None if absent."""
        if not self.options or not self.correct_answer:
            return None
        try:
            return self.options.index(self.correct_answer)
        except ValueError:
            return None

    def with_changes(self, **changes: Any) -> ExtractedQuestion:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to the external question shape.

        Keys follow the interchange contract (camelCase correctAnswer);
        options are omitted for open questions.
        """
        d: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "type": self.type.value,
        }
        if self.options is not None:
            d["options"] = list(self.options)
        d["correctAnswer"] = self.correct_answer
        d["points"] = self.points
        return d

    @classmethod
    def from_dict(cls, data: dict) -> ExtractedQuestion:
        """
        Deserialize from dictionary.

        Accepts both "correctAnswer" and "correct_answer" keys.
        """
        options = data.get("options")
        answer = data.get("correctAnswer", data.get("correct_answer", ""))
        return cls(
            id=str(data["id"]),
            text=data.get("text", ""),
            type=data.get("type", QuestionType.MULTIPLE_CHOICE.value),
            options=tuple(options) if options is not None else None,
            correct_answer=answer or "",
            points=int(data.get("points", 1)),
        )
