"""
Module: quiz

Purpose:
    Provides the ExtractedQuiz dataclass - the terminal output of the
    pipeline and the only shape persistence/UI collaborators depend on.

Dependencies:
    - dataclasses (std)
    - .questions.ExtractedQuestion

Used By:
    - extractor.pipeline
    - merge.bulk
    - export.exporter
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from .questions import ExtractedQuestion

DEFAULT_SUBJECT = "General Knowledge"


@dataclass(frozen=True, slots=True)
class ExtractedQuiz:
    """
    A titled collection of questions (immutable).

    Attributes:
        title: Display title
        description: Free text description ("" allowed)
        subject: Subject label like "General Knowledge"
        questions: Questions in presentation order
    """

    title: str
    description: str = ""
    subject: str = ""
    questions: tuple[ExtractedQuestion, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.questions, tuple):
            object.__setattr__(self, "questions", tuple(self.questions))
        for q in self.questions:
            if not isinstance(q, ExtractedQuestion):
                raise ValueError(f"questions must be ExtractedQuestion: {type(q).__name__}")

    @property
    def question_count(self) -> int:
        return len(self.questions)

    def with_questions(self, questions: Iterable[ExtractedQuestion]) -> ExtractedQuiz:
        """Return a copy holding a different question list."""
        return replace(self, questions=tuple(questions))

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "subject": self.subject,
            "questions": [q.to_dict() for q in self.questions],
        }

    @classmethod
    def from_dict(cls, data: dict) -> ExtractedQuiz:
        return cls(
            title=data.get("title", ""),
            description=data.get("description", "") or "",
            subject=data.get("subject", "") or "",
            questions=tuple(ExtractedQuestion.from_dict(q) for q in data.get("questions", [])),
        )
