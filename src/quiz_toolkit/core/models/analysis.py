"""
Module: analysis

Purpose:
    Derived quality annotations. A QuestionAnalysis is attached per
    question and never mutates it; a QuizAnalysis aggregates them.

Used By:
    - analysis.quality
    - extractor.pipeline
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal

Difficulty = Literal["easy", "medium", "hard"]


@dataclass(frozen=True)
class QuestionAnalysis:
    """
    Quality scores for one question.

    All scores are in [0, 100]; score is the weighted composite.
    """

    question_id: str
    score: int
    difficulty: Difficulty
    category: str
    readability_score: float
    option_balance_score: float
    clarity_score: float
    issues: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    strengths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not (0 <= self.score <= 100):
            raise ValueError(f"score must be 0-100: {self.score}")

    def to_dict(self) -> dict:
        return {
            "questionId": self.question_id,
            "score": self.score,
            "difficulty": self.difficulty,
            "category": self.category,
            "readabilityScore": self.readability_score,
            "optionBalanceScore": self.option_balance_score,
            "clarityScore": self.clarity_score,
            "issues": list(self.issues),
            "suggestions": list(self.suggestions),
            "strengths": list(self.strengths),
        }


@dataclass(frozen=True)
class QuizAnalysis:
    """Aggregate quality statistics for a question set."""

    total_questions: int
    average_score: int
    difficulty_distribution: Dict[str, int] = field(default_factory=dict)
    category_distribution: Dict[str, int] = field(default_factory=dict)
    overall_suggestions: tuple[str, ...] = ()
    quality_issues: tuple[str, ...] = ()
    strengths: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "totalQuestions": self.total_questions,
            "averageScore": self.average_score,
            "difficultyDistribution": dict(self.difficulty_distribution),
            "categoryDistribution": dict(self.category_distribution),
            "overallSuggestions": list(self.overall_suggestions),
            "qualityIssues": list(self.quality_issues),
            "strengths": list(self.strengths),
        }
