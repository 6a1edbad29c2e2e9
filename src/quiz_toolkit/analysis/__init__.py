"""
Module: analysis

Purpose:
    Quality Analyzer package. Scores extracted questions and aggregates
    quiz-level statistics. Annotates only; never blocks extraction.

Key Modules:
    - quality: analyze_question(), analyze_quiz(), improvement_suggestions()
    - lexicons: Difficulty, category and wording keyword lists
"""

from .quality import (
    analyze_question,
    analyze_quiz,
    classify_category,
    classify_difficulty,
    clarity_score,
    improvement_suggestions,
    option_balance_score,
    readability_score,
)

__all__ = [
    "analyze_question",
    "analyze_quiz",
    "classify_category",
    "classify_difficulty",
    "clarity_score",
    "improvement_suggestions",
    "option_balance_score",
    "readability_score",
]
