"""
Duplicate and near-duplicate matching between questions.

A duplicate has identical text after normalize_for_comparison(); a
similar question shares more than the threshold fraction of its word set
(Jaccard, strictly greater).
"""

from __future__ import annotations

from typing import Optional, Sequence

from quiz_toolkit.common.text import jaccard, normalize_for_comparison
from quiz_toolkit.core.models import ExtractedQuestion


def is_duplicate(a: ExtractedQuestion, b: ExtractedQuestion) -> bool:
    return normalize_for_comparison(a.text) == normalize_for_comparison(b.text)


def is_similar(a: ExtractedQuestion, b: ExtractedQuestion, threshold: float) -> bool:
    return jaccard(a.text, b.text) > threshold


def find_duplicate(question: ExtractedQuestion, pool: Sequence[ExtractedQuestion]) -> Optional[int]:
    """Index of the first question in pool with the same normalized text."""
    key = normalize_for_comparison(question.text)
    for index, candidate in enumerate(pool):
        if normalize_for_comparison(candidate.text) == key:
            return index
    return None


def find_similar(
    question: ExtractedQuestion,
    pool: Sequence[ExtractedQuestion],
    threshold: float,
) -> Optional[int]:
    """Index of the first question in pool whose similarity exceeds threshold."""
    for index, candidate in enumerate(pool):
        if is_similar(question, candidate, threshold):
            return index
    return None


def merge_questions(existing: ExtractedQuestion, new: ExtractedQuestion) -> ExtractedQuestion:
    """
    Combine two similar questions, keeping the existing id and type.

    Text is the longer of the two (the new text on equal length), options
    are the ordered union, and the correct answer is the first non-empty.
    """
    text = existing.text if len(existing.text) > len(new.text) else new.text

    if existing.options and new.options:
        options: Optional[tuple[str, ...]] = tuple(dict.fromkeys(existing.options + new.options))
    else:
        options = existing.options or new.options

    return existing.with_changes(
        text=text,
        options=options,
        correct_answer=existing.correct_answer or new.correct_answer,
    )
