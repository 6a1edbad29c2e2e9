"""Title, description and subject for a merged quiz."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence

from quiz_toolkit.core.models import DEFAULT_SUBJECT, ExtractedQuestion, MergeStrategy

SUBJECT_KEYWORDS: tuple[str, ...] = (
    "leadership", "management", "finance", "marketing", "operations",
    "strategy", "innovation", "quality", "efficiency", "technology",
    "business", "economics", "accounting", "human resources", "hr",
    "sales", "customer", "product", "service", "development",
)


def _stem(name: str) -> str:
    return Path(name).stem if Path(name).suffix else name


def merged_title(strategy: MergeStrategy, file_names: Sequence[str]) -> str:
    """
    Strategy-specific title.

    For replace, file_names[-1] names the file whose questions were kept.
    """
    count = len(file_names)
    if strategy is MergeStrategy.REPLACE and file_names:
        return f"Quiz from {_stem(file_names[-1])}"
    if strategy is MergeStrategy.MERGE_BY_TOPIC:
        return f"Topic-Based Quiz ({count} sources)"
    if strategy is MergeStrategy.SMART_MERGE:
        return f"Smart Merged Quiz ({count} files)"
    return f"Merged Quiz ({count} files)"


def merged_description(strategy: MergeStrategy, file_count: int, question_count: int) -> str:
    return (
        f"Quiz created from {file_count} files using {strategy.value} strategy. "
        f"Contains {question_count} unique questions."
    )


def detect_subject(questions: Sequence[ExtractedQuestion], limit: int = 5) -> str:
    """
    Subject from topic keywords found in question texts and options.

    Up to `limit` keywords, in keyword-list order, capitalized and joined
    with ", "; "General Knowledge" when none is found.
    """
    corpus = " ".join(
        " ".join((q.text, *(q.options or ()))) for q in questions
    ).lower()
    found = [
        keyword for keyword in SUBJECT_KEYWORDS
        if re.search(rf"\b{re.escape(keyword)}\b", corpus)
    ]
    if not found:
        return DEFAULT_SUBJECT
    return ", ".join(k[:1].upper() + k[1:] for k in found[:limit])
