"""Text comparison helpers shared by merge and search."""

from __future__ import annotations

import re

_WS_RE = re.compile(r"\s+")
_PUNCT_RE = re.compile(r"[^\w\s]")


def normalize_for_comparison(text: str) -> str:
    """
    Canonical form for exact-duplicate detection.

    Lowercases, collapses whitespace, strips punctuation, trims.

    Example:
        >>> normalize_for_comparison("  What IS  2+2? ")
        'what is 22'
    """
    collapsed = _WS_RE.sub(" ", text.lower())
    return _PUNCT_RE.sub("", collapsed).strip()


def word_set(text: str) -> frozenset[str]:
    """Lowercase whitespace-separated tokens."""
    return frozenset(text.lower().split())


def jaccard(a: str, b: str) -> float:
    """
    Intersection-over-union of the lowercase word sets of two texts.

    Two empty texts are identical (1.0).
    """
    words_a = word_set(a)
    words_b = word_set(b)
    union = words_a | words_b
    if not union:
        return 1.0
    return len(words_a & words_b) / len(union)


def title_case(text: str) -> str:
    """Uppercase the first letter of every word, leaving the rest unchanged."""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), text)
