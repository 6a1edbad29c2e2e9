"""Keyword lists used by the quality analyzer. Matched as whole words on lowercased text."""

from __future__ import annotations

import re
from typing import Iterable, Pattern

DIFFICULTY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "easy": (
        "what", "when", "where", "who", "which", "name", "identify", "list",
        "basic", "simple", "common", "obvious", "well-known",
    ),
    "medium": (
        "explain", "describe", "compare", "contrast", "analyze", "discuss",
        "how", "why", "because", "reason", "cause", "effect",
    ),
    "hard": (
        "evaluate", "critique", "assess", "justify", "argue", "prove",
        "complex", "advanced", "sophisticated", "theoretical", "abstract",
    ),
}

# Tie-break order for difficulty votes
DIFFICULTY_PRIORITY: tuple[str, ...] = ("hard", "medium", "easy")

CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "factual": ("what", "when", "where", "who", "which", "name"),
    "conceptual": ("explain", "describe", "define", "identify"),
    "analytical": ("analyze", "compare", "contrast", "examine"),
    "evaluative": ("evaluate", "assess", "critique", "judge"),
    "application": ("apply", "use", "demonstrate", "show"),
    "synthesis": ("create", "design", "develop", "construct"),
}
DEFAULT_CATEGORY = "factual"

VAGUE_WORDS: tuple[str, ...] = ("thing", "stuff", "something", "anything", "everything", "nothing")
CONNECTIVE_WORDS: tuple[str, ...] = ("because", "since", "although", "however", "therefore")
NEGATIVE_WORDS: tuple[str, ...] = ("not", "except", "least")
CATCH_ALL_WORDS: tuple[str, ...] = ("none", "all", "both", "neither")
ALL_NONE_PHRASES: tuple[str, ...] = ("all of the above", "none of the above")


def word_pattern(words: Iterable[str]) -> Pattern[str]:
    """One regex matching any of the words as a whole word."""
    alternatives = "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))
    return re.compile(rf"(?<![\w-])(?:{alternatives})(?![\w-])")


def distinct_hits(text: str, words: Iterable[str]) -> int:
    """Number of distinct words from the list present in text."""
    return len(set(word_pattern(words).findall(text)))


def occurrences(text: str, words: Iterable[str]) -> int:
    """Total occurrences of any word from the list in text."""
    return len(word_pattern(words).findall(text))
