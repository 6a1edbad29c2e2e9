"""
Module: extractor.detection.patterns

Purpose:
    Declarative registry of line-level patterns used by format detection.
    Each entry is a (name, regex, role) triple; the registry is an
    immutable tuple so detection stays safe to run concurrently.

Key Classes:
    - PatternSpec: Named compiled pattern with a role
    - TextStatistics: Line counts per role

Key Functions:
    - patterns_for(role): Registry entries for a role, in priority order
    - line_roles(line): Roles a single line plays
    - count_line_roles(text): TextStatistics for a document

Used By:
    - extractor.detection.strategies
    - extractor.detection.detector
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Pattern

# Roles
QUESTION = "question"
OPTION = "option"
ANSWER = "answer"
TRUE_FALSE = "true-false"


@dataclass(frozen=True)
class PatternSpec:
    """A named line pattern with the role it signals."""
    name: str
    regex: Pattern[str]
    role: str

    def matches(self, line: str) -> bool:
        return bool(self.regex.match(line))


def _spec(name: str, pattern: str, role: str, flags: int = 0) -> PatternSpec:
    return PatternSpec(name=name, regex=re.compile(pattern, flags), role=role)


# Priority order within a role matters: the first match names the pattern.
PATTERN_REGISTRY: tuple[PatternSpec, ...] = (
    # Question numbering
    _spec("q-prefixed", r"^Q(?:uestion)?\s*\d{1,3}\s*[.:)]?\s*\S", QUESTION, re.IGNORECASE),
    _spec("numbered", r"^\d{1,3}[.:]\s*\S", QUESTION),
    _spec("parenthetical", r"^\(\d{1,3}\)\s*\S", QUESTION),
    _spec("bracketed", r"^\[\d{1,3}\]\s*\S", QUESTION),
    _spec("roman", r"^[IVX]{1,5}\.\s+\S", QUESTION),
    # Option marking
    _spec("lettered", r"^(?:[A-H][.:)]|[a-h]\))\s*\S", OPTION),
    _spec("lettered-parentheses", r"^\([A-Ha-h]\)\s*\S", OPTION),
    _spec("lettered-brackets", r"^\[[A-Ha-h]\]\s*\S", OPTION),
    _spec("numbered-options", r"^\d{1,2}\)\s*\S", OPTION),
    # Answers
    _spec("answer-line", r"^(?:Correct\s+)?Answer\s*[:\-]\s*\S", ANSWER, re.IGNORECASE),
    _spec("answer-key", r"^(?:ANSWERS?|ANSWER\s+KEY)\s*:?\s*$", ANSWER, re.IGNORECASE),
    # Bare True/False option lines
    _spec("true-false", r"^(?:True|False)\s*[✓*]?\s*$", TRUE_FALSE, re.IGNORECASE),
)


def patterns_for(role: str, registry: Iterable[PatternSpec] = PATTERN_REGISTRY) -> tuple[PatternSpec, ...]:
    """Registry entries for a role, in priority order."""
    return tuple(spec for spec in registry if spec.role == role)


def first_match(line: str, role: str, registry: Iterable[PatternSpec] = PATTERN_REGISTRY) -> Optional[PatternSpec]:
    """First pattern of the given role matching the line, or None."""
    for spec in patterns_for(role, registry):
        if spec.matches(line):
            return spec
    return None


def line_roles(line: str, registry: Iterable[PatternSpec] = PATTERN_REGISTRY) -> frozenset[str]:
    """Roles a line plays. Each role counts at most once per line."""
    stripped = line.strip()
    if not stripped:
        return frozenset()
    return frozenset(spec.role for spec in registry if spec.matches(stripped))


@dataclass(frozen=True)
class TextStatistics:
    """Line counts per role for one document."""
    total_lines: int = 0
    question_lines: int = 0
    option_lines: int = 0
    answer_lines: int = 0
    true_false_lines: int = 0
    empty_lines: int = 0

    @property
    def content_lines(self) -> int:
        return self.total_lines - self.empty_lines

    def to_dict(self) -> dict:
        return {
            "totalLines": self.total_lines,
            "questionLines": self.question_lines,
            "optionLines": self.option_lines,
            "answerLines": self.answer_lines,
            "trueFalseLines": self.true_false_lines,
            "emptyLines": self.empty_lines,
        }


def count_line_roles(text: str, registry: Iterable[PatternSpec] = PATTERN_REGISTRY) -> TextStatistics:
    """
    Count lines per role.

    Example:
        >>> stats = count_line_roles("1. What?\\nA) Yes\\nB) No")
        >>> (stats.question_lines, stats.option_lines)
        (1, 2)
    """
    registry = tuple(registry)
    counts = {QUESTION: 0, OPTION: 0, ANSWER: 0, TRUE_FALSE: 0}
    total = 0
    empty = 0
    for line in text.split("\n") if text else []:
        total += 1
        roles = line_roles(line, registry)
        if not line.strip():
            empty += 1
            continue
        for role in roles:
            counts[role] += 1
    return TextStatistics(
        total_lines=total,
        question_lines=counts[QUESTION],
        option_lines=counts[OPTION],
        answer_lines=counts[ANSWER],
        true_false_lines=counts[TRUE_FALSE],
        empty_lines=empty,
    )


def dominant_pattern(text: str, role: str, registry: Iterable[PatternSpec] = PATTERN_REGISTRY) -> str:
    """Name of the most frequent pattern for a role ("" when none match)."""
    tally: dict[str, int] = {}
    specs = patterns_for(role, registry)
    for line in text.split("\n"):
        stripped = line.strip()
        for spec in specs:
            if spec.matches(stripped):
                tally[spec.name] = tally.get(spec.name, 0) + 1
                break
    if not tally:
        return ""
    # max() keeps the first of equal counts, so registry order breaks ties
    order = {spec.name: i for i, spec in enumerate(specs)}
    return max(sorted(tally, key=order.__getitem__), key=tally.__getitem__)
