"""
Module: extractor.extraction.blocks

Purpose:
    Question segmentation. Boundary patterns are tried in priority order
    (numbered, Q-prefixed, "Question N", parenthetical, bracketed,
    lettered, roman, bulleted, then answer-delimited) and the first one
    that yields a block longer than the minimum size wins.

Key Classes:
    - QuestionBlock: One block of text plus its 1-based position
    - Segmentation: Blocks and the name of the pattern that produced them

Key Functions:
    - segment(): Split text into question blocks

Used By:
    - extractor.extraction.extractor
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern

logger = logging.getLogger(__name__)

_OPTION_HINT_RE = re.compile(r"(?:^|\s)(?:[A-D][.)]|\([a-dA-D]\)|\[[a-dA-D]\])\s")
_ANSWER_LINE_RE = re.compile(r"(?:^|\s)(?:Correct\s+)?Answer\s*[:\-]", re.IGNORECASE)

_ROMAN_VALUES = {"I": 1, "V": 5, "X": 10}


@dataclass(frozen=True)
class QuestionBlock:
    number: int
    text: str


@dataclass(frozen=True)
class Segmentation:
    pattern: str
    blocks: tuple[QuestionBlock, ...]


@dataclass(frozen=True)
class _Boundary:
    """
    A question-boundary pattern.

    `line` matches a marker at the start of a line. `inline`, when set,
    matches a marker mid-line; inline markers only count when they
    continue the numbering (previous number + 1).
    """
    name: str
    line: Pattern[str]
    inline: Optional[Pattern[str]] = None
    number: Callable[[str], int] = int
    skip_for_choice: bool = False


def _roman(value: str) -> int:
    total = 0
    previous = 0
    for char in reversed(value.upper()):
        current = _ROMAN_VALUES[char]
        total = total - current if current < previous else total + current
        previous = max(previous, current)
    return total


def _letter(value: str) -> int:
    return ord(value.upper()) - ord("A") + 1


_M = re.MULTILINE

BOUNDARIES: tuple[_Boundary, ...] = (
    _Boundary(
        "numbered",
        re.compile(r"^[ \t]*(\d{1,3})[.:][ \t]*(?=[^\d\s])", _M),
        re.compile(r"(?<=\s)(\d{1,3})[.:][ \t]+(?=[A-Z])"),
    ),
    _Boundary(
        "q-prefixed",
        re.compile(r"^[ \t]*Q(\d{1,3})[ \t]*[.:)\-]?[ \t]*(?=\S)", _M),
        re.compile(r"(?<=\s)Q(\d{1,3})[.:)][ \t]+(?=\S)"),
    ),
    _Boundary(
        "question-number",
        re.compile(r"^[ \t]*Question[ \t]+(\d{1,3})[ \t]*[.:)\-]?[ \t]*(?=\S)", _M | re.IGNORECASE),
    ),
    _Boundary("parenthetical", re.compile(r"^[ \t]*\(?(\d{1,3})\)[ \t]*(?=\S)", _M)),
    _Boundary("bracketed", re.compile(r"^[ \t]*\[(\d{1,3})\][ \t]*(?=\S)", _M)),
    _Boundary(
        "lettered",
        re.compile(r"^[ \t]*([A-Z])[.)][ \t]+(?=\S)", _M),
        number=_letter,
        skip_for_choice=True,
    ),
    _Boundary("roman", re.compile(r"^[ \t]*([IVX]{1,5})[.)][ \t]+(?=\S)", _M), number=_roman),
    _Boundary("bulleted", re.compile(r"^[ \t]*[-•*▪][ \t]+(?=\S)", _M), number=lambda _: 0),
)


def _boundary_spans(boundary: _Boundary, text: str) -> list[tuple[int, int]]:
    """(marker start, marker end) pairs in text order."""
    found: list[tuple[int, int, int, bool]] = []
    for match in boundary.line.finditer(text):
        value = boundary.number(match.group(1)) if match.groups() else 0
        found.append((match.start(), match.end(), value, True))
    if boundary.inline is not None:
        for match in boundary.inline.finditer(text):
            found.append((match.start(), match.end(), boundary.number(match.group(1)), False))
    found.sort()

    spans: list[tuple[int, int]] = []
    previous: Optional[int] = None
    last_end = -1
    for start, end, value, at_line_start in found:
        if start < last_end:
            continue
        if not at_line_start and (previous is None or value != previous + 1):
            continue
        spans.append((start, end))
        previous = value
        last_end = end
    return spans


def _looks_like_question(text: str) -> bool:
    return "?" in text or bool(_OPTION_HINT_RE.search(text))


def _split_on(spans: list[tuple[int, int]], text: str) -> list[str]:
    chunks: list[str] = []
    preamble = text[:spans[0][0]].strip()
    if preamble and _looks_like_question(preamble):
        chunks.append(preamble)
    for i, (_, end) in enumerate(spans):
        stop = spans[i + 1][0] if i + 1 < len(spans) else len(text)
        chunk = text[end:stop].strip()
        if chunk:
            chunks.append(chunk)
    return chunks


def _answer_delimited(text: str) -> list[str]:
    """Blocks that each end at a line containing an "Answer:" marker."""
    chunks: list[str] = []
    current: list[str] = []
    for line in text.split("\n"):
        current.append(line)
        if _ANSWER_LINE_RE.search(line):
            chunk = "\n".join(current).strip()
            if chunk:
                chunks.append(chunk)
            current = []
    tail = "\n".join(current).strip()
    if chunks and tail and _looks_like_question(tail):
        chunks.append(tail)
    return chunks


def _qualifies(chunks: list[str], min_chars: int) -> bool:
    return any(len(c) > min_chars for c in chunks)


def segment(text: str, *, choice_hint: bool = False, min_chars: int = 20) -> Optional[Segmentation]:
    """
    Split text into question blocks with the first qualifying pattern.

    Args:
        text: Normalized document body (answer key already removed)
        choice_hint: The document was detected as multiple choice, so
            lettered lines are options rather than question markers
        min_chars: A pattern qualifies when some block is longer than this

    Returns:
        Segmentation, or None when no pattern qualifies
    """
    for boundary in BOUNDARIES:
        if boundary.skip_for_choice and choice_hint:
            continue
        spans = _boundary_spans(boundary, text)
        if not spans:
            continue
        chunks = _split_on(spans, text)
        if _qualifies(chunks, min_chars):
            logger.debug(f"Segmented {len(chunks)} blocks with '{boundary.name}' pattern")
            return Segmentation(
                pattern=boundary.name,
                blocks=tuple(QuestionBlock(i, c) for i, c in enumerate(chunks, start=1)),
            )

    chunks = _answer_delimited(text)
    if _qualifies(chunks, min_chars):
        logger.debug(f"Segmented {len(chunks)} answer-delimited blocks")
        return Segmentation(
            pattern="answer-delimited",
            blocks=tuple(QuestionBlock(i, c) for i, c in enumerate(chunks, start=1)),
        )
    return None
