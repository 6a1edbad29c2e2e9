"""
Module: extractor.extraction.answers

Purpose:
    Correct-answer markers. Finds the trailing answer-key section, the
    inline "Answer:" segment of a block and "X is correct" sentences, and
    resolves a raw answer value against a list of options.

Key Classes:
    - AnswerKey: Question number -> raw answer value

Key Functions:
    - split_answer_key(): Separate a trailing ANSWERS section from the body
    - take_answer_line(): Remove and return an inline "Answer: ..." value
    - take_correct_sentence(): Remove and return an "X is correct" letter
    - resolve_answer(): Map a raw value onto an option index

Used By:
    - extractor.extraction.extractor
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

_KEY_HEADER_RE = re.compile(r"^\s*(?:ANSWERS?|ANSWER\s+KEY)\s*:?\s*$", re.IGNORECASE | re.MULTILINE)
_KEY_TOKEN_RE = re.compile(
    r"(?:Q(?:uestion)?\s*)?(\d{1,3})\s*[.:)\-]\s*([A-Ha-h]|True|False)(?![\w'])",
    re.IGNORECASE,
)
_KEY_LINE_RE = re.compile(r"^(?:Q(?:uestion)?\s*)?(\d{1,3})\s*[.:)\-]\s*(.+?)\s*$", re.IGNORECASE)

_ANSWER_RE = re.compile(r"(?:^|(?<=\s))(?:Correct\s+)?Answer\s*[:\-]\s*([^\n]*)", re.IGNORECASE)
_CORRECT_SENTENCE_RES = (
    re.compile(r"(?:^|(?<=\s))(?:The\s+)?correct\s+(?:answer|option)\s+is\s*:?\s*\(?([A-H])\)?(?![\w'])[.!]?", re.IGNORECASE),
    re.compile(r"(?:^|(?<=\s))(?:Option\s+)?\(?([A-H])\)?\s+is\s+(?:the\s+)?correct(?:\s+answer)?[.!]?"),
)

_LETTER_RE = re.compile(r"^\(?([A-Ha-h])\)?[.)]?$")
_LETTER_PREFIX_RE = re.compile(r"^\(?([A-Ha-h])[.):]\s+(.+)$")
_NUMBER_RE = re.compile(r"^(\d{1,2})$")


@dataclass(frozen=True)
class AnswerKey:
    """Answers from a trailing ANSWERS section, keyed by 1-based question number."""
    entries: dict[int, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def get(self, number: int) -> Optional[str]:
        return self.entries.get(number)


def _parse_key_section(section: str) -> dict[int, str]:
    entries: dict[int, str] = {}
    for line in section.split("\n"):
        line = line.strip()
        if not line:
            continue
        tokens = list(_KEY_TOKEN_RE.finditer(line))
        if tokens:
            for token in tokens:
                entries.setdefault(int(token.group(1)), token.group(2))
            continue
        match = _KEY_LINE_RE.match(line)
        if match:
            entries.setdefault(int(match.group(1)), match.group(2))
    return entries


def split_answer_key(text: str) -> tuple[str, AnswerKey]:
    """
    Cut a trailing answer-key section off the document.

    The last "ANSWERS:" / "ANSWER KEY:" header line starts the section;
    it only counts when at least one "Q1: B" / "1. B" entry follows.

    Returns:
        (body without the section, AnswerKey). The text is returned
        unchanged with an empty key when no section is found.

    Example:
        >>> body, key = split_answer_key("1. Q?\\nA) x\\nB) y\\nANSWERS:\\n1. B")
        >>> key.get(1)
        'B'
    """
    headers = list(_KEY_HEADER_RE.finditer(text))
    if not headers:
        return text, AnswerKey()
    header = headers[-1]
    entries = _parse_key_section(text[header.end():])
    if not entries:
        return text, AnswerKey()
    return text[:header.start()].rstrip(), AnswerKey(entries)


def take_answer_line(block: str) -> tuple[str, Optional[str]]:
    """
    Remove an inline "Answer: X" segment (to end of line) from a block.

    Returns:
        (block without the segment, raw value or None)
    """
    match = _ANSWER_RE.search(block)
    if not match:
        return block, None
    value = match.group(1).strip()
    remainder = f"{block[:match.start()]}{block[match.end():]}".strip()
    return remainder, value or None


def take_correct_sentence(block: str) -> tuple[str, Optional[str]]:
    """Remove an "X is correct" / "The correct answer is X" sentence; return the letter."""
    for pattern in _CORRECT_SENTENCE_RES:
        match = pattern.search(block)
        if match:
            remainder = f"{block[:match.start()]}{block[match.end():]}".strip()
            return remainder, match.group(1).upper()
    return block, None


def _letter_index(letter: str) -> int:
    return ord(letter.upper()) - ord("A")


def resolve_answer(value: str, options: Sequence[str]) -> Optional[int]:
    """
    Map a raw answer value onto an option index.

    Accepts a letter ("B", "(b)", "B."), a letter with text ("B) Paris"),
    a 1-based number when options are present, or option text compared
    case-insensitively. The index may be out of range; callers clamp it.

    Returns:
        Option index, or None when the value names no option
    """
    cleaned = value.strip().rstrip(".").strip()
    if not cleaned or not options:
        return None

    lowered = [o.strip().lower() for o in options]
    if cleaned.lower() in lowered:
        return lowered.index(cleaned.lower())

    letter = _LETTER_RE.match(cleaned)
    if letter:
        return _letter_index(letter.group(1))

    prefixed = _LETTER_PREFIX_RE.match(cleaned)
    if prefixed:
        return _letter_index(prefixed.group(1))

    number = _NUMBER_RE.match(cleaned)
    if number:
        return int(number.group(1)) - 1

    return None
