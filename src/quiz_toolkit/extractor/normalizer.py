"""
Module: extractor.normalizer

Purpose:
    Strip layout artifacts from raw extracted text before detection.
    Line endings are unified, tabs and non-breaking spaces become spaces,
    repeated spaces collapse, lines are trimmed and blank runs shrink to
    a single blank line (blank lines still separate paragraphs).

Key Functions:
    - normalize_text(): Raw text to normalized text

Used By:
    - extractor.pipeline
    - extractor.detection.detector
"""

from __future__ import annotations

import re

_LINE_BREAK_RE = re.compile(r"\r\n?|\f|\v|\u2028|\u2029")
_SPACE_LIKE_RE = re.compile(r"[\t\u00a0\u2000-\u200a\u202f\u3000]")
_ZERO_WIDTH_RE = re.compile(r"[\u200b\u200c\u200d\ufeff]")
_MULTI_SPACE_RE = re.compile(r" {2,}")


def normalize_text(raw: str) -> str:
    """
    Normalize raw document text.

    Idempotent: normalize_text(normalize_text(x)) == normalize_text(x).

    Example:
        >>> normalize_text("1.\\tWhat?\\r\\n\\r\\n\\r\\nA)  Yes ")
        '1. What?\\n\\nA) Yes'
    """
    if not raw:
        return ""

    text = _LINE_BREAK_RE.sub("\n", raw)
    text = _ZERO_WIDTH_RE.sub("", text)
    text = _SPACE_LIKE_RE.sub(" ", text)

    lines: list[str] = []
    previous_blank = True  # Drops leading blank lines
    for line in text.split("\n"):
        line = _MULTI_SPACE_RE.sub(" ", line).strip()
        if not line:
            if not previous_blank:
                lines.append("")
            previous_blank = True
            continue
        lines.append(line)
        previous_blank = False

    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)
