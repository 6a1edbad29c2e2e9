"""
Module: extractor.extraction.options

Purpose:
    Splits a question block into its stem and options. Option markers are
    tried in order (lettered, numbered, bracketed, parenthetical) and a
    style is accepted once it yields a label sequence of at least two
    options (A, B, C... or 1, 2, 3...). Markers may sit on their own
    lines or inline after the stem. Lines reading just True / False are
    the last resort.

Key Classes:
    - ParsedOptions: Stem, option texts, marked option and style name

Key Functions:
    - parse_options(): Split one block
    - pad_options(): Placeholder options up to the expected count

Used By:
    - extractor.extraction.extractor
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern

_WS_RE = re.compile(r"\s+")
_PARAGRAPH_RE = re.compile(r"\n\s*\n")

# Checkmark / asterisk next to an option marks it correct
_MARK_SUFFIX_RE = re.compile(r"\s*(?:[✓✔]|\*|\((?:correct)\)|\[(?:correct)\])\s*$", re.IGNORECASE)
_MARK_PREFIX_RE = re.compile(r"^\s*[*✓✔]\s*")

_TRUE_FALSE_LINE_RE = re.compile(r"^\s*[*✓✔]?\s*(True|False)\s*([✓✔*])?\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class _OptionStyle:
    name: str
    regex: Pattern[str]
    numeric: bool = False


# Group 1 is the label, group 2 the delimiter
OPTION_STYLES: tuple[_OptionStyle, ...] = (
    _OptionStyle("lettered", re.compile(r"(?:^|(?<=\s))\*?([A-H])([.):])\s+|(?:^|(?<=\s))\*?([a-h])(\))\s*")),
    _OptionStyle("numbered", re.compile(r"(?:^|(?<=\s))\*?(\d{1,2})(\))\s*"), numeric=True),
    _OptionStyle("bracketed", re.compile(r"(?:^|(?<=\s))\*?\[([A-Ha-h])(\])\s*")),
    _OptionStyle("parenthetical", re.compile(r"(?:^|(?<=\s))\*?\(([A-Ha-h])(\))\s*")),
)


@dataclass(frozen=True)
class ParsedOptions:
    """
    A block split into stem and options.

    Attributes:
        stem: Question text with markers removed, whitespace collapsed
        options: Option texts in label order (empty when none found)
        marked_index: Option carrying a checkmark / asterisk, if any
        style: Name of the option style that matched ("" when none)
    """
    stem: str
    options: tuple[str, ...] = ()
    marked_index: Optional[int] = None
    style: str = ""


@dataclass(frozen=True)
class _Marker:
    label: int
    delimiter: str
    lower: bool
    start: int
    end: int
    starred: bool


def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def _markers(style: _OptionStyle, block: str) -> list[_Marker]:
    markers = []
    for match in style.regex.finditer(block):
        groups = [g for g in match.groups() if g is not None]
        label, delimiter = groups[0], groups[1]
        if style.numeric:
            index = int(label) - 1
        else:
            index = ord(label.upper()) - ord("A")
        markers.append(_Marker(
            label=index,
            delimiter=delimiter,
            lower=label.islower(),
            start=match.start(),
            end=match.end(),
            starred=match.group(0).lstrip().startswith("*"),
        ))
    return markers


def _longest_chain(markers: list[_Marker]) -> list[_Marker]:
    """Longest A, B, C... run sharing one delimiter and case; earliest wins ties."""
    best: list[_Marker] = []
    for i, first in enumerate(markers):
        if first.label != 0:
            continue
        chain = [first]
        for marker in markers[i + 1:]:
            if (
                marker.label == len(chain)
                and marker.delimiter == first.delimiter
                and marker.lower == first.lower
            ):
                chain.append(marker)
        if len(chain) > len(best):
            best = chain
    return best


def _strip_mark(text: str) -> tuple[str, bool]:
    stripped = _MARK_SUFFIX_RE.sub("", text)
    stripped = _MARK_PREFIX_RE.sub("", stripped)
    return stripped, stripped != text


def _from_chain(block: str, chain: list[_Marker], style: str) -> ParsedOptions:
    options: list[str] = []
    marked: Optional[int] = None
    for i, marker in enumerate(chain):
        if i + 1 < len(chain):
            segment = block[marker.end:chain[i + 1].start]
        else:
            # Last option runs to the end of its paragraph
            segment = _PARAGRAPH_RE.split(block[marker.end:], maxsplit=1)[0]
        text, is_marked = _strip_mark(_collapse(segment))
        if (is_marked or marker.starred) and marked is None:
            marked = i
        options.append(text.strip())
    stem = _collapse(block[:chain[0].start])
    return ParsedOptions(stem=stem, options=tuple(options), marked_index=marked, style=style)


def _true_false_lines(block: str) -> Optional[ParsedOptions]:
    stem_lines: list[str] = []
    options: list[str] = []
    marked: Optional[int] = None
    for line in block.split("\n"):
        match = _TRUE_FALSE_LINE_RE.match(line)
        if match:
            if match.group(2) or line.lstrip()[:1] in ("*", "✓", "✔"):
                marked = len(options) if marked is None else marked
            options.append(match.group(1).capitalize())
        elif not options:
            stem_lines.append(line)
    if len(options) < 2:
        return None
    return ParsedOptions(
        stem=_collapse(" ".join(stem_lines)),
        options=tuple(options),
        marked_index=marked,
        style="true-false",
    )


def parse_options(block: str) -> ParsedOptions:
    """
    Split a block into stem and options.

    Args:
        block: Question block with the numbering prefix already removed

    Returns:
        ParsedOptions. When no style yields two options the whole block is
        the stem and options is empty.

    Example:
        >>> parsed = parse_options("What is 2+2? A) 3 B) 4 C) 5 D) 6")
        >>> parsed.stem, parsed.options
        ('What is 2+2?', ('3', '4', '5', '6'))
    """
    for style in OPTION_STYLES:
        chain = _longest_chain(_markers(style, block))
        if len(chain) >= 2:
            return _from_chain(block, chain, style.name)

    true_false = _true_false_lines(block)
    if true_false is not None:
        return true_false

    return ParsedOptions(stem=_collapse(block))


def pad_options(options: tuple[str, ...], expected: int) -> tuple[str, ...]:
    """
    Append placeholder options ("Option C", "Option D", ...) up to `expected`.

    Placeholders are labeled by position and never equal an extracted
    option; a clash gets a numeric suffix ("Option C 2"). Longer lists
    are returned unchanged.
    """
    padded = list(options)
    taken = {o.lower() for o in padded}
    while len(padded) < expected:
        label = f"Option {chr(ord('A') + len(padded))}"
        candidate = label
        suffix = 2
        while candidate.lower() in taken:
            candidate = f"{label} {suffix}"
            suffix += 1
        padded.append(candidate)
        taken.add(candidate.lower())
    return tuple(padded)
