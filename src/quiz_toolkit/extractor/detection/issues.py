"""
Module: extractor.detection.issues

Purpose:
    Line-level formatting issue detection, independent of format
    selection. Every issue carries a best-effort corrected line that is
    reported, never applied automatically; auto_correct() applies them
    on request.

Key Classes:
    - LineCorrection: (line, original, corrected, kind)
    - AutoCorrection: Corrected text plus the corrections applied

Key Functions:
    - detect_issues(): Issue messages and suggested corrections
    - auto_correct(): Apply every rule to every line
    - format_suggestions(): Advice for a detected format

Used By:
    - extractor.detection.detector
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

# Kinds
SPACING = "spacing"
PUNCTUATION = "punctuation"
NUMBERING = "numbering"
QUESTION_MARK = "question-mark"


@dataclass(frozen=True)
class LineCorrection:
    """A suggested fix for one line (1-based line number)."""
    line: int
    original: str
    corrected: str
    kind: str

    def to_dict(self) -> dict:
        return {
            "line": self.line,
            "original": self.original,
            "corrected": self.corrected,
            "type": self.kind,
        }


@dataclass(frozen=True)
class AutoCorrection:
    corrected_text: str
    corrections: tuple[LineCorrection, ...] = ()


@dataclass(frozen=True)
class _IssueRule:
    kind: str
    message: str
    fix: Callable[[str], str]


# ─────────────────────────────────────────────────────────────────────────────
# Rules
# ─────────────────────────────────────────────────────────────────────────────

_OPTION_NO_SPACE_RE = re.compile(r"(?<![A-Za-z])([A-H])\)(?=[A-Za-z0-9])")
_NUMBER_NO_SPACE_RE = re.compile(r"^(\d{1,3}\.)(?=[A-Za-z])")
_Q_NO_PUNCT_RE = re.compile(r"^(Q(?:uestion)?\s?\d{1,3})\s+(?=[A-Za-z])", re.IGNORECASE)
_PUNCT_RUN_RE = re.compile(r"[.:;,!?]{2,}")
_MULTI_SPACE_RE = re.compile(r"(?<=\S) {2,}(?=\S)")

_NUMBER_PREFIX_RE = re.compile(r"^(?:Q(?:uestion)?\s*)?\d{1,3}\s*[.:)]?\s*", re.IGNORECASE)
_INTERROGATIVE_RE = re.compile(r"^(?:what|which|who|whom|whose|when|where|why|how)\b", re.IGNORECASE)
_INLINE_OPTION_RE = re.compile(r"\s+(?:\(?[Aa][.)]|\[[Aa]\])\s")
_OPTION_LINE_RE = re.compile(r"^(?:\(?[A-Ha-h][.:)]|\[[A-Ha-h]\])\s")
_ANSWER_LINE_RE = re.compile(r"^(?:Correct\s+)?Answers?\b", re.IGNORECASE)


def _fix_option_spacing(line: str) -> str:
    return _OPTION_NO_SPACE_RE.sub(r"\1) ", line)


def _fix_number_spacing(line: str) -> str:
    return _NUMBER_NO_SPACE_RE.sub(r"\1 ", line)


def _fix_question_number(line: str) -> str:
    return _Q_NO_PUNCT_RE.sub(r"\1. ", line)


def _collapse_punctuation(match: re.Match) -> str:
    run = match.group(0)
    if set(run) == {"."}:
        return run  # Ellipsis
    return run[0]


def _fix_punctuation(line: str) -> str:
    return _PUNCT_RUN_RE.sub(_collapse_punctuation, line)


def _fix_spaces(line: str) -> str:
    return _MULTI_SPACE_RE.sub(" ", line)


def _fix_question_mark(line: str) -> str:
    if "?" in line or _OPTION_LINE_RE.match(line) or _ANSWER_LINE_RE.match(line):
        return line
    prefix = _NUMBER_PREFIX_RE.match(line)
    stem_start = prefix.end() if prefix else 0
    if not _INTERROGATIVE_RE.match(line[stem_start:]):
        return line
    inline = _INLINE_OPTION_RE.search(line, stem_start)
    if inline:
        head = line[:inline.start()].rstrip(" .:")
        return f"{head}?{line[inline.start():]}"
    return f"{line.rstrip(' .:')}?"


_RULES: tuple[_IssueRule, ...] = (
    _IssueRule(SPACING, "Missing space after option letter", _fix_option_spacing),
    _IssueRule(SPACING, "Missing space after question number", _fix_number_spacing),
    _IssueRule(NUMBERING, "Missing punctuation after question number", _fix_question_number),
    _IssueRule(PUNCTUATION, "Run-together punctuation", _fix_punctuation),
    _IssueRule(SPACING, "Multiple consecutive spaces", _fix_spaces),
    _IssueRule(QUESTION_MARK, "Question should end with question mark", _fix_question_mark),
)


def _split_lines(text: str) -> list[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def detect_issues(text: str) -> tuple[list[str], list[LineCorrection]]:
    """
    Find formatting issues line by line.

    Each rule is checked against the original line so every correction
    fixes exactly one issue.

    Returns:
        (issue messages like "Line 3: Multiple consecutive spaces",
         one LineCorrection per issue)
    """
    issues: list[str] = []
    corrections: list[LineCorrection] = []
    for number, raw in enumerate(_split_lines(text), start=1):
        line = raw.strip()
        if not line:
            continue
        for rule in _RULES:
            fixed = rule.fix(line)
            if fixed != line:
                issues.append(f"Line {number}: {rule.message}")
                corrections.append(LineCorrection(number, line, fixed, rule.kind))
    return issues, corrections


def auto_correct(text: str) -> AutoCorrection:
    """
    Apply every rule to every line, in rule order.

    Leading indentation is preserved. Each applied change is recorded
    with the line as it was before that change.
    """
    corrected_lines: list[str] = []
    corrections: list[LineCorrection] = []
    for number, raw in enumerate(_split_lines(text), start=1):
        body = raw.strip()
        if not body:
            corrected_lines.append(raw)
            continue
        indent = raw[: len(raw) - len(raw.lstrip())]
        changed = False
        for rule in _RULES:
            fixed = rule.fix(body)
            if fixed != body:
                corrections.append(LineCorrection(number, body, fixed, rule.kind))
                body = fixed
                changed = True
        corrected_lines.append(f"{indent}{body}" if changed else raw)
    return AutoCorrection("\n".join(corrected_lines), tuple(corrections))


_FORMAT_SUGGESTIONS: dict[str, tuple[str, ...]] = {
    "mcq": (
        "Detected multiple choice format",
        "Ensure all questions have 4 options (A, B, C, D)",
        "Mark correct answers with ✓ or *",
        "Include an answer key section at the end",
    ),
    "true-false": (
        "Detected true/false format",
        'Use "True" and "False" as options',
        "Mark correct answers with ✓ or *",
    ),
    "short-answer": (
        "Detected short answer format",
        "Provide clear, concise questions",
    ),
    "mixed": (
        "Detected a mix of multiple choice and true/false questions",
        "Keep option labels consistent across question types",
        "Mark correct answers with ✓ or *",
    ),
    "unknown": (
        "Format not clearly detected",
        "Use consistent formatting (Q1., A), B), etc.)",
        "Include correct answer indicators (✓ or *)",
    ),
}


def format_suggestions(fmt: str, corrections: Optional[list[LineCorrection]] = None) -> list[str]:
    """Suggestions for a detected format, led by an issue summary when present."""
    suggestions: list[str] = []
    if corrections:
        suggestions.append(f"Found {len(corrections)} formatting issues that can be auto-corrected")
        if any(c.kind == QUESTION_MARK for c in corrections):
            suggestions.append("Add question mark at the end of questions")
    suggestions.extend(_FORMAT_SUGGESTIONS.get(fmt, _FORMAT_SUGGESTIONS["unknown"]))
    return suggestions
