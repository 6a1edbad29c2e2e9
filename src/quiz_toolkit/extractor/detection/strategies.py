"""
Module: extractor.detection.strategies

Purpose:
    The four independent format-detection strategies and the single
    reduction that picks a winner. Each strategy returns a
    StrategyVerdict tagged with its name; select_best() applies the
    confidence-then-order tie-break in one place.

Key Classes:
    - DocumentFormat: mcq / true-false / short-answer / mixed / unknown
    - FormatPatterns: Names of the dominant question/option/answer patterns
    - StrategyVerdict: One strategy's (format, confidence, patterns)
    - DetectionInput: Everything a strategy may look at

Key Functions:
    - pattern_frequency(), template_matching(), statistical_ratio(),
      content_keyword(): The strategies
    - run_strategies(): All four, in tie-break order
    - select_best(): Highest confidence, ties to the earlier strategy

Dependencies:
    - .patterns: Line role counts
    - .templates: Template registry

Used By:
    - extractor.detection.detector
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from quiz_toolkit.common.thresholds import DETECTION_THRESHOLDS, DetectionThresholds

from . import patterns as P
from .patterns import TextStatistics, dominant_pattern
from .templates import DEFAULT_TEMPLATES, FormatTemplate, compile_template

logger = logging.getLogger(__name__)


class DocumentFormat(str, Enum):
    """Detected document layout."""
    MCQ = "mcq"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"
    MIXED = "mixed"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


PATTERN_FREQUENCY = "pattern-frequency"
TEMPLATE = "template"
STATISTICAL = "statistical"
CONTENT_KEYWORD = "content-keyword"

# Tie-break order: earlier wins on equal confidence
STRATEGY_ORDER: tuple[str, ...] = (PATTERN_FREQUENCY, TEMPLATE, STATISTICAL, CONTENT_KEYWORD)


@dataclass(frozen=True)
class FormatPatterns:
    question_pattern: str = ""
    option_pattern: str = ""
    answer_pattern: str = ""

    def to_dict(self) -> dict:
        return {
            "questionPattern": self.question_pattern,
            "optionPattern": self.option_pattern,
            "answerPattern": self.answer_pattern,
        }


@dataclass(frozen=True)
class StrategyVerdict:
    """
    One strategy's opinion.

    Attributes:
        strategy: Strategy tag (one of STRATEGY_ORDER)
        format: Proposed DocumentFormat
        confidence: Capped to [0, max_confidence]
        patterns: Dominant patterns backing the verdict
        issues: Non-fatal problems met while evaluating (bad templates)
    """
    strategy: str
    format: DocumentFormat
    confidence: float
    patterns: FormatPatterns = field(default_factory=FormatPatterns)
    issues: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy,
            "format": self.format.value,
            "confidence": self.confidence,
            "patterns": self.patterns.to_dict(),
        }


@dataclass(frozen=True)
class DetectionInput:
    text: str
    lines: tuple[str, ...]  # Non-empty, stripped
    statistics: TextStatistics
    templates: tuple[FormatTemplate, ...] = DEFAULT_TEMPLATES
    thresholds: DetectionThresholds = DETECTION_THRESHOLDS

    @classmethod
    def build(
        cls,
        text: str,
        *,
        templates: Sequence[FormatTemplate] = DEFAULT_TEMPLATES,
        thresholds: DetectionThresholds = DETECTION_THRESHOLDS,
    ) -> DetectionInput:
        lines = tuple(line.strip() for line in text.split("\n") if line.strip())
        return cls(
            text=text,
            lines=lines,
            statistics=P.count_line_roles(text),
            templates=tuple(templates),
            thresholds=thresholds,
        )


def _verdict(
    strategy: str,
    fmt: DocumentFormat,
    confidence: float,
    thresholds: DetectionThresholds,
    patterns: FormatPatterns | None = None,
    issues: Sequence[str] = (),
) -> StrategyVerdict:
    capped = max(0.0, min(confidence, thresholds.max_confidence))
    return StrategyVerdict(
        strategy=strategy,
        format=fmt,
        confidence=round(capped, 4),
        patterns=patterns or FormatPatterns(),
        issues=tuple(issues),
    )


def _unknown(strategy: str, thresholds: DetectionThresholds, issues: Sequence[str] = ()) -> StrategyVerdict:
    return _verdict(strategy, DocumentFormat.UNKNOWN, 0.0, thresholds, issues=issues)


# ─────────────────────────────────────────────────────────────────────────────
# Strategies
# ─────────────────────────────────────────────────────────────────────────────

def pattern_frequency(data: DetectionInput) -> StrategyVerdict:
    """
    Compare question-numbering lines against option-lettering lines.

    option lines >= 2x question lines gives mcq; True/False lines at or
    above half the question lines (or a majority of all lines) gives
    true-false; both together give mixed; numbered questions with no
    options or answers give short-answer.
    """
    t = data.thresholds
    stats = data.statistics
    q = stats.question_lines
    o = stats.option_lines
    a = stats.answer_lines
    tf = stats.true_false_lines
    content = stats.content_lines

    patterns = FormatPatterns(
        question_pattern=dominant_pattern(data.text, P.QUESTION),
        option_pattern=dominant_pattern(data.text, P.OPTION) or ("true-false" if tf else ""),
        answer_pattern=dominant_pattern(data.text, P.ANSWER),
    )

    is_mcq = q > 0 and o >= t.mcq_option_ratio * q
    is_true_false = tf > 0 and (tf >= t.true_false_question_ratio * q or tf * 2 > content)

    if is_mcq and is_true_false:
        return _verdict(PATTERN_FREQUENCY, DocumentFormat.MIXED, t.mixed_confidence, t, patterns)
    if is_mcq:
        confidence = min(t.mcq_max_confidence, o / (q * t.mcq_options_per_question))
        return _verdict(PATTERN_FREQUENCY, DocumentFormat.MCQ, confidence, t, patterns)
    if is_true_false:
        return _verdict(PATTERN_FREQUENCY, DocumentFormat.TRUE_FALSE, t.true_false_confidence, t, patterns)
    if q > 0 and o == 0 and a == 0:
        return _verdict(PATTERN_FREQUENCY, DocumentFormat.SHORT_ANSWER, t.short_answer_confidence, t, patterns)
    return _unknown(PATTERN_FREQUENCY, t)


def template_matching(data: DetectionInput) -> StrategyVerdict:
    """
    Score each registered template by the fraction of lines it matches.

    A template with no matching option line scores 0. Scores are capped at
    the template's own confidence. Templates whose patterns do not compile
    are reported as issues and skipped.
    """
    t = data.thresholds
    if not data.lines:
        return _unknown(TEMPLATE, t)

    issues: list[str] = []
    best: tuple[float, FormatTemplate] | None = None
    for template in data.templates:
        try:
            compiled = compile_template(template)
        except re.error as e:
            logger.warning(f"Template {template.id!r} has an invalid pattern: {e}")
            issues.append(f"Template '{template.name}': invalid pattern ({e})")
            continue

        matched = 0
        option_lines = 0
        for line in data.lines:
            hit, is_option = compiled.classify(line)
            matched += hit
            option_lines += is_option
        if option_lines == 0:
            continue

        score = min(matched / len(data.lines), template.confidence)
        logger.debug(f"Template {template.id}: {matched}/{len(data.lines)} lines, score {score:.2f}")
        if best is None or score > best[0]:
            best = (score, template)

    if best is None:
        return _unknown(TEMPLATE, t, issues)

    score, template = best
    try:
        fmt = DocumentFormat(template.format)
    except ValueError:
        issues.append(f"Template '{template.name}': unknown format {template.format!r}")
        return _unknown(TEMPLATE, t, issues)
    patterns = FormatPatterns(
        question_pattern=f"{template.id}:question",
        option_pattern=f"{template.id}:options",
        answer_pattern=f"{template.id}:answer" if template.answer_pattern else "",
    )
    return _verdict(TEMPLATE, fmt, score, t, patterns, issues)


def statistical_ratio(data: DetectionInput) -> StrategyVerdict:
    """Thresholds on question and option line ratios, regardless of regex."""
    t = data.thresholds
    total = data.statistics.content_lines
    if total == 0:
        return _unknown(STATISTICAL, t)

    question_ratio = data.statistics.question_lines / total
    option_ratio = data.statistics.option_lines / total
    patterns = FormatPatterns(question_pattern="ratio", option_pattern="ratio")

    if question_ratio > t.stat_question_ratio and option_ratio > t.stat_option_ratio:
        confidence = min(t.stat_mcq_max_confidence, (question_ratio + option_ratio) / 2)
        return _verdict(STATISTICAL, DocumentFormat.MCQ, confidence, t, patterns)
    if question_ratio > t.stat_question_ratio and option_ratio < t.stat_open_option_ratio:
        return _verdict(STATISTICAL, DocumentFormat.SHORT_ANSWER, t.stat_short_answer_confidence, t, patterns)
    return _unknown(STATISTICAL, t)


_LETTERED_TOKENS = tuple(re.compile(rf"(?:^|\s){c}\)") for c in "abc")
_NUMBERED_TOKENS = tuple(re.compile(rf"(?:^|\s){n}\)") for n in "123")
_TRUE_RE = re.compile(r"\btrue\b")
_FALSE_RE = re.compile(r"\bfalse\b")


def content_keyword(data: DetectionInput) -> StrategyVerdict:
    """Weak lexical signal: a) b) c) tokens, 1) 2) 3) tokens, or true and false."""
    t = data.thresholds
    lowered = data.text.lower()

    if all(p.search(lowered) for p in _LETTERED_TOKENS):
        patterns = FormatPatterns(option_pattern="lettered")
        return _verdict(CONTENT_KEYWORD, DocumentFormat.MCQ, t.keyword_lettered_confidence, t, patterns)
    if all(p.search(lowered) for p in _NUMBERED_TOKENS):
        patterns = FormatPatterns(option_pattern="numbered-options")
        return _verdict(CONTENT_KEYWORD, DocumentFormat.MCQ, t.keyword_numbered_confidence, t, patterns)
    if _TRUE_RE.search(lowered) and _FALSE_RE.search(lowered):
        patterns = FormatPatterns(option_pattern="true-false")
        return _verdict(CONTENT_KEYWORD, DocumentFormat.TRUE_FALSE, t.keyword_true_false_confidence, t, patterns)
    return _unknown(CONTENT_KEYWORD, t)


STRATEGIES: tuple[tuple[str, Callable[[DetectionInput], StrategyVerdict]], ...] = (
    (PATTERN_FREQUENCY, pattern_frequency),
    (TEMPLATE, template_matching),
    (STATISTICAL, statistical_ratio),
    (CONTENT_KEYWORD, content_keyword),
)


def run_strategies(data: DetectionInput) -> tuple[StrategyVerdict, ...]:
    """Run every strategy independently, in tie-break order."""
    verdicts = tuple(strategy(data) for _, strategy in STRATEGIES)
    for verdict in verdicts:
        logger.debug(f"{verdict.strategy}: {verdict.format.value} ({verdict.confidence:.2f})")
    return verdicts


def select_best(verdicts: Sequence[StrategyVerdict]) -> StrategyVerdict:
    """
    Pick the highest-confidence verdict.

    Ties go to the strategy earlier in STRATEGY_ORDER. When nothing
    scores above zero the result is unknown with confidence 0.

    Example:
        >>> a = StrategyVerdict(TEMPLATE, DocumentFormat.MCQ, 0.75)
        >>> b = StrategyVerdict(PATTERN_FREQUENCY, DocumentFormat.MIXED, 0.75)
        >>> select_best([a, b]).strategy
        'pattern-frequency'
    """
    def rank(verdict: StrategyVerdict) -> int:
        try:
            return STRATEGY_ORDER.index(verdict.strategy)
        except ValueError:
            return len(STRATEGY_ORDER)

    candidates = [v for v in verdicts if v.confidence > 0 and v.format is not DocumentFormat.UNKNOWN]
    if not candidates:
        return StrategyVerdict(strategy="", format=DocumentFormat.UNKNOWN, confidence=0.0)
    return min(candidates, key=lambda v: (-v.confidence, rank(v)))
