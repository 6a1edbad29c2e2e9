"""
Module: extractor.detection.detector

Purpose:
    Format Detector entry point. Normalizes the text, runs the four
    strategies, reduces them with select_best() and attaches issues,
    corrections, suggestions and line statistics.

Key Classes:
    - FormatDetectionResult: Immutable detection outcome

Key Functions:
    - detect_format(): Never raises; empty input gives unknown/0

Dependencies:
    - .strategies: Strategy verdicts and selection
    - .issues: Line-level issues and corrections
    - extractor.normalizer: Text normalization

Used By:
    - extractor.pipeline
    - cli: detect subcommand
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from quiz_toolkit.common.thresholds import DETECTION_THRESHOLDS, DetectionThresholds

from ..normalizer import normalize_text
from .issues import LineCorrection, detect_issues, format_suggestions
from .patterns import TextStatistics
from .strategies import (
    DetectionInput,
    DocumentFormat,
    FormatPatterns,
    StrategyVerdict,
    run_strategies,
    select_best,
)
from .templates import DEFAULT_TEMPLATES, FormatTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatDetectionResult:
    """
    Outcome of format detection for one document.

    Attributes:
        detected_format: Winning DocumentFormat
        confidence: In [0, 0.95]
        format_patterns: Dominant patterns behind the winning verdict
        issues: "Line N: ..." messages (includes bad template reports)
        suggestions: Human readable advice
        corrections: One suggested LineCorrection per line issue
        statistics: Line counts per role
        strategy: Tag of the winning strategy ("" when unknown)
        verdicts: Every strategy's verdict, in tie-break order
    """
    detected_format: DocumentFormat
    confidence: float
    format_patterns: FormatPatterns = field(default_factory=FormatPatterns)
    issues: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    corrections: tuple[LineCorrection, ...] = ()
    statistics: TextStatistics = field(default_factory=TextStatistics)
    strategy: str = ""
    verdicts: tuple[StrategyVerdict, ...] = ()

    def to_dict(self) -> dict:
        return {
            "detectedFormat": self.detected_format.value,
            "confidence": self.confidence,
            "formatPatterns": self.format_patterns.to_dict(),
            "issues": list(self.issues),
            "suggestions": list(self.suggestions),
            "corrections": [c.to_dict() for c in self.corrections],
            "statistics": self.statistics.to_dict(),
            "strategy": self.strategy,
            "verdicts": [v.to_dict() for v in self.verdicts],
        }


def detect_format(
    text: str,
    *,
    raw_text: Optional[str] = None,
    templates: Sequence[FormatTemplate] = DEFAULT_TEMPLATES,
    thresholds: DetectionThresholds = DETECTION_THRESHOLDS,
) -> FormatDetectionResult:
    """
    Classify a document's layout.

    Args:
        text: Document text (normalized here; already-normalized text is
            unchanged by that step)
        raw_text: Pre-normalization text for issue detection. Defaults to
            `text`; pass it when `text` was normalized upstream so that
            spacing issues remain visible.
        templates: Template registry for the template strategy
        thresholds: Strategy thresholds

    Returns:
        FormatDetectionResult. Empty input gives unknown with confidence 0.

    Example:
        >>> result = detect_format("1. What?\\nA) Yes\\nB) No\\nC) Maybe\\nD) Never")
        >>> result.detected_format.value
        'mcq'
    """
    source = text if raw_text is None else raw_text
    normalized = normalize_text(text or "")

    issues, corrections = detect_issues(source or "")

    if not normalized:
        return FormatDetectionResult(
            detected_format=DocumentFormat.UNKNOWN,
            confidence=0.0,
            issues=tuple(issues),
            suggestions=tuple(format_suggestions(DocumentFormat.UNKNOWN.value, corrections)),
            corrections=tuple(corrections),
        )

    data = DetectionInput.build(normalized, templates=templates, thresholds=thresholds)
    verdicts = run_strategies(data)
    best = select_best(verdicts)

    template_issues = [issue for v in verdicts for issue in v.issues]
    all_issues = template_issues + issues

    logger.debug(
        f"Detected {best.format.value} ({best.confidence:.2f}) via {best.strategy or 'none'}; "
        f"{len(issues)} line issues"
    )

    return FormatDetectionResult(
        detected_format=best.format,
        confidence=best.confidence,
        format_patterns=best.patterns,
        issues=tuple(all_issues),
        suggestions=tuple(format_suggestions(best.format.value, corrections)),
        corrections=tuple(corrections),
        statistics=data.statistics,
        strategy=best.strategy,
        verdicts=verdicts,
    )
