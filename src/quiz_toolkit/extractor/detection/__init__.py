"""
Module: extractor.detection

Purpose:
    Format detection subpackage. Classifies a document's layout
    convention (numbering and option-marking style) before extraction.

Key Modules:
    - patterns: Declarative (name, regex, role) registry
    - templates: Named layout templates
    - strategies: The four strategies and select_best()
    - issues: Line-level issues and corrections
    - detector: detect_format() entry point

Used By:
    - extractor.pipeline: Runs detection ahead of extraction
"""

from .detector import FormatDetectionResult, detect_format
from .issues import AutoCorrection, LineCorrection, auto_correct, detect_issues
from .patterns import PATTERN_REGISTRY, PatternSpec, TextStatistics, count_line_roles
from .strategies import (
    STRATEGY_ORDER,
    DocumentFormat,
    FormatPatterns,
    StrategyVerdict,
    select_best,
)
from .templates import (
    DEFAULT_TEMPLATES,
    FormatTemplate,
    validate_template,
    with_template,
)

__all__ = [
    "FormatDetectionResult",
    "detect_format",
    "AutoCorrection",
    "LineCorrection",
    "auto_correct",
    "detect_issues",
    "PATTERN_REGISTRY",
    "PatternSpec",
    "TextStatistics",
    "count_line_roles",
    "STRATEGY_ORDER",
    "DocumentFormat",
    "FormatPatterns",
    "StrategyVerdict",
    "select_best",
    "DEFAULT_TEMPLATES",
    "FormatTemplate",
    "validate_template",
    "with_template",
]
