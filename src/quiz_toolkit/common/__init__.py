"""Common helpers shared across quiz_toolkit subpackages."""

from .text import jaccard, normalize_for_comparison, title_case, word_set
from .thresholds import (
    DETECTION_THRESHOLDS,
    EXTRACTION_THRESHOLDS,
    INGEST_THRESHOLDS,
    MERGE_THRESHOLDS,
    QUALITY_THRESHOLDS,
    DetectionThresholds,
    ExtractionThresholds,
    IngestThresholds,
    MergeThresholds,
    QualityThresholds,
)

__all__ = [
    "jaccard",
    "normalize_for_comparison",
    "title_case",
    "word_set",
    "DETECTION_THRESHOLDS",
    "EXTRACTION_THRESHOLDS",
    "INGEST_THRESHOLDS",
    "MERGE_THRESHOLDS",
    "QUALITY_THRESHOLDS",
    "DetectionThresholds",
    "ExtractionThresholds",
    "IngestThresholds",
    "MergeThresholds",
    "QualityThresholds",
]
