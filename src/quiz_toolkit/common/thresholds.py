"""Centralized threshold and magic number configuration.

This module contains the tunable thresholds, ratios and fixed constants
used throughout detection, extraction, analysis and merging. Having these
in one place makes tuning easier; callers override them by passing their
own instances instead of editing the globals.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DetectionThresholds:
    """Thresholds for the four format-detection strategies."""

    max_confidence: float = 0.95  # No strategy may report more than this

    # Pattern-frequency strategy
    mcq_option_ratio: float = 2.0  # option lines >= 2x question lines
    mcq_options_per_question: int = 4  # Divisor for mcq confidence
    mcq_max_confidence: float = 0.9
    true_false_question_ratio: float = 0.5  # TF lines >= half the question lines
    true_false_confidence: float = 0.8
    mixed_confidence: float = 0.75
    short_answer_confidence: float = 0.7

    # Statistical-ratio strategy
    stat_question_ratio: float = 0.1  # question lines / total lines
    stat_option_ratio: float = 0.2  # option lines / total lines
    stat_open_option_ratio: float = 0.1  # below this, no options
    stat_mcq_max_confidence: float = 0.8
    stat_short_answer_confidence: float = 0.6

    # Content-keyword strategy
    keyword_true_false_confidence: float = 0.7
    keyword_lettered_confidence: float = 0.8
    keyword_numbered_confidence: float = 0.75


@dataclass(frozen=True)
class ExtractionThresholds:
    """Thresholds for question segmentation and option normalization."""

    min_block_chars: int = 20  # A boundary pattern qualifies if a block is longer
    min_sentence_chars: int = 20  # Fallback sentences must be longer than this
    sentences_per_chunk: int = 3  # Fallback groups sentences in threes
    expected_option_count: int = 4  # Pad multiple-choice options up to this
    preview_question_limit: int = 5
    structured_confidence: float = 0.8
    answer_key_bonus: float = 0.05
    fallback_confidence: float = 0.2


@dataclass(frozen=True)
class MergeThresholds:
    """Thresholds for duplicate and near-duplicate detection."""

    similarity_threshold: float = 0.8  # Jaccard must be strictly greater
    max_workers: int = 4  # Per-document extraction threads
    max_subject_keywords: int = 5


@dataclass(frozen=True)
class QualityThresholds:
    """Scoring weights and bands for the quality analyzer."""

    readability_weight: float = 0.3
    balance_weight: float = 0.4
    clarity_weight: float = 0.3

    balance_stddev_factor: float = 2.0
    four_option_bonus: float = 10.0

    vague_word_penalty: int = 10
    connective_bonus: int = 5
    long_text_chars: int = 200
    very_long_text_chars: int = 300
    long_text_penalty: int = 20
    short_text_chars: int = 10
    short_text_penalty: int = 30

    low_score: float = 60.0  # Below this an aspect is an issue
    high_score: float = 80.0  # Above this an aspect is a strength
    option_length_ratio: float = 3.0
    good_length_min: int = 20
    good_length_max: int = 100
    expand_below_chars: int = 20
    split_above_chars: int = 150

    easy_skew_percent: float = 70.0
    hard_skew_percent: float = 50.0
    min_categories: int = 3
    common_issue_fraction: float = 0.3


@dataclass(frozen=True)
class IngestThresholds:
    """Limits applied to raw documents before any parsing."""

    max_file_bytes: int = 10 * 1024 * 1024  # 10MB
    bytes_per_question_estimate: int = 1000


# Global instances
DETECTION_THRESHOLDS = DetectionThresholds()
EXTRACTION_THRESHOLDS = ExtractionThresholds()
MERGE_THRESHOLDS = MergeThresholds()
QUALITY_THRESHOLDS = QualityThresholds()
INGEST_THRESHOLDS = IngestThresholds()
