"""
Module: extractor.config

Purpose:
    Configuration dataclasses for the extraction pipeline. Provides
    immutable settings for segmentation, option normalization and the
    sentence fallback.

Key Classes:
    - ExtractionConfig: Main configuration for extraction

Dependencies:
    - dataclasses: For frozen dataclass support
    - quiz_toolkit.common.thresholds: Default values

Used By:
    - extractor.extraction.extractor: Segmentation and option settings
    - extractor.pipeline: Passed through per document
    - merge.bulk: One config shared by every document in a batch
"""

from dataclasses import dataclass

from quiz_toolkit.common.thresholds import EXTRACTION_THRESHOLDS


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Configuration for question extraction.

    Attributes:
        expected_option_count: Multiple-choice questions with fewer options
            are padded up to this count (default 4)
        pad_options: Disable to keep options exactly as found
        min_block_chars: A boundary pattern qualifies only if at least one
            block is longer than this (default 20)
        min_sentence_chars: Fallback sentences must be longer than this
        sentences_per_chunk: Fallback sentences grouped per question (default 3)
        points_per_question: Points assigned to every extracted question
        id_prefix: Prefix for generated ids ("doc1-" gives "doc1-q1")
        use_answer_key: Apply a trailing ANSWERS section when present
    """
    expected_option_count: int = EXTRACTION_THRESHOLDS.expected_option_count
    pad_options: bool = True
    min_block_chars: int = EXTRACTION_THRESHOLDS.min_block_chars
    min_sentence_chars: int = EXTRACTION_THRESHOLDS.min_sentence_chars
    sentences_per_chunk: int = EXTRACTION_THRESHOLDS.sentences_per_chunk
    points_per_question: int = 1
    id_prefix: str = ""
    use_answer_key: bool = True

    def __post_init__(self) -> None:
        if self.expected_option_count < 2:
            raise ValueError(f"expected_option_count must be >= 2: {self.expected_option_count}")
        if self.sentences_per_chunk < 1:
            raise ValueError(f"sentences_per_chunk must be >= 1: {self.sentences_per_chunk}")
        if self.points_per_question < 0:
            raise ValueError(f"points_per_question must be >= 0: {self.points_per_question}")
