"""
Module: merge.config

Purpose:
    Configuration for merging question sets and for batch orchestration.

Key Classes:
    - MergeConfig: Similarity threshold, worker count, subject keywords

Used By:
    - merge.engine
    - merge.bulk
"""

from dataclasses import dataclass

from quiz_toolkit.common.thresholds import MERGE_THRESHOLDS


@dataclass(frozen=True)
class MergeConfig:
    """
    Configuration for merging.

    Attributes:
        similarity_threshold: Two questions are similar when the Jaccard
            similarity of their word sets is strictly greater than this
        max_workers: Threads used for per-document extraction in a batch
        max_subject_keywords: Keywords kept in the merged quiz subject
    """
    similarity_threshold: float = MERGE_THRESHOLDS.similarity_threshold
    max_workers: int = MERGE_THRESHOLDS.max_workers
    max_subject_keywords: int = MERGE_THRESHOLDS.max_subject_keywords

    def __post_init__(self) -> None:
        if not (0.0 <= self.similarity_threshold <= 1.0):
            raise ValueError(f"similarity_threshold must be 0-1: {self.similarity_threshold}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1: {self.max_workers}")
        if self.max_subject_keywords < 1:
            raise ValueError(f"max_subject_keywords must be >= 1: {self.max_subject_keywords}")
