"""
Module: merge

Purpose:
    Merge Engine package. Combines question sets from several documents
    under a named strategy, logging duplicate / similar / format-mismatch
    conflicts, and orchestrates whole batches.

Key Modules:
    - policy: Strategy table (strategy, conflict type) -> resolution
    - similarity: Normalized-text duplicates and Jaccard near-duplicates
    - engine: merge(), resolve_conflicts()
    - metadata: Merged title, description and subject
    - bulk: process_batch()
"""

from .bulk import BatchProcessingError, process_batch
from .config import MergeConfig
from .engine import MergeOutcome, QuestionSource, merge, resolve_conflicts
from .metadata import detect_subject, merged_description, merged_title
from .policy import POLICIES, StrategyPolicy, merge_strategies, policy_for
from .similarity import find_duplicate, find_similar, merge_questions

__all__ = [
    "BatchProcessingError",
    "process_batch",
    "MergeConfig",
    "MergeOutcome",
    "QuestionSource",
    "merge",
    "resolve_conflicts",
    "detect_subject",
    "merged_description",
    "merged_title",
    "POLICIES",
    "StrategyPolicy",
    "merge_strategies",
    "policy_for",
    "find_duplicate",
    "find_similar",
    "merge_questions",
]
