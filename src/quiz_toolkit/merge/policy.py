"""
Module: merge.policy

Purpose:
    Declarative merge policies. Each strategy is one row: which checks
    run, which resolution each conflict type receives, and whether the
    final exact-duplicate pass runs. The engine has no per-strategy
    branches beyond reading this table.

Key Classes:
    - StrategyPolicy: One strategy's behaviour

Key Functions:
    - policy_for(): Policy for a strategy name or enum
    - merge_strategies(): Strategy -> description

Used By:
    - merge.engine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from quiz_toolkit.core.models import ConflictType, MergeStrategy, Resolution


@dataclass(frozen=True)
class StrategyPolicy:
    """
    Behaviour of one merge strategy.

    Attributes:
        strategy: Strategy this row describes
        description: Human readable summary
        keep_latest_only: Discard every source but the last
        check_duplicates: Look for exact (normalized) duplicates first
        check_similar: Look for Jaccard near-duplicates
        resolutions: Resolution applied per conflict type; a detected
            conflict type missing here is not logged and the question
            is appended
        global_dedup: Run the final exact-duplicate pass over the result
    """
    strategy: MergeStrategy
    description: str
    keep_latest_only: bool = False
    check_duplicates: bool = False
    check_similar: bool = False
    resolutions: Mapping[ConflictType, Resolution] = field(default_factory=dict)
    global_dedup: bool = True

    def resolution(self, conflict_type: ConflictType) -> Optional[Resolution]:
        return self.resolutions.get(conflict_type)


POLICIES: Mapping[MergeStrategy, StrategyPolicy] = MappingProxyType({
    MergeStrategy.APPEND: StrategyPolicy(
        strategy=MergeStrategy.APPEND,
        description="Add all questions from new files to existing quiz",
        global_dedup=False,
    ),
    MergeStrategy.REPLACE: StrategyPolicy(
        strategy=MergeStrategy.REPLACE,
        description="Replace existing quiz with new files",
        keep_latest_only=True,
    ),
    MergeStrategy.MERGE_BY_TOPIC: StrategyPolicy(
        strategy=MergeStrategy.MERGE_BY_TOPIC,
        description="Merge questions by topic/subject similarity",
        check_similar=True,
        resolutions=MappingProxyType({
            ConflictType.SIMILAR: Resolution.SKIP,
            ConflictType.FORMAT_MISMATCH: Resolution.KEEP_ORIGINAL,
        }),
    ),
    MergeStrategy.SMART_MERGE: StrategyPolicy(
        strategy=MergeStrategy.SMART_MERGE,
        description="Intelligently merge based on content analysis",
        check_duplicates=True,
        check_similar=True,
        resolutions=MappingProxyType({
            ConflictType.DUPLICATE: Resolution.SKIP,
            ConflictType.SIMILAR: Resolution.MERGE,
            ConflictType.FORMAT_MISMATCH: Resolution.KEEP_ORIGINAL,
        }),
    ),
})


def policy_for(strategy: "MergeStrategy | str") -> StrategyPolicy:
    """
    Raises:
        ValueError: Unknown strategy name
    """
    return POLICIES[MergeStrategy.parse(strategy)]


def merge_strategies() -> dict[str, str]:
    """Strategy name -> description, in declaration order."""
    return {policy.strategy.value: policy.description for policy in POLICIES.values()}
