"""
Module: merge.engine

Purpose:
    Merge Engine. Reduces per-file question lists into one list under a
    strategy policy, producing a conflict log. A single accumulating pass
    over the sources in order, so output and log are deterministic for a
    fixed input order.

Key Classes:
    - QuestionSource: (file name, questions) pair
    - MergeOutcome: Merged questions, conflicts, duplicate count

Key Functions:
    - merge(): Apply a strategy to a sequence of sources
    - resolve_conflicts(): Re-label conflicts with chosen resolutions

Dependencies:
    - .policy: Strategy table
    - .similarity: Duplicate / similar matching and question merging

Used By:
    - merge.bulk
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence, Union

from quiz_toolkit.core.models import (
    ConflictType,
    ExtractedQuestion,
    MergeConflict,
    MergeStrategy,
    Resolution,
)
from quiz_toolkit.common.text import normalize_for_comparison

from .config import MergeConfig
from .policy import StrategyPolicy, policy_for
from .similarity import find_duplicate, find_similar, merge_questions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuestionSource:
    name: str
    questions: tuple[ExtractedQuestion, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.questions, tuple):
            object.__setattr__(self, "questions", tuple(self.questions))


SourceLike = Union[QuestionSource, tuple]


@dataclass(frozen=True)
class MergeOutcome:
    """
    Result of a merge.

    Attributes:
        questions: Merged questions, ids unique
        conflicts: Conflict log in detection order (strategy pass first,
            then the global duplicate pass)
        duplicates_removed: Number of duplicate conflicts logged
    """
    questions: tuple[ExtractedQuestion, ...]
    conflicts: tuple[MergeConflict, ...] = ()
    duplicates_removed: int = 0


@dataclass
class _Entry:
    question: ExtractedQuestion
    source: str


def _as_source(item: SourceLike) -> QuestionSource:
    if isinstance(item, QuestionSource):
        return item
    name, questions = item
    return QuestionSource(name, tuple(questions))


def _conflict(
    new: ExtractedQuestion,
    original: ExtractedQuestion,
    source: str,
    conflict_type: ConflictType,
    resolution: Resolution,
) -> MergeConflict:
    return MergeConflict(
        question_id=new.id,
        original_text=original.text,
        new_text=new.text,
        source_file=source,
        conflict_type=conflict_type,
        resolution=resolution,
    )


def _classify(
    question: ExtractedQuestion,
    snapshot: Sequence[ExtractedQuestion],
    policy: StrategyPolicy,
    threshold: float,
) -> Optional[tuple[int, ConflictType]]:
    if policy.check_duplicates:
        index = find_duplicate(question, snapshot)
        if index is not None:
            return index, ConflictType.DUPLICATE
    if policy.check_similar:
        index = find_similar(question, snapshot, threshold)
        if index is not None:
            if snapshot[index].type != question.type:
                return index, ConflictType.FORMAT_MISMATCH
            return index, ConflictType.SIMILAR
    return None


def _apply(entries: list[_Entry], index: int, new: ExtractedQuestion, source: str, resolution: Resolution) -> None:
    if resolution is Resolution.MERGE:
        entries[index].question = merge_questions(entries[index].question, new)
    elif resolution is Resolution.USE_NEW:
        entries[index] = _Entry(new, source)
    # KEEP_ORIGINAL and SKIP drop the incoming question


def _global_dedup(entries: list[_Entry]) -> tuple[list[_Entry], list[MergeConflict]]:
    kept: list[_Entry] = []
    seen: dict[str, ExtractedQuestion] = {}
    conflicts: list[MergeConflict] = []
    for entry in entries:
        key = normalize_for_comparison(entry.question.text)
        if key in seen:
            conflicts.append(_conflict(
                entry.question, seen[key], entry.source,
                ConflictType.DUPLICATE, Resolution.SKIP,
            ))
            continue
        seen[key] = entry.question
        kept.append(entry)
    return kept, conflicts


def _unique_ids(questions: Iterable[ExtractedQuestion]) -> tuple[ExtractedQuestion, ...]:
    """Suffix repeated ids ("q1", "q1-2", ...) in order of appearance."""
    taken: set[str] = set()
    result = []
    for question in questions:
        new_id = question.id
        suffix = 2
        while new_id in taken:
            new_id = f"{question.id}-{suffix}"
            suffix += 1
        taken.add(new_id)
        result.append(question if new_id == question.id else question.with_changes(id=new_id))
    return tuple(result)


def merge(
    strategy: "MergeStrategy | str",
    sources: Sequence[SourceLike],
    *,
    config: Optional[MergeConfig] = None,
) -> MergeOutcome:
    """
    Merge per-file question lists.

    Each incoming file is compared against the questions merged before
    it, so duplicates inside one file are left to the global pass.

    Args:
        strategy: append, replace, merge-by-topic or smart-merge
        sources: QuestionSource values or (name, questions) pairs, oldest first
        config: Similarity threshold

    Returns:
        MergeOutcome

    Raises:
        ValueError: Unknown strategy name

    Example:
        >>> q = ExtractedQuestion(id="q1", text="Capital of France?", options=("Paris", "Rome"))
        >>> outcome = merge("smart-merge", [("a.txt", [q]), ("b.txt", [q])])
        >>> len(outcome.questions), outcome.conflicts[0].conflict_type.value
        (1, 'duplicate')
    """
    config = config or MergeConfig()
    policy = policy_for(strategy)
    items = [_as_source(s) for s in sources]
    if policy.keep_latest_only:
        items = items[-1:]

    entries: list[_Entry] = []
    conflicts: list[MergeConflict] = []

    for source in items:
        snapshot = [e.question for e in entries]
        for question in source.questions:
            match = _classify(question, snapshot, policy, config.similarity_threshold)
            resolution = policy.resolution(match[1]) if match else None
            if match is None or resolution is None:
                entries.append(_Entry(question, source.name))
                continue
            index, conflict_type = match
            conflicts.append(_conflict(question, entries[index].question, source.name, conflict_type, resolution))
            _apply(entries, index, question, source.name, resolution)

    if policy.global_dedup:
        entries, removed = _global_dedup(entries)
        conflicts.extend(removed)

    duplicates = sum(1 for c in conflicts if c.conflict_type is ConflictType.DUPLICATE)
    logger.debug(
        f"Merged {len(items)} sources with {policy.strategy.value}: "
        f"{len(entries)} questions, {len(conflicts)} conflicts"
    )
    return MergeOutcome(
        questions=_unique_ids(e.question for e in entries),
        conflicts=tuple(conflicts),
        duplicates_removed=duplicates,
    )


def resolve_conflicts(
    conflicts: Sequence[MergeConflict],
    resolutions: Optional[Mapping[str, "Resolution | str"]] = None,
) -> tuple[MergeConflict, ...]:
    """
    Return conflicts re-labelled with user-chosen resolutions.

    Args:
        conflicts: Conflict log
        resolutions: question_id -> resolution; conflicts not listed
            resolve to skip

    Raises:
        ValueError: Unknown resolution name
    """
    resolutions = resolutions or {}
    return tuple(
        c.with_resolution(resolutions.get(c.question_id, Resolution.SKIP))
        for c in conflicts
    )
