"""
Unit Tests for the merge engine

Tests merge() under each strategy, the duplicate/similar boundary and
resolve_conflicts().
"""

import pytest

from quiz_toolkit.core.models import (
    ConflictType,
    ExtractedQuestion,
    MergeStrategy,
    QuestionType,
    Resolution,
)
from quiz_toolkit.merge import MergeConfig, QuestionSource, merge, resolve_conflicts

FRANCE = ExtractedQuestion(
    id="q1",
    text="Capital of France?",
    options=("London", "Paris", "Berlin", "Madrid"),
    correct_answer="Paris",
)

# Jaccard 4/5 = 0.8 exactly
AT_BOUNDARY = ("one two three four five", "one two three four")
# Jaccard 5/6 > 0.8
ABOVE_BOUNDARY = ("alpha beta gamma delta epsilon zeta", "alpha beta gamma delta epsilon")


def _q(qid: str, text: str, options=("A", "B"), qtype=QuestionType.MULTIPLE_CHOICE) -> ExtractedQuestion:
    return ExtractedQuestion(id=qid, text=text, type=qtype, options=options, correct_answer=options[0] if options else "")


class TestStrategies:
    """Tests for each merge strategy."""

    def test_append_when_same_question_twice_then_both_kept(self):
        """append should keep everything and log nothing."""
        outcome = merge("append", [("a.txt", [FRANCE]), ("b.txt", [FRANCE])])
        assert len(outcome.questions) == 2
        assert outcome.conflicts == ()
        assert [q.id for q in outcome.questions] == ["q1", "q1-2"]

    def test_smart_merge_when_same_question_twice_then_one_duplicate_skip(self):
        """smart-merge should skip the exact duplicate."""
        outcome = merge(MergeStrategy.SMART_MERGE, [("a.txt", [FRANCE]), ("b.txt", [FRANCE])])
        assert len(outcome.questions) == 1
        assert len(outcome.conflicts) == 1
        conflict = outcome.conflicts[0]
        assert conflict.conflict_type is ConflictType.DUPLICATE
        assert conflict.resolution is Resolution.SKIP
        assert conflict.source_file == "b.txt"
        assert outcome.duplicates_removed == 1

    def test_smart_merge_when_case_and_punctuation_differ_then_duplicate(self):
        """Duplicates should be found on normalized text."""
        other = FRANCE.with_changes(id="q7", text="capital of  FRANCE")
        outcome = merge("smart-merge", [("a.txt", [FRANCE]), ("b.txt", [other])])
        assert outcome.conflicts[0].conflict_type is ConflictType.DUPLICATE

    def test_smart_merge_when_merged_with_itself_then_unchanged(self, sample_quiz):
        """Merging a set with itself should give the set back."""
        questions = sample_quiz.questions
        outcome = merge("smart-merge", [("a.txt", questions), ("b.txt", questions)])
        assert outcome.questions == questions
        assert len(outcome.conflicts) == len(questions)

    def test_smart_merge_when_similar_then_merged_into_existing(self):
        """Similar questions should be combined into the existing one."""
        existing = _q("q1", ABOVE_BOUNDARY[0], options=("A", "B"))
        new = _q("q1", ABOVE_BOUNDARY[1], options=("B", "C"))
        outcome = merge("smart-merge", [("a.txt", [existing]), ("b.txt", [new])])
        assert len(outcome.questions) == 1
        merged = outcome.questions[0]
        assert merged.text == ABOVE_BOUNDARY[0]
        assert merged.options == ("A", "B", "C")
        assert merged.correct_answer == "A"
        assert outcome.conflicts[0].conflict_type is ConflictType.SIMILAR
        assert outcome.conflicts[0].resolution is Resolution.MERGE

    def test_smart_merge_when_duplicates_inside_one_file_then_global_pass(self):
        """Duplicates within a file are removed by the final pass."""
        outcome = merge("smart-merge", [("a.txt", [FRANCE, FRANCE.with_changes(id="q2")])])
        assert len(outcome.questions) == 1
        assert outcome.conflicts[0].conflict_type is ConflictType.DUPLICATE

    def test_append_when_duplicates_inside_one_file_then_kept(self):
        """append has no duplicate pass."""
        outcome = merge("append", [("a.txt", [FRANCE, FRANCE.with_changes(id="q2")])])
        assert len(outcome.questions) == 2

    def test_replace_when_many_sources_then_last_only(self, sample_quiz):
        """replace should keep only the last source."""
        outcome = merge("replace", [("a.txt", [FRANCE]), QuestionSource("b.txt", sample_quiz.questions[1:])])
        assert [q.id for q in outcome.questions] == ["q2", "q3"]

    def test_merge_by_topic_when_similar_then_skipped(self):
        """merge-by-topic should drop similar questions."""
        outcome = merge("merge-by-topic", [
            ("a.txt", [_q("q1", ABOVE_BOUNDARY[0])]),
            ("b.txt", [_q("q1", ABOVE_BOUNDARY[1])]),
        ])
        assert len(outcome.questions) == 1
        assert outcome.conflicts[0].conflict_type is ConflictType.SIMILAR
        assert outcome.conflicts[0].resolution is Resolution.SKIP

    def test_merge_when_similar_but_different_type_then_format_mismatch(self):
        """Similar text with a different type should keep the original."""
        original = _q("q1", ABOVE_BOUNDARY[0])
        incoming = _q("q1", ABOVE_BOUNDARY[1], options=None, qtype=QuestionType.SHORT_ANSWER)
        outcome = merge("smart-merge", [("a.txt", [original]), ("b.txt", [incoming])])
        assert outcome.questions == (original,)
        assert outcome.conflicts[0].conflict_type is ConflictType.FORMAT_MISMATCH
        assert outcome.conflicts[0].resolution is Resolution.KEEP_ORIGINAL

    def test_merge_when_unknown_strategy_then_raises(self):
        """Unknown strategy names should be rejected."""
        with pytest.raises(ValueError, match="Unknown merge strategy"):
            merge("shuffle", [("a.txt", [FRANCE])])

    def test_merge_when_no_sources_then_empty(self):
        """Nothing in should give nothing out."""
        outcome = merge("smart-merge", [])
        assert outcome.questions == ()
        assert outcome.conflicts == ()


class TestSimilarityBoundary:
    """Tests for the strict Jaccard threshold."""

    def test_boundary_when_exactly_threshold_then_not_similar(self):
        """Similarity equal to the threshold is not similar."""
        outcome = merge("merge-by-topic", [
            ("a.txt", [_q("q1", AT_BOUNDARY[0])]),
            ("b.txt", [_q("q2", AT_BOUNDARY[1])]),
        ])
        assert len(outcome.questions) == 2
        assert outcome.conflicts == ()

    def test_boundary_when_just_above_threshold_then_similar(self):
        """Similarity above the threshold is similar."""
        outcome = merge("merge-by-topic", [
            ("a.txt", [_q("q1", ABOVE_BOUNDARY[0])]),
            ("b.txt", [_q("q2", ABOVE_BOUNDARY[1])]),
        ])
        assert len(outcome.questions) == 1

    def test_boundary_when_threshold_lowered_then_exact_value_similar(self):
        """A lower configured threshold should admit the 0.8 pair."""
        outcome = merge(
            "merge-by-topic",
            [("a.txt", [_q("q1", AT_BOUNDARY[0])]), ("b.txt", [_q("q2", AT_BOUNDARY[1])])],
            config=MergeConfig(similarity_threshold=0.79),
        )
        assert len(outcome.questions) == 1

    def test_boundary_when_identical_text_then_duplicate_wins_over_similar(self):
        """Exact matches should be logged as duplicates, not similar."""
        outcome = merge("smart-merge", [
            ("a.txt", [_q("q1", AT_BOUNDARY[0])]),
            ("b.txt", [_q("q2", AT_BOUNDARY[0].upper())]),
        ])
        assert outcome.conflicts[0].conflict_type is ConflictType.DUPLICATE


class TestResolveConflicts:
    """Tests for resolve_conflicts."""

    def test_resolve_when_mapping_given_then_relabelled(self):
        """Listed conflicts take the chosen resolution; others skip."""
        outcome = merge("smart-merge", [
            ("a.txt", [FRANCE, _q("q2", ABOVE_BOUNDARY[0])]),
            ("b.txt", [FRANCE.with_changes(id="q5"), _q("q6", ABOVE_BOUNDARY[1])]),
        ])
        resolved = resolve_conflicts(outcome.conflicts, {"q5": "use-new"})
        assert [c.resolution for c in resolved] == [Resolution.USE_NEW, Resolution.SKIP]

    def test_resolve_when_unknown_resolution_then_raises(self):
        """Unknown resolution names should be rejected."""
        outcome = merge("smart-merge", [("a.txt", [FRANCE]), ("b.txt", [FRANCE])])
        with pytest.raises(ValueError):
            resolve_conflicts(outcome.conflicts, {"q1": "bogus"})


class TestDeterminism:
    """Tests that a fixed input order gives a fixed merge."""

    @pytest.mark.parametrize("strategy", list(MergeStrategy))
    def test_merge_when_run_twice_then_identical_outcome(self, strategy):
        """Question order and the conflict log should not vary between runs."""
        sources = [
            ("a.txt", [FRANCE, _q("q2", ABOVE_BOUNDARY[0]), _q("q3", "Which gas do plants absorb?")]),
            ("b.txt", [FRANCE.with_changes(id="q1"), _q("q2", ABOVE_BOUNDARY[1]), _q("q4", "Name a prime number.")]),
            ("c.txt", [_q("q1", AT_BOUNDARY[0]), _q("q2", AT_BOUNDARY[1]), _q("q3", "Which gas do plants absorb?")]),
        ]
        first = merge(strategy, sources)
        second = merge(strategy, sources)
        assert first.questions == second.questions
        assert first.conflicts == second.conflicts
        assert first.duplicates_removed == second.duplicates_removed
