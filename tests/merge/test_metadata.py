"""
Unit Tests for merged quiz metadata
"""

import pytest

from quiz_toolkit.core.models import ConflictType, ExtractedQuestion, MergeStrategy, Resolution
from quiz_toolkit.merge import detect_subject, merged_description, merged_title
from quiz_toolkit.merge.policy import merge_strategies, policy_for


class TestMergedTitle:
    """Tests for merged_title."""

    @pytest.mark.parametrize("strategy,expected", [
        (MergeStrategy.APPEND, "Merged Quiz (2 files)"),
        (MergeStrategy.REPLACE, "Quiz from week2"),
        (MergeStrategy.MERGE_BY_TOPIC, "Topic-Based Quiz (2 sources)"),
        (MergeStrategy.SMART_MERGE, "Smart Merged Quiz (2 files)"),
    ])
    def test_title_when_strategy_then_strategy_specific(self, strategy, expected):
        """Each strategy should have its own title."""
        assert merged_title(strategy, ["week1.txt", "week2.txt"]) == expected

    def test_description_when_called_then_counts(self):
        """The description should name the strategy and counts."""
        assert merged_description(MergeStrategy.SMART_MERGE, 3, 12) == (
            "Quiz created from 3 files using smart-merge strategy. Contains 12 unique questions."
        )


class TestDetectSubject:
    """Tests for detect_subject."""

    def test_subject_when_keywords_present_then_list_order(self):
        """Keywords should be reported in keyword-list order."""
        questions = [
            ExtractedQuestion(id="q1", text="What drives sales growth?", options=("Marketing", "Finance")),
        ]
        assert detect_subject(questions) == "Finance, Marketing, Sales"

    def test_subject_when_limit_then_truncated(self):
        """Only `limit` keywords should be kept."""
        questions = [ExtractedQuestion(id="q1", text="leadership management finance marketing")]
        assert detect_subject(questions, limit=2) == "Leadership, Management"

    def test_subject_when_keyword_inside_word_then_ignored(self):
        """Keywords should match whole words only."""
        questions = [ExtractedQuestion(id="q1", text="What is a shrub?")]
        assert detect_subject(questions) == "General Knowledge"


class TestPolicies:
    """Tests for the strategy policy table."""

    def test_policy_when_smart_merge_then_similar_merges(self):
        """smart-merge should merge similar questions."""
        policy = policy_for("smart-merge")
        assert policy.resolution(ConflictType.SIMILAR) is Resolution.MERGE
        assert policy.resolution(ConflictType.DUPLICATE) is Resolution.SKIP

    def test_strategies_when_listed_then_all_four(self):
        """Every strategy should be described."""
        assert list(merge_strategies()) == ["append", "replace", "merge-by-topic", "smart-merge"]
