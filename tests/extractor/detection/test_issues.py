"""
Unit Tests for line-level formatting issues
"""

from quiz_toolkit.extractor.detection import auto_correct, detect_issues
from quiz_toolkit.extractor.detection.issues import format_suggestions


class TestDetectIssues:
    """Tests for detect_issues."""

    def test_detect_when_missing_spaces_then_one_issue_per_rule(self):
        """Each rule should report its own issue and correction."""
        issues, corrections = detect_issues("1.What is this\nA)Paris")
        assert issues == [
            "Line 1: Missing space after question number",
            "Line 1: Question should end with question mark",
            "Line 2: Missing space after option letter",
        ]
        assert [c.kind for c in corrections] == ["spacing", "question-mark", "spacing"]
        assert corrections[2].corrected == "A) Paris"

    def test_detect_when_q_prefix_without_punctuation_then_numbering(self):
        """Q-numbers without punctuation should be flagged."""
        _, corrections = detect_issues("Q1 What is mass??")
        kinds = {c.kind: c.corrected for c in corrections}
        assert kinds["numbering"] == "Q1. What is mass??"
        assert kinds["punctuation"] == "Q1 What is mass?"

    def test_detect_when_ellipsis_then_not_flagged(self):
        """An ellipsis is not run-together punctuation."""
        issues, _ = detect_issues("Wait for it...")
        assert issues == []

    def test_detect_when_question_word_before_inline_options_then_mark_before_options(self):
        """The question mark should go before inline options."""
        _, corrections = detect_issues("1. Which is largest A) Sun B) Moon")
        assert corrections[0].corrected == "1. Which is largest? A) Sun B) Moon"

    def test_detect_when_clean_then_no_issues(self, mcq_text):
        """Well-formed text should have no issues."""
        assert detect_issues(mcq_text) == ([], [])


class TestAutoCorrect:
    """Tests for auto_correct."""

    def test_auto_correct_when_issues_then_all_applied(self):
        """Every rule should apply in order on each line."""
        result = auto_correct("1.What is this\nA)Paris")
        assert result.corrected_text == "1. What is this?\nA) Paris"
        assert len(result.corrections) == 3

    def test_auto_correct_when_clean_lines_then_untouched(self):
        """Unchanged lines should keep their indentation and blank lines."""
        text = "  1. What is this?\n\n  A) Paris"
        assert auto_correct(text).corrected_text == text


class TestFormatSuggestions:
    """Tests for format_suggestions."""

    def test_suggestions_when_no_corrections_then_format_advice(self):
        """Format advice should lead when there is nothing to fix."""
        assert format_suggestions("mcq")[0] == "Detected multiple choice format"

    def test_suggestions_when_unknown_format_then_generic(self):
        """Unrecognized formats should get generic advice."""
        assert format_suggestions("essay")[0] == "Format not clearly detected"
