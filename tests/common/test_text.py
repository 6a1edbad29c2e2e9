"""
Unit Tests for text comparison helpers
"""

import pytest

from quiz_toolkit.common.text import jaccard, normalize_for_comparison, title_case, word_set


class TestNormalizeForComparison:
    """Tests for normalize_for_comparison."""

    def test_normalize_when_case_punctuation_whitespace_differ_then_equal(self):
        """Case, punctuation and whitespace differences should vanish."""
        assert normalize_for_comparison("Capital of  France?") == normalize_for_comparison("capital of france")

    def test_normalize_when_called_then_collapses_and_strips(self):
        """Whitespace runs should collapse to one space."""
        assert normalize_for_comparison("  What IS\n 2+2? ") == "what is 22"


class TestJaccard:
    """Tests for word-set Jaccard similarity."""

    def test_jaccard_when_identical_then_one(self):
        """Identical texts should score 1."""
        assert jaccard("a b c", "C B A") == 1.0

    def test_jaccard_when_disjoint_then_zero(self):
        """Texts without shared words should score 0."""
        assert jaccard("a b", "c d") == 0.0

    def test_jaccard_when_four_of_five_shared_then_point_eight(self):
        """4 shared words out of 5 distinct should score exactly 0.8."""
        assert jaccard("one two three four five", "one two three four") == pytest.approx(0.8)

    def test_jaccard_when_both_empty_then_one(self):
        """Two empty texts should be identical."""
        assert jaccard("", "  ") == 1.0

    def test_word_set_when_repeated_words_then_deduplicates(self):
        """word_set should lowercase and deduplicate."""
        assert word_set("The the THE cat") == frozenset({"the", "cat"})


class TestTitleCase:
    """Tests for title_case."""

    def test_title_case_when_lowercase_words_then_capitalizes_each(self):
        """Each word should start with a capital letter."""
        assert title_case("week 3 review") == "Week 3 Review"
