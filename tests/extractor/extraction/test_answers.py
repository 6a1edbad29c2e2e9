"""
Unit Tests for correct-answer markers
"""

import pytest

from quiz_toolkit.extractor.extraction import resolve_answer, split_answer_key
from quiz_toolkit.extractor.extraction.answers import take_answer_line, take_correct_sentence

OPTIONS = ("London", "Paris", "Berlin", "Madrid")


class TestResolveAnswer:
    """Tests for resolve_answer."""

    @pytest.mark.parametrize("value", ["B", "(b)", "B.", "B) Paris", "2", "paris", " Paris "])
    def test_resolve_when_value_names_second_option_then_index_one(self, value):
        """Letters, numbers and option text should all resolve."""
        assert resolve_answer(value, OPTIONS) == 1

    def test_resolve_when_letter_beyond_options_then_raw_index(self):
        """Out-of-range letters are returned for the caller to clamp."""
        assert resolve_answer("F", OPTIONS) == 5

    @pytest.mark.parametrize("value,options", [
        ("Tokyo", OPTIONS),
        ("", OPTIONS),
        ("B", ()),
    ])
    def test_resolve_when_nothing_matches_then_none(self, value, options):
        """Unmatched values should give None."""
        assert resolve_answer(value, options) is None


class TestAnswerKey:
    """Tests for split_answer_key."""

    def test_split_when_key_section_then_removed_from_body(self):
        """The section should be cut off and parsed."""
        body, key = split_answer_key("1. Q?\nA) x\nB) y\nANSWERS:\n1. B")
        assert body == "1. Q?\nA) x\nB) y"
        assert key.get(1) == "B"
        assert key

    def test_split_when_tokens_on_one_line_then_all_parsed(self):
        """Several entries may share one line."""
        _, key = split_answer_key("1. Q?\nANSWER KEY\nQ1: B  Q2: True")
        assert key.get(1) == "B"
        assert key.get(2) == "True"

    def test_split_when_header_without_entries_then_unchanged(self):
        """A header with no entries is not an answer key."""
        text = "1. Q?\nANSWERS:\nsee the back page"
        body, key = split_answer_key(text)
        assert body == text
        assert not key


class TestAnswerLines:
    """Tests for inline answer lines and "X is correct" sentences."""

    def test_take_answer_line_when_inline_then_removed(self):
        """The Answer: segment should be removed and returned."""
        assert take_answer_line("What? A) x B) y Answer: B") == ("What? A) x B) y", "B")

    def test_take_answer_line_when_correct_answer_dash_then_value(self):
        """"Correct Answer - C" should also count."""
        assert take_answer_line("What?\nCorrect Answer - C")[1] == "C"

    def test_take_answer_line_when_absent_then_none(self):
        """Blocks without an answer line should be unchanged."""
        assert take_answer_line("What?") == ("What?", None)

    @pytest.mark.parametrize("block", [
        "Pick one. A) x B) y The correct answer is B.",
        "Pick one. A) x B) y B is correct.",
    ])
    def test_take_correct_sentence_when_present_then_letter(self, block):
        """"X is correct" sentences should give the letter."""
        remainder, letter = take_correct_sentence(block)
        assert letter == "B"
        assert remainder == "Pick one. A) x B) y"
