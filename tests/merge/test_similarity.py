"""
Unit Tests for duplicate and near-duplicate matching
"""

from quiz_toolkit.core.models import ExtractedQuestion, QuestionType
from quiz_toolkit.merge import find_duplicate, find_similar, merge_questions


def _q(qid: str, text: str, **kw) -> ExtractedQuestion:
    return ExtractedQuestion(id=qid, text=text, **kw)


class TestFind:
    """Tests for find_duplicate and find_similar."""

    def test_find_duplicate_when_normalized_equal_then_index(self):
        """The first normalized match should be returned."""
        pool = [_q("q1", "Other?"), _q("q2", "What is DNA?"), _q("q3", "what is dna")]
        assert find_duplicate(_q("q9", "What is  DNA"), pool) == 1

    def test_find_duplicate_when_absent_then_none(self):
        """No match should give None."""
        assert find_duplicate(_q("q9", "What is RNA?"), [_q("q1", "What is DNA?")]) is None

    def test_find_similar_when_above_threshold_then_index(self):
        """Word overlap above the threshold should match."""
        pool = [_q("q1", "alpha beta gamma delta epsilon zeta")]
        assert find_similar(_q("q2", "alpha beta gamma delta epsilon"), pool, 0.8) == 0

    def test_find_similar_when_at_threshold_then_none(self):
        """Overlap equal to the threshold should not match."""
        pool = [_q("q1", "one two three four five")]
        assert find_similar(_q("q2", "one two three four"), pool, 0.8) is None


class TestMergeQuestions:
    """Tests for merge_questions."""

    def test_merge_when_options_overlap_then_ordered_union(self):
        """Options should be unioned in order without repeats."""
        existing = _q("q1", "Short?", options=("A", "B"), correct_answer="B")
        new = _q("q5", "A longer text?", options=("B", "C"), correct_answer="C")
        merged = merge_questions(existing, new)
        assert merged.id == "q1"
        assert merged.text == "A longer text?"
        assert merged.options == ("A", "B", "C")
        assert merged.correct_answer == "B"

    def test_merge_when_equal_length_text_then_new_text(self):
        """Equal-length texts should take the incoming one."""
        merged = merge_questions(_q("q1", "abc?"), _q("q2", "xyz?"))
        assert merged.text == "xyz?"

    def test_merge_when_existing_has_no_answer_then_new_answer(self):
        """The first non-empty answer should win."""
        existing = _q("q1", "Name it?", type=QuestionType.SHORT_ANSWER)
        new = _q("q2", "Name it?", type=QuestionType.SHORT_ANSWER, correct_answer="Pacific")
        merged = merge_questions(existing, new)
        assert merged.correct_answer == "Pacific"
        assert merged.options is None
