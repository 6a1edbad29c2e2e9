"""
Unit Tests for search and replace over extracted questions

Tests search_in_quiz(), replace_in_quiz() and the term helpers.
"""

import pytest

from quiz_toolkit.core.models import ExtractedQuestion, QuestionType
from quiz_toolkit.search import (
    SearchField,
    SearchFilters,
    SearchOptions,
    replace_in_quiz,
    search_in_quiz,
    search_stats,
    search_suggestions,
    validate_search_term,
)


class TestSearch:
    """Tests for search_in_quiz."""

    def test_search_when_term_in_option_and_answer_then_both_found(self, sample_quiz):
        """Matches should be reported per field in text, options, answer order."""
        results = search_in_quiz(sample_quiz.questions, "paris")
        assert [(r.question_id, r.field, r.option_index) for r in results] == [
            ("q1", SearchField.OPTIONS, 1),
            ("q1", SearchField.CORRECT_ANSWER, None),
        ]
        assert results[0].original_text == "Paris"
        assert results[0].highlighted_text == '<mark class="search-highlight">Paris</mark>'
        assert results[0].context == "...Paris..."

    def test_search_when_repeated_in_field_then_match_indices(self, sample_quiz):
        """Each match in one value should get its own ordinal."""
        options = SearchOptions(filters=SearchFilters(question_type=QuestionType.TRUE_FALSE))
        results = search_in_quiz(sample_quiz.questions, "the", options)
        assert [r.question_id for r in results] == ["q2", "q2"]
        assert [r.match_index for r in results] == [0, 1]
        assert [r.original_text for r in results] == ["The", "the"]

    def test_search_when_case_sensitive_then_exact_case_only(self, sample_quiz):
        """Case-sensitive search should skip other cases."""
        results = search_in_quiz(sample_quiz.questions, "paris", SearchOptions(case_sensitive=True))
        assert results == []

    def test_search_when_whole_word_then_partial_words_skipped(self, sample_quiz):
        """Whole-word search should not match inside longer words."""
        assert search_in_quiz(sample_quiz.questions, "cap", SearchOptions(whole_word=True)) == []
        assert len(search_in_quiz(sample_quiz.questions, "cap")) == 1

    def test_search_when_options_excluded_then_only_answer(self, sample_quiz):
        """Option texts should be skipped when disabled."""
        results = search_in_quiz(sample_quiz.questions, "paris", SearchOptions(search_in_options=False))
        assert [r.field for r in results] == [SearchField.CORRECT_ANSWER]

    def test_search_when_many_matches_then_capped(self, sample_quiz):
        """Results should never exceed max_results."""
        results = search_in_quiz(sample_quiz.questions, "a", SearchOptions(max_results=3))
        assert len(results) == 3

    def test_search_when_markup_in_text_then_highlight_escaped(self):
        """The highlighted value should be HTML-escaped."""
        questions = [ExtractedQuestion(id="q1", text="Is 1 < 2?")]
        result = search_in_quiz(questions, "1")[0]
        assert result.highlighted_text == 'Is <mark class="search-highlight">1</mark> &lt; 2?'

    def test_search_when_match_on_second_line_then_line_number(self):
        """Line numbers should be 1-based within the value."""
        questions = [ExtractedQuestion(id="q1", text="line one\nline two")]
        assert search_in_quiz(questions, "two")[0].line_number == 2

    @pytest.mark.parametrize("term,options", [
        ("", SearchOptions()),
        ("(", SearchOptions(use_regex=True)),
        ("x*", SearchOptions(use_regex=True)),
    ])
    def test_search_when_empty_invalid_or_zero_width_then_no_results(self, sample_quiz, term, options):
        """Empty terms, bad regexes and empty matches should find nothing."""
        assert search_in_quiz(sample_quiz.questions[2:], term, options) == []

    def test_search_when_filter_on_options_then_open_questions_only(self, sample_quiz):
        """has_options=False should keep only open questions."""
        options = SearchOptions(filters=SearchFilters(has_options=False))
        results = search_in_quiz(sample_quiz.questions, "e", options)
        assert {r.question_id for r in results} == {"q3"}

    def test_to_dict_when_option_match_then_option_index(self, sample_quiz):
        """to_dict should include optionIndex for option matches."""
        data = search_in_quiz(sample_quiz.questions, "paris")[0].to_dict()
        assert data["field"] == "options"
        assert data["optionIndex"] == 1


class TestReplace:
    """Tests for replace_in_quiz."""

    def test_replace_when_term_matches_then_fields_rewritten(self, sample_quiz):
        """Options and answers should both be rewritten."""
        outcome = replace_in_quiz(sample_quiz.questions, "paris", "Lyon")
        assert outcome.questions[0].options == ("London", "Lyon", "Berlin", "Madrid")
        assert outcome.questions[0].correct_answer == "Lyon"
        assert outcome.questions[1] is sample_quiz.questions[1]
        assert len(outcome.operations) == 2
        assert outcome.operations[0].to_dict() == {
            "questionId": "q1",
            "field": "options",
            "originalText": "Paris",
            "newText": "Lyon",
            "optionIndex": 1,
        }

    def test_replace_when_not_regex_then_replacement_literal(self, sample_quiz):
        """Backslashes in a plain replacement should be kept as-is."""
        outcome = replace_in_quiz(sample_quiz.questions, "Pacific", r"\1")
        assert outcome.questions[2].correct_answer == r"\1"

    def test_replace_when_regex_then_group_references(self, sample_quiz):
        """Regex replacements may reference groups."""
        outcome = replace_in_quiz(
            sample_quiz.questions, r"(\w+) river", r"\1 stream", SearchOptions(use_regex=True),
        )
        assert outcome.questions[1].text == "The Nile is the longest stream in Africa."

    @pytest.mark.parametrize("replacement", [r"\1", r"\g<city>"])
    def test_replace_when_regex_group_missing_then_nothing_changed(self, sample_quiz, replacement):
        """References to missing groups should leave every question as it was."""
        outcome = replace_in_quiz(
            sample_quiz.questions, "France", replacement, SearchOptions(use_regex=True),
        )
        assert outcome.questions == sample_quiz.questions
        assert outcome.operations == ()

    def test_replace_when_no_match_then_unchanged(self, sample_quiz):
        """Nothing should change when the term is absent."""
        outcome = replace_in_quiz(sample_quiz.questions, "Tokyo", "Kyoto")
        assert outcome.questions == sample_quiz.questions
        assert outcome.operations == ()

    def test_replace_when_filtered_out_then_question_untouched(self, sample_quiz):
        """Filtered-out questions should be returned unchanged."""
        options = SearchOptions(filters=SearchFilters(question_type="short-answer"))
        outcome = replace_in_quiz(sample_quiz.questions, "paris", "Lyon", options)
        assert outcome.questions[0].correct_answer == "Paris"


class TestTermHelpers:
    """Tests for validate_search_term, search_suggestions and search_stats."""

    def test_validate_when_blank_then_error(self):
        """Blank terms should be rejected."""
        assert validate_search_term("  ").errors == ("Search term cannot be empty",)

    def test_validate_when_bad_regex_then_error(self):
        """Uncompilable regexes should be rejected only in regex mode."""
        assert validate_search_term("(", use_regex=True).errors == ("Invalid regex pattern",)
        assert validate_search_term("(").is_valid

    def test_suggestions_when_called_then_words_then_patterns(self):
        """Frequent words should come before the marker patterns."""
        questions = [
            ExtractedQuestion(id="q1", text="Which river flows north?"),
            ExtractedQuestion(id="q2", text="Which river is longest?"),
        ]
        suggestions = search_suggestions(questions, limit=2)
        assert suggestions[:2] == ["which", "river"]
        assert suggestions[2:] == ["Q\\d+", "A\\)|B\\)|C\\)|D\\)", "Answer:"]

    def test_stats_when_called_then_word_counts(self):
        """Words shorter than three letters should be ignored."""
        questions = [ExtractedQuestion(id="q1", text="Is it the sun or the moon?")]
        stats = search_stats(questions)
        assert stats["totalWords"] == 4
        assert stats["commonWords"][0] == {"word": "the", "count": 2}

    def test_filters_when_min_exceeds_max_then_value_error(self):
        """Inverted length bounds should be rejected."""
        with pytest.raises(ValueError, match="exceeds"):
            SearchFilters(min_length=10, max_length=5)
