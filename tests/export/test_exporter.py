"""
Unit Tests for the export entry points

Tests export_quiz(), batch_export(), template export, JSON parsing and
option validation.
"""

import pytest

from quiz_toolkit.core.models import ExtractedQuiz
from quiz_toolkit.core.schemas.validator import ValidationError
from quiz_toolkit.export import (
    ExportOptions,
    available_formats,
    batch_export,
    export_quiz,
    export_stats,
    export_with_template,
    parse_json_export,
    validate_export_options,
)


class TestExportQuiz:
    """Tests for export_quiz."""

    @pytest.mark.parametrize("fmt,filename,mime", [
        ("json", "quiz-export.json", "application/json"),
        ("csv", "quiz-export.csv", "text/csv"),
        ("txt", "quiz-export.txt", "text/plain"),
        ("html", "quiz-export.html", "text/html"),
        ("markdown", "quiz-export.md", "text/markdown"),
    ])
    def test_export_when_format_given_then_filename_and_mime(self, sample_quiz, fmt, filename, mime):
        """Each format should have its own extension and MIME type."""
        result = export_quiz(sample_quiz, ExportOptions(format=fmt))
        assert result.filename == filename
        assert result.mime_type == mime
        assert result.size == len(result.content.encode("utf-8"))

    def test_export_when_uppercase_format_then_accepted(self, sample_quiz):
        """Format names should be case-insensitive."""
        assert export_quiz(sample_quiz, ExportOptions(format="CSV")).filename == "quiz-export.csv"

    def test_export_when_unsupported_format_then_raises(self, sample_quiz):
        """Unknown formats should be rejected."""
        with pytest.raises(ValueError, match="Unsupported export format: pdf"):
            export_quiz(sample_quiz, ExportOptions(format="pdf"))

    def test_export_when_non_ascii_then_size_in_bytes(self, sample_question):
        """Size should count UTF-8 bytes, not characters."""
        quiz = ExtractedQuiz(title="Café", questions=(sample_question,))
        result = export_quiz(quiz, ExportOptions(format="txt"))
        assert result.size == len(result.content) + 1

    def test_export_when_no_timestamp_then_deterministic(self, sample_quiz):
        """The same quiz should always render to the same bytes."""
        first = export_quiz(sample_quiz).content
        assert export_quiz(sample_quiz).content == first
        assert "exportedAt" not in first


class TestJsonRoundTrip:
    """Tests for parse_json_export against the JSON layout."""

    def test_roundtrip_when_reexported_then_byte_identical(self, sample_quiz):
        """Export, parse and export again should give the same bytes."""
        first = export_quiz(sample_quiz).content
        assert export_quiz(parse_json_export(first)).content == first

    def test_parse_when_full_export_then_equal_quiz(self, sample_quiz):
        """A full export should parse back to the same quiz."""
        assert parse_json_export(export_quiz(sample_quiz).content) == sample_quiz

    def test_parse_when_answers_excluded_then_defaults(self, sample_quiz):
        """Fields left out at export time should get defaults."""
        options = ExportOptions(include_answers=False, include_points=False, include_metadata=False)
        quiz = parse_json_export(export_quiz(sample_quiz, options).content)
        assert quiz.title == ""
        assert quiz.questions[0].correct_answer == ""
        assert quiz.questions[2].points == 1

    @pytest.mark.parametrize("content,message", [
        ("not json", "Invalid JSON export"),
        ('{"metadata": {}}', "no questions list"),
        ('{"questions": [{"text": "x"}]}', "Question 1 is invalid"),
        ('{"questions": ["x"]}', "Question 1 is not an object"),
    ])
    def test_parse_when_malformed_then_validation_error(self, content, message):
        """Malformed exports should raise ValidationError."""
        with pytest.raises(ValidationError, match=message):
            parse_json_export(content)


class TestTemplateExport:
    """Tests for export_with_template."""

    def test_template_when_placeholders_then_substituted(self, sample_quiz):
        """Known placeholders should be replaced; unknown ones left alone."""
        template = "<h1>{{title}}</h1><p>{{subject}} {{questionCount}}</p>{{exportDate}}{{unknown}}"
        result = export_with_template(sample_quiz, template, ExportOptions(filename="geo"))
        assert result.content == "<h1>Geography Review</h1><p>Geography 3</p>{{unknown}}"
        assert result.filename == "geo.html"

    def test_template_when_questions_placeholder_then_escaped_blocks(self, sample_quiz):
        """Question blocks should list options and answers."""
        content = export_with_template(sample_quiz, "{{questions}}").content
        assert content.count('<div class="question">') == 3
        assert "<li><strong>B)</strong> Paris</li>" in content
        assert "<p><strong>Answer:</strong> Pacific</p>" in content

    def test_template_when_content_contains_placeholder_then_not_expanded(self, sample_quiz):
        """Substitution should be a single pass."""
        quiz = ExtractedQuiz(title="{{subject}}", subject="Geography", questions=sample_quiz.questions)
        assert export_with_template(quiz, "{{title}}").content == "{{subject}}"


class TestExportHelpers:
    """Tests for batch_export, export_stats and option checks."""

    def test_batch_export_when_many_then_numbered_filenames(self, sample_quiz):
        """Filenames should be suffixed -1, -2, ..."""
        results = batch_export([sample_quiz, sample_quiz], ExportOptions(format="markdown"))
        assert [r.filename for r in results] == ["quiz-export-1.md", "quiz-export-2.md"]

    def test_stats_when_mixed_quiz_then_counts(self, sample_quiz):
        """Stats should count questions, options and types."""
        stats = export_stats(sample_quiz)
        assert stats["questionCount"] == 3
        assert stats["totalOptions"] == 6
        assert stats["averageOptionsPerQuestion"] == 2
        assert stats["questionTypes"] == {"multiple-choice": 1, "true-false": 1, "short-answer": 1}
        assert stats["estimatedSize"] > 0

    def test_validate_options_when_bad_values_then_errors(self):
        """Bad format and blank filename should both be reported."""
        report = validate_export_options({"format": "pdf", "filename": " "})
        assert report.errors == ("Invalid export format", "Filename cannot be empty")

    def test_validate_options_when_defaults_then_valid(self):
        """Default options should be valid."""
        assert validate_export_options(ExportOptions()).is_valid

    def test_available_formats_when_listed_then_five(self):
        """Every format should be listed with a label."""
        formats = available_formats()
        assert [f["value"] for f in formats] == ["json", "csv", "txt", "html", "markdown"]
