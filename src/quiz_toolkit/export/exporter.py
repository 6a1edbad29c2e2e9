"""
Module: export.exporter

Purpose:
    Export Serializer entry points: fixed-layout export in five formats,
    batch export, {{placeholder}} template export, parsing of the JSON
    layout, statistics and option validation. Pure text transforms; no
    file or network I/O.

Key Functions:
    - export_quiz(): Render one quiz
    - batch_export(): Render several quizzes with numbered filenames
    - export_with_template(): Placeholder substitution
    - parse_json_export(): Inverse of the JSON layout
    - export_stats(): Counts and size estimate
    - validate_export_options(): Non-raising option check
    - available_formats(): Format descriptions for pickers

Used By:
    - cli: --format / --output
"""

from __future__ import annotations

import html
import json
import logging
import re
from typing import Any, Mapping, Optional, Sequence, Union

from quiz_toolkit.core.models import ExtractedQuestion, ExtractedQuiz
from quiz_toolkit.core.schemas.validator import ValidationError, ValidationReport

from .options import ExportFormat, ExportOptions, ExportResult
from .renderers import RENDERERS

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\{\{(title|description|subject|questionCount|exportDate|questions)\}\}")


def _format_of(options: ExportOptions) -> ExportFormat:
    try:
        return ExportFormat(str(options.format).lower())
    except ValueError:
        raise ValueError(f"Unsupported export format: {options.format}") from None


def _result(content: str, filename: str, mime_type: str) -> ExportResult:
    return ExportResult(
        content=content,
        filename=filename,
        mime_type=mime_type,
        size=len(content.encode("utf-8")),
    )


def export_quiz(quiz: ExtractedQuiz, options: Optional[ExportOptions] = None) -> ExportResult:
    """
    Render a quiz in the requested format.

    Raises:
        ValueError: Unsupported format

    Example:
        >>> result = export_quiz(quiz, ExportOptions(format="csv"))
        >>> result.filename, result.mime_type
        ('quiz-export.csv', 'text/csv')
    """
    options = options or ExportOptions()
    fmt = _format_of(options)
    spec = RENDERERS[fmt]
    logger.debug(f"Exporting quiz '{quiz.title}' to {fmt.value}")
    content = spec.render(quiz, options)
    return _result(content, f"{options.filename}.{spec.extension}", spec.mime_type)


def batch_export(
    quizzes: Sequence[ExtractedQuiz],
    options: Optional[ExportOptions] = None,
) -> list[ExportResult]:
    """Export each quiz with filenames suffixed -1, -2, ..."""
    options = options or ExportOptions()
    stem = options.filename or "quiz"
    logger.info(f"Batch exporting {len(quizzes)} quizzes")
    return [
        export_quiz(quiz, options.with_changes(filename=f"{stem}-{i}"))
        for i, quiz in enumerate(quizzes, start=1)
    ]


def _template_question(number: int, question: ExtractedQuestion, options: ExportOptions) -> str:
    e = html.escape
    parts = [
        '<div class="question">',
        f"<h3>Question {number}</h3>",
        f"<p>{e(question.text)}</p>",
    ]
    if question.options:
        parts.append("<ul>")
        for i, option in enumerate(question.options):
            parts.append(f"<li><strong>{chr(ord('A') + i)})</strong> {e(option)}</li>")
        parts.append("</ul>")
    if options.include_answers:
        parts.append(f"<p><strong>Answer:</strong> {e(question.correct_answer)}</p>")
    if options.include_points:
        parts.append(f"<p><strong>Points:</strong> {question.points}</p>")
    parts.append("</div>")
    return "".join(parts)


def export_with_template(
    quiz: ExtractedQuiz,
    template: str,
    options: Optional[ExportOptions] = None,
) -> ExportResult:
    """
    Substitute {{title}}, {{description}}, {{subject}}, {{questionCount}},
    {{exportDate}} and {{questions}} in an HTML template.

    Substitution is a single pass, so placeholder text inside quiz
    content is never expanded. {{exportDate}} is options.exported_at or "".
    """
    options = options or ExportOptions()
    questions_html = "".join(
        _template_question(i, q, options) for i, q in enumerate(quiz.questions, start=1)
    )
    values = {
        "title": quiz.title,
        "description": quiz.description or "",
        "subject": quiz.subject,
        "questionCount": str(len(quiz.questions)),
        "exportDate": options.exported_at or "",
        "questions": questions_html,
    }
    content = _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], template)
    return _result(content, f"{options.filename or 'quiz'}.html", "text/html")


def parse_json_export(content: str) -> ExtractedQuiz:
    """
    Rebuild a quiz from render_json() output.

    Fields excluded at export time get defaults: correctAnswer "",
    points 1, empty metadata.

    Raises:
        ValidationError: Not JSON, or not the export layout
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON export: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
        raise ValidationError("Export has no questions list", path="questions")

    metadata: Mapping[str, Any] = data.get("metadata") or {}
    questions = []
    for i, entry in enumerate(data["questions"]):
        if not isinstance(entry, dict):
            raise ValidationError(f"Question {i + 1} is not an object", path=f"questions[{i}]")
        try:
            questions.append(ExtractedQuestion.from_dict(entry))
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Question {i + 1} is invalid: {e}", path=f"questions[{i}]") from e

    return ExtractedQuiz(
        title=metadata.get("title", ""),
        description=metadata.get("description", ""),
        subject=metadata.get("subject", ""),
        questions=tuple(questions),
    )


def export_stats(quiz: ExtractedQuiz) -> dict:
    """Question count, option totals, type counts and a JSON size estimate."""
    types: dict[str, int] = {}
    total_options = 0
    for question in quiz.questions:
        types[question.type.value] = types.get(question.type.value, 0) + 1
        total_options += len(question.options or ())
    count = len(quiz.questions)
    return {
        "questionCount": count,
        "totalOptions": total_options,
        "averageOptionsPerQuestion": round(total_options / count) if count else 0,
        "questionTypes": types,
        "estimatedSize": len(json.dumps(quiz.to_dict(), ensure_ascii=False)),
    }


def validate_export_options(options: Union[ExportOptions, Mapping[str, Any]]) -> ValidationReport:
    """Check the format name and filename without raising."""
    if isinstance(options, ExportOptions):
        fmt, filename = options.format, options.filename
    else:
        fmt, filename = options.get("format"), options.get("filename")

    errors: list[str] = []
    if fmt is not None and str(fmt).lower() not in {f.value for f in ExportFormat}:
        errors.append("Invalid export format")
    if filename is not None and not str(filename).strip():
        errors.append("Filename cannot be empty")
    return ValidationReport(errors=tuple(errors))


def available_formats() -> list[dict[str, str]]:
    return [
        {"value": fmt.value, "label": spec.label, "description": spec.description}
        for fmt, spec in RENDERERS.items()
    ]
