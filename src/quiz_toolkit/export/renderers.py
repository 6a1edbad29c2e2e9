"""
Module: export.renderers

Purpose:
    One pure renderer per export format. Each takes a quiz and options
    and returns text; include_metadata / include_answers / include_points
    gate the same fields in every format.

Key Functions:
    - render_json(), render_csv(), render_txt(), render_html(),
      render_markdown()
    - RENDERERS: format -> (renderer, extension, MIME type)

Used By:
    - export.exporter
"""

from __future__ import annotations

import html
import json
from dataclasses import dataclass
from typing import Callable

from quiz_toolkit.core.models import ExtractedQuestion, ExtractedQuiz

from .options import ExportFormat, ExportOptions

EXPORT_VERSION = "1.0"


def _letter(index: int) -> str:
    return chr(ord("A") + index)


def _options(question: ExtractedQuestion) -> tuple[str, ...]:
    return question.options or ()


# ─────────────────────────────────────────────────────────────────────────────
# JSON
# ─────────────────────────────────────────────────────────────────────────────

def render_json(quiz: ExtractedQuiz, options: ExportOptions) -> str:
    data: dict = {}

    if options.include_metadata:
        metadata = {
            "title": quiz.title,
            "description": quiz.description,
            "subject": quiz.subject,
            "questionCount": len(quiz.questions),
        }
        if options.exported_at:
            metadata["exportedAt"] = options.exported_at
        metadata["version"] = EXPORT_VERSION
        data["metadata"] = metadata

    questions = []
    for question in quiz.questions:
        entry: dict = {
            "id": question.id,
            "text": question.text,
            "type": question.type.value,
        }
        if _options(question):
            entry["options"] = list(question.options)
        if options.include_answers:
            entry["correctAnswer"] = question.correct_answer
        if options.include_points:
            entry["points"] = question.points
        questions.append(entry)
    data["questions"] = questions

    return json.dumps(data, indent=2, ensure_ascii=False)


# ─────────────────────────────────────────────────────────────────────────────
# CSV
# ─────────────────────────────────────────────────────────────────────────────

def _quoted(value: str) -> str:
    """Double embedded quotes and wrap in quotes."""
    return '"' + value.replace('"', '""') + '"'


def render_csv(quiz: ExtractedQuiz, options: ExportOptions) -> str:
    lines: list[str] = []

    if options.include_metadata:
        lines.append("Quiz Title,Description,Subject,Question Count")
        lines.append(",".join((
            _quoted(quiz.title),
            _quoted(quiz.description or ""),
            _quoted(quiz.subject),
            str(len(quiz.questions)),
        )))
        lines.append("")

    max_options = max((len(_options(q)) for q in quiz.questions), default=0)

    headers = ["Question Number", "Question Text", "Question Type"]
    if options.include_points:
        headers.append("Points")
    headers.extend(f"Option {i}" for i in range(1, max_options + 1))
    if options.include_answers:
        headers.append("Correct Answer")
    lines.append(",".join(headers))

    for number, question in enumerate(quiz.questions, start=1):
        row = [str(number), _quoted(question.text), question.type.value]
        if options.include_points:
            row.append(str(question.points))
        if question.options:
            row.extend(
                _quoted(question.options[i] if i < len(question.options) else "")
                for i in range(max_options)
            )
        else:
            row.extend("" for _ in range(max_options))
        if options.include_answers:
            row.append(_quoted(question.correct_answer))
        lines.append(",".join(row))

    return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Plain text
# ─────────────────────────────────────────────────────────────────────────────

def render_txt(quiz: ExtractedQuiz, options: ExportOptions) -> str:
    lines: list[str] = []

    if options.include_metadata:
        lines.append(f"QUIZ: {quiz.title}")
        if quiz.description:
            lines.append(f"Description: {quiz.description}")
        lines.append(f"Subject: {quiz.subject}")
        lines.append(f"Total Questions: {len(quiz.questions)}")
        if options.exported_at:
            lines.append(f"Exported: {options.exported_at}")
        lines.append("")
        lines.append("=" * 50)
        lines.append("")

    for number, question in enumerate(quiz.questions, start=1):
        lines.append(f"Question {number}:")
        lines.append(question.text)
        lines.append("")

        if _options(question):
            for i, option in enumerate(question.options):
                lines.append(f"{_letter(i)}) {option}")
            lines.append("")

        if options.include_answers:
            lines.append(f"Answer: {question.correct_answer}")
            lines.append("")

        if options.include_points:
            lines.append(f"Points: {question.points}")
            lines.append("")

        lines.append("-" * 30)
        lines.append("")

    return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# HTML
# ─────────────────────────────────────────────────────────────────────────────

_HTML_STYLE = (
    "        body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }",
    "        .question { margin-bottom: 30px; padding: 15px; border: 1px solid #ddd; border-radius: 5px; }",
    "        .question-text { font-weight: bold; margin-bottom: 10px; }",
    "        .options { margin-left: 20px; }",
    "        .option { margin: 5px 0; }",
    "        .answer { color: green; font-weight: bold; margin-top: 10px; }",
    "        .points { color: blue; font-size: 0.9em; }",
    "        .metadata { background-color: #f5f5f5; padding: 15px; border-radius: 5px; margin-bottom: 20px; }",
)


def render_html(quiz: ExtractedQuiz, options: ExportOptions) -> str:
    """Complete standalone HTML document with inline CSS. Text is HTML-escaped."""
    e = html.escape
    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '    <meta charset="UTF-8">',
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"    <title>{e(quiz.title)}</title>",
        "    <style>",
        *_HTML_STYLE,
        "    </style>",
        "</head>",
        "<body>",
    ]

    if options.include_metadata:
        lines.append('    <div class="metadata">')
        lines.append(f"        <h1>{e(quiz.title)}</h1>")
        if quiz.description:
            lines.append(f"        <p><strong>Description:</strong> {e(quiz.description)}</p>")
        lines.append(f"        <p><strong>Subject:</strong> {e(quiz.subject)}</p>")
        lines.append(f"        <p><strong>Total Questions:</strong> {len(quiz.questions)}</p>")
        if options.exported_at:
            lines.append(f"        <p><strong>Exported:</strong> {e(options.exported_at)}</p>")
        lines.append("    </div>")

    for number, question in enumerate(quiz.questions, start=1):
        lines.append('    <div class="question">')
        lines.append(f'        <div class="question-text">Question {number}: {e(question.text)}</div>')

        if _options(question):
            lines.append('        <div class="options">')
            for i, option in enumerate(question.options):
                lines.append(f'            <div class="option">{_letter(i)}) {e(option)}</div>')
            lines.append("        </div>")

        if options.include_answers:
            lines.append(f'        <div class="answer">Answer: {e(question.correct_answer)}</div>')

        if options.include_points:
            lines.append(f'        <div class="points">Points: {question.points}</div>')

        lines.append("    </div>")

    lines.append("</body>")
    lines.append("</html>")
    return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Markdown
# ─────────────────────────────────────────────────────────────────────────────

def render_markdown(quiz: ExtractedQuiz, options: ExportOptions) -> str:
    lines: list[str] = []

    if options.include_metadata:
        lines.append(f"# {quiz.title}")
        lines.append("")
        if quiz.description:
            lines.append(quiz.description)
            lines.append("")
        lines.append(f"**Subject:** {quiz.subject}")
        lines.append(f"**Total Questions:** {len(quiz.questions)}")
        if options.exported_at:
            lines.append(f"**Exported:** {options.exported_at}")
        lines.append("")
        lines.append("---")
        lines.append("")

    for number, question in enumerate(quiz.questions, start=1):
        lines.append(f"## Question {number}")
        lines.append("")
        lines.append(question.text)
        lines.append("")

        if _options(question):
            for i, option in enumerate(question.options):
                lines.append(f"**{_letter(i)})** {option}")
            lines.append("")

        if options.include_answers:
            lines.append(f"**Answer:** {question.correct_answer}")
            lines.append("")

        if options.include_points:
            lines.append(f"**Points:** {question.points}")
            lines.append("")

        lines.append("---")
        lines.append("")

    return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Registry
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FormatSpec:
    render: Callable[[ExtractedQuiz, ExportOptions], str]
    extension: str
    mime_type: str
    label: str
    description: str


RENDERERS: dict[ExportFormat, FormatSpec] = {
    ExportFormat.JSON: FormatSpec(
        render_json, "json", "application/json",
        "JSON", "Structured data format for applications",
    ),
    ExportFormat.CSV: FormatSpec(
        render_csv, "csv", "text/csv",
        "CSV", "Comma-separated values for spreadsheets",
    ),
    ExportFormat.TXT: FormatSpec(
        render_txt, "txt", "text/plain",
        "Plain Text", "Simple text format for reading",
    ),
    ExportFormat.HTML: FormatSpec(
        render_html, "html", "text/html",
        "HTML", "Web page format with styling",
    ),
    ExportFormat.MARKDOWN: FormatSpec(
        render_markdown, "md", "text/markdown",
        "Markdown", "Formatted text for documentation",
    ),
}
