"""
Schema Validation Utilities

Validates quizzes in two ways:

- `validate_quiz()` produces a non-fatal ValidationReport
  (errors + warnings) that a UI can show without blocking quiz creation.
- `validate_quiz_data()` checks a serialized quiz dict and raises
  ValidationError on the first violation; strict mode additionally runs
  jsonschema against quiz.schema.json.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema

from quiz_toolkit.core.models.questions import ExtractedQuestion, QuestionType
from quiz_toolkit.core.models.quiz import ExtractedQuiz


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}

# Matches padding produced by option normalization ("Option C", "Option C 2")
PLACEHOLDER_OPTION_RE = re.compile(r"^Option [A-Z](?: \d+)?$")


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


@dataclass(frozen=True)
class ValidationReport:
    """Non-fatal validation outcome: blocking errors and soft warnings."""

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def is_placeholder_option(option: str) -> bool:
    return bool(PLACEHOLDER_OPTION_RE.match(option))


def question_problems(question: ExtractedQuestion, label: str) -> tuple[list[str], list[str]]:
    """
    Collect (errors, warnings) for a single question.

    Args:
        question: Question to check
        label: Prefix used in messages, like "Question 3"
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not question.text.strip():
        errors.append(f"{label} has no text")

    options = question.options or ()
    if question.type is QuestionType.MULTIPLE_CHOICE and len(options) < 2:
        errors.append(f"{label} needs at least 2 options")

    if not question.correct_answer.strip():
        warnings.append(f"{label} has no correct answer")
    elif options and question.correct_answer not in options:
        warnings.append(f"{label} correct answer is not one of its options")

    if any(is_placeholder_option(o) for o in options):
        warnings.append(f"{label} contains placeholder options")

    return errors, warnings


def validate_quiz(quiz: ExtractedQuiz, *, synthesized: bool = False) -> ValidationReport:
    """
    Validate a quiz without raising.

    Args:
        quiz: Quiz to check
        synthesized: True when questions came from the sentence fallback;
            adds a low-confidence warning

    Returns:
        ValidationReport with errors (blocking) and warnings (dismissible)
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not quiz.title.strip():
        errors.append("Quiz title is required")

    if not quiz.questions:
        errors.append("No questions found")

    for index, question in enumerate(quiz.questions, start=1):
        q_errors, q_warnings = question_problems(question, f"Question {index}")
        errors.extend(q_errors)
        warnings.extend(q_warnings)

    if synthesized:
        warnings.append(
            "Questions were synthesized from unstructured text and need review"
        )

    return ValidationReport(errors=tuple(errors), warnings=tuple(warnings))


def validate_quiz_data(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate serialized quiz data.

    Args:
        data: Quiz dictionary (ExtractedQuiz.to_dict() shape)
        strict: If True, use jsonschema; if False, do basic checks only

    Raises:
        ValidationError: If data is invalid
    """
    required = ["title", "description", "subject", "questions"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    questions = data.get("questions")
    if not isinstance(questions, list):
        raise ValidationError(
            "questions must be a list",
            path="questions"
        )

    valid_types = {t.value for t in QuestionType}
    for i, question in enumerate(questions):
        path = f"questions[{i}]"
        if not isinstance(question, dict):
            raise ValidationError(f"{path} must be an object", path=path)
        for key in ("id", "text", "type"):
            if key not in question:
                raise ValidationError(
                    f"{path} missing required field: {key}",
                    path=f"{path}.{key}",
                    errors=[f"Missing field: {key}"]
                )
        if question["type"] not in valid_types:
            raise ValidationError(
                f"Invalid question type: {question['type']!r}",
                path=f"{path}.type"
            )
        options = question.get("options")
        if options is not None and not isinstance(options, list):
            raise ValidationError(
                "options must be a list",
                path=f"{path}.options"
            )

    # Full schema validation in strict mode
    if strict:
        schema = _load_schema("quiz")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            )
