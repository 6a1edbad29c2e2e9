"""
Module: extractor.detection.templates

Purpose:
    Named layout templates scored by the template-matching strategy.
    A template is three regexes (question, options, answer) plus the
    format it implies and a confidence ceiling. Registries are plain
    tuples passed in by the caller, so custom templates never mutate
    shared state.

Key Classes:
    - FormatTemplate: Template definition (uncompiled patterns)
    - CompiledTemplate: Template with compiled regexes

Key Functions:
    - compile_template(): Compile a template (raises re.error)
    - validate_template(): Non-fatal validation report
    - with_template(): New registry with a template appended

Used By:
    - extractor.detection.strategies: Template-matching strategy
    - extractor.detection.detector: Default registry
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Pattern

from quiz_toolkit.core.schemas.validator import ValidationReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatTemplate:
    """
    A named document layout.

    Attributes:
        id: Stable identifier like "standard-mcq"
        name: Display name
        description: Human readable summary
        question_pattern: Regex for question lines
        option_pattern: Regex for option lines
        answer_pattern: Regex for answer lines ("" for none)
        format: Format implied by a match ("mcq", "true-false", ...)
        confidence: Ceiling for this template's score
        examples: Sample lines in this layout
    """
    id: str
    name: str
    question_pattern: str
    option_pattern: str
    answer_pattern: str = ""
    format: str = "mcq"
    confidence: float = 0.9
    description: str = ""
    examples: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not (0.0 <= self.confidence <= 1.0):
            raise ValueError(f"confidence must be 0-1: {self.confidence}")
        if not isinstance(self.examples, tuple):
            object.__setattr__(self, "examples", tuple(self.examples))


@dataclass(frozen=True)
class CompiledTemplate:
    template: FormatTemplate
    question: Pattern[str]
    option: Pattern[str]
    answer: Optional[Pattern[str]]

    def classify(self, line: str) -> tuple[bool, bool]:
        """Return (matches any pattern, matches the option pattern)."""
        is_option = bool(self.option.match(line))
        if is_option:
            return True, True
        if self.question.match(line):
            return True, False
        if self.answer is not None and self.answer.match(line):
            return True, False
        return False, False


_QUESTION = r"^(?:Q|Question)?\s*(\d+)[.:)]?\s*(.+)$"
_ANSWER = r"^(?:ANSWERS?|ANSWER KEY|Answer):\s*$"

DEFAULT_TEMPLATES: tuple[FormatTemplate, ...] = (
    FormatTemplate(
        id="standard-mcq",
        name="Standard MCQ",
        description="Traditional multiple choice with A, B, C, D options",
        question_pattern=_QUESTION,
        option_pattern=r"^[A-D][.:)]\s*(.+?)(?:\s*[✓*])?$",
        answer_pattern=_ANSWER,
        format="mcq",
        confidence=0.95,
        examples=(
            "Q1. What is the capital of France?",
            "A) London",
            "B) Paris ✓",
            "C) Berlin",
            "D) Madrid",
        ),
    ),
    FormatTemplate(
        id="numbered-options",
        name="Numbered Options",
        description="Questions with numbered options (1, 2, 3, 4)",
        question_pattern=_QUESTION,
        option_pattern=r"^\d+\)\s*(.+?)(?:\s*[✓*])?$",
        answer_pattern=_ANSWER,
        format="mcq",
        confidence=0.90,
        examples=(
            "Q1. What is the capital of France?",
            "1) London",
            "2) Paris ✓",
            "3) Berlin",
            "4) Madrid",
        ),
    ),
    FormatTemplate(
        id="true-false",
        name="True/False",
        description="True or false questions",
        question_pattern=_QUESTION,
        option_pattern=r"^(True|False)(?:\s*[✓*])?$",
        answer_pattern=_ANSWER,
        format="true-false",
        confidence=0.85,
        examples=(
            "Q1. Paris is the capital of France.",
            "True ✓",
            "False",
        ),
    ),
)


def compile_template(template: FormatTemplate) -> CompiledTemplate:
    """
    Compile a template's patterns (case-insensitive).

    Raises:
        re.error: If any pattern is not a valid regex
    """
    return CompiledTemplate(
        template=template,
        question=re.compile(template.question_pattern, re.IGNORECASE),
        option=re.compile(template.option_pattern, re.IGNORECASE),
        answer=re.compile(template.answer_pattern, re.IGNORECASE) if template.answer_pattern else None,
    )


def validate_template(template: FormatTemplate) -> ValidationReport:
    """
    Validate a custom template without raising.

    Checks the name is present, question and option patterns exist,
    and every pattern compiles.
    """
    errors: list[str] = []

    if not template.name or not template.name.strip():
        errors.append("Template name is required")

    if not template.question_pattern or not template.option_pattern:
        errors.append("Question and option patterns are required")

    for label, pattern in (
        ("question", template.question_pattern),
        ("options", template.option_pattern),
        ("answer", template.answer_pattern),
    ):
        if not pattern:
            continue
        try:
            re.compile(pattern)
        except re.error as e:
            errors.append(f"Invalid {label} pattern: {e}")

    return ValidationReport(errors=tuple(errors))


def with_template(
    template: FormatTemplate,
    registry: tuple[FormatTemplate, ...] = DEFAULT_TEMPLATES,
) -> tuple[FormatTemplate, ...]:
    """
    Return a new registry with the template appended.

    Raises:
        ValueError: If the template is invalid or its id is taken
    """
    report = validate_template(template)
    if not report.is_valid:
        raise ValueError(f"Invalid template {template.id!r}: {'; '.join(report.errors)}")
    if any(t.id == template.id for t in registry):
        raise ValueError(f"Template id already registered: {template.id!r}")
    logger.info(f"Added custom template: {template.name}")
    return registry + (template,)
