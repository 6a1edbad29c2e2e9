"""
Module: extractor.extraction.extractor

Purpose:
    Question Extractor. Turns normalized text into ExtractedQuestion
    values: answer-key split, block segmentation, per-block stem/option/
    answer extraction, option normalization, and the sentence-synthesis
    fallback when no boundary pattern qualifies.

Key Classes:
    - ExtractionOutcome: Questions plus non-fatal errors and warnings

Key Functions:
    - extract_questions(): Never raises on text input; non-empty text
      always yields at least one question

Dependencies:
    - .blocks, .options, .answers, .fallback
    - core.schemas.validator: Per-question validation messages

Used By:
    - extractor.pipeline
    - extractor.pipeline.preview_document
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from quiz_toolkit.common.thresholds import EXTRACTION_THRESHOLDS
from quiz_toolkit.core.models import ExtractedQuestion, QuestionType
from quiz_toolkit.core.schemas.validator import question_problems

from ..config import ExtractionConfig
from ..detection.strategies import DocumentFormat
from .answers import (
    AnswerKey,
    resolve_answer,
    split_answer_key,
    take_answer_line,
    take_correct_sentence,
)
from .blocks import QuestionBlock, segment
from .fallback import sentence_chunks, synthesized_prompt
from .options import pad_options, parse_options

logger = logging.getLogger(__name__)

# Extraction methods
STRUCTURED = "structured"
SENTENCE_SYNTHESIS = "sentence-synthesis"
NONE = "none"

_TRUE_FALSE = ("True", "False")


@dataclass(frozen=True)
class ExtractionOutcome:
    """
    Result of extracting one document.

    Attributes:
        questions: Extracted questions in document order
        errors: Validation errors ("Question 2 has no text"); non-fatal
        warnings: Softer findings (defaulted answers, placeholders)
        method: "structured", "sentence-synthesis" or "none"
        pattern: Boundary pattern used ("" for synthesis)
        confidence: Extractor's trust in its output, 0-1
    """
    questions: tuple[ExtractedQuestion, ...] = ()
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    method: str = NONE
    pattern: str = ""
    confidence: float = 0.0

    @property
    def synthesized(self) -> bool:
        return self.method == SENTENCE_SYNTHESIS

    def to_dict(self) -> dict:
        return {
            "questions": [q.to_dict() for q in self.questions],
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "method": self.method,
            "pattern": self.pattern,
            "confidence": self.confidence,
        }


def _hint_value(hint: Union[DocumentFormat, str, None]) -> str:
    if hint is None:
        return DocumentFormat.UNKNOWN.value
    return hint.value if isinstance(hint, DocumentFormat) else str(hint)


def _is_true_false(options: tuple[str, ...]) -> bool:
    return len(options) == 2 and {o.strip().lower() for o in options} == {"true", "false"}


def _build_question(
    block: QuestionBlock,
    ordinal: int,
    key: AnswerKey,
    hint: str,
    config: ExtractionConfig,
    warnings: list[str],
) -> ExtractedQuestion:
    label = f"Question {ordinal}"
    body, answer_value = take_answer_line(block.text)
    body, sentence_letter = take_correct_sentence(body)
    parsed = parse_options(body)
    options = parsed.options

    # Answer precedence: Answer line, marked option, "X is correct", answer key
    raw_answer: Optional[str] = None
    index: Optional[int] = None
    if answer_value is not None:
        raw_answer = answer_value
        index = resolve_answer(answer_value, options)
    if index is None and parsed.marked_index is not None:
        index = parsed.marked_index
    if index is None and sentence_letter is not None and options:
        index = resolve_answer(sentence_letter, options)
    if index is None and raw_answer is None and config.use_answer_key:
        keyed = key.get(ordinal)
        if keyed is not None:
            raw_answer = keyed
            index = resolve_answer(keyed, options)

    if not options and (
        hint == DocumentFormat.TRUE_FALSE.value
        or (raw_answer or "").strip().lower() in ("true", "false")
    ):
        options = _TRUE_FALSE
        if raw_answer is not None:
            index = resolve_answer(raw_answer, options)

    if not options:
        return ExtractedQuestion(
            id=f"{config.id_prefix}q{ordinal}",
            text=parsed.stem,
            type=QuestionType.SHORT_ANSWER,
            options=None,
            correct_answer=(raw_answer or "").strip(),
            points=config.points_per_question,
        )

    if index is None:
        warnings.append(f"{label}: no answer marker found, defaulted to the first option")
        index = 0
    elif not 0 <= index < len(options):
        warnings.append(f"{label}: answer index {index} out of range, defaulted to the first option")
        index = 0
    correct = options[index]

    if _is_true_false(options):
        qtype = QuestionType.TRUE_FALSE
    else:
        qtype = QuestionType.MULTIPLE_CHOICE
        if config.pad_options and len(options) < config.expected_option_count:
            options = pad_options(options, config.expected_option_count)
            warnings.append(f"{label}: padded to {len(options)} options with placeholders")

    return ExtractedQuestion(
        id=f"{config.id_prefix}q{ordinal}",
        text=parsed.stem,
        type=qtype,
        options=options,
        correct_answer=correct,
        points=config.points_per_question,
    )


def _synthesize(text: str, config: ExtractionConfig) -> list[ExtractedQuestion]:
    chunks = sentence_chunks(
        text,
        min_chars=config.min_sentence_chars,
        per_chunk=config.sentences_per_chunk,
    )
    return [
        ExtractedQuestion(
            id=f"{config.id_prefix}q{i}",
            text=synthesized_prompt(chunk),
            type=QuestionType.SHORT_ANSWER,
            options=None,
            correct_answer="",
            points=config.points_per_question,
        )
        for i, chunk in enumerate(chunks, start=1)
    ]


def _validation_errors(questions: list[ExtractedQuestion]) -> list[str]:
    errors: list[str] = []
    for i, question in enumerate(questions, start=1):
        problems, _ = question_problems(question, f"Question {i}")
        errors.extend(problems)
    return errors


def extract_questions(
    text: str,
    format_hint: Union[DocumentFormat, str, None] = None,
    *,
    config: Optional[ExtractionConfig] = None,
) -> ExtractionOutcome:
    """
    Extract questions from normalized text.

    Args:
        text: Normalized document text
        format_hint: Detected format; "mcq" and "mixed" make lettered
            lines options rather than question markers, "true-false"
            gives unmarked statements True/False options
        config: Extraction settings (defaults to ExtractionConfig())

    Returns:
        ExtractionOutcome. Whitespace-only input gives no questions;
        any other input gives at least one.

    Example:
        >>> outcome = extract_questions("1. What is 2+2? A) 3 B) 4 C) 5 D) 6 Answer: B")
        >>> outcome.questions[0].correct_answer
        '4'
    """
    config = config or ExtractionConfig()
    if not text or not text.strip():
        return ExtractionOutcome(errors=("No text to extract questions from",))

    hint = _hint_value(format_hint)
    body, key = split_answer_key(text) if config.use_answer_key else (text, AnswerKey())

    segmentation = segment(
        body,
        choice_hint=hint in (DocumentFormat.MCQ.value, DocumentFormat.MIXED.value),
        min_chars=config.min_block_chars,
    )

    warnings: list[str] = []
    if segmentation is not None:
        questions: list[ExtractedQuestion] = []
        for block in segmentation.blocks:
            question = _build_question(block, len(questions) + 1, key, hint, config, warnings)
            if not question.text and not question.options:
                continue
            questions.append(question)
        if questions:
            confidence = EXTRACTION_THRESHOLDS.structured_confidence
            if key:
                confidence += EXTRACTION_THRESHOLDS.answer_key_bonus
            logger.debug(
                f"Extracted {len(questions)} questions with '{segmentation.pattern}' pattern"
            )
            return ExtractionOutcome(
                questions=tuple(questions),
                errors=tuple(_validation_errors(questions)),
                warnings=tuple(warnings),
                method=STRUCTURED,
                pattern=segmentation.pattern,
                confidence=round(confidence, 4),
            )

    questions = _synthesize(body if body.strip() else text, config)
    logger.info(f"No question markers found; synthesized {len(questions)} questions from sentences")
    warnings.append("No question markers found; questions were synthesized from sentences")
    return ExtractionOutcome(
        questions=tuple(questions),
        errors=tuple(_validation_errors(questions)),
        warnings=tuple(warnings),
        method=SENTENCE_SYNTHESIS,
        confidence=EXTRACTION_THRESHOLDS.fallback_confidence,
    )
