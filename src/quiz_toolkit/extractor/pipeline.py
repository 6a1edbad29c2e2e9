"""
Module: extractor.pipeline

Purpose:
    Per-document orchestration: normalize -> detect -> extract -> analyze
    -> validate. Each call owns all of its data, so documents can be
    processed on separate threads without locking.

Key Classes:
    - DocumentExtraction: Everything produced for one document
    - DocumentPreview: Quick preview for interactive use

Key Functions:
    - extract_document(): Full chain for one (name, text) pair
    - extract_raw_document(): Same, starting from a RawDocument
    - preview_document(): Detection plus the first few questions

Dependencies:
    - extractor.normalizer, extractor.detection, extractor.extraction
    - analysis.quality: Quality annotation
    - core.schemas.validator: Validation report

Used By:
    - merge.bulk: One call per file on worker threads
    - cli: detect / extract / analyze subcommands
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from quiz_toolkit.analysis.quality import analyze_quiz
from quiz_toolkit.common.thresholds import EXTRACTION_THRESHOLDS
from quiz_toolkit.core.models import DEFAULT_SUBJECT, ExtractedQuestion, ExtractedQuiz, QuizAnalysis
from quiz_toolkit.core.schemas.validator import ValidationReport, validate_quiz

from .config import ExtractionConfig
from .detection import DEFAULT_TEMPLATES, FormatDetectionResult, FormatTemplate, detect_format
from .extraction import ExtractionOutcome, extract_questions
from .ingest import RawDocument, document_text, title_from_filename
from .normalizer import normalize_text
from .timing import TimingLog, timed_phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentExtraction:
    """
    Result of running one document through the pipeline.

    Attributes:
        name: Source file name
        quiz: Extracted quiz (title from the file name)
        detection: Format detection result
        extraction: Extractor outcome (questions, errors, warnings)
        analysis: Quality analysis of the extracted questions
        validation: Non-fatal validation report for the quiz
        timing: Phase timings for this document
    """
    name: str
    quiz: ExtractedQuiz
    detection: FormatDetectionResult
    extraction: ExtractionOutcome
    analysis: QuizAnalysis
    validation: ValidationReport
    timing: TimingLog = field(default_factory=TimingLog)

    @property
    def questions(self) -> tuple[ExtractedQuestion, ...]:
        return self.quiz.questions

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "quiz": self.quiz.to_dict(),
            "detection": self.detection.to_dict(),
            "extraction": {
                "errors": list(self.extraction.errors),
                "warnings": list(self.extraction.warnings),
                "method": self.extraction.method,
                "pattern": self.extraction.pattern,
                "confidence": self.extraction.confidence,
            },
            "analysis": self.analysis.to_dict(),
            "validation": self.validation.to_dict(),
        }


def extract_document(
    name: str,
    text: str,
    *,
    config: Optional[ExtractionConfig] = None,
    templates: Sequence[FormatTemplate] = DEFAULT_TEMPLATES,
) -> DocumentExtraction:
    """
    Run the full chain on one document's text.

    Args:
        name: File name (title source and timing key)
        text: Raw document text
        config: Extraction settings
        templates: Template registry for detection

    Returns:
        DocumentExtraction. Never raises for text input; empty text gives
        an empty quiz with validation errors.
    """
    config = config or ExtractionConfig()
    timing = TimingLog()

    with timed_phase(timing, "normalize", document=name):
        normalized = normalize_text(text or "")

    with timed_phase(timing, "detect", document=name):
        detection = detect_format(normalized, raw_text=text or "", templates=templates)

    with timed_phase(timing, "extract", document=name):
        outcome = extract_questions(normalized, detection.detected_format, config=config)

    quiz = ExtractedQuiz(
        title=title_from_filename(name),
        description=f"Quiz extracted from {name}",
        subject=DEFAULT_SUBJECT,
        questions=outcome.questions,
    )

    with timed_phase(timing, "analyze", document=name):
        analysis = analyze_quiz(quiz.questions)

    validation = validate_quiz(quiz, synthesized=outcome.synthesized)

    logger.info(
        f"{name}: {len(quiz.questions)} questions "
        f"({detection.detected_format.value}, {outcome.method})"
    )

    return DocumentExtraction(
        name=name,
        quiz=quiz,
        detection=detection,
        extraction=outcome,
        analysis=analysis,
        validation=validation,
        timing=timing,
    )


def extract_raw_document(
    document: RawDocument,
    *,
    config: Optional[ExtractionConfig] = None,
    templates: Sequence[FormatTemplate] = DEFAULT_TEMPLATES,
) -> DocumentExtraction:
    """
    Validate, read and extract a raw document.

    Raises:
        UnsupportedDocumentError: Wrong type or over the size limit
    """
    text = document_text(document)
    return extract_document(document.name, text, config=config, templates=templates)


@dataclass(frozen=True)
class PreviewQuestion:
    text: str
    options: tuple[str, ...] = ()
    correct_answer: str = ""
    confidence: float = 0.0

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class DocumentPreview:
    detected_format: str
    confidence: float
    preview_questions: tuple[PreviewQuestion, ...] = ()
    issues: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "detectedFormat": self.detected_format,
            "confidence": self.confidence,
            "previewQuestions": [q.to_dict() for q in self.preview_questions],
            "issues": list(self.issues),
            "suggestions": list(self.suggestions),
        }


def preview_document(
    text: str,
    *,
    limit: int = EXTRACTION_THRESHOLDS.preview_question_limit,
    templates: Sequence[FormatTemplate] = DEFAULT_TEMPLATES,
) -> DocumentPreview:
    """
    Detected format plus the first `limit` questions, options unpadded.

    Intended for live feedback while a document is being edited.
    """
    normalized = normalize_text(text or "")
    detection = detect_format(normalized, raw_text=text or "", templates=templates)
    outcome = extract_questions(
        normalized,
        detection.detected_format,
        config=ExtractionConfig(pad_options=False),
    )
    questions = tuple(
        PreviewQuestion(
            text=q.text,
            options=q.options or (),
            correct_answer=q.correct_answer,
            confidence=outcome.confidence,
        )
        for q in outcome.questions[:limit]
    )
    return DocumentPreview(
        detected_format=detection.detected_format.value,
        confidence=detection.confidence,
        preview_questions=questions,
        issues=detection.issues,
        suggestions=detection.suggestions,
    )
