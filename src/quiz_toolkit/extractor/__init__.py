"""
Module: extractor

Purpose:
    Document-to-questions pipeline: text normalization, format detection,
    question extraction, raw document intake and per-document
    orchestration.

Key Modules:
    - normalizer: normalize_text()
    - detection: detect_format() and its strategies
    - extraction: extract_questions()
    - ingest: RawDocument, validate_document(), document_text()
    - pipeline: extract_document(), preview_document()
    - timing: TimingLog, timed_phase()

Used By:
    - merge.bulk
    - cli
"""

from .config import ExtractionConfig
from .detection import DocumentFormat, FormatDetectionResult, auto_correct, detect_format
from .extraction import ExtractionOutcome, extract_questions
from .ingest import (
    FileValidationResult,
    RawDocument,
    UnsupportedDocumentError,
    document_text,
    title_from_filename,
    validate_document,
)
from .normalizer import normalize_text
from .pipeline import (
    DocumentExtraction,
    DocumentPreview,
    extract_document,
    extract_raw_document,
    preview_document,
)
from .timing import TimingLog, timed_phase

__all__ = [
    "ExtractionConfig",
    "DocumentFormat",
    "FormatDetectionResult",
    "auto_correct",
    "detect_format",
    "ExtractionOutcome",
    "extract_questions",
    "FileValidationResult",
    "RawDocument",
    "UnsupportedDocumentError",
    "document_text",
    "title_from_filename",
    "validate_document",
    "normalize_text",
    "DocumentExtraction",
    "DocumentPreview",
    "extract_document",
    "extract_raw_document",
    "preview_document",
    "TimingLog",
    "timed_phase",
]
