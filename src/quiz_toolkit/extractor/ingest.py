"""
Module: extractor.ingest

Purpose:
    Raw document intake. Validates declared type and size before any
    parsing, and turns accepted documents into text: plain text is
    decoded, PDFs have their text layer read page by page with PyMuPDF.

Key Classes:
    - RawDocument: Immutable (name, bytes, media type)
    - FileValidationResult: Pre-processing validation report
    - UnsupportedDocumentError: Wrong type or over the size limit

Key Functions:
    - validate_document(): Non-raising validation report
    - document_text(): Text for a validated document (raises on rejection)
    - title_from_filename(): "week-3_review.pdf" -> "Week 3 Review"
    - format_file_size(): Human readable byte counts

Dependencies:
    - fitz (PyMuPDF): PDF text layer extraction

Used By:
    - extractor.pipeline
    - merge.bulk
    - cli
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import fitz

from quiz_toolkit.common.text import title_case
from quiz_toolkit.common.thresholds import INGEST_THRESHOLDS, IngestThresholds

logger = logging.getLogger(__name__)

PDF = "pdf"
TEXT = "txt"
UNKNOWN = "unknown"

_MEDIA_TYPES = {
    "application/pdf": PDF,
    "text/plain": TEXT,
}
_EXTENSIONS = {".pdf": PDF, ".txt": TEXT}
_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


class UnsupportedDocumentError(ValueError):
    """Raised when a document is rejected before parsing."""

    def __init__(self, name: str, errors: list[str]):
        self.name = name
        self.errors = list(errors)
        super().__init__(f"{name}: {'; '.join(self.errors)}")


@dataclass(frozen=True)
class RawDocument:
    """
    An uploaded document.

    Attributes:
        name: File name, used for titles and reporting
        data: Raw bytes
        media_type: Declared type ("application/pdf", "text/plain", "pdf",
            "txt"); when empty the file extension decides
    """
    name: str
    data: bytes
    media_type: str = ""

    @classmethod
    def from_text(cls, name: str, text: str) -> RawDocument:
        return cls(name=name, data=text.encode("utf-8"), media_type="text/plain")

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> RawDocument:
        path = Path(path)
        return cls(name=path.name, data=path.read_bytes())

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def format(self) -> str:
        """Resolved format: "pdf", "txt" or "unknown"."""
        declared = self.media_type.lower().split(";")[0].strip()
        if declared in _MEDIA_TYPES:
            return _MEDIA_TYPES[declared]
        if declared in (PDF, TEXT):
            return declared
        return _EXTENSIONS.get(Path(self.name).suffix.lower(), UNKNOWN)


@dataclass(frozen=True)
class FileValidationResult:
    is_valid: bool
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    estimated_questions: int = 0
    file_size: str = "0 Bytes"
    format: str = UNKNOWN

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "warnings": list(self.warnings),
            "errors": list(self.errors),
            "estimatedQuestions": self.estimated_questions,
            "fileSize": self.file_size,
            "format": self.format,
        }


def format_file_size(size: int) -> str:
    """
    Human readable size with at most two decimals.

    Example:
        >>> format_file_size(1536)
        '1.5 KB'
    """
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = f"{size / 1024 ** exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {_SIZE_UNITS[exponent]}"


def validate_document(
    document: RawDocument,
    thresholds: IngestThresholds = INGEST_THRESHOLDS,
) -> FileValidationResult:
    """
    Check size and type without parsing.

    Returns:
        FileValidationResult; estimated_questions is a rough guess
        (one question per 1000 bytes) for valid documents only.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if document.size > thresholds.max_file_bytes:
        limit = format_file_size(thresholds.max_file_bytes)
        errors.append(f"File size exceeds {limit} limit")

    fmt = document.format
    if fmt == UNKNOWN:
        errors.append("Unsupported file format")

    if document.size == 0:
        warnings.append("File is empty")

    estimated = 0
    if not errors:
        estimated = math.ceil(document.size / thresholds.bytes_per_question_estimate)

    return FileValidationResult(
        is_valid=not errors,
        warnings=tuple(warnings),
        errors=tuple(errors),
        estimated_questions=estimated,
        file_size=format_file_size(document.size),
        format=fmt,
    )


def _pdf_text(document: RawDocument) -> str:
    pages: list[str] = []
    with fitz.open(stream=document.data, filetype="pdf") as doc:
        for page in doc:
            pages.append(page.get_text("text"))
    logger.debug(f"Read {len(pages)} pages from {document.name}")
    return "\n".join(pages)


def document_text(
    document: RawDocument,
    thresholds: IngestThresholds = INGEST_THRESHOLDS,
) -> str:
    """
    Text content of a document.

    Raises:
        UnsupportedDocumentError: If validation fails
    """
    report = validate_document(document, thresholds)
    if not report.is_valid:
        raise UnsupportedDocumentError(document.name, list(report.errors))
    if report.format == PDF:
        return _pdf_text(document)
    return document.data.decode("utf-8", errors="replace")


_EXTENSION_RE = re.compile(r"\.(?:pdf|txt)$", re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"[-_]+")


def title_from_filename(name: Optional[str]) -> str:
    """
    Quiz title from a file name.

    Example:
        >>> title_from_filename("week-3_review.pdf")
        'Week 3 Review'
    """
    stem = _EXTENSION_RE.sub("", Path(name or "").name)
    stem = _SEPARATOR_RE.sub(" ", stem).strip()
    return title_case(" ".join(stem.split()))
