"""
Module: export.options

Purpose:
    Export settings and result types.

Key Classes:
    - ExportFormat: json / csv / txt / html / markdown
    - ExportOptions: Field gates, filename stem, optional timestamp
    - ExportResult: Rendered content plus filename, MIME type and size

Used By:
    - export.renderers
    - export.exporter
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    TXT = "txt"
    HTML = "html"
    MARKDOWN = "markdown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ExportOptions:
    """
    Export settings.

    Attributes:
        format: Output format name (checked at export time)
        include_metadata: Quiz title/description/subject header
        include_answers: Correct answers
        include_points: Point values
        filename: File name without extension
        exported_at: Timestamp text; when None no timestamp is written,
            so the same quiz always renders to the same bytes
    """
    format: str = ExportFormat.JSON.value
    include_metadata: bool = True
    include_answers: bool = True
    include_points: bool = True
    filename: str = "quiz-export"
    exported_at: Optional[str] = None

    def with_changes(self, **changes) -> ExportOptions:
        return replace(self, **changes)


@dataclass(frozen=True)
class ExportResult:
    content: str
    filename: str
    mime_type: str
    size: int  # UTF-8 bytes

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "filename": self.filename,
            "mimeType": self.mime_type,
            "size": self.size,
        }
