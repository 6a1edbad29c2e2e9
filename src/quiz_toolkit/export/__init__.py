"""
Module: export

Purpose:
    Export Serializer package. Renders a finished quiz as JSON, CSV,
    plain text, HTML or Markdown, or through a {{placeholder}} template.

Key Modules:
    - options: ExportOptions, ExportResult, ExportFormat
    - renderers: One renderer per format
    - exporter: export_quiz() and friends
"""

from .exporter import (
    available_formats,
    batch_export,
    export_quiz,
    export_stats,
    export_with_template,
    parse_json_export,
    validate_export_options,
)
from .options import ExportFormat, ExportOptions, ExportResult

__all__ = [
    "available_formats",
    "batch_export",
    "export_quiz",
    "export_stats",
    "export_with_template",
    "parse_json_export",
    "validate_export_options",
    "ExportFormat",
    "ExportOptions",
    "ExportResult",
]
