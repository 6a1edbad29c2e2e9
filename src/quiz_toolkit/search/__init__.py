"""
Module: search

Purpose:
    Search, replace and bulk edits over an extracted question set.

Key Modules:
    - models: SearchOptions, SearchFilters, SearchResult, BulkEditOperation
    - replace: search_in_quiz(), replace_in_quiz(), bulk_edit() and helpers
"""

from .models import (
    BulkEditOperation,
    BulkEditOutcome,
    EditKind,
    EditTarget,
    ReplaceOperation,
    ReplaceOutcome,
    SearchField,
    SearchFilters,
    SearchOptions,
    SearchResult,
)
from .replace import (
    bulk_edit,
    replace_in_quiz,
    search_in_quiz,
    search_stats,
    search_suggestions,
    validate_search_term,
)

__all__ = [
    "BulkEditOperation",
    "BulkEditOutcome",
    "EditKind",
    "EditTarget",
    "ReplaceOperation",
    "ReplaceOutcome",
    "SearchField",
    "SearchFilters",
    "SearchOptions",
    "SearchResult",
    "bulk_edit",
    "replace_in_quiz",
    "search_in_quiz",
    "search_stats",
    "search_suggestions",
    "validate_search_term",
]
