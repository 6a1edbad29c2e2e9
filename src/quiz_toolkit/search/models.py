"""
Module: search.models

Purpose:
    Value types for searching and editing an extracted question set:
    search settings and filters, match records, replacement records and
    bulk edit operations.

Key Classes:
    - SearchField: text / options / correctAnswer
    - SearchFilters: Question type, has-options and text-length filters
    - SearchOptions: Matching mode, fields searched, result cap
    - SearchResult: One match with context and highlighting
    - ReplaceOperation: One field rewrite
    - EditKind / EditTarget / BulkEditOperation: Bulk edit instructions

Used By:
    - search.replace
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from quiz_toolkit.core.models import ExtractedQuestion, QuestionType


class SearchField(str, Enum):
    TEXT = "text"
    OPTIONS = "options"
    CORRECT_ANSWER = "correctAnswer"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SearchFilters:
    """
    Restricts which questions are searched or edited.

    Attributes:
        question_type: Only questions of this type
        has_options: True for questions with options, False for open ones
        min_length: Minimum question text length in characters
        max_length: Maximum question text length in characters
    """
    question_type: Optional[QuestionType] = None
    has_options: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None

    def __post_init__(self) -> None:
        if self.question_type is not None and not isinstance(self.question_type, QuestionType):
            object.__setattr__(self, "question_type", QuestionType(self.question_type))
        if self.min_length is not None and self.max_length is not None and self.min_length > self.max_length:
            raise ValueError(f"min_length {self.min_length} exceeds max_length {self.max_length}")

    def matches(self, question: ExtractedQuestion) -> bool:
        if self.question_type is not None and question.type is not self.question_type:
            return False
        if self.has_options is not None and self.has_options != question.has_options:
            return False
        length = len(question.text)
        if self.min_length is not None and length < self.min_length:
            return False
        if self.max_length is not None and length > self.max_length:
            return False
        return True


@dataclass(frozen=True)
class SearchOptions:
    """
    Search and replace settings.

    Attributes:
        case_sensitive: Match case exactly
        use_regex: Treat the term as a regular expression
        whole_word: Match whole words only (ignored with use_regex)
        search_in_options: Include option texts
        search_in_correct_answer: Include correct answers
        max_results: Upper bound on returned matches
        filters: Optional question filters
    """
    case_sensitive: bool = False
    use_regex: bool = False
    whole_word: bool = False
    search_in_options: bool = True
    search_in_correct_answer: bool = True
    max_results: int = 100
    filters: Optional[SearchFilters] = None

    def __post_init__(self) -> None:
        if self.max_results < 1:
            raise ValueError(f"max_results must be >= 1: {self.max_results}")

    def with_changes(self, **changes) -> SearchOptions:
        return replace(self, **changes)

    def pattern(self, term: str) -> re.Pattern:
        """
        Compile the search term under these settings.

        Raises:
            re.error: use_regex is set and the term is not a valid pattern
        """
        flags = 0 if self.case_sensitive else re.IGNORECASE
        if self.use_regex:
            return re.compile(term, flags)
        escaped = re.escape(term)
        if self.whole_word:
            escaped = rf"\b{escaped}\b"
        return re.compile(escaped, flags)


@dataclass(frozen=True)
class SearchResult:
    """
    One match.

    Attributes:
        question_id: Id of the matched question
        question_index: Position of the question in the searched list
        field: Field the match was found in
        match_index: Ordinal of the match within that field value
        original_text: The matched text
        highlighted_text: Whole field value, HTML-escaped, with every
            occurrence of the match wrapped in <mark class="search-highlight">
        context: Up to 20 characters either side of the match, wrapped in "..."
        line_number: 1-based line of the match within the field value
        option_index: Option position when field is options
    """
    question_id: str
    question_index: int
    field: SearchField
    match_index: int
    original_text: str
    highlighted_text: str
    context: str
    line_number: int
    option_index: Optional[int] = None

    def to_dict(self) -> dict:
        d = {
            "questionId": self.question_id,
            "questionIndex": self.question_index,
            "field": self.field.value,
            "matchIndex": self.match_index,
            "originalText": self.original_text,
            "highlightedText": self.highlighted_text,
            "context": self.context,
            "lineNumber": self.line_number,
        }
        if self.option_index is not None:
            d["optionIndex"] = self.option_index
        return d


@dataclass(frozen=True)
class ReplaceOperation:
    question_id: str
    field: SearchField
    original_text: str
    new_text: str
    option_index: Optional[int] = None

    def to_dict(self) -> dict:
        d = {
            "questionId": self.question_id,
            "field": self.field.value,
            "originalText": self.original_text,
            "newText": self.new_text,
        }
        if self.option_index is not None:
            d["optionIndex"] = self.option_index
        return d


@dataclass(frozen=True)
class ReplaceOutcome:
    questions: tuple[ExtractedQuestion, ...]
    operations: tuple[ReplaceOperation, ...] = ()


class EditKind(str, Enum):
    REPLACE = "replace"
    APPEND = "append"
    PREPEND = "prepend"
    REMOVE = "remove"
    CAPITALIZE = "capitalize"
    LOWERCASE = "lowercase"
    TRIM = "trim"

    def __str__(self) -> str:
        return self.value


class EditTarget(str, Enum):
    TEXT = "text"
    OPTIONS = "options"
    CORRECT_ANSWER = "correctAnswer"
    ALL = "all"

    def __str__(self) -> str:
        return self.value

    def covers(self, search_field: SearchField) -> bool:
        return self is EditTarget.ALL or self.value == search_field.value


@dataclass(frozen=True)
class BulkEditOperation:
    """
    One bulk edit instruction.

    Attributes:
        kind: What to do to each targeted value
        target: Which fields to edit
        search_pattern: Case-insensitive regex for replace and remove
        replace_text: Replacement for replace, suffix for append,
            prefix for prepend

    An operation missing the text it needs (an empty pattern for remove,
    an empty replace_text for append) leaves values unchanged.

    Raises:
        ValueError: Unknown kind or target, or search_pattern does not compile
    """
    kind: EditKind
    target: EditTarget = EditTarget.ALL
    search_pattern: str = ""
    replace_text: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", EditKind(self.kind))
        object.__setattr__(self, "target", EditTarget(self.target))
        if self.search_pattern:
            try:
                re.compile(self.search_pattern)
            except re.error as e:
                raise ValueError(f"Invalid search pattern {self.search_pattern!r}: {e}") from e

    @property
    def compiled(self) -> Optional[re.Pattern]:
        if not self.search_pattern:
            return None
        return re.compile(self.search_pattern, re.IGNORECASE)


@dataclass(frozen=True)
class BulkEditOutcome:
    questions: tuple[ExtractedQuestion, ...]
    applied_operations: int = 0
