"""
Module: search.replace

Purpose:
    Search/Replace utility over an already-extracted question set. Used
    while reviewing a quiz; not part of the extraction path. Questions are
    immutable, so edits return new question tuples.

Key Functions:
    - search_in_quiz(): Find matches with context, highlighting and line numbers
    - replace_in_quiz(): Replace a term across text, options and answers
    - bulk_edit(): Apply replace/append/prepend/remove/case/trim operations
    - validate_search_term(): Non-raising term check
    - search_suggestions(): Frequent words plus common marker patterns
    - search_stats(): Word counts across question texts

Used By:
    - Review tooling built on the package API
"""

from __future__ import annotations

import html
import logging
import re
from collections import Counter
from typing import Iterator, Optional, Sequence

from quiz_toolkit.core.models import ExtractedQuestion
from quiz_toolkit.core.schemas.validator import ValidationReport

from .models import (
    BulkEditOperation,
    BulkEditOutcome,
    EditKind,
    ReplaceOperation,
    ReplaceOutcome,
    SearchField,
    SearchOptions,
    SearchResult,
)

logger = logging.getLogger(__name__)

MAX_MATCHES_PER_FIELD = 10
CONTEXT_CHARS = 20

SUGGESTION_PATTERNS = ("Q\\d+", "A\\)|B\\)|C\\)|D\\)", "Answer:")

_WORD_RE = re.compile(r"\w+")


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _compile(term: str, options: SearchOptions) -> Optional[re.Pattern]:
    """Compiled pattern, or None for an empty term or an invalid regex."""
    if not term:
        return None
    try:
        return options.pattern(term)
    except re.error as e:
        logger.warning(f"Invalid regex pattern {term!r}: {e}")
        return None


def _field_values(question: ExtractedQuestion, options: SearchOptions) -> Iterator[tuple[SearchField, Optional[int], str]]:
    yield SearchField.TEXT, None, question.text
    if options.search_in_options and question.options:
        for i, option in enumerate(question.options):
            yield SearchField.OPTIONS, i, option
    if options.search_in_correct_answer and question.correct_answer:
        yield SearchField.CORRECT_ANSWER, None, question.correct_answer


def _highlight(text: str, fragment: str, case_sensitive: bool) -> str:
    flags = 0 if case_sensitive else re.IGNORECASE
    parts = re.split(f"({re.escape(fragment)})", text, flags=flags)
    return "".join(
        f'<mark class="search-highlight">{html.escape(part)}</mark>' if i % 2 else html.escape(part)
        for i, part in enumerate(parts)
    )


def _line_number(text: str, position: int) -> int:
    return text.count("\n", 0, position) + 1


def _matches_in(
    text: str,
    pattern: re.Pattern,
    options: SearchOptions,
    question: ExtractedQuestion,
    question_index: int,
    search_field: SearchField,
    option_index: Optional[int],
) -> list[SearchResult]:
    results: list[SearchResult] = []
    for match in pattern.finditer(text):
        if len(results) >= MAX_MATCHES_PER_FIELD:
            break
        found = match.group(0)
        if not found:
            continue
        start = max(0, match.start() - CONTEXT_CHARS)
        end = min(len(text), match.end() + CONTEXT_CHARS)
        results.append(SearchResult(
            question_id=question.id,
            question_index=question_index,
            field=search_field,
            match_index=len(results),
            original_text=found,
            highlighted_text=_highlight(text, found, options.case_sensitive),
            context=f"...{text[start:end]}...",
            line_number=_line_number(text, match.start()),
            option_index=option_index,
        ))
    return results


# ─────────────────────────────────────────────────────────────────────────────
# Search / Replace
# ─────────────────────────────────────────────────────────────────────────────

def search_in_quiz(
    questions: Sequence[ExtractedQuestion],
    term: str,
    options: Optional[SearchOptions] = None,
) -> list[SearchResult]:
    """
    Search question texts, options and correct answers.

    Questions are visited in order and fields in the order text, options,
    correct answer. At most 10 matches are taken per field value and at
    most options.max_results overall. An empty term or an invalid regex
    yields no results.

    Example:
        >>> results = search_in_quiz(questions, "paris")
        >>> results[0].highlighted_text
        'Capital is <mark class="search-highlight">Paris</mark>'
    """
    options = options or SearchOptions()
    pattern = _compile(term, options)
    if pattern is None:
        return []

    results: list[SearchResult] = []
    for index, question in enumerate(questions):
        if len(results) >= options.max_results:
            break
        if options.filters is not None and not options.filters.matches(question):
            continue
        for search_field, option_index, value in _field_values(question, options):
            results.extend(_matches_in(value, pattern, options, question, index, search_field, option_index))

    logger.debug(f"Found {len(results)} matches for {term!r}")
    return results[:options.max_results]


def replace_in_quiz(
    questions: Sequence[ExtractedQuestion],
    term: str,
    replacement: str,
    options: Optional[SearchOptions] = None,
) -> ReplaceOutcome:
    """
    Replace every match of term in the searched fields.

    With use_regex the replacement may reference groups (\\1, \\g<name>);
    otherwise it is inserted literally. Filtered-out questions are
    returned unchanged.

    A regex replacement that cannot be applied (for example a reference
    to a group the pattern does not have) changes nothing.
    """
    options = options or SearchOptions()
    pattern = _compile(term, options)
    if pattern is None:
        return ReplaceOutcome(questions=tuple(questions))

    def substitute(value: str) -> str:
        if options.use_regex:
            return pattern.sub(replacement, value)
        return pattern.sub(lambda _: replacement, value)

    updated: list[ExtractedQuestion] = []
    operations: list[ReplaceOperation] = []
    for question in questions:
        if options.filters is not None and not options.filters.matches(question):
            updated.append(question)
            continue

        changes: dict = {}
        new_options = list(question.options or ())
        for search_field, option_index, value in _field_values(question, options):
            try:
                new_value = substitute(value)
            except (re.error, IndexError) as e:
                logger.warning(f"Invalid replacement {replacement!r}: {e}")
                return ReplaceOutcome(questions=tuple(questions))
            if new_value == value:
                continue
            operations.append(ReplaceOperation(question.id, search_field, value, new_value, option_index))
            if search_field is SearchField.TEXT:
                changes["text"] = new_value
            elif search_field is SearchField.OPTIONS:
                new_options[option_index] = new_value
                changes["options"] = tuple(new_options)
            else:
                changes["correct_answer"] = new_value
        updated.append(question.with_changes(**changes) if changes else question)

    logger.info(f"Applied {len(operations)} replacements of {term!r}")
    return ReplaceOutcome(questions=tuple(updated), operations=tuple(operations))


# ─────────────────────────────────────────────────────────────────────────────
# Bulk Edit
# ─────────────────────────────────────────────────────────────────────────────

def _apply_edit(value: str, operation: BulkEditOperation) -> str:
    kind = operation.kind
    if kind is EditKind.REPLACE:
        if operation.compiled is not None and operation.replace_text:
            return operation.compiled.sub(lambda _: operation.replace_text, value)
    elif kind is EditKind.APPEND:
        if operation.replace_text:
            return value + operation.replace_text
    elif kind is EditKind.PREPEND:
        if operation.replace_text:
            return operation.replace_text + value
    elif kind is EditKind.REMOVE:
        if operation.compiled is not None:
            return operation.compiled.sub("", value)
    elif kind is EditKind.CAPITALIZE:
        return value[:1].upper() + value[1:].lower()
    elif kind is EditKind.LOWERCASE:
        return value.lower()
    elif kind is EditKind.TRIM:
        return value.strip()
    return value


def _edit_question(question: ExtractedQuestion, operation: BulkEditOperation) -> tuple[ExtractedQuestion, int]:
    changes: dict = {}
    applied = 0

    if operation.target.covers(SearchField.TEXT) and question.text:
        new_text = _apply_edit(question.text, operation)
        if new_text != question.text:
            changes["text"] = new_text
            applied += 1

    if operation.target.covers(SearchField.OPTIONS) and question.options:
        new_options = []
        for option in question.options:
            new_option = _apply_edit(option, operation) if option else option
            if new_option != option:
                applied += 1
            new_options.append(new_option)
        if tuple(new_options) != question.options:
            changes["options"] = tuple(new_options)

    if operation.target.covers(SearchField.CORRECT_ANSWER) and question.correct_answer:
        new_answer = _apply_edit(question.correct_answer, operation)
        if new_answer != question.correct_answer:
            changes["correct_answer"] = new_answer
            applied += 1

    return (question.with_changes(**changes) if changes else question), applied


def bulk_edit(
    questions: Sequence[ExtractedQuestion],
    operations: Sequence[BulkEditOperation],
) -> BulkEditOutcome:
    """
    Apply operations in order to every question.

    Each operation sees the output of the previous one. The applied
    count is the number of field values that changed.

    Example:
        >>> outcome = bulk_edit(questions, [BulkEditOperation(EditKind.TRIM)])
    """
    current = list(questions)
    applied = 0
    for operation in operations:
        for i, question in enumerate(current):
            current[i], count = _edit_question(question, operation)
            applied += count

    logger.info(f"Applied {applied} edits from {len(operations)} bulk operations")
    return BulkEditOutcome(questions=tuple(current), applied_operations=applied)


# ─────────────────────────────────────────────────────────────────────────────
# Term Validation and Statistics
# ─────────────────────────────────────────────────────────────────────────────

def validate_search_term(term: str, use_regex: bool = False) -> ValidationReport:
    if not term or not term.strip():
        return ValidationReport(errors=("Search term cannot be empty",))
    if use_regex:
        try:
            re.compile(term)
        except re.error:
            return ValidationReport(errors=("Invalid regex pattern",))
    return ValidationReport()


def _word_counts(questions: Sequence[ExtractedQuestion], min_length: int) -> Counter:
    counts: Counter = Counter()
    for question in questions:
        counts.update(w for w in _WORD_RE.findall(question.text.lower()) if len(w) >= min_length)
    return counts


def search_suggestions(questions: Sequence[ExtractedQuestion], limit: int = 10) -> list[str]:
    """Most frequent words of four or more letters, then common marker patterns."""
    words = [word for word, _ in _word_counts(questions, 4).most_common(limit)]
    return list(dict.fromkeys([*words, *SUGGESTION_PATTERNS]))


def search_stats(questions: Sequence[ExtractedQuestion], limit: int = 20) -> dict:
    """Counts of words of three or more letters in question texts."""
    counts = _word_counts(questions, 3)
    total = sum(counts.values())
    return {
        "totalQuestions": len(questions),
        "totalWords": total,
        "averageWordsPerQuestion": round(total / len(questions)) if questions else 0,
        "commonWords": [{"word": w, "count": c} for w, c in counts.most_common(limit)],
    }
