"""
Module: extractor.extraction

Purpose:
    Question extraction subpackage. Splits normalized text into question
    blocks and pulls out stems, options and correct answers, falling back
    to sentence synthesis when no markers are found.

Key Modules:
    - blocks: Ordered question-boundary patterns
    - options: Option styles, checkmark markers, placeholder padding
    - answers: Answer lines, "X is correct" sentences, answer keys
    - fallback: Sentence chunking
    - extractor: extract_questions() entry point
"""

from .answers import AnswerKey, resolve_answer, split_answer_key
from .blocks import QuestionBlock, Segmentation, segment
from .extractor import (
    SENTENCE_SYNTHESIS,
    STRUCTURED,
    ExtractionOutcome,
    extract_questions,
)
from .fallback import sentence_chunks, split_sentences
from .options import ParsedOptions, pad_options, parse_options

__all__ = [
    "AnswerKey",
    "resolve_answer",
    "split_answer_key",
    "QuestionBlock",
    "Segmentation",
    "segment",
    "SENTENCE_SYNTHESIS",
    "STRUCTURED",
    "ExtractionOutcome",
    "extract_questions",
    "sentence_chunks",
    "split_sentences",
    "ParsedOptions",
    "pad_options",
    "parse_options",
]
