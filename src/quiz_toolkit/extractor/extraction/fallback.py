"""
Sentence synthesis for documents without question markers.

Sentences longer than the minimum are grouped into chunks and every
chunk becomes one open (short-answer) question with no correct answer.
When no sentence is long enough the whole text is a single chunk, so
non-empty input always yields at least one question.
"""

from __future__ import annotations

import re

_SENTENCE_END_RE = re.compile(r"(?<=[.!?])\s+")
_WS_RE = re.compile(r"\s+")


def split_sentences(text: str) -> list[str]:
    """Split on terminal punctuation followed by whitespace."""
    flat = _WS_RE.sub(" ", text).strip()
    if not flat:
        return []
    return [s.strip() for s in _SENTENCE_END_RE.split(flat) if s.strip()]


def sentence_chunks(text: str, *, min_chars: int = 20, per_chunk: int = 3) -> list[str]:
    """
    Group long-enough sentences into chunks of `per_chunk`.

    Example:
        >>> sentence_chunks("Short. " + "A sentence that is long enough. " * 4)
        ['A sentence that is long enough. A sentence that is long enough. A sentence that is long enough.', 'A sentence that is long enough.']
    """
    sentences = [s for s in split_sentences(text) if len(s) > min_chars]
    if not sentences:
        flat = _WS_RE.sub(" ", text).strip()
        return [flat] if flat else []
    return [
        " ".join(sentences[i:i + per_chunk])
        for i in range(0, len(sentences), per_chunk)
    ]


def synthesized_prompt(chunk: str) -> str:
    """Open-style question text for a chunk of source sentences."""
    return f"Explain the following: {chunk}"
