"""
Module: merge.bulk

Purpose:
    Batch orchestration. Extracts every document on a thread pool
    (results consumed in submission order), then merges the successful
    ones in a single-threaded reduction and assembles the
    BulkProcessingResult.

Key Classes:
    - BatchProcessingError: Systemic failure carrying the partial result

Key Functions:
    - process_batch(): Documents + strategy -> BulkProcessingResult

Dependencies:
    - concurrent.futures (std): Per-document parallelism
    - extractor.pipeline: Per-document chain
    - core.schemas: Strict schema check of the merged quiz
    - .engine: Merge reduction

Used By:
    - cli: extract subcommand
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence, Union

from quiz_toolkit.core.models import (
    BulkProcessingResult,
    ExtractedQuiz,
    FileResult,
    MergeStrategy,
)
from quiz_toolkit.core.schemas import validate_quiz_data
from quiz_toolkit.extractor.config import ExtractionConfig
from quiz_toolkit.extractor.ingest import RawDocument, UnsupportedDocumentError
from quiz_toolkit.extractor.pipeline import DocumentExtraction, extract_raw_document
from quiz_toolkit.extractor.timing import TimingLog, timed_phase

from .config import MergeConfig
from .engine import QuestionSource, merge
from .metadata import detect_subject, merged_description, merged_title

logger = logging.getLogger(__name__)

DocumentLike = Union[RawDocument, tuple]


class BatchProcessingError(Exception):
    """Raised when a batch fails as a whole; `result` holds per-file outcomes."""

    def __init__(self, message: str, result: BulkProcessingResult):
        self.result = result
        super().__init__(message)


def _as_document(item: DocumentLike) -> RawDocument:
    if isinstance(item, RawDocument):
        return item
    name, text = item
    return RawDocument.from_text(name, text)


def _process_one(
    document: RawDocument,
    config: ExtractionConfig,
) -> tuple[FileResult, Optional[DocumentExtraction]]:
    """Run one document; failures become a failed FileResult."""
    start = time.perf_counter()
    try:
        extraction = extract_raw_document(document, config=config)
    except UnsupportedDocumentError as e:
        logger.warning(f"Rejected {document.name}: {'; '.join(e.errors)}")
        return FileResult(
            file_name=document.name,
            success=False,
            errors=tuple(e.errors),
            processing_time=time.perf_counter() - start,
        ), None
    except Exception as e:
        logger.error(f"Failed to process {document.name}: {e}")
        return FileResult(
            file_name=document.name,
            success=False,
            errors=(str(e) or type(e).__name__,),
            processing_time=time.perf_counter() - start,
        ), None

    elapsed = time.perf_counter() - start
    count = len(extraction.questions)
    if count == 0:
        return FileResult(
            file_name=document.name,
            success=False,
            errors=("No questions found",),
            processing_time=elapsed,
            detected_format=extraction.detection.detected_format.value,
            confidence=extraction.detection.confidence,
        ), None

    warnings = extraction.extraction.errors + extraction.extraction.warnings
    return FileResult(
        file_name=document.name,
        success=True,
        questions=count,
        warnings=warnings,
        processing_time=elapsed,
        detected_format=extraction.detection.detected_format.value,
        confidence=extraction.detection.confidence,
    ), extraction


def process_batch(
    documents: Sequence[DocumentLike],
    strategy: "MergeStrategy | str" = MergeStrategy.SMART_MERGE,
    *,
    config: Optional[ExtractionConfig] = None,
    merge_config: Optional[MergeConfig] = None,
) -> BulkProcessingResult:
    """
    Extract and merge a batch of documents.

    A single document's failure is recorded in file_results and the
    batch continues.

    Args:
        documents: RawDocument values or (file name, text) pairs
        strategy: Merge strategy name or enum
        config: Extraction settings shared by every document
        merge_config: Similarity threshold and worker count

    Returns:
        BulkProcessingResult

    Raises:
        ValueError: Empty batch or unknown strategy
        BatchProcessingError: No document produced questions
        ValidationError: The merged quiz does not match the quiz schema
    """
    if not documents:
        raise ValueError("No documents to process")
    strategy = MergeStrategy.parse(strategy)
    config = config or ExtractionConfig()
    merge_config = merge_config or MergeConfig()
    docs = [_as_document(d) for d in documents]

    batch_start = time.perf_counter()
    timing = TimingLog()
    logger.info(f"Processing {len(docs)} files with strategy: {strategy.value}")

    outcomes: list[tuple[FileResult, Optional[DocumentExtraction]]] = []
    with timed_phase(timing, "extract_all"):
        if len(docs) > 1:
            with ThreadPoolExecutor(max_workers=min(merge_config.max_workers, len(docs))) as pool:
                future_map = {
                    pool.submit(_process_one, doc, config): doc.name
                    for doc in docs
                }
                for future in future_map:
                    outcomes.append(future.result())
        else:
            outcomes.append(_process_one(docs[0], config))

    extractions = [e for _, e in outcomes if e is not None]
    for extraction in extractions:
        timing.merge(extraction.timing)

    with timed_phase(timing, "merge"):
        merged = merge(
            strategy,
            [QuestionSource(e.name, e.questions) for e in extractions],
            config=merge_config,
        )

    kept_names = [e.name for e in extractions]
    quiz = ExtractedQuiz(
        title=merged_title(strategy, kept_names if kept_names else [d.name for d in docs]),
        description=merged_description(strategy, len(docs), len(merged.questions)),
        subject=detect_subject(merged.questions, merge_config.max_subject_keywords),
        questions=merged.questions,
    )

    file_results = tuple(r for r, _ in outcomes)
    result = BulkProcessingResult(
        total_files=len(docs),
        successful_files=len(extractions),
        failed_files=len(docs) - len(extractions),
        total_questions=sum(len(e.questions) for e in extractions),
        unique_questions=len(merged.questions),
        duplicates_removed=merged.duplicates_removed,
        conflicts=merged.conflicts,
        merge_strategy=strategy,
        merged_quiz=quiz,
        file_results=file_results,
        processing_stats=timing.processing_stats(time.perf_counter() - batch_start, file_count=len(docs)),
    )

    if not extractions:
        logger.error(f"Batch failed: none of {len(docs)} files produced questions")
        raise BatchProcessingError(f"None of the {len(docs)} files could be processed", result)

    # Merged quiz is the persisted interchange shape
    validate_quiz_data(quiz.to_dict(), strict=True)

    logger.info(
        f"Batch done: {result.successful_files}/{result.total_files} files, "
        f"{result.unique_questions} unique questions, {len(result.conflicts)} conflicts"
    )
    return result
