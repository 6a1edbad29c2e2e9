"""
Module: extractor.timing

Purpose:
    Timing instrumentation for the extraction pipeline. Records per-phase
    durations for each document (normalize, detect, extract, analyze) and
    batch-level phases (merge), and derives the processing statistics
    reported on a BulkProcessingResult.

Key Classes:
    - TimingLog: Collects batch and document phase timings

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - extractor.pipeline: Per-document phases
    - merge.bulk: Batch totals and processing stats
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional


@dataclass
class TimingLog:
    """
    Timing metrics for document processing.

    A TimingLog is owned by one call. Per-document logs built on worker
    threads are folded into the batch log with merge() after the workers
    finish.

    Attributes:
        batch_timings: Dict of phase_name -> duration_seconds
        document_timings: Dict of document_name -> {phase_name -> duration_seconds}

    Example:
        >>> log = TimingLog()
        >>> log.log_batch("merge", 0.012)
        >>> log.log_document("week1.txt", "extract", 0.004)
        >>> log.get_phase_averages()
        {'extract': 0.004}
    """
    batch_timings: Dict[str, float] = field(default_factory=dict)
    document_timings: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def log_batch(self, phase: str, duration: float) -> None:
        """Log a batch-level timing metric."""
        self.batch_timings[phase] = duration

    def log_document(self, document: str, phase: str, duration: float) -> None:
        """Log a document-level timing metric."""
        if document not in self.document_timings:
            self.document_timings[document] = {}
        self.document_timings[document][phase] = duration

    def merge(self, other: TimingLog) -> None:
        """Fold another log's document timings into this one."""
        for document, phases in other.document_timings.items():
            for phase, duration in phases.items():
                self.log_document(document, phase, duration)

    def get_phase_averages(self) -> Dict[str, float]:
        """Calculate average time per phase across all documents."""
        if not self.document_timings:
            return {}

        phase_totals: Dict[str, float] = {}
        phase_counts: Dict[str, int] = {}

        for phases in self.document_timings.values():
            for phase, duration in phases.items():
                phase_totals[phase] = phase_totals.get(phase, 0.0) + duration
                phase_counts[phase] = phase_counts.get(phase, 0) + 1

        return {
            phase: phase_totals[phase] / phase_counts[phase]
            for phase in phase_totals
        }

    def processing_stats(self, total_time: float, file_count: Optional[int] = None) -> Dict[str, Any]:
        """
        Batch statistics for BulkProcessingResult.processing_stats.

        Args:
            total_time: Wall-clock seconds for the whole batch
            file_count: Files submitted, including rejected ones; defaults
                to the number of documents with timings
        """
        count = len(self.document_timings) if file_count is None else file_count
        return {
            "totalTime": round(total_time, 6),
            "averageTimePerFile": round(total_time / count, 6) if count else 0.0,
            "phaseAverages": {k: round(v, 6) for k, v in self.get_phase_averages().items()},
            "batchTimings": {k: round(v, 6) for k, v in self.batch_timings.items()},
        }


@contextmanager
def timed_phase(
    log: TimingLog,
    phase: str,
    document: Optional[str] = None,
) -> Generator[None, None, None]:
    """
    Context manager for timing a code phase.

    Args:
        log: TimingLog instance to record metrics
        phase: Name of the phase being timed
        document: If provided, records as document-level metric;
                  otherwise records as batch-level metric

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, "detect", document="week1.txt"):
        ...     result = detect_format(text)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if document:
            log.log_document(document, phase, elapsed)
        else:
            log.log_batch(phase, elapsed)
