"""
Unit Tests for timing instrumentation
"""

from quiz_toolkit.extractor.timing import TimingLog, timed_phase


class TestTimingLog:
    """Tests for TimingLog."""

    def test_timed_phase_when_document_given_then_document_metric(self):
        """Document phases should be keyed by document."""
        log = TimingLog()
        with timed_phase(log, "extract", document="a.txt"):
            pass
        assert "extract" in log.document_timings["a.txt"]
        assert log.batch_timings == {}

    def test_timed_phase_when_no_document_then_batch_metric(self):
        """Phases without a document should be batch-level."""
        log = TimingLog()
        with timed_phase(log, "merge"):
            pass
        assert log.batch_timings["merge"] >= 0.0

    def test_timed_phase_when_block_raises_then_still_records(self):
        """Failed phases should still be timed."""
        log = TimingLog()
        try:
            with timed_phase(log, "detect", document="bad.txt"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert "detect" in log.document_timings["bad.txt"]

    def test_merge_when_called_then_folds_document_timings(self):
        """merge() should copy another log's document timings."""
        batch = TimingLog()
        worker = TimingLog()
        worker.log_document("a.txt", "extract", 0.5)
        batch.merge(worker)
        assert batch.document_timings == {"a.txt": {"extract": 0.5}}

    def test_phase_averages_when_many_documents_then_mean(self):
        """Averages should be per phase across documents."""
        log = TimingLog()
        log.log_document("a.txt", "extract", 1.0)
        log.log_document("b.txt", "extract", 3.0)
        assert log.get_phase_averages() == {"extract": 2.0}

    def test_processing_stats_when_called_then_per_file_average(self):
        """Processing stats should divide wall time by document count."""
        log = TimingLog()
        log.log_document("a.txt", "extract", 0.1)
        log.log_document("b.txt", "extract", 0.3)
        stats = log.processing_stats(2.0)
        assert stats["totalTime"] == 2.0
        assert stats["averageTimePerFile"] == 1.0

    def test_processing_stats_when_empty_then_zero_average(self):
        """No documents should not divide by zero."""
        assert TimingLog().processing_stats(0.0)["averageTimePerFile"] == 0.0

    def test_processing_stats_when_file_count_given_then_divides_by_it(self):
        """Files without timings should still count toward the average."""
        log = TimingLog()
        log.log_document("a.txt", "extract", 0.1)
        stats = log.processing_stats(3.0, file_count=3)
        assert stats["averageTimePerFile"] == 1.0
