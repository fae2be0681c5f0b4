"""Tests for log formatting and job timings."""

import threading
from unittest.mock import patch

from image_renditions.core.observability import (
    JobTiming,
    LogContext,
    MetricsCollector,
    StructuredLogger,
    format_message,
)


class TestFormatMessage:
    """Tests for format_message."""

    def test_plain_message(self):
        assert format_message("hello") == "hello"

    def test_kwargs_without_context(self):
        assert format_message("hello", size="thumb") == "hello (size=thumb)"

    def test_context_prefix_and_metadata(self):
        context = LogContext(correlation_id="cid", operation="fetch").with_metadata(size="thumb")

        assert format_message("hello", context, state="fetching") == (
            "[fetch] [cid] hello (size=thumb, state=fetching)"
        )

    def test_kwargs_override_metadata(self):
        context = LogContext(correlation_id="cid").with_metadata(size="thumb")

        assert format_message("hi", context, size="large") == "[cid] hi (size=large)"

    def test_with_metadata_leaves_original_untouched(self):
        context = LogContext(correlation_id="cid").with_metadata(size="thumb")
        context.with_metadata(size="large").with_operation("store")

        assert context.metadata == {"size": "thumb"}
        assert context.operation == ""


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_error_is_formatted(self):
        logger = StructuredLogger("test-structured-logger", level="INFO")
        context = LogContext(correlation_id="cid", operation="store")

        with patch.object(logger.logger, "error") as mock_error:
            logger.error("failed", context, error_kind="StoreError")

        mock_error.assert_called_once_with("[store] [cid] failed (error_kind=StoreError)")

    def test_debug_skipped_below_level(self):
        logger = StructuredLogger("test-structured-logger-debug", level="INFO")

        with patch.object(logger.logger, "debug") as mock_debug:
            logger.debug("quiet")

        mock_debug.assert_not_called()


class TestMetricsCollector:
    """Tests for MetricsCollector."""

    def test_empty_summary(self):
        assert MetricsCollector().get_summary() == {}

    def test_summary_counts_statuses(self):
        collector = MetricsCollector()
        collector.record_metric(
            JobTiming("rendition_job", 0.0, 1.0, True, metadata={"status": "succeeded"})
        )
        collector.record_metric(
            JobTiming("rendition_job", 0.0, 3.0, False, "boom", metadata={"status": "failed"})
        )
        collector.record_metric(JobTiming("other", 0.0, 9.0, True))

        summary = collector.get_summary("rendition_job")

        assert summary["total_operations"] == 2
        assert summary["failed_operations"] == 1
        assert summary["success_rate"] == 0.5
        assert summary["avg_duration"] == 2.0
        assert summary["max_duration"] == 3.0
        assert summary["by_status"] == {"succeeded": 1, "failed": 1}
        assert collector.get_summary()["by_status"]["unknown"] == 1

    def test_concurrent_recording(self):
        collector = MetricsCollector()

        def record():
            for _ in range(100):
                collector.record_metric(JobTiming("rendition_job", 0.0, 0.1, True))

        threads = [threading.Thread(target=record) for _ in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert collector.get_summary()["total_operations"] == 600
