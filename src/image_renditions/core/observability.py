"""Log context, structured logger and job timings."""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .logging_config import setup_logger


@dataclass
class LogContext:
    """Correlation id, operation and metadata attached to a log line."""

    correlation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    operation: str = ""
    component: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def with_operation(self, operation: str) -> "LogContext":
        return LogContext(
            correlation_id=self.correlation_id,
            operation=operation,
            component=self.component,
            metadata=dict(self.metadata),
        )

    def with_metadata(self, **kwargs) -> "LogContext":
        return LogContext(
            correlation_id=self.correlation_id,
            operation=self.operation,
            component=self.component,
            metadata={**self.metadata, **kwargs},
        )


def format_message(
    message: str, context: Optional[LogContext] = None, **kwargs
) -> str:
    """
    Render ``[operation] [correlation_id] message (key=value, ...)``.

    Parts that are empty are left out; keyword arguments win over context
    metadata with the same name.
    """
    prefix = ""
    fields: Dict[str, Any] = dict(kwargs)
    if context is not None:
        prefix = f"[{context.correlation_id}] "
        if context.operation:
            prefix = f"[{context.operation}] {prefix}"
        fields = {**context.metadata, **kwargs}

    text = f"{prefix}{message}"
    if fields:
        text += " (" + ", ".join(f"{k}={v}" for k, v in fields.items()) + ")"
    return text


class StructuredLogger:
    """LoggerProtocol implementation on top of a configured stdlib logger."""

    def __init__(self, name: str, level: Optional[str] = None):
        self._logger = setup_logger(name, level=level)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, message: str, context: Optional[LogContext] = None, **kwargs):
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(format_message(message, context, **kwargs))

    def info(self, message: str, context: Optional[LogContext] = None, **kwargs):
        self._logger.info(format_message(message, context, **kwargs))

    def warning(self, message: str, context: Optional[LogContext] = None, **kwargs):
        self._logger.warning(format_message(message, context, **kwargs))

    def error(self, message: str, context: Optional[LogContext] = None, **kwargs):
        self._logger.error(format_message(message, context, **kwargs))


@dataclass
class JobTiming:
    """Wall-clock timing of one rendition job."""

    operation: str
    start_time: float
    end_time: float
    success: bool
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


class MetricsCollector:
    """Thread-safe collector of job timings, shared by concurrent jobs."""

    def __init__(self):
        self._lock = threading.Lock()
        self._timings: List[JobTiming] = []

    def record_metric(self, timing: JobTiming) -> None:
        with self._lock:
            self._timings.append(timing)

    def get_summary(self, operation: Optional[str] = None) -> Dict[str, Any]:
        """
        Aggregate recorded timings, optionally for a single operation.

        Returns an empty dict when nothing was recorded. ``by_status`` counts
        the ``status`` metadata of each timing (succeeded, skipped, failed).
        """
        with self._lock:
            timings = [t for t in self._timings if not operation or t.operation == operation]

        if not timings:
            return {}

        durations = [t.duration for t in timings]
        successful = sum(1 for t in timings if t.success)
        by_status: Dict[str, int] = {}
        for timing in timings:
            status = timing.metadata.get("status", "unknown")
            by_status[status] = by_status.get(status, 0) + 1

        return {
            "total_operations": len(timings),
            "successful_operations": successful,
            "failed_operations": len(timings) - successful,
            "success_rate": successful / len(timings),
            "avg_duration": sum(durations) / len(durations),
            "max_duration": max(durations),
            "by_status": by_status,
        }
