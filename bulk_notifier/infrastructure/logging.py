"""
Logging configuration for the notifier.

Centralized structlog setup with:
- Structured JSON output
- Batch context merged from contextvars
- Timing helper for provider attempts
- Credential-safe value masking
"""

import logging
import sys
import time

import structlog


def configure_logging(service_name: str, level: int = logging.INFO) -> None:
    """
    Configure structured logging for the process.

    Args:
        service_name: Name of the service for log context
        level: stdlib log level
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_service_name(service_name),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def _add_service_name(service_name: str):
    """Processor to add service name to all logs."""

    def processor(logger, method_name, event_dict):
        event_dict["service"] = service_name
        return event_dict

    return processor


class Timer:
    """
    Context manager for timing operations.

    Usage:
        with Timer() as t:
            await transport.send(...)
        logger.info("Attempt finished", duration_ms=t.duration_ms)
    """

    def __init__(self):
        self._start: float = 0
        self._end: float = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self._end = time.perf_counter()

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds, rounded to 2 decimal places."""
        return round((self._end - self._start) * 1000, 2)


def sanitize_for_logging(value: str, visible_chars: int = 3) -> str:
    """Mask all but the first few characters of a sensitive value."""
    if not value:
        return ""
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "..."
