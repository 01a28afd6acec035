"""
Logging configuration for the Lambda handlers.

Centralized logging setup with:
- Structured JSON output
- Request ID tracking (from the Lambda context)
- Performance timing helpers
"""

import logging
import sys
import time
from contextvars import ContextVar

import structlog

# Context variable for invocation correlation
request_id: ContextVar[str] = ContextVar("request_id", default="")

_configured = False


def configure_logging(service_name: str) -> None:
    """
    Configure structured logging for a service.

    Safe to call from every handler module; only the first call takes effect.

    Args:
        service_name: Name of the service for log context
    """
    global _configured
    if _configured:
        return

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.INFO,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_service_name(service_name),
            _add_request_id,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(default=str),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    _configured = True


def _add_service_name(service_name: str):
    """Processor to add service name to all logs."""

    def processor(logger, method_name, event_dict):
        event_dict["service"] = service_name
        return event_dict

    return processor


def _add_request_id(logger, method_name, event_dict):
    """Processor to add the invocation request ID if present."""
    rid = request_id.get()
    if rid:
        event_dict["request_id"] = rid
    return event_dict


def set_request_id(rid: str) -> None:
    """Set request ID for current context (e.g., from the Lambda context)."""
    request_id.set(rid)


def get_request_id() -> str:
    """Get current request ID."""
    return request_id.get()


class Timer:
    """
    Context manager for timing operations.

    Usage:
        with Timer() as t:
            await expensive_operation()
        logger.info("Operation completed", duration_ms=t.duration_ms)
    """

    def __init__(self):
        self._start: float = 0
        self._end: float | None = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *args) -> None:
        self._end = time.perf_counter()

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds, rounded to 2 decimal places.

        Reads the elapsed time so far while the block is still running.
        """
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000, 2)

