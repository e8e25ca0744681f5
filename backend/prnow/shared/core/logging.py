"""
Logging Configuration with Correlation ID Support

This module provides:
1. A context variable holding the current request's correlation ID
2. A log filter that stamps the correlation ID onto every record
3. setup_logging() to install the formatter on the root and uvicorn loggers
"""
import logging
import uuid
from contextvars import ContextVar
from typing import Optional, Union

# Works across threads and asyncio tasks
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> Optional[str]:
    """Get the current request's correlation ID."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Set the correlation ID for the current request.
    Generates a short `req-xxxxxxxx` id when none is given.

    Returns the correlation ID that was set.
    """
    if not correlation_id:
        correlation_id = f"req-{uuid.uuid4().hex[:8]}"
    correlation_id_var.set(correlation_id)
    return correlation_id


class CorrelationIdFilter(logging.Filter):
    """Adds `correlation_id` to log records so the formatter can print it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "no-request"
        return True


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure root logging with the correlation ID format:
    timestamp | [request id] | logger | level | message
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s | [%(correlation_id)s] | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Avoid duplicate lines when called twice (reload, tests)
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)
    root_logger.addHandler(handler)

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        uvicorn_logger = logging.getLogger(logger_name)
        uvicorn_logger.handlers = []
        uvicorn_logger.addHandler(handler)
        uvicorn_logger.propagate = False
