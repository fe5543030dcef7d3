"""Structured JSON logging with run and trace correlation."""

import json
import logging
import sys
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from nlu_crossval.observability.tracing import get_current_span_id, get_current_trace_id

# Context variable for the current cross-validation run
_current_run_id: ContextVar[str | None] = ContextVar("current_run_id", default=None)


def get_current_run_id() -> str | None:
    """
    Get the current run ID from context.

    Returns:
        The run ID, or None outside of a run.
    """
    return _current_run_id.get()


@contextmanager
def run_context(run_id: str) -> Generator[str, None, None]:
    """
    Context manager binding a run ID to every log record emitted inside it.

    Usage:
        with run_context("cv-1a2b3c"):
            logger.info("Training")  # Carries run_id

    Args:
        run_id: Identifier of the cross-validation run.

    Yields:
        The run ID.
    """
    token = _current_run_id.set(run_id)
    try:
        yield run_id
    finally:
        _current_run_id.reset(token)


class StructuredLogFormatter(logging.Formatter):
    """
    JSON log formatter with run and trace correlation.

    Outputs logs in JSON format with:
    - Standard log fields (timestamp, level, message, logger)
    - Run correlation (run_id)
    - Trace correlation (trace_id, span_id)
    - Exception information
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        run_id = getattr(record, "run_id", None) or get_current_run_id()
        if run_id:
            log_entry["run_id"] = run_id

        trace_id = get_current_trace_id()
        if trace_id:
            log_entry["trace_id"] = trace_id

        span_id = get_current_span_id()
        if span_id:
            log_entry["span_id"] = span_id

        log_entry["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class RunContextFilter(logging.Filter):
    """Logging filter that adds run and trace context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context fields to the log record."""
        record.run_id = get_current_run_id() or "-"
        record.trace_id = get_current_trace_id() or ""
        return True


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    module_levels: dict[str, str] | None = None,
) -> None:
    """
    Configure logging for cross-validation runs.

    Args:
        level: Default log level.
        json_format: If True, use JSON format. Otherwise, use standard format.
        module_levels: Per-module log levels (e.g., {"nlu_crossval.scoring": "DEBUG"}).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    if json_format:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(run_id)s] %(message)s"
        ))

    handler.addFilter(RunContextFilter())
    root_logger.addHandler(handler)

    if module_levels:
        for module, mod_level in module_levels.items():
            logging.getLogger(module).setLevel(getattr(logging, mod_level.upper()))

    logging.info(
        f"Logging configured: level={level}, json={json_format}, "
        f"module_levels={module_levels or {}}"
    )

