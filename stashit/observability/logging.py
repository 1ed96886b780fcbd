"""
StashIt — Structured Logging

JSON log formatter and trace id context for cache operations.
Library modules only create loggers; setup_logging() is for applications
and scripts that want StashIt's records formatted.
"""

import contextvars
import json
import logging
from datetime import UTC, datetime
from uuid import uuid4

from ..config.loader import get_config
from ..config.schemas import LogFormat, LogLevel

# Trace ID context variable, set per logical operation by callers or hooks
_trace_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("trace_id", default=None)

_RESERVED_ATTRS = frozenset(
    (
        "args",
        "msg",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
    )
)

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_trace_id() -> str | None:
    """Get current trace ID from context."""
    return _trace_id_ctx.get()


def set_trace_id(trace_id: str | None) -> None:
    """Set trace ID in context."""
    _trace_id_ctx.set(trace_id)


def generate_trace_id() -> str:
    """Generate a new trace ID and set it in context."""
    trace_id = str(uuid4())
    set_trace_id(trace_id)
    return trace_id


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        trace_id = _trace_id_ctx.get()
        if trace_id:
            log_data["trace_id"] = trace_id

        # Extra fields passed via logger.*(..., extra={...})
        for key, value in record.__dict__.items():
            if key not in log_data and not key.startswith("_") and key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(
    level: LogLevel | str | None = None,
    fmt: LogFormat | str | None = None,
) -> logging.Logger:
    """
    Configure the "stashit" logger.

    Args:
        level: Logging level name (default: LOG_LEVEL from configuration)
        fmt: "json" for JSONFormatter, "text" for a plain format
            (default: LOG_FORMAT from configuration)

    Returns:
        The configured package logger
    """
    if level is None or fmt is None:
        logging_config = get_config().logging
        level = logging_config.level if level is None else level
        fmt = logging_config.format if fmt is None else fmt

    logger = logging.getLogger("stashit")

    # Remove existing handlers so repeated calls don't duplicate output
    logger.handlers.clear()

    handler = logging.StreamHandler()
    if LogFormat(fmt) == LogFormat.JSON:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(LogLevel(level).value)
    logger.propagate = False

    return logger
