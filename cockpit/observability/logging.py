"""
Structured JSON logging with snapshot revision propagation.

The revision being scored lives in a context variable. RevisionFilter copies
it onto each record as `record.revision`, so the formatters (and any other
handler) see the revision that was current when the line was logged, not
when it was formatted.
"""

import contextvars
import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

_revision_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("revision", default=None)

_RESERVED_ATTRS = frozenset(
    (
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "message",
        "taskName",
        "revision",
    )
)


def get_revision() -> str | None:
    """Snapshot revision of the scoring pass in progress, if any."""
    return _revision_var.get()


class RevisionContext:
    """
    Mark a block as scoring one snapshot revision.

    Usage:
        with RevisionContext(snapshot.revision):
            scores = calculate_all_workload_scores(snapshot)
    """

    def __init__(self, revision: str):
        self.revision = revision
        self._token: contextvars.Token | None = None

    def __enter__(self) -> "RevisionContext":
        # empty revisions are recorded as None
        self._token = _revision_var.set(self.revision or None)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _revision_var.reset(self._token)
            self._token = None


class RevisionFilter(logging.Filter):
    """Stamp the current revision on every record; never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "revision", None) is None:
            record.revision = get_revision()
        return True


def _record_revision(record: logging.LogRecord) -> str | None:
    return getattr(record, "revision", None) or get_revision()


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Output format:
    {
        "timestamp": "2024-01-15T10:30:00.000Z",
        "level": "WARNING",
        "logger": "cockpit.workload.aggregator",
        "message": "Unknown grade ...",
        "revision": "2024-01-15T10:29:58.113Z",
        ...
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        revision = _record_revision(record)
        if revision:
            log_obj["revision"] = revision

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Extra fields passed via logger.x(..., extra={...})
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_obj[key] = value

        return json.dumps(log_obj, default=str)


class HumanFormatter(logging.Formatter):
    """Human-readable formatter for local development."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        revision = _record_revision(record)
        rev_str = f"[rev {revision}] " if revision else ""
        return f"{timestamp} [{record.levelname}] {record.name}: {rev_str}{record.getMessage()}"


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON format. If None, auto-detect based on environment.
    """
    if json_format is None:
        # JSON when piped into a collector, human format on a terminal
        json_format = not sys.stderr.isatty()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(RevisionFilter())
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())
    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.info("Scored roster", extra={"people": 42})
    """
    return logging.getLogger(name)
