"""Structured Logging — JSON and text formatters that surface request context.

Invariants:
    - Every line carries the event time (record.created, UTC), level, logger and message
    - employee_id, error_code, path and operation appear whenever a caller passed
      them via extra=; in both formats, never as empty values
    - setup_logging() is idempotent: calling it again swaps the handler, never stacks one
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = ("employee_id", "error_code", "path", "operation")

_HANDLER_NAME = "employee_api"


def _context_fields(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context_fields(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable lines for local runs, context appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context_fields(record)
        if not context:
            return line
        head, sep, tail = line.partition("\n")
        suffix = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{head} [{suffix}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the app's root handler (json or text). Returns the handler."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
