"""Structured Logging: JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (artifact_id, origin_address, error_code, ...) surfaced when present
    - JSON format in production, key=value text in development; both carry the extras
    - setup_logging is idempotent: repeated calls replace, never stack, its handler
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "artifact_id", "origin_address", "record_id", "error_code",
    "path", "max_connections",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class KeyValueFormatter(logging.Formatter):
    """Human-readable lines with the same extras appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = [
            f"{key}={record.__dict__[key]}"
            for key in _EXTRA_KEYS
            if record.__dict__.get(key) is not None
        ]
        if not pairs:
            return line
        head, sep, tail = line.partition("\n")
        return f"{head} [{' '.join(pairs)}]{sep}{tail}"


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    global _handler
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(KeyValueFormatter())
    if _handler is not None:
        logging.root.removeHandler(_handler)
    _handler = handler
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
