"""Structured Logging — JSON formatter and handler lifecycle for the voting store.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (operation, entity, entity_id, error_code) surfaced when present
    - JSON format in production, human-readable in development
    - setup_logging/teardown_logging are called by voting.main.lifespan only;
      components receive a logging.Logger through their constructors
"""

import logging
import json
from datetime import datetime, timezone


_EXTRA_KEYS = ("operation", "entity", "entity_id", "error_code")


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


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the root handler for this process and return it."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def teardown_logging(handler: logging.Handler) -> None:
    """Remove a handler installed by setup_logging."""
    logging.root.removeHandler(handler)
    handler.close()
