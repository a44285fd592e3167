"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - Every JSON line carries timestamp, level, logger, service, and message
    - Listing and store context (entity_type, entity_id, error_code, event_id, ...)
      surfaced when the call site passes it through `extra`
    - setup_logging is idempotent: a second call replaces, never duplicates, its handler

Design Decisions:
    - JSONFormatter on stdlib logging: zero dependencies, full control
    - setup_logging called once on startup via lifespan
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "entity_type", "entity_id", "error_code", "parameter",
    "event_id", "path", "listing", "mode",
)

_HANDLER_NAME = "folio"


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def __init__(self, service: str = "folio-api"):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        entry.update(
            (key, record.__dict__[key]) for key in _EXTRA_KEYS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json", service: str = "folio-api") -> None:
    """Configure the root logger for the application."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter(service))
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo stays off unless explicitly debugging the store
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
