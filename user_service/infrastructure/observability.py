"""Structured Logging — JSON or text records tied to the request that produced them.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Request-scoped records carry method and path; error records add
      error_code, category and severity (set by api/error_handlers.py)
    - Store records carry user_id / affected_rows when the service knows them
    - Text format always prints the request slot, "-" outside a request

Design Decisions:
    - setup_logging called once on startup via lifespan
    - RequestFieldsFilter on the handler, not the loggers: library records
      (uvicorn, sqlalchemy) get the defaults too
"""

import logging
import json
from datetime import datetime, timezone

REQUEST_FIELDS = ("method", "path")
EXTRA_FIELDS = (
    *REQUEST_FIELDS, "error_code", "category", "severity",
    "user_id", "affected_rows",
)
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(method)s %(path)s] %(message)s"


class RequestFieldsFilter(logging.Filter):
    """Default request fields to "-" so the text format never fails."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key in REQUEST_FIELDS:
            if not hasattr(record, key):
                setattr(record, key, "-")
        return True


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None and val != "-":
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging for the application. Returns the installed handler."""
    handler = logging.StreamHandler()
    handler.addFilter(RequestFieldsFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
