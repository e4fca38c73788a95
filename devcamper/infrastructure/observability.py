"""Structured Logging — JSON log lines carrying request and resource context.

Invariants:
    - Every line has timestamp, level, logger and message
    - Context passed via `extra=` (error_code, http_status, path, actor_id,
      resource, resource_id) is emitted only when set
    - setup_logging is idempotent: calling it again replaces its own handler
      instead of stacking a second one on the root logger

Design Decisions:
    - stdlib logging + a small formatter rather than a logging library
    - Driver and access loggers are held at WARNING unless the app runs at DEBUG,
      so per-query SQL echo never floods production logs
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "error_code", "http_status", "path", "actor_id", "resource", "resource_id",
)
_NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")
_HANDLER_NAME = "devcamper"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, record.__dict__[key])
            for key in CONTEXT_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            entry["exc_type"] = record.exc_info[0].__name__
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the app's root handler; returns it for tests and reconfiguration."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)

    resolved = logging.getLevelName(level.upper())
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
    library_level = logging.DEBUG if root.level == logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
    return handler
