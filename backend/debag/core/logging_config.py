"""
Logging setup for DeBag Metrics.

Services log through logging.getLogger(__name__) and pass request context
(observation_id, person_id, duration_ms...) as `extra=`. Both formatters
below surface those fields; JSON for deployments, key=value text locally.
"""
import logging
import json
import sys
from datetime import datetime, timezone

SERVICE_NAME = "debag-metrics"

# Context attributes surfaced when present on the record
CONTEXT_FIELDS = ("observation_id", "person_id", "duration_ms", "path", "status_code")

_QUIET_LOGGERS = ("uvicorn.access", "httpcore", "httpx", "sqlalchemy.engine")


def _context(record: logging.LogRecord) -> dict:
    return {name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, stamped with the record's own creation time."""

    def format(self, record):
        entry = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc)
                  .isoformat(timespec="milliseconds"),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}:{record.lineno}",
        }
        entry.update(_context(record))
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable lines: `12:00:01 INFO  debag.x: msg [person_id=3]`."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-5s %(name)s: %(message)s", datefmt="%H:%M:%S")

    def format(self, record):
        line = super().format(record)
        ctx = _context(record)
        if ctx:
            line += " [" + " ".join(f"{k}={v}" for k, v in ctx.items()) + "]"
        return line


def setup_logging(level: str = "INFO", json_output: bool = True) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_output else ContextTextFormatter())
    root.handlers = [handler]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
