"""
Logging configuration.

Debug mode logs human-readable lines; otherwise every record is emitted as
one JSON object per line so the output can be shipped to a log collector.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Format records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def parse_log_level(level: str) -> int:
    """
    Convert a level name to a logging level.

    Unknown names fall back to INFO.
    """
    value = _LEVELS.get(level.strip().lower())
    if value is None:
        logging.getLogger(__name__).warning(
            "Invalid log level, using INFO", extra={"level_name": level}
        )
        return logging.INFO
    return value


def init_logging(level: str = "info", debug: bool = False) -> None:
    """
    Configure the root logger.

    Args:
        level: Level name (debug, info, warn, error).
        debug: Use the text format and force DEBUG level.
    """
    handler = logging.StreamHandler(sys.stdout)
    if debug:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        log_level = logging.DEBUG
    else:
        handler.setFormatter(JSONFormatter())
        log_level = parse_log_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    # Quiet noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)
