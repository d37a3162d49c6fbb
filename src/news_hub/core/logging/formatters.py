"""
Log line formats.

Text (LOG_FORMAT=text):
    2026-01-11 12:00:00 | INFO  | ...services.aggregator_ser | [a1b2c3d4] [Aggregator] Complete: 12 articles

JSON (LOG_FORMAT=json), one object per line:
    {"timestamp": "...", "level": "INFO", "logger": "...", "message": "...", "request_id": "a1b2c3d4"}

Fields passed through ``extra=`` (``provider``, ``cache_key`` and so on)
appear as ``key=value`` pairs in text and under ``"extra"`` in JSON.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from news_hub.core.logging.context import get_request_id

# Attributes every LogRecord has; anything else came from extra=
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}

LOGGER_NAME_WIDTH = 25


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_RECORD_ATTRS}


def _short_name(name: str, width: int = LOGGER_NAME_WIDTH) -> str:
    if len(name) <= width:
        return name.ljust(width)
    return "..." + name[-(width - 3):]


class DevFormatter(logging.Formatter):
    """Single-line, optionally colored output for terminals."""

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[38;5;244m",
        logging.INFO: "\x1b[38;5;39m",
        logging.WARNING: "\x1b[38;5;208m",
        logging.ERROR: "\x1b[38;5;196m",
        logging.CRITICAL: "\x1b[38;5;196;1m",
    }
    RESET = "\x1b[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            self.formatTime(record, self.datefmt),
            f"{record.levelname:<5}",
            _short_name(record.name),
        ]

        body = record.getMessage()
        request_id = get_request_id()
        if request_id:
            body = f"[{request_id}] {body}"
        extras = extra_fields(record)
        if extras:
            body += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        parts.append(body)

        line = " | ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        if not self.use_colors:
            return line
        return f"{self.LEVEL_COLORS.get(record.levelno, '')}{line}{self.RESET}"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.pathname}:{record.lineno} in {record.funcName}",
        }

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info),
            }

        extras = extra_fields(record)
        if extras:
            entry["extra"] = extras

        return json.dumps(entry, ensure_ascii=False, default=str)
