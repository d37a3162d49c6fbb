"""
Logging setup for news_hub.

LOG_LEVEL and LOG_FORMAT come from news_hub.config.Settings; explicit
arguments to setup_logging() win over them.
"""

import logging
import sys
from typing import Optional

from news_hub.config import Settings, get_settings
from news_hub.core.logging.formatters import DevFormatter, JsonFormatter

ROOT_LOGGER_NAME = "news_hub"

# Chatty at INFO: one line per HTTP request or redis command
NOISY_LOGGERS = ("httpx", "httpcore", "redis", "asyncio")

_handler: Optional[logging.Handler] = None


def _build_handler(level: int, use_json: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(DevFormatter(use_colors=sys.stdout.isatty()))
    return handler


def setup_logging(
    level: Optional[str] = None,
    use_json: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> None:
    """
    Install a single stdout handler on the root logger. Idempotent.

    Args:
        level: Level name overriding LOG_LEVEL
        use_json: Overrides LOG_FORMAT (True for json, False for text)
        settings: Settings to read instead of get_settings()
    """
    global _handler

    if _handler is not None:
        return

    settings = settings or get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO
    if use_json is None:
        use_json = settings.LOG_FORMAT == "json"

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    _handler = _build_handler(log_level, use_json)
    root.addHandler(_handler)
    root.setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    get_logger().info(
        f"Logging ready: level={logging.getLevelName(log_level)}, "
        f"format={'json' if use_json else 'text'}"
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the news_hub hierarchy by default. Does not install handlers."""
    return logging.getLogger(name or ROOT_LOGGER_NAME)


def shutdown_logging() -> None:
    """Flush and detach the handler so setup_logging() can run again."""
    global _handler

    if _handler is None:
        return
    logging.getLogger().removeHandler(_handler)
    _handler.flush()
    _handler.close()
    _handler = None


class LoggerMixin:
    """
    Gives instances ``self.logger`` named ``<module>.<ClassName>``.

    Subclasses must call ``super().__init__()``.
    """

    def __init__(self) -> None:
        cls = type(self)
        self.logger = get_logger(f"{cls.__module__}.{cls.__name__}")
