"""
Central logging configuration for notion_calendar.

Console logging goes to stderr so rendered calendars written to stdout stay
clean. Third-party HTTP libraries are kept at WARNING.
"""

import logging
import os
import sys
from typing import Optional

from colorlog import ColoredFormatter

DEBUG_ENV_VAR = "NOTION_CALENDAR_DEBUG"
DEFAULT_LOG_LEVEL = "DEBUG"

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

# Loggers that flood DEBUG output with connection details
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "hpack")


def get_log_level(level_name: Optional[str]) -> int:
    """Numeric level for a level name; unknown or empty names map to INFO."""
    if not level_name:
        return logging.INFO
    level = getattr(logging, level_name.strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def debug_forced() -> bool:
    """True when the debug environment variable holds a truthy value."""
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in ("1", "true", "yes", "on")


def init_logging(level_name: Optional[str] = DEFAULT_LOG_LEVEL) -> int:
    """Initialize root logging to a colored stderr handler.

    A handler is only installed when the root logger has none, so repeated
    calls and host applications keep their own setup.

    Args:
        level_name: Root level name; overridden to DEBUG by NOTION_CALENDAR_DEBUG

    Returns:
        The numeric level applied to the root logger
    """
    if debug_forced():
        level_name = "DEBUG"

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(
            ColoredFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT, log_colors=LOG_COLORS)
        )
        root.addHandler(handler)

    level = get_log_level(level_name)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(level)
    )
    return level
