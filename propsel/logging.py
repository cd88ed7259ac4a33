"""Logging for propsel.

Every module logs through `get_logger(__name__)`, a child of the single
``propsel`` logger configured here. Records propagate, so pytest's `caplog`
sees them.
"""

import logging
import sys
from typing import Optional

_ROOT_LOGGER_NAME = "propsel"
_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach one handler to the ``propsel`` logger.

    Only the first call has an effect until `reset_logging()` runs.

    Args:
        level: Level of the ``propsel`` logger.
        format_string: Record format; defaults to time, name, level, message.
        handler: Destination; defaults to a stream handler on stdout.
    """
    global _configured
    if _configured:
        return

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = handler or logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or _DEFAULT_FORMAT))
    root_logger.addHandler(handler)
    root_logger.propagate = True

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger that defers its level to ``propsel``."""
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the ``propsel`` logger and its handlers."""
    setup_root_logger()
    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def reset_logging() -> None:
    """Drop the ``propsel`` handlers so the next setup starts clean."""
    global _configured
    _configured = False
    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
