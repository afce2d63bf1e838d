"""Logging configuration for tradeclaims."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "tradeclaims-stderr"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the package logger.

    Installs a single stderr handler on the ``tradeclaims`` logger. Calling it
    again only updates the level and re-targets the handler at the current
    ``sys.stderr``.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR). Defaults to WARNING.

    Returns:
        The ``tradeclaims`` logger
    """
    log_level = getattr(logging, (level or "WARNING").upper())

    logger = logging.getLogger("tradeclaims")
    logger.setLevel(log_level)

    handler = next((h for h in logger.handlers if h.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    else:
        handler.setStream(sys.stderr)
    handler.setLevel(log_level)

    return logger
