"""Logger setup for the ``setblocks`` command.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, by the CLI, never on import.
"""

from __future__ import annotations

import logging
import sys

from setblocks._config import default_log_level, valid_log_level

LOGGER_NAME = "setblocks"


def setup_logger(
    level: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure and return the ``setblocks`` logger.

    Args:
        level: Log level name; defaults to ``SETBLOCKS_LOG_LEVEL``. Unknown
            names fall back to WARNING.
        format_string: Custom format string.
    """
    level = valid_log_level(level) if level else default_log_level()
    format_string = format_string or "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=format_string, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(getattr(logging, level))
    return logger
