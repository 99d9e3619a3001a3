"""Logging setup for finsight."""

import logging
import sys
from typing import Union

LOGGER_NAME = "finsight"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Configure the package logger with a single stderr handler.

    Calling it again replaces the handler, so it always writes to the current
    ``sys.stderr``.

    Args:
        level: Logging level name or number

    Returns:
        The configured ``finsight`` logger

    Raises:
        ValueError: If the level name is unknown
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level '{level}'")
        level = resolved

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    return logger
