"""Logging setup for the trip suggestions service."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stdout handler to the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level name (e.g., "INFO", "DEBUG")

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("trip_suggestions")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
