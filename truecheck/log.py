"""
Logger setup for TrueCheck.

Never log the caller's API key, the search key, or the submitted data.
Type labels, status codes and exception class names are fine.
"""

import logging
from typing import Optional

from .config import settings


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger for the given module.

    Args:
        name: Module name (typically __name__)
        level: Optional level name; defaults to settings.LOG_LEVEL
    """
    logger = logging.getLogger(name)
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    # Add handler only once
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
