"""Logging configuration helpers."""

import logging
from typing import Optional

PROJECT_LOGGER = "training_results_viewer"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: Optional[str] = None, level: str = "INFO") -> logging.Logger:
    """Return a logger with a single stream handler attached."""
    logger = logging.getLogger(name or PROJECT_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level.upper())
    return logger
