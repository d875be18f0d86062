"""
Logging setup for the ingredient audit service and CLI.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

from ingredient_audit.config import Settings

ROOT_LOGGER = "ingredient_audit"


def setup_logging(log_level: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger with a single console handler.

    Safe to call more than once; existing handlers are replaced.
    """
    log_level = (log_level or Settings().log_level).upper()

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, log_level, logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    ))
    logger.addHandler(handler)

    logger.debug("Logging initialized - Level: %s", log_level)
    return logger
