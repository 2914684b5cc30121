"""Logging configuration for the Skill Gap AI system."""

import logging
import sys
from typing import Optional

from skill_gap_ai.config import LOG_LEVEL


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a configured logger instance. Level defaults to LOG_LEVEL from the environment."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        configured = logging.getLevelName(LOG_LEVEL)
        logger.setLevel(configured if isinstance(configured, int) else logging.INFO)
    if level is not None:
        logger.setLevel(level)
    return logger
