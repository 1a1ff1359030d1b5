"""Logging setup for the command-line tools.

Log records go to stderr so stdout carries only the snapshot CSV.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "payment_engine"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", stream: TextIO | None = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling it again replaces the previous handler instead of adding another.
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))

    return logger
