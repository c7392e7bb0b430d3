"""Logging configuration for tileslide."""

import logging
import sys
from typing import Optional


FORMATS = {
    "simple": "%(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
}


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None,
                  format_style: str = "simple") -> None:
    """
    Set up logging for the whole application.

    The curses frontend owns the terminal, so pass ``log_file`` to keep log
    records from being drawn over the board.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Write records to this file instead of stderr
        format_style: "simple" or "detailed"
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    log_format = FORMATS.get(format_style, FORMATS["simple"])

    if log_file:
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        handlers=[handler],
        force=True,
    )

    # pygame and gymnasium chatter is not interesting at debug level
    logging.getLogger("pygame").setLevel(logging.WARNING)
    logging.getLogger("gymnasium").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)
