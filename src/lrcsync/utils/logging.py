"""Logging configuration for lrcsync."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "lrcsync"


def setup_logging(
    level: Optional[str] = None, log_file: Optional[Path] = None, verbose: bool = False
) -> logging.Logger:
    """Set up logging for the CLI.

    Messages go to stderr so that LRC text written to stdout can be piped
    straight into a file. ``LRCSYNC_LOG_LEVEL`` applies when no level is given.
    """
    level = level or os.getenv("LRCSYNC_LOG_LEVEL", "INFO")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    if verbose:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)
