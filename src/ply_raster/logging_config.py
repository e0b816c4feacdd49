"""
Logging Configuration
Sets up the package logger for command-line runs.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "ply_raster"


def verbosity_to_level(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbosity: int = 0, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``ply_raster`` logger.

    Parameters
    ----------
    verbosity : int
        Number of ``-v`` flags given on the command line.
    log_file : str, optional
        Also write log records to this file.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    level = verbosity_to_level(verbosity)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Avoid duplicate handlers when the CLI is invoked repeatedly in one process
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized at level %s", logging.getLevelName(level))
    return logger
