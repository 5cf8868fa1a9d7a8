"""
Logging configuration for the garden.

A dedicated ``harmonic_garden`` logger (not the root logger) so that
interactive runs can log to a file without anything leaking onto the
terminal the renderer owns.
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "harmonic_garden"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(
    level: Union[int, str] = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Configure the application logger.

    Args:
        level: Logging level name or number.
        log_file: Optional file to append records to; parent dirs are created.
        console: Also log to stderr. Interactive runs pass False.
        fmt: Record format string.

    Returns:
        The configured ``harmonic_garden`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Clear existing handlers so repeated setup does not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(fmt)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.debug("logging initialized (level=%s, file=%s)", logging.getLevelName(logger.level), log_file)
    return logger
