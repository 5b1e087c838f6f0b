"""
Logging Configuration

Console tools log to stderr so stdout stays clean for summaries and
generated CSV/JSON. The proxy server can additionally append to a file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
FILE_LOG_FORMAT = "%(asctime)s " + LOG_FORMAT


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str | Path] = None,
) -> logging.Logger:
    """
    Configure the ``storeops`` logger.

    Args:
        verbose: If True, set level to DEBUG
        quiet: If True, set level to WARNING
        log_file: Optional path of a file that receives the same records

    Returns:
        The configured package logger
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger("storeops")
    logger.setLevel(level)

    # Repeated calls replace handlers instead of stacking them
    for existing in list(logger.handlers):
        existing.close()
    logger.handlers.clear()

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger
