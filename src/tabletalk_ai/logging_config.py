"""Logging configuration.

The package logs through loguru's shared ``logger`` and never adds sinks on
import. Applications call :func:`configure_logging` once at startup.
"""

import sys

from loguru import logger

from tabletalk_ai.config import settings


def configure_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Install the stderr sink and, optionally, a rotating file sink.

    Args:
        level: Minimum level to emit. Defaults to settings.log_level.
        log_file: Path of a rotating log file. Defaults to settings.log_file.
    """
    level = level or settings.log_level
    log_file = log_file or settings.log_file

    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_file:
        logger.add(log_file, level=level, rotation="10 MB")
