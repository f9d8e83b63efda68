"""Logging initialization using loguru."""

import sys

from loguru import logger


def init_logging(verbose: bool = False, log_file: str | None = None) -> None:
    """Send logs to stderr, and optionally to a rotating file.

    Verbose shows every written/skipped file, otherwise only progress and
    warnings.
    """
    level = "DEBUG" if verbose else "INFO"
    logger.remove()
    logger.add(sys.stderr, level=level, format="<level>{level: <8}</level> {message}")
    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="10 days",
            enqueue=True,
            backtrace=False,
            diagnose=False,
            level=level,
        )
