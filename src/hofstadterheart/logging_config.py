"""
Logging setup for the command-line entry.

Library modules only create `logging.getLogger(__name__)` loggers; handlers are
attached here, once, to the package logger.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "hofstadterheart"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler (and optionally a file handler) to the package logger.

    Calling it again replaces the handlers instead of stacking them.

    Args:
        level: Logging level for the logger and every handler.
        log_file: Optional path; the file is truncated.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    target = f"stdout and {log_file}" if log_file else "stdout"
    logger.debug(f"Logging to {target} at level {logging.getLevelName(level)}.")
    return logger
