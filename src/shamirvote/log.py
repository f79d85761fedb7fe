"""Logging setup for the command line.

Library modules only create `logging.getLogger(__name__)` loggers; the
CLI calls setup_logger() once to attach handlers to the package logger.
"""

import logging
from logging.handlers import RotatingFileHandler

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logger(
    name: str = "shamirvote",
    level=logging.INFO,
    log_file: str = None,
    console: bool = True,
    format_str: str = None,
    max_size: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Configure and return the `name` logger.

    level may be an int or a level name ("DEBUG", "info", ...). Existing
    handlers on the logger are removed first, so calling this twice does
    not duplicate output.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_str or DEFAULT_FORMAT)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file, maxBytes=max_size, backupCount=backup_count, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
