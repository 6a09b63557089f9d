"""
Logging utilities for the movie pipeline.
Provides consistent logging across all stages with file and console handlers.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
import colorlog


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: str = "INFO",
    colorize: bool = True
) -> logging.Logger:
    """
    Set up a logger with a console handler and an optional file handler.

    Args:
        name: Logger name (typically __name__ of the calling module)
        log_file: Path to log file (optional)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        colorize: Whether to colorize console output

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger(__name__, log_file="logs/pipeline.log")
        >>> logger.info("Loaded 5043 rows")
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if colorize:
        console_formatter = colorlog.ColoredFormatter(
            '%(log_color)s' + LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            }
        )
    else:
        console_formatter = file_formatter

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    # Child loggers (movie_pipeline.*) would otherwise print twice through root
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger.

    Loggers under the ``movie_pipeline`` namespace share the handlers of the
    package logger, so only the package logger is configured here.

    Args:
        name: Logger name

    Returns:
        Logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("Column 'budget' has zero variance")
    """
    root_name = name.split('.')[0]
    root_logger = logging.getLogger(root_name)

    if not root_logger.handlers:
        setup_logger(root_name)

    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Change the level of the package logger and all its handlers."""
    root_logger = logging.getLogger('movie_pipeline')
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers:
        handler.setLevel(getattr(logging, level.upper()))
