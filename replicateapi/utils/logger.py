"""
Logging utilities for the Replicate API client.

The library itself only emits DEBUG records on the 'replicateapi' logger and
never configures handlers on import; applications (and the CLI) call
setup_logger to see them.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from replicateapi.config import DEFAULT_LOGGER_NAME


# Default log format
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
SIMPLE_FORMAT = '%(levelname)s: %(message)s'


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    format_string: str = DEFAULT_FORMAT,
    console: bool = True
) -> logging.Logger:
    """
    Set up and return a configured logger.

    Args:
        name: Logger name
        level: Logging level (logging.DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        format_string: Log message format
        console: Whether to log to stderr

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)

    formatter = logging.Formatter(format_string)
    # FileHandler subclasses StreamHandler
    has_console = any(type(h) is logging.StreamHandler for h in logger.handlers)
    open_files = {
        h.baseFilename for h in logger.handlers if isinstance(h, logging.FileHandler)
    }

    # Console handler. stdout carries command output, so logs go to stderr.
    if console and not has_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File handler, once per path
    log_path = Path(os.path.abspath(log_file)) if log_file else None
    if log_path is not None and str(log_path) not in open_files:
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger in the package namespace.

    Unlike setup_logger this attaches no handlers, so importing the library
    never changes the application's logging output.

    Args:
        name: Logger name, e.g. __name__ of the calling module

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
