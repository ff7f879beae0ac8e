"""
Logging infrastructure for the rewire pass.

This module provides configurable logging with console and optional rotating
file output, plus hierarchical logger lookup so every component logs under
the ``jsrewire`` namespace.

Examples:
    >>> from jsrewire.utils.logger import setup_logger
    >>> logger = setup_logger("jsrewire", level="DEBUG")
    >>> logger.debug("Captured export 'default'")
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

# Valid log levels
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Default log format strings
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "jsrewire"


def _check_level(level: str) -> int:
    if level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of {VALID_LOG_LEVELS}")
    return getattr(logging, level.upper())


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Path | None = None
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Creates a logger with console output and optional file output.
    Prevents duplicate handlers if called multiple times.

    Args:
        name: Logger name (typically "jsrewire" or a dotted child).
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If provided, enables file logging.

    Returns:
        Configured logger instance.

    Raises:
        ValueError: If level is not a valid log level.

    Note:
        File logs use detailed format, console logs use simple format.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_check_level(level))

    has_console_handler = any(
        isinstance(h, logging.StreamHandler)
        and not isinstance(h, logging.handlers.RotatingFileHandler)
        for h in logger.handlers
    )
    has_file_handler = any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    )

    if not has_console_handler:
        add_console_handler(logger, level)

    if log_file is not None and not has_file_handler:
        add_file_handler(logger, log_file, level="DEBUG")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Retrieve existing logger or create default logger.

    Child loggers such as ``jsrewire.processors.import_interceptor`` inherit
    handlers from ``jsrewire`` through propagation, so a console handler is
    only installed when nothing in the hierarchy has one.

    Args:
        name: Logger name.

    Returns:
        Logger instance.

    Examples:
        >>> logger = get_logger("jsrewire.core.scope")
        >>> logger.name
        'jsrewire.core.scope'
    """
    logger = logging.getLogger(name)

    if logger.hasHandlers():
        return logger

    parent_name = name.rsplit(".", 1)[0] if "." in name else ""
    while parent_name:
        if logging.getLogger(parent_name).handlers:
            return logger
        parent_name = parent_name.rsplit(".", 1)[0] if "." in parent_name else ""

    if logging.getLogger().handlers:
        return logger

    # No handlers anywhere, create default logger
    return setup_logger(name)


def set_log_level(logger: logging.Logger, level: str) -> None:
    """
    Change logging level dynamically.

    Args:
        logger: Logger instance to modify.
        level: New logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Raises:
        ValueError: If level is not valid.
    """
    logger.setLevel(_check_level(level))


def add_file_handler(
    logger: logging.Logger,
    log_file: Path,
    level: str = "DEBUG"
) -> None:
    """
    Add file output handler to logger with rotation.

    Creates the log directory if it doesn't exist. Uses a rotating file
    handler with 10MB max size and 5 backup files.

    Args:
        logger: Logger instance to modify.
        log_file: Path to log file.
        level: Logging level for file handler.

    Raises:
        ValueError: If level is not valid.
        OSError: If log directory cannot be created.
    """
    handler_level = _check_level(level)

    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(handler_level)
    file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))

    logger.addHandler(file_handler)


def add_console_handler(logger: logging.Logger, level: str = "INFO") -> None:
    """
    Add console output handler to logger.

    Args:
        logger: Logger instance to modify.
        level: Logging level for console handler.

    Raises:
        ValueError: If level is not valid.
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(_check_level(level))
    console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))

    logger.addHandler(console_handler)
