"""
Utility modules shared by the rewire pass.

This package provides the logging infrastructure with console and
rotating file output.

Examples:
    >>> from jsrewire.utils import setup_logger
    >>> logger = setup_logger("jsrewire")
"""

from .logger import (
    # Logger setup
    setup_logger,
    get_logger,
    set_log_level,
    # Handler management
    add_file_handler,
    add_console_handler,
    # Constants
    VALID_LOG_LEVELS,
    ROOT_LOGGER_NAME,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "set_log_level",
    "add_file_handler",
    "add_console_handler",
    "VALID_LOG_LEVELS",
    "ROOT_LOGGER_NAME",
]
