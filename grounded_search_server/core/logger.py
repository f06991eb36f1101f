"""
Logging management module.

Everything goes to stderr (and optionally a file): stdout carries the MCP stream.
"""
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

LOGGER_NAME = "grounded_search"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = LOGGER_NAME,
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Setup and configure logger.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        format_string: Optional custom format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Remove existing handlers
    logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)
    logger.propagate = False

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def bind_library_loggers(
    logger: logging.Logger,
    names: Iterable[str] = ("mcp", "mcp.server", "urllib3"),
) -> None:
    """Route third-party loggers through the same handlers as `logger`."""
    for name in names:
        lib_logger = logging.getLogger(name)
        lib_logger.setLevel(logger.level)
        lib_logger.handlers.clear()
        for handler in logger.handlers:
            lib_logger.addHandler(handler)
        lib_logger.propagate = False


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
