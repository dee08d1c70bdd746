#!/usr/bin/env python3
"""
Logging configuration for docschema.

This module provides centralized logging configuration with support for
different log levels, formatters, and output destinations.
"""
from __future__ import annotations

import functools
import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Optional, Union

from .constants import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    LOG_FILE_BACKUP_COUNT,
    MAX_LOG_FILE_SIZE,
)
from .exceptions import NoDataError

ROOT_LOGGER_NAME = "docschema"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for console output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy so file handlers sharing the record stay plain
        colored = logging.makeLogRecord(record.__dict__)
        if colored.levelname in self.COLORS:
            colored.levelname = (
                f"{self.COLORS[colored.levelname]}{colored.levelname}{self.RESET}"
            )
        return super().format(colored)


class DocSchemaLogger:
    """Centralized logger configuration for docschema."""

    _configured = False
    _loggers: dict[str, logging.Logger] = {}

    @classmethod
    def setup_logging(
        cls,
        level: Union[str, int] = DEFAULT_LOG_LEVEL,
        log_file: Optional[Union[str, Path]] = None,
        console_output: bool = True,
        colored_output: bool = True,
        format_string: Optional[str] = None,
        max_file_size: int = MAX_LOG_FILE_SIZE * 1024 * 1024,
        backup_count: int = LOG_FILE_BACKUP_COUNT,
        force: bool = False,
    ) -> None:
        """
        Configure logging for docschema operations.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Path to log file (None to disable file logging)
            console_output: Whether to output logs to console
            colored_output: Whether to use colored output for console
            format_string: Custom format string for log messages
            max_file_size: Maximum size of log file before rotation (bytes)
            backup_count: Number of backup log files to keep
            force: Reconfigure even if logging was already set up
        """
        if cls._configured and not force:
            return

        if isinstance(level, str):
            level = getattr(logging, level.upper())

        if format_string is None:
            format_string = DEFAULT_LOG_FORMAT

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        if console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)

            if colored_output and sys.stderr.isatty():
                console_formatter: logging.Formatter = ColoredFormatter(format_string)
            else:
                console_formatter = logging.Formatter(format_string)

            console_handler.setFormatter(console_formatter)
            root_logger.addHandler(console_handler)

        # File handler with rotation
        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=max_file_size,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(format_string))
            root_logger.addHandler(file_handler)

        # Prevent propagation to avoid duplicate messages
        root_logger.propagate = False

        cls._configured = True

        logger = cls.get_logger("logging_config")
        logger.debug(
            "Logging configured - Level: %s, Console: %s, File: %s",
            logging.getLevelName(level),
            console_output,
            log_file,
        )

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get a logger instance for the given module name.

        Args:
            name: Logger name (typically __name__ from the calling module)

        Returns:
            Configured logger instance
        """
        if not cls._configured:
            cls.setup_logging()

        if not name.startswith(ROOT_LOGGER_NAME):
            logger_name = f"{ROOT_LOGGER_NAME}.{name}"
        else:
            logger_name = name

        if logger_name not in cls._loggers:
            cls._loggers[logger_name] = logging.getLogger(logger_name)

        return cls._loggers[logger_name]


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module.

    Example:
        logger = get_logger(__name__)
        logger.info("Sampling started")
    """
    return DocSchemaLogger.get_logger(name)


def setup_logging(
    level: Union[str, int] = DEFAULT_LOG_LEVEL,
    log_file: Optional[Union[str, Path]] = None,
    **kwargs,
) -> None:
    """Setup logging configuration (see ``DocSchemaLogger.setup_logging``)."""
    DocSchemaLogger.setup_logging(level=level, log_file=log_file, **kwargs)


def log_function_call(func):
    """
    Decorator to log function entry and exit at DEBUG level.

    Example:
        @log_function_call
        def sample(self, path: str, mode: str, limit: int) -> list:
            ...
    """
    logger = get_logger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger.debug("Calling %s with args=%s, kwargs=%s", func.__name__, args, kwargs)

        try:
            result = func(*args, **kwargs)
            logger.debug("Function %s returned: %s", func.__name__, result)
            return result
        except Exception as e:
            logger.error("Function %s raised exception: %s", func.__name__, e)
            raise

    return wrapper


def log_performance(func):
    """
    Decorator to log function execution time.

    Success is logged at INFO, ``NoDataError`` at DEBUG and other failures
    at WARNING. The exception is re-raised unchanged.
    """
    logger = get_logger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
            logger.info(
                "Function %s executed in %.3f seconds",
                func.__name__,
                time.perf_counter() - start_time,
            )
            return result
        except NoDataError as e:
            logger.debug(
                "Function %s found no data after %.3f seconds: %s",
                func.__name__,
                time.perf_counter() - start_time,
                e,
            )
            raise
        except Exception as e:
            logger.warning(
                "Function %s failed after %.3f seconds: %s",
                func.__name__,
                time.perf_counter() - start_time,
                e,
            )
            raise

    return wrapper


__all__ = [
    "DocSchemaLogger",
    "ColoredFormatter",
    "get_logger",
    "setup_logging",
    "log_function_call",
    "log_performance",
]
