#!/usr/bin/env python3
"""
Exception hierarchy for docschema operations.

Every error raised by the inference pipeline or its document-store
collaborators derives from ``DocSchemaError`` so callers (the service
boundary, the CLI) can map them to responses in one place.
"""
from __future__ import annotations

import functools
import json
from typing import Any, Dict, List, Optional


class DocSchemaError(Exception):
    """
    Base exception for all docschema operations.

    Carries a human-readable message, a flat ``details`` mapping that is
    appended to ``str(exc)``, and the underlying ``cause`` when one exists.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# ──────────────────────────────────────────────────────────────────────────────
# Request and Path Errors
# ──────────────────────────────────────────────────────────────────────────────


class InvalidPathError(DocSchemaError):
    """Raised for an empty path or a mode that contradicts path parity."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        mode: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        details = {}
        if path:
            details["path"] = path
        if mode:
            details["mode"] = mode

        super().__init__(message, details, cause)
        self.path = path
        self.mode = mode


class NoDataError(DocSchemaError):
    """Raised when a collection sample is empty or a document does not exist."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        mode: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        details = {}
        if path:
            details["path"] = path
        if mode:
            details["mode"] = mode

        super().__init__(message, details, cause)
        self.path = path
        self.mode = mode


# ──────────────────────────────────────────────────────────────────────────────
# Document Store Errors
# ──────────────────────────────────────────────────────────────────────────────


class StoreError(DocSchemaError):
    """Raised when the document-store collaborator fails.

    The underlying message is kept verbatim; the core never retries.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        details = {}
        if path:
            details["path"] = path
        if operation:
            details["operation"] = operation

        super().__init__(message, details, cause)
        self.path = path
        self.operation = operation


class DataFormatError(DocSchemaError):
    """Raised when a local export or records file cannot be read."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        line_number: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        details = {}
        if file_path:
            details["file_path"] = file_path
        if line_number:
            details["line_number"] = str(line_number)

        super().__init__(message, details, cause)
        self.file_path = file_path
        self.line_number = line_number


# ──────────────────────────────────────────────────────────────────────────────
# Configuration and Setup Errors
# ──────────────────────────────────────────────────────────────────────────────


class ConfigurationError(DocSchemaError):
    """Raised when there's an issue with configuration."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        cause: Optional[Exception] = None,
    ):
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_value is not None:
            details["config_value"] = config_value

        super().__init__(message, details, cause)
        self.config_key = config_key
        self.config_value = config_value


class DependencyError(DocSchemaError):
    """Raised when an optional dependency is missing."""

    def __init__(
        self,
        message: str,
        dependency_name: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        details = {}
        if dependency_name:
            details["dependency"] = dependency_name

        super().__init__(message, details, cause)
        self.dependency_name = dependency_name


# ──────────────────────────────────────────────────────────────────────────────
# CLI Errors
# ──────────────────────────────────────────────────────────────────────────────


class CLIError(DocSchemaError):
    """Raised when CLI operations fail."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        arguments: Optional[List[str]] = None,
        cause: Optional[Exception] = None,
    ):
        details = {}
        if command:
            details["command"] = command
        if arguments:
            details["arguments"] = " ".join(arguments)

        super().__init__(message, details, cause)
        self.command = command
        self.arguments = arguments


class ArgumentError(CLIError):
    """Raised when command-line or request arguments are invalid."""

    def __init__(
        self,
        message: str,
        argument_name: Optional[str] = None,
        argument_value: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, None, None, cause)
        if argument_name:
            self.details["argument"] = argument_name
        if argument_value:
            self.details["value"] = argument_value
        self.argument_name = argument_name
        self.argument_value = argument_value


# ──────────────────────────────────────────────────────────────────────────────
# Utility Functions
# ──────────────────────────────────────────────────────────────────────────────


def wrap_exception(
    exc: Exception,
    message: Optional[str] = None,
    exception_class: type[DocSchemaError] = DocSchemaError,
    **kwargs,
) -> DocSchemaError:
    """
    Wrap a generic exception in a docschema specific exception.

    Args:
        exc: The original exception to wrap
        message: Optional custom message (uses original message if not provided)
        exception_class: The docschema exception class to use
        **kwargs: Additional arguments for the exception class

    Returns:
        A docschema specific exception wrapping the original
    """
    if isinstance(exc, DocSchemaError):
        return exc

    error_message = message or str(exc)
    return exception_class(error_message, cause=exc, **kwargs)


def handle_store_exceptions(operation: str):
    """
    Decorator factory converting collaborator failures into ``StoreError``.

    The wrapped callable must take the target path as its first argument
    after ``self``. ``DocSchemaError`` subclasses pass through untouched.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, path, *args, **kwargs):
            try:
                return func(self, path, *args, **kwargs)
            except DocSchemaError:
                raise
            except json.JSONDecodeError as e:
                raise DataFormatError(
                    f"Invalid JSON: {e.msg}", line_number=e.lineno, cause=e
                ) from e
            except Exception as e:
                raise StoreError(
                    str(e) or type(e).__name__,
                    path=path,
                    operation=operation,
                    cause=e,
                ) from e

        return wrapper

    return decorator


# ──────────────────────────────────────────────────────────────────────────────
# Export all exception classes
# ──────────────────────────────────────────────────────────────────────────────

__all__ = [
    # Base exception
    "DocSchemaError",
    # Request and Path
    "InvalidPathError",
    "NoDataError",
    # Document Store
    "StoreError",
    "DataFormatError",
    # Configuration and Setup
    "ConfigurationError",
    "DependencyError",
    # CLI
    "CLIError",
    "ArgumentError",
    # Utility functions
    "wrap_exception",
    "handle_store_exceptions",
]
