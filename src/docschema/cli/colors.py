"""ANSI color codes for CLI output and help text."""

import os
import sys


def supports_color(stream=None) -> bool:
    """Check if the terminal supports ANSI colors."""
    stream = stream or sys.stdout
    return (
        hasattr(stream, "isatty")
        and stream.isatty()
        and not sys.platform.startswith("win")
    ) and "NO_COLOR" not in os.environ


# ANSI color codes
if supports_color():
    RED = "\033[91m"  # Red for errors/critical
    YELLOW = "\033[93m"  # Yellow for warnings
    GREEN = "\033[92m"  # Green for success messages
    CYAN = "\033[96m"  # Bright cyan for section headers
    BOLD = "\033[1m"  # Bold for emphasis
    RESET = "\033[0m"  # Reset to default
else:
    RED = YELLOW = GREEN = CYAN = BOLD = RESET = ""


def section_header(text: str) -> str:
    """Format a section header with color."""
    return f"{BOLD}{CYAN}{text}{RESET}"


def error_text(text: str) -> str:
    """Format an error message with color."""
    return f"{RED}{text}{RESET}"


def warning_text(text: str) -> str:
    """Format a warning message with color."""
    return f"{YELLOW}{text}{RESET}"
