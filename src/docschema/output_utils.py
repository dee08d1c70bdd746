"""Shared helpers for writing rendered schemas to the output directory."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from .constants import DEFAULT_OUTPUT_DIR, OUTPUT_EXTENSIONS
from .render import derive_type_name


def ensure_output_dir(output_dir: Optional[str] = None) -> Path:
    """Ensure the output directory exists and return the path."""
    path = Path(output_dir or DEFAULT_OUTPUT_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def output_filename(target_path: str, mode: str, format_type: str) -> str:
    """File name for a rendering, e.g. ``UsersCollectionDocument.ts``."""
    extension = OUTPUT_EXTENSIONS.get(format_type, "txt")
    suffix = "" if format_type == "typescript" else f"_{format_type}"
    return f"{derive_type_name(target_path, mode)}{suffix}.{extension}"


def write_output_file(
    content: str, filename: str, output_dir: Optional[str] = None
) -> Path:
    """Write content to a file in the output directory.

    Args:
        content: Content to write
        filename: Name of the file
        output_dir: Directory to write into (default: ./output)

    Returns:
        Path to the written file
    """
    output_path = ensure_output_dir(output_dir) / filename

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(content)
        if not content.endswith("\n"):
            f.write("\n")

    return output_path


def print_output_success(output_path: Path, description: str = "File") -> None:
    """Print a standardized success message for file output."""
    from .cli.colors import GREEN, RESET

    print(f"{GREEN}✅ {description} written to: {output_path}{RESET}", file=sys.stderr)
    print(f"{GREEN}📁 Output directory: {output_path.parent.absolute()}{RESET}", file=sys.stderr)
