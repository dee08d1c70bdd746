from __future__ import annotations

import gzip
import io
import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import ijson
import yaml

from .constants import YAML_EXTENSIONS
from .exceptions import DataFormatError
from .logging_config import get_logger

logger = get_logger(__name__)

__all__ = [
    "open_text",
    "open_binary",
    "sniff_ndjson",
    "iter_records",
    "head_records",
    "load_structured",
]

GZIP_MAGIC = b"\x1f\x8b"


def open_text(path: str) -> io.TextIOWrapper:
    """
    Open a path as text, auto-detecting gzip via magic bytes.

    - Uses UTF-8 with BOM support (`utf-8-sig`)
    - Raises UnicodeDecodeError on invalid sequences (`errors='strict')
    """
    f = open(path, "rb")
    magic = f.read(2)
    f.seek(0)
    if magic == GZIP_MAGIC:
        return io.TextIOWrapper(
            gzip.GzipFile(fileobj=f),  # type: ignore
            encoding="utf-8-sig",
            errors="strict",
        )
    return io.TextIOWrapper(f, encoding="utf-8-sig", errors="strict")


def open_binary(path: str):
    """
    Open a path as *binary*, auto-detecting gzip via magic bytes.
    Useful for `ijson`, which prefers bytes streams.
    """
    f = open(path, "rb")
    head = f.read(2)
    f.seek(0)
    if head == GZIP_MAGIC:
        return gzip.GzipFile(fileobj=f)
    return f


def sniff_ndjson(sample: str) -> bool:
    """
    Heuristic: if the first two non-empty lines both start with '{', treat as NDJSON.
    """
    lines = [ln.strip() for ln in sample.splitlines() if ln.strip()]
    return len(lines) >= 2 and lines[0].startswith("{") and lines[1].startswith("{")


def _iter_lines(f) -> Iterator[Any]:
    for line in f:
        line = line.strip()
        if line:
            yield json.loads(line)


def iter_records(path: str) -> Iterator[Any]:
    """
    Yield records from a JSON-ish file that could be:
      1) NDJSON (one JSON object per line)
      2) A single JSON object
      3) A JSON array of objects (streamed with ijson)

    Numbers inside streamed arrays arrive as ``decimal.Decimal``; the
    classifier treats them as numbers.
    """
    with open_text(path) as f:
        buf = f.read(8192)
        f.seek(0)

        if not buf.strip():
            return
        s = buf.lstrip()

        if sniff_ndjson(buf):
            yield from _iter_lines(f)
            return

        # Single object OR NDJSON with a very long first line
        if s.startswith("{"):
            try:
                yield json.load(f)
                return
            except json.JSONDecodeError:
                f.seek(0)
                yield from _iter_lines(f)
                return

        if s.startswith("["):
            # Reopen as binary for ijson
            with open_binary(path) as fb:
                yield from ijson.items(fb, "item")
            return

        # Last resort: line-by-line JSON-ish
        yield from _iter_lines(f)


def head_records(path: str, limit: int | None = None) -> list[Any]:
    """Read the first ``limit`` records of a file (all of them when None)."""
    records = []
    for i, rec in enumerate(iter_records(path)):
        if limit is not None and i >= limit:
            logger.info("Stopped reading %s at %d records", path, limit)
            break
        records.append(rec)
    return records


def load_structured(path: str) -> Any:
    """
    Load a whole JSON or YAML document (chosen by file extension).

    Raises
    ------
    DataFormatError
        If the content cannot be parsed.
    """
    suffixes = [s.lower() for s in Path(path).suffixes if s.lower() != ".gz"]
    is_yaml = bool(suffixes) and suffixes[-1] in YAML_EXTENSIONS
    with open_text(path) as f:
        try:
            if is_yaml:
                return yaml.safe_load(f)
            return json.load(f)
        except json.JSONDecodeError as e:
            raise DataFormatError(
                f"Invalid JSON: {e.msg}", file_path=path, line_number=e.lineno, cause=e
            ) from e
        except yaml.YAMLError as e:
            raise DataFormatError(f"Invalid YAML: {e}", file_path=path, cause=e) from e
