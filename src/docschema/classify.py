"""Value → SchemaNode classification used when deriving schemas from documents.

Produced kinds:
- Scalars: "null" | "boolean" | "number" | "string"
- Store-native: "timestamp" | "geopoint" | "reference" | "bytes"
- Containers: "array" | "object"

Store-native values are recognised through a ``ValueDetector``: a bundle of
capability predicates supplied by the document store. The default detector
only knows the standard library (``datetime``/``date`` and binary buffers);
the Firestore adapter injects one that also knows ``GeoPoint`` and
``DocumentReference``.

Datetime inference from strings is gated by Config.infer_datetimes; when
enabled, ISO timestamps (YYYY-MM-DD[ T]HH:MM[:SS[.f]][Z|±HH:MM]) and ISO dates
classify as "timestamp".
"""

from __future__ import annotations

import base64
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Optional

from .config import Config
from .models import (
    ArrayNode,
    BooleanNode,
    BytesNode,
    FieldEntry,
    GeoPointNode,
    NullNode,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    SchemaNode,
    StringNode,
    TimestampNode,
)
from .reduce import merge_types

# Precompiled ISO-ish patterns (simple and fast)
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
ISO_TS_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}"
    r"(?::\d{2}(?:\.\d{1,9})?)?"
    r"(?:[Zz]|[+-]\d{2}:\d{2})?$"
)


def _is_datetime(value: Any) -> bool:
    return isinstance(value, (datetime, date))


def _is_binary(value: Any) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview))


def _never(value: Any) -> bool:
    return False


def _no_path(value: Any) -> Optional[str]:
    return None


@dataclass(frozen=True)
class ValueDetector:
    """Capability predicates for store-native value types."""

    is_timestamp: Callable[[Any], bool] = _is_datetime
    is_geopoint: Callable[[Any], bool] = _never
    is_reference: Callable[[Any], bool] = _never
    is_bytes: Callable[[Any], bool] = _is_binary
    reference_path: Callable[[Any], Optional[str]] = _no_path


DEFAULT_DETECTOR = ValueDetector()


class ValueClassifier:
    """Classify raw document values into schema nodes.

    Classification is total: values of unknown types are described as
    ``string`` rather than raising.
    """

    def __init__(self, detector: Optional[ValueDetector] = None, cfg: Optional[Config] = None):
        self.detector = detector or DEFAULT_DETECTOR
        self.cfg = cfg or Config()

    def classify(self, value: Any) -> SchemaNode:
        """Map a Python value to its schema node.

        Notes
        -----
        - `bool` must be checked before numbers (since `bool` is a subclass of `int`).
        - Store-native values are tested before the generic mapping test, so a
          wrapper type that also behaves like a mapping is still recognised.
        - Array elements are classified independently and reduced to a
          minimal covering set.
        """
        if value is None:
            return NullNode()

        # Order matters: bool before int
        if isinstance(value, bool):
            return BooleanNode()

        if isinstance(value, (int, float, Decimal)):
            return NumberNode()

        if isinstance(value, str):
            if self.cfg.infer_datetimes and _looks_like_datetime(value):
                return TimestampNode()
            return StringNode()

        det = self.detector
        if det.is_timestamp(value):
            return TimestampNode()
        if det.is_geopoint(value):
            return GeoPointNode()
        if det.is_reference(value):
            return ReferenceNode(ref_path=det.reference_path(value))
        if det.is_bytes(value):
            return BytesNode()

        if isinstance(value, (list, tuple)):
            return ArrayNode(element_types=merge_types(self.classify(v) for v in value))

        if isinstance(value, Mapping):
            return ObjectNode(
                fields={
                    str(k): FieldEntry(type=self.classify(v), optional=False)
                    for k, v in value.items()
                }
            )

        # Fallback for uncommon types (sets, custom objects, numpy scalars, etc.)
        return StringNode()

    def to_plain(self, value: Any) -> Any:
        """Convert a raw value into JSON-serializable data for examples."""
        if value is None or isinstance(value, (bool, int, float, str)):
            return value
        if isinstance(value, Decimal):
            return float(value)

        det = self.detector
        if det.is_timestamp(value):
            return value.isoformat() if hasattr(value, "isoformat") else str(value)
        if det.is_geopoint(value):
            return {
                "latitude": getattr(value, "latitude", None),
                "longitude": getattr(value, "longitude", None),
            }
        if det.is_reference(value):
            return det.reference_path(value)
        if det.is_bytes(value):
            return base64.b64encode(bytes(value)).decode("ascii")

        if isinstance(value, (list, tuple)):
            return [self.to_plain(v) for v in value]
        if isinstance(value, Mapping):
            return {str(k): self.to_plain(v) for k, v in value.items()}
        return str(value)


def _looks_like_datetime(value: str) -> bool:
    s = value.strip()  # be tolerant of incidental whitespace
    return bool(ISO_TS_RE.match(s) or ISO_DATE_RE.match(s))


def classify_value(
    value: Any,
    detector: Optional[ValueDetector] = None,
    cfg: Optional[Config] = None,
) -> SchemaNode:
    """Classify a single value with a throwaway ``ValueClassifier``."""
    return ValueClassifier(detector, cfg).classify(value)


__all__ = [
    "ValueDetector",
    "DEFAULT_DETECTOR",
    "ValueClassifier",
    "classify_value",
    "ISO_DATE_RE",
    "ISO_TS_RE",
]
