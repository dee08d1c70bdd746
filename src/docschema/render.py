"""
Rendering of inferred schemas.

- ``to_declaration`` emits TypeScript type text (objects as ``{ key?: T; }``
  blocks, arrays as ``Array<A | B>``, unions as ``A | B``).
- ``to_type_alias`` wraps a declaration in ``export type Name = ...``.
- ``to_summary`` builds a JSON-serializable display tree for UIs.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

from .constants import (
    BYTES_TYPE_NAME,
    COLLECTION_TYPE_SUFFIX,
    DEFAULT_INDENT_SIZE,
    DOCUMENT_TYPE_SUFFIX,
    EMPTY_ARRAY_TYPE_NAME,
    FALLBACK_TYPE_PREFIX,
    GEOPOINT_TYPE_NAME,
    IDENTIFIER_PATTERN,
    MODE_DOCUMENT,
    REFERENCE_TYPE_NAME,
    TIMESTAMP_TYPE_NAME,
)
from .models import ArrayNode, NodeKind, ObjectNode, SchemaNode, UnionNode
from .store import split_path

_IDENTIFIER_RE = re.compile(IDENTIFIER_PATTERN)
_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]")

# Leaf kind -> declared type
LEAF_DECLARATIONS: Dict[str, str] = {
    NodeKind.NULL.value: "null",
    NodeKind.BOOLEAN.value: "boolean",
    NodeKind.NUMBER.value: "number",
    NodeKind.STRING.value: "string",
    NodeKind.TIMESTAMP.value: TIMESTAMP_TYPE_NAME,
    NodeKind.GEOPOINT.value: GEOPOINT_TYPE_NAME,
    NodeKind.BYTES.value: BYTES_TYPE_NAME,
    NodeKind.REFERENCE.value: REFERENCE_TYPE_NAME,
}


def escape_key(key: str) -> str:
    """Return ``key`` bare when it is an identifier, JSON-quoted otherwise."""
    return key if _IDENTIFIER_RE.fullmatch(key) else json.dumps(key)


def to_declaration(
    node: SchemaNode, indent: int = 0, indent_size: int = DEFAULT_INDENT_SIZE
) -> str:
    """Render ``node`` as a TypeScript type expression.

    ``indent`` is the nesting depth of the line the expression starts on;
    nested object members are indented one level deeper.
    """
    if isinstance(node, ObjectNode):
        if not node.fields:
            return "{}"
        pad = " " * (indent_size * (indent + 1))
        lines = [
            f"{pad}{escape_key(name)}{'?' if entry.optional else ''}: "
            f"{to_declaration(entry.type, indent + 1, indent_size)};"
            for name, entry in node.fields.items()
        ]
        closing = " " * (indent_size * indent)
        return "{\n" + "\n".join(lines) + f"\n{closing}}}"

    if isinstance(node, ArrayNode):
        if not node.element_types:
            return EMPTY_ARRAY_TYPE_NAME
        inner = " | ".join(to_declaration(t, indent, indent_size) for t in node.element_types)
        return f"Array<{inner}>"

    if isinstance(node, UnionNode):
        return " | ".join(to_declaration(t, indent, indent_size) for t in node.options)

    return LEAF_DECLARATIONS[node.kind]


def to_type_alias(
    name: str, node: SchemaNode, indent_size: int = DEFAULT_INDENT_SIZE
) -> str:
    """Render ``export type <name> = <declaration>;``."""
    return f"export type {name} = {to_declaration(node, 0, indent_size)};"


def derive_type_name(path: str, mode: Optional[str] = None) -> str:
    """
    Build a PascalCase type name from a store path.

    ``users/{id}/orders`` in collection mode becomes
    ``UsersIdOrdersCollectionDocument``; segments are stripped of
    non-alphanumerics and a path with nothing left falls back to
    ``Inferred<suffix>``.
    """
    parts = []
    for segment in split_path(path):
        cleaned = _NON_ALNUM_RE.sub("", segment)
        if cleaned:
            parts.append(cleaned[0].upper() + cleaned[1:])
    base = "".join(parts) or FALLBACK_TYPE_PREFIX
    if base[0].isdigit():
        base = FALLBACK_TYPE_PREFIX + base
    suffix = DOCUMENT_TYPE_SUFFIX if mode == MODE_DOCUMENT else COLLECTION_TYPE_SUFFIX
    return base + suffix


def kind_label(node: SchemaNode) -> str:
    """Short label such as ``string``, ``array(number | string)``, ``union(object | null)``."""
    if isinstance(node, ArrayNode):
        return f"array({' | '.join(kind_label(t) for t in node.element_types)})"
    if isinstance(node, UnionNode):
        return f"union({' | '.join(kind_label(t) for t in node.options)})"
    return node.kind


def to_summary(node: SchemaNode) -> Dict[str, Any]:
    """
    Build a display tree.

    Objects map each field to ``{"type", "optional"[, "fields"]}`` (nested
    ``fields`` only for object-typed fields); arrays and unions list their
    member labels; leaves report their kind.
    """
    if isinstance(node, ObjectNode):
        summary: Dict[str, Any] = {}
        for name, entry in node.fields.items():
            item: Dict[str, Any] = {
                "type": kind_label(entry.type),
                "optional": entry.optional,
            }
            if isinstance(entry.type, ObjectNode):
                item["fields"] = to_summary(entry.type)
            summary[name] = item
        return summary

    if isinstance(node, ArrayNode):
        return {"type": "array", "elements": [kind_label(t) for t in node.element_types]}

    if isinstance(node, UnionNode):
        return {"type": "union", "options": [kind_label(t) for t in node.options]}

    return {"type": kind_label(node)}


__all__ = [
    "LEAF_DECLARATIONS",
    "escape_key",
    "to_declaration",
    "to_type_alias",
    "derive_type_name",
    "kind_label",
    "to_summary",
]
