"""
Structural equality and coverage over SchemaNode trees.

Equality ignores incidental metadata: array elements and union options are
compared as sets, and every reference equals every other reference no matter
which collection it points to.

Coverage is the subsumption relation used by the type-set reducer: a node
*covers* another when every value shaped like the second is also described by
the first.
"""

from __future__ import annotations

from typing import Iterable

from .models import ArrayNode, ObjectNode, SchemaNode, UnionNode

__all__ = [
    "schema_equals",
    "contains_schema",
    "dedupe_schemas",
    "same_members",
    "covers",
]


def schema_equals(a: SchemaNode, b: SchemaNode) -> bool:
    """Recursive structural equality."""
    if a is b:
        return True
    if a.kind != b.kind:
        return False

    if isinstance(a, ArrayNode):
        return same_members(a.element_types, b.element_types)  # type: ignore[attr-defined]

    if isinstance(a, UnionNode):
        return same_members(a.options, b.options)  # type: ignore[attr-defined]

    if isinstance(a, ObjectNode):
        other_fields = b.fields  # type: ignore[attr-defined]
        if a.fields.keys() != other_fields.keys():
            return False
        return all(
            entry.optional == other_fields[name].optional
            and schema_equals(entry.type, other_fields[name].type)
            for name, entry in a.fields.items()
        )

    # Leaves (reference included): same kind is enough
    return True


def contains_schema(nodes: Iterable[SchemaNode], node: SchemaNode) -> bool:
    """Return True if some member of ``nodes`` structurally equals ``node``."""
    return any(schema_equals(n, node) for n in nodes)


def dedupe_schemas(nodes: Iterable[SchemaNode]) -> list[SchemaNode]:
    """Drop structural duplicates, keeping the first occurrence."""
    unique: list[SchemaNode] = []
    for node in nodes:
        if not contains_schema(unique, node):
            unique.append(node)
    return unique


def same_members(left: list[SchemaNode], right: list[SchemaNode]) -> bool:
    """Set equality of two node lists under ``schema_equals``."""
    return all(contains_schema(right, n) for n in left) and all(
        contains_schema(left, n) for n in right
    )


def covers(general: SchemaNode, specific: SchemaNode) -> bool:
    """
    Return True if ``general`` describes every value ``specific`` describes.

    Rules
    -----
    - A union is covered when each of its options is covered.
    - A union covers anything one of its options covers.
    - Leaves of the same kind cover each other.
    - Arrays: every element type of ``specific`` is covered by some element
      type of ``general``.
    - Objects: every field of ``specific`` exists in ``general`` and is
      covered (an optional field must stay optional there); fields only in
      ``general`` must be optional.
    """
    if isinstance(specific, UnionNode):
        return all(covers(general, option) for option in specific.options)
    if isinstance(general, UnionNode):
        return any(covers(option, specific) for option in general.options)
    if general.kind != specific.kind:
        return False

    if isinstance(general, ArrayNode):
        return all(
            any(covers(g, s) for g in general.element_types)
            for s in specific.element_types  # type: ignore[attr-defined]
        )

    if isinstance(general, ObjectNode):
        specific_fields = specific.fields  # type: ignore[attr-defined]
        for name, entry in specific_fields.items():
            target = general.fields.get(name)
            if target is None:
                return False
            if entry.optional and not target.optional:
                return False
            if not covers(target.type, entry.type):
                return False
        return all(
            entry.optional
            for name, entry in general.fields.items()
            if name not in specific_fields
        )

    # Leaves of the same kind
    return True
