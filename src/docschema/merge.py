"""
Pairwise schema merging.

``merge_two`` combines two nodes describing the same logical field (two
samples of one document field, or two whole documents) into one node that
describes both.

Rules, in order
---------------
1. Structurally equal          → the left operand.
2. null vs non-union X         → union(X | null).
3. Either side a union         → the other side's options are merged into the
                                 option set, then the set is normalized. An
                                 incoming object/array folds into the union's
                                 existing object/array option.
4. array vs array              → element sets concatenated and reduced.
5. object vs object            → fieldwise merge; one-sided fields optional.
6. Anything else               → union(a | b).
"""

from __future__ import annotations

from .equality import schema_equals
from .models import ArrayNode, FieldEntry, NodeKind, ObjectNode, SchemaNode, UnionNode
from .normalize import flatten_options, normalize_union
from .reduce import merge_types

__all__ = ["merge_two", "merge_all"]

# Kinds that merge structurally instead of forming a union with each other
COMPOSITE_KINDS = {NodeKind.ARRAY.value, NodeKind.OBJECT.value}


def merge_two(a: SchemaNode, b: SchemaNode) -> SchemaNode:
    """Merge two schema nodes; commutative and idempotent up to equality."""
    if schema_equals(a, b):
        return a

    if a.kind == NodeKind.NULL and not isinstance(b, UnionNode):
        return normalize_union([b, a])
    if b.kind == NodeKind.NULL and not isinstance(a, UnionNode):
        return normalize_union([a, b])

    if isinstance(a, UnionNode) or isinstance(b, UnionNode):
        return _merge_into_union(a, b)

    if isinstance(a, ArrayNode) and isinstance(b, ArrayNode):
        return ArrayNode(element_types=merge_types([*a.element_types, *b.element_types]))

    if isinstance(a, ObjectNode) and isinstance(b, ObjectNode):
        return _merge_objects(a, b)

    return normalize_union([a, b])


def merge_all(nodes: list[SchemaNode]) -> SchemaNode:
    """Left fold of ``merge_two`` over a non-empty list."""
    if not nodes:
        raise ValueError("merge_all() needs at least one node")
    merged = nodes[0]
    for node in nodes[1:]:
        merged = merge_two(merged, node)
    return merged


def _merge_into_union(a: SchemaNode, b: SchemaNode) -> SchemaNode:
    base, incoming = (a, b) if isinstance(a, UnionNode) else (b, a)
    options = list(base.options)  # type: ignore[attr-defined]
    for node in flatten_options([incoming]):
        _absorb(options, node)
    return normalize_union(options)


def _absorb(options: list[SchemaNode], node: SchemaNode) -> None:
    """Fold ``node`` into a same-kind composite option, else append it."""
    if node.kind in COMPOSITE_KINDS:
        for i, existing in enumerate(options):
            if existing.kind == node.kind:
                options[i] = merge_two(existing, node)
                return
    options.append(node)


def _merge_objects(a: ObjectNode, b: ObjectNode) -> ObjectNode:
    fields: dict[str, FieldEntry] = {}
    for name in [*a.fields, *(k for k in b.fields if k not in a.fields)]:
        left = a.fields.get(name)
        right = b.fields.get(name)
        if left is not None and right is not None:
            fields[name] = FieldEntry(
                type=merge_two(left.type, right.type),
                optional=left.optional or right.optional,
            )
        else:
            # The other sample lacked this field entirely
            present = left if left is not None else right
            fields[name] = FieldEntry(type=present.type, optional=True)  # type: ignore[union-attr]
    return ObjectNode(fields=fields)
