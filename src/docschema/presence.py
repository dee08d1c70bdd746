# docschema/presence.py
from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping

from .models import FieldEntry, ObjectNode, SchemaNode


def count_presence(documents: Iterable[Mapping]) -> Counter:
    """Count, per top-level field name, how many documents carry it."""
    presence: Counter = Counter()
    for data in documents:
        presence.update(str(k) for k in data.keys())
    return presence


def apply_presence(node: SchemaNode, presence: Mapping[str, int], total: int) -> SchemaNode:
    """
    Rewrite top-level field optionality from observed presence counts.

    A field is optional iff it was seen in fewer than ``total`` documents. The
    counts are authoritative: they replace whatever flag pairwise merging left
    behind. Nested objects keep their merged flags. Non-object roots are
    returned untouched.
    """
    if not isinstance(node, ObjectNode):
        return node
    fields = {
        name: FieldEntry(type=entry.type, optional=presence.get(name, 0) < total)
        for name, entry in node.fields.items()
    }
    return ObjectNode(fields=fields)
