"""
Type-set reduction.

``merge_types`` collapses a bag of independently observed types (typically
the classified elements of one array) into a minimal set that still covers
every input.
"""

from __future__ import annotations

from typing import Iterable

from .equality import covers, dedupe_schemas
from .models import SchemaNode, UnionNode
from .normalize import flatten_options

__all__ = ["merge_types"]


def merge_types(types: Iterable[SchemaNode]) -> list[SchemaNode]:
    """
    Reduce ``types`` to a minimal covering set.

    Each incoming type is merged into the first accumulated entry that can
    absorb it losslessly: the merge must not produce a union and must still
    cover the incoming type. In practice that means same-kind entries fold
    together (objects with partially overlapping fields become one object
    whose non-shared fields are optional) while different kinds stay
    separate entries. Union inputs are treated as their options.

    Guarantees
    ----------
    - ``len(result) <= len(flattened input)``
    - every input is covered by exactly one result entry
    - no two result entries are structurally equal
    """
    from .merge import merge_two

    result: list[SchemaNode] = []
    for incoming in flatten_options(types):
        for i, entry in enumerate(result):
            merged = merge_two(entry, incoming)
            if isinstance(merged, UnionNode) or not covers(merged, incoming):
                continue
            result[i] = merged
            break
        else:
            result.append(incoming)

    return dedupe_schemas(flatten_options(result))
