"""
Union normalization.

Conventions enforced by normalization
-------------------------------------
- Nested unions are flattened into their parent's option list.
- Options are deduped by structural equality (first occurrence wins, so the
  caller's ordering is kept for display).
- A single surviving option is returned as-is instead of a one-member union.
- Presence is NOT decided here; optionality lives on object fields and is
  handled by the merger and the aggregator.

Public helpers exposed
----------------------
- flatten_options
- normalize_union
"""

from __future__ import annotations

from typing import Iterable

from .equality import dedupe_schemas
from .models import SchemaNode, UnionNode


def flatten_options(options: Iterable[SchemaNode]) -> list[SchemaNode]:
    """Replace every union in ``options`` by its own options, recursively."""
    flat: list[SchemaNode] = []
    for option in options:
        if isinstance(option, UnionNode):
            flat.extend(flatten_options(option.options))
        else:
            flat.append(option)
    return flat


def normalize_union(options: Iterable[SchemaNode]) -> SchemaNode:
    """
    Build the canonical node for a set of alternatives.

    - Flatten nested unions.
    - Dedupe by structural equality.
    - If only one option remains, return that option instead of a union.

    Raises
    ------
    ValueError
        If ``options`` is empty; an empty union has no meaning.
    """
    unique = dedupe_schemas(flatten_options(options))
    if not unique:
        raise ValueError("Cannot normalize an empty union")
    if len(unique) == 1:
        return unique[0]
    return UnionNode(options=unique)


__all__ = ["flatten_options", "normalize_union"]
