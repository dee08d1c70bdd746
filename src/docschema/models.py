#!/usr/bin/env python3
"""
Structural type representation for docschema.

A ``SchemaNode`` is a closed, recursive tagged union discriminated by
``kind``. Leaf kinds carry no payload (``reference`` carries an optional
target path hint); ``array`` holds a set of element types, ``object`` a
mapping of field name to ``FieldEntry`` and ``union`` two or more
non-union options.

Using Pydantic for validation and (de)serialization. Trees are built fresh
for every inference request and never shared between requests.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class NodeKind(str, Enum):
    """Discriminant values for every SchemaNode variant."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    TIMESTAMP = "timestamp"
    GEOPOINT = "geopoint"
    REFERENCE = "reference"
    BYTES = "bytes"
    ARRAY = "array"
    OBJECT = "object"
    UNION = "union"


class SchemaNode(BaseModel):
    """Base class for all schema nodes."""

    # camelCase on the wire (elementTypes, refPath), snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    kind: str

    def __str__(self) -> str:
        return self.kind


class NullNode(SchemaNode):
    kind: Literal["null"] = "null"


class BooleanNode(SchemaNode):
    kind: Literal["boolean"] = "boolean"


class NumberNode(SchemaNode):
    kind: Literal["number"] = "number"


class StringNode(SchemaNode):
    kind: Literal["string"] = "string"


class TimestampNode(SchemaNode):
    kind: Literal["timestamp"] = "timestamp"


class GeoPointNode(SchemaNode):
    kind: Literal["geopoint"] = "geopoint"


class BytesNode(SchemaNode):
    kind: Literal["bytes"] = "bytes"


class ReferenceNode(SchemaNode):
    """Store-native document reference.

    ``ref_path`` is a display hint only; two references are always
    structurally equal regardless of what they point at.
    """

    kind: Literal["reference"] = "reference"
    ref_path: Optional[str] = None


class ArrayNode(SchemaNode):
    """Array whose element types form an (unordered) reduced set."""

    kind: Literal["array"] = "array"
    element_types: List[AnySchemaNode] = Field(default_factory=list)

    def __str__(self) -> str:
        return f"array({' | '.join(str(t) for t in self.element_types)})"


class FieldEntry(BaseModel):
    """One object field: its type and whether some sample lacked it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: AnySchemaNode
    optional: bool = False


class ObjectNode(SchemaNode):
    """Object with uniquely named fields."""

    kind: Literal["object"] = "object"
    fields: Dict[str, FieldEntry] = Field(default_factory=dict)

    def __str__(self) -> str:
        if not self.fields:
            return "object"
        field_strs = [
            f"{k}{'?' if v.optional else ''}: {v.type}" for k, v in self.fields.items()
        ]
        return f"{{{', '.join(field_strs)}}}"


class UnionNode(SchemaNode):
    """Union of two or more distinct, non-union options."""

    kind: Literal["union"] = "union"
    options: List[AnySchemaNode]

    def model_post_init(self, _context: Any) -> None:
        """Validate that union has at least 2 options."""
        if len(self.options) < 2:
            raise ValueError("Union must have at least 2 options")

    def __str__(self) -> str:
        return f"union({' | '.join(str(t) for t in self.options)})"


AnySchemaNode = Annotated[
    Union[
        NullNode,
        BooleanNode,
        NumberNode,
        StringNode,
        TimestampNode,
        GeoPointNode,
        BytesNode,
        ReferenceNode,
        ArrayNode,
        ObjectNode,
        UnionNode,
    ],
    Field(discriminator="kind"),
]

ArrayNode.model_rebuild()
FieldEntry.model_rebuild()
ObjectNode.model_rebuild()
UnionNode.model_rebuild()

_NODE_ADAPTER: TypeAdapter = TypeAdapter(AnySchemaNode)

LEAF_TYPES: Dict[str, type[SchemaNode]] = {
    NodeKind.NULL.value: NullNode,
    NodeKind.BOOLEAN.value: BooleanNode,
    NodeKind.NUMBER.value: NumberNode,
    NodeKind.STRING.value: StringNode,
    NodeKind.TIMESTAMP.value: TimestampNode,
    NodeKind.GEOPOINT.value: GeoPointNode,
    NodeKind.BYTES.value: BytesNode,
    NodeKind.REFERENCE.value: ReferenceNode,
}


class InferenceStats(BaseModel):
    """Sampling statistics reported alongside an inferred schema."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sampled_documents: int
    document_id: Optional[str] = None


class InferenceResult(BaseModel):
    """Aggregator output: the inferred schema plus its first example."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    schema_node: AnySchemaNode = Field(alias="schema")
    stats: InferenceStats
    example: Optional[Dict[str, Any]] = None


# Convenience functions for creating schema nodes
def leaf(kind: Union[str, NodeKind]) -> SchemaNode:
    """Create a leaf node for ``kind``."""
    key = kind.value if isinstance(kind, NodeKind) else kind
    return LEAF_TYPES[key]()


def object_node(fields: Mapping[str, Any]) -> ObjectNode:
    """Create an object node.

    ``fields`` values may be a ``FieldEntry``, a ``(node, optional)`` pair or
    a bare node (required).
    """
    entries: Dict[str, FieldEntry] = {}
    for name, value in fields.items():
        if isinstance(value, FieldEntry):
            entries[name] = value
        elif isinstance(value, tuple):
            node, optional = value
            entries[name] = FieldEntry(type=node, optional=optional)
        else:
            entries[name] = FieldEntry(type=value, optional=False)
    return ObjectNode(fields=entries)


def parse_schema_node(data: Any) -> SchemaNode:
    """Validate a serialized tree (``model_dump`` output) back into nodes."""
    return _NODE_ADAPTER.validate_python(data)


def dump_schema_node(node: SchemaNode) -> Dict[str, Any]:
    """Serialize a tree to plain JSON-compatible data with wire aliases."""
    return node.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "NodeKind",
    "SchemaNode",
    "NullNode",
    "BooleanNode",
    "NumberNode",
    "StringNode",
    "TimestampNode",
    "GeoPointNode",
    "BytesNode",
    "ReferenceNode",
    "ArrayNode",
    "FieldEntry",
    "ObjectNode",
    "UnionNode",
    "AnySchemaNode",
    "LEAF_TYPES",
    "InferenceStats",
    "InferenceResult",
    "leaf",
    "object_node",
    "parse_schema_node",
    "dump_schema_node",
]
