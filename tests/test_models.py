import pytest

from docschema.models import (
    ArrayNode,
    FieldEntry,
    InferenceResult,
    InferenceStats,
    NullNode,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    StringNode,
    UnionNode,
    dump_schema_node,
    leaf,
    object_node,
    parse_schema_node,
)


def test_union_needs_two_options():
    with pytest.raises(ValueError):
        UnionNode(options=[StringNode()])


def test_object_node_accepts_entry_tuple_and_bare_node():
    node = object_node(
        {
            "a": NumberNode(),
            "b": (StringNode(), True),
            "c": FieldEntry(type=NullNode(), optional=False),
        }
    )
    assert node.fields["a"].optional is False
    assert node.fields["b"].optional is True
    assert node.fields["c"].type.kind == "null"


def test_leaf_lookup():
    assert isinstance(leaf("reference"), ReferenceNode)
    with pytest.raises(KeyError):
        leaf("array")


def test_dump_uses_wire_names_and_parses_back():
    tree = object_node(
        {
            "tags": ArrayNode(element_types=[NumberNode(), StringNode()]),
            "owner": (ReferenceNode(ref_path="users/u1"), True),
        }
    )
    data = dump_schema_node(tree)

    assert data["kind"] == "object"
    assert data["fields"]["tags"]["type"]["elementTypes"] == [
        {"kind": "number"},
        {"kind": "string"},
    ]
    assert data["fields"]["owner"]["type"]["refPath"] == "users/u1"

    parsed = parse_schema_node(data)
    assert isinstance(parsed, ObjectNode)
    assert isinstance(parsed.fields["tags"].type, ArrayNode)
    assert parsed.fields["owner"].optional is True


def test_str_forms():
    node = object_node({"a": UnionNode(options=[StringNode(), NullNode()]), "b": (NumberNode(), True)})
    assert str(node) == "{a: union(string | null), b?: number}"
    assert str(ObjectNode()) == "object"


def test_inference_result_schema_alias():
    result = InferenceResult(
        schema_node=StringNode(), stats=InferenceStats(sampled_documents=1, document_id="d1")
    )
    dumped = result.model_dump(mode="json", by_alias=True)
    assert dumped["schema"] == {"kind": "string"}
    assert dumped["stats"] == {"sampledDocuments": 1, "documentId": "d1"}
