import pytest

from docschema.equality import schema_equals
from docschema.merge import merge_all, merge_two
from docschema.models import (
    ArrayNode,
    BooleanNode,
    NullNode,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    StringNode,
    UnionNode,
    dump_schema_node,
    object_node,
)


def kinds(node):
    return sorted(o.kind for o in node.options)


def test_equal_inputs_return_left_operand():
    left = StringNode()
    assert merge_two(left, StringNode()) is left


def test_references_to_different_targets_merge_to_one_reference():
    left = ReferenceNode(ref_path="users/a")
    assert merge_two(left, ReferenceNode(ref_path="teams/b")) is left


def test_null_then_string_then_null_again():
    first = merge_two(NullNode(), StringNode())
    assert isinstance(first, UnionNode)
    assert kinds(first) == ["null", "string"]

    again = merge_two(first, NullNode())
    assert schema_equals(again, first)
    assert len(again.options) == 2


def test_distinct_leaves_form_union():
    node = merge_two(NumberNode(), StringNode())
    assert kinds(node) == ["number", "string"]


def test_union_absorbs_new_option():
    node = merge_two(UnionNode(options=[StringNode(), NumberNode()]), BooleanNode())
    assert kinds(node) == ["boolean", "number", "string"]


def test_union_with_union_is_flat():
    a = UnionNode(options=[StringNode(), NullNode()])
    b = UnionNode(options=[NumberNode(), NullNode()])
    node = merge_two(a, b)
    assert kinds(node) == ["null", "number", "string"]
    assert all(not isinstance(o, UnionNode) for o in node.options)


def test_object_fields_missing_on_one_side_become_optional():
    a = object_node({"a": NumberNode(), "b": StringNode()})
    b = object_node({"a": NumberNode()})
    merged = merge_two(a, b)

    assert isinstance(merged, ObjectNode)
    assert merged.fields["a"].optional is False
    assert merged.fields["b"].optional is True
    assert merged.fields["b"].type.kind == "string"


def test_shared_field_optionality_is_ored():
    a = object_node({"a": (NumberNode(), True)})
    b = object_node({"a": NumberNode()})
    assert merge_two(a, b).fields["a"].optional is True
    assert merge_two(b, a).fields["a"].optional is True


def test_nested_objects_merge_recursively():
    a = object_node({"profile": object_node({"city": StringNode()})})
    b = object_node({"profile": object_node({"zip": NumberNode()})})
    profile = merge_two(a, b).fields["profile"]

    assert profile.optional is False
    assert profile.type.fields["city"].optional is True
    assert profile.type.fields["zip"].optional is True


def test_field_type_conflict_becomes_union():
    a = object_node({"v": NumberNode()})
    b = object_node({"v": NullNode()})
    field = merge_two(a, b).fields["v"]
    assert field.optional is False
    assert kinds(field.type) == ["null", "number"]


def test_arrays_reduce_their_elements():
    a = ArrayNode(element_types=[NumberNode()])
    b = ArrayNode(element_types=[StringNode(), NumberNode()])
    merged = merge_two(a, b)
    assert isinstance(merged, ArrayNode)
    assert sorted(t.kind for t in merged.element_types) == ["number", "string"]


def test_object_folds_into_union_object_option():
    nullable = UnionNode(options=[object_node({"a": NumberNode()}), NullNode()])
    merged = merge_two(nullable, object_node({"b": StringNode()}))

    assert kinds(merged) == ["null", "object"]
    obj = next(o for o in merged.options if o.kind == "object")
    assert set(obj.fields) == {"a", "b"}
    assert obj.fields["a"].optional and obj.fields["b"].optional


def test_array_and_object_stay_separate():
    node = merge_two(ArrayNode(), ObjectNode())
    assert kinds(node) == ["array", "object"]


def test_inputs_are_not_mutated():
    a = object_node({"a": NumberNode(), "tags": ArrayNode(element_types=[StringNode()])})
    b = object_node({"b": BooleanNode(), "tags": ArrayNode(element_types=[NumberNode()])})
    before = (dump_schema_node(a), dump_schema_node(b))

    merge_two(a, b)

    assert (dump_schema_node(a), dump_schema_node(b)) == before


def test_merge_all_folds_left():
    node = merge_all([NumberNode(), NullNode(), NumberNode()])
    assert kinds(node) == ["null", "number"]


def test_merge_all_requires_input():
    with pytest.raises(ValueError):
        merge_all([])
