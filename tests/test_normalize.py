import pytest

from docschema.models import BooleanNode, NullNode, NumberNode, StringNode, UnionNode
from docschema.normalize import flatten_options, normalize_union


def test_flatten_nested_unions():
    inner = UnionNode(options=[NumberNode(), BooleanNode()])
    flat = flatten_options([StringNode(), inner])
    assert [n.kind for n in flat] == ["string", "number", "boolean"]


def test_dedupes_and_keeps_order():
    node = normalize_union([StringNode(), NullNode(), StringNode()])
    assert isinstance(node, UnionNode)
    assert [n.kind for n in node.options] == ["string", "null"]


def test_single_survivor_is_returned_bare():
    node = normalize_union([StringNode(), UnionNode(options=[StringNode(), StringNode()])])
    assert isinstance(node, StringNode)


def test_empty_raises():
    with pytest.raises(ValueError):
        normalize_union([])
