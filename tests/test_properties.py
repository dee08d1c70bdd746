"""Property-based checks of the merge algebra and the renderer."""

import re
import string

from hypothesis import given, settings
from hypothesis import strategies as st

from docschema.aggregate import infer_collection_schema
from docschema.classify import classify_value
from docschema.equality import covers, schema_equals
from docschema.merge import merge_two
from docschema.models import ArrayNode, ObjectNode, UnionNode
from docschema.normalize import flatten_options, normalize_union
from docschema.reduce import merge_types
from docschema.render import to_declaration
from docschema.store import StoreDocument

keys = st.text(alphabet=string.ascii_letters + string.digits + '_- "\\{}<>\né', max_size=4)
scalars = (
    st.none()
    | st.booleans()
    | st.integers()
    | st.floats(allow_nan=False)
    | st.text(max_size=3)
    | st.binary(max_size=2)
)
values = st.recursive(
    scalars,
    lambda children: st.lists(children, max_size=3) | st.dictionaries(keys, children, max_size=3),
    max_leaves=8,
)
documents = st.dictionaries(keys, values, max_size=4)
nodes = values.map(classify_value)

KEY_RE = re.compile(r'^\s*("(?:[^"\\]|\\.)*"|[A-Za-z_][A-Za-z0-9_]*)\??: ')
PAIRS = {"}": "{", "]": "[", ">": "<"}


def walk(node):
    yield node
    if isinstance(node, ArrayNode):
        for t in node.element_types:
            yield from walk(t)
    elif isinstance(node, UnionNode):
        for t in node.options:
            yield from walk(t)
    elif isinstance(node, ObjectNode):
        for entry in node.fields.values():
            yield from walk(entry.type)


def brackets_balanced(text):
    stack = []
    in_string = escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in "{[<":
            stack.append(ch)
        elif ch in PAIRS:
            if not stack or stack.pop() != PAIRS[ch]:
                return False
    return not stack and not in_string


@given(nodes, nodes)
def test_merge_is_commutative(a, b):
    assert schema_equals(merge_two(a, b), merge_two(b, a))


@given(nodes)
def test_merge_is_idempotent(a):
    assert schema_equals(merge_two(a, a), a)


@given(nodes, nodes, nodes)
@settings(max_examples=50)
def test_merged_unions_are_well_formed(a, b, c):
    merged = merge_two(merge_two(a, b), c)
    for node in walk(merged):
        if isinstance(node, UnionNode):
            assert len(node.options) >= 2
            assert not any(isinstance(o, UnionNode) for o in node.options)


@given(st.lists(nodes, min_size=1, max_size=5))
def test_normalize_union_never_degenerate(options):
    node = normalize_union(options)
    if isinstance(node, UnionNode):
        assert len(node.options) >= 2
        assert not any(isinstance(o, UnionNode) for o in node.options)


@given(st.lists(nodes, max_size=6))
def test_merge_types_is_a_minimal_cover(types):
    out = merge_types(types)
    assert len(out) <= len(flatten_options(types))
    for t in flatten_options(types):
        assert sum(1 for o in out if covers(o, t)) == 1


@given(st.lists(documents, min_size=1, max_size=5))
@settings(max_examples=50)
def test_collection_optionality_matches_presence(datas):
    docs = [StoreDocument(id=str(i), data=d) for i, d in enumerate(datas)]
    schema = infer_collection_schema(docs).schema_node

    for name, entry in schema.fields.items():
        present = sum(1 for d in datas if name in d)
        assert entry.optional == (present < len(datas))


@given(values)
def test_declarations_are_balanced_and_keys_are_safe(value):
    text = to_declaration(classify_value(value))
    assert brackets_balanced(text)
    for line in text.splitlines()[1:]:
        stripped = line.strip()
        assert stripped.startswith("}") or KEY_RE.match(line)
