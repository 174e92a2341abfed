#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_tree_properties.py
"""Property-based tests for the parser, serializer and tree invariants.

These tests use Hypothesis to check the laws the library guarantees:

- Round trip: parsing serialized markup rebuilds an equal tree
- Lenient totality: lenient parsing never fails
- Strict/lenient agreement on well-formed markup
- Ownership: every node has at most one parent, consistent with its
  parent's children, and no cycles are reachable
- Singular nodes never accept children

"""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from bbtree.ast import Document, Node, TextNode, nodes_equal, to_string, walk
from bbtree.exceptions import InvalidArgumentError, InvalidStateError, ParseError
from bbtree.parsers.bbcode import parse

SINGULAR_TAGS = frozenset({"hr", "br"})
CONTAINER_TAGS = ["b", "i", "u", "quote", "url", "size", "h1"]

text_strategy = st.text(
    alphabet=st.characters(blacklist_characters="[]", blacklist_categories=("Cs",)),
    min_size=1,
    max_size=12,
)
attribute_strategy = st.one_of(
    st.none(),
    st.text(alphabet=st.characters(blacklist_characters="]", blacklist_categories=("Cs",)), max_size=12),
)

leaf_strategy = st.one_of(
    text_strategy.map(lambda text: ("text", text)),
    st.tuples(st.sampled_from(sorted(SINGULAR_TAGS)), attribute_strategy).map(lambda t: ("singular", *t)),
)

tree_strategy = st.recursive(
    leaf_strategy,
    lambda children: st.tuples(
        st.sampled_from(CONTAINER_TAGS),
        attribute_strategy,
        st.lists(children, max_size=4),
    ).map(lambda t: ("container", *t)),
    max_leaves=25,
)

markup_fragments = st.one_of(
    st.sampled_from(
        ["[b]", "[/b]", "[I]", "[/i]", "[url=http://x]", "[/url]", "[hr]", "[br/]", "[quote= a ]", "[/quote]"]
    ),
    st.sampled_from(["[", "]", "/", "=", "[/", "[=", "[b", " "]),
    st.text(max_size=4),
)
markup_strategy = st.lists(markup_fragments, max_size=30).map("".join)


def _append(parent: Node, spec) -> None:
    kind = spec[0]
    if kind == "text":
        last = parent.children[-1] if parent.has_children else None
        if isinstance(last, TextNode):
            last.append_text(spec[1])
        else:
            parent.append_child(TextNode(spec[1]))
    elif kind == "singular":
        parent.append_child(Node(spec[1], spec[2], singular=True))
    else:
        node = parent.append_child(Node(spec[1], spec[2]))
        for child in spec[3]:
            _append(node, child)


def build_document(specs) -> Document:
    doc = Document()
    for spec in specs:
        _append(doc, spec)
    return doc


def assert_ownership_invariant(nodes) -> None:
    seen_as_child = {}
    for node in nodes:
        for child in node.children:
            assert child.parent is node
            assert id(child) not in seen_as_child
            seen_as_child[id(child)] = node
    for node in nodes:
        if node.parent is None:
            assert id(node) not in seen_as_child
        else:
            assert seen_as_child[id(node)] is node.parent
        visited = set()
        current = node
        while current is not None:
            assert id(current) not in visited, "cycle reachable through parent links"
            visited.add(id(current))
            current = current.parent


@pytest.mark.unit
@pytest.mark.fuzzing
class TestParserProperties:
    """Property-based tests for parsing and serialization."""

    @given(st.lists(tree_strategy, max_size=5))
    @settings(suppress_health_check=[HealthCheck.too_slow], deadline=None)
    def test_round_trip(self, specs):
        """Test that parse(to_string(tree)) rebuilds an equal tree."""
        original = build_document(specs)
        markup = to_string(original)
        reparsed = parse(markup, strict=True, singular_tags=SINGULAR_TAGS)
        assert nodes_equal(reparsed, original)
        assert to_string(reparsed) == to_string(parse(to_string(reparsed), strict=True, singular_tags=SINGULAR_TAGS))

    @given(st.text())
    @settings(deadline=None)
    def test_lenient_totality_on_any_text(self, markup):
        """Test that lenient parsing accepts arbitrary strings."""
        doc = parse(markup)
        assert isinstance(doc, Document)

    @given(markup_strategy)
    @settings(deadline=None)
    def test_lenient_totality_on_markup_like_text(self, markup):
        """Test lenient parsing on inputs dense with brackets and tags."""
        doc = parse(markup, singular_tags=SINGULAR_TAGS)
        nodes = list(walk(doc))
        assert_ownership_invariant(nodes)
        for node in nodes:
            if isinstance(node, TextNode):
                assert node.inner_text != ""
            if node.singular:
                assert not node.has_children
        for node in nodes:
            children = node.children
            for left, right in zip(children, children[1:]):
                assert not (isinstance(left, TextNode) and isinstance(right, TextNode))

    @given(markup_strategy)
    @settings(deadline=None)
    def test_strict_lenient_agreement(self, markup):
        """Test that lenient mode agrees with strict mode whenever strict succeeds."""
        try:
            strict_doc = parse(markup, strict=True, singular_tags=SINGULAR_TAGS)
        except ParseError as e:
            assert 0 <= e.position < len(markup)
            assert markup[e.position] == "["
            return
        lenient_doc = parse(markup, strict=False, singular_tags=SINGULAR_TAGS)
        assert nodes_equal(strict_doc, lenient_doc)

    @given(st.lists(tree_strategy, max_size=5))
    @settings(suppress_health_check=[HealthCheck.too_slow], deadline=None)
    def test_strict_lenient_agreement_on_serialized_trees(self, specs):
        """Test agreement on markup that is well-formed by construction."""
        markup = to_string(build_document(specs))
        strict_doc = parse(markup, strict=True, singular_tags=SINGULAR_TAGS)
        lenient_doc = parse(markup, strict=False, singular_tags=SINGULAR_TAGS)
        assert nodes_equal(strict_doc, lenient_doc)


OPERATIONS = ["append", "prepend", "insert_before", "insert_after", "remove", "replace", "remove_all"]


def _apply(operation: str, target: Node, other: Node) -> None:
    if operation == "append":
        target.append_child(other)
    elif operation == "prepend":
        target.prepend_child(other)
    elif operation == "insert_before":
        reference = target.children[0] if target.has_children else other
        target.insert_before(other, reference)
    elif operation == "insert_after":
        reference = target.children[-1] if target.has_children else other
        target.insert_after(other, reference)
    elif operation == "remove":
        target.remove_child(other)
    elif operation == "replace":
        old = target.children[-1] if target.has_children else other
        target.replace_child(old, other)
    else:
        target.remove_all()


def _snapshot(nodes):
    return [(node.parent, node.children) for node in nodes]


@pytest.mark.unit
@pytest.mark.fuzzing
class TestOwnershipProperties:
    """Property-based tests for tree mutation."""

    @given(
        st.lists(
            st.tuples(st.sampled_from(OPERATIONS), st.integers(0, 8), st.integers(0, 8)),
            max_size=60,
        )
    )
    @settings(deadline=None)
    def test_ownership_invariant(self, operations):
        """Test that any sequence of edits keeps parent links consistent and acyclic."""
        nodes = [Node(f"n{i}") for i in range(7)] + [Node("hr", singular=True), TextNode("t")]
        for operation, target_index, other_index in operations:
            target, other = nodes[target_index], nodes[other_index]
            before = _snapshot(nodes)
            try:
                _apply(operation, target, other)
            except (InvalidArgumentError, InvalidStateError):
                assert _snapshot(nodes) == before
            assert_ownership_invariant(nodes)

    @given(
        st.sampled_from(["append", "prepend", "insert_before", "insert_after"]),
        st.one_of(st.just(None), attribute_strategy),
        st.sampled_from(CONTAINER_TAGS + sorted(SINGULAR_TAGS)),
    )
    def test_singular_enforcement(self, operation, attribute, tag_name):
        """Test that singular nodes reject every attach operation."""
        parent = Node("p")
        singular = parent.append_child(Node(tag_name, attribute, singular=True))
        text = parent.append_child(TextNode("x"))
        for target in (singular, text):
            with pytest.raises(InvalidStateError):
                _apply(operation, target, Node("b"))
            assert target.children == ()
        assert parent.children == (singular, text)
