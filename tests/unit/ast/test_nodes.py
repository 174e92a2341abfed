#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_nodes.py
"""Unit tests for the tree node classes.

Tests cover:
- Node creation and tag name validation
- Attaching, detaching and replacing children
- Ownership and cycle prevention
- Singular node enforcement
- Lookup, indexed access and cloning

"""

import gc

import pytest

from bbtree.ast import Document, Node, TextNode
from bbtree.exceptions import IndexOutOfRangeError, InvalidArgumentError, InvalidStateError


@pytest.mark.unit
class TestNodeCreation:
    """Tests for constructing nodes."""

    def test_tag_name_is_lowercased_and_stripped(self):
        """Test that tag names are normalized on construction."""
        node = Node("  QUOTE ")
        assert node.tag_name == "quote"
        assert node.attribute is None
        assert node.singular is False
        assert node.parent is None
        assert node.children == ()

    @pytest.mark.parametrize("bad_name", ["", "   ", None, 42])
    def test_invalid_tag_name_raises(self, bad_name):
        """Test that missing, empty or non-string tag names are rejected."""
        with pytest.raises(InvalidArgumentError):
            Node(bad_name)

    def test_invalid_tag_name_is_also_value_error(self):
        """Test that InvalidArgumentError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Node("")

    def test_attribute_is_read_write(self):
        """Test setting the attribute after construction."""
        node = Node("url", "http://a")
        node.attribute = "http://b"
        assert node.attribute == "http://b"
        node.attribute = None
        assert node.attribute is None

    def test_attribute_must_be_string(self):
        """Test that non-string attributes are rejected."""
        with pytest.raises(InvalidArgumentError):
            Node("size", 12)

    def test_text_node_defaults(self):
        """Test the sentinel values of a text node."""
        text = TextNode("hello")
        assert text.tag_name == "span"
        assert text.singular is True
        assert text.inner_text == "hello"

    def test_text_node_append_text(self):
        """Test appending to a text node."""
        text = TextNode("foo")
        text.append_text("bar")
        assert text.inner_text == "foobar"

    def test_text_node_rejects_non_string(self):
        """Test that text content must be a string."""
        with pytest.raises(InvalidArgumentError):
            TextNode(None)
        text = TextNode()
        with pytest.raises(InvalidArgumentError):
            text.append_text(3)

    def test_document_defaults(self):
        """Test the sentinel values of a document."""
        doc = Document()
        assert doc.tag_name == "body"
        assert doc.singular is False
        assert doc.parent is None

    def test_repr(self):
        """Test debugging representations."""
        assert repr(TextNode("x")) == "TextNode('x')"
        assert repr(Node("b")) == "Node(tag_name='b', attribute=None, singular=False, children=0)"


@pytest.mark.unit
class TestAttaching:
    """Tests for append, prepend and insert operations."""

    def test_append_child_sets_parent_and_order(self):
        """Test that appended children keep their order."""
        parent = Node("list")
        first = parent.append_child(Node("li"))
        second = parent.append_child(Node("li"))
        assert parent.children == (first, second)
        assert first.parent is parent
        assert second.parent is parent

    def test_prepend_child(self):
        """Test attaching a child at the start."""
        parent = Node("p")
        last = parent.append_child(TextNode("b"))
        first = parent.prepend_child(TextNode("a"))
        assert parent.children == (first, last)

    def test_insert_before_and_after(self):
        """Test splicing relative to a reference child."""
        parent = Node("p")
        middle = parent.append_child(Node("b"))
        before = parent.insert_before(Node("i"), middle)
        after = parent.insert_after(Node("u"), middle)
        assert parent.children == (before, middle, after)
        assert middle.parent is parent

    def test_insert_after_last_child(self):
        """Test that inserting after the last child appends."""
        parent = Node("p")
        only = parent.append_child(Node("b"))
        tail = parent.insert_after(Node("i"), only)
        assert parent.children[-1] is tail

    def test_create_child(self):
        """Test creating and appending a child in one call."""
        parent = Node("quote")
        child = parent.create_child("URL", "http://x", singular=False)
        assert child.tag_name == "url"
        assert child.attribute == "http://x"
        assert child.parent is parent

    def test_insert_with_foreign_reference_fails(self):
        """Test that the reference node must be a child of the receiver."""
        parent = Node("p")
        parent.append_child(Node("b"))
        stranger = Node("i")
        with pytest.raises(InvalidArgumentError):
            parent.insert_before(Node("u"), stranger)
        with pytest.raises(InvalidArgumentError):
            parent.insert_after(Node("u"), stranger)
        assert len(parent.children) == 1

    def test_attaching_attached_node_fails(self):
        """Test that a node cannot have two parents."""
        first = Node("p")
        second = Node("p")
        child = first.append_child(Node("b"))

        with pytest.raises(InvalidArgumentError):
            second.append_child(child)
        with pytest.raises(InvalidArgumentError):
            first.append_child(child)

        assert child.parent is first
        assert first.children == (child,)
        assert second.children == ()

    def test_move_is_remove_then_attach(self):
        """Test moving a node between parents."""
        first = Node("p")
        second = Node("p")
        child = first.append_child(Node("b"))
        second.append_child(first.remove_child(child))
        assert child.parent is second
        assert first.children == ()

    def test_attaching_self_fails(self):
        """Test that a node cannot become its own child."""
        node = Node("quote")
        with pytest.raises(InvalidArgumentError):
            node.append_child(node)

    def test_attaching_ancestor_fails(self):
        """Test that cycles cannot be created through a detached root."""
        root = Node("quote")
        inner = root.append_child(Node("b"))
        leaf = inner.append_child(Node("i"))
        with pytest.raises(InvalidArgumentError):
            leaf.append_child(root)
        assert root.parent is None
        assert leaf.children == ()

    def test_attaching_document_fails(self):
        """Test that a document can never be a child."""
        with pytest.raises(InvalidArgumentError):
            Node("quote").append_child(Document())

    def test_attaching_non_node_fails(self):
        """Test that only nodes can be attached."""
        with pytest.raises(InvalidArgumentError):
            Node("p").append_child("text")


@pytest.mark.unit
class TestSingularNodes:
    """Tests for singular node enforcement."""

    @pytest.mark.parametrize(
        "operation",
        [
            lambda node, child: node.append_child(child),
            lambda node, child: node.prepend_child(child),
            lambda node, child: node.create_child("b"),
        ],
    )
    def test_singular_node_rejects_children(self, operation):
        """Test that singular nodes never accept children."""
        node = Node("hr", singular=True)
        with pytest.raises(InvalidStateError):
            operation(node, Node("b"))
        assert node.children == ()

    def test_text_node_rejects_children(self):
        """Test that text nodes are singular."""
        with pytest.raises(InvalidStateError):
            TextNode("x").append_child(Node("b"))

    def test_singular_check_comes_before_argument_check(self):
        """Test that the state error wins even for an attached argument."""
        parent = Node("p")
        attached = parent.append_child(Node("b"))
        with pytest.raises(InvalidStateError):
            Node("hr", singular=True).append_child(attached)
        assert attached.parent is parent

    def test_invalid_state_is_runtime_error(self):
        """Test that InvalidStateError can be caught as RuntimeError."""
        with pytest.raises(RuntimeError):
            Node("br", singular=True).append_child(Node("b"))


@pytest.mark.unit
class TestDetaching:
    """Tests for remove and replace operations."""

    def test_remove_child_returns_detached_node(self):
        """Test that removed nodes are detached and reusable."""
        parent = Node("p")
        child = parent.append_child(Node("b"))
        removed = parent.remove_child(child)
        assert removed is child
        assert child.parent is None
        assert parent.children == ()
        Node("p").append_child(child)

    def test_remove_non_child_fails(self):
        """Test that only current children can be removed."""
        parent = Node("p")
        other = Node("q")
        grandchild = parent.append_child(Node("b")).append_child(Node("i"))
        with pytest.raises(InvalidArgumentError):
            parent.remove_child(other)
        with pytest.raises(InvalidArgumentError):
            parent.remove_child(grandchild)
        assert grandchild.parent is not None

    def test_remove_all(self):
        """Test detaching every child at once."""
        parent = Node("p")
        children = [parent.append_child(Node("b")), parent.append_child(TextNode("x"))]
        removed = parent.remove_all()
        assert removed == children
        assert parent.children == ()
        assert all(child.parent is None for child in children)

    def test_replace_child_preserves_position(self):
        """Test that the replacement takes the old child's slot."""
        parent = Node("p")
        first = parent.append_child(Node("b"))
        old = parent.append_child(Node("i"))
        last = parent.append_child(Node("u"))
        new = Node("s")

        returned = parent.replace_child(old, new)

        assert returned is old
        assert old.parent is None
        assert new.parent is parent
        assert parent.children == (first, new, last)

    def test_replace_with_attached_node_fails(self):
        """Test that a failed replace leaves both trees untouched."""
        parent = Node("p")
        old = parent.append_child(Node("i"))
        elsewhere = Node("q")
        new = elsewhere.append_child(Node("s"))

        with pytest.raises(InvalidArgumentError):
            parent.replace_child(old, new)

        assert parent.children == (old,)
        assert old.parent is parent
        assert new.parent is elsewhere

    def test_replace_non_child_fails(self):
        """Test that the replaced node must be a child."""
        with pytest.raises(InvalidArgumentError):
            Node("p").replace_child(Node("i"), Node("b"))


@pytest.mark.unit
class TestLookup:
    """Tests for lookup by tag name and by index."""

    def test_find_children_is_not_recursive(self):
        """Test that lookup only considers immediate children."""
        parent = Node("quote")
        first = parent.append_child(Node("b"))
        parent.append_child(Node("i")).append_child(Node("b"))
        second = parent.append_child(Node("B"))
        assert parent.find_children("b") == [first, second]
        assert parent["B"] == [first, second]
        assert parent.find_children("u") == []

    def test_child_at(self):
        """Test indexed access."""
        parent = Node("p")
        first = parent.append_child(Node("b"))
        second = parent.append_child(Node("i"))
        assert parent.child_at(0) is first
        assert parent[1] is second

    @pytest.mark.parametrize("index", [2, -1, 100])
    def test_child_at_out_of_range(self, index):
        """Test that out of range indices raise IndexOutOfRangeError."""
        parent = Node("p")
        parent.append_child(Node("b"))
        parent.append_child(Node("i"))
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            parent.child_at(index)
        assert exc_info.value.index == index
        assert exc_info.value.size == 2

    def test_index_out_of_range_is_index_error(self):
        """Test that IndexOutOfRangeError can be caught as IndexError."""
        with pytest.raises(IndexError):
            Node("p")[0]

    def test_unsupported_key_type(self):
        """Test that only ints and strings index a node."""
        with pytest.raises(TypeError):
            Node("p")[1.5]

    def test_index_of(self):
        """Test finding a child's position."""
        parent = Node("p")
        parent.append_child(Node("b"))
        child = parent.append_child(Node("i"))
        assert parent.index_of(child) == 1
        with pytest.raises(InvalidArgumentError):
            parent.index_of(Node("i"))

    def test_iteration_uses_snapshot(self):
        """Test that mutating during iteration is safe."""
        parent = Node("p")
        for name in ("b", "i", "u"):
            parent.append_child(Node(name))
        for child in parent:
            parent.remove_child(child)
        assert parent.children == ()

    def test_children_is_a_snapshot(self):
        """Test that the children tuple cannot alter the tree."""
        parent = Node("p")
        parent.append_child(Node("b"))
        snapshot = parent.children
        parent.append_child(Node("i"))
        assert len(snapshot) == 1
        assert len(parent.children) == 2


@pytest.mark.unit
class TestClone:
    """Tests for deep copying."""

    def test_clone_is_deep_and_detached(self):
        """Test that a clone shares no state with the original."""
        parent = Node("p")
        original = parent.append_child(Node("quote", "Ann"))
        original.append_child(TextNode("hi"))
        original.append_child(Node("hr", singular=True))

        copy = original.clone()

        assert copy is not original
        assert copy.parent is None
        assert copy.tag_name == "quote"
        assert copy.attribute == "Ann"
        assert isinstance(copy.children[0], TextNode)
        assert copy.children[0].inner_text == "hi"
        assert copy.children[1].singular is True
        assert copy.children[0].parent is copy

        copy.children[0].append_text("!")
        assert original.children[0].inner_text == "hi"

    def test_clone_document(self):
        """Test that cloning a document yields a document."""
        doc = Document()
        doc.attribute = "lang"
        doc.append_child(TextNode("x"))
        copy = doc.clone()
        assert isinstance(copy, Document)
        assert copy.children[0].inner_text == "x"
        assert copy.attribute == "lang"
        assert copy.parent is None
        assert copy is not doc

    def test_clone_deep_tree(self):
        """Test that cloning very deep trees does not recurse."""
        root = Node("b")
        current = root
        for _ in range(5000):
            current = current.append_child(Node("b"))
        copy = root.clone()
        depth = 0
        while copy.has_children:
            copy = copy.children[0]
            depth += 1
        assert depth == 5000


@pytest.mark.unit
class TestParentReference:
    """Tests for the non-owning parent back-reference."""

    def test_parent_does_not_keep_tree_alive(self):
        """Test that a child alone does not keep its parent alive."""
        parent = Node("quote")
        child = parent.append_child(Node("b"))
        del parent
        gc.collect()
        assert child.parent is None
