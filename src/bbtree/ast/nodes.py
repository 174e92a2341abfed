#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/ast/nodes.py
"""Tree node classes for BBCode document representation.

This module defines the mutable node hierarchy produced by the BBCode parser
and consumed by the renderers. A tree is made of three node variants:

- ``Node``: a tag such as ``[b]...[/b]`` or ``[url=...]...[/url]``. Container
  nodes hold an ordered list of children; singular nodes (``[hr]``) never do.
- ``TextNode``: a literal run of text between tags. Always singular.
- ``Document``: the root of a parsed tree. Never singular, never attached.

Ownership
---------
Ownership flows from parent to child: a node's ``children`` list is the only
strong reference the tree keeps. The ``parent`` back-reference is a
``weakref`` used for upward navigation only. A node has at most one parent,
and moving a node is always "remove, then attach"; attaching a node that
still has a parent raises ``InvalidArgumentError``.

Every mutation validates all of its preconditions before touching any state,
so a failed call leaves both trees exactly as they were.

Trees are not safe for concurrent mutation. Callers sharing a tree between
threads must serialize access themselves.

"""

from __future__ import annotations

import weakref
from typing import Any, Iterator, Optional, Union, cast, overload

from bbtree.constants import DOCUMENT_TAG_NAME, TEXT_NODE_TAG_NAME
from bbtree.exceptions import IndexOutOfRangeError, InvalidArgumentError, InvalidStateError


def normalize_tag_name(tag_name: Any) -> str:
    """Validate and normalize a tag name.

    Parameters
    ----------
    tag_name : Any
        Candidate tag name

    Returns
    -------
    str
        The stripped, lowercased tag name

    Raises
    ------
    InvalidArgumentError
        If the tag name is not a string, or is empty or whitespace-only

    """
    if not isinstance(tag_name, str):
        raise InvalidArgumentError(
            f"Tag name must be a string, got {type(tag_name).__name__}", argument_name="tag_name"
        )

    tag_name = tag_name.strip()
    if not tag_name:
        raise InvalidArgumentError("Tag name cannot be empty", argument_name="tag_name")

    return tag_name.lower()


class Node:
    """A BBCode tag node.

    Parameters
    ----------
    tag_name : str
        The node's tag name. Mandatory; stored stripped and lowercased.
    attribute : str or None, default = None
        Optional free-text attribute, the part of ``[tag=attribute]`` after
        the equals sign
    singular : bool, default = False
        Singular nodes are self-closing and can never have children

    Raises
    ------
    InvalidArgumentError
        If ``tag_name`` is missing, empty or whitespace-only

    Examples
    --------
    Building a tree programmatically:

        >>> quote = Node("quote", "Alice")
        >>> _ = quote.append_child(TextNode("Hello"))
        >>> _ = quote.create_child("hr", singular=True)
        >>> str(quote)
        '[quote=Alice]Hello[hr][/quote]'

    """

    def __init__(self, tag_name: str, attribute: Optional[str] = None, singular: bool = False) -> None:
        """Initialize the node, validating the tag name."""
        self._tag_name = normalize_tag_name(tag_name)
        self._attribute: Optional[str] = None
        self.attribute = attribute
        self._singular = bool(singular)
        self._children: list[Node] = []
        self._parent_ref: Optional[weakref.ReferenceType[Node]] = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def tag_name(self) -> str:
        """Get the lowercased tag name."""
        return self._tag_name

    @property
    def attribute(self) -> Optional[str]:
        """Get or set the optional attribute text."""
        return self._attribute

    @attribute.setter
    def attribute(self, value: Optional[str]) -> None:
        if value is not None and not isinstance(value, str):
            raise InvalidArgumentError(
                f"Attribute must be a string or None, got {type(value).__name__}", argument_name="attribute"
            )
        self._attribute = value

    @property
    def singular(self) -> bool:
        """Whether the node is self-closing and childless."""
        return self._singular

    @property
    def parent(self) -> Optional[Node]:
        """Get the parent node, or None for a detached node."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def children(self) -> tuple[Node, ...]:
        """Get a snapshot of the immediate children in document order."""
        return tuple(self._children)

    @property
    def has_children(self) -> bool:
        """Whether the node currently has any children."""
        return bool(self._children)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_children(self, tag_name: str) -> list[Node]:
        """Return all immediate children with the given tag name.

        The search is not recursive and preserves document order.

        Parameters
        ----------
        tag_name : str
            Tag name to match (case-insensitive)

        Returns
        -------
        list of Node
            Matching children

        """
        name = normalize_tag_name(tag_name)
        return [child for child in self._children if child._tag_name == name]

    def child_at(self, index: int) -> Node:
        """Return the child at ``index``.

        Raises
        ------
        IndexOutOfRangeError
            If ``index`` is not in ``range(len(children))``

        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._children):
            raise IndexOutOfRangeError(index, len(self._children))
        return self._children[index]

    def index_of(self, child: Node) -> int:
        """Return the position of ``child`` among this node's children.

        Raises
        ------
        InvalidArgumentError
            If ``child`` is not a child of this node

        """
        return self._require_child(child, "child")

    @overload
    def __getitem__(self, key: int) -> Node: ...

    @overload
    def __getitem__(self, key: str) -> list[Node]: ...

    def __getitem__(self, key: Union[int, str]) -> Union[Node, list[Node]]:
        """Index by position (``node[0]``) or look up by tag name (``node["b"]``)."""
        if isinstance(key, str):
            return self.find_children(key)
        if isinstance(key, int):
            return self.child_at(key)
        raise TypeError(f"Node indices must be integers or tag names, not {type(key).__name__}")

    def __iter__(self) -> Iterator[Node]:
        """Iterate over a snapshot of the immediate children."""
        return iter(tuple(self._children))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append_child(self, node: Node) -> Node:
        """Attach ``node`` as the last child.

        Parameters
        ----------
        node : Node
            A detached node

        Returns
        -------
        Node
            The node passed

        Raises
        ------
        InvalidStateError
            If this node is singular
        InvalidArgumentError
            If ``node`` is already attached, or is this node or one of its ancestors

        """
        self._check_attachable(node, "node")
        self._attach(len(self._children), node)
        return node

    def prepend_child(self, node: Node) -> Node:
        """Attach ``node`` as the first child.

        Raises the same errors as :meth:`append_child`.
        """
        self._check_attachable(node, "node")
        self._attach(0, node)
        return node

    def create_child(self, tag_name: str, attribute: Optional[str] = None, singular: bool = False) -> Node:
        """Create a new node and append it as the last child.

        Returns
        -------
        Node
            The newly created child

        """
        if self._singular:
            raise InvalidStateError(f"Cannot add children to singular node [{self._tag_name}]")
        return self.append_child(Node(tag_name, attribute, singular))

    def insert_before(self, node: Node, before: Node) -> Node:
        """Attach ``node`` immediately before the existing child ``before``.

        Raises
        ------
        InvalidStateError
            If this node is singular
        InvalidArgumentError
            If ``node`` is already attached or would create a cycle, or if
            ``before`` is not a child of this node

        """
        self._check_attachable(node, "node")
        index = self._require_child(before, "before")
        self._attach(index, node)
        return node

    def insert_after(self, node: Node, after: Node) -> Node:
        """Attach ``node`` immediately after the existing child ``after``.

        Raises the same errors as :meth:`insert_before`.
        """
        self._check_attachable(node, "node")
        index = self._require_child(after, "after")
        self._attach(index + 1, node)
        return node

    def remove_child(self, node: Node) -> Node:
        """Detach the child ``node`` and return it for reuse.

        Raises
        ------
        InvalidArgumentError
            If ``node`` is not a child of this node

        """
        index = self._require_child(node, "node")
        del self._children[index]
        node._parent_ref = None
        return node

    def remove_all(self) -> list[Node]:
        """Detach every child and return them in their former order."""
        removed = self._children
        self._children = []
        for child in removed:
            child._parent_ref = None
        return removed

    def replace_child(self, old: Node, new: Node) -> Node:
        """Put ``new`` in the position held by the child ``old``.

        Parameters
        ----------
        old : Node
            Current child to replace; it is detached
        new : Node
            Detached replacement node

        Returns
        -------
        Node
            The detached ``old`` node

        Raises
        ------
        InvalidArgumentError
            If ``old`` is not a child of this node, or ``new`` is already
            attached or would create a cycle

        """
        index = self._require_child(old, "old")
        self._check_detached(new, "new")
        self._children[index] = new
        old._parent_ref = None
        new._parent_ref = weakref.ref(self)
        return old

    # ------------------------------------------------------------------
    # Copying
    # ------------------------------------------------------------------

    def clone(self) -> Node:
        """Create a deep, detached copy of this node and its subtree.

        The copy shares no mutable state with the original and has no parent.
        """
        root = self._copy_without_children()
        pending: list[tuple[Node, Node]] = [(self, root)]
        while pending:
            source, target = pending.pop()
            for child in source._children:
                child_copy = child._copy_without_children()
                target._attach(len(target._children), child_copy)
                pending.append((child, child_copy))
        return root

    def _copy_without_children(self) -> Node:
        return Node(self._tag_name, self._attribute, self._singular)

    # ------------------------------------------------------------------
    # Visitor support and dunders
    # ------------------------------------------------------------------

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Returns
        -------
        Any
            Result from visitor.visit_node(self)

        """
        return visitor.visit_node(self)

    def __str__(self) -> str:
        """Return the canonical BBCode for this subtree."""
        from bbtree.ast.serialization import to_string

        return to_string(self)

    def __repr__(self) -> str:
        """Return a short debugging representation."""
        return (
            f"{type(self).__name__}(tag_name={self._tag_name!r}, attribute={self._attribute!r}, "
            f"singular={self._singular!r}, children={len(self._children)})"
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _attach(self, index: int, node: Node) -> None:
        self._children.insert(index, node)
        node._parent_ref = weakref.ref(self)

    def _check_attachable(self, node: Any, argument_name: str) -> None:
        if self._singular:
            raise InvalidStateError(f"Cannot add children to singular node [{self._tag_name}]")
        self._check_detached(node, argument_name)

    def _check_detached(self, node: Any, argument_name: str) -> None:
        if not isinstance(node, Node):
            raise InvalidArgumentError(
                f"'{argument_name}' must be a Node, got {type(node).__name__}", argument_name=argument_name
            )
        if isinstance(node, Document):
            raise InvalidArgumentError("A Document cannot be attached to another node", argument_name=argument_name)
        if node.parent is not None:
            raise InvalidArgumentError(
                f"The '{argument_name}' node is already a child of another node", argument_name=argument_name
            )
        # A childless node can only be an ancestor of itself
        if node is self or (node._children and node._is_ancestor_of(self)):
            raise InvalidArgumentError(
                f"Attaching the '{argument_name}' node here would make it its own ancestor",
                argument_name=argument_name,
            )

    def _require_child(self, node: Any, argument_name: str) -> int:
        if isinstance(node, Node) and node.parent is self:
            for index, child in enumerate(self._children):
                if child is node:
                    return index
        raise InvalidArgumentError(
            f"The '{argument_name}' node is not a child of this node", argument_name=argument_name
        )

    def _is_ancestor_of(self, other: Node) -> bool:
        current = other.parent
        while current is not None:
            if current is self:
                return True
            current = current.parent
        return False


class TextNode(Node):
    """A literal run of text between tags.

    Text nodes always use the sentinel tag name ``span``, are always singular
    and serialize as their raw ``inner_text`` with no bracket decoration.

    Parameters
    ----------
    inner_text : str, default = ""
        Initial text content

    """

    def __init__(self, inner_text: str = "") -> None:
        """Initialize the text node with its initial content."""
        super().__init__(TEXT_NODE_TAG_NAME, None, singular=True)
        self._text = ""
        self.inner_text = inner_text

    @property
    def inner_text(self) -> str:
        """Get or set the text content."""
        return self._text

    @inner_text.setter
    def inner_text(self, value: str) -> None:
        if not isinstance(value, str):
            raise InvalidArgumentError(
                f"Text must be a string, got {type(value).__name__}", argument_name="inner_text"
            )
        self._text = value

    def append_text(self, text: str) -> None:
        """Append ``text`` to the end of the content."""
        if not isinstance(text, str):
            raise InvalidArgumentError(f"Text must be a string, got {type(text).__name__}", argument_name="text")
        self._text += text

    def _copy_without_children(self) -> Node:
        return TextNode(self._text)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor, dispatching to visitor.visit_text(self)."""
        return visitor.visit_text(self)

    def __repr__(self) -> str:
        """Return a short debugging representation."""
        return f"TextNode({self._text!r})"


class Document(Node):
    """Root node of a BBCode tree, similar to the HTML ``<body>`` element.

    A document uses the sentinel tag name ``body``, is never singular and can
    never be attached beneath another node.
    """

    def __init__(self) -> None:
        """Initialize an empty document."""
        super().__init__(DOCUMENT_TAG_NAME)

    def _copy_without_children(self) -> Node:
        document = Document()
        document.attribute = self._attribute
        return document

    def clone(self) -> Document:
        """Create a deep copy of the whole document."""
        return cast(Document, super().clone())

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor, dispatching to visitor.visit_document(self)."""
        return visitor.visit_document(self)


__all__ = ["Node", "TextNode", "Document", "normalize_tag_name"]
