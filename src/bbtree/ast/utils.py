#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/ast/utils.py
"""Utility functions for walking and comparing BBCode trees."""

from __future__ import annotations

from typing import Iterator, Optional, cast

from bbtree.ast.nodes import Document, Node, TextNode


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document (pre-)order.

    Parameters
    ----------
    node : Node
        Root of the subtree to walk

    Yields
    ------
    Node
        Each node in the subtree, the root first

    """
    pending = [node]
    while pending:
        current = pending.pop()
        yield current
        pending.extend(reversed(current.children))


def text_content(node: Node) -> str:
    """Return the concatenated text of every text node in the subtree."""
    return "".join(item.inner_text for item in walk(node) if isinstance(item, TextNode))


def _normalized_attribute(attribute: Optional[str]) -> Optional[str]:
    if attribute is None:
        return None
    attribute = attribute.strip()
    return attribute or None


def _variant(node: Node) -> type:
    if isinstance(node, TextNode):
        return TextNode
    if isinstance(node, Document):
        return Document
    return Node


def nodes_equal(first: Node, second: Node, normalize_attributes: bool = True) -> bool:
    """Compare two subtrees structurally.

    Two subtrees are equal when they have the same node variants, tag names,
    attributes, singular flags and text, with children in the same order.
    Node identity and parents are ignored.

    Parameters
    ----------
    first, second : Node
        Roots of the subtrees to compare
    normalize_attributes : bool, default True
        Trim attributes and treat blank attributes as absent before comparing

    Returns
    -------
    bool
        True if the subtrees are structurally equal

    """
    pending = [(first, second)]
    while pending:
        left, right = pending.pop()
        if _variant(left) is not _variant(right):
            return False
        if left.tag_name != right.tag_name or left.singular != right.singular:
            return False
        if isinstance(left, TextNode):
            if left.inner_text != cast(TextNode, right).inner_text:
                return False
            continue

        if normalize_attributes:
            if _normalized_attribute(left.attribute) != _normalized_attribute(right.attribute):
                return False
        elif left.attribute != right.attribute:
            return False

        left_children = left.children
        right_children = right.children
        if len(left_children) != len(right_children):
            return False
        pending.extend(zip(left_children, right_children))

    return True


__all__ = ["walk", "text_content", "nodes_equal"]
