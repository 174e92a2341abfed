#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/ast/visitors.py
"""Visitor pattern implementation for tree traversal.

Every node variant implements ``accept(visitor)`` and dispatches to one of
the three ``visit_*`` methods below, which lets renderers keep their logic
out of the node classes.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from bbtree.ast.nodes import Document, Node, TextNode


class NodeVisitor(ABC):
    """Abstract base class for tree visitors.

    Examples
    --------
    Visitor that counts tags by name:

        >>> from collections import Counter
        >>> class TagCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.counts = Counter()
        ...
        ...     def visit_document(self, node):
        ...         for child in node.children:
        ...             child.accept(self)
        ...
        ...     def visit_node(self, node):
        ...         self.counts[node.tag_name] += 1
        ...         for child in node.children:
        ...             child.accept(self)
        ...
        ...     def visit_text(self, node):
        ...         pass

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit the Document root."""

    @abstractmethod
    def visit_node(self, node: Node) -> Any:
        """Visit a tag Node."""

    @abstractmethod
    def visit_text(self, node: TextNode) -> Any:
        """Visit a TextNode."""
