#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/ast/__init__.py
"""Tree model for parsed BBCode documents.

This package contains the node classes, the canonical serializer, the
visitor base class and helpers for walking and comparing trees.

Examples
--------
    >>> from bbtree.ast import Document, Node, TextNode, to_string
    >>> doc = Document()
    >>> bold = doc.append_child(Node("b"))
    >>> _ = bold.append_child(TextNode("hello"))
    >>> to_string(doc)
    '[b]hello[/b]'

"""

from bbtree.ast.nodes import Document, Node, TextNode, normalize_tag_name
from bbtree.ast.serialization import (
    ast_to_dict,
    ast_to_json,
    dict_to_ast,
    json_to_ast,
    to_string,
)
from bbtree.ast.utils import nodes_equal, text_content, walk
from bbtree.ast.visitors import NodeVisitor

__all__ = [
    "Node",
    "TextNode",
    "Document",
    "normalize_tag_name",
    "NodeVisitor",
    "to_string",
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
    "nodes_equal",
    "text_content",
    "walk",
]
