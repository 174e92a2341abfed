"""bbtree - BBCode parsing into a mutable document tree.

bbtree reads BBCode (Bulletin Board Code) markup, the bracketed tag syntax
used by forums and message boards, and turns it into a tree of ``Node``
objects that can be inspected, edited, serialized back to canonical BBCode
and rendered as HTML.

Key Features
------------
- Single-pass parser with strict and lenient error policies
- Mutable tree with parent/child ownership enforced on every edit
- Canonical serialization: ``parse(to_string(doc))`` rebuilds the same tree
- HTML rendering with direct tag mapping and pluggable tag renderers
- JSON/dict export of trees
- Command-line interface with file-based configuration

Requirements
------------
- Python 3.10+
- Optional: rich for pretty CLI tree output

Examples
--------
Parse and serialize:

    >>> from bbtree import parse, to_string
    >>> doc = parse("[B]Hello[/b] [url=https://example.com]world[/url]")
    >>> to_string(doc)
    '[b]Hello[/b] [url=https://example.com]world[/url]'

Edit the tree:

    >>> from bbtree import Node, TextNode
    >>> quote = doc.append_child(Node("quote", "Ann"))
    >>> _ = quote.append_child(TextNode("hi"))
    >>> to_string(doc)[-21:]
    '[quote=Ann]hi[/quote]'

Render HTML:

    >>> from bbtree import bb_to_html
    >>> bb_to_html("[b]bold[/b][hr]")
    '<b>bold</b><hr />'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "bbtree requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from bbtree.api import bb_to_html, to_ast, to_html
from bbtree.ast import (
    Document,
    Node,
    NodeVisitor,
    TextNode,
    ast_to_dict,
    ast_to_json,
    dict_to_ast,
    json_to_ast,
    nodes_equal,
    to_string,
    walk,
)
from bbtree.exceptions import (
    BBTreeError,
    DependencyError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidOptionsError,
    InvalidStateError,
    ParseError,
    RenderingError,
    ValidationError,
)
from bbtree.options import BBCodeParserOptions, HtmlRendererOptions
from bbtree.parsers import BBCodeParser, parse
from bbtree.renderers import HtmlRenderer


__all__ = [
    "__version__",
    # Convenience API
    "bb_to_html",
    "parse",
    "to_ast",
    "to_html",
    "to_string",
    # Tree model
    "Document",
    "Node",
    "NodeVisitor",
    "TextNode",
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
    "nodes_equal",
    "walk",
    # Parser and renderer
    "BBCodeParser",
    "BBCodeParserOptions",
    "HtmlRenderer",
    "HtmlRendererOptions",
    # Exceptions
    "BBTreeError",
    "DependencyError",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "InvalidOptionsError",
    "InvalidStateError",
    "ParseError",
    "RenderingError",
    "ValidationError",
]
