#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/ast/serialization.py
"""Serialization of BBCode trees.

This module converts trees back to canonical BBCode markup and to and from a
JSON-friendly dictionary format.

Canonical markup
----------------
:func:`to_string` rebuilds markup from a tree:

- A node renders as ``[tag]`` (or ``[tag=attribute]`` when the attribute is
  non-empty after trimming), followed, unless singular, by its children and
  ``[/tag]``.
- A ``TextNode`` renders as its raw text.
- A ``Document`` renders as the concatenation of its children, so that
  ``to_string(parse(markup))`` is canonical markup for ``markup``.

Parsing the output again yields a structurally equal tree as long as the
tree only contains alphanumeric tag names, attributes without ``]`` and text
without brackets, and every singular node's tag name is in the singular set
given to the parser.

Examples
--------
    >>> from bbtree.parsers.bbcode import parse
    >>> to_string(parse("[i=bold]text[/i]"))
    '[i=bold]text[/i]'

    >>> data = ast_to_dict(parse("[b]hi[/b]"))
    >>> data["children"][0]["tag_name"]
    'b'

"""

from __future__ import annotations

import json
from typing import Any, Union

from bbtree.ast.nodes import Document, Node, TextNode
from bbtree.exceptions import BBTreeError, ValidationError


def format_opening_tag(node: Node) -> str:
    """Return the opening tag markup for ``node``, e.g. ``[url=http://x]``."""
    attribute = node.attribute
    if attribute is not None and attribute.strip():
        return f"[{node.tag_name}={attribute}]"
    return f"[{node.tag_name}]"


def format_closing_tag(node: Node) -> str:
    """Return the closing tag markup for ``node``, e.g. ``[/url]``."""
    return f"[/{node.tag_name}]"


def to_string(node: Node) -> str:
    """Reconstruct canonical BBCode markup from a tree.

    The walk uses an explicit stack, so arbitrarily deep trees are safe.

    Parameters
    ----------
    node : Node
        Root of the subtree to serialize

    Returns
    -------
    str
        BBCode markup

    """
    parts: list[str] = []
    pending: list[Union[Node, str]] = [node]

    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        if isinstance(item, TextNode):
            parts.append(item.inner_text)
            continue

        if isinstance(item, Document):
            pending.extend(reversed(item.children))
            continue

        parts.append(format_opening_tag(item))
        if item.singular:
            continue

        pending.append(format_closing_tag(item))
        pending.extend(reversed(item.children))

    return "".join(parts)


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a tree into nested dictionaries.

    The walk uses an explicit stack, so arbitrarily deep trees are safe.

    Parameters
    ----------
    node : Node
        Root of the subtree to convert

    Returns
    -------
    dict
        ``{"node_type", "tag_name", "attribute", "singular", "children"}``;
        text nodes carry ``{"node_type": "TextNode", "text"}`` instead

    """
    root = _node_fields(node)
    pending: list[tuple[Node, dict[str, Any]]] = [(node, root)]

    while pending:
        source, target = pending.pop()
        for child in source.children:
            child_data = _node_fields(child)
            target["children"].append(child_data)
            if "children" in child_data:
                pending.append((child, child_data))

    return root


def _node_fields(node: Node) -> dict[str, Any]:
    if isinstance(node, TextNode):
        return {"node_type": "TextNode", "text": node.inner_text}
    return {
        "node_type": "Document" if isinstance(node, Document) else "Node",
        "tag_name": node.tag_name,
        "attribute": node.attribute,
        "singular": node.singular,
        "children": [],
    }


def dict_to_ast(data: dict[str, Any]) -> Node:
    """Rebuild a tree from the dictionary format produced by :func:`ast_to_dict`.

    The walk uses an explicit stack, so arbitrarily deep data is safe.

    Raises
    ------
    ValidationError
        If the dictionary is malformed or uses an unknown node type

    """
    root = _node_from_fields(data)
    pending: list[tuple[dict[str, Any], Node]] = [(data, root)]

    while pending:
        source, parent = pending.pop()
        children = source.get("children", [])
        if not isinstance(children, list):
            raise ValidationError(
                f"'children' must be a list, got {type(children).__name__}", parameter_name="children"
            )
        for child_data in children:
            child = _node_from_fields(child_data)
            try:
                parent.append_child(child)
            except BBTreeError as e:
                raise ValidationError(f"Invalid node data: {e}", parameter_name="data", original_error=e) from e
            pending.append((child_data, child))

    return root


def _node_from_fields(data: Any) -> Node:
    if not isinstance(data, dict):
        raise ValidationError(
            f"Expected a dict for a node, got {type(data).__name__}", parameter_name="data", parameter_value=data
        )

    node_type = data.get("node_type")
    try:
        if node_type == "TextNode":
            return TextNode(data.get("text", ""))
        if node_type == "Document":
            document = Document()
            document.attribute = data.get("attribute")
            return document
        if node_type == "Node":
            return Node(data["tag_name"], data.get("attribute"), bool(data.get("singular", False)))
    except KeyError as e:
        raise ValidationError(f"Missing required key {e} in node data", parameter_name="data") from e
    except BBTreeError as e:
        raise ValidationError(f"Invalid node data: {e}", parameter_name="data", original_error=e) from e

    raise ValidationError(f"Unknown node type: {node_type!r}", parameter_name="node_type", parameter_value=node_type)


def _encode_json(value: Any, indent: int | None) -> str:
    """Encode nested dicts and lists like ``json.dumps`` without recursing.

    Containers are expanded from an explicit stack; scalars and keys are
    encoded by ``json.dumps``. The layout matches ``json.dumps`` with the same
    ``indent`` and ``ensure_ascii=False``.
    """
    parts: list[str] = []
    # str items are literal output; tuples are (value, depth) still to encode
    pending: list[Union[str, tuple[Any, int]]] = [(value, 0)]

    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        current, depth = item
        if isinstance(current, dict) and current:
            entries = [(json.dumps(key, ensure_ascii=False) + ": ", child) for key, child in current.items()]
            opening, closing = "{", "}"
        elif isinstance(current, list) and current:
            entries = [("", child) for child in current]
            opening, closing = "[", "]"
        else:
            parts.append(json.dumps(current, ensure_ascii=False))
            continue

        if indent is None:
            first, separator = "", ", "
        else:
            first = "\n" + " " * (indent * (depth + 1))
            separator = "," + first
            closing = "\n" + " " * (indent * depth) + closing

        parts.append(opening)
        pending.append(closing)
        for index in range(len(entries) - 1, -1, -1):
            prefix, child = entries[index]
            pending.append((child, depth + 1))
            pending.append((first if index == 0 else separator) + prefix)

    return "".join(parts)


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a tree to a JSON string.

    Output is identical to ``json.dumps(ast_to_dict(node), indent=indent,
    ensure_ascii=False)``, but deep trees do not hit the recursion limit.
    """
    return _encode_json(ast_to_dict(node), indent)


def json_to_ast(json_str: str) -> Node:
    """Deserialize a tree from a JSON string.

    Raises
    ------
    ValidationError
        If the JSON is invalid, nested too deeply for the JSON decoder, or
        does not describe a tree

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}", parameter_name="json_str", original_error=e) from e
    except RecursionError as e:
        raise ValidationError(
            "JSON is nested too deeply to decode", parameter_name="json_str", original_error=e
        ) from e
    return dict_to_ast(data)


__all__ = [
    "to_string",
    "format_opening_tag",
    "format_closing_tag",
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
]
