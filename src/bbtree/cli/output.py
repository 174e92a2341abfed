"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/bbtree/cli/output.py
import argparse
import sys
from typing import IO, Any

from bbtree.ast import Document, Node, TextNode
from bbtree.exceptions import DependencyError


def check_rich_available() -> bool:
    """Check if Rich library is available."""
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(args: argparse.Namespace, raise_on_missing: bool = False, stream: IO | None = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    raise_on_missing : bool, default False
        Raise DependencyError if rich is not installed
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Notes
    -----
    Rich output is used when:
    - The --rich flag is set
    - AND either --force-rich is set OR the stream is a TTY
    - AND Rich library is available

    """
    if not args.rich:
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                feature_name="rich-output",
                missing_packages=[("rich", "")],
                message="Rich output requires the optional 'rich' dependency. Install with: pip install bbtree[rich]",
            )
        return False

    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def describe_node(node: Node) -> str:
    """One-line label for a node in tree output.

    Examples
    --------
    >>> describe_node(Node("url", "https://example.com"))
    '[url=https://example.com]'
    >>> describe_node(TextNode("hi"))
    "text 'hi'"

    """
    if isinstance(node, TextNode):
        return f"text {node.inner_text!r}"
    if isinstance(node, Document):
        return "document"
    label = f"[{node.tag_name}={node.attribute}]" if node.attribute else f"[{node.tag_name}]"
    return f"{label} (singular)" if node.singular else label


def format_tree(document: Node, indent: str = "  ") -> str:
    """Format a tree as indented plain text, one node per line."""
    lines: list[str] = []
    stack: list[tuple[Node, int]] = [(document, 0)]
    while stack:
        node, depth = stack.pop()
        lines.append(f"{indent * depth}{describe_node(node)}")
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return "\n".join(lines) + "\n"


def build_rich_tree(document: Node) -> Any:
    """Build a ``rich.tree.Tree`` mirroring ``document``.

    Labels are ``rich.text.Text`` objects so brackets in BBCode are never
    interpreted as rich markup.
    """
    from rich.text import Text
    from rich.tree import Tree

    root = Tree(Text(describe_node(document), style="bold"))
    stack: list[tuple[Node, Tree]] = [(child, root) for child in reversed(document.children)]
    while stack:
        node, branch = stack.pop()
        style = "green" if isinstance(node, TextNode) else "cyan"
        child_branch = branch.add(Text(describe_node(node), style=style))
        stack.extend((child, child_branch) for child in reversed(node.children))
    return root


def print_rich_tree(document: Node, stream: IO[str] | None = None) -> None:
    """Print ``document`` as a rich tree to ``stream`` (default: stdout)."""
    from rich.console import Console

    Console(file=stream or sys.stdout).print(build_rich_tree(document))
