#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/utils/html_utils.py
"""Small HTML helpers shared by the renderer and the default tag renderers."""

from __future__ import annotations

from html import escape as _html_escape


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    if not enabled:
        return text
    return _html_escape(text)


def format_html_attributes(attributes: dict[str, str | None]) -> str:
    """Format attributes as `` name="value"`` pairs, skipping None values.

    Examples
    --------
    >>> format_html_attributes({"href": "a&b", "title": None})
    ' href="a&amp;b"'

    """
    return "".join(f' {name}="{_html_escape(value)}"' for name, value in attributes.items() if value is not None)
