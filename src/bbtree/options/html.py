#  Copyright (c) 2025 Tom Villani, Ph.D.

# bbtree/options/html.py
"""Configuration options for HTML rendering.

This module defines the options class for rendering BBCode trees to HTML
fragments.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bbtree.constants import DEFAULT_HTML_DIRECT_TAGS, DEFAULT_HTML_ESCAPE_TEXT, DEFAULT_HTML_STRICT_MODE
from bbtree.options.base import BaseRendererOptions, normalize_tag_set


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for tree-to-HTML rendering.

    Parameters
    ----------
    strict_mode : bool, default False
        Raise ``RenderingError`` for tags that have neither a custom renderer
        nor a direct HTML mapping. When False, such tags are emitted as their
        escaped literal BBCode with rendered children.
    direct_tags : frozenset of str
        Tag names rendered 1:1 as the HTML element of the same name
        (``[b]x[/b]`` becomes ``<b>x</b>``, a singular ``[hr]`` becomes ``<hr />``).
    escape_text : bool, default True
        HTML-escape text content. Disable only for trusted input.

    """

    strict_mode: bool = field(
        default=DEFAULT_HTML_STRICT_MODE,
        metadata={"help": "Fail on tags without an HTML mapping instead of emitting them literally"},
    )
    direct_tags: frozenset[str] = field(
        default=DEFAULT_HTML_DIRECT_TAGS,
        metadata={"help": "Comma separated tag names rendered as the HTML element of the same name"},
    )
    escape_text: bool = field(
        default=DEFAULT_HTML_ESCAPE_TEXT,
        metadata={"help": "HTML-escape text content", "importance": "security"},
    )

    def __post_init__(self) -> None:
        """Normalize the direct tag set and validate options."""
        super().__post_init__()
        object.__setattr__(self, "strict_mode", bool(self.strict_mode))
        object.__setattr__(self, "escape_text", bool(self.escape_text))
        object.__setattr__(self, "direct_tags", normalize_tag_set(self.direct_tags, "direct_tags"))
