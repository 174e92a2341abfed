"""Option dataclasses for the bbtree parser and renderers."""

from bbtree.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from bbtree.options.bbcode import BBCodeParserOptions
from bbtree.options.html import HtmlRendererOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "BBCodeParserOptions",
    "HtmlRendererOptions",
]
