#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/renderers/__init__.py
"""Renderers that turn bbtree ``Document`` trees into output formats."""

from bbtree.renderers.base import BaseRenderer, RendererOutput
from bbtree.renderers.html import DEFAULT_TAG_RENDERERS, HtmlRenderer, TagRenderer

__all__ = ["BaseRenderer", "DEFAULT_TAG_RENDERERS", "HtmlRenderer", "RendererOutput", "TagRenderer"]
