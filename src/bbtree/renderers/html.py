#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/renderers/html.py
"""HTML rendering from BBCode trees.

This module provides the HtmlRenderer class which converts a ``Document``
into an HTML fragment. Every tag node is rendered by the first rule that
applies to its name:

1. A custom renderer from the lookup table. The defaults in
   ``DEFAULT_TAG_RENDERERS`` are merged with any table passed by the caller,
   and caller entries win. Mapping a name to ``None`` disables its default.
2. A direct mapping for names in ``HtmlRendererOptions.direct_tags``:
   ``[b]x[/b]`` becomes ``<b>x</b>`` and a singular ``[hr]`` becomes ``<hr />``.
3. The unmapped-tag fallback, which emits the tag back as escaped BBCode
   around its rendered children. In strict mode this raises
   ``RenderingError`` instead.

A custom renderer is any callable taking ``(node, renderer)``. It returns
either a complete HTML string, calling ``renderer.render_children(node)`` when
it needs the node's rendered content, or an ``(opening, closing)`` pair that
the renderer places around the node's rendered children.

The tree is walked with an explicit stack. Direct tags, the fallback and
the default renderers all produce pairs, so deeply nested markup renders
without deep recursion; only string-returning custom renderers nest calls.

"""

from __future__ import annotations

import logging
import re
from typing import Callable, Mapping, Optional, Sequence, Union

from bbtree.ast import Document, Node, TextNode, normalize_tag_name, to_string
from bbtree.ast.utils import text_content
from bbtree.ast.visitors import NodeVisitor
from bbtree.exceptions import BBTreeError, RenderingError
from bbtree.options.html import HtmlRendererOptions
from bbtree.renderers.base import BaseRenderer, RendererOutput
from bbtree.utils.html_utils import escape_html, format_html_attributes
from bbtree.utils.security import sanitize_url

logger = logging.getLogger(__name__)

TagOutput = Union[str, tuple[str, str]]
TagRenderer = Callable[[Node, "HtmlRenderer"], TagOutput]

# Opening markup, children still to render, closing markup
RenderParts = tuple[str, Sequence[Node], str]

_COLOR_PATTERN = re.compile(r"^(#[0-9a-fA-F]{3,8}|[a-zA-Z]{3,20})$")
_SIZE_PATTERN = re.compile(r"^(\d{1,3})(px|pt|em|%)?$")
_IMAGE_SIZE_PATTERN = re.compile(r"^(\d{1,5})x(\d{1,5})$")
_CODE_LANGUAGE_PATTERN = re.compile(r"^[A-Za-z0-9_+#.-]{1,32}$")
_ORDERED_LIST_TYPES = {"1", "a", "A", "i", "I"}


def _attribute(node: Node) -> Optional[str]:
    """Return the trimmed attribute, or None when it is missing or blank."""
    if node.attribute is None:
        return None
    return node.attribute.strip() or None


def render_url(node: Node, renderer: HtmlRenderer) -> TagOutput:
    """Render ``[url]`` as a link; the attribute, or the text content, is the target."""
    target = _attribute(node) or text_content(node)
    attributes = format_html_attributes({"href": sanitize_url(target)})
    return f"<a{attributes}>", "</a>"


def render_email(node: Node, renderer: HtmlRenderer) -> TagOutput:
    """Render ``[email]`` as a ``mailto:`` link."""
    address = (_attribute(node) or text_content(node)).strip()
    attributes = format_html_attributes({"href": f"mailto:{address}"})
    return f"<a{attributes}>", "</a>"


def render_image(node: Node, renderer: HtmlRenderer) -> TagOutput:
    """Render ``[img]url[/img]`` or ``[img=WIDTHxHEIGHT]url[/img]`` as an image."""
    width = height = None
    source = text_content(node).strip()
    attribute = _attribute(node)

    if attribute:
        size_match = _IMAGE_SIZE_PATTERN.match(attribute)
        if size_match:
            width, height = size_match.groups()
        elif not source:
            source = attribute

    attributes = format_html_attributes({"src": sanitize_url(source), "alt": "", "width": width, "height": height})
    return f"<img{attributes} />"


def render_quote(node: Node, renderer: HtmlRenderer) -> TagOutput:
    """Render ``[quote]`` as a blockquote, citing the attribute when present."""
    attribute = _attribute(node)
    cite = f"<cite>{escape_html(attribute)}</cite>" if attribute else ""
    return f"<blockquote>{cite}", "</blockquote>"


def render_code(node: Node, renderer: HtmlRenderer) -> TagOutput:
    """Render ``[code]`` as a preformatted block.

    Nested tags inside a code block are shown as literal BBCode, not
    rendered. A language attribute becomes a ``language-*`` class.
    """
    source = "".join(to_string(child) for child in node.children)
    attribute = _attribute(node)
    css_class = None
    if attribute and _CODE_LANGUAGE_PATTERN.match(attribute):
        css_class = f"language-{attribute.lower()}"
    attributes = format_html_attributes({"class": css_class})
    return f"<pre><code{attributes}>{escape_html(source)}</code></pre>"


def render_color(node: Node, renderer: HtmlRenderer) -> TagOutput:
    """Render ``[color=...]`` as a styled span; invalid colors keep only the content."""
    attribute = _attribute(node)
    if not attribute or not _COLOR_PATTERN.match(attribute):
        return "", ""
    return f'<span style="color: {attribute}">', "</span>"


def render_size(node: Node, renderer: HtmlRenderer) -> TagOutput:
    """Render ``[size=...]`` as a styled span; the unit defaults to ``px``."""
    size_match = _SIZE_PATTERN.match(_attribute(node) or "")
    if not size_match:
        return "", ""
    value, unit = size_match.groups()
    return f'<span style="font-size: {value}{unit or "px"}">', "</span>"


def render_alignment(node: Node, renderer: HtmlRenderer) -> TagOutput:
    """Render ``[center]``, ``[left]`` and ``[right]`` as aligned blocks."""
    return f'<div style="text-align: {node.tag_name}">', "</div>"


def render_list(node: Node, renderer: HtmlRenderer) -> TagOutput:
    """Render ``[list]`` as ``<ul>``, or ``[list=1|a|A|i|I]`` as ``<ol>``."""
    attribute = _attribute(node)
    if attribute in _ORDERED_LIST_TYPES:
        type_attr = "" if attribute == "1" else f' type="{attribute}"'
        return f"<ol{type_attr}>", "</ol>"
    return "<ul>", "</ul>"


DEFAULT_TAG_RENDERERS: dict[str, TagRenderer] = {
    "url": render_url,
    "email": render_email,
    "img": render_image,
    "quote": render_quote,
    "code": render_code,
    "color": render_color,
    "size": render_size,
    "center": render_alignment,
    "left": render_alignment,
    "right": render_alignment,
    "list": render_list,
}


class HtmlRenderer(NodeVisitor, BaseRenderer):
    """Render BBCode trees to HTML fragments.

    The ``visit_*`` methods render a single node shallowly: each returns the
    node's opening markup, the children still to be rendered and its closing
    markup. :meth:`render_node` drives them from an explicit stack.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options
    lookup_table : mapping of str to callable or None, default = None
        Custom tag renderers merged over ``DEFAULT_TAG_RENDERERS``

    Examples
    --------
    Basic usage:

        >>> from bbtree.parsers.bbcode import parse
        >>> HtmlRenderer().render_to_string(parse("[b]Hi[/b] [url=https://example.com]there[/url]"))
        '<b>Hi</b> <a href="https://example.com">there</a>'

    Custom tag renderers, returning a full string or an opening/closing pair:

        >>> def spoiler(node, renderer):
        ...     return f"<details>{renderer.render_children(node)}</details>"
        >>> def mark(node, renderer):
        ...     return "<mark>", "</mark>"
        >>> renderer = HtmlRenderer(lookup_table={"spoiler": spoiler, "mark": mark})
        >>> renderer.render_to_string(parse("[spoiler]x[/spoiler][mark]y[/mark]"))
        '<details>x</details><mark>y</mark>'

    """

    def __init__(
        self,
        options: HtmlRendererOptions | None = None,
        lookup_table: Mapping[str, Optional[TagRenderer]] | None = None,
    ):
        """Initialize the HTML renderer with options and custom tag renderers."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self.lookup_table: dict[str, TagRenderer] = self._build_lookup_table(lookup_table)

    @staticmethod
    def _build_lookup_table(overrides: Mapping[str, Optional[TagRenderer]] | None) -> dict[str, TagRenderer]:
        table = dict(DEFAULT_TAG_RENDERERS)
        for tag_name, tag_renderer in (overrides or {}).items():
            key = normalize_tag_name(tag_name)
            if tag_renderer is None:
                table.pop(key, None)
            elif callable(tag_renderer):
                table[key] = tag_renderer
            else:
                raise TypeError(f"Renderer for [{key}] must be callable, got {type(tag_renderer).__name__}")
        return table

    def render_to_string(self, document: Document) -> str:
        """Render a document tree to an HTML string.

        Raises
        ------
        RenderingError
            If strict mode is enabled and a tag has no HTML mapping, or a
            custom tag renderer fails

        """
        try:
            return self.render_node(document)
        except RecursionError as e:
            # Only reachable through nested string-returning custom renderers
            raise RenderingError("Document is nested too deeply to render", original_error=e) from e

    def render(self, doc: Document, output: RendererOutput) -> None:
        """Render the tree to HTML and write it to ``output``."""
        self.write_text_output(self.render_to_string(doc), output)

    def render_node(self, node: Node) -> str:
        """Render a single node, including its subtree."""
        parts: list[str] = []
        pending: list[Union[Node, str]] = [node]

        while pending:
            item = pending.pop()
            if isinstance(item, str):
                parts.append(item)
                continue

            opening, children, closing = item.accept(self)
            parts.append(opening)
            if closing:
                pending.append(closing)
            pending.extend(reversed(children))

        return "".join(parts)

    def render_children(self, node: Node) -> str:
        """Render the children of ``node`` in order and concatenate them."""
        return "".join(self.render_node(child) for child in node.children)

    def visit_document(self, node: Document) -> RenderParts:
        return "", node.children, ""

    def visit_text(self, node: TextNode) -> RenderParts:
        return escape_html(node.inner_text, enabled=self.options.escape_text), (), ""

    def visit_node(self, node: Node) -> RenderParts:
        tag_renderer = self.lookup_table.get(node.tag_name)
        if tag_renderer is not None:
            return self._render_custom(node, tag_renderer)

        if node.tag_name in self.options.direct_tags:
            if node.singular:
                return f"<{node.tag_name} />", (), ""
            return f"<{node.tag_name}>", node.children, f"</{node.tag_name}>"

        return self._render_unmapped(node)

    def _render_custom(self, node: Node, tag_renderer: TagRenderer) -> RenderParts:
        try:
            result = tag_renderer(node, self)
        except BBTreeError:
            raise
        except Exception as e:
            raise RenderingError(
                f"Custom renderer for [{node.tag_name}] failed: {e}", tag_name=node.tag_name, original_error=e
            ) from e

        if isinstance(result, str):
            return result, (), ""
        if isinstance(result, tuple) and len(result) == 2 and all(isinstance(part, str) for part in result):
            return result[0], node.children, result[1]
        raise RenderingError(
            f"Custom renderer for [{node.tag_name}] returned {type(result).__name__}, "
            "expected a string or an (opening, closing) pair",
            tag_name=node.tag_name,
        )

    def _render_unmapped(self, node: Node) -> RenderParts:
        if self.options.strict_mode:
            raise RenderingError(f"No HTML mapping for tag [{node.tag_name}]", tag_name=node.tag_name)

        logger.debug("Rendering unmapped tag [%s] as literal BBCode", node.tag_name)
        attribute = _attribute(node)
        opening = f"[{node.tag_name}={escape_html(attribute)}]" if attribute else f"[{node.tag_name}]"
        if node.singular:
            return opening, (), ""
        return opening, node.children, f"[/{node.tag_name}]"


__all__ = ["DEFAULT_TAG_RENDERERS", "HtmlRenderer", "RenderParts", "TagOutput", "TagRenderer"]
