#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/api.py
"""High-level functions for parsing BBCode and rendering it as HTML.

These wrap ``BBCodeParser`` and ``HtmlRenderer`` for the common cases:

- ``to_ast``: BBCode source to ``Document``
- ``to_html``: BBCode source to an HTML fragment
- ``bb_to_html``: forgiving one-call conversion for user-supplied markup

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from bbtree.ast import Document
from bbtree.options.bbcode import BBCodeParserOptions
from bbtree.options.html import HtmlRendererOptions
from bbtree.parsers.base import ParserInput
from bbtree.parsers.bbcode import BBCodeParser
from bbtree.renderers.html import HtmlRenderer, TagRenderer

logger = logging.getLogger(__name__)


def to_ast(source: ParserInput, options: Optional[BBCodeParserOptions] = None, **kwargs: Any) -> Document:
    """Parse BBCode source into a Document tree.

    Parameters
    ----------
    source : str, Path, IO or bytes
        BBCode markup. A ``str`` is always treated as markup; pass a
        ``pathlib.Path`` to read a file.
    options : BBCodeParserOptions, optional
        Parser options; defaults are used when omitted
    kwargs : Any
        Individual option values that override ``options``
        (e.g., ``strict_mode=True``)

    Returns
    -------
    Document
        Root of the parsed tree

    Raises
    ------
    ParseError
        If strict mode is enabled and the markup is malformed
    ValidationError
        If the source cannot be loaded
    ValueError
        If an option value is invalid

    Examples
    --------
        >>> doc = to_ast("[quote=Ann]Hello[/quote]")
        >>> doc[0].attribute
        'Ann'

    """
    options = options or BBCodeParserOptions()
    if kwargs:
        logger.debug("Applying parser option overrides: %s", ", ".join(sorted(kwargs)))
        options = options.create_updated(**kwargs)
    return BBCodeParser(options).parse(source)


def to_html(
    source: ParserInput | Document,
    parser_options: Optional[BBCodeParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    lookup_table: Optional[Mapping[str, Optional[TagRenderer]]] = None,
) -> str:
    """Convert BBCode source, or an already parsed tree, to an HTML fragment.

    Parameters
    ----------
    source : str, Path, IO, bytes or Document
        BBCode markup or a parsed Document
    parser_options : BBCodeParserOptions, optional
        Parser options, ignored when ``source`` is a Document
    renderer_options : HtmlRendererOptions, optional
        Renderer options
    lookup_table : mapping of str to callable, optional
        Custom tag renderers merged over the default ones

    Returns
    -------
    str
        HTML fragment

    Raises
    ------
    ParseError
        If parser strict mode is enabled and the markup is malformed
    RenderingError
        If renderer strict mode is enabled and a tag has no HTML mapping

    Examples
    --------
        >>> to_html("[b]bold[/b] & [i]italic[/i]")
        '<b>bold</b> &amp; <i>italic</i>'

    """
    if isinstance(source, Document):
        logger.debug("Rendering an already parsed document; parser options are ignored")
        document = source
    else:
        document = to_ast(source, parser_options)
    return HtmlRenderer(renderer_options, lookup_table).render_to_string(document)


def bb_to_html(markup: str) -> str:
    """Convert user-supplied BBCode to HTML without ever failing on bad markup.

    The markup is parsed leniently with ``hr`` as the only singular tag, and
    tags without an HTML mapping are emitted as escaped literal BBCode.

    Examples
    --------
        >>> bb_to_html("[b]unclosed [hr] [/x]")
        '<b>unclosed <hr /> [/x]</b>'

    """
    parser_options = BBCodeParserOptions(strict_mode=False, singular_tags=frozenset({"hr"}))
    renderer_options = HtmlRendererOptions(strict_mode=False)
    return to_html(markup, parser_options, renderer_options)


__all__ = ["bb_to_html", "to_ast", "to_html"]
