#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/parsers/bbcode.py
"""BBCode to tree parser.

This module turns BBCode (Bulletin Board Code) markup into a ``Document``
tree in a single left-to-right pass. Tags are read by a small hand-written
tokenizer and assembled with an explicit stack of open tags, so deeply nested
input never exhausts the interpreter stack.

Tag syntax
----------
- ``[name]`` opens a tag, ``[/name]`` closes it. Names are ASCII letters and
  digits and are compared case-insensitively.
- ``[name=attribute]`` carries a free-text attribute that runs raw up to the
  next ``]``; it is trimmed, and a blank attribute is dropped.
- ``[name/]`` is an explicitly self-closing tag and always produces a
  singular node. Names in the configured singular set are singular with or
  without the marker.

Error policy
------------
In strict mode every malformed construct raises ``ParseError`` with the
0-based offset of the offending ``[``:

- malformed tag token (unterminated, empty or invalid name)
- closing tag with no open tag of that name
- closing tag that does not match the innermost open tag
- tags still open at end of input (offset of the outermost one)

In lenient mode parsing never fails. A malformed token contributes its ``[``
as literal text and scanning resumes right after it; a stray closing tag is
kept as literal text; a mis-nested closing tag implicitly closes the tags
opened after its match; tags still open at end of input are closed
implicitly.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from bbtree.ast import Document, Node, TextNode
from bbtree.constants import TAG_ATTRIBUTE_SEPARATOR, TAG_CLOSE_CHAR, TAG_END_MARKER, TAG_OPEN_CHAR
from bbtree.exceptions import ParseError, ValidationError
from bbtree.options.bbcode import BBCodeParserOptions
from bbtree.parsers.base import BaseParser, ParserInput

logger = logging.getLogger(__name__)


@dataclass
class BBCodeTag:
    """Represents a tag token read from the source text.

    Parameters
    ----------
    name : str
        Lowercased tag name (e.g., 'b', 'url', 'quote')
    is_closing : bool
        Whether this is a closing tag
    value : str or None
        Raw attribute text (e.g., the URL in [url=http://example.com])
    position : int
        Offset of the opening ``[`` in the source text
    end : int
        Offset just past the closing ``]``
    self_closing : bool
        Whether the tag carried the explicit ``/]`` marker

    """

    name: str
    is_closing: bool
    value: Optional[str]
    position: int
    end: int
    self_closing: bool = False


def _is_name_char(char: str) -> bool:
    return char.isascii() and char.isalnum()


def scan_tag(text: str, start: int) -> tuple[Optional[BBCodeTag], str]:
    """Read the tag token whose ``[`` is at ``start``.

    Parameters
    ----------
    text : str
        Full source text
    start : int
        Offset of a ``[`` character

    Returns
    -------
    tuple of (BBCodeTag or None, str)
        The token, or None and a description of why the token is malformed

    """
    length = len(text)
    pos = start + 1

    is_closing = pos < length and text[pos] == TAG_END_MARKER
    if is_closing:
        pos += 1

    name_start = pos
    while pos < length and _is_name_char(text[pos]):
        pos += 1
    name = text[name_start:pos].lower()

    if pos >= length:
        return None, "Unterminated tag"
    if not name:
        return None, "Empty or invalid tag name"

    char = text[pos]
    if char == TAG_CLOSE_CHAR:
        return BBCodeTag(name, is_closing, None, start, pos + 1), ""

    if not is_closing and char == TAG_ATTRIBUTE_SEPARATOR:
        close = text.find(TAG_CLOSE_CHAR, pos + 1)
        if close == -1:
            return None, "Unterminated tag"
        return BBCodeTag(name, False, text[pos + 1 : close], start, close + 1), ""

    if not is_closing and char == TAG_END_MARKER and text.startswith(TAG_CLOSE_CHAR, pos + 1):
        return BBCodeTag(name, False, None, start, pos + 2, self_closing=True), ""

    return None, f"Invalid character {char!r} in tag [{text[name_start:pos]}"


@dataclass
class _OpenTag:
    node: Node
    position: int


class _TreeBuilder:
    """Single-use state machine that builds one Document."""

    def __init__(self, text: str, strict: bool, singular_tags: frozenset[str]):
        self.text = text
        self.strict = strict
        self.singular_tags = singular_tags
        self.document = Document()
        self.open_tags: list[_OpenTag] = []
        self.pending_text: list[str] = []

    @property
    def insertion_point(self) -> Node:
        return self.open_tags[-1].node if self.open_tags else self.document

    def build(self) -> Document:
        text = self.text
        length = len(text)
        pos = 0

        while pos < length:
            bracket = text.find(TAG_OPEN_CHAR, pos)
            if bracket == -1:
                self.pending_text.append(text[pos:])
                break
            if bracket > pos:
                self.pending_text.append(text[pos:bracket])

            tag, reason = scan_tag(text, bracket)
            if tag is None:
                if self.strict:
                    raise ParseError(reason, bracket)
                logger.debug("%s at position %d, keeping '[' as text", reason, bracket)
                self.pending_text.append(TAG_OPEN_CHAR)
                pos = bracket + 1
                continue

            if tag.is_closing:
                self._close(tag)
            else:
                self._open(tag)
            pos = tag.end

        self._flush_text()
        self._finish()
        return self.document

    def _flush_text(self) -> None:
        if not self.pending_text:
            return
        content = "".join(self.pending_text)
        self.pending_text = []
        if content:
            self.insertion_point.append_child(TextNode(content))

    def _open(self, tag: BBCodeTag) -> None:
        self._flush_text()

        attribute = tag.value.strip() if tag.value is not None else None
        singular = tag.self_closing or tag.name in self.singular_tags
        node = Node(tag.name, attribute or None, singular)
        self.insertion_point.append_child(node)

        if not singular:
            self.open_tags.append(_OpenTag(node, tag.position))

    def _close(self, tag: BBCodeTag) -> None:
        match_index = None
        for index in range(len(self.open_tags) - 1, -1, -1):
            if self.open_tags[index].node.tag_name == tag.name:
                match_index = index
                break

        if match_index is None:
            if self.strict:
                raise ParseError(f"Unexpected closing tag [/{tag.name}] with no matching opening tag", tag.position)
            logger.debug("Stray closing tag [/%s] at position %d kept as text", tag.name, tag.position)
            self.pending_text.append(self.text[tag.position : tag.end])
            return

        innermost = self.open_tags[-1]
        if match_index != len(self.open_tags) - 1:
            if self.strict:
                raise ParseError(
                    f"Closing tag [/{tag.name}] does not match innermost open tag [{innermost.node.tag_name}]",
                    tag.position,
                )
            logger.debug(
                "Closing tag [/%s] at position %d implicitly closes %d inner tag(s)",
                tag.name,
                tag.position,
                len(self.open_tags) - 1 - match_index,
            )

        self._flush_text()
        del self.open_tags[match_index:]

    def _finish(self) -> None:
        if not self.open_tags:
            return

        outermost = self.open_tags[0]
        if self.strict:
            raise ParseError(f"Unclosed tag [{outermost.node.tag_name}]", outermost.position)

        logger.debug("Implicitly closing %d tag(s) at end of input", len(self.open_tags))
        self.open_tags.clear()


class BBCodeParser(BaseParser):
    """Convert BBCode markup into a ``Document`` tree.

    The parser keeps every tag it reads as a generic ``Node``; it does not
    interpret tag names. Interpretation is left to renderers.

    Parameters
    ----------
    options : BBCodeParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = BBCodeParser()
        >>> doc = parser.parse("[b]Bold[/b] and [i]italic[/i] text")
        >>> [child.tag_name for child in doc.children]
        ['b', 'span', 'i', 'span']

    Strict mode:

        >>> options = BBCodeParserOptions(strict_mode=True)
        >>> BBCodeParser(options).parse("[b]unclosed")
        Traceback (most recent call last):
        ...
        bbtree.exceptions.ParseError: Unclosed tag [b] at position 0

    """

    def __init__(self, options: BBCodeParserOptions | None = None):
        """Initialize the BBCode parser with options."""
        BaseParser._validate_options_type(options, BBCodeParserOptions, "bbcode")
        options = options or BBCodeParserOptions()
        super().__init__(options)
        self.options: BBCodeParserOptions = options

    def parse(self, input_data: ParserInput) -> Document:
        """Parse BBCode input into a Document.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            BBCode input to parse. A ``str`` is always markup; use a
            ``pathlib.Path`` to read a file.

        Returns
        -------
        Document
            Fully attached tree

        Raises
        ------
        ParseError
            If the markup is malformed and strict mode is enabled
        ValidationError
            If the input cannot be loaded

        """
        return self.parse_string(self._load_text_content(input_data))

    def parse_string(self, markup: str) -> Document:
        """Parse a markup string into a Document.

        Raises
        ------
        ParseError
            If the markup is malformed and strict mode is enabled

        """
        if not isinstance(markup, str):
            raise ValidationError(
                f"Markup must be a string, got {type(markup).__name__}",
                parameter_name="markup",
                parameter_value=markup,
            )

        logger.debug("Parsing %d characters of BBCode (strict=%s)", len(markup), self.options.strict_mode)
        builder = _TreeBuilder(markup, self.options.strict_mode, self.options.singular_tags)
        return builder.build()


def parse(markup: str, strict: bool = False, singular_tags: Iterable[str] | None = None) -> Document:
    """Parse BBCode markup into a Document.

    Parameters
    ----------
    markup : str
        BBCode text
    strict : bool, default False
        Raise ``ParseError`` on malformed markup instead of recovering
    singular_tags : iterable of str or None, default None
        Tag names treated as singular; None means no singular tags

    Returns
    -------
    Document
        Root of the parsed tree

    Raises
    ------
    ParseError
        If ``strict`` is True and the markup is malformed

    Examples
    --------
        >>> doc = parse("[hr]", singular_tags={"hr"})
        >>> doc[0].singular
        True

    """
    options = BBCodeParserOptions(strict_mode=strict, singular_tags=frozenset(singular_tags or ()))
    return BBCodeParser(options).parse_string(markup)


__all__ = ["BBCodeParser", "BBCodeTag", "parse", "scan_tag"]
