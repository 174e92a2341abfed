#  Copyright (c) 2025 Tom Villani, Ph.D.

# bbtree/options/bbcode.py
"""Configuration options for BBCode parsing.

This module defines the options class controlling the error policy of the
BBCode parser and the set of tags it treats as singular.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bbtree.constants import DEFAULT_BBCODE_SINGULAR_TAGS, DEFAULT_BBCODE_STRICT_MODE
from bbtree.options.base import BaseParserOptions, normalize_tag_set


@dataclass(frozen=True)
class BBCodeParserOptions(BaseParserOptions):
    """Configuration options for BBCode-to-tree parsing.

    Parameters
    ----------
    strict_mode : bool, default False
        Whether to raise ``ParseError`` on malformed BBCode syntax.
        When False, malformed constructs are kept as literal text and parsing
        never fails.
    singular_tags : frozenset of str, default {"hr"}
        Tag names that never take children or a closing tag. Accepts any
        iterable of names (or a comma separated string); names are lowercased.

    Examples
    --------
    Basic usage:
        >>> from bbtree.parsers.bbcode import BBCodeParser
        >>> parser = BBCodeParser(BBCodeParserOptions())
        >>> doc = parser.parse("[b]Bold text[/b]")

    Strict mode with extra singular tags:
        >>> options = BBCodeParserOptions(strict_mode=True, singular_tags={"hr", "br"})
        >>> doc = BBCodeParser(options).parse("line[br]next")

    """

    strict_mode: bool = field(
        default=DEFAULT_BBCODE_STRICT_MODE,
        metadata={"help": "Raise errors on malformed BBCode syntax instead of recovering", "importance": "core"},
    )
    singular_tags: frozenset[str] = field(
        default=DEFAULT_BBCODE_SINGULAR_TAGS,
        metadata={
            "help": "Comma separated tag names that are self-closing (e.g. 'hr,br')",
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Normalize the singular tag set and validate options."""
        super().__post_init__()
        object.__setattr__(self, "strict_mode", bool(self.strict_mode))
        object.__setattr__(self, "singular_tags", normalize_tag_set(self.singular_tags, "singular_tags"))
