#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/parsers/__init__.py
"""Parsers that turn markup into bbtree ``Document`` trees."""

from bbtree.parsers.base import BaseParser, ParserInput
from bbtree.parsers.bbcode import BBCodeParser, BBCodeTag, parse

__all__ = ["BaseParser", "BBCodeParser", "BBCodeTag", "ParserInput", "parse"]
