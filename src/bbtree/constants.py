#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the bbtree library.

This module centralizes the hardcoded values and default configuration
constants used across bbtree so that parsers, renderers and the CLI agree
on them.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Tree Model - Sentinel tag names for special node variants
3. BBCode Parsing - Tokenizer characters and parser defaults
4. HTML Rendering - Renderer defaults and security settings
5. CLI - Configuration file names and exit codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

OutputFormat = Literal["html", "bbcode", "json", "tree"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# =============================================================================
# Tree Model
# =============================================================================

TEXT_NODE_TAG_NAME = "span"
DOCUMENT_TAG_NAME = "body"

# =============================================================================
# BBCode Parsing
# =============================================================================

TAG_OPEN_CHAR = "["
TAG_CLOSE_CHAR = "]"
TAG_END_MARKER = "/"
TAG_ATTRIBUTE_SEPARATOR = "="

DEFAULT_BBCODE_STRICT_MODE = False
DEFAULT_BBCODE_SINGULAR_TAGS: frozenset[str] = frozenset({"hr"})

# =============================================================================
# HTML Rendering
# =============================================================================

DEFAULT_HTML_STRICT_MODE = False
DEFAULT_HTML_ESCAPE_TEXT = True

# BBCode tags whose name is also a valid HTML element and that map 1:1
DEFAULT_HTML_DIRECT_TAGS: frozenset[str] = frozenset(
    {
        "b",
        "i",
        "u",
        "s",
        "sub",
        "sup",
        "p",
        "hr",
        "br",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "table",
        "tr",
        "td",
        "th",
        "ul",
        "ol",
        "li",
    }
)

DANGEROUS_SCHEMES = {
    "javascript:",
    "vbscript:",
    "data:text/html",
    "data:text/javascript",
    "data:application/javascript",
    "data:application/x-javascript",
}

# =============================================================================
# CLI
# =============================================================================

CONFIG_ENV_VAR = "BBTREE_CONFIG"
CONFIG_FILENAMES = [".bbtree.toml", ".bbtree.yaml", ".bbtree.yml", ".bbtree.json"]
PYPROJECT_TOOL_SECTION = "bbtree"

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_PARSE_ERROR = 2
EXIT_FILE_ERROR = 3
EXIT_RENDERING_ERROR = 4
