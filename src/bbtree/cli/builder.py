#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/cli/builder.py
"""Argument parser construction for the bbtree CLI."""

import argparse
from typing import get_args

from bbtree.constants import CONFIG_ENV_VAR, LogLevelName, OutputFormat


def _version_string() -> str:
    from bbtree import __version__

    return f"bbtree {__version__}"


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="bbtree",
        description="Parse BBCode and print it as HTML, canonical BBCode, JSON or a tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bbtree post.txt                     Render a file as HTML
  echo '[b]hi[/b]' | bbtree -f json   Read stdin, print the tree as JSON
  bbtree post.txt --strict -f bbcode  Validate and normalize markup
  bbtree post.txt -f tree --rich      Pretty-print the tree

Exit codes:
  0 success, 1 error, 2 parse or validation error, 3 file error, 4 rendering error
""",
    )

    parser.add_argument("input", nargs="?", default="-", help="Input file, or '-' for stdin (default: stdin)")
    parser.add_argument(
        "--format",
        "-f",
        choices=list(get_args(OutputFormat)),
        default="html",
        dest="output_format",
        help="Output format (default: html)",
    )
    parser.add_argument("--out", "-o", help="Output file path (default: print to stdout)")

    parsing = parser.add_argument_group("parsing")
    parsing.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail on malformed markup instead of recovering (overrides config)",
    )
    parsing.add_argument(
        "--singular-tags",
        metavar="TAGS",
        help="Comma separated tag names that never take a closing tag, e.g. 'hr,br' (overrides config)",
    )

    rendering = parser.add_argument_group("rendering")
    rendering.add_argument(
        "--strict-render",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail on tags without an HTML mapping instead of emitting them literally (overrides config)",
    )

    config = parser.add_argument_group("configuration")
    config.add_argument(
        "--config",
        help="Path to configuration file (TOML, YAML or JSON). If not specified, searches for .bbtree.toml, "
        f".bbtree.yaml, .bbtree.json or [tool.bbtree] in pyproject.toml, and honours {CONFIG_ENV_VAR}.",
    )
    config.add_argument(
        "--no-config",
        action="store_true",
        dest="no_config",
        help=f"Disable loading of configuration files, including {CONFIG_ENV_VAR} and --config.",
    )

    output = parser.add_argument_group("output and logging")
    output.add_argument(
        "--rich",
        action="store_true",
        help="Pretty-print tree output with rich (automatically disabled when output is piped)",
    )
    output.add_argument(
        "--force-rich",
        action="store_true",
        help="Force rich output even when stdout is piped or redirected",
    )
    output.add_argument(
        "--log-level",
        choices=list(get_args(LogLevelName)),
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    output.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    output.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamped DEBUG logging",
    )
    parser.add_argument("--version", "-V", action="version", version=_version_string())

    return parser
