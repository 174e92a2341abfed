"""Command-line interface for the bbtree BBCode library.

This module provides the ``bbtree`` command, which parses BBCode from a file
or stdin and prints it as an HTML fragment, canonical BBCode, JSON, or an
indented tree.

Examples
--------
Render a post as HTML::

    $ bbtree post.txt

Normalize markup, failing on anything malformed::

    $ bbtree post.txt --strict --format bbcode --out clean.txt

Inspect the parsed tree::

    $ echo '[quote=Ann][b]hi[/b][/quote]' | bbtree --format tree --rich

Use a configuration file for defaults::

    $ export BBTREE_CONFIG=~/bbtree.toml
    $ bbtree post.txt

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import sys
from pathlib import Path

from bbtree.api import to_html
from bbtree.ast import Document, ast_to_json, to_string
from bbtree.cli.builder import create_parser
from bbtree.cli.config import load_config_with_priority, options_from_config
from bbtree.cli.output import format_tree, print_rich_tree, should_use_rich_output
from bbtree.constants import (
    CONFIG_ENV_VAR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSE_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
)
from bbtree.exceptions import BBTreeError, DependencyError, ParseError, RenderingError, ValidationError
from bbtree.logging_utils import configure_logging
from bbtree.options import BBCodeParserOptions, HtmlRendererOptions
from bbtree.parsers.bbcode import BBCodeParser

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments; --trace wins over --log-level."""
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _resolve_options(parsed_args: argparse.Namespace) -> tuple[BBCodeParserOptions, HtmlRendererOptions]:
    """Combine configuration file values with command-line overrides.

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration or an override is invalid

    """
    if parsed_args.no_config:
        config = {}
    else:
        config = load_config_with_priority(
            explicit_path=parsed_args.config,
            env_var_path=os.environ.get(CONFIG_ENV_VAR),
        )
    parser_options, renderer_options = options_from_config(config)

    try:
        if parsed_args.strict is not None:
            parser_options = parser_options.create_updated(strict_mode=parsed_args.strict)
        if parsed_args.singular_tags is not None:
            parser_options = parser_options.create_updated(singular_tags=parsed_args.singular_tags)
        if parsed_args.strict_render is not None:
            renderer_options = renderer_options.create_updated(strict_mode=parsed_args.strict_render)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e

    logger.debug("Parser options: %s", parser_options)
    logger.debug("Renderer options: %s", renderer_options)
    return parser_options, renderer_options


def _read_document(input_arg: str, parser_options: BBCodeParserOptions) -> Document:
    parser = BBCodeParser(parser_options)
    if input_arg == "-":
        stream = getattr(sys.stdin, "buffer", sys.stdin)
        return parser.parse(stream)
    return parser.parse(Path(input_arg))


def _render_output(
    document: Document,
    parsed_args: argparse.Namespace,
    renderer_options: HtmlRendererOptions,
) -> str | None:
    """Render ``document`` in the requested format; None means it was printed directly."""
    output_format = parsed_args.output_format
    if output_format == "html":
        return to_html(document, renderer_options=renderer_options)
    if output_format == "bbcode":
        return to_string(document)
    if output_format == "json":
        return ast_to_json(document, indent=2) + "\n"

    if not parsed_args.out and should_use_rich_output(parsed_args, raise_on_missing=True):
        print_rich_tree(document)
        return None
    return format_tree(document)


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return the process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        parser_options, renderer_options = _resolve_options(parsed_args)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    if parsed_args.input != "-" and not Path(parsed_args.input).is_file():
        print(f"Error: Input file not found: {parsed_args.input}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        document = _read_document(parsed_args.input, parser_options)
        rendered = _render_output(document, parsed_args, renderer_options)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR
    except RenderingError as e:
        print(f"Rendering error: {e}", file=sys.stderr)
        return EXIT_RENDERING_ERROR
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR if isinstance(e.original_error, OSError) else EXIT_PARSE_ERROR
    except DependencyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except BBTreeError as e:
        logger.debug("Unexpected library error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if rendered is None:
        return EXIT_SUCCESS

    if parsed_args.out:
        try:
            Path(parsed_args.out).write_text(rendered, encoding="utf-8")
        except OSError as e:
            print(f"Error: Could not write output file {parsed_args.out}: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        logger.info("Wrote %s output to %s", parsed_args.output_format, parsed_args.out)
    else:
        sys.stdout.write(rendered)

    return EXIT_SUCCESS
