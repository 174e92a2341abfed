#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/parsers/base.py
"""Base class for markup parsers.

The BaseParser provides option validation and input loading shared by
parsers that turn markup into a bbtree ``Document``.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from bbtree.ast import Document
from bbtree.exceptions import InvalidOptionsError, ValidationError
from bbtree.options.base import BaseParserOptions
from bbtree.utils.encoding import normalize_stream_to_text, read_text_with_encoding_detection

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for markup parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Examples
    --------
    Creating a custom parser:

        >>> class PlainTextParser(BaseParser):
        ...     def parse(self, input_data):
        ...         doc = Document()
        ...         doc.append_child(TextNode(self._load_text_content(input_data)))
        ...         return doc

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Document:
        """Parse the input into a Document tree.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            Markup to parse. A ``str`` is always markup, never a file path.

        Returns
        -------
        Document
            Root of the parsed tree

        """
        raise NotImplementedError

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Load markup text from the supported input types.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            Input data to load

        Returns
        -------
        str
            Markup text

        Raises
        ------
        ValidationError
            If the input type is not supported or the file cannot be read

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            return read_text_with_encoding_detection(input_data)
        if isinstance(input_data, Path):
            try:
                data = input_data.read_bytes()
            except OSError as e:
                raise ValidationError(
                    f"Could not read input file {input_data}: {e}",
                    parameter_name="input_data",
                    parameter_value=input_data,
                    original_error=e,
                ) from e
            logger.debug("Loaded %d bytes from %s", len(data), input_data)
            return read_text_with_encoding_detection(data)
        if hasattr(input_data, "read"):
            return normalize_stream_to_text(input_data)

        raise ValidationError(
            f"Unsupported input type: {type(input_data).__name__}",
            parameter_name="input_data",
            parameter_value=input_data,
        )
