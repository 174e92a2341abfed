#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/renderers/base.py
"""Base classes for tree renderers.

This module defines the abstract base class that renderers inherit from.
A renderer reads a ``Document`` tree without modifying it and produces text
in some output format.

"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from bbtree.ast import Document
from bbtree.exceptions import InvalidOptionsError
from bbtree.options.base import BaseRendererOptions

RendererOutput = Union[str, Path, IO[bytes], IO[str]]


class BaseRenderer(ABC):
    """Abstract base class for tree renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> from bbtree.ast import to_string
        >>>
        >>> class EchoRenderer(BaseRenderer):
        ...     def render(self, doc, output):
        ...         self.write_text_output(self.render_to_string(doc), output)
        ...
        ...     def render_to_string(self, doc):
        ...         return to_string(doc)

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, doc: Document, output: RendererOutput) -> None:
        """Render the tree and write it to ``output``.

        Parameters
        ----------
        doc : Document
            Document node to render
        output : str, Path, IO[bytes] or IO[str]
            File path or file-like object

        Raises
        ------
        RenderingError
            If rendering fails

        """
        pass

    def render_to_string(self, doc: Document) -> str:
        """Render the tree to a string.

        Raises
        ------
        NotImplementedError
            If the renderer does not support string output

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: RendererOutput) -> None:
        """Write text output to a file path or IO stream.

        Binary streams receive UTF-8 encoded bytes; text streams receive the
        string unchanged.

        Examples
        --------
        Write to StringIO:
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("<b>Hi</b>", buffer)
            >>> buffer.getvalue()
            '<b>Hi</b>'

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
            return

        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output).__name__}")

        if isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        else:
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode

        if is_binary_mode:
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]
        else:
            output.write(text)  # type: ignore[arg-type]
