#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the bbtree library.

This module defines specialized exception classes for the error conditions
that can occur while building, parsing and rendering BBCode trees. These
exceptions provide more specific error information than generic built-ins.

Exception Hierarchy
-------------------
- BBTreeError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser or renderer)

  - InvalidArgumentError (tree mutation precondition, also a ValueError)

  - InvalidStateError (mutating a singular node, also a RuntimeError)

  - IndexOutOfRangeError (child index out of bounds, also an IndexError)

  - ParseError (malformed markup in strict mode, carries the offset)

  - RenderingError (output generation failures)

  - DependencyError (missing optional packages)

"""

from typing import Any


class BBTreeError(Exception):
    """Base exception class for all bbtree-specific errors.

    Catching this will catch all library-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(BBTreeError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class InvalidArgumentError(BBTreeError, ValueError):
    """Exception raised when a caller violates a tree-mutation precondition.

    Raised for nodes that are already attached, reference nodes that are not
    children of the receiver, attachments that would create a cycle, and
    missing or blank tag names. Always a programmer error.

    Parameters
    ----------
    message : str
        Description of the violated precondition
    argument_name : str, optional
        Name of the offending argument

    """

    def __init__(self, message: str, argument_name: str | None = None):
        """Initialize the invalid argument error."""
        super().__init__(message)
        self.argument_name = argument_name


class InvalidStateError(BBTreeError, RuntimeError):
    """Exception raised when a structural precondition is violated.

    The only such condition is adding children to a singular node.
    """


class IndexOutOfRangeError(BBTreeError, IndexError):
    """Exception raised when a child index is out of bounds.

    Parameters
    ----------
    index : int
        The requested index
    size : int
        Number of children the node actually has

    """

    def __init__(self, index: int, size: int):
        """Initialize the index error."""
        super().__init__(f"Child index {index} is out of range for a node with {size} children")
        self.index = index
        self.size = size


class ParseError(BBTreeError):
    """Exception raised when malformed markup is detected in strict mode.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    position : int
        0-based character offset into the original input where the failure
        was detected
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    Attributes
    ----------
    position : int
        Offset of the offending character

    """

    def __init__(self, message: str, position: int, original_error: Exception | None = None):
        """Initialize the parse error."""
        super().__init__(f"{message} at position {position}", original_error)
        self.message = message
        self.position = position


class RenderingError(BBTreeError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    tag_name : str, optional
        Tag name of the node that could not be rendered
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, tag_name: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.tag_name = tag_name


class DependencyError(BBTreeError):
    """Exception raised when an optional dependency is not available.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring the dependency
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        self.original_import_error = original_import_error
        if message is None:
            pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
            install = " ".join(f"{name}{spec}" for name, spec in missing_packages)
            message = f"{feature_name} requires the following packages: {pkg_list}. Install with: pip install {install}"
        super().__init__(message, original_error=original_import_error)
        self.feature_name = feature_name
        self.missing_packages = missing_packages


__all__ = [
    "BBTreeError",
    "ValidationError",
    "InvalidOptionsError",
    "InvalidArgumentError",
    "InvalidStateError",
    "IndexOutOfRangeError",
    "ParseError",
    "RenderingError",
    "DependencyError",
]
