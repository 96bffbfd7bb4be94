#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the styledmark library.

This module defines the exception classes raised while parsing Markdown,
rendering documents into styled text, and resolving embedded images.

Exception Hierarchy
-------------------
- StyledMarkError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a renderer or parser)

  - ParsingError (Markdown source could not be turned into a document tree)

  - RenderingError (styled text generation failures)

  - ImageResolutionError (an image handler could not produce visual content)
    - NetworkDisabledError (network access switched off by environment)

Notes
-----
Rendering is best-effort: unsupported nodes and unresolvable URLs degrade
silently, and image failures never escape the resolution pipeline. The
exceptions above are therefore mostly seen by code that drives the parser
or writes its own image handlers.

"""

from typing import Any


class StyledMarkError(Exception):
    """Base exception class for all styledmark-specific errors.

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


class ValidationError(StyledMarkError):
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
    """Exception raised when an options object of the wrong class is supplied.

    Parameters
    ----------
    component_name : str
        Name of the renderer or parser that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(StyledMarkError):
    """Exception raised when Markdown source cannot be parsed.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(StyledMarkError):
    """Exception raised when styled text generation fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class ImageResolutionError(StyledMarkError):
    """Exception raised by image handlers that cannot load an image.

    The resolution pipeline catches this (and any other handler exception)
    and records the image as failed, leaving its placeholder untouched.

    Parameters
    ----------
    url : str
        Absolute URL of the image that failed to load
    reason : str
        Short description of why loading failed

    """

    def __init__(self, url: str, reason: str, original_error: Exception | None = None):
        """Initialize the image resolution error."""
        super().__init__(f"Could not load image {url!r}: {reason}", original_error)
        self.url = url
        self.reason = reason


class NetworkDisabledError(ImageResolutionError):
    """Exception raised when network image loading is disabled by environment."""

    def __init__(self, url: str):
        """Initialize the error for a blocked network fetch."""
        super().__init__(url, "network access is disabled")
