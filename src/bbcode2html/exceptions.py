#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the bbcode2html library.

The rendering engine itself never raises for malformed BBCode: every string
input yields a (possibly degraded) HTML string. These exceptions cover the
surfaces around the engine, such as options validation, template rendering
and writing output.

Exception Hierarchy
-------------------
- Bbcode2HtmlError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for renderer)

  - RenderingError (output generation failures)
    - OutputWriteError (file write failures)

"""

from typing import Any


class Bbcode2HtmlError(Exception):
    """Base exception class for all bbcode2html-specific errors.

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


class ValidationError(Bbcode2HtmlError):
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
    """Exception raised when an incorrect options class is given to a renderer.

    Parameters
    ----------
    converter_name : str
        Name of the renderer that received the options
    expected_type : type
        The options class the renderer expects
    received_type : type
        The options class that was actually provided

    """

    def __init__(self, converter_name: str, expected_type: type, received_type: type):
        """Initialize with the renderer name and the mismatched types."""
        message = (
            f"Invalid options type for '{converter_name}' renderer. "
            f"Expected {expected_type.__name__}, got {received_type.__name__}."
        )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class RenderingError(Bbcode2HtmlError):
    """Exception raised when producing output fails outside the core engine.

    Examples include a missing or broken Jinja2 template for the preview
    document.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        Stage where rendering failed (e.g., "template", "write")
    original_error : Exception, optional
        The original exception that caused the failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error with stage information."""
        super().__init__(message, original_error=original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when rendered output cannot be written.

    Parameters
    ----------
    message : str
        Description of the write failure
    output_path : str, optional
        Destination that could not be written
    original_error : Exception, optional
        The underlying I/O error

    """

    def __init__(self, message: str, output_path: str | None = None, original_error: Exception | None = None):
        """Initialize the write error with the failing destination."""
        super().__init__(message, rendering_stage="write", original_error=original_error)
        self.output_path = output_path


__all__ = [
    "Bbcode2HtmlError",
    "ValidationError",
    "InvalidOptionsError",
    "RenderingError",
    "OutputWriteError",
]
