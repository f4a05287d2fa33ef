#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the qbank library.

This module defines the exception classes raised while turning a DOCX
package into a question bank. Most input problems are recovered locally
(a corrupt package simply yields an empty bank), so only a few of these
ever reach a caller: option validation failures, cancellation and
budget overruns.

Exception Hierarchy
-------------------
- QBankError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser)

  - FileError (package access and structure)
    - MalformedFileError (corrupted/invalid package or raw payload)

  - ParsingError (question bank parsing failures)
    - ParseCancelledError (cancellation token was triggered)
    - ParseTimeoutError (paragraph or wall-clock budget exhausted)

  - SecurityError (security violations)
    - ZipFileSecurityError (zip bombs, path traversal)

"""

from __future__ import annotations

from typing import Any


class QBankError(Exception):
    """Base exception class for all qbank-specific errors.

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


class ValidationError(QBankError):
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
    """Exception raised when an incorrect options class is provided to a parser.

    Parameters
    ----------
    converter_name : str
        Name of the parser that received invalid options
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


class FileError(QBankError):
    """Base exception for package access and structure errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class MalformedFileError(FileError):
    """Exception raised when a package or raw payload has an invalid structure."""


class ParsingError(QBankError):
    """Exception raised when question bank parsing cannot complete.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    paragraphs_processed : int, default 0
        Number of paragraphs consumed before parsing stopped
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, paragraphs_processed: int = 0, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.paragraphs_processed = paragraphs_processed


class ParseCancelledError(ParsingError):
    """Exception raised when a parse is cancelled through its cancellation token."""


class ParseTimeoutError(ParsingError):
    """Exception raised when a parse exceeds its paragraph or wall-clock budget.

    Parameters
    ----------
    message : str
        Description of the exhausted budget
    limit : int or float
        The configured limit that was exceeded
    paragraphs_processed : int, default 0
        Number of paragraphs consumed before parsing stopped

    """

    def __init__(self, message: str, limit: int | float, paragraphs_processed: int = 0):
        """Initialize the timeout error."""
        super().__init__(message, paragraphs_processed=paragraphs_processed)
        self.limit = limit


class SecurityError(QBankError):
    """Base exception for security violations."""


class ZipFileSecurityError(SecurityError):
    """Exception raised when a zip file security violation is detected.

    This includes zip bombs, path traversal attempts, excessive compression, etc.

    """
