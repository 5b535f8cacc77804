#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the html2adoc library.

The converter itself is total and never raises for parseable HTML. These
exceptions belong to the layers around it: option validation, reading and
writing documentation files, and optional parser dependencies.

Exception Hierarchy
-------------------
- Html2AdocError (base exception)

  - ValidationError (parameter/option validation)

  - FileError (file access and I/O)
    - FileAccessError (missing files, permissions, undecodable content)

  - ParsingError (page-level HTML parsing failures)

  - RenderingError (output generation failures)
    - OutputWriteError (file write failures)

  - DependencyError (missing optional packages)

"""

from typing import Any


class Html2AdocError(Exception):
    """Base exception class for all html2adoc-specific errors.

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


class ValidationError(Html2AdocError):
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


class FileError(Html2AdocError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the file that caused the error
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path details."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileAccessError(FileError):
    """Exception raised when an input file cannot be read."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot read file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(Html2AdocError):
    """Exception raised when a documentation page cannot be parsed.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(Html2AdocError):
    """Exception raised when AsciiDoc output cannot be produced or stored."""

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when writing an .adoc file fails.

    Parameters
    ----------
    file_path : str
        Path to the file that failed to write

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="file_write", original_error=original_error)
        self.file_path = file_path


class DependencyError(Html2AdocError):
    """Exception raised when an optional package is not installed.

    Parameters
    ----------
    feature : str
        Name of the feature requiring the packages (e.g. ``"lxml parser"``)
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        feature: str,
        missing_packages: list[tuple[str, str]],
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        if message is None:
            message = f"{feature} is not available"
            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in missing_packages)
                message = (
                    f"{feature} requires the following packages: {pkg_list}\n"
                    f"Install with: pip install --upgrade {packages_str}"
                )

        super().__init__(message, original_error=original_error)
        self.feature = feature
        self.missing_packages = missing_packages

    def __reduce__(self) -> tuple[Any, ...]:
        """Support pickling across worker processes."""
        return (self.__class__, (self.feature, self.missing_packages, self.message, self.original_error))
