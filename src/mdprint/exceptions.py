#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdprint library.

This module defines specialized exception classes for the error conditions
that can occur while turning a parsed document into a print tree and
rendering it to PDF.

Exception Hierarchy
-------------------
- MdPrintError (base exception)

  - ValidationError (option/argument validation)

  - ImageError (single image problems, recovered per image)
    - UnsupportedImageError (URLs, unknown extensions, missing base path)
    - DecodeError (malformed PNG/JPEG byte streams)

  - FileError (file access and I/O)

  - RenderingError (PDF generation failures)

  - DependencyError (missing/incompatible packages)

"""

from __future__ import annotations

from typing import Any


class MdPrintError(Exception):
    """Base exception class for all mdprint-specific errors.

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


class ValidationError(MdPrintError):
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


class ImageError(MdPrintError):
    """Base exception for problems with a single image.

    Image errors never abort a document: the walker catches them at the
    image boundary and substitutes a fallback node.
    """


class UnsupportedImageError(ImageError):
    """Exception raised when an image reference cannot be used.

    Parameters
    ----------
    message : str
        Description of why the image was rejected
    source : str, optional
        The ``src`` value of the rejected image

    """

    def __init__(self, message: str, source: str | None = None, original_error: Exception | None = None):
        """Initialize the error with the rejected source."""
        super().__init__(message, original_error=original_error)
        self.source = source


class DecodeError(ImageError):
    """Exception raised when a PNG or JPEG byte stream is malformed.

    Parameters
    ----------
    message : str
        Description of the framing violation
    image_format : str, optional
        ``"png"`` or ``"jpeg"``
    offset : int, optional
        Byte offset at which decoding failed

    """

    def __init__(
        self,
        message: str,
        image_format: str | None = None,
        offset: int | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the decode error with format and offset details."""
        super().__init__(message, original_error=original_error)
        self.image_format = image_format
        self.offset = offset


class FileError(MdPrintError):
    """Base exception for file access and I/O errors.

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


class RenderingError(MdPrintError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class DependencyError(MdPrintError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    converter_name : str
        Name of the component requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name.upper()} output requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{converter_name.upper()} output has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
            if all_packages:
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches


__all__ = [
    "MdPrintError",
    "ValidationError",
    "ImageError",
    "UnsupportedImageError",
    "DecodeError",
    "FileError",
    "RenderingError",
    "DependencyError",
]
