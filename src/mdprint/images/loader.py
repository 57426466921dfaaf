#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/images/loader.py
"""Read image metadata from files on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from mdprint.constants import SUPPORTED_IMAGE_EXTENSIONS, ImageFormat
from mdprint.exceptions import DecodeError, UnsupportedImageError
from mdprint.images.info import ImageInfo
from mdprint.images.jpeg import read_jpeg
from mdprint.images.png import read_png

logger = logging.getLogger(__name__)

_READERS = {
    "png": read_png,
    "jpeg": read_jpeg,
}


def get_image_format_from_path(path: str | Path) -> ImageFormat | None:
    """Return ``"png"`` or ``"jpeg"`` from a file extension, case-insensitively."""
    return SUPPORTED_IMAGE_EXTENSIONS.get(Path(path).suffix.lower())


def read_image_info(path: str | Path) -> ImageInfo:
    """Read the dimensions and DPI of a PNG or JPEG file.

    Parameters
    ----------
    path : str or Path
        Image file path; the extension selects the decoder

    Returns
    -------
    ImageInfo
        Width, height and DPI of the image

    Raises
    ------
    UnsupportedImageError
        If the extension is not ``.png``, ``.jpg`` or ``.jpeg``.
    DecodeError
        If the file cannot be read or its header is malformed.

    """
    image_format = get_image_format_from_path(path)
    if image_format is None:
        raise UnsupportedImageError(f"Unsupported image format: {Path(path).suffix or '(none)'}", source=str(path))

    try:
        data = Path(path).read_bytes()
    except (OSError, ValueError) as e:
        raise DecodeError(f"Could not read image file {path}: {e}", image_format=image_format, original_error=e) from e

    logger.debug(f"Reading {image_format} metadata from {path} ({len(data)} bytes)")
    return _READERS[image_format](data)
