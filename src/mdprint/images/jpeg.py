#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/images/jpeg.py
"""JPEG header reader.

Markers are scanned up to the start of scan. Dimensions come from the
baseline or progressive start-of-frame marker, density from the JFIF APP0
block or the EXIF APP1 block, whichever appears last before the scan stops.
"""

from __future__ import annotations

import logging
import struct
from typing import Iterator, NamedTuple

from mdprint.constants import (
    CENTIMETERS_PER_INCH,
    DEFAULT_IMAGE_DPI,
    JPEG_APP0,
    JPEG_APP1,
    JPEG_MARKER_PREFIX,
    JPEG_SOF0,
    JPEG_SOF2,
    JPEG_SOS,
    UNITLESS_IMAGE_DPI,
)
from mdprint.exceptions import DecodeError
from mdprint.images.info import ImageInfo, round_half_up
from mdprint.images.tiff import read_exif_dpi

logger = logging.getLogger(__name__)

_U16 = struct.Struct(">H")

# Offset of the TIFF block inside an APP1 payload ("Exif\0\0")
_EXIF_HEADER_SIZE = 6

# JFIF density units
_JFIF_UNIT_INCH = 1
_JFIF_UNIT_CENTIMETER = 2


class JpegMarker(NamedTuple):
    """A JPEG marker with its payload."""

    type: int
    data: bytes
    offset: int


def _has_no_payload(marker_type: int) -> bool:
    return marker_type == 0x01 or 0xD1 <= marker_type <= 0xD9


def iter_markers(data: bytes) -> Iterator[JpegMarker]:
    """Yield the markers of a JPEG stream up to the start of scan.

    The 16-bit length that follows a marker byte counts its own two bytes,
    so the payload spans ``[length_pos + 2, length_pos + length)`` and the
    next marker starts at ``length_pos + length``.

    Parameters
    ----------
    data : bytes
        Complete JPEG file contents

    Yields
    ------
    JpegMarker
        Marker type, marker payload and the offset of the ``0xFF`` byte

    Raises
    ------
    DecodeError
        If a marker does not start with ``0xFF`` or the buffer ends mid-marker.

    """
    offset = 0
    while offset < len(data):
        if data[offset] != JPEG_MARKER_PREFIX:
            raise DecodeError(
                "Invalid marker found, JPEG file is likely corrupted.", image_format="jpeg", offset=offset
            )
        marker_offset = offset
        offset += 1
        if offset >= len(data):
            raise DecodeError("JPEG stream ends inside a marker.", image_format="jpeg", offset=marker_offset)
        marker_type = data[offset]

        if _has_no_payload(marker_type):
            offset += 1
            continue
        if marker_type == JPEG_SOS:
            return

        offset += 1
        if offset + _U16.size > len(data):
            raise DecodeError("JPEG stream ends inside a marker length.", image_format="jpeg", offset=marker_offset)
        (length,) = _U16.unpack_from(data, offset)
        yield JpegMarker(marker_type, data[offset + 2 : offset + length], marker_offset)
        offset += length


def _read_u16(payload: bytes, offset: int, marker: JpegMarker) -> int:
    if offset + _U16.size > len(payload):
        raise DecodeError(
            f"Truncated payload in JPEG marker 0x{marker.type:02X}.", image_format="jpeg", offset=marker.offset
        )
    return _U16.unpack_from(payload, offset)[0]


def _jfif_dpi(marker: JpegMarker) -> int:
    payload = marker.data
    if len(payload) < 8:
        raise DecodeError("Truncated JFIF header.", image_format="jpeg", offset=marker.offset)
    unit = payload[7]
    ppu_x = _read_u16(payload, 8, marker)
    if unit == _JFIF_UNIT_INCH:
        return ppu_x
    if unit == _JFIF_UNIT_CENTIMETER:
        return round_half_up(ppu_x * CENTIMETERS_PER_INCH)
    return UNITLESS_IMAGE_DPI


def read_jpeg(data: bytes) -> ImageInfo:
    """Read pixel dimensions and DPI from a JPEG stream.

    Parameters
    ----------
    data : bytes
        Complete JPEG file contents

    Returns
    -------
    ImageInfo
        Width and height in pixels and the resolved DPI (96 when neither a
        JFIF nor an EXIF density is present)

    Raises
    ------
    DecodeError
        If the marker framing or an embedded header is malformed.

    """
    width = height = dpi = None
    for marker in iter_markers(data):
        if marker.type == JPEG_APP0:
            if marker.data[:4].upper() != b"JFIF":
                continue
            dpi = _jfif_dpi(marker)
        elif marker.type == JPEG_APP1:
            if marker.data[:4].upper() != b"EXIF":
                continue
            dpi = read_exif_dpi(marker.data[_EXIF_HEADER_SIZE:])
        elif marker.type in (JPEG_SOF0, JPEG_SOF2):
            height = _read_u16(marker.data, 1, marker)
            width = _read_u16(marker.data, 3, marker)
        if width and height and dpi:
            break

    if not dpi:
        logger.debug("JPEG carries no usable density, assuming screen density")
        dpi = DEFAULT_IMAGE_DPI

    return ImageInfo(width, height, dpi)
