#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/images/tiff.py
"""Resolution lookup in the TIFF structure embedded in EXIF blocks."""

from __future__ import annotations

import struct
from typing import Optional

from mdprint.constants import (
    CENTIMETERS_PER_INCH,
    TIFF_ENTRY_SIZE,
    TIFF_TAG_EXIF_IFD_POINTER,
    TIFF_TAG_RESOLUTION_UNIT,
    TIFF_TAG_X_RESOLUTION,
    TIFF_TAG_Y_RESOLUTION,
    UNITLESS_IMAGE_DPI,
)
from mdprint.exceptions import DecodeError
from mdprint.images.info import round_half_up

# ResolutionUnit values
_UNIT_INCH = 2
_UNIT_CENTIMETER = 3


class TiffReader:
    """Byte-order aware integer reader over a TIFF block.

    Parameters
    ----------
    data : bytes
        TIFF block starting with its ``II``/``MM`` byte order mark

    """

    def __init__(self, data: bytes):
        self.data = data
        self.byte_order = "<" if data[:2] == b"II" else ">"

    def _read(self, fmt: str, offset: int) -> int:
        try:
            return struct.unpack_from(self.byte_order + fmt, self.data, offset)[0]
        except struct.error as e:
            raise DecodeError(
                f"TIFF read at offset {offset} runs past the end of the EXIF block.",
                image_format="jpeg",
                offset=offset,
                original_error=e,
            ) from e

    def u16(self, offset: int) -> int:
        """Read an unsigned 16-bit integer."""
        return self._read("H", offset)

    def u32(self, offset: int) -> int:
        """Read an unsigned 32-bit integer."""
        return self._read("I", offset)


def read_exif_dpi(tiff: bytes) -> Optional[int]:
    """Resolve the DPI declared in IFD0 of an EXIF TIFF block.

    Directory entries are walked in order until the Exif IFD pointer tag.
    XResolution and YResolution point at their numerator; ResolutionUnit is
    stored inline in the entry.

    Parameters
    ----------
    tiff : bytes
        The TIFF block (the APP1 payload after the ``Exif\\0\\0`` header)

    Returns
    -------
    int or None
        The density in DPI, 72 when the unit is not physical, or ``None``
        when the unit is physical but no XResolution was found.

    Raises
    ------
    DecodeError
        If the walk runs past the end of the block before the Exif IFD pointer.

    """
    reader = TiffReader(tiff)

    # IFD0 offset, then skip its 2-byte entry count
    offset = reader.u32(4) + 2
    unit = ppu_x = None

    tag = reader.u16(offset)
    while tag != TIFF_TAG_EXIF_IFD_POINTER:
        if tag == TIFF_TAG_X_RESOLUTION:
            ppu_x = reader.u32(reader.u32(offset + 8))
        elif tag == TIFF_TAG_Y_RESOLUTION:
            # Read for validation only; density is taken from the X axis
            reader.u32(reader.u32(offset + 8))
        elif tag == TIFF_TAG_RESOLUTION_UNIT:
            # SHORT, stored in the first two bytes of the value field
            unit = reader.u16(offset + 8)
        offset += TIFF_ENTRY_SIZE
        tag = reader.u16(offset)

    if unit == _UNIT_INCH:
        return ppu_x
    if unit == _UNIT_CENTIMETER:
        return round_half_up(ppu_x * CENTIMETERS_PER_INCH) if ppu_x is not None else None
    return UNITLESS_IMAGE_DPI
