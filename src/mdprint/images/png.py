#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/images/png.py
"""PNG header reader.

Only the ``IHDR`` (dimensions) and ``pHYs`` (physical pixel density) chunks
are inspected; image data is never decompressed.
"""

from __future__ import annotations

import logging
import struct
from typing import Iterator, NamedTuple

from mdprint.constants import DEFAULT_IMAGE_DPI, INCHES_PER_METER, PNG_SIGNATURE, UNITLESS_IMAGE_DPI
from mdprint.exceptions import DecodeError
from mdprint.images.info import ImageInfo, round_half_up

logger = logging.getLogger(__name__)

_CHUNK_HEADER = struct.Struct(">I4s")
_IHDR_SIZE = struct.Struct(">II")
_PHYS = struct.Struct(">IIB")

# pHYs unit flag meaning "pixels per meter"
_UNIT_METER = 1


class PngChunk(NamedTuple):
    """A single chunk of a PNG stream."""

    type: bytes
    data: bytes
    offset: int


def iter_chunks(data: bytes) -> Iterator[PngChunk]:
    """Yield the chunks of a PNG stream in file order.

    Parameters
    ----------
    data : bytes
        Complete PNG file contents

    Yields
    ------
    PngChunk
        Chunk type, chunk data and the offset of the chunk header

    Raises
    ------
    DecodeError
        If the signature is wrong or a chunk runs past the end of the buffer.

    """
    if data[: len(PNG_SIGNATURE)] != PNG_SIGNATURE:
        raise DecodeError("Missing PNG signature, file is not a PNG image.", image_format="png", offset=0)

    offset = len(PNG_SIGNATURE)
    while offset < len(data):
        if offset + _CHUNK_HEADER.size > len(data):
            raise DecodeError("Truncated PNG chunk header.", image_format="png", offset=offset)
        length, chunk_type = _CHUNK_HEADER.unpack_from(data, offset)
        data_start = offset + _CHUNK_HEADER.size
        data_end = data_start + length
        if data_end > len(data):
            raise DecodeError(
                f"PNG chunk {chunk_type!r} declares {length} bytes but the file ends first.",
                image_format="png",
                offset=offset,
            )
        yield PngChunk(chunk_type, data[data_start:data_end], offset)
        # Skip the 4-byte CRC
        offset = data_end + 4


def read_png(data: bytes) -> ImageInfo:
    """Read pixel dimensions and DPI from a PNG stream.

    A ``pHYs`` chunk in pixels per meter gives the density; a ``pHYs``
    chunk with an unknown unit means 72 DPI. Without any ``pHYs`` chunk the
    density defaults to 96 DPI.

    Parameters
    ----------
    data : bytes
        Complete PNG file contents

    Returns
    -------
    ImageInfo
        Width and height in pixels and the resolved DPI

    Raises
    ------
    DecodeError
        If the stream is not a well-formed chunk sequence.

    """
    width = height = dpi = None
    for chunk in iter_chunks(data):
        if chunk.type == b"pHYs":
            if len(chunk.data) < _PHYS.size:
                raise DecodeError("Truncated pHYs chunk.", image_format="png", offset=chunk.offset)
            ppu_x, _ppu_y, unit = _PHYS.unpack_from(chunk.data)
            dpi = round_half_up(ppu_x * INCHES_PER_METER) if unit == _UNIT_METER else UNITLESS_IMAGE_DPI
        elif chunk.type == b"IHDR":
            if len(chunk.data) < _IHDR_SIZE.size:
                raise DecodeError("Truncated IHDR chunk.", image_format="png", offset=chunk.offset)
            width, height = _IHDR_SIZE.unpack_from(chunk.data)
        if width and height and dpi:
            break

    if not dpi:
        logger.debug("PNG carries no usable pHYs chunk, assuming screen density")
        dpi = DEFAULT_IMAGE_DPI

    return ImageInfo(width, height, dpi)
