"""Test utilities for the mdprint test suite.

This module builds small PNG, JPEG and EXIF byte streams in code so the
image readers can be exercised without binary fixtures.
"""

import struct
import tempfile
import zlib
from pathlib import Path
from typing import Iterable, Optional, Tuple

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def png_chunk(chunk_type: bytes, data: bytes) -> bytes:
    """Build a PNG chunk with its length and CRC."""
    crc = zlib.crc32(chunk_type + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


def make_png(
    width: int,
    height: int,
    dpi: Optional[float] = None,
    ppu: Optional[int] = None,
    unit: int = 1,
    extra_chunks: Iterable[bytes] = (),
) -> bytes:
    """Build a valid RGB PNG.

    Parameters
    ----------
    width, height : int
        Pixel dimensions
    dpi : float, optional
        Density written to a pHYs chunk in pixels per meter
    ppu : int, optional
        Raw pixels-per-unit value for the pHYs chunk (overrides ``dpi``)
    unit : int, default 1
        pHYs unit flag (1 = meter, 0 = unknown)
    extra_chunks : iterable of bytes
        Pre-built chunks inserted before the image data

    """
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    chunks = [png_chunk(b"IHDR", ihdr)]
    if ppu is None and dpi is not None:
        ppu = round(dpi / 0.0254)
    if ppu is not None:
        chunks.append(png_chunk(b"pHYs", struct.pack(">IIB", ppu, ppu, unit)))
    chunks.extend(extra_chunks)
    row = b"\x00" + b"\x80\x80\x80" * width
    chunks.append(png_chunk(b"IDAT", zlib.compress(row * height)))
    chunks.append(png_chunk(b"IEND", b""))
    return PNG_SIGNATURE + b"".join(chunks)


def jpeg_segment(marker: int, payload: bytes) -> bytes:
    """Build a JPEG marker segment; the length counts its own two bytes."""
    return bytes([0xFF, marker]) + struct.pack(">H", len(payload) + 2) + payload


def make_tiff(
    x_resolution: Optional[int] = 300,
    unit: Optional[int] = 2,
    byte_order: str = "II",
    exif_pointer: bool = True,
) -> bytes:
    """Build a TIFF block with an IFD0 holding resolution tags.

    Parameters
    ----------
    x_resolution : int, optional
        XResolution numerator; omitted when ``None``
    unit : int, optional
        ResolutionUnit (2 = inch, 3 = centimeter); omitted when ``None``
    byte_order : str, default "II"
        ``"II"`` for little endian, ``"MM"`` for big endian
    exif_pointer : bool, default True
        Whether IFD0 ends with the Exif IFD pointer entry

    """
    fmt = "<" if byte_order == "II" else ">"
    entries = []
    if x_resolution is not None:
        entries.append(("x", 0x011A))
    if unit is not None:
        entries.append(("unit", 0x0128))
    if exif_pointer:
        entries.append(("exif", 0x8769))

    ifd_offset = 8
    data_offset = ifd_offset + 2 + 12 * len(entries) + 4
    body = b""
    for kind, tag in entries:
        if kind == "x":
            body += struct.pack(fmt + "HHII", tag, 5, 1, data_offset)
        elif kind == "unit":
            body += struct.pack(fmt + "HHIHH", tag, 3, 1, unit, 0)
        else:
            body += struct.pack(fmt + "HHII", tag, 4, 1, 0)

    header = byte_order.encode("ascii") + struct.pack(fmt + "HI", 42, ifd_offset)
    ifd = struct.pack(fmt + "H", len(entries)) + body + struct.pack(fmt + "I", 0)
    rational = struct.pack(fmt + "II", x_resolution or 0, 1)
    return header + ifd + rational


def make_jpeg(
    width: int,
    height: int,
    jfif: Optional[Tuple[int, int, int]] = None,
    exif: Optional[bytes] = None,
    progressive: bool = False,
) -> bytes:
    """Build the header of a JPEG stream up to the start of scan.

    Parameters
    ----------
    width, height : int
        Dimensions written to the start-of-frame marker
    jfif : tuple of (unit, x_density, y_density), optional
        JFIF APP0 density
    exif : bytes, optional
        TIFF block written to an EXIF APP1 segment
    progressive : bool, default False
        Use SOF2 instead of SOF0

    """
    parts = [b"\xff\xd8"]
    if jfif is not None:
        unit, x_density, y_density = jfif
        parts.append(jpeg_segment(0xE0, b"JFIF\x00\x01\x01" + struct.pack(">BHHBB", unit, x_density, y_density, 0, 0)))
    if exif is not None:
        parts.append(jpeg_segment(0xE1, b"Exif\x00\x00" + exif))
    frame = struct.pack(">BHHB", 8, height, width, 3) + b"\x01\x22\x00\x02\x11\x01\x03\x11\x01"
    parts.append(jpeg_segment(0xC2 if progressive else 0xC0, frame))
    parts.append(jpeg_segment(0xDA, b"\x03\x01\x00\x02\x11\x03\x11\x00\x3f\x00"))
    parts.append(b"\x00" * 16 + b"\xff\xd9")
    return b"".join(parts)


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    import shutil

    if temp_dir.exists():
        shutil.rmtree(temp_dir)
