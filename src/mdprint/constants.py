#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdprint library.

Constants are organized by category:
1. Type Definitions
2. Page Layout Defaults
3. Image Metadata Constants
4. Print Tree Constants
5. Dependencies
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ImageFormat = Literal["png", "jpeg"]

# =============================================================================
# Page Layout Defaults (points, 1/72 inch)
# =============================================================================

DEFAULT_PAGE_WIDTH = 612
DEFAULT_PAGE_HEIGHT = 792
DEFAULT_PAGE_MARGIN = 36

# =============================================================================
# Image Metadata Constants
# =============================================================================

POINTS_PER_INCH = 72

# Screen DPI assumed when an image carries no density information at all
DEFAULT_IMAGE_DPI = 96

# DPI assumed when a density block exists but has no usable physical unit
UNITLESS_IMAGE_DPI = 72

INCHES_PER_METER = 0.0254
CENTIMETERS_PER_INCH = 2.54

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

JPEG_MARKER_PREFIX = 0xFF
JPEG_APP0 = 0xE0
JPEG_APP1 = 0xE1
JPEG_SOF0 = 0xC0
JPEG_SOF2 = 0xC2
JPEG_SOS = 0xDA

TIFF_TAG_X_RESOLUTION = 0x011A
TIFF_TAG_Y_RESOLUTION = 0x011B
TIFF_TAG_RESOLUTION_UNIT = 0x0128
TIFF_TAG_EXIF_IFD_POINTER = 0x8769
TIFF_ENTRY_SIZE = 12

SUPPORTED_IMAGE_EXTENSIONS: dict[str, ImageFormat] = {
    ".png": "png",
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
}

# =============================================================================
# Print Tree Constants
# =============================================================================

HIGHLIGHT_CLASS_PREFIX = "hljs-"

# Left border thickness applied to every blockquote, admonition or not
BLOCKQUOTE_BORDER_WIDTH = 3

RULE_MARGIN_BOTTOM = 8

# =============================================================================
# Dependencies
# =============================================================================

DEPS_HIGHLIGHT = [("Pygments", "pygments", ">=2.15.0")]
DEPS_PDF_RENDER = [("reportlab", "reportlab", ">=4.0.0")]

# =============================================================================
# Rendering Defaults
# =============================================================================

DEFAULT_CREATOR = "mdprint"  # Creator application name for rendered documents

# Built-in PDF fonts used when a style names a family with no registered TTF files
DEFAULT_FONT_FALLBACKS = {
    "Roboto": "Helvetica",
    "UbuntuMono": "Courier",
}
