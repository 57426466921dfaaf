#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/images/__init__.py
"""PNG/JPEG metadata readers and print-size helpers."""

from mdprint.images.info import ImageInfo, round_half_up
from mdprint.images.jpeg import read_jpeg
from mdprint.images.loader import get_image_format_from_path, read_image_info
from mdprint.images.png import read_png
from mdprint.images.sizing import clamp_width, to_points

__all__ = [
    "ImageInfo",
    "clamp_width",
    "get_image_format_from_path",
    "read_image_info",
    "read_jpeg",
    "read_png",
    "round_half_up",
    "to_points",
]
