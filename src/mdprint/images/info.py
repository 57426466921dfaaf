#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/images/info.py
"""Image metadata record shared by the PNG and JPEG readers."""

from __future__ import annotations

import math
from typing import NamedTuple, Optional


class ImageInfo(NamedTuple):
    """Pixel dimensions and density recovered from an image header.

    ``width`` or ``height`` stay ``None`` when the stream never declared
    them; ``dpi`` is always resolved (96 when the image carries no density).
    """

    width: Optional[int]
    height: Optional[int]
    dpi: Optional[float]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded towards +infinity.

    Python's ``round`` uses banker's rounding, which would turn 2.5 into 2.
    Density and point sizes must round 2.5 to 3.
    """
    return math.floor(value + 0.5)
