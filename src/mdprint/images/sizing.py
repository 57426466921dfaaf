#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/images/sizing.py
"""Conversion of pixel dimensions to print points."""

from __future__ import annotations

import math
from typing import Optional, Tuple

from mdprint.constants import POINTS_PER_INCH
from mdprint.images.info import round_half_up


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def to_points(
    width_px: Optional[float], height_px: Optional[float], dpi: Optional[float]
) -> Tuple[Optional[int], Optional[int]]:
    """Convert pixel dimensions to points at the given density.

    Parameters
    ----------
    width_px, height_px : float or None
        Pixel dimensions
    dpi : float or None
        Pixel density in dots per inch

    Returns
    -------
    tuple
        ``(width_pt, height_pt)``, or ``(None, None)`` if any input is
        missing or NaN

    Examples
    --------
        >>> to_points(300, 200, 150)
        (144, 96)

    """
    if _is_missing(width_px) or _is_missing(height_px) or _is_missing(dpi) or not dpi:
        return None, None
    return (
        round_half_up(width_px * POINTS_PER_INCH / dpi),
        round_half_up(height_px * POINTS_PER_INCH / dpi),
    )


def clamp_width(
    width_pt: float,
    page_width: float,
    left_margin: float,
    right_margin: float,
    override: Optional[float] = None,
) -> float:
    """Cap an image width to the text column or to an explicit size.

    Parameters
    ----------
    width_pt : float
        Natural image width in points
    page_width, left_margin, right_margin : float
        Page geometry in points
    override : float, optional
        Explicit cap. Values of 1 or more are points, smaller values are a
        fraction of the width between the margins.

    Returns
    -------
    float
        ``min(width_pt, cap)``

    """
    available = page_width - left_margin - right_margin
    if override:
        cap = available * override if override < 1 else override
    else:
        cap = available
    return min(width_pt, cap)
