#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/options/layout.py
"""Page layout and styling options for the print tree walker.

This module defines the page geometry (size, margins, image size cap) and
the styling bundle (style sheet, keyword table, base text style) that the
walker consults. Both are passed explicitly into every conversion, so
documents with different layouts can be converted side by side.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence, Union

from mdprint.constants import DEFAULT_PAGE_HEIGHT, DEFAULT_PAGE_MARGIN, DEFAULT_PAGE_WIDTH
from mdprint.exceptions import ValidationError
from mdprint.options.base import CloneFrozenMixin
from mdprint.styles import DEFAULT_KEYWORDS, DEFAULT_STYLE, DEFAULT_STYLE_SHEET, KeywordTable, StyleSheet

MarginSpec = Union[float, int, str, Sequence[Union[float, int]], None]


def _parse_number(raw: str, parameter_name: str, message: str) -> float:
    try:
        value = float(raw.strip())
    except ValueError as e:
        raise ValidationError(message, parameter_name=parameter_name, parameter_value=raw, original_error=e) from e
    if math.isnan(value) or math.isinf(value):
        raise ValidationError(message, parameter_name=parameter_name, parameter_value=raw)
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and not math.isnan(value)


@dataclass(frozen=True)
class PageSize:
    """Page dimensions in points.

    Parameters
    ----------
    width : float, default 612
        Page width in points (72pt = 1 inch)
    height : float, default 792
        Page height in points

    """

    width: float = DEFAULT_PAGE_WIDTH
    height: float = DEFAULT_PAGE_HEIGHT

    def __post_init__(self) -> None:
        """Validate that both dimensions are positive."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Page size must be positive, got {self.width}x{self.height}")

    @classmethod
    def parse(cls, raw: str) -> "PageSize":
        """Parse a ``width,height`` string such as ``"612,792"``.

        Raises
        ------
        ValidationError
            If the string does not hold exactly two numbers.

        """
        message = "The size argument must be two numbers separated by a comma. Ex.: 612,792"
        parts = raw.split(",")
        if len(parts) != 2:
            raise ValidationError(message, parameter_name="size", parameter_value=raw)
        width, height = (_parse_number(part, "size", message) for part in parts)
        try:
            return cls(width, height)
        except ValueError as e:
            raise ValidationError(str(e), parameter_name="size", parameter_value=raw, original_error=e) from e


@dataclass(frozen=True)
class PageMargins:
    """Page margins in points.

    Parameters
    ----------
    left, top, right, bottom : float
        Margin widths in points

    """

    left: float = DEFAULT_PAGE_MARGIN
    top: float = DEFAULT_PAGE_MARGIN
    right: float = DEFAULT_PAGE_MARGIN
    bottom: float = DEFAULT_PAGE_MARGIN

    @classmethod
    def from_value(cls, value: MarginSpec) -> "PageMargins":
        """Build margins from one, two or four values.

        Four values are read in left, top, right, bottom order. Two values
        are horizontal then vertical. A single value applies to all sides;
        a value that is not a number counts as 0.

        Parameters
        ----------
        value : float, sequence of float, or None
            The margin specification

        Returns
        -------
        PageMargins
            The resolved margins

        """
        if isinstance(value, (list, tuple)):
            if len(value) == 4:
                return cls(*(float(v) for v in value))
            if len(value) == 2:
                horizontal, vertical = (float(v) for v in value)
                return cls(horizontal, vertical, horizontal, vertical)
            if len(value) == 1:
                value = value[0]
            else:
                raise ValidationError(
                    f"Margins must hold 1, 2 or 4 values, got {len(value)}",
                    parameter_name="margins",
                    parameter_value=value,
                )
        uniform = float(value) if _is_number(value) else 0.0
        return cls(uniform, uniform, uniform, uniform)

    @classmethod
    def parse(cls, raw: str) -> "PageMargins":
        """Parse a ``left,top,right,bottom`` string such as ``"36,48,36,48"``.

        Raises
        ------
        ValidationError
            If the string does not hold exactly four numbers.

        """
        message = "The margins argument must be four numbers separated by a comma. Ex.: 36,48,36,48"
        parts = raw.split(",")
        if len(parts) != 4:
            raise ValidationError(message, parameter_name="margins", parameter_value=raw)
        return cls(*(_parse_number(part, "margins", message) for part in parts))

    def as_list(self) -> list[float]:
        """Return the margins as ``[left, top, right, bottom]``."""
        return [self.left, self.top, self.right, self.bottom]


def parse_image_max_size(raw: str) -> float:
    """Parse an image size cap given in points (``"300"``) or percent (``"50%"``).

    Percentages are returned as a fraction of the available page width, so
    ``"50%"`` gives ``0.5``.

    Raises
    ------
    ValidationError
        If the value is not a positive number, or a percentage is 100 or more.

    """
    text = raw.strip()
    is_percent = text.endswith("%")
    if is_percent:
        text = text[:-1]
    value = _parse_number(text, "imgsize", "The imgsize argument must be a valid number or percentage. Ex.: 300 or 50%")
    if value <= 0:
        raise ValidationError("The imgsize argument must be positive.", parameter_name="imgsize", parameter_value=raw)
    if is_percent:
        if value >= 100:
            raise ValidationError("The imgsize must be less than 100%.", parameter_name="imgsize", parameter_value=raw)
        return value / 100
    return value


@dataclass(frozen=True)
class LayoutOptions(CloneFrozenMixin):
    """Page geometry consulted while building the print tree.

    Parameters
    ----------
    page_size : PageSize, default letter (612x792)
        Page dimensions in points
    page_margins : PageMargins, default 36pt on every side
        Page margins in points
    image_max_size : float or None, default None
        Cap for image widths. Values of 1 or more are points; values below 1
        are a fraction of the width between the margins.
    base_path : Path or None, default None
        Directory image paths are resolved against. Without it every image
        is rejected.

    """

    page_size: PageSize = field(
        default_factory=PageSize,
        metadata={"help": "Page size as width,height in points (e.g., 612,792)", "importance": "core"},
    )
    page_margins: PageMargins = field(
        default_factory=PageMargins,
        metadata={"help": "Margins as left,top,right,bottom in points (e.g., 36,48,36,48)", "importance": "core"},
    )
    image_max_size: float | None = field(
        default=None,
        metadata={"help": "Maximum image width in points (300) or percent of the text width (50%)", "importance": "core"},
    )
    base_path: Path | None = field(
        default=None,
        metadata={"help": "Directory that image paths are resolved against", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Normalize margin and path values.

        Raises
        ------
        ValueError
            If the image size cap is not positive.

        """
        if not isinstance(self.page_margins, PageMargins):
            object.__setattr__(self, "page_margins", PageMargins.from_value(self.page_margins))
        if self.base_path is not None and not isinstance(self.base_path, Path):
            object.__setattr__(self, "base_path", Path(self.base_path))
        if self.image_max_size is not None and self.image_max_size <= 0:
            raise ValueError(f"image_max_size must be positive, got {self.image_max_size}")

    @property
    def content_width(self) -> float:
        """Width between the left and right margins."""
        return self.page_size.width - self.page_margins.left - self.page_margins.right


@dataclass(frozen=True)
class PrintStyles(CloneFrozenMixin):
    """Styling bundle shared read-only by every conversion.

    Parameters
    ----------
    style_sheet : StyleSheet
        Style name to visual attribute mapping
    keywords : KeywordTable
        Admonition variant to lowercase trigger words
    default_style : Mapping
        Base text style applied to the whole document

    """

    style_sheet: StyleSheet = field(
        default_factory=lambda: DEFAULT_STYLE_SHEET,
        metadata={"help": "Named styles merged over the built-in style sheet", "importance": "advanced"},
    )
    keywords: KeywordTable = field(
        default_factory=lambda: DEFAULT_KEYWORDS,
        metadata={"help": "Admonition trigger words per variant", "importance": "advanced"},
    )
    default_style: Mapping[str, Any] = field(
        default_factory=lambda: DEFAULT_STYLE,
        metadata={"help": "Base text style (font, fontSize, lineHeight, alignment)", "importance": "advanced"},
    )

    def style(self, name: str) -> Mapping[str, Any]:
        """Return the attributes of a named style, or an empty mapping."""
        return self.style_sheet.get(name, {})
