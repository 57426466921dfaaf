#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for mdprint conversions.

Layout and styling options feed the print tree walker; Markdown and PDF
options configure the front end and the renderer. All of them are frozen
dataclasses shared read-only between conversions.
"""

from __future__ import annotations

from mdprint.options.base import CloneFrozenMixin
from mdprint.options.layout import LayoutOptions, PageMargins, PageSize, PrintStyles, parse_image_max_size
from mdprint.options.markdown import MarkdownOptions
from mdprint.options.pdf import PdfRendererOptions

__all__ = [
    "CloneFrozenMixin",
    "LayoutOptions",
    "MarkdownOptions",
    "PageMargins",
    "PageSize",
    "PdfRendererOptions",
    "PrintStyles",
    "parse_image_max_size",
]
