#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/options/pdf.py
"""Configuration options for PDF rendering with ReportLab."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from mdprint.constants import DEFAULT_CREATOR, DEFAULT_FONT_FALLBACKS
from mdprint.options.base import CloneFrozenMixin

FONT_VARIANTS = ("normal", "bold", "italics", "bolditalics")


@dataclass(frozen=True)
class PdfRendererOptions(CloneFrozenMixin):
    """Configuration options for rendering a print document to PDF.

    Parameters
    ----------
    fonts : dict[str, dict[str, str]], default {}
        TrueType font families to register, as
        ``{family: {"normal": path, "bold": path, "italics": path, "bolditalics": path}}``.
        Style sheets refer to these families by name.
    font_fallbacks : dict[str, str]
        Built-in PDF font to use for a family that has no registered files.
        Unknown families fall back to Helvetica.
    creator : str or None, default "mdprint"
        Creator application name written to the PDF metadata.
    title : str or None, default None
        Document title written to the PDF metadata.

    """

    fonts: Mapping[str, Mapping[str, str]] = field(
        default_factory=dict,
        metadata={
            "help": 'TTF font families as JSON (e.g., \'{"Roboto": {"normal": "Roboto-Regular.ttf"}}\')',
            "importance": "advanced",
        },
    )
    font_fallbacks: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_FONT_FALLBACKS),
        metadata={"help": "Built-in PDF font used for families without TTF files", "importance": "advanced"},
    )
    creator: str | None = field(
        default=DEFAULT_CREATOR,
        metadata={"help": "Creator application name for document metadata", "importance": "core"},
    )
    title: str | None = field(
        default=None,
        metadata={"help": "Document title for PDF metadata", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate font family declarations.

        Raises
        ------
        ValueError
            If a family lacks a normal variant or names an unknown variant.

        """
        for family, variants in self.fonts.items():
            if "normal" not in variants:
                raise ValueError(f"Font family '{family}' must define a 'normal' variant")
            unknown = set(variants) - set(FONT_VARIANTS)
            if unknown:
                raise ValueError(f"Font family '{family}' has unknown variants: {', '.join(sorted(unknown))}")
