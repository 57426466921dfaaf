#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/admonitions.py
"""Admonition detection for blockquotes.

A blockquote that opens with a bold keyword is a callout::

    > **Warning** the configuration file is overwritten.

The keyword table maps each variant (``info``, ``hint``, ``warning``,
``danger``) to its trigger words; the style sheet holds one entry per
variant with its ``fillColor`` and ``borderColor``.
"""

from __future__ import annotations

import logging
from typing import Optional

from bs4.element import Tag

from mdprint.nodekind import NodeKind, first_element_child, kind_of, leading_label
from mdprint.styles import KeywordTable, StyleSheet

logger = logging.getLogger(__name__)


class AdmonitionResolver:
    """Resolve admonition variants and their colors.

    Parameters
    ----------
    keywords : KeywordTable
        Variant name to lowercase trigger words. Variants are tried in
        iteration order and the first match wins.
    style_sheet : StyleSheet
        Style sheet holding one entry per variant plus ``blockquote``

    """

    def __init__(self, keywords: KeywordTable, style_sheet: StyleSheet):
        self.keywords = keywords
        self.style_sheet = style_sheet

    def match(self, label: str) -> Optional[str]:
        """Return the first variant whose trigger words contain ``label``."""
        if not label:
            return None
        for variant, words in self.keywords.items():
            if label in words:
                return variant
        return None

    def resolve_blockquote(self, element: Tag) -> Optional[str]:
        """Return the admonition variant of a blockquote, or ``None``.

        The first element child is inspected; when it is a paragraph, the
        paragraph's first element child is inspected instead. Only a bold
        run can name a variant.
        """
        lead = first_element_child(element)
        if kind_of(lead, NodeKind.PARAGRAPH):
            lead = first_element_child(lead)
        if not kind_of(lead, NodeKind.BOLD):
            return None

        variant = self.match(leading_label(lead))
        if variant:
            logger.debug(f"Blockquote styled as '{variant}' admonition")
        return variant

    def _style_attr(self, variant: Optional[str], attr: str) -> Optional[str]:
        entry = self.style_sheet.get(variant or "blockquote", {})
        value = entry.get(attr)
        if value is None and variant:
            value = self.style_sheet.get("blockquote", {}).get(attr)
        return value

    def border_color(self, variant: Optional[str]) -> Optional[str]:
        """Border color of a variant, or of plain blockquotes for ``None``."""
        return self._style_attr(variant, "borderColor")

    def fill_color(self, variant: Optional[str]) -> Optional[str]:
        """Fill color of a variant, or of plain blockquotes for ``None``."""
        return self._style_attr(variant, "fillColor")
