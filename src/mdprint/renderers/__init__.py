#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdprint/renderers/__init__.py
"""Renderers turning print documents into output files.

Available renderers:
- PdfRenderer: Render to PDF (requires reportlab)

The JSON document definition is produced by
:func:`mdprint.printtree.serialization.document_to_json` and needs no
renderer.

Examples
--------
    >>> from mdprint.builder import markdown_to_document
    >>> from mdprint.renderers import PdfRenderer
    >>> pdf_bytes = PdfRenderer().render_to_bytes(markdown_to_document("# Title"))

"""

from mdprint.renderers.pdf import PdfRenderer, render_pdf

__all__ = ["PdfRenderer", "render_pdf"]
