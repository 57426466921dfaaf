"""mdprint - Markdown to print-ready PDF.

mdprint renders Markdown to HTML, walks the parsed element tree and emits a
print tree: a layout-oriented document definition with admonition coloring,
syntax highlight styles, table alignment and images scaled to their physical
print size. The print tree can be rendered to PDF with ReportLab or written
out as a JSON document definition for an external engine.

Requirements
------------
- Python 3.10+
- reportlab for PDF output; Pygments for code highlighting

Examples
--------
Convert a file:

    >>> from mdprint import convert_file
    >>> convert_file("notes.md")
    PosixPath('notes.pdf')

Build the print tree only:

    >>> from mdprint import markdown_to_document, document_to_json
    >>> print(document_to_json(markdown_to_document("> **Warning** hot")))

Read image metadata:

    >>> from mdprint import read_image_info
    >>> read_image_info("figure.png")
    ImageInfo(width=800, height=600, dpi=144)

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdprint requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from mdprint.builder import build_document, convert_file, markdown_to_document, parse_html  # noqa: E402
from mdprint.exceptions import (  # noqa: E402
    DecodeError,
    DependencyError,
    FileError,
    ImageError,
    MdPrintError,
    RenderingError,
    UnsupportedImageError,
    ValidationError,
)
from mdprint.images import ImageInfo, read_image_info  # noqa: E402
from mdprint.options import LayoutOptions, MarkdownOptions, PdfRendererOptions, PrintStyles  # noqa: E402
from mdprint.printtree import PrintDocument, document_to_json, to_document_definition  # noqa: E402
from mdprint.walker import PrintTreeBuilder, transform  # noqa: E402

__all__ = [
    "__version__",
    "DecodeError",
    "DependencyError",
    "FileError",
    "ImageError",
    "ImageInfo",
    "LayoutOptions",
    "MarkdownOptions",
    "MdPrintError",
    "PdfRendererOptions",
    "PrintDocument",
    "PrintStyles",
    "PrintTreeBuilder",
    "RenderingError",
    "UnsupportedImageError",
    "ValidationError",
    "build_document",
    "convert_file",
    "document_to_json",
    "markdown_to_document",
    "parse_html",
    "read_image_info",
    "to_document_definition",
    "transform",
]
