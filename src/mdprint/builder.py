#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/builder.py
"""High-level conversion entry points.

The pipeline is::

    Markdown --mistune--> HTML --BeautifulSoup--> element tree
             --PrintTreeBuilder--> PrintDocument --PdfRenderer--> PDF

Each function stops at a different stage so callers can plug in their own
renderer or inspect the intermediate document definition.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup

from mdprint.exceptions import FileError
from mdprint.markdown import render_markdown
from mdprint.options import LayoutOptions, MarkdownOptions, PdfRendererOptions, PrintStyles
from mdprint.printtree.nodes import PrintDocument
from mdprint.printtree.serialization import document_to_json
from mdprint.renderers.pdf import PdfRenderer
from mdprint.utils.decorators import debug_timer
from mdprint.walker import PrintTreeBuilder

logger = logging.getLogger(__name__)


def parse_html(html: str) -> list[Any]:
    """Parse an HTML fragment or document and return the body's children.

    Parameters
    ----------
    html : str
        HTML text

    Returns
    -------
    list
        Top-level nodes in document order

    """
    soup = BeautifulSoup(html, "html.parser")
    root = soup.body or soup
    return list(root.contents)


def build_document(
    html: str,
    layout: LayoutOptions | None = None,
    styles: PrintStyles | None = None,
) -> PrintDocument:
    """Build a print document from HTML.

    Parameters
    ----------
    html : str
        HTML produced from Markdown
    layout : LayoutOptions, optional
        Page geometry and image base path
    styles : PrintStyles, optional
        Style sheet, keyword table and base style

    Returns
    -------
    PrintDocument
        Document definition ready for rendering

    """
    layout = layout or LayoutOptions()
    styles = styles or PrintStyles()

    with debug_timer(logger, "Building print tree"):
        content = PrintTreeBuilder(layout, styles).transform(parse_html(html))

    return PrintDocument(
        content=content,
        page_size=(layout.page_size.width, layout.page_size.height),
        page_margins=(
            layout.page_margins.left,
            layout.page_margins.top,
            layout.page_margins.right,
            layout.page_margins.bottom,
        ),
        style_sheet=styles.style_sheet,
        default_style=styles.default_style,
    )


def markdown_to_document(
    text: str,
    layout: LayoutOptions | None = None,
    styles: PrintStyles | None = None,
    markdown_options: MarkdownOptions | None = None,
) -> PrintDocument:
    """Render Markdown and build its print document."""
    with debug_timer(logger, "Rendering Markdown"):
        html = render_markdown(text, markdown_options)
    return build_document(html, layout, styles)


def default_output_path(input_path: str | Path) -> Path:
    """Return the input path with its ``.md`` extension replaced by ``.pdf``."""
    path = Path(input_path)
    if path.suffix == ".md":
        return path.with_suffix(".pdf")
    return path.with_name(path.name + ".pdf")


def convert_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    layout: LayoutOptions | None = None,
    styles: PrintStyles | None = None,
    markdown_options: MarkdownOptions | None = None,
    renderer_options: PdfRendererOptions | None = None,
    dump_json: str | Path | None = None,
) -> Path:
    """Convert a Markdown file to PDF.

    Images are resolved relative to the Markdown file's directory.

    Parameters
    ----------
    input_path : str or Path
        Markdown file (UTF-8)
    output_path : str or Path, optional
        PDF file to write; defaults to the input path with a ``.pdf`` extension
    layout : LayoutOptions, optional
        Page geometry; its ``base_path`` is replaced by the input's directory
    styles : PrintStyles, optional
        Style sheet and keyword table
    markdown_options : MarkdownOptions, optional
        Front end options
    renderer_options : PdfRendererOptions, optional
        Font and metadata options
    dump_json : str or Path, optional
        Also write the document definition as JSON to this path

    Returns
    -------
    Path
        The PDF file written

    Raises
    ------
    FileError
        If the input cannot be read or the JSON dump cannot be written.
    RenderingError
        If PDF generation fails.

    """
    source = Path(input_path)
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Could not read Markdown file: {e}", file_path=str(source), original_error=e) from e

    layout = (layout or LayoutOptions()).create_updated(base_path=source.resolve().parent)
    document = markdown_to_document(text, layout, styles, markdown_options)

    if dump_json is not None:
        try:
            Path(dump_json).write_text(document_to_json(document), encoding="utf-8")
        except OSError as e:
            raise FileError(f"Could not write document definition: {e}", file_path=str(dump_json), original_error=e) from e
        logger.info(f"Wrote document definition to {dump_json}")

    target = Path(output_path) if output_path is not None else default_output_path(source)
    PdfRenderer(renderer_options).render(document, target)
    return target
