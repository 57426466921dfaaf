#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/renderers/pdf.py
"""PDF rendering of print documents.

This module provides the PdfRenderer class which lays out a print tree with
the ReportLab Platypus framework. Style names carried by the nodes are
resolved against the document's style sheet, layered over its default
style, and turned into ReportLab paragraph styles.

Block nodes become flowables; runs of inline content (strings and ``Text``
nodes) are gathered into Platypus paragraphs with inline markup.
Blockquotes, code blocks, captions and alt text boxes are drawn as one-cell
tables, following the box model of the document definition format.

"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from reportlab.lib.styles import ParagraphStyle
    from reportlab.platypus import Flowable

from mdprint.constants import DEPS_PDF_RENDER
from mdprint.exceptions import RenderingError
from mdprint.options.pdf import PdfRendererOptions
from mdprint.printtree.nodes import (
    AltText,
    BlockQuote,
    CodeBlock,
    Content,
    Heading,
    Image,
    ImageCaption,
    List,
    Paragraph,
    PrintDocument,
    Rule,
    Table,
    TableCell,
    Text,
    iter_content,
)
from mdprint.printtree.visitors import PrintNodeVisitor
from mdprint.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

# Attributes a container passes on to the text inside it; margins and
# paddings belong to the container itself
INHERITED_ATTRS = frozenset({"font", "fontSize", "lineHeight", "color", "bold", "italics", "alignment"})

# Natural line height of a font relative to its size
FONT_LINE_GAP = 1.17

LIST_INDENT = 18

# Platypus frames pad their content on every side
FRAME_PADDING = 6

TEXT_BOX_PADDING = 4

BASE14_VARIANTS = {
    "Helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "Courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
    "Times-Roman": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
}

_INLINE_TYPES = (str, Text)


def escape_markup(text: str) -> str:
    """Escape text for ReportLab paragraph markup."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _has_blocks(content: Content) -> bool:
    for item in iter_content(content):
        if isinstance(item, Text):
            if _has_blocks(item.content):
                return True
        elif not isinstance(item, str):
            return True
    return False


class PdfRenderer(PrintNodeVisitor):
    """Render print documents to PDF.

    Parameters
    ----------
    options : PdfRendererOptions or None, default = None
        Font and metadata options

    Examples
    --------
        >>> from mdprint.builder import markdown_to_document
        >>> document = markdown_to_document("# Title")
        >>> PdfRenderer().render(document, "output.pdf")

    """

    def __init__(self, options: PdfRendererOptions | None = None):
        """Initialize the PDF renderer with options."""
        self.options = options or PdfRendererOptions()
        self._document: PrintDocument | None = None
        self._style_cache: dict[tuple, ParagraphStyle] = {}
        self._inherited: tuple[str, ...] = ()
        self._widths: list[float] = []
        self._frame_height: float = 0

    @requires_dependencies("pdf", DEPS_PDF_RENDER)
    def render(self, document: PrintDocument, output: Union[str, Path, IO[bytes]]) -> None:
        """Render a print document to a PDF file.

        Parameters
        ----------
        document : PrintDocument
            Document definition to render
        output : str, Path, or IO[bytes]
            Output destination (file path or file-like object)

        Raises
        ------
        RenderingError
            If PDF generation fails

        """
        from reportlab.lib import colors
        from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
        from reportlab.lib.styles import ParagraphStyle
        from reportlab.pdfbase.pdfmetrics import stringWidth
        from reportlab.platypus import (
            HRFlowable,
            ListFlowable,
            ListItem,
            SimpleDocTemplate,
            Spacer,
            TableStyle,
            XPreformatted,
        )
        from reportlab.platypus import Image as ReportLabImage
        from reportlab.platypus import Paragraph as ReportLabParagraph
        from reportlab.platypus import Table as ReportLabTable

        self._colors = colors
        self._alignments = {"left": TA_LEFT, "center": TA_CENTER, "right": TA_RIGHT, "justify": TA_JUSTIFY}
        self._ParagraphStyle = ParagraphStyle
        self._HRFlowable = HRFlowable
        self._ListFlowable = ListFlowable
        self._ListItem = ListItem
        self._Spacer = Spacer
        self._TableStyle = TableStyle
        self._XPreformatted = XPreformatted
        self._Image = ReportLabImage
        self._Paragraph = ReportLabParagraph
        self._Table = ReportLabTable
        self._stringWidth = stringWidth

        self._register_fonts()

        try:
            self._document = document
            self._style_cache = {}
            self._inherited = ()

            page_width, page_height = document.page_size
            left, top, right, bottom = document.page_margins
            self._widths = [page_width - left - right - 2 * FRAME_PADDING]
            self._frame_height = page_height - top - bottom - 2 * FRAME_PADDING

            flowables = document.accept(self) or [self._Spacer(1, 0)]

            doc_kwargs: dict[str, Any] = {
                "pagesize": (page_width, page_height),
                "leftMargin": left,
                "topMargin": top,
                "rightMargin": right,
                "bottomMargin": bottom,
            }
            if self.options.creator:
                doc_kwargs["creator"] = self.options.creator
            if self.options.title:
                doc_kwargs["title"] = self.options.title

            if isinstance(output, (str, Path)):
                pdf_doc = SimpleDocTemplate(str(output), **doc_kwargs)
            else:
                buffer = io.BytesIO()
                pdf_doc = SimpleDocTemplate(buffer, **doc_kwargs)

            pdf_doc.build(flowables)

            if not isinstance(output, (str, Path)):
                output.write(buffer.getvalue())
        except Exception as e:
            raise RenderingError(f"Failed to render PDF: {e!r}", rendering_stage="rendering", original_error=e) from e
        finally:
            self._document = None

    @requires_dependencies("pdf", DEPS_PDF_RENDER)
    def render_to_bytes(self, document: PrintDocument) -> bytes:
        """Render a print document to PDF bytes.

        Raises
        ------
        RenderingError
            If PDF generation fails

        """
        buffer = io.BytesIO()
        self.render(document, buffer)
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Fonts and styles
    # ------------------------------------------------------------------

    def _register_fonts(self) -> None:
        """Register the TrueType families declared in the options."""
        from reportlab.pdfbase import pdfmetrics
        from reportlab.pdfbase.ttfonts import TTFont

        for family, variants in self.options.fonts.items():
            names = {}
            try:
                for variant in ("normal", "bold", "italics", "bolditalics"):
                    path = variants.get(variant) or variants["normal"]
                    names[variant] = f"{family}-{variant}"
                    pdfmetrics.registerFont(TTFont(names[variant], path))
            except Exception as e:
                raise RenderingError(
                    f"Could not register font family '{family}': {e}", rendering_stage="fonts", original_error=e
                ) from e
            pdfmetrics.registerFontFamily(
                family,
                normal=names["normal"],
                bold=names["bold"],
                italic=names["italics"],
                boldItalic=names["bolditalics"],
            )
            logger.debug(f"Registered font family {family}")

    def _font_name(self, family: str | None, bold: bool = False, italics: bool = False) -> str:
        """Return the concrete font name for a family and variant."""
        index = (2 if italics else 0) + (1 if bold else 0)
        if family and family in self.options.fonts:
            return f"{family}-{('normal', 'bold', 'italics', 'bolditalics')[index]}"
        fallback = self.options.font_fallbacks.get(family or "", family)
        if fallback not in BASE14_VARIANTS:
            fallback = "Helvetica"
        return BASE14_VARIANTS[fallback][index]

    def _resolve(self, own: tuple[str, ...], inherited: tuple[str, ...] = ()) -> dict[str, Any]:
        """Merge the default style, inherited text attributes and own styles."""
        assert self._document is not None
        sheet = self._document.style_sheet
        attrs: dict[str, Any] = dict(self._document.default_style)
        for name in inherited:
            attrs.update({k: v for k, v in sheet.get(name, {}).items() if k in INHERITED_ATTRS})
        for name in own:
            attrs.update(sheet.get(name, {}))
        return attrs

    def _color(self, value: str | None) -> Any:
        if not value:
            return None
        try:
            return self._colors.HexColor(value) if value.startswith("#") else self._colors.toColor(value)
        except ValueError:
            logger.warning(f"Ignoring invalid color {value!r}")
            return None

    def _paragraph_style(self, own: tuple[str, ...], inherited: tuple[str, ...] = ()) -> ParagraphStyle:
        key = (own, inherited)
        if key in self._style_cache:
            return self._style_cache[key]

        attrs = self._resolve(own, inherited)
        font_size = float(attrs.get("fontSize", 12))
        kwargs: dict[str, Any] = {
            "fontName": self._font_name(attrs.get("font"), bool(attrs.get("bold")), bool(attrs.get("italics"))),
            "fontSize": font_size,
            "leading": font_size * FONT_LINE_GAP * float(attrs.get("lineHeight", 1)),
            "alignment": self._alignments.get(attrs.get("alignment", "left"), self._alignments["left"]),
            "spaceBefore": float(attrs.get("marginTop", 0)),
            "spaceAfter": float(attrs.get("marginBottom", 0)),
        }
        text_color = self._color(attrs.get("color"))
        if text_color is not None:
            kwargs["textColor"] = text_color

        style = self._ParagraphStyle(name="-".join(own + inherited) or "default", **kwargs)
        self._style_cache[key] = style
        return style

    # ------------------------------------------------------------------
    # Flow helpers
    # ------------------------------------------------------------------

    @property
    def _width(self) -> float:
        return self._widths[-1]

    def _flow(self, content: Content, own: tuple[str, ...] = ()) -> list[Flowable]:
        """Lay out content, gathering inline runs into paragraphs."""
        flowables: list[Flowable] = []
        run: list = []

        def flush() -> None:
            if run:
                markup = "".join(self.visit_content(item) for item in run)
                flowables.append(self._Paragraph(markup, self._paragraph_style(own, self._inherited)))
                run.clear()

        for item in iter_content(content):
            if isinstance(item, Text) and _has_blocks(item.content):
                flush()
                flowables.extend(self._flow(item.content, own))
            elif isinstance(item, _INLINE_TYPES):
                run.append(item)
            else:
                flush()
                flowables.extend(item.accept(self))
        flush()
        return flowables

    def _nested(self, content: Content, inherited: tuple[str, ...], width: float) -> list[Flowable]:
        """Lay out content inside a container of the given inner width."""
        saved = self._inherited
        self._inherited = saved + inherited
        self._widths.append(max(width, 1))
        try:
            return self._flow(content)
        finally:
            self._widths.pop()
            self._inherited = saved

    def _margin_after(self, names: tuple[str, ...]) -> list[Flowable]:
        margin = float(self._resolve(names).get("marginBottom", 0) or 0)
        return [self._Spacer(1, margin)] if margin else []

    def _box(self, cell: Any, width: float, commands: list) -> Any:
        table = self._Table([[cell]], colWidths=[width])
        table.setStyle(self._TableStyle(commands))
        return table

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def visit_string(self, text: str) -> str:
        return escape_markup(text)

    def visit_sequence(self, items: list) -> list[Flowable]:
        return self._flow(items)

    def visit_text(self, node: Text) -> str:
        attrs: dict[str, Any] = {}
        sheet = self._document.style_sheet if self._document else {}
        for name in node.styles:
            attrs.update(sheet.get(name, {}))

        inner = "".join(self.visit_content(item) for item in iter_content(node.content) if isinstance(item, _INLINE_TYPES))

        font_attrs = []
        if "font" in attrs:
            font_attrs.append(f'face="{self._font_name(attrs["font"])}"')
        if "fontSize" in attrs:
            font_attrs.append(f'size="{attrs["fontSize"]}"')
        color = node.color or attrs.get("color")
        if color:
            font_attrs.append(f'color="{color}"')
        if attrs.get("background"):
            font_attrs.append(f'backcolor="{attrs["background"]}"')
        if font_attrs:
            inner = f"<font {' '.join(font_attrs)}>{inner}</font>"

        if node.bold or attrs.get("bold"):
            inner = f"<b>{inner}</b>"
        if node.italics or attrs.get("italics"):
            inner = f"<i>{inner}</i>"
        if attrs.get("decoration") == "underline":
            inner = f"<u>{inner}</u>"
        if node.link:
            href = escape_markup(node.link).replace('"', "&quot;")
            inner = f'<link href="{href}">{inner}</link>'
        return inner

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def visit_document(self, node: PrintDocument) -> list[Flowable]:
        return self._flow(node.content)

    def visit_paragraph(self, node: Paragraph) -> list[Flowable]:
        return self._flow(node.content, node.styles)

    def visit_heading(self, node: Heading) -> list[Flowable]:
        return self._flow(node.content, node.styles)

    def visit_list(self, node: List) -> list[Flowable]:
        items = []
        for item in node.items:
            flowables = self._nested(item, (), self._width - LIST_INDENT)
            if flowables:
                items.append(self._ListItem(flowables))
        if not items:
            return []
        return [
            self._ListFlowable(
                items,
                bulletType="1" if node.ordered else "bullet",
                leftIndent=LIST_INDENT,
                bulletFontName=self._paragraph_style(()).fontName,
                bulletFontSize=self._paragraph_style(()).fontSize,
            )
        ]

    def visit_table_cell(self, node: TableCell) -> Any:
        if _has_blocks(node.content):
            return self._flow(node.content)
        markup = "".join(self.visit_content(item) for item in iter_content(node.content))
        return self._Paragraph(markup, self._paragraph_style(node.styles, self._inherited + ("table",)))

    def visit_table(self, node: Table) -> list[Flowable]:
        columns = max(node.column_count, 1)
        col_width = self._width / columns
        saved = self._widths
        self._widths = saved + [col_width - 12]
        try:
            empty = TableCell("")
            data = [[cell.accept(self) for cell in node.header]]
            for row in node.rows:
                cells = list(row[:columns]) + [empty] * (columns - len(row))
                data.append([cell.accept(self) for cell in cells])
        finally:
            self._widths = saved

        grey = self._colors.HexColor("#aaaaaa")
        commands: list = [
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LINEBELOW", (0, 0), (-1, 0), 1, self._colors.black),
        ]
        if len(data) > 2:
            commands.append(("LINEBELOW", (0, 1), (-1, -2), 0.5, grey))

        table = self._Table(data, colWidths=[col_width] * columns, repeatRows=1)
        table.setStyle(self._TableStyle(commands))
        return [table] + self._margin_after(node.styles)

    def visit_block_quote(self, node: BlockQuote) -> list[Flowable]:
        left, top, right, bottom = node.padding
        inner_width = self._width - left - right - node.border_width
        flowables = self._nested(node.content, node.styles, inner_width)

        commands: list = [
            ("LEFTPADDING", (0, 0), (-1, -1), left + node.border_width),
            ("RIGHTPADDING", (0, 0), (-1, -1), right),
            ("TOPPADDING", (0, 0), (-1, -1), top),
            ("BOTTOMPADDING", (0, 0), (-1, -1), bottom),
        ]
        fill = self._color(node.fill_color)
        if fill is not None:
            commands.append(("BACKGROUND", (0, 0), (-1, -1), fill))
        border = self._color(node.border_color)
        if border is not None and node.border_width:
            commands.append(("LINEBEFORE", (0, 0), (0, -1), node.border_width, border))

        return [self._box(flowables or "", self._width, commands)] + self._margin_after(node.styles)

    def visit_code_block(self, node: CodeBlock) -> list[Flowable]:
        markup = "".join(self.visit_content(item) for item in iter_content(node.content) if isinstance(item, _INLINE_TYPES))
        code = self._XPreformatted(markup.rstrip("\n"), self._paragraph_style((), self._inherited + node.styles))
        padding = node.padding
        commands = [
            ("LEFTPADDING", (0, 0), (-1, -1), padding),
            ("RIGHTPADDING", (0, 0), (-1, -1), padding),
            ("TOPPADDING", (0, 0), (-1, -1), padding),
            ("BOTTOMPADDING", (0, 0), (-1, -1), padding),
        ]
        return [self._box(code, self._width, commands)] + self._margin_after(node.styles)

    def visit_rule(self, node: Rule) -> list[Flowable]:
        return [
            self._HRFlowable(
                width="100%",
                thickness=1,
                color=self._color(node.color) or self._colors.lightgrey,
                spaceBefore=0,
                spaceAfter=node.margin_bottom,
            )
        ]

    def _image_size(self, node: Image) -> tuple[float, float]:
        width, height = float(node.point_width), float(node.point_height)
        if node.fit is not None and width > 0 and height > 0:
            fit_width, fit_height = node.fit
            factor = fit_width / width if width / height > fit_width / fit_height else fit_height / height
            width, height = width * factor, height * factor
        # Never exceed the frame; a flowable larger than the frame cannot be laid out
        shrink = min(1.0, self._width / width if width else 1.0, self._frame_height / height if height else 1.0)
        return width * shrink, height * shrink

    def visit_image(self, node: Image) -> list[Flowable]:
        width, height = self._image_size(node)
        image = self._Image(node.path, width=width, height=height)
        image.hAlign = "LEFT"
        return [image] + self._margin_after(node.styles)

    def _text_box(self, text: str, styles: tuple[str, ...], bordered: bool) -> list[Flowable]:
        """Lay out a single line of text in a cell sized to the text."""
        style = self._paragraph_style((), self._inherited + styles)
        # Paragraphs cannot size auto-width columns, so measure the text
        width = self._stringWidth(text, style.fontName, style.fontSize) + 2 * TEXT_BOX_PADDING + 1
        commands: list = [
            ("LEFTPADDING", (0, 0), (-1, -1), TEXT_BOX_PADDING),
            ("RIGHTPADDING", (0, 0), (-1, -1), TEXT_BOX_PADDING),
        ]
        if bordered:
            commands.append(("BOX", (0, 0), (-1, -1), 1, self._colors.black))
        table = self._box(self._Paragraph(escape_markup(text), style), min(width, self._width), commands)
        table.hAlign = "LEFT"
        return [table] + self._margin_after(styles)

    def visit_image_caption(self, node: ImageCaption) -> list[Flowable]:
        return self._text_box(node.text, node.styles, node.bordered)

    def visit_alt_text(self, node: AltText) -> list[Flowable]:
        return self._text_box(node.text, node.styles, bordered=True)


def render_pdf(
    document: PrintDocument,
    output: Union[str, Path, IO[bytes]],
    options: PdfRendererOptions | None = None,
) -> None:
    """Render a print document to PDF with a fresh :class:`PdfRenderer`."""
    PdfRenderer(options).render(document, output)


__all__ = ["PdfRenderer", "render_pdf", "escape_markup"]

