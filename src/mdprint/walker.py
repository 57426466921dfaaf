#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/walker.py
"""Conversion of a parsed HTML tree into a print tree.

The walker visits the BeautifulSoup tree depth first and emits print tree
nodes (see :mod:`mdprint.printtree.nodes`). Besides the one-to-one element
mapping it resolves what only matters on paper:

- blockquotes led by a bold keyword become colored admonitions
- paragraphs holding images are split around them, since images cannot
  be laid out inline
- highlighted code spans are mapped to ``code*`` styles
- table cell alignment is read from inline ``text-align`` styles
- local PNG/JPEG images are measured and sized to the text column

Ancestry is threaded down the recursion as an immutable
:class:`WalkContext`; the walker never reads ``Tag.parent``.

Image problems never abort a document. Each image is resolved on its own
and any failure is replaced by its alt text, or dropped when there is none.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional
from urllib.parse import unquote

from bs4.element import Tag

from mdprint.admonitions import AdmonitionResolver
from mdprint.constants import BLOCKQUOTE_BORDER_WIDTH
from mdprint.exceptions import DecodeError, ImageError, UnsupportedImageError
from mdprint.highlight import highlight_style_for_classes
from mdprint.images import clamp_width, read_image_info, to_points
from mdprint.nodekind import NodeKind, classify, first_element_child, is_text, kind_of, leading_label
from mdprint.options import LayoutOptions, PrintStyles
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
    Rule,
    Table,
    TableCell,
    Text,
)

logger = logging.getLogger(__name__)

_URL_PATTERN = re.compile(r"^\w+://")
_TEXT_ALIGN_PREFIX = "text-align:"
_ALIGN_STYLES = {"center": "alignCenter", "right": "alignRight"}


@dataclass(frozen=True)
class WalkContext:
    """Enclosing elements of the node being visited, outermost first."""

    ancestors: tuple[Tag, ...] = ()

    def enter(self, element: Tag) -> "WalkContext":
        """Return the context for the children of ``element``."""
        return WalkContext(self.ancestors + (element,))

    @property
    def parent(self) -> Optional[Tag]:
        return self.ancestors[-1] if self.ancestors else None

    @property
    def grandparent(self) -> Optional[Tag]:
        return self.ancestors[-2] if len(self.ancestors) > 1 else None

    def inside(self, *kinds: NodeKind) -> bool:
        """Return True when any ancestor is of one of ``kinds``."""
        return any(classify(element) in kinds for element in self.ancestors)


def _is_empty(result: Any) -> bool:
    return result is None or (isinstance(result, str) and result == "")


def _is_blank(content: Content) -> bool:
    if isinstance(content, str):
        return not content.strip()
    if isinstance(content, list):
        return all(_is_blank(item) for item in content)
    return content is None


class PrintTreeBuilder:
    """Walk a parsed HTML tree and build the matching print tree.

    Parameters
    ----------
    layout : LayoutOptions, optional
        Page geometry and image base path
    styles : PrintStyles, optional
        Style sheet and keyword table

    Examples
    --------
        >>> from mdprint.builder import parse_html
        >>> builder = PrintTreeBuilder()
        >>> builder.transform(parse_html("<h1>Title</h1>"))
        [Heading(level=1, content='Title', styles=('heading', 'h1'))]

    """

    # Dispatch table mapping node kinds to handler methods. Kinds absent from
    # the table (list items, table parts) are only handled by their parents.
    _HANDLERS = {
        NodeKind.TEXT: "_handle_text",
        NodeKind.HEADING: "_handle_heading",
        NodeKind.PARAGRAPH: "_handle_paragraph",
        NodeKind.BOLD: "_handle_bold",
        NodeKind.ITALIC: "_handle_italic",
        NodeKind.PREFORMATTED: "_handle_preformatted",
        NodeKind.SPAN: "_handle_span",
        NodeKind.CODE: "_handle_code",
        NodeKind.BLOCKQUOTE: "_handle_blockquote",
        NodeKind.LINK: "_handle_link",
        NodeKind.LIST: "_handle_list",
        NodeKind.RULE: "_handle_rule",
        NodeKind.TABLE: "_handle_table",
        NodeKind.IMAGE: "_handle_image",
    }

    def __init__(self, layout: LayoutOptions | None = None, styles: PrintStyles | None = None):
        self.layout = layout or LayoutOptions()
        self.styles = styles or PrintStyles()
        self.admonitions = AdmonitionResolver(self.styles.keywords, self.styles.style_sheet)

    def transform(self, nodes: Iterable[Any], context: WalkContext | None = None) -> Content:
        """Convert a sequence of sibling nodes to print content.

        Parameters
        ----------
        nodes : iterable of bs4 nodes
            Sibling nodes in document order
        context : WalkContext, optional
            Ancestry of the siblings; empty for top-level nodes

        Returns
        -------
        Content
            A bare string when ``nodes`` is a single text node, otherwise a
            list of the non-empty results in order

        """
        context = context or WalkContext()
        nodes = list(nodes)
        if len(nodes) == 1 and is_text(nodes[0]):
            return self._handle_text(nodes[0], context)

        results: list = []
        for node in nodes:
            result = self.transform_node(node, context)
            if not _is_empty(result):
                results.append(result)
        return results

    def transform_node(self, node: Any, context: WalkContext | None = None) -> Any:
        """Convert a single node; returns ``None`` for nodes without output."""
        handler_name = self._HANDLERS.get(classify(node))
        if handler_name is None:
            if isinstance(node, Tag):
                logger.debug(f"Skipping unsupported element <{node.name}>")
            return None
        return getattr(self, handler_name)(node, context or WalkContext())

    def _children(self, element: Tag, context: WalkContext) -> Content:
        return self.transform(element.contents, context.enter(element))

    def _style(self, name: str) -> Any:
        return self.styles.style(name)

    # ------------------------------------------------------------------
    # Inline handlers
    # ------------------------------------------------------------------

    def _handle_text(self, node: Any, context: WalkContext) -> str:
        text = str(node)
        # Newlines between block elements are markup, not content
        if "\n" in text and not text.strip() and not context.inside(NodeKind.PREFORMATTED, NodeKind.CODE):
            return ""
        return text

    def _handle_bold(self, node: Tag, context: WalkContext) -> Text:
        color = None
        parent = context.parent
        leads_block = kind_of(parent, NodeKind.BLOCKQUOTE) or (
            kind_of(parent, NodeKind.PARAGRAPH) and kind_of(context.grandparent, NodeKind.BLOCKQUOTE)
        )
        if leads_block and first_element_child(parent) is node:
            variant = self.admonitions.match(leading_label(node))
            if variant:
                color = self.admonitions.border_color(variant)
        return Text(self._children(node, context), bold=True, color=color)

    def _handle_italic(self, node: Tag, context: WalkContext) -> Text:
        return Text(self._children(node, context), italics=True)

    def _handle_span(self, node: Tag, context: WalkContext) -> Text:
        style = highlight_style_for_classes(node.get("class") or [])
        return Text(self._children(node, context), styles=(style,) if style else ())

    def _handle_code(self, node: Tag, context: WalkContext) -> Text:
        placement = "preCode" if kind_of(context.parent, NodeKind.PREFORMATTED) else "inlineCode"
        return Text(self._children(node, context), styles=("code", placement))

    def _handle_link(self, node: Tag, context: WalkContext) -> Text:
        return Text(self._children(node, context), link=node.get("href", ""), styles=("link",))

    # ------------------------------------------------------------------
    # Block handlers
    # ------------------------------------------------------------------

    def _handle_heading(self, node: Tag, context: WalkContext) -> Heading:
        return Heading(level=int(node.name[1]), content=self._children(node, context))

    def _handle_paragraph(self, node: Tag, context: WalkContext) -> Any:
        children = node.contents
        inner = context.enter(node)
        image_indexes = [index for index, child in enumerate(children) if kind_of(child, NodeKind.IMAGE)]

        if not image_indexes:
            styles = () if kind_of(context.parent, NodeKind.BLOCKQUOTE) else ("paragraph",)
            return Paragraph(self.transform(children, inner), styles=styles)

        segments: list = []

        def add_text_run(run: list) -> None:
            content = self.transform(run, inner)
            if not _is_blank(content):
                segments.append(Paragraph(content))

        start = 0
        for index in image_indexes:
            if index > start:
                add_text_run(children[start:index])
            image = self._handle_image(children[index], inner)
            if not _is_empty(image):
                segments.append(image)
            start = index + 1
        if start < len(children):
            add_text_run(children[start:])

        if not segments:
            return None
        if len(segments) == 1:
            return segments[0]
        return segments

    def _handle_preformatted(self, node: Tag, context: WalkContext) -> CodeBlock:
        return CodeBlock(self._children(node, context), padding=self._style("preformatted").get("padding", 0))

    def _handle_blockquote(self, node: Tag, context: WalkContext) -> BlockQuote:
        variant = self.admonitions.resolve_blockquote(node)
        generic = self._style("blockquote")
        padding = tuple(generic.get(side, 0) for side in ("paddingLeft", "paddingTop", "paddingRight", "paddingBottom"))
        return BlockQuote(
            content=self._children(node, context),
            variant=variant,
            border_color=self.admonitions.border_color(variant),
            border_width=BLOCKQUOTE_BORDER_WIDTH,
            fill_color=self.admonitions.fill_color(variant),
            padding=padding,
        )

    def _handle_list(self, node: Tag, context: WalkContext) -> Optional[List]:
        inner = context.enter(node)
        items: list = []
        for child in node.contents:
            if not kind_of(child, NodeKind.LIST_ITEM):
                continue
            content = self._children(child, inner)
            if any(kind_of(grandchild, NodeKind.PARAGRAPH) for grandchild in child.contents):
                items.append(content)
            else:
                # Bare container, so inline items get no paragraph spacing
                items.append(Text(content))
        if not items:
            return None
        return List(ordered=node.name == "ol", items=items)

    def _handle_rule(self, node: Tag, context: WalkContext) -> Rule:
        return Rule(color=self._style("horizontalRule").get("borderColor"))

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    @staticmethod
    def _alignment_styles(cell: Tag) -> tuple[str, ...]:
        style = cell.get("style") or ""
        if not style.startswith(_TEXT_ALIGN_PREFIX):
            return ()
        align = style[len(_TEXT_ALIGN_PREFIX) :].strip().rstrip(";").strip().lower()
        return (_ALIGN_STYLES[align],) if align in _ALIGN_STYLES else ()

    def _handle_table(self, node: Tag, context: WalkContext) -> Optional[Table]:
        table_context = context.enter(node)
        head_row = head = body = None
        for child in node.contents:
            if kind_of(child, NodeKind.TABLE_HEAD):
                row = next((r for r in child.contents if kind_of(r, NodeKind.TABLE_ROW)), None)
                if row is not None:
                    head_row, head = row, child
            elif kind_of(child, NodeKind.TABLE_BODY):
                body = child

        if head_row is None or body is None:
            logger.debug("Skipping table without a header row or a body")
            return None

        header_context = table_context.enter(head).enter(head_row)
        header = [
            TableCell(self._children(cell, header_context), styles=("tableHeader",) + self._alignment_styles(cell))
            for cell in head_row.contents
            if kind_of(cell, NodeKind.TABLE_HEADER_CELL)
        ]
        if not header:
            logger.debug("Skipping table without header cells")
            return None

        body_context = table_context.enter(body)
        rows = []
        for row in body.contents:
            if not kind_of(row, NodeKind.TABLE_ROW):
                continue
            row_context = body_context.enter(row)
            rows.append(
                [
                    TableCell(self._children(cell, row_context), styles=self._alignment_styles(cell))
                    for cell in row.contents
                    if kind_of(cell, NodeKind.TABLE_CELL)
                ]
            )
        if not rows:
            logger.debug("Skipping table without data rows")
            return None

        return Table(header=header, rows=rows, column_count=len(header))

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def _handle_image(self, node: Tag, context: WalkContext) -> Any:
        src = node.get("src")
        alt = node.get("alt")
        if not src:
            return None

        try:
            return self._place_image(src, alt)
        except UnsupportedImageError as e:
            logger.error(f"{e.message} [{src}]")
        except ImageError as e:
            logger.warning(f"Could not use image {src}: {e.message}")
        return AltText(alt) if alt else None

    def _resolve_image_path(self, src: str) -> Path:
        if _URL_PATTERN.match(src):
            raise UnsupportedImageError("Image URLs are not supported.", source=src)
        if self.layout.base_path is None:
            raise UnsupportedImageError("No base path for images was specified.", source=src)
        relative = unquote(src[1:] if src.startswith("/") else src)
        return Path(os.path.abspath(self.layout.base_path / relative))

    def _place_image(self, src: str, alt: Optional[str]) -> Any:
        path = self._resolve_image_path(src)
        info = read_image_info(path)

        width_pt, height_pt = to_points(info.width, info.height, info.dpi)
        if width_pt is None or height_pt is None:
            raise DecodeError(f"Could not read the picture's dimensions [{info.width}, {info.height}, {info.dpi}]")

        if not alt:
            return Image(str(path), width_pt, height_pt, styles=("image",))

        margins = self.layout.page_margins
        fit = clamp_width(
            width_pt, self.layout.page_size.width, margins.left, margins.right, self.layout.image_max_size
        )
        return [
            Image(str(path), width_pt, height_pt, fit=(fit, fit), alt_text=alt),
            ImageCaption(alt),
        ]


def transform(
    nodes: Iterable[Any],
    layout: LayoutOptions | None = None,
    styles: PrintStyles | None = None,
) -> Content:
    """Convert sibling nodes to print content with a fresh :class:`PrintTreeBuilder`."""
    return PrintTreeBuilder(layout, styles).transform(nodes)
