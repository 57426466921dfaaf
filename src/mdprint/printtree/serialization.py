#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/printtree/serialization.py
"""Document definition serialization for print trees.

This module turns a print tree into the plain dict/list structure used by
declarative PDF engines such as pdfmake (``text``, ``style``, ``ul``/``ol``,
``table``, ``image``, ``fit``, ``layout``...). The result is JSON-ready and
is what ``--dump-json`` writes.

Table layouts that such engines express as callbacks are emitted as their
constant values (for example ``"vLineWidth": [3, 0]`` for a border drawn
only on the left edge).

Examples
--------
    >>> from mdprint.printtree.nodes import Heading
    >>> to_document_definition(Heading(level=1, content="Title"))
    {'text': 'Title', 'style': ['heading', 'h1']}

"""

from __future__ import annotations

import json
from typing import Any

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
    PrintNode,
    Rule,
    Table,
    TableCell,
    Text,
)
from mdprint.printtree.visitors import PrintNodeVisitor


def _style_value(styles: tuple[str, ...]) -> str | list[str] | None:
    if not styles:
        return None
    if len(styles) == 1:
        return styles[0]
    return list(styles)


def _plain(mapping: Any) -> Any:
    if hasattr(mapping, "items"):
        return {key: _plain(value) for key, value in mapping.items()}
    if isinstance(mapping, (list, tuple)):
        return [_plain(value) for value in mapping]
    return mapping


class DocumentDefinitionBuilder(PrintNodeVisitor):
    """Visitor producing a document definition dict from a print tree."""

    def visit_string(self, text: str) -> str:
        return text

    def visit_sequence(self, items: list) -> list:
        return [self.visit_content(item) for item in items if item is not None and item != ""]

    def _text_block(self, content: Content, styles: tuple[str, ...]) -> dict[str, Any]:
        result: dict[str, Any] = {"text": self.visit_content(content)}
        style = _style_value(styles)
        if style is not None:
            result["style"] = style
        return result

    def visit_document(self, node: PrintDocument) -> dict[str, Any]:
        width, height = node.page_size
        return {
            "content": self.visit_content(node.content),
            "pageSize": {"width": width, "height": height},
            "pageMargins": list(node.page_margins),
            "styles": _plain(node.style_sheet),
            "defaultStyle": _plain(node.default_style),
        }

    def visit_text(self, node: Text) -> dict[str, Any]:
        result = self._text_block(node.content, node.styles)
        if node.bold:
            result["bold"] = True
        if node.italics:
            result["italics"] = True
        if node.color:
            result["color"] = node.color
        if node.link is not None:
            result["link"] = node.link
        return result

    def visit_paragraph(self, node: Paragraph) -> dict[str, Any]:
        return self._text_block(node.content, node.styles)

    def visit_heading(self, node: Heading) -> dict[str, Any]:
        return self._text_block(node.content, node.styles)

    def visit_list(self, node: List) -> dict[str, Any]:
        return {"ol" if node.ordered else "ul": [self.visit_content(item) for item in node.items]}

    def visit_table_cell(self, node: TableCell) -> Any:
        if not node.styles:
            return self.visit_content(node.content)
        return self._text_block(node.content, node.styles)

    def visit_table(self, node: Table) -> dict[str, Any]:
        body = [[cell.accept(self) for cell in node.header]]
        body.extend([cell.accept(self) for cell in row] for row in node.rows)
        return {
            "table": {
                "widths": ["auto"] * node.column_count,
                "body": body,
                "headerRows": 1,
            },
            "layout": "lightHorizontalLines",
            "style": _style_value(node.styles),
        }

    def visit_block_quote(self, node: BlockQuote) -> dict[str, Any]:
        left, top, right, bottom = node.padding
        return {
            "table": {"widths": ["*"], "body": [[self.visit_content(node.content)]]},
            "layout": {
                "vLineWidth": [node.border_width, 0],
                "hLineWidth": 0,
                "vLineColor": node.border_color,
                "paddingLeft": left,
                "paddingRight": right,
                "paddingTop": top,
                "paddingBottom": bottom,
            },
            "style": _style_value(node.styles),
        }

    def visit_code_block(self, node: CodeBlock) -> dict[str, Any]:
        return {
            "table": {"widths": ["*"], "body": [[self.visit_content(node.content)]]},
            "layout": {
                "paddingLeft": node.padding,
                "paddingRight": node.padding,
                "paddingTop": node.padding,
                "paddingBottom": node.padding,
                "defaultBorder": False,
            },
            "style": _style_value(node.styles),
        }

    def visit_rule(self, node: Rule) -> dict[str, Any]:
        # Two empty rows; only the line between them is drawn
        return {
            "table": {"widths": ["*"], "body": [[""], [""]]},
            "layout": {"hLineWidth": [0, 1, 0], "vLineWidth": 0, "hLineColor": node.color},
            "marginBottom": node.margin_bottom,
        }

    def visit_image(self, node: Image) -> dict[str, Any]:
        result: dict[str, Any] = {"image": node.path}
        if node.fit is not None:
            result["fit"] = list(node.fit)
        style = _style_value(node.styles)
        if style is not None:
            result["style"] = style
        return result

    def visit_image_caption(self, node: ImageCaption) -> dict[str, Any]:
        result: dict[str, Any] = {
            "table": {"widths": ["auto"], "body": [[node.text]]},
            "style": _style_value(node.styles),
        }
        if not node.bordered:
            result["layout"] = "noBorders"
        return result

    def visit_alt_text(self, node: AltText) -> dict[str, Any]:
        return {
            "table": {"widths": ["auto"], "body": [[node.text]]},
            "style": _style_value(node.styles),
        }


def to_document_definition(node: Content) -> Any:
    """Convert a print tree (or any content value) to a document definition.

    Parameters
    ----------
    node : Content
        A ``PrintDocument``, any other node, a string or a list of content

    Returns
    -------
    Any
        A dict for nodes, a list for sequences, a str for text runs

    """
    return DocumentDefinitionBuilder().visit_content(node)


def document_to_json(node: PrintNode | Content, indent: int | None = 2) -> str:
    """Serialize a print tree to a JSON document definition.

    Parameters
    ----------
    node : PrintNode or Content
        The tree to serialize
    indent : int or None, default 2
        JSON indentation; ``None`` for compact output

    Returns
    -------
    str
        JSON text

    """
    return json.dumps(to_document_definition(node), indent=indent, ensure_ascii=False)
