#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/nodekind.py
"""Classification of parsed HTML nodes.

The walker understands a closed set of element kinds. Every BeautifulSoup
node maps to one :class:`NodeKind` or to ``None`` (ignored).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from bs4.element import NavigableString, PreformattedString, Tag


class NodeKind(Enum):
    """Kinds of input node the walker dispatches on."""

    TEXT = "text"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BOLD = "bold"
    ITALIC = "italic"
    PREFORMATTED = "preformatted"
    SPAN = "span"
    CODE = "code"
    BLOCKQUOTE = "blockquote"
    LINK = "link"
    LIST = "list"
    LIST_ITEM = "list_item"
    RULE = "rule"
    TABLE = "table"
    TABLE_HEAD = "table_head"
    TABLE_BODY = "table_body"
    TABLE_ROW = "table_row"
    TABLE_HEADER_CELL = "table_header_cell"
    TABLE_CELL = "table_cell"
    IMAGE = "image"


TAG_KINDS: dict[str, NodeKind] = {
    "h1": NodeKind.HEADING,
    "h2": NodeKind.HEADING,
    "h3": NodeKind.HEADING,
    "h4": NodeKind.HEADING,
    "h5": NodeKind.HEADING,
    "h6": NodeKind.HEADING,
    "p": NodeKind.PARAGRAPH,
    "strong": NodeKind.BOLD,
    "b": NodeKind.BOLD,
    "em": NodeKind.ITALIC,
    "i": NodeKind.ITALIC,
    "pre": NodeKind.PREFORMATTED,
    "span": NodeKind.SPAN,
    "code": NodeKind.CODE,
    "blockquote": NodeKind.BLOCKQUOTE,
    "a": NodeKind.LINK,
    "ul": NodeKind.LIST,
    "ol": NodeKind.LIST,
    "li": NodeKind.LIST_ITEM,
    "hr": NodeKind.RULE,
    "table": NodeKind.TABLE,
    "thead": NodeKind.TABLE_HEAD,
    "tbody": NodeKind.TABLE_BODY,
    "tr": NodeKind.TABLE_ROW,
    "th": NodeKind.TABLE_HEADER_CELL,
    "td": NodeKind.TABLE_CELL,
    "img": NodeKind.IMAGE,
}


def is_text(node: Any) -> bool:
    """Return True for plain text runs; comments, doctypes and CDATA are not text."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def classify(node: Any) -> Optional[NodeKind]:
    """Return the kind of a node, or ``None`` for nodes the walker ignores."""
    if is_text(node):
        return NodeKind.TEXT
    if isinstance(node, Tag):
        return TAG_KINDS.get(node.name)
    return None


def kind_of(node: Any, kind: NodeKind) -> bool:
    """Return True when ``node`` is of the given kind."""
    return node is not None and classify(node) is kind


def first_element_child(node: Tag) -> Optional[Tag]:
    """Return the first child that is an element, skipping text and comments."""
    for child in node.contents:
        if isinstance(child, Tag):
            return child
    return None


def leading_label(node: Tag) -> str:
    """Return the first child's text, trimmed and lowercased, or ``""`` if it is not text."""
    if node.contents and is_text(node.contents[0]):
        return str(node.contents[0]).strip().lower()
    return ""
