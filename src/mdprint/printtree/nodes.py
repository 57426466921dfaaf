#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/printtree/nodes.py
"""Print tree node classes.

The print tree is the output of the walker: a layout-oriented description
of the document that a PDF engine can lay out without knowing anything
about Markdown or HTML. Nodes carry style names that are resolved against
the style sheet handed to the renderer alongside the tree.

Content
-------
Wherever a node holds content, the content is one of:

    - a ``str`` (plain text run)
    - a ``PrintNode``
    - a ``list`` of content, in document order

Node Hierarchy
--------------
Block nodes:
    - Paragraph, Heading, List, Table, BlockQuote, CodeBlock, Rule
    - Image, ImageCaption, AltText

Inline nodes:
    - Text (bold, italics, color, link and style names)

Document:
    - PrintDocument (content plus page geometry and styles)

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from mdprint.constants import BLOCKQUOTE_BORDER_WIDTH, RULE_MARGIN_BOTTOM

Content = Union[str, "PrintNode", list]


class PrintNode(ABC):
    """Base class for all print tree nodes."""

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result of the matching visit method

        """


@dataclass
class Text(PrintNode):
    """Inline run of content with character formatting.

    A ``Text`` without any formatting is a plain container; list items
    without paragraphs are wrapped in one so they pick up no paragraph
    spacing.

    Parameters
    ----------
    content : Content
        Text run or nested inline content
    styles : tuple of str, default ()
        Style names, e.g. ``("code", "inlineCode")``
    bold, italics : bool, default False
        Character formatting
    color : str or None, default None
        Explicit text color overriding the styles
    link : str or None, default None
        Link target

    """

    content: Content = ""
    styles: tuple[str, ...] = ()
    bold: bool = False
    italics: bool = False
    color: Optional[str] = None
    link: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_text(self)


@dataclass
class Paragraph(PrintNode):
    """Paragraph of inline content.

    Inside a blockquote the styles are empty so callouts are not double spaced.
    """

    content: Content = ""
    styles: tuple[str, ...] = ("paragraph",)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_paragraph(self)


@dataclass
class Heading(PrintNode):
    """Heading node (h1-h6).

    Parameters
    ----------
    level : int
        Heading level (1-6)
    content : Content
        Heading text
    styles : tuple of str
        Defaults to ``("heading", "h<level>")``

    """

    level: int
    content: Content = ""
    styles: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate the level and fill in the default styles."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")
        if not self.styles:
            self.styles = ("heading", f"h{self.level}")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_heading(self)


@dataclass
class List(PrintNode):
    """Ordered or unordered list; each item is content."""

    ordered: bool
    items: list[Content] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_list(self)


@dataclass
class TableCell(PrintNode):
    """Table cell with its content and style names (``tableHeader``, ``alignCenter``...)."""

    content: Content = ""
    styles: tuple[str, ...] = ()

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table_cell(self)

    @property
    def alignment(self) -> str:
        """Horizontal alignment implied by the alignment styles."""
        if "alignCenter" in self.styles:
            return "center"
        if "alignRight" in self.styles:
            return "right"
        return "left"


@dataclass
class Table(PrintNode):
    """Table with one header row.

    Parameters
    ----------
    header : list of TableCell
        Header row cells
    rows : list of list of TableCell
        Data rows; a row may hold fewer cells than the header
    column_count : int
        Number of header cells

    """

    header: list[TableCell]
    rows: list[list[TableCell]] = field(default_factory=list)
    column_count: int = 0
    styles: tuple[str, ...] = ("table",)

    def __post_init__(self) -> None:
        """Derive the column count from the header when not given."""
        if not self.column_count:
            self.column_count = len(self.header)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table(self)


@dataclass
class BlockQuote(PrintNode):
    """Blockquote, optionally styled as an admonition.

    Parameters
    ----------
    content : Content
        Quoted content
    variant : str or None
        Admonition variant (``info``, ``hint``, ``warning``, ``danger``...) or
        ``None`` for a plain blockquote
    border_color : str or None
        Color of the left border
    border_width : float, default 3
        Thickness of the left border in points
    fill_color : str or None
        Background color
    padding : tuple of float
        ``(left, top, right, bottom)`` padding in points

    """

    content: Content = ""
    variant: Optional[str] = None
    border_color: Optional[str] = None
    border_width: float = BLOCKQUOTE_BORDER_WIDTH
    fill_color: Optional[str] = None
    padding: tuple[float, float, float, float] = (0, 0, 0, 0)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_block_quote(self)

    @property
    def styles(self) -> tuple[str, ...]:
        """Style names: ``blockquote`` plus the variant, if any."""
        return ("blockquote", self.variant) if self.variant else ("blockquote",)


@dataclass
class CodeBlock(PrintNode):
    """Preformatted block drawn as a padded box around its content."""

    content: Content = ""
    styles: tuple[str, ...] = ("preformatted",)
    padding: float = 0

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_code_block(self)


@dataclass
class Rule(PrintNode):
    """Horizontal rule."""

    color: Optional[str] = None
    margin_bottom: float = RULE_MARGIN_BOTTOM

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_rule(self)


@dataclass
class Image(PrintNode):
    """Local raster image.

    Parameters
    ----------
    path : str
        Absolute path of the image file
    point_width, point_height : float
        Natural size in points
    fit : tuple of float or None
        ``(width, height)`` box the image is scaled into, or ``None`` to use
        the natural size
    alt_text : str or None
        Alt text; when set a caption follows the image
    styles : tuple of str
        Style names (``("image",)`` for images without a caption)

    """

    path: str
    point_width: float
    point_height: float
    fit: Optional[tuple[float, float]] = None
    alt_text: Optional[str] = None
    styles: tuple[str, ...] = ()

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_image(self)


@dataclass
class ImageCaption(PrintNode):
    """Caption printed under an image with alt text.

    The caption is a single-cell table laid out with ``noBorders`` unless
    ``bordered`` is set. The framed box for an image that could not be used
    is :class:`AltText`, not a caption.
    """

    text: str
    styles: tuple[str, ...] = ("imageAlt",)
    bordered: bool = False

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_image_caption(self)


@dataclass
class AltText(PrintNode):
    """Boxed alt text standing in for an image that could not be used."""

    text: str
    styles: tuple[str, ...] = ("table",)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_alt_text(self)


@dataclass
class PrintDocument(PrintNode):
    """Complete document definition handed to a renderer.

    Parameters
    ----------
    content : Content
        Top-level content
    page_size : tuple of float
        ``(width, height)`` in points
    page_margins : tuple of float
        ``(left, top, right, bottom)`` in points
    style_sheet : Mapping
        Style name to attribute mapping
    default_style : Mapping
        Base text style

    """

    content: Content
    page_size: tuple[float, float]
    page_margins: tuple[float, float, float, float]
    style_sheet: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    default_style: Mapping[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_document(self)


def iter_content(content: Content) -> list:
    """Flatten content into a list of strings and nodes.

    Nested lists are expanded in order; ``None`` and empty strings are
    skipped.
    """
    if content is None or content == "":
        return []
    if isinstance(content, list):
        flat: list = []
        for item in content:
            flat.extend(iter_content(item))
        return flat
    return [content]
