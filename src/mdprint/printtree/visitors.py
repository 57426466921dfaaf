#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/printtree/visitors.py
"""Visitor base class for print tree traversal.

Renderers and serializers subclass :class:`PrintNodeVisitor` and implement
one ``visit_*`` method per node class. Plain strings and lists are not
nodes; :meth:`PrintNodeVisitor.visit_content` routes them to
``visit_string`` and ``visit_sequence``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
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


class PrintNodeVisitor(ABC):
    """Abstract base class for print tree visitors."""

    def visit_content(self, content: Content) -> Any:
        """Dispatch any content value to the matching visit method."""
        if isinstance(content, PrintNode):
            return content.accept(self)
        if isinstance(content, list):
            return self.visit_sequence(content)
        return self.visit_string("" if content is None else str(content))

    @abstractmethod
    def visit_string(self, text: str) -> Any:
        """Visit a plain text run."""

    @abstractmethod
    def visit_sequence(self, items: list) -> Any:
        """Visit a list of content values."""

    @abstractmethod
    def visit_document(self, node: PrintDocument) -> Any:
        """Visit a PrintDocument node."""

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""

    @abstractmethod
    def visit_rule(self, node: Rule) -> Any:
        """Visit a Rule node."""

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""

    @abstractmethod
    def visit_image_caption(self, node: ImageCaption) -> Any:
        """Visit an ImageCaption node."""

    @abstractmethod
    def visit_alt_text(self, node: AltText) -> Any:
        """Visit an AltText node."""
