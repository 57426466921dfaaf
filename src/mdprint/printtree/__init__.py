#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/printtree/__init__.py
"""Print tree model, visitor base class and document definition serializer."""

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
    iter_content,
)
from mdprint.printtree.serialization import document_to_json, to_document_definition
from mdprint.printtree.visitors import PrintNodeVisitor

__all__ = [
    "AltText",
    "BlockQuote",
    "CodeBlock",
    "Content",
    "Heading",
    "Image",
    "ImageCaption",
    "List",
    "Paragraph",
    "PrintDocument",
    "PrintNode",
    "PrintNodeVisitor",
    "Rule",
    "Table",
    "TableCell",
    "Text",
    "document_to_json",
    "iter_content",
    "to_document_definition",
]
