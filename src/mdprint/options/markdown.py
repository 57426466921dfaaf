#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the Markdown front end."""
# src/mdprint/options/markdown.py

from __future__ import annotations

from dataclasses import dataclass, field

from mdprint.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MarkdownOptions(CloneFrozenMixin):
    """Configuration options for Markdown-to-HTML rendering.

    Parameters
    ----------
    highlight_code : bool, default True
        Highlight fenced code blocks that name a known language.
    escape_html : bool, default True
        Escape raw HTML found in the Markdown source instead of passing it through.

    """

    highlight_code: bool = field(
        default=True,
        metadata={"help": "Syntax highlight fenced code blocks with a known language", "importance": "core"},
    )
    escape_html: bool = field(
        default=True,
        metadata={"help": "Escape raw HTML in the Markdown source", "importance": "security"},
    )
