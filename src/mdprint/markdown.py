#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/markdown.py
"""Markdown to HTML rendering.

Markdown is rendered with mistune (tables and strikethrough enabled). Fenced
code blocks that name a known language are tokenized with Pygments and
emitted as highlight.js-style markup::

    <pre class="hljs"><code><span class="hljs-keyword">def</span> ...</code></pre>

so the walker's ``hljs-`` class mapping applies whatever highlighter produced
the HTML. Raw HTML in the source is escaped by default.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import mistune
from mistune.util import escape

from mdprint.constants import DEPS_HIGHLIGHT, HIGHLIGHT_CLASS_PREFIX
from mdprint.options import MarkdownOptions
from mdprint.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

# Pygments token type (dotted name) to highlight.js class name. A token
# without an entry inherits the class of its closest mapped parent type.
PYGMENTS_TO_HLJS: dict[str, str] = {
    "Keyword": "keyword",
    "Keyword.Type": "type",
    "Keyword.Constant": "literal",
    "Keyword.Namespace": "keyword",
    "Name.Builtin": "built_in",
    "Name.Builtin.Pseudo": "built_in",
    "Name.Class": "title",
    "Name.Function": "title",
    "Name.Exception": "title",
    "Name.Namespace": "title",
    "Name.Decorator": "meta",
    "Name.Attribute": "attr",
    "Name.Variable": "variable",
    "Name.Constant": "variable",
    "Name.Tag": "name",
    "Name.Entity": "symbol",
    "Name.Label": "symbol",
    "Literal": "literal",
    "Literal.Number": "number",
    "Literal.String": "string",
    "Literal.String.Regex": "regexp",
    "Literal.String.Interpol": "subst",
    "Literal.String.Symbol": "symbol",
    "Operator": "operator",
    "Operator.Word": "keyword",
    "Comment": "comment",
    "Comment.Preproc": "meta",
    "Comment.PreprocFile": "string",
    "Generic.Heading": "section",
    "Generic.Subheading": "section",
    "Generic.Emph": "emphasis",
    "Generic.Strong": "strong",
    "Generic.Inserted": "addition",
    "Generic.Deleted": "deletion",
}


def hljs_class_for_token(token_type: Any) -> Optional[str]:
    """Return the highlight.js class name for a Pygments token type.

    Parameters
    ----------
    token_type : pygments token type
        e.g. ``Token.Name.Function``

    Returns
    -------
    str or None
        Class name without the ``hljs-`` prefix, or ``None`` for tokens
        that stay unstyled (plain text, punctuation...)

    """
    while token_type is not None and len(token_type) > 0:
        name = ".".join(token_type)
        if name in PYGMENTS_TO_HLJS:
            return PYGMENTS_TO_HLJS[name]
        token_type = token_type.parent
    return None


def _render_tokens(tokens: Iterable[tuple[Any, str]]) -> str:
    parts: list[str] = []
    current_class: Optional[str] = None
    buffer: list[str] = []

    def flush() -> None:
        if not buffer:
            return
        text = escape("".join(buffer), quote=False)
        if current_class:
            parts.append(f'<span class="{HIGHLIGHT_CLASS_PREFIX}{current_class}">{text}</span>')
        else:
            parts.append(text)
        buffer.clear()

    for token_type, value in tokens:
        css_class = hljs_class_for_token(token_type)
        if css_class != current_class:
            flush()
            current_class = css_class
        buffer.append(value)
    flush()
    return "".join(parts)


@requires_dependencies("highlight", DEPS_HIGHLIGHT)
def highlight_code(code: str, language: str) -> Optional[str]:
    """Highlight source code as highlight.js-style HTML spans.

    Parameters
    ----------
    code : str
        Source code
    language : str
        Language name or alias known to Pygments

    Returns
    -------
    str or None
        Escaped HTML with ``<span class="hljs-...">`` runs, or ``None`` when
        the language is unknown

    """
    from pygments.lexers import get_lexer_by_name
    from pygments.util import ClassNotFound

    try:
        lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
    except ClassNotFound:
        logger.debug(f"No highlighter for language '{language}'")
        return None
    return _render_tokens(lexer.get_tokens(code))


class PrintHTMLRenderer(mistune.HTMLRenderer):
    """mistune HTML renderer emitting highlight.js-style code blocks.

    Parameters
    ----------
    options : MarkdownOptions
        Front end options

    """

    def __init__(self, options: MarkdownOptions):
        super().__init__(escape=options.escape_html)
        self.options = options

    def block_code(self, code: str, info: Optional[str] = None) -> str:
        language = info.split(None, 1)[0] if info and info.strip() else None
        body = None
        if language and self.options.highlight_code:
            body = highlight_code(code, language)
        if body is None:
            body = escape(code, quote=False)
        return f'<pre class="hljs"><code>{body}</code></pre>\n'


def create_markdown(options: MarkdownOptions | None = None) -> mistune.Markdown:
    """Create a mistune Markdown instance configured for print output."""
    options = options or MarkdownOptions()
    return mistune.create_markdown(
        renderer=PrintHTMLRenderer(options),
        plugins=["table", "strikethrough"],
    )


def render_markdown(text: str, options: MarkdownOptions | None = None) -> str:
    """Render Markdown text to HTML.

    Parameters
    ----------
    text : str
        Markdown source
    options : MarkdownOptions, optional
        Front end options

    Returns
    -------
    str
        HTML fragment (no ``<html>``/``<body>`` wrapper)

    """
    return create_markdown(options)(text)
