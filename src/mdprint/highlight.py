#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/highlight.py
"""Mapping of syntax highlighting classes to print style names.

Highlighted code arrives as ``<span class="hljs-keyword">`` runs. The token
after the ``hljs-`` prefix selects one of the ``code*`` styles of the style
sheet; tokens outside the table leave the span unstyled.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from mdprint.constants import HIGHLIGHT_CLASS_PREFIX

_STYLE_GROUPS: dict[str, tuple[str, ...]] = {
    "codeKeyword": ("doctag", "keyword", "template-tag", "template-variable", "type"),
    "codeTitle": ("title",),
    "codeVariable": (
        "attr",
        "attribute",
        "literal",
        "meta",
        "number",
        "operator",
        "variable",
        "selector-attr",
        "selector-class",
        "selector-id",
    ),
    "codeString": ("regexp", "string"),
    "codeSymbol": ("built_in", "symbol"),
    "codeComment": ("comment", "code", "formula"),
    "codeName": ("name", "quote", "selector-tag", "selector-pseudo"),
    "codeSubst": ("subst",),
    "codeSection": ("section",),
    "codeBullet": ("bullet",),
    "codeEmphasis": ("emphasis",),
    "codeStrong": ("strong",),
    "codeAddition": ("addition",),
    "codeDeletion": ("deletion",),
}

HIGHLIGHT_STYLES: Mapping[str, str] = MappingProxyType(
    {token: style for style, tokens in _STYLE_GROUPS.items() for token in tokens}
)


def classify_highlight(token: str) -> Optional[str]:
    """Return the style name for a highlighter token, or ``None`` if unknown.

    Examples
    --------
        >>> classify_highlight("keyword")
        'codeKeyword'
        >>> classify_highlight("punctuation") is None
        True

    """
    return HIGHLIGHT_STYLES.get(token)


def highlight_style_for_classes(classes: Iterable[str]) -> Optional[str]:
    """Resolve the style of a span from its class list.

    The last class carrying the ``hljs-`` prefix decides; earlier prefixed
    classes and unprefixed classes are ignored.
    """
    token = None
    for cls in classes:
        if cls.startswith(HIGHLIGHT_CLASS_PREFIX):
            token = cls[len(HIGHLIGHT_CLASS_PREFIX) :]
    if token is None:
        return None
    return classify_highlight(token)
