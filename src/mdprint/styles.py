#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/styles.py
"""Default style sheet, keyword table and base text style.

Style sheet entries use the camelCase attribute names of the document
definition format (``fontSize``, ``borderColor``, ``marginBottom``...), so
the serializer can emit them as they are and external engines understand
them without translation.

The defaults are exposed as read-only mappings. Callers that need different
styling build their own through :func:`merge_style_sheet` and
:func:`build_keyword_table` and pass the result to the walker.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping

StyleSheet = Mapping[str, Mapping[str, Any]]
KeywordTable = Mapping[str, frozenset]

# Base font size; every relative size in the sheet is a multiple of it
REM = 12


def _freeze_sheet(sheet: dict[str, dict[str, Any]]) -> StyleSheet:
    return MappingProxyType({name: MappingProxyType(dict(attrs)) for name, attrs in sheet.items()})


DEFAULT_STYLE: Mapping[str, Any] = MappingProxyType(
    {
        "alignment": "left",
        "font": "Roboto",
        "fontSize": REM,
        "lineHeight": 1.4,
    }
)

DEFAULT_KEYWORDS: KeywordTable = MappingProxyType(
    {
        "info": frozenset({"info", "note", "information"}),
        "hint": frozenset({"hint", "tip", "conseil", "indice", "suggestion"}),
        "warning": frozenset({"warning", "caution", "watch-out", "attention", "avertissement"}),
        "danger": frozenset({"danger", "error", "issue", "problem", "alert", "erreur", "problème", "alerte"}),
    }
)

DEFAULT_STYLE_SHEET: StyleSheet = _freeze_sheet(
    {
        "link": {"decoration": "underline"},
        "heading": {"bold": True, "lineHeight": 1.25, "marginBottom": 0.5 * REM},
        "h1": {"fontSize": 2 * REM},
        "h2": {"fontSize": 1.5 * REM},
        "h3": {"fontSize": 1.25 * REM},
        "h4": {"fontSize": 1 * REM},
        "h5": {"fontSize": 0.875 * REM},
        "h6": {"fontSize": 0.85 * REM, "color": "#6a737b"},
        "paragraph": {"marginBottom": 0.6 * REM},
        "blockquote": {
            "fillColor": "#f9fafb",
            "borderColor": "#6b7280",
            "lineHeight": 1.4,
            "marginBottom": 0.7 * REM,
            "paddingLeft": 6,
            "paddingRight": 4,
            "paddingTop": 4,
            "paddingBottom": 0,
        },
        "info": {"fillColor": "#eff6ff", "borderColor": "#3b82f6"},
        "hint": {"fillColor": "#ecfdf5", "borderColor": "#10b981"},
        "warning": {"fillColor": "#fffbeb", "borderColor": "#f59e0b"},
        "danger": {"fillColor": "#fef2f2", "borderColor": "#ef4444"},
        "horizontalRule": {"borderColor": "#d1d1d1"},
        "table": {"marginBottom": 0.7 * REM, "lineHeight": 1.0},
        "image": {"marginBottom": 0.7 * REM},
        "imageAlt": {"color": "#a31515", "fontSize": 0.75 * REM, "marginBottom": 0.7 * REM},
        "tableHeader": {"bold": True},
        "alignCenter": {"alignment": "center"},
        "alignRight": {"alignment": "right"},
        "preformatted": {
            "preserveLeadingSpaces": True,
            "marginBottom": 0.7 * REM,
            "lineHeight": 1.357,
            "padding": 4,
        },
        "code": {"font": "UbuntuMono"},
        "preCode": {"fontSize": 0.85 * REM},
        "inlineCode": {"color": "#a31515"},
        "codeKeyword": {"color": "#d73a49"},
        "codeTitle": {"color": "#6f42c1"},
        "codeVariable": {"color": "#005cc5"},
        "codeString": {"color": "#032f62"},
        "codeSymbol": {"color": "#e36209"},
        "codeComment": {"color": "#6a737d"},
        "codeName": {"color": "#22863a"},
        "codeSubst": {"color": "#24292e"},
        "codeSection": {"color": "#005cc5", "bold": True},
        "codeBullet": {"color": "#735c0f"},
        "codeEmphasis": {"color": "#24292e", "italics": True},
        "codeStrong": {"color": "#24292e", "bold": True},
        "codeAddition": {"color": "#22863a", "background": "#f0fff4"},
        "codeDeletion": {"color": "#b31d28", "background": "#ffeef0"},
    }
)


def merge_style_sheet(base: StyleSheet, overrides: Mapping[str, Mapping[str, Any]] | None) -> StyleSheet:
    """Deep-merge style overrides over a base style sheet.

    Attributes of an existing style are replaced one by one; unknown style
    names are added.

    Parameters
    ----------
    base : StyleSheet
        Style sheet to start from (usually ``DEFAULT_STYLE_SHEET``)
    overrides : Mapping, optional
        Style name to attribute mapping read from configuration

    Returns
    -------
    StyleSheet
        A new read-only style sheet

    """
    merged: dict[str, dict[str, Any]] = {name: dict(attrs) for name, attrs in base.items()}
    for name, attrs in (overrides or {}).items():
        if not isinstance(attrs, Mapping):
            raise ValueError(f"Style '{name}' must be a mapping of attributes, got {type(attrs).__name__}")
        merged.setdefault(name, {}).update(attrs)
    return _freeze_sheet(merged)


def build_keyword_table(
    overrides: Mapping[str, Iterable[str]] | None = None,
    base: KeywordTable = DEFAULT_KEYWORDS,
) -> KeywordTable:
    """Build a keyword table, replacing the trigger words of overridden variants.

    Trigger words are trimmed and lowercased so lookups with a normalized
    label always agree with the table. Variant order follows ``base`` and
    new variants are appended in the order given.

    Parameters
    ----------
    overrides : Mapping[str, Iterable[str]], optional
        Variant name to trigger words
    base : KeywordTable
        Table to start from

    Returns
    -------
    KeywordTable
        A new read-only keyword table

    """
    table: dict[str, frozenset] = dict(base)
    for variant, words in (overrides or {}).items():
        if isinstance(words, str):
            words = [words]
        table[variant] = frozenset(str(word).strip().lower() for word in words)
    return MappingProxyType(table)
