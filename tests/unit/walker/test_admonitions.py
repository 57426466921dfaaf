#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/walker/test_admonitions.py
"""Unit tests for admonition detection."""

import pytest
from bs4 import BeautifulSoup

from mdprint.admonitions import AdmonitionResolver
from mdprint.styles import DEFAULT_KEYWORDS, DEFAULT_STYLE_SHEET, build_keyword_table


def blockquote(html: str):
    return BeautifulSoup(html, "html.parser").blockquote


@pytest.fixture
def resolver() -> AdmonitionResolver:
    return AdmonitionResolver(DEFAULT_KEYWORDS, DEFAULT_STYLE_SHEET)


@pytest.mark.unit
class TestMatch:
    """Tests for keyword lookup."""

    @pytest.mark.parametrize(
        "label,variant",
        [
            ("note", "info"),
            ("tip", "hint"),
            ("caution", "warning"),
            ("watch-out", "warning"),
            ("problème", "danger"),
            ("alerte", "danger"),
        ],
    )
    def test_default_keywords(self, resolver, label, variant):
        assert resolver.match(label) == variant

    def test_no_match(self, resolver):
        assert resolver.match("remember") is None

    def test_empty_label(self, resolver):
        assert resolver.match("") is None

    def test_first_variant_wins(self):
        keywords = build_keyword_table({"first": ["shared"], "second": ["shared"]}, base={})
        assert AdmonitionResolver(keywords, DEFAULT_STYLE_SHEET).match("shared") == "first"


@pytest.mark.unit
class TestResolveBlockquote:
    """Tests for blockquote inspection."""

    def test_bold_keyword_in_paragraph(self, resolver):
        element = blockquote("<blockquote>\n<p><strong>Warning</strong> hot</p>\n</blockquote>")
        assert resolver.resolve_blockquote(element) == "warning"

    def test_keyword_is_trimmed_and_lowercased(self, resolver):
        element = blockquote("<blockquote><p><b>  DANGER </b>!</p></blockquote>")
        assert resolver.resolve_blockquote(element) == "danger"

    def test_bold_directly_in_blockquote(self, resolver):
        element = blockquote("<blockquote><strong>Info</strong> text</blockquote>")
        assert resolver.resolve_blockquote(element) == "info"

    def test_not_a_keyword(self, resolver):
        element = blockquote("<blockquote><p><strong>Note to self</strong> x</p></blockquote>")
        assert resolver.resolve_blockquote(element) is None

    def test_italic_keyword_is_ignored(self, resolver):
        element = blockquote("<blockquote><p><em>Warning</em> x</p></blockquote>")
        assert resolver.resolve_blockquote(element) is None

    def test_bold_must_lead_the_paragraph(self, resolver):
        element = blockquote("<blockquote><p><em>Hey</em> <strong>Warning</strong></p></blockquote>")
        assert resolver.resolve_blockquote(element) is None

    def test_leading_text_before_bold_is_skipped(self, resolver):
        # Only elements are inspected; text before the first element does not count
        element = blockquote("<blockquote><p>Careful: <strong>Warning</strong></p></blockquote>")
        assert resolver.resolve_blockquote(element) == "warning"

    def test_empty_blockquote(self, resolver):
        assert resolver.resolve_blockquote(blockquote("<blockquote></blockquote>")) is None


@pytest.mark.unit
class TestColors:
    """Tests for variant colors."""

    def test_variant_colors(self, resolver):
        assert resolver.border_color("warning") == "#f59e0b"
        assert resolver.fill_color("warning") == "#fffbeb"

    def test_plain_blockquote_colors(self, resolver):
        assert resolver.border_color(None) == "#6b7280"
        assert resolver.fill_color(None) == "#f9fafb"

    def test_variant_without_style_falls_back_to_blockquote(self):
        keywords = build_keyword_table({"custom": ["custom"]})
        resolver = AdmonitionResolver(keywords, DEFAULT_STYLE_SHEET)
        assert resolver.border_color("custom") == "#6b7280"
