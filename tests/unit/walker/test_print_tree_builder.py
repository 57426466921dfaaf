#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/walker/test_print_tree_builder.py
"""Unit tests for the HTML to print tree walker.

Tests cover:
- One-to-one element mapping (headings, emphasis, code, links, lists, rules)
- Admonition coloring of blockquotes
- Table extraction and alignment
- Paragraph splitting around images and per-image error recovery

"""

import logging

import pytest
from bs4 import NavigableString
from utils import make_png

from mdprint.builder import parse_html
from mdprint.options import LayoutOptions, PageMargins, PrintStyles
from mdprint.printtree.nodes import (
    AltText,
    BlockQuote,
    CodeBlock,
    Heading,
    Image,
    ImageCaption,
    List,
    Paragraph,
    Rule,
    Table,
    Text,
)
from mdprint.styles import build_keyword_table
from mdprint.walker import PrintTreeBuilder, WalkContext, transform


def walk(html: str, layout: LayoutOptions | None = None, styles: PrintStyles | None = None):
    return transform(parse_html(html), layout, styles)


@pytest.mark.unit
class TestSiblingResults:
    """Tests for the shape of transform results."""

    def test_single_text_node_is_a_bare_string(self):
        assert PrintTreeBuilder().transform([NavigableString("hello")]) == "hello"

    def test_block_list(self):
        result = walk("<h1>Title</h1>\n<p>Body</p>\n")
        assert result == [Heading(level=1, content="Title"), Paragraph(content="Body")]

    def test_whitespace_between_blocks_is_dropped(self):
        result = walk("<p>a</p>\n\n<p>b</p>")
        assert len(result) == 2

    def test_spaces_without_newline_are_kept(self):
        result = walk("<p><em>a</em> <em>b</em></p>")
        assert result[0].content[1] == " "

    def test_unsupported_elements_are_dropped(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="mdprint.walker"):
            result = walk("<p>a<del>b</del></p>")
        assert result == [Paragraph(content=["a"])]
        assert "Skipping unsupported element <del>" in caplog.text

    def test_comments_are_ignored(self):
        assert walk("<!-- note --><p>x</p>") == [Paragraph(content="x")]

    def test_empty_input(self):
        assert walk("") == []


@pytest.mark.unit
class TestInline:
    """Tests for inline elements."""

    def test_bold_and_italic(self):
        paragraph = walk("<p><strong>b</strong><em>i</em></p>")[0]
        assert paragraph.content == [Text("b", bold=True), Text("i", italics=True)]

    def test_link(self):
        paragraph = walk('<p><a href="https://example.com">site</a></p>')[0]
        assert paragraph.content == [Text("site", styles=("link",), link="https://example.com")]

    def test_inline_code(self):
        paragraph = walk("<p>use <code>x</code></p>")[0]
        assert paragraph.content == ["use ", Text("x", styles=("code", "inlineCode"))]

    def test_nested_formatting(self):
        paragraph = walk("<p><strong>a <em>b</em></strong></p>")[0]
        assert paragraph.content == [Text(["a ", Text("b", italics=True)], bold=True)]

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, level):
        heading = walk(f"<h{level}>T</h{level}>")[0]
        assert heading.level == level
        assert heading.styles == ("heading", f"h{level}")


@pytest.mark.unit
class TestCodeBlocks:
    """Tests for preformatted blocks and highlight spans."""

    def test_highlighted_block(self):
        html = '<pre class="hljs"><code><span class="hljs-keyword">def</span> f():\n    pass</code></pre>'
        block = walk(html)[0]
        assert isinstance(block, CodeBlock)
        assert block.padding == 4
        assert block.content == [
            Text([Text("def", styles=("codeKeyword",)), " f():\n    pass"], styles=("code", "preCode")),
        ]

    def test_unknown_span_class_gives_plain_text(self):
        block = walk('<pre><code><span class="hljs-params">(x)</span></code></pre>')[0]
        assert block.content[0].content == [Text("(x)")]

    def test_newlines_inside_code_are_kept(self):
        block = walk("<pre><code>a<span>b</span>\n</code></pre>")[0]
        assert block.content[0].content[-1] == "\n"


@pytest.mark.unit
class TestBlockquotes:
    """Tests for blockquotes and admonitions."""

    def test_warning_admonition(self):
        quote = walk("<blockquote>\n<p><strong>Warning</strong> hot</p>\n</blockquote>")[0]
        assert isinstance(quote, BlockQuote)
        assert quote.variant == "warning"
        assert quote.border_color == "#f59e0b"
        assert quote.fill_color == "#fffbeb"
        assert quote.border_width == 3
        assert quote.padding == (6, 4, 4, 0)
        assert quote.styles == ("blockquote", "warning")
        assert quote.content == [
            Paragraph(content=[Text("Warning", bold=True, color="#f59e0b"), " hot"], styles=()),
        ]

    def test_not_a_keyword(self):
        quote = walk("<blockquote><p><strong>Note to self</strong> x</p></blockquote>")[0]
        assert quote.variant is None
        assert quote.border_color == "#6b7280"
        assert quote.fill_color == "#f9fafb"
        assert quote.content[0].content[0].color is None

    def test_only_leading_bold_is_colored(self):
        quote = walk("<blockquote><p><strong>Tip</strong> then <strong>Tip</strong></p></blockquote>")[0]
        first, _, second = quote.content[0].content
        assert first.color == "#10b981"
        assert second.color is None

    def test_bold_outside_blockquote_is_not_colored(self):
        paragraph = walk("<p><strong>Warning</strong> x</p>")[0]
        assert paragraph.content[0].color is None
        assert paragraph.styles == ("paragraph",)

    def test_custom_keywords(self):
        styles = PrintStyles(keywords=build_keyword_table({"warning": ["careful"]}))
        quote = walk("<blockquote><p><b>Careful</b></p></blockquote>", styles=styles)[0]
        assert quote.variant == "warning"
        plain = walk("<blockquote><p><b>Warning</b></p></blockquote>", styles=styles)[0]
        assert plain.variant is None


@pytest.mark.unit
class TestLists:
    """Tests for ordered and unordered lists."""

    def test_bare_items_are_wrapped(self):
        result = walk("<ul>\n<li>one</li>\n<li>two</li>\n</ul>")[0]
        assert result == List(ordered=False, items=[Text("one"), Text("two")])

    def test_paragraph_items_are_unwrapped(self):
        result = walk("<ol><li><p>one</p></li></ol>")[0]
        assert result.ordered is True
        assert result.items == [[Paragraph(content="one")]]

    def test_nested_list(self):
        result = walk("<ul><li>a<ul><li>b</li></ul></li></ul>")[0]
        assert result.items == [Text(["a", List(ordered=False, items=[Text("b")])])]

    def test_empty_list_is_omitted(self):
        assert walk("<ul>\n</ul>") == []


@pytest.mark.unit
class TestTables:
    """Tests for table extraction."""

    def test_table_with_alignment(self):
        html = (
            "<table><thead><tr><th>A</th><th style=\"text-align:center\">B</th></tr></thead>"
            "<tbody><tr><td>1</td><td style=\"text-align:right\">2</td></tr>"
            "<tr><td>3</td><td style=\"text-align:left\">4</td></tr></tbody></table>"
        )
        table = walk(html)[0]
        assert isinstance(table, Table)
        assert table.column_count == 2
        assert [cell.styles for cell in table.header] == [("tableHeader",), ("tableHeader", "alignCenter")]
        assert [cell.content for cell in table.header] == ["A", "B"]
        assert table.rows[0][1].styles == ("alignRight",)
        assert table.rows[0][1].alignment == "right"
        assert table.rows[1][1].styles == ()

    def test_alignment_with_semicolon(self):
        html = (
            "<table><thead><tr><th style=\"text-align: center;\">A</th></tr></thead>"
            "<tbody><tr><td>1</td></tr></tbody></table>"
        )
        assert walk(html)[0].header[0].styles == ("tableHeader", "alignCenter")

    def test_short_rows_are_kept(self):
        html = "<table><thead><tr><th>A</th><th>B</th></tr></thead><tbody><tr><td>1</td></tr></tbody></table>"
        table = walk(html)[0]
        assert len(table.rows[0]) == 1
        assert table.column_count == 2

    def test_empty_body_is_omitted(self):
        html = "<table><thead><tr><th>A</th></tr></thead><tbody></tbody></table>"
        assert walk(html) == []

    def test_missing_head_is_omitted(self):
        assert walk("<table><tbody><tr><td>1</td></tr></tbody></table>") == []

    def test_missing_body_is_omitted(self):
        assert walk("<table><thead><tr><th>A</th></tr></thead></table>") == []


@pytest.mark.unit
class TestRules:
    """Tests for horizontal rules."""

    def test_rule_color_from_style_sheet(self):
        assert walk("<hr>") == [Rule(color="#d1d1d1")]


@pytest.mark.unit
class TestImages:
    """Tests for image placement and paragraph splitting."""

    def test_paragraph_split_around_image(self, layout, image_dir):
        result = walk('<p>before <img src="chart.png"> after</p>', layout)
        assert len(result) == 1
        segments = result[0]
        assert len(segments) == 3
        assert segments[0] == Paragraph(content="before ")
        assert segments[1] == Image(str(image_dir / "chart.png"), 144, 96, styles=("image",))
        assert segments[2] == Paragraph(content=" after")

    def test_lone_image_is_unwrapped(self, layout):
        result = walk('<p><img src="plain.png"></p>', layout)
        assert isinstance(result[0], Image)
        assert (result[0].point_width, result[0].point_height) == (48, 24)

    def test_blank_runs_between_images_are_skipped(self, layout):
        result = walk('<p><img src="plain.png">\n<img src="chart.png"></p>', layout)
        assert [type(node) for node in result[0]] == [Image, Image]

    def test_image_with_alt_gets_caption(self, layout, image_dir):
        result = walk('<p><img src="chart.png" alt="A chart"></p>', layout)
        image, caption = result[0]
        assert image.path == str(image_dir / "chart.png")
        assert image.fit == (144, 144)
        assert image.alt_text == "A chart"
        assert caption == ImageCaption("A chart")

    def test_wide_image_fit_is_capped(self, image_dir):
        layout = LayoutOptions(base_path=image_dir, page_margins=PageMargins(300, 36, 200, 36))
        image, _ = walk('<p><img src="chart.png" alt="x"></p>', layout)[0]
        assert image.fit == (112, 112)

    def test_image_max_size(self, image_dir):
        layout = LayoutOptions(base_path=image_dir, image_max_size=100)
        image, _ = walk('<p><img src="chart.png" alt="x"></p>', layout)[0]
        assert image.fit == (100, 100)

    def test_jpeg_image(self, layout):
        image = walk('<p><img src="photo.jpg"></p>', layout)[0]
        assert (image.point_width, image.point_height) == (768, 1024)

    def test_leading_slash_and_escapes(self, image_dir):
        (image_dir / "my pic.png").write_bytes(make_png(72, 72, dpi=72))
        layout = LayoutOptions(base_path=image_dir)
        image = walk('<p><img src="/my%20pic.png"></p>', layout)[0]
        assert image.path == str(image_dir / "my pic.png")

    def test_url_falls_back_to_alt_text(self, layout, caplog):
        with caplog.at_level(logging.ERROR, logger="mdprint.walker"):
            result = walk('<p><img src="https://example.com/a.png" alt="remote"></p>', layout)
        assert result == [AltText("remote")]
        assert "Image URLs are not supported." in caplog.text

    def test_url_without_alt_is_dropped(self, layout):
        assert walk('<p><img src="https://example.com/a.png"></p>', layout) == []

    def test_missing_base_path(self):
        assert walk('<p><img src="chart.png" alt="c"></p>') == [AltText("c")]

    def test_unsupported_extension(self, layout, image_dir):
        (image_dir / "anim.gif").write_bytes(b"GIF89a")
        assert walk('<p><img src="anim.gif" alt="gif"></p>', layout) == [AltText("gif")]

    def test_corrupt_image_logs_warning(self, layout, image_dir, caplog):
        (image_dir / "broken.png").write_bytes(b"not a png")
        with caplog.at_level(logging.WARNING, logger="mdprint.walker"):
            result = walk('<p>text <img src="broken.png" alt="broken"></p>', layout)
        assert result == [[Paragraph(content="text "), AltText("broken")]]
        assert "Could not use image broken.png" in caplog.text

    def test_missing_file(self, layout):
        assert walk('<p><img src="nope.png" alt="gone"></p>', layout) == [AltText("gone")]

    def test_null_byte_in_src_degrades_to_alt_text(self, layout):
        result = walk('<p>a</p><p><img src="x%00.png" alt="pic"></p>', layout)
        assert result == [Paragraph(content="a"), AltText("pic")]

    def test_image_without_src(self, layout):
        assert walk("<p><img alt=\"x\"></p>", layout) == []

    def test_one_bad_image_does_not_affect_others(self, layout):
        result = walk('<p><img src="nope.png" alt="gone"><img src="plain.png"></p>', layout)
        assert [type(node) for node in result[0]] == [AltText, Image]


@pytest.mark.unit
class TestWalkContext:
    """Tests for the ancestry context."""

    def test_enter_does_not_mutate(self):
        tag = parse_html("<p>x</p>")[0]
        root = WalkContext()
        inner = root.enter(tag)
        assert root.ancestors == ()
        assert inner.parent is tag
        assert inner.grandparent is None
