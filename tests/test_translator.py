"""Tests for the DOM to semantic AST translator."""

from bs4 import BeautifulSoup

from semantic_markdown import ConversionOptions, html_to_markdown_ast
from semantic_markdown.conversion import TreeTranslator
from semantic_markdown.models import (
    BlockquoteNode,
    BoldNode,
    CodeNode,
    CustomNode,
    HeadingNode,
    ImageNode,
    ItalicNode,
    LinkNode,
    ListItemNode,
    ListNode,
    MetaContent,
    MetaNode,
    SemanticHtmlNode,
    StrikethroughNode,
    TableCellNode,
    TableNode,
    TextNode,
    VideoNode,
)


def translate(html: str, **options) -> list:
    soup = BeautifulSoup(html, "html.parser")
    return html_to_markdown_ast(soup, ConversionOptions(**options))


class TestTextAndParagraphs:
    """Tests for text nodes and paragraphs."""

    def test_paragraph_with_bold(self):
        """Test the paragraph example from the docs."""
        assert translate("<p>Hello <b>world</b></p>") == [
            TextNode("Hello"),
            BoldNode([TextNode("world")]),
            TextNode("\n\n"),
        ]

    def test_empty_paragraph_contributes_nothing(self):
        """Test that empty paragraphs are dropped."""
        assert translate("<p>   </p><p></p>") == []

    def test_whitespace_text_dropped(self):
        """Test that whitespace-only text nodes are dropped."""
        assert translate("<div>\n   \n</div>") == []

    def test_text_is_escaped(self):
        """Test HTML and Markdown escaping of text."""
        result = translate("<p>2 * 3 &amp; 4 &lt; 5</p>")
        assert result[0] == TextNode("2 \\* 3 &amp; 4 &lt; 5")

    def test_comments_ignored(self):
        """Test that HTML comments do not become text."""
        assert translate("<div><!-- note -->Text</div>") == [TextNode("Text")]

    def test_line_break_and_rule(self):
        """Test br and hr handling."""
        assert translate("<div>a<br>b<hr>c</div>") == [
            TextNode("a"),
            TextNode("\n"),
            TextNode("b"),
            TextNode("\n\n"),
            TextNode("c"),
        ]


class TestLinks:
    """Tests for anchor handling."""

    def test_text_only_link(self):
        """Test that text-only anchors collapse to one trimmed text node."""
        result = translate('<a href="https://example.com/a">  Link text  </a>')
        assert result == [LinkNode("https://example.com/a", [TextNode("Link text")])]

    def test_website_domain_stripped(self):
        """Test that the website domain prefix is removed."""
        result = translate(
            '<a href="https://example.com/docs">Docs</a>',
            website_domain="https://example.com",
        )
        assert result[0].href == "/docs"

    def test_relative_link_resolved_with_base_url(self):
        """Test that relative links are resolved against base_url."""
        result = translate('<a href="/docs">Docs</a>', base_url="https://example.com/guide/")
        assert result[0].href == "https://example.com/docs"

    def test_rich_link_content(self):
        """Test anchors with element children are translated recursively."""
        result = translate('<a href="/x"><b>Bold</b> text</a>')
        assert result == [LinkNode("/x", [BoldNode([TextNode("Bold")]), TextNode("text")])]

    def test_empty_link_omitted(self):
        """Test that anchors without content produce nothing."""
        assert translate('<a href="/x"></a><a href="/y"> </a><a href="/z"><span></span></a>') == []

    def test_data_image_link(self):
        """Test that data:image anchors keep their content with href '-'."""
        result = translate('<a href="data:image/png;base64,AA"><img src="data:image/png;base64,AA" alt="x"></a>')
        assert result == [LinkNode("-", [ImageNode("-", "x")])]


class TestMedia:
    """Tests for images and video."""

    def test_image(self):
        """Test image translation with escaped alt text."""
        assert translate('<img src="/a.png" alt="a_b">') == [ImageNode("/a.png", "a\\_b")]

    def test_image_without_alt(self):
        """Test image without alt attribute."""
        assert translate('<img src="/a.png">') == [ImageNode("/a.png", None)]

    def test_data_image_replaced(self):
        """Test that data URLs are replaced by '-'."""
        assert translate('<img src="data:image/png;base64,AAA" alt="x">') == [ImageNode("-", "x")]

    def test_image_domain_stripped(self):
        """Test domain stripping for images."""
        result = translate('<img src="https://example.com/i.png">', website_domain="https://example.com")
        assert result[0].src == "/i.png"

    def test_video(self):
        """Test video translation."""
        result = translate('<video src="https://example.com/v.mp4" poster="p.jpg" controls></video>')
        assert result == [VideoNode("https://example.com/v.mp4", "p.jpg", True)]

    def test_video_source_child(self):
        """Test video falling back to its source element."""
        result = translate('<video><source src="/v.webm" type="video/webm"></video>')
        assert result == [VideoNode("/v.webm", None, None)]


class TestBlocks:
    """Tests for headings, lists, quotes and code."""

    def test_heading_level_and_content(self):
        """Test heading level parsing and recursive content."""
        result = translate("<h2>Title <em>here</em></h2>")
        assert result == [HeadingNode(2, [TextNode("Title"), ItalicNode([TextNode("here")])])]

    def test_ordered_list(self):
        """Test ordered list items."""
        result = translate("<ol><li>One</li><li>Two</li></ol>")
        assert result == [
            ListNode(True, [ListItemNode([TextNode("One")]), ListItemNode([TextNode("Two")])])
        ]

    def test_nested_list(self):
        """Test that nested lists become item content."""
        result = translate("<ul><li>A<ul><li>B</li></ul></li></ul>")
        assert result[0].items[0].content == [
            TextNode("A"),
            ListNode(False, [ListItemNode([TextNode("B")])]),
        ]

    def test_formatting_elements(self):
        """Test bold, italic and strikethrough mapping."""
        result = translate("<strong>a</strong><i>b</i><s>c</s><strike>d</strike>")
        assert result == [
            BoldNode([TextNode("a")]),
            ItalicNode([TextNode("b")]),
            StrikethroughNode([TextNode("c")]),
            StrikethroughNode([TextNode("d")]),
        ]

    def test_empty_formatting_dropped(self):
        """Test that formatting without text is dropped."""
        assert translate("<b> </b><em><img src='/a.png'></em>") == []

    def test_inline_code(self):
        """Test inline code is not escaped."""
        result = translate("<p>Use <code>a_b()</code></p>")
        assert result == [TextNode("Use"), CodeNode("a_b()", None, inline=True), TextNode("\n\n")]

    def test_code_block_with_language(self):
        """Test fenced code detection and language extraction."""
        result = translate('<pre><code class="hl language-python">x = a_b\n</code></pre>')
        assert result == [CodeNode("x = a_b", "python", inline=False)]

    def test_empty_code_dropped(self):
        """Test that empty code elements are dropped."""
        assert translate("<code>  </code>") == []

    def test_blockquote(self):
        """Test blockquote translation."""
        assert translate("<blockquote><p>Quote</p></blockquote>") == [
            BlockquoteNode([TextNode("Quote"), TextNode("\n\n")])
        ]

    def test_semantic_regions(self):
        """Test semantic region wrapping."""
        result = translate('<nav><a href="/">Home</a></nav><section>S</section>')
        assert result == [
            SemanticHtmlNode("nav", [LinkNode("/", [TextNode("Home")])]),
            SemanticHtmlNode("section", [TextNode("S")]),
        ]

    def test_ignored_tags(self):
        """Test that script, style, noscript and template produce nothing."""
        html = "<script>var a;</script><style>p {}</style><noscript>n</noscript><template><p>t</p></template>"
        assert translate(html) == []

    def test_unknown_tags_are_transparent(self):
        """Test that unhandled tags keep their content."""
        assert translate("<div><span>a</span></div>") == [TextNode("a")]


class TestTables:
    """Tests for table translation."""

    def test_header_table_with_column_tracking(self):
        """Test column ids and the separator row."""
        html = "<table><tr><th>H1</th><th>H2</th></tr><tr><td>a</td><td>b</td></tr></table>"
        (table,) = translate(html, enable_table_column_tracking=True)

        assert isinstance(table, TableNode)
        assert table.col_ids == ["col-0", "col-1"]
        assert len(table.rows) == 3
        assert table.rows[0].cells == [
            TableCellNode("H1", col_id="col-0"),
            TableCellNode("H2", col_id="col-1"),
        ]
        assert table.rows[1].cells == [TableCellNode("---"), TableCellNode("---")]
        assert table.rows[2].cells[1] == TableCellNode("b", col_id="col-1")

    def test_no_separator_without_header(self):
        """Test tables without th cells have no separator row."""
        (table,) = translate("<table><tr><td>a</td></tr><tr><td>b</td></tr></table>")
        assert len(table.rows) == 2
        assert table.col_ids == []

    def test_colspan_and_rowspan(self):
        """Test span normalization and the column cursor."""
        html = (
            "<table>"
            '<tr><td colspan="2">a</td><td rowspan="1">b</td></tr>'
            '<tr><td>c</td><td rowspan="3">d</td><td>e</td></tr>'
            "</table>"
        )
        (table,) = translate(html, enable_table_column_tracking=True)

        first, second = table.rows
        assert table.col_ids == ["col-0", "col-1", "col-2"]
        assert first.cells[0] == TableCellNode("a", col_id="col-0", colspan=2)
        assert first.cells[1] == TableCellNode("b", col_id="col-2")
        assert second.cells[1] == TableCellNode("d", col_id="col-1", rowspan=3)
        assert second.cells[2].col_id == "col-2"

    def test_header_colspan_keeps_later_ids(self):
        """Test header cells after a colspan still get their column id."""
        html = (
            "<table>"
            '<tr><th colspan="2">H</th><th>Z</th></tr>'
            "<tr><td>a</td><td>b</td><td>c</td></tr>"
            "</table>"
        )
        (table,) = translate(html, enable_table_column_tracking=True)

        header, separator, body = table.rows
        assert header.cells[1] == TableCellNode("Z", col_id="col-2")
        assert separator.cells == [TableCellNode("---"), TableCellNode("---")]
        assert [cell.col_id for cell in body.cells] == ["col-0", "col-1", "col-2"]

    def test_cells_past_first_row_width(self):
        """Test cells beyond the first row's columns have no id."""
        html = "<table><tr><td>a</td></tr><tr><td>b</td><td>c</td></tr></table>"
        (table,) = translate(html, enable_table_column_tracking=True)
        assert table.rows[1].cells[1].col_id is None

    def test_rich_cell_content(self):
        """Test cells with markup are translated recursively."""
        (table,) = translate("<table><tr><td><b>x</b></td></tr></table>")
        assert table.rows[0].cells[0].content == [BoldNode([TextNode("x")])]

    def test_cell_text_escaped(self):
        """Test pure-text cells are escaped."""
        (table,) = translate("<table><tr><td>a|b</td></tr></table>")
        assert table.rows[0].cells[0].content == "a\\|b"

    def test_nested_table_rows_not_merged(self):
        """Test rows of nested tables stay in the nested table."""
        html = "<table><tr><td><table><tr><td>inner</td></tr></table></td></tr></table>"
        (table,) = translate(html)
        assert len(table.rows) == 1
        inner = table.rows[0].cells[0].content[0]
        assert isinstance(inner, TableNode)
        assert inner.rows[0].cells[0].content == "inner"


class TestFiltering:
    """Tests for exclusion, visibility and metadata."""

    def test_excluded_tags(self):
        """Test excluded tag names are skipped with their content."""
        result = translate("<form><p>x</p></form><p>y</p>", exclude_tag_names=["FORM"])
        assert result == [TextNode("y"), TextNode("\n\n")]

    def test_invisible_elements_skipped(self):
        """Test visibility filtering."""
        html = (
            '<div style="display: none"><p>a</p></div>'
            '<div style="visibility:hidden">b</div>'
            '<div style="opacity: 0">c</div>'
            "<div hidden>d</div>"
            "<p>shown</p>"
        )
        assert translate(html, exclude_invisible_elements=True) == [TextNode("shown"), TextNode("\n\n")]

    def test_invisible_elements_kept_by_default(self):
        """Test hidden elements are kept without visibility filtering."""
        result = translate('<div style="display:none">a</div>')
        assert result == [TextNode("a")]

    def test_head_becomes_meta_node(self):
        """Test metadata extraction from head."""
        soup = BeautifulSoup(
            "<html><head><title>T</title></head><body><p>x</p></body></html>",
            "html.parser",
        )
        result = html_to_markdown_ast(soup.html, ConversionOptions(include_meta_data="basic"))
        assert result == [
            MetaNode(MetaContent(standard={"title": "T"})),
            TextNode("x"),
            TextNode("\n\n"),
        ]


class TestHooks:
    """Tests for caller-supplied hooks."""

    def test_override_replaces_element(self):
        """Test override results are used verbatim."""

        def override(element, options, indent_level):
            if element.name == "p":
                return [TextNode("replaced")]
            return None

        result = translate("<p>a</p><h1>b</h1>", override_element_processing=override)
        assert result == [TextNode("replaced"), HeadingNode(1, [TextNode("b")])]

    def test_override_false_suppresses(self):
        """Test that False and empty lists suppress the element."""

        def override(element, options, indent_level):
            if element.name == "p":
                return False
            if element.name == "h1":
                return []
            return None

        assert translate("<p>a</p><h1>b</h1><b>c</b>", override_element_processing=override) == [
            BoldNode([TextNode("c")])
        ]

    def test_override_receives_options_and_indent(self):
        """Test hook arguments."""
        calls = []

        def override(element, options, indent_level):
            calls.append((element.name, options.website_domain, indent_level))
            return None

        translate("<ul><li><b>x</b></li></ul>", override_element_processing=override, website_domain="d")
        assert ("ul", "d", 0) in calls
        assert ("li", "d", 0) not in calls
        assert ("b", "d", 1) in calls

    def test_unhandled_element_hook(self):
        """Test the hook for elements without a handler."""

        def unhandled(element, options, indent_level):
            if element.name == "my-widget":
                return [CustomNode({"widget": element.get_text()})]
            return None

        result = translate("<my-widget>w</my-widget><div>d</div>", process_unhandled_element=unhandled)
        assert result == [CustomNode({"widget": "w"}), TextNode("d")]


class TestShadowDom:
    """Tests for declarative shadow roots and slots."""

    def test_shadow_root_and_slots(self):
        """Test slot distribution of light children."""
        html = (
            "<my-card>"
            '<template shadowrootmode="open"><h2><slot name="title"></slot></h2><slot></slot></template>'
            '<span slot="title">Card title</span>'
            "<p>Body</p>"
            "</my-card>"
        )
        assert translate(html) == [
            HeadingNode(2, [TextNode("Card title")]),
            TextNode("Body"),
            TextNode("\n\n"),
        ]

    def test_slot_fallback_content(self):
        """Test slots without assigned nodes use their fallback content."""
        html = '<x-el><template shadowrootmode="open"><slot name="missing">Fallback</slot></template></x-el>'
        assert translate(html) == [TextNode("Fallback")]

    def test_translator_reusable(self):
        """Test one translator can translate several elements."""
        translator = TreeTranslator()
        soup = BeautifulSoup("<div id='a'>A</div><div id='b'>B</div>", "html.parser")
        assert translator.translate(soup.find(id="a")) == [TextNode("A")]
        assert translator.translate(soup.find(id="b")) == [TextNode("B")]
