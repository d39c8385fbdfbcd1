"""Tests for main content detection."""

from bs4 import BeautifulSoup

from semantic_markdown.conversion import (
    MainContentExtractor,
    calculate_score,
    find_main_content,
    wrap_main_content,
)
from semantic_markdown.conversion.extractor import calculate_link_density, document_root


def parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class TestCalculateScore:
    """Tests for candidate scoring."""

    def test_score_is_never_negative(self):
        """Test an empty element only gets the low link density bonus."""
        div = parse("<div></div>").div
        assert calculate_score(div) == 5

    def test_high_impact_attribute_counted_once(self):
        """Test several matching id words add ten points once."""
        div = parse('<div id="main-content"></div>').div
        assert calculate_score(div) == 15

    def test_high_impact_tag(self):
        """Test article, main and section tags."""
        section = parse("<section></section>").section
        assert calculate_score(section) == 10

    def test_paragraphs_capped(self):
        """Test paragraph points are monotonic and capped at five."""
        one = parse("<div><p>a</p></div>").div
        five = parse("<div>" + "<p>a</p>" * 5 + "</div>").div
        ten = parse("<div>" + "<p>a</p>" * 10 + "</div>").div

        assert calculate_score(one) <= calculate_score(five)
        assert calculate_score(five) == calculate_score(ten) == 10

    def test_text_length(self):
        """Test one point per 200 characters of visible text."""
        short = parse(f"<div>{'x' * 250}</div>").div
        longer = parse(f"<div>{'x' * 450}</div>").div
        assert calculate_score(short) == 6
        assert calculate_score(longer) == 7

    def test_hidden_text_not_counted(self):
        """Test text of hidden descendants is ignored."""
        div = parse(f"<div><span style='display:none'>{'x' * 450}</span></div>").div
        assert calculate_score(div) == 5

    def test_link_heavy_elements(self):
        """Test link density above the threshold loses the bonus."""
        div = parse('<div><a href="/a">Link text</a></div>').div
        assert calculate_link_density(div) == 1.0
        assert calculate_score(div) == 0

    def test_data_and_role_attributes(self):
        """Test data-main, data-content and role=main."""
        assert calculate_score(parse("<div data-main></div>").div) == 15
        assert calculate_score(parse("<div data-content='1'></div>").div) == 15
        assert calculate_score(parse('<div role="main"></div>').div) == 15


class TestMainContentExtractor:
    """Tests for MainContentExtractor."""

    def test_main_element_wins(self):
        """Test an explicit <main> is always returned."""
        soup = parse(
            "<html><body>"
            '<article class="article" data-main><p>long text</p></article>'
            "<main><p>x</p></main>"
            "</body></html>"
        )
        assert MainContentExtractor().find(soup) is soup.main

    def test_best_scoring_candidate(self):
        """Test the highest-scoring sibling is chosen."""
        soup = parse(
            "<html><body>"
            '<article class="article"><p>short</p></article>'
            '<div class="content" data-content="1"><p>a</p></div>'
            "</body></html>"
        )
        assert find_main_content(soup) is soup.find("div", class_="content")

    def test_nested_candidate_not_chosen(self):
        """Test candidates inside another candidate are skipped."""
        paragraphs = f"<p>{'x' * 100}</p>" * 4
        soup = parse(
            "<html><body>"
            f'<div id="page-content">{paragraphs}'
            f'<section class="article" data-main="true"><p>{"y" * 300}</p></section>'
            "</div>"
            "</body></html>"
        )
        outer = soup.find(id="page-content")

        assert calculate_score(soup.section) > calculate_score(outer)
        assert MainContentExtractor().find(soup) is outer

    def test_body_when_no_candidates(self):
        """Test fallback to the body."""
        soup = parse("<html><body><p>x</p></body></html>")
        assert find_main_content(soup) is soup.body

    def test_document_root_without_body(self):
        """Test fallback to the document root for fragments."""
        soup = parse("<div>x</div>")
        assert find_main_content(soup) is soup

    def test_min_score(self):
        """Test a custom candidate threshold."""
        soup = parse('<html><body><div id="content"><p>a</p></div></body></html>')
        assert MainContentExtractor().find(soup) is soup.body
        assert MainContentExtractor(min_score=10).find(soup) is soup.find(id="content")


class TestWrapMainContent:
    """Tests for wrap_main_content."""

    def test_wraps_detected_element(self):
        """Test the element is wrapped in a detected-main-content <main>."""
        soup = parse('<html><body><div id="x"><p>a</p></div></body></html>')
        wrapper = wrap_main_content(soup.find(id="x"), soup)

        assert wrapper is not None
        assert wrapper.name == "main"
        assert wrapper["id"] == "detected-main-content"
        assert soup.main.find(id="x") is not None

    def test_existing_main_untouched(self):
        """Test <main> elements are not wrapped again."""
        soup = parse("<main><p>a</p></main>")
        assert wrap_main_content(soup.main, soup) is None
        assert len(soup.find_all("main")) == 1

    def test_document_root(self):
        """Test document_root returns <html> when present."""
        soup = parse("<html><body></body></html>")
        assert document_root(soup) is soup.html
