"""
Unit tests for the BeautifulSoup document adapter.
"""

from bs4 import BeautifulSoup

from schemelens.extractor.protocols import Document, DocumentNode
from schemelens.extractor.soup_adapter import SoupDocument, render_text


def _render(html: str) -> str:
    return render_text(BeautifulSoup(html, "lxml").body)


class TestRenderText:
    """innerText-style flattening."""

    def test_paragraphs_separated_by_blank_line(self):
        assert _render("<p>First</p><p>Second</p>") == "First\n\nSecond"

    def test_list_items_on_own_lines(self):
        assert _render("<ul><li>One</li><li>Two</li></ul>") == "One\nTwo"

    def test_br_is_newline(self):
        assert _render("<div>Line<br>Next</div>") == "Line\nNext"

    def test_inline_elements_stay_on_line(self):
        assert _render("<p>Apply <a href='/a'>here</a> <b>today</b></p>") == "Apply here today"

    def test_table_cells_space_separated(self):
        assert _render("<table><tr><td>a</td><td>b</td></tr></table>") == "a b"

    def test_skips_non_rendered_elements(self):
        html = "<div>Visible<noscript>Hidden</noscript><template>Nope</template></div>"
        assert _render(html) == "Visible"

    def test_whitespace_collapsed(self):
        assert _render("<p>  lots   of\n\n   space  </p>") == "lots of space"


class TestSoupDocument:
    """Navigation over a parsed page."""

    HTML = """
    <html>
      <head><title>  Scheme   Page </title></head>
      <body>
        <h2 class="title main" id="elig">Eligibility</h2>
        <!-- separator -->
        <ul><li>Residents only</li></ul>
        <a href="/apply">Apply</a>
        <a name="anchor-without-href">Top</a>
      </body>
    </html>
    """

    def test_satisfies_protocols(self):
        doc = SoupDocument(self.HTML)
        assert isinstance(doc, Document)
        assert isinstance(doc.body, DocumentNode)

    def test_title_normalized(self):
        assert SoupDocument(self.HTML).title == "Scheme Page"

    def test_missing_title(self):
        assert SoupDocument("<p>no title</p>").title is None

    def test_heading_level_and_attributes(self):
        doc = SoupDocument(self.HTML)
        heading = doc.find_all(["h2"])[0]

        assert heading.tag == "h2"
        assert heading.heading_level == 2
        assert heading.get_attribute("class") == "title main"
        assert heading.get_attribute("id") == "elig"
        assert heading.get_attribute("role") is None

    def test_non_heading_has_no_level(self):
        doc = SoupDocument(self.HTML)
        assert doc.find_all(["ul"])[0].heading_level is None

    def test_sibling_navigation_skips_text_and_comments(self):
        doc = SoupDocument(self.HTML)
        heading = doc.find_all(["h2"])[0]

        sibling = heading.next_sibling()
        assert sibling is not None and sibling.tag == "ul"
        assert sibling.previous_sibling() is heading

    def test_node_identity_stable(self):
        doc = SoupDocument(self.HTML)
        ul = doc.find_all(["ul"])[0]
        assert ul.find_all(["li"])[0].parent() is ul
        assert doc.find_all(["ul"])[0] is ul

    def test_body_parent_chain_ends(self):
        doc = SoupDocument(self.HTML)
        html_node = doc.body.parent()
        assert html_node.tag == "html"
        assert html_node.parent() is None

    def test_anchors_require_href(self):
        doc = SoupDocument(self.HTML)
        anchors = doc.anchors()
        assert [a.get_attribute("href") for a in anchors] == ["/apply"]

    def test_descendant_count(self):
        doc = SoupDocument("<div><ul><li>a</li><li>b</li></ul></div>")
        assert doc.find_all(["div"])[0].descendant_count() == 3

    def test_body_text(self):
        text = SoupDocument(self.HTML).body_text()
        assert text == "Eligibility\nResidents only\nApply Top"

    def test_empty_markup(self):
        doc = SoupDocument("")
        assert doc.body_text() == ""
        assert doc.anchors() == []
        assert list(doc.iter_elements()) == []

    def test_fragment_without_body_with_html_parser(self):
        doc = SoupDocument("<p>Hello</p><p>World</p>", parser="html.parser")
        assert doc.body is None
        assert doc.body_text() == "Hello\n\nWorld"
