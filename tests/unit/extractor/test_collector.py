"""
Unit tests for candidate block discovery.
"""

import pytest

from schemelens.config import ExtractionSettings
from schemelens.extractor.collector import (
    BlockCollector,
    compute_text_density,
    find_nearest_heading,
    heading_section,
    is_collection_heading,
    node_metadata,
)
from schemelens.extractor.scorer import BlockScorer


@pytest.fixture
def collector(settings, keywords):
    return BlockCollector(settings, keywords)


class TestHelpers:
    def test_is_collection_heading(self, make_document):
        doc = make_document("<h1>a</h1><h4>b</h4><h5>c</h5><p>d</p>")
        levels = {n.tag: is_collection_heading(n) for n in doc.iter_elements() if n.tag in ("h1", "h4", "h5", "p")}
        assert levels == {"h1": True, "h4": True, "h5": False, "p": False}
        assert is_collection_heading(None) is False

    def test_heading_section_stops_at_next_heading(self, make_document):
        doc = make_document("<h2>A</h2><p>one</p><h5>minor</h5><p>two</p><h3>B</h3><p>three</p>")
        section = heading_section(doc.find_all(["h2"])[0], max_siblings=30)
        assert [n.tag for n in section] == ["p", "h5", "p"]

    def test_heading_section_respects_limit(self, make_document):
        doc = make_document("<h2>A</h2>" + "<p>x</p>" * 40)
        assert len(heading_section(doc.find_all(["h2"])[0], max_siblings=30)) == 30

    def test_compute_text_density(self):
        assert compute_text_density("a b c d", 1) == 2.0
        assert compute_text_density("", 0) == 1.0

    def test_node_metadata(self, make_document):
        doc = make_document('<div class="Apply Box" id="Main" aria-label="Help" role="region">x</div>')
        div = doc.find_all(["div"])[0]
        assert node_metadata(div) == "apply box main help region"
        assert node_metadata(div, include_role=False) == "apply box main help"

    def test_nearest_heading_from_previous_sibling(self, make_document):
        doc = make_document("<h3>Documents</h3><p>intro</p><ul><li>Aadhar</li></ul>")
        assert find_nearest_heading(doc.find_all(["ul"])[0]) == "Documents"

    def test_nearest_heading_from_ancestor(self, make_document):
        doc = make_document("<div><h3>Docs</h3><div><ul><li>x</li></ul></div></div>")
        assert find_nearest_heading(doc.find_all(["ul"])[0]) == "Docs"

    def test_nearest_heading_reaches_body(self, make_document):
        doc = make_document("<body><h1>Eligibility criteria</h1><main><ul><li>x</li></ul></main></body>")
        assert find_nearest_heading(doc.find_all(["ul"])[0]) == "Eligibility criteria"

    def test_nearest_heading_without_any_heading(self, make_document):
        doc = make_document("<div><ul><li>x</li></ul></div>")
        assert find_nearest_heading(doc.find_all(["ul"])[0]) == ""

    def test_body_level_heading_lifts_container_score(self, collector, make_document):
        page = "<body><h1>Eligibility criteria</h1><main><ul><li>Residents of the state</li></ul></main></body>"
        blocks = collector.collect(make_document(page))

        ul_block = next(b for b in blocks if b.node is not None and b.node.tag == "ul")
        assert ul_block.heading == "Eligibility criteria"
        assert BlockScorer().score(ul_block) >= 0.36


class TestBlockCollector:
    """Strategy coverage and node-level deduplication."""

    def test_heading_block_uses_sibling_content(self, collector, make_document, eligibility_page):
        blocks = collector.collect(make_document(eligibility_page))

        heading_block = blocks[0]
        assert heading_block.heading == "Eligibility"
        assert heading_block.content == "Must be 18+ and an Indian citizen\nApply Now"
        assert heading_block.node.tag == "h2"

    def test_structured_block_gets_nearest_heading(self, collector, make_document, eligibility_page):
        blocks = collector.collect(make_document(eligibility_page))

        assert len(blocks) == 2
        assert blocks[1].node.tag == "ul"
        assert blocks[1].heading == "Eligibility"
        assert blocks[1].content == "Must be 18+ and an Indian citizen"

    def test_heading_without_content_skipped(self, collector, make_document):
        blocks = collector.collect(make_document("<h2>Empty</h2><h2>Next</h2><p>text</p>"))
        assert [(b.heading, b.content) for b in blocks] == [("Next", "text")]

    def test_semantic_and_landmark_containers(self, collector, make_document):
        html = '<section><p>Section text</p></section><div role="main"><p>Main text</p></div>'
        blocks = collector.collect(make_document(html))
        assert [b.node.tag for b in blocks] == ["section", "div"]

    def test_hinted_container(self, collector, make_document):
        html = '<div class="eligibility-criteria">Residents of the state aged 18 to 40 years.</div>'
        blocks = collector.collect(make_document(html))
        assert len(blocks) == 1
        assert blocks[0].node.get_attribute("class") == "eligibility-criteria"

    def test_hinted_container_needs_enough_text(self, collector, make_document):
        blocks = collector.collect(make_document('<div class="eligibility">Too short</div>'))
        assert blocks == []

    def test_dense_div(self, collector, make_document, div_soup_page):
        blocks = collector.collect(make_document(div_soup_page))
        assert len(blocks) == 1
        assert blocks[0].node.tag == "div"
        assert len(blocks[0].content) > 900

    def test_each_node_contributes_once(self, collector, make_document, full_scheme_page):
        blocks = collector.collect(make_document(full_scheme_page))
        nodes = [id(b.node) for b in blocks]
        assert len(nodes) == len(set(nodes))

    def test_paragraph_fallback_when_nothing_found(self, collector, make_document):
        body_text = "First paragraph\n\nSecond paragraph\n  \nThird"
        blocks = collector.collect(make_document("<span>inline only</span>"), body_text)

        assert [b.content for b in blocks] == ["First paragraph", "Second paragraph", "Third"]
        assert all(b.heading == "" and b.node is None for b in blocks)

    def test_paragraph_fallback_limit(self, keywords, make_document):
        collector = BlockCollector(ExtractionSettings(max_fallback_paragraphs=2), keywords)
        blocks = collector.collect(make_document(""), "a\n\nb\n\nc")
        assert [b.content for b in blocks] == ["a", "b"]

    def test_no_fallback_without_body_text(self, collector, make_document):
        assert collector.collect(make_document("")) == []

    def test_block_content_truncated(self, keywords, make_document):
        collector = BlockCollector(ExtractionSettings(max_block_chars=20), keywords)
        blocks = collector.collect(make_document("<ul><li>" + "x" * 100 + "</li></ul>"))
        assert blocks[0].content == "x" * 20
