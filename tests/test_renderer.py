"""
Tests for the HTML page renderer and export document.
"""

import json
from datetime import datetime

import pytest

from selector_lens.core.config import TesterConfig
from selector_lens.core.export import export_json, export_payload
from selector_lens.core.markers import BufferEditor, HighlightMarkerManager
from selector_lens.core.models import HighlightMarker, SourceRange, TestResult, XPathSelector
from selector_lens.core.renderer import HighlightRenderer, marker_segments
from selector_lens.selectors import run_selector


@pytest.fixture
def renderer():
    return HighlightRenderer()


def highlight(html, expression, cursor_line=-1, config=None):
    selector = XPathSelector(expression)
    result = run_selector(html, selector)
    manager = HighlightMarkerManager(BufferEditor(html), config)
    markers = manager.render(html, result.matches, cursor_line)
    return selector, result, markers


class TestMarkerSegments:
    def test_segments_rebuild_text(self, cards_html):
        _, _, markers = highlight(cards_html, "//span")
        segments = marker_segments(cards_html, markers)

        assert "".join(chunk for chunk, _ in segments) == cards_html
        assert [chunk for chunk, css in segments if css] == [
            "<span>One</span>",
            "<span>Two</span>",
            "<span>Three</span>",
        ]

    def test_nested_marker_wins(self):
        text = "<div><p>x</p></div>"
        markers = [
            HighlightMarker(SourceRange(0, 0, 0, 19), 0, False, "outer"),
            HighlightMarker(SourceRange(0, 5, 0, 13), 1, False, "inner"),
        ]

        assert marker_segments(text, markers) == [
            ("<div>", "outer"),
            ("<p>x</p>", "inner"),
            ("</div>", "outer"),
        ]

    def test_no_markers(self):
        assert marker_segments("plain", []) == [("plain", None)]


class TestRenderPage:
    def test_source_is_escaped_and_highlighted(self, renderer, cards_html):
        selector, result, markers = highlight(cards_html, '//div[@class="card"]', cursor_line=3)
        page = renderer.render_page(cards_html, markers, selector, result, title="cards.html")

        assert "<title>cards.html</title>" in page
        assert '<span class="selector-match selector-match-0 selector-match-current">' in page
        assert '<span class="selector-match selector-match-2">' in page
        assert "&lt;div class=&#34;card&#34;&gt;" in page
        assert "3 matches, 3 highlighted" in page

    def test_palette_css(self, renderer, cards_html):
        selector, result, markers = highlight(cards_html, "//span")
        page = renderer.render_page(cards_html, markers, selector, result)

        assert ".selector-match-0 { background-color: rgba(255, 255, 0, 0.4); }" in page
        assert ".selector-match-4 { background-color: rgba(255, 165, 0, 0.4); }" in page

    def test_custom_prefix(self, cards_html):
        config = TesterConfig(color_slots=2, css_class_prefix="hit")
        selector, result, markers = highlight(cards_html, "//span", config=config)
        page = HighlightRenderer(config=config).render_page(cards_html, markers, selector, result)

        assert ".hit-1 {" in page
        assert ".hit-2 {" not in page
        assert '<span class="hit hit-0">' in page

    def test_error_page(self, renderer, cards_html):
        selector, result, markers = highlight(cards_html, "//div[")
        page = renderer.render_page(cards_html, markers, selector, result)

        assert '<p class="error">XPath Error:' in page
        assert "<table>" not in page

    def test_match_table(self, renderer, cards_html):
        selector, result, markers = highlight(cards_html, "//span")
        page = renderer.render_page(cards_html, markers, selector, result)

        assert "<td>&lt;span&gt;</td>" in page
        assert "/html[1]/body[1]/div[1]/div[3]/span[1]" in page


class TestExport:
    def test_payload(self, cards_html):
        selector, result, _ = highlight(cards_html, "//span")
        payload = export_payload(selector, result, datetime(2024, 1, 2, 3, 4, 5))

        assert payload["selector"] == "//span"
        assert payload["type"] == "xpath"
        assert payload["count"] == 3
        assert payload["timestamp"] == "2024-01-02T03:04:05"
        assert payload["matches"][0]["element"] == "span"
        assert payload["matches"][0]["text"] == "One"
        assert "error" not in payload

    def test_error_included(self):
        result = TestResult.failure("XPath Error: bad", 1.5)
        document = json.loads(export_json(XPathSelector("//div["), result))

        assert document["error"] == "XPath Error: bad"
        assert document["count"] == 0
        assert document["executionTime"] == 1.5


class TestResultText:
    def test_copy_format(self, cards_html):
        _, result, _ = highlight(cards_html, "//span")

        assert result.as_text() == "span: One\nspan: Two\nspan: Three"
