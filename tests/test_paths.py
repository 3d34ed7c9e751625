"""
Tests for computed XPath and CSS paths.
"""

import lxml.html
import pytest

from selector_lens.core.paths import compute_css_path, compute_xpath


@pytest.fixture
def document():
    return lxml.html.document_fromstring(
        """<html><body>
        <div id="main"><p>first</p><span>between</span><p class="lead intro">second</p></div>
        <div class="b a"><ul><li>x</li></ul></div>
        </body></html>"""
    )


class TestComputeXPath:
    def test_id_short_circuit(self, document):
        """Elements with an id use the //*[@id] form."""
        element = document.xpath("//div[@id='main']")[0]
        assert compute_xpath(element) == '//*[@id="main"]'

    def test_ancestor_id_does_not_short_circuit(self, document):
        """Only the element's own id counts."""
        element = document.xpath("//p")[0]
        assert compute_xpath(element) == "/html[1]/body[1]/div[1]/p[1]"

    def test_ordinal_counts_same_tag_siblings_only(self, document):
        """The span between the two paragraphs does not shift the ordinal."""
        element = document.xpath("//p")[1]
        assert compute_xpath(element) == "/html[1]/body[1]/div[1]/p[2]"

    def test_second_div(self, document):
        element = document.xpath("//li")[0]
        assert compute_xpath(element) == "/html[1]/body[1]/div[2]/ul[1]/li[1]"

    def test_root(self, document):
        assert compute_xpath(document) == "/html[1]"


class TestComputeCssPath:
    def test_id_short_circuit(self, document):
        element = document.xpath("//div[@id='main']")[0]
        assert compute_css_path(element) == "#main"

    def test_classes_in_source_order(self, document):
        """Classes are dot-joined in the order they were written."""
        element = document.xpath("//li")[0]
        assert compute_css_path(element) == "html > body > div.b.a > ul > li"

    def test_multiple_classes_on_target(self, document):
        element = document.xpath("//p")[1]
        assert compute_css_path(element) == "html > body > div > p.lead.intro"
