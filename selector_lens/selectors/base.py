"""
Shared parsing and match extraction for selector evaluators.
"""

import logging
import time
from typing import List

import lxml.html
from lxml import etree

from ..core.errors import EvaluationError
from ..core.models import MatchResult, Selector, TestResult
from ..core.paths import compute_css_path, compute_xpath, is_element

logger = logging.getLogger(__name__)


class BaseEvaluator:
    """Base class for dialect-specific evaluators."""

    kind = ""
    error_label = ""

    def __init__(self):
        # Parse from UTF-8 bytes so documents carrying an encoding
        # declaration are accepted.
        self.parser = lxml.html.HTMLParser(encoding="utf-8")

    def parse_document(self, html: str) -> etree._ElementTree:
        """
        Parse HTML leniently and return the document tree.

        Raises:
            EvaluationError: If the parser cannot produce any document at all
        """
        try:
            root = lxml.html.document_fromstring(html.encode("utf-8"), parser=self.parser)
        except (etree.ParserError, ValueError) as e:
            raise EvaluationError(f"HTML Error: {e}", kind=self.kind) from e
        return root.getroottree()

    def select(self, tree: etree._ElementTree, expression: str) -> list:
        """
        Run an expression against a parsed document.

        Must return a list captured at evaluation time, never a live view.
        Must be implemented by dialect-specific subclasses.
        """
        raise NotImplementedError("Subclasses must implement select")

    def build_match(self, element: etree._Element) -> MatchResult:
        """Describe a matched element."""
        return MatchResult(
            element_name=element.tag.lower(),
            text_content=str(element.text_content()),
            attributes={str(name): str(value) for name, value in element.attrib.items()},
            computed_xpath=compute_xpath(element),
            computed_css_path=compute_css_path(element),
        )

    def evaluate(self, html: str, selector: Selector) -> List[MatchResult]:
        """
        Evaluate a selector and describe every matched element in document order.

        Empty HTML or an empty expression yields no matches.

        Raises:
            SelectorSyntaxError: If the expression is invalid for this dialect
            EvaluationError: If the document cannot be parsed
        """
        if selector.is_empty() or not html.strip():
            logger.debug("Nothing to test: empty HTML or selector")
            return []

        tree = self.parse_document(html)
        nodes = self.select(tree, selector.expression)

        matches = [self.build_match(node) for node in nodes if is_element(node)]
        logger.debug(f"{self.error_label} '{selector.expression}' matched {len(matches)} element(s)")
        return matches

    def test(self, html: str, selector: Selector) -> TestResult:
        """
        Evaluate a selector, capturing failures in the result instead of raising.

        The execution time covers evaluation only.
        """
        start = time.perf_counter()
        try:
            matches = self.evaluate(html, selector)
        except EvaluationError as e:
            elapsed = (time.perf_counter() - start) * 1000
            logger.debug(f"Evaluation failed: {e}")
            return TestResult.failure(str(e), elapsed)

        elapsed = (time.perf_counter() - start) * 1000
        return TestResult(matches=matches, execution_time_ms=elapsed)
