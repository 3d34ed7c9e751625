"""
XPath 1.0 evaluation through lxml.
"""

import logging

from lxml import etree

from ..core.errors import SelectorSyntaxError
from .base import BaseEvaluator

logger = logging.getLogger(__name__)


class XPathEvaluator(BaseEvaluator):
    """Evaluate XPath expressions against a parsed HTML document."""

    kind = "xpath"
    error_label = "XPath"

    def compile(self, expression: str) -> etree.XPath:
        """
        Compile an expression.

        Raises:
            SelectorSyntaxError: If the expression does not compile
        """
        try:
            return etree.XPath(expression)
        except etree.XPathError as e:
            raise SelectorSyntaxError(f"XPath Error: {str(e) or 'Invalid XPath expression'}", kind=self.kind) from e

    def select(self, tree: etree._ElementTree, expression: str) -> list:
        compiled = self.compile(expression)
        try:
            result = compiled(tree)
        except etree.XPathError as e:
            # Unknown functions and bad argument types surface at evaluation time
            raise SelectorSyntaxError(f"XPath Error: {str(e) or 'Invalid XPath expression'}", kind=self.kind) from e

        # Scalar results (count(), string(), boolean tests) select no nodes
        if not isinstance(result, list):
            logger.debug(f"XPath '{expression}' returned a {type(result).__name__}, not a node set")
            return []

        return list(result)
