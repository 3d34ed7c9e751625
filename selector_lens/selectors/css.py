"""
CSS selector evaluation through cssselect and lxml.
"""

from cssselect import HTMLTranslator, SelectorError
from lxml import etree

from ..core.errors import SelectorSyntaxError
from .base import BaseEvaluator


class CssEvaluator(BaseEvaluator):
    """Evaluate CSS selectors by translating them to XPath."""

    kind = "css"
    error_label = "CSS"

    def __init__(self):
        super().__init__()
        self.translator = HTMLTranslator()

    def translate(self, expression: str) -> str:
        """
        Translate a CSS selector into an equivalent XPath expression.

        Raises:
            SelectorSyntaxError: If the selector is invalid or unsupported
        """
        try:
            return self.translator.css_to_xpath(expression)
        except SelectorError as e:
            raise SelectorSyntaxError(f"CSS Error: {str(e) or 'Invalid CSS selector'}", kind=self.kind) from e

    def select(self, tree: etree._ElementTree, expression: str) -> list:
        xpath = self.translate(expression)
        try:
            return list(tree.xpath(xpath))
        except etree.XPathError as e:
            raise SelectorSyntaxError(f"CSS Error: {e}", kind=self.kind) from e
