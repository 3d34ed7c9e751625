"""
Selector dialects and the evaluators that run them.
"""

import logging
from typing import List

from ..core.models import CssSelector, MatchResult, Selector, TestResult, XPathSelector
from .base import BaseEvaluator
from .css import CssEvaluator
from .xpath import XPathEvaluator

logger = logging.getLogger(__name__)

# Map selector kinds to their selector type and evaluator
SELECTORS = {
    "xpath": XPathSelector,
    "css": CssSelector,
}

EVALUATORS = {
    "xpath": XPathEvaluator,
    "css": CssEvaluator,
}


def make_selector(kind: str, expression: str) -> Selector:
    """
    Build a selector of the given kind.

    Raises:
        ValueError: If the kind is not supported
    """
    kind = kind.lower()
    if kind not in SELECTORS:
        supported = ", ".join(SELECTORS.keys())
        raise ValueError(f"Unknown selector kind '{kind}'. Supported: {supported}")
    return SELECTORS[kind](expression)


def get_evaluator(selector: Selector) -> BaseEvaluator:
    """
    Get the evaluator for a selector's dialect.

    Args:
        selector: The selector to evaluate

    Returns:
        An evaluator instance

    Raises:
        ValueError: If no evaluator is registered for the selector kind
    """
    if selector.kind not in EVALUATORS:
        supported = ", ".join(EVALUATORS.keys())
        raise ValueError(f"No evaluator for '{selector.kind}' selectors. Supported: {supported}")

    evaluator_class = EVALUATORS[selector.kind]
    return evaluator_class()


def evaluate(html: str, selector: Selector) -> List[MatchResult]:
    """Evaluate a selector, raising EvaluationError on failure."""
    return get_evaluator(selector).evaluate(html, selector)


def run_selector(html: str, selector: Selector) -> TestResult:
    """Evaluate a selector and always return a TestResult."""
    return get_evaluator(selector).test(html, selector)


__all__ = [
    "BaseEvaluator",
    "CssEvaluator",
    "EVALUATORS",
    "SELECTORS",
    "XPathEvaluator",
    "evaluate",
    "get_evaluator",
    "make_selector",
    "run_selector",
]
