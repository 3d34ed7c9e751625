"""
Exceptions raised while evaluating selectors.
"""


class EvaluationError(Exception):
    """A selector could not be evaluated against a document."""

    def __init__(self, message: str, kind: str = ""):
        super().__init__(message)
        self.kind = kind


class SelectorSyntaxError(EvaluationError):
    """The selector expression is not valid for its dialect."""
