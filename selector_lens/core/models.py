"""
Data classes shared by the evaluation, resolution and highlighting stages.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional


@dataclass(frozen=True)
class Selector:
    """A selector expression tagged with the dialect it is written in."""

    expression: str
    kind: ClassVar[str] = ""

    def is_empty(self) -> bool:
        return not self.expression.strip()


@dataclass(frozen=True)
class XPathSelector(Selector):
    kind: ClassVar[str] = "xpath"


@dataclass(frozen=True)
class CssSelector(Selector):
    kind: ClassVar[str] = "css"


@dataclass
class MatchResult:
    """One element matched by a selector."""

    element_name: str
    text_content: str
    attributes: Dict[str, str] = field(default_factory=dict)
    computed_xpath: str = ""
    computed_css_path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form, keyed the way exported results are."""
        return {
            "element": self.element_name,
            "text": self.text_content,
            "attributes": dict(self.attributes),
            "xpath": self.computed_xpath,
            "cssPath": self.computed_css_path,
        }


@dataclass(frozen=True)
class SourceRange:
    """A 0-based line/column span in the original source text."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    @property
    def location(self) -> str:
        """Human-readable location string (1-based lines)."""
        if self.start_line == self.end_line:
            return f"line {self.start_line + 1}"
        return f"lines {self.start_line + 1}-{self.end_line + 1}"

    def to_tuple(self) -> tuple:
        return (self.start_line, self.start_col, self.end_line, self.end_col)


@dataclass(frozen=True)
class ResolvedPosition:
    """A source range together with the index of the match that located it."""

    range: SourceRange
    match_index: int
    start_offset: int
    end_offset: int

    @property
    def start_line(self) -> int:
        return self.range.start_line


@dataclass
class TestResult:
    """Outcome of one selector evaluation."""

    __test__ = False  # not a pytest test class

    matches: List[MatchResult] = field(default_factory=list)
    error: Optional[str] = None
    execution_time_ms: float = 0.0

    @property
    def count(self) -> int:
        return len(self.matches)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: str, execution_time_ms: float = 0.0) -> "TestResult":
        return cls(matches=[], error=error, execution_time_ms=execution_time_ms)

    def as_text(self) -> str:
        """One ``element: text`` line per match, for pasting elsewhere."""
        return "\n".join(f"{m.element_name}: {m.text_content}" for m in self.matches)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "matches": [m.to_dict() for m in self.matches],
            "count": self.count,
            "executionTime": self.execution_time_ms,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class HighlightMarker:
    """A marker installed on the editor for one resolved position."""

    range: SourceRange
    color_slot: int
    emphasized: bool
    css_class: str = ""
    handle: Any = field(default=None, compare=False)


def marker_css_class(color_slot: int, emphasized: bool, prefix: str = "selector-match") -> str:
    """CSS class string for a marker: base class, color slot, current-line emphasis."""
    classes = [prefix, f"{prefix}-{color_slot}"]
    if emphasized:
        classes.append(f"{prefix}-current")
    return " ".join(classes)
