"""
Map matched elements back onto the raw HTML they were parsed from.

A parsed tree keeps no source offsets, so the raw text is re-scanned: opening
tags are located by tag name plus an identifying attribute (class tokens, or
the first ``data-*`` pair), and each one is closed with a nesting-depth scan
over tags of the same name.

Identity is heuristic. Two different elements sharing a tag name and class
are both found by the same search, so a match set can resolve to more or
fewer positions than it has matches.
"""

import html
import logging
import math
import re
from bisect import bisect_left, bisect_right, insort
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .models import MatchResult, ResolvedPosition, SourceRange

logger = logging.getLogger(__name__)

# Elements that never have a closing tag
VOID_ELEMENTS = frozenset(
    ["area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "param", "source", "track", "wbr"]
)

# name, optional value (double-quoted, single-quoted or bare)
ATTRIBUTE_PATTERN = re.compile(r"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?""")

TagPredicate = Callable[[Dict[str, str]], bool]


def parse_attributes(attribute_text: str) -> Dict[str, str]:
    """
    Parse the attribute portion of an opening tag.

    Names are lower-cased, values entity-decoded, and the first occurrence of
    a repeated attribute wins.
    """
    attributes: Dict[str, str] = {}
    for match in ATTRIBUTE_PATTERN.finditer(attribute_text):
        name = match.group(1).lower()
        if name in attributes:
            continue
        value = next((g for g in match.group(2, 3, 4) if g is not None), "")
        attributes[name] = html.unescape(value)
    return attributes


def identifying_key(match: MatchResult) -> Tuple:
    """
    What identifies a match's opening tag: class tokens, else the first
    ``data-*`` pair, else nothing beyond the tag name.

    Matches with equal keys resolve to the same spans.
    """
    class_value = match.attributes.get("class", "")
    if class_value.strip():
        return ("class", frozenset(class_value.split()))

    data_name = next((name for name in match.attributes if name.startswith("data-")), None)
    if data_name is not None:
        return ("data", data_name, match.attributes[data_name])

    return ("any",)


def identifying_predicate(match: MatchResult) -> Tuple[TagPredicate, str]:
    """
    Build the opening-tag filter for a match.

    Returns:
        Tuple of (predicate over parsed tag attributes, description for logging)
    """
    key = identifying_key(match)
    if key[0] == "class":
        required = key[1]

        def has_classes(attributes: Dict[str, str]) -> bool:
            return required <= set(attributes.get("class", "").split())

        return has_classes, f"class~={' '.join(sorted(required))!r}"

    if key[0] == "data":
        _, data_name, data_value = key

        def has_data(attributes: Dict[str, str]) -> bool:
            return attributes.get(data_name) == data_value

        return has_data, f"{data_name}={data_value!r}"

    return (lambda attributes: True), "any"


class LineIndex:
    """Convert character offsets into 0-based (line, column) pairs."""

    def __init__(self, text: str):
        self.line_starts = [0]
        self.line_starts.extend(i + 1 for i, char in enumerate(text) if char == "\n")

    def position(self, offset: int) -> Tuple[int, int]:
        line = bisect_right(self.line_starts, offset) - 1
        return line, offset - self.line_starts[line]

    def offset(self, line: int, col: int) -> int:
        """Inverse of position(); lines past the end clamp to the last line."""
        line = min(max(line, 0), len(self.line_starts) - 1)
        return self.line_starts[line] + col

    def span(self, start: int, end: int) -> SourceRange:
        start_line, start_col = self.position(start)
        end_line, end_col = self.position(end)
        return SourceRange(start_line, start_col, end_line, end_col)


class SourcePositionResolver:
    """Locate the complete source span of matched elements in raw HTML text."""

    def __init__(self, raw_text: str):
        self.raw_text = raw_text
        self.lines = LineIndex(raw_text)
        self._patterns: Dict[str, Tuple[re.Pattern, re.Pattern]] = {}
        self._openings: Dict[str, List[Tuple[re.Match, Dict[str, str]]]] = {}

    def _tag_patterns(self, element_name: str) -> Tuple[re.Pattern, re.Pattern]:
        """Opening-tag pattern and combined open/close pattern for a tag name."""
        if element_name not in self._patterns:
            name = re.escape(element_name)
            opening = re.compile(rf"<{name}(?=[\s/>])(?P<attrs>[^>]*)>", re.IGNORECASE)
            either = re.compile(rf"<(?P<close>/?){name}(?=[\s/>])(?P<attrs>[^>]*)>", re.IGNORECASE)
            self._patterns[element_name] = (opening, either)
        return self._patterns[element_name]

    def _opening_tags(self, element_name: str) -> List[Tuple[re.Match, Dict[str, str]]]:
        """Every opening tag of a name with its parsed attributes, scanned once per name."""
        name = element_name.lower()
        if name not in self._openings:
            opening, _ = self._tag_patterns(element_name)
            self._openings[name] = [
                (tag, parse_attributes(tag.group("attrs"))) for tag in opening.finditer(self.raw_text)
            ]
        return self._openings[name]

    def find_opening_tags(self, element_name: str, predicate: TagPredicate) -> Iterator[re.Match]:
        """Yield opening tags of ``element_name`` accepted by the predicate, in document order."""
        for tag, attributes in self._opening_tags(element_name):
            if predicate(attributes):
                yield tag

    def find_element_end(self, element_name: str, opening_tag: re.Match) -> Optional[int]:
        """
        Find the offset just past the closing tag that balances an opening tag.

        Depth starts at 1; every nested opening tag of the same name adds one
        and every closing tag of that name removes one. Self-closing tags and
        void elements end with their opening tag.

        Returns:
            End offset (exclusive), or None if the text ends before depth reaches 0
        """
        if element_name.lower() in VOID_ELEMENTS or opening_tag.group("attrs").rstrip().endswith("/"):
            return opening_tag.end()

        _, either = self._tag_patterns(element_name)
        depth = 1
        for tag in either.finditer(self.raw_text, opening_tag.end()):
            if tag.group("close"):
                depth -= 1
                if depth == 0:
                    return tag.end()
            elif not tag.group("attrs").rstrip().endswith("/"):
                depth += 1

        return None

    def resolve_match(self, match: MatchResult) -> List[Tuple[int, int]]:
        """All (start, end) offset spans found for one match, in document order."""
        predicate, description = identifying_predicate(match)
        spans = []
        for opening_tag in self.find_opening_tags(match.element_name, predicate):
            end = self.find_element_end(match.element_name, opening_tag)
            if end is None:
                logger.debug(
                    f"Unclosed <{match.element_name}> at offset {opening_tag.start()}, dropping occurrence"
                )
                continue
            spans.append((opening_tag.start(), end))

        if not spans:
            logger.debug(f"No source position for <{match.element_name}> ({description})")
        return spans

    def resolve(self, matches: List[MatchResult]) -> List[ResolvedPosition]:
        """
        Resolve every match to zero or more source positions.

        A span already claimed by an earlier match is not repeated, and a span
        that partially crosses an accepted one is dropped. Spans nested inside
        one another are kept.
        """
        accepted = AcceptedSpans()
        positions: List[ResolvedPosition] = []
        scanned = set()

        for match_index, match in enumerate(matches):
            # Identical matches find identical spans, all of which were
            # already accepted or dropped for the first of them
            key = (match.element_name.lower(), identifying_key(match))
            if key in scanned:
                continue
            scanned.add(key)

            for start, end in self.resolve_match(match):
                if (start, end) in accepted:
                    continue
                if accepted.crosses(start, end):
                    logger.debug(f"Dropping span {start}-{end} crossing an accepted span")
                    continue
                accepted.add(start, end)
                positions.append(
                    ResolvedPosition(
                        range=self.lines.span(start, end),
                        match_index=match_index,
                        start_offset=start,
                        end_offset=end,
                    )
                )

        return positions


class AcceptedSpans:
    """
    Non-crossing (start, end) spans, indexed by start and by end.

    A candidate crosses an accepted span when exactly one of that span's
    endpoints falls strictly inside the candidate, so a crossing check only
    visits accepted spans with an endpoint inside the candidate.
    """

    def __init__(self):
        self._spans = set()
        self._by_start: List[Tuple[int, int]] = []
        self._by_end: List[Tuple[int, int]] = []

    def __contains__(self, span: Tuple[int, int]) -> bool:
        return span in self._spans

    def __len__(self) -> int:
        return len(self._spans)

    def add(self, start: int, end: int) -> None:
        self._spans.add((start, end))
        insort(self._by_start, (start, end))
        insort(self._by_end, (end, start))

    def crosses(self, start: int, end: int) -> bool:
        """True when (start, end) overlaps an accepted span without nesting."""
        # Starts inside the candidate, ends after it
        lo = bisect_right(self._by_start, (start, math.inf))
        hi = bisect_left(self._by_start, (end, -math.inf))
        if any(other_end > end for _, other_end in self._by_start[lo:hi]):
            return True

        # Ends inside the candidate, starts before it
        lo = bisect_right(self._by_end, (start, math.inf))
        hi = bisect_left(self._by_end, (end, -math.inf))
        return any(other_start < start for _, other_start in self._by_end[lo:hi])


def resolve_positions(raw_text: str, matches: List[MatchResult]) -> List[ResolvedPosition]:
    """Resolve matches against raw text. Never raises for malformed markup."""
    if not raw_text or not matches:
        return []
    return SourcePositionResolver(raw_text).resolve(matches)
