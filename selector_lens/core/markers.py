"""
Highlight marker lifecycle on an editor.
"""

import itertools
import logging
from typing import Any, Dict, List, Optional, Protocol, Tuple

from .config import TesterConfig
from .models import HighlightMarker, MatchResult, ResolvedPosition, SourceRange, marker_css_class
from .positions import resolve_positions

logger = logging.getLogger(__name__)


class Editor(Protocol):
    """What the marker manager needs from a text editor."""

    def add_marker(self, source_range: SourceRange, css_class: str) -> Any:
        """Install a marker and return an opaque handle for it."""
        ...

    def remove_marker(self, handle: Any) -> None:
        """Remove a previously installed marker."""
        ...


class BufferEditor:
    """
    An editor that keeps its text and markers in memory.

    Renderers read ``markers`` to paint highlights; handles are integers.
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.markers: Dict[int, Tuple[SourceRange, str]] = {}
        self._ids = itertools.count(1)

    def add_marker(self, source_range: SourceRange, css_class: str) -> int:
        handle = next(self._ids)
        self.markers[handle] = (source_range, css_class)
        return handle

    def remove_marker(self, handle: int) -> None:
        self.markers.pop(handle, None)

    def ordered_markers(self) -> List[Tuple[SourceRange, str]]:
        """Markers in installation order."""
        return [self.markers[handle] for handle in sorted(self.markers)]


class HighlightMarkerManager:
    """
    Owns every highlight marker installed on an editor.

    Each render clears the previous generation before installing the next,
    so markers never accumulate across evaluations.
    """

    def __init__(self, editor: Editor, config: Optional[TesterConfig] = None):
        self.editor = editor
        self.config = config or TesterConfig()
        self._markers: List[HighlightMarker] = []
        self._positions: List[ResolvedPosition] = []

    @property
    def markers(self) -> List[HighlightMarker]:
        return list(self._markers)

    @property
    def positions(self) -> List[ResolvedPosition]:
        return list(self._positions)

    def _remove_markers(self) -> None:
        for marker in self._markers:
            self.editor.remove_marker(marker.handle)
        if self._markers:
            logger.debug(f"Cleared {len(self._markers)} marker(s)")
        self._markers = []

    def clear(self) -> None:
        """Remove every marker this manager has installed and forget their positions."""
        self._remove_markers()
        self._positions = []

    def render(self, raw_text: str, matches: List[MatchResult], cursor_line: int) -> List[HighlightMarker]:
        """
        Resolve matches onto the raw text and install one marker per position.

        Args:
            raw_text: The source text shown in the editor
            matches: Matches from the latest evaluation
            cursor_line: 0-based line the cursor is on

        Returns:
            The installed markers, in position order
        """
        self._positions = resolve_positions(raw_text, matches)
        return self._install(cursor_line)

    def update_cursor(self, cursor_line: int) -> List[HighlightMarker]:
        """Re-render the current positions for a new cursor line."""
        return self._install(cursor_line)

    def close(self) -> None:
        """Tear down: nothing stays installed or cached."""
        self.clear()

    def _install(self, cursor_line: int) -> List[HighlightMarker]:
        self._remove_markers()

        markers = []
        for index, position in enumerate(self._positions):
            color_slot = index % self.config.color_slots
            emphasized = position.start_line == cursor_line
            css_class = marker_css_class(color_slot, emphasized, self.config.css_class_prefix)
            handle = self.editor.add_marker(position.range, css_class)
            markers.append(HighlightMarker(position.range, color_slot, emphasized, css_class, handle))

        self._markers = markers
        logger.debug(f"Installed {len(markers)} marker(s), cursor on line {cursor_line}")
        return list(markers)
