"""
Tests for highlight marker lifecycle.
"""

import pytest

from selector_lens.core.config import TesterConfig
from selector_lens.core.markers import BufferEditor, HighlightMarkerManager
from selector_lens.core.models import MatchResult

SEVEN_ITEMS = "<ul>\n" + "".join(f"  <li>item {i}</li>\n" for i in range(7)) + "</ul>"
LI = MatchResult(element_name="li", text_content="item 0")


@pytest.fixture
def manager(editor):
    return HighlightMarkerManager(editor)


class TestRender:
    def test_color_slots_cycle(self, manager):
        """Color slots follow position index modulo five."""
        markers = manager.render(SEVEN_ITEMS, [LI], cursor_line=-1)

        assert [m.color_slot for m in markers] == [0, 1, 2, 3, 4, 0, 1]

    def test_one_marker_per_position(self, manager, editor):
        """A single match resolving to seven places installs seven markers."""
        manager.render(SEVEN_ITEMS, [LI], cursor_line=0)

        assert len(editor.markers) == 7

    def test_emphasis_on_cursor_line(self, manager):
        markers = manager.render(SEVEN_ITEMS, [LI], cursor_line=3)

        assert [m.emphasized for m in markers] == [False, False, True, False, False, False, False]
        assert markers[2].range.start_line == 3

    def test_css_classes(self, manager, editor):
        markers = manager.render(SEVEN_ITEMS, [LI], cursor_line=1)

        assert markers[0].css_class == "selector-match selector-match-0 selector-match-current"
        assert markers[1].css_class == "selector-match selector-match-1"
        assert editor.ordered_markers()[0] == (markers[0].range, markers[0].css_class)

    def test_idempotent(self, manager, editor):
        """Rendering twice yields the same markers and does not accumulate them."""
        first = manager.render(SEVEN_ITEMS, [LI], cursor_line=2)
        second = manager.render(SEVEN_ITEMS, [LI], cursor_line=2)

        assert first == second
        assert len(editor.markers) == 7

    def test_no_matches_clears(self, manager, editor):
        manager.render(SEVEN_ITEMS, [LI], cursor_line=0)
        markers = manager.render(SEVEN_ITEMS, [], cursor_line=0)

        assert markers == []
        assert editor.markers == {}

    def test_unresolved_matches_do_not_shift_colors(self, manager):
        """Slots are assigned over resolved positions, not over matches."""
        missing = MatchResult(element_name="table", text_content="")
        markers = manager.render(SEVEN_ITEMS, [missing, LI], cursor_line=-1)

        assert [m.color_slot for m in markers] == [0, 1, 2, 3, 4, 0, 1]

    def test_custom_config(self, editor):
        manager = HighlightMarkerManager(editor, TesterConfig(color_slots=3, css_class_prefix="hit"))
        markers = manager.render(SEVEN_ITEMS, [LI], cursor_line=-1)

        assert [m.color_slot for m in markers] == [0, 1, 2, 0, 1, 2, 0]
        assert markers[4].css_class == "hit hit-1"


class TestCursorUpdates:
    def test_only_emphasis_changes(self, manager):
        """Moving the cursor keeps ranges and slots, toggling emphasis only."""
        before = manager.render(SEVEN_ITEMS, [LI], cursor_line=1)
        after = manager.update_cursor(5)

        assert [m.range for m in after] == [m.range for m in before]
        assert [m.color_slot for m in after] == [m.color_slot for m in before]
        assert [m.emphasized for m in before].index(True) == 0
        assert [m.emphasized for m in after].index(True) == 4

    def test_update_replaces_markers(self, manager, editor):
        manager.render(SEVEN_ITEMS, [LI], cursor_line=1)
        old_handles = set(editor.markers)
        manager.update_cursor(2)

        assert len(editor.markers) == 7
        assert old_handles.isdisjoint(editor.markers)


class TestLifecycle:
    def test_clear(self, manager, editor):
        manager.render(SEVEN_ITEMS, [LI], cursor_line=0)
        manager.clear()

        assert editor.markers == {}
        assert manager.markers == []

    def test_cursor_after_clear_installs_nothing(self, manager, editor):
        """Cleared positions do not come back when the cursor moves."""
        manager.render(SEVEN_ITEMS, [LI], cursor_line=0)
        manager.clear()

        assert manager.update_cursor(0) == []
        assert manager.positions == []
        assert editor.markers == {}

    def test_close_forgets_positions(self, manager, editor):
        manager.render(SEVEN_ITEMS, [LI], cursor_line=0)
        manager.close()

        assert manager.positions == []
        assert manager.update_cursor(0) == []
        assert editor.markers == {}

    def test_foreign_markers_untouched(self, manager, editor):
        """The manager only removes markers it installed."""
        other = editor.add_marker(None, "spellcheck")
        manager.render(SEVEN_ITEMS, [LI], cursor_line=0)
        manager.clear()

        assert list(editor.markers) == [other]


class TestBufferEditor:
    def test_handles_are_unique(self):
        editor = BufferEditor("text")
        first = editor.add_marker(None, "a")
        editor.remove_marker(first)
        second = editor.add_marker(None, "b")

        assert first != second
        assert editor.ordered_markers() == [(None, "b")]
