"""
Shared helpers for CLI commands.
"""

import sys
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..core.models import HighlightMarker, TestResult
from ..core.positions import LineIndex

# Shared console instance
console = Console()
err_console = Console(stderr=True)

# Terminal styles per color slot, mirroring the HTML palette
SLOT_STYLES = ["black on yellow", "black on cyan", "black on magenta", "black on green", "black on dark_orange"]

LEVEL_STYLES = {
    "success": ("green", "✓"),
    "error": ("red", "✗"),
    "info": ("cyan", "ℹ"),
}


class ConsoleNotifier:
    """Print notifications to the console."""

    def __init__(self, target: Console = None, levels: Optional[Tuple[str, ...]] = None):
        self.console = target or console
        self.levels = levels
        self.history: List[tuple] = []

    def notify(self, level: str, title: str, description: str) -> None:
        self.history.append((level, title, description))
        if self.levels is not None and level not in self.levels:
            return
        color, symbol = LEVEL_STYLES.get(level, ("white", "•"))
        message = f"[{color}]{symbol} {escape(title)}[/{color}]: {escape(description)}"
        self.console.print(message, markup=True, highlight=False)


def read_html(path: Path) -> str:
    """Read HTML from a file, or from stdin when the path is '-'."""
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8", errors="replace")


def match_table(result: TestResult) -> Table:
    """Table of matches with their computed paths."""
    table = Table(title=f"{result.count} match{'' if result.count == 1 else 'es'} ({result.execution_time_ms:.2f} ms)")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Element", style="cyan")
    table.add_column("Text", style="green", overflow="fold")
    table.add_column("XPath", overflow="fold")
    table.add_column("CSS path", overflow="fold")

    for index, match in enumerate(result.matches, 1):
        text = " ".join(match.text_content.split())
        if len(text) > 60:
            text = text[:57] + "..."
        table.add_row(
            str(index), f"<{match.element_name}>", escape(text), escape(match.computed_xpath), escape(match.computed_css_path)
        )

    return table


def highlighted_source(text: str, markers: List[HighlightMarker], line_numbers: bool = True) -> Text:
    """
    Source text with markers painted in their slot colors.

    Emphasized markers (those starting on the cursor line) are also bold
    and underlined.
    """
    lines = LineIndex(text)
    rendered = Text(text)
    for marker in markers:
        start = lines.offset(marker.range.start_line, marker.range.start_col)
        end = lines.offset(marker.range.end_line, marker.range.end_col)
        style = SLOT_STYLES[marker.color_slot % len(SLOT_STYLES)]
        if marker.emphasized:
            style = f"bold underline {style}"
        rendered.stylize(style, start, end)

    if not line_numbers:
        return rendered

    numbered = Text()
    width = len(str(len(lines.line_starts)))
    for number, line in enumerate(rendered.split("\n", allow_blank=True), 1):
        numbered.append(f"{number:>{width}} ", style="dim")
        numbered.append_text(line)
        numbered.append("\n")
    return numbered
