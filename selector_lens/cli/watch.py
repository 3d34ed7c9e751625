"""
Watch command: live-test a selector while the HTML file is being edited.
"""

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.markup import escape

from ..core.config import TesterConfig
from ..core.controller import LiveTestController
from ..core.markers import BufferEditor
from ..core.models import TestResult
from .helpers import console, match_table
from .tester import selector_options

logger = logging.getLogger(__name__)


def print_result(result: TestResult) -> None:
    """Show a live result without interrupting: errors are printed, never raised."""
    if result.error:
        console.print(f"[red]{escape(result.error)}[/red]")
    elif result.matches:
        console.print(match_table(result))
    else:
        console.print("[dim]No matches[/dim]")


async def watch_file(path: Path, kind: str, selector: str, config: TesterConfig, interval: float, duration: float):
    """
    Poll ``path`` and feed every change through the debounced controller.

    Args:
        path: HTML file to watch
        kind: Selector dialect
        selector: Selector expression
        config: Debounce settings
        interval: Seconds between file polls
        duration: Stop after this many seconds (0 runs until cancelled)
    """
    loop = asyncio.get_running_loop()
    editor = BufferEditor()
    controller = LiveTestController(editor, loop, config=config)
    controller.listeners.append(print_result)
    controller.set_active_kind(kind)
    controller.set_selector(selector)

    last_mtime = None
    started = loop.time()
    try:
        while not duration or loop.time() - started < duration:
            try:
                mtime = path.stat().st_mtime_ns
            except FileNotFoundError:
                logger.warning(f"{path} disappeared, waiting for it to come back")
                mtime = None
            if mtime is not None and mtime != last_mtime:
                last_mtime = mtime
                editor.text = path.read_text(encoding="utf-8", errors="replace")
                logger.debug(f"{path} changed, scheduling evaluation")
                controller.set_html(editor.text)
            await asyncio.sleep(interval)
    finally:
        controller.close()


@click.command()
@selector_options
@click.option("--html-delay", type=float, default=0.3, show_default=True, help="Debounce for HTML edits (seconds)")
@click.option("--selector-delay", type=float, default=0.5, show_default=True, help="Debounce for selector edits")
@click.option("--interval", type=float, default=0.2, show_default=True, help="File poll interval (seconds)")
@click.option("--duration", type=float, default=0, help="Stop after this many seconds (default: run until Ctrl-C)")
def watch(html_path, selector, kind, html_delay, selector_delay, interval, duration):
    """
    Re-test SELECTOR whenever HTML_PATH changes.

    Results are printed silently as they become current; press Ctrl-C to stop.

    Examples:
        selector-lens watch page.html '//div[@class="card"]'
        selector-lens watch page.html '.card > h3' --css --html-delay 1
    """
    if str(html_path) == "-" or not html_path.exists():
        console.print(f"[red]✗ {escape(str(html_path))} is not a file that can be watched[/red]")
        sys.exit(1)

    config = TesterConfig(html_debounce=html_delay, selector_debounce=selector_delay)
    console.print(f"[cyan]Watching {html_path} for {kind} selector {escape(selector)}[/cyan]", highlight=False)
    try:
        asyncio.run(watch_file(html_path, kind, selector, config, interval, duration))
    except KeyboardInterrupt:
        console.print("[yellow]Stopped[/yellow]")
