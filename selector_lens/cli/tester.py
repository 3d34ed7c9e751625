"""
Test command: run a selector once against an HTML file.
"""

import sys
from pathlib import Path

import click
from rich.markup import escape

from ..core.config import TesterConfig
from ..core.controller import LiveTestController, Mode
from ..core.export import export_json
from ..core.markers import BufferEditor
from .helpers import ConsoleNotifier, console, err_console, highlighted_source, match_table, read_html


def selector_options(func):
    """Shared SELECTOR argument and dialect switches."""
    func = click.option(
        "--css", "kind", flag_value="css", help="Treat SELECTOR as a CSS selector"
    )(func)
    func = click.option(
        "--xpath", "kind", flag_value="xpath", default=True, help="Treat SELECTOR as an XPath expression (default)"
    )(func)
    func = click.argument("selector")(func)
    func = click.argument("html_path", type=click.Path(path_type=Path, allow_dash=True))(func)
    return func


def build_manual_controller(html: str, kind: str, selector: str, cursor_line: int, notifier=None):
    """A controller loaded with inputs, ready for one manual run."""
    editor = BufferEditor(html)
    controller = LiveTestController(editor, notifier=notifier, config=TesterConfig(live=False))
    controller.set_html(html)
    controller.set_active_kind(kind)
    controller.set_selector(selector)
    controller.set_cursor_line(cursor_line)
    return controller


@click.command("test")
@selector_options
@click.option("--cursor-line", "-l", type=int, default=1, show_default=True, help="1-based line to emphasize")
@click.option("--json", "as_json", is_flag=True, help="Print the export document as JSON")
@click.option("--show-source", "-s", is_flag=True, help="Print the source with matches highlighted")
@click.option("--copy-format", is_flag=True, help="Print one 'element: text' line per match")
def test_command(html_path, selector, kind, cursor_line, as_json, show_source, copy_format):
    """
    Test SELECTOR against the HTML in HTML_PATH ('-' for stdin).

    Examples:
        selector-lens test page.html '//div[@class="feature-card"]'
        selector-lens test page.html .feature-card --css --show-source
        cat page.html | selector-lens test - '//a' --json
    """
    try:
        html = read_html(html_path)
    except OSError as e:
        console.print(f"[red]✗ Could not read {escape(str(html_path))}:[/red] {escape(str(e))}")
        sys.exit(1)

    # JSON on stdout stays parseable; problems still reach stderr
    notifier = ConsoleNotifier(err_console, levels=("error",)) if as_json else ConsoleNotifier()
    controller = build_manual_controller(html, kind, selector, cursor_line - 1, notifier)
    result = controller.run_evaluation(Mode.MANUAL)
    markers = controller.markers.markers
    controller.close()

    if result is None:
        sys.exit(1)

    if as_json:
        click.echo(export_json(controller.current_selector(), result))
    elif copy_format:
        click.echo(result.as_text())
    else:
        if result.matches:
            console.print(match_table(result))
        if show_source:
            console.print(highlighted_source(html, markers))

    if not result.ok:
        sys.exit(1)
