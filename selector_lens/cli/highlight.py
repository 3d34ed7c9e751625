"""
Highlight command: render matches over the source as an HTML page.
"""

import sys
from pathlib import Path

import click
from rich.markup import escape

from ..core.controller import Mode
from ..core.renderer import HighlightRenderer
from .helpers import console, read_html
from .tester import build_manual_controller, selector_options


@click.command()
@selector_options
@click.argument("output_path", type=click.Path(path_type=Path, allow_dash=True), required=False)
@click.option("--cursor-line", "-l", type=int, default=1, show_default=True, help="1-based line to emphasize")
@click.option("--title", default=None, help="Page title (default: the input file name)")
def highlight(html_path, selector, kind, output_path, cursor_line, title):
    """
    Render HTML_PATH with SELECTOR matches highlighted.

    OUTPUT_PATH defaults to stdout; '-' also means stdout.

    Examples:
        selector-lens highlight page.html '//li' report.html
        selector-lens highlight page.html 'a.nav-link' --css > report.html
    """
    try:
        html = read_html(html_path)
    except OSError as e:
        console.print(f"[red]✗ Could not read {escape(str(html_path))}:[/red] {escape(str(e))}")
        sys.exit(1)

    controller = build_manual_controller(html, kind, selector, cursor_line - 1)
    result = controller.run_evaluation(Mode.MANUAL)
    if result is None:
        console.print("[red]✗ Nothing to test: HTML and selector must not be empty[/red]")
        sys.exit(1)

    renderer = HighlightRenderer(config=controller.config)
    page = renderer.render_page(
        html,
        controller.markers.markers,
        controller.current_selector(),
        result,
        title=title or ("stdin" if str(html_path) == "-" else html_path.name),
    )
    controller.close()

    if output_path is None or str(output_path) == "-":
        click.echo(page)
    else:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(page, encoding="utf-8")
        console.print(f"[green]✓[/green] {escape(str(html_path))} → {escape(str(output_path))}")
