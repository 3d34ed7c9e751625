"""
Sample command: print the sample page and selectors.
"""

import click
from rich.table import Table

from ..core.samples import SAMPLE_HTML, SAMPLE_SELECTORS
from .helpers import console


@click.command()
@click.option("--html-only", is_flag=True, help="Print only the sample HTML (for piping)")
def sample(html_only):
    """Print the sample page and example selectors."""
    if html_only:
        click.echo(SAMPLE_HTML)
        return

    table = Table(title="Sample selectors")
    table.add_column("Kind", style="cyan")
    table.add_column("Selector", style="green")
    for kind, expression in SAMPLE_SELECTORS.items():
        table.add_row(kind, expression)

    console.print(table)
    click.echo(SAMPLE_HTML)
