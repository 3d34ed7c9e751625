"""
Command-line interface for selector-lens.
"""

import logging

import click

from .. import setup_logging
from .highlight import highlight
from .sample import sample
from .tester import test_command
from .watch import watch

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging")
def cli(verbose, debug):
    """Test XPath and CSS selectors against HTML and highlight the matches."""
    if debug:
        setup_logging(logging.DEBUG)
    elif verbose:
        setup_logging(logging.INFO)
    else:
        setup_logging(logging.WARNING)


# Register commands
cli.add_command(test_command)
cli.add_command(highlight)
cli.add_command(watch)
cli.add_command(sample)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
