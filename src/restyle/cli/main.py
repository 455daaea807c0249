"""Restyle CLI entry point: Click group with subcommands."""

import logging

import click

from restyle import __version__


@click.group()
@click.version_option(version=__version__, prog_name="restyle")
@click.option("--verbose", "-v", is_flag=True, help="Log parse and apply details.")
def cli(verbose: bool) -> None:
    """Restyle - parse and inspect CSS-like style strings."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from restyle.cli.parse import format_cmd, parse  # noqa: E402

cli.add_command(parse)
cli.add_command(format_cmd)
