"""stylecheck CLI entry point: Click group with subcommands."""

import click

from stylecheck import __version__


@click.group()
@click.version_option(version=__version__, prog_name="stylecheck")
def cli() -> None:
    """stylecheck - conformance checker for component-style CSS/SCSS."""


# Import and register subcommands
from stylecheck.cli.check import check  # noqa: E402
from stylecheck.cli.rules import rules  # noqa: E402

cli.add_command(check)
cli.add_command(rules)
