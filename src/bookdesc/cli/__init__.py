# ABOUTME: CLI package for bookdesc, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import click

from bookdesc.cli.commands import entries_cmd, reset_cmd, show_cmd


@click.group()
@click.version_option(package_name="bookdesc")
def cli() -> None:
    """bookdesc - inspect and manage cached e-book descriptions."""


cli.add_command(show_cmd.show)
cli.add_command(reset_cmd.reset)
cli.add_command(entries_cmd.entries)
