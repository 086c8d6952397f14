# ABOUTME: Shared Click options for bookdesc CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --db.

from pathlib import Path

import click

from bookdesc.options.connection import DEFAULT_OPTIONS_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to option database (default: {DEFAULT_OPTIONS_PATH})",
)
