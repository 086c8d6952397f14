# ABOUTME: The `bookdesc reset` command for forgetting a book's persisted description.
# ABOUTME: The next `show` re-reads the book file through its format plugin.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from bookdesc.cli.context import open_cache
from bookdesc.cli.options import db_option


@click.command()
@click.argument("path")
@db_option
def reset(path: str, db_path: Path | None) -> None:
    """Reset the persisted description of the book at PATH."""
    console = Console()
    with open_cache(db_path) as cache:
        cache.invalidate(path)
    console.print(f"Reset description for {escape(path)}", soft_wrap=True)
