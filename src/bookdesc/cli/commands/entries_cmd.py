# ABOUTME: The `bookdesc entries` command for listing the books inside a zip archive.
# ABOUTME: Records the entries in the option database on first use.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from bookdesc.cli.context import open_cache
from bookdesc.cli.options import db_option


@click.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False))
@db_option
def entries(archive: str, db_path: Path | None) -> None:
    """List readable book entries inside ARCHIVE."""
    console = Console()
    with open_cache(db_path) as cache:
        found = cache.archive_entries(archive)

    if not found:
        console.print(f"[yellow]No readable books in {escape(archive)}.[/yellow]", soft_wrap=True)
        return

    for entry in found:
        console.print(escape(entry), highlight=False, soft_wrap=True)
    console.print(f"\n{len(found)} book(s)")
