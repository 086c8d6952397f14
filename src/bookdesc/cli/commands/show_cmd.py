# ABOUTME: The `bookdesc show` command for displaying a book's description.
# ABOUTME: Loads through the description cache and reports why loading failed.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookdesc.cli.context import open_cache
from bookdesc.cli.options import db_option
from bookdesc.description.author import MultiAuthor


@click.command()
@click.argument("path")
@click.option(
    "--no-check",
    "no_check",
    is_flag=True,
    help="Trust persisted info without checking the file on disk.",
)
@db_option
def show(path: str, no_check: bool, db_path: Path | None) -> None:
    """Show the description of the book at PATH (use archive.zip:member for archives)."""
    console = Console()
    with open_cache(db_path) as cache:
        result = cache.load(path, check_file=not no_check)

    if not result.ok:
        console.print(f"[red]Error:[/red] {escape(path)}: {result.failure.value}", soft_wrap=True)
        raise SystemExit(1)

    desc = result.description
    table = Table(title=escape(path), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Title", escape(desc.title))
    author = desc.author
    if isinstance(author, MultiAuthor):
        for index, single in enumerate(author.authors):
            table.add_row("Author" if index == 0 else "", escape(single.display_name))
    elif author is not None:
        table.add_row("Author", escape(author.display_name))
    if author is not None:
        table.add_row("Author Sort", escape(author.sort_key))
    if desc.sequence_name:
        table.add_row("Series", f"{escape(desc.sequence_name)} #{desc.number_in_sequence}")
    table.add_row("Language", escape(desc.language) or "[dim]unknown[/dim]")
    table.add_row("Encoding", escape(desc.encoding))

    console.print(table)
