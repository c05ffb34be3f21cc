# ABOUTME: The `novelnoted ls` and `novelnoted stats` commands.
# ABOUTME: Lists library books with status/search filters and summarizes reading counts.

from pathlib import Path

import click
from rich.table import Table

from novelnoted.cli.app import get_console, open_app
from novelnoted.cli.commands.book_cmd import describe_series
from novelnoted.cli.options import db_option, filter_choice
from novelnoted.core.derive import ALL, filter_books, get_stats, reading_progress
from novelnoted.records.types import Book, Collection, ReadingStatus


def _progress_cell(book: Book) -> str:
    if book.status == ReadingStatus.READ:
        return "★" * book.rating if book.rating else ""
    percent = reading_progress(book)
    return f"{percent:.0f}%" if percent is not None else ""


@click.command("ls")
@click.option(
    "--status",
    "status_filter",
    type=filter_choice,
    default=ALL,
    show_default=True,
    help="Only show books with this status.",
)
@click.option("--search", "search_text", default="", help="Match against title or author.")
@db_option
def ls(status_filter: str, search_text: str, db_path: Path | None) -> None:
    """List the books in your library, newest first."""
    console = get_console()
    with open_app(db_path) as app:
        books = app.records.list(Collection.BOOKS)

    shown = filter_books(books, status_filter, search_text)
    if not shown:
        if books:
            console.print("[yellow]No books match.[/yellow]")
        else:
            console.print("[yellow]No books in your library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Series")
    table.add_column("Status", no_wrap=True)
    table.add_column("Progress", justify="right")

    for book in shown:
        table.add_row(
            book.id,
            book.title,
            book.author,
            describe_series(book),
            book.status.value,
            _progress_cell(book),
        )

    console.print(table)
    console.print(f"\n[dim]{len(shown)} of {len(books)} book(s)[/dim]")


@click.command("stats")
@db_option
def stats(db_path: Path | None) -> None:
    """Summarize your library and wishlist."""
    console = get_console()
    with open_app(db_path) as app:
        books = app.records.list(Collection.BOOKS)
        wishlist = app.records.list(Collection.WISHLIST)

    summary = get_stats(books, wishlist)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Stat", style="bold", width=18)
    table.add_column("Value", justify="right")
    table.add_row("Total books", str(summary.total))
    table.add_row("Currently reading", str(summary.currently_reading))
    table.add_row("Read", str(summary.read))
    if summary.want_to_read:
        table.add_row("Want to read", str(summary.want_to_read))
    table.add_row("Wishlist", str(summary.wishlist_count))
    table.add_row("Pages read", f"{summary.total_pages_read:,}")

    console.print(table)
