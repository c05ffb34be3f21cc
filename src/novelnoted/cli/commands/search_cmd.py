# ABOUTME: Commands that query Google Books: search, scan, and series.
# ABOUTME: Search hits and scanned ISBNs can be added straight to the library or wishlist.

from pathlib import Path

import click
from rich.table import Table

from novelnoted.cli.app import fail, get_console, open_app
from novelnoted.cli.options import db_option, status_choice
from novelnoted.core.scan import lookup_scanned_isbn
from novelnoted.metadata.series import extract_series_info
from novelnoted.records.status import initial_dates
from novelnoted.records.types import BookSearchResult, Collection, ReadingStatus


def _truncate(text: str | None, width: int) -> str:
    if not text:
        return ""
    return text if len(text) <= width else text[: width - 1] + "…"


def _results_table(results: list[BookSearchResult]) -> Table:
    table = Table()
    table.add_column("#", style="dim", width=3)
    table.add_column("Volume", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", width=5)
    table.add_column("ISBN", no_wrap=True)
    table.add_column("Pages", justify="right")
    for idx, result in enumerate(results, 1):
        table.add_row(
            str(idx),
            result.id,
            _truncate(result.title, 60),
            result.author,
            result.published_year or "",
            result.isbn or "",
            str(result.pages) if result.pages else "",
        )
    return table


@click.command("search")
@click.argument("query")
@click.option(
    "-n", "--max-results", type=click.IntRange(1, 40), default=10, show_default=True
)
@db_option
def search(query: str, max_results: int, db_path: Path | None) -> None:
    """Search Google Books. Supports isbn:, inauthor: and intitle: prefixes."""
    console = get_console()
    with open_app(db_path) as app:
        results = app.search_client().search(query, max_results=max_results)

    if not results:
        console.print(f"[yellow]No results for '{query}'.[/yellow]")
        return

    console.print(_results_table(results))
    console.print("\n[dim]Add one with `novelnoted add --from-search VOLUME`.[/dim]")


@click.command("scan")
@click.argument("code")
@click.option(
    "--add",
    "target",
    type=click.Choice(["library", "wishlist"]),
    default=None,
    help="Add the scanned book without asking.",
)
@click.option(
    "--status",
    type=status_choice,
    default=ReadingStatus.CURRENTLY_READING.value,
    show_default=True,
    help="Status when adding to the library.",
)
@db_option
def scan(code: str, target: str | None, status: str, db_path: Path | None) -> None:
    """Look up a scanned barcode and optionally add the book."""
    console = get_console()
    with open_app(db_path) as app:
        outcome = lookup_scanned_isbn(code, app.search_client(), app.records)
        if not outcome.ok:
            fail(outcome.error or "Scan failed.")

        hit = outcome.result
        console.print(f"[bold]{hit.title}[/bold] by {hit.author} [dim](ISBN {outcome.isbn})[/dim]")
        if outcome.in_library is not None:
            console.print(
                f"[yellow]Already in your library ({outcome.in_library.status.value}).[/yellow]"
            )
        if outcome.in_wishlist is not None:
            console.print("[yellow]Already on your wishlist.[/yellow]")
        if outcome.in_library is not None or outcome.in_wishlist is not None:
            return

        if target is None:
            target = click.prompt(
                "Add to",
                type=click.Choice(["library", "wishlist", "skip"]),
                default="skip",
            )
        if target == "library":
            reading_status = ReadingStatus(status)
            now = app.records.now()
            values = hit.to_book_fields(reading_status)
            info = extract_series_info(hit.title)
            if info.series:
                values["series"] = info.series
                values["series_number"] = info.series_number
            values.update(initial_dates(reading_status, now))
            book = app.records.create(Collection.BOOKS, values, date_added=now)
            console.print(f"Added to library [dim]({book.id})[/dim].")
        elif target == "wishlist":
            entry = app.records.create(Collection.WISHLIST, hit.to_wishlist_fields())
            console.print(f"Added to wishlist [dim]({entry.id})[/dim].")


@click.command("series")
@click.argument("book_id")
@click.option("-n", "--max-results", type=click.IntRange(1, 40), default=20, show_default=True)
@db_option
def series(book_id: str, max_results: int, db_path: Path | None) -> None:
    """Find other books in the same series as a library book."""
    console = get_console()
    with open_app(db_path) as app:
        book = app.records.get(Collection.BOOKS, book_id)
        if book is None:
            fail(f"Book {book_id} not found.")
        library = app.records.list(Collection.BOOKS)
        entries = app.search_client().search_series_books(
            book.author, book.title, max_results=max_results, library=library
        )

    if not entries:
        console.print(f"[yellow]No series books found for {book.title}.[/yellow]")
        return

    table = Table(title=f"Series candidates for {book.title}")
    table.add_column("#", justify="right", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Year", width=5)
    table.add_column("Owned", width=5)
    table.add_column("Volume", style="dim", no_wrap=True)
    for entry in entries:
        number = f"{entry.series_number:g}" if entry.series_number is not None else ""
        table.add_row(
            number,
            entry.title,
            entry.published_year or "",
            "[green]yes[/green]" if entry.in_library else "",
            entry.id,
        )
    console.print(table)
