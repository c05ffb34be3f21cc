# ABOUTME: The `novelnoted wishlist` command group: add, ls, rm, and move.
# ABOUTME: Move turns a wishlist entry into a library book and removes it from the wishlist.

from pathlib import Path

import click
from rich.table import Table

from novelnoted.cli.app import fail, format_date, get_console, open_app
from novelnoted.cli.options import db_option, isbn_option, status_choice
from novelnoted.core.derive import filter_wishlist
from novelnoted.records.types import Collection, ReadingStatus


@click.group("wishlist")
def wishlist() -> None:
    """Books you want to get."""


@wishlist.command("add")
@click.argument("title", required=False)
@click.option("--author", default=None, help="Author name.")
@isbn_option
@click.option("--pages", type=click.IntRange(min=0), default=None)
@click.option("--genre", default=None)
@click.option("--from-search", "volume_id", default=None, help="Google Books volume id to copy.")
@db_option
def add(
    title: str | None,
    author: str | None,
    isbn: str | None,
    pages: int | None,
    genre: str | None,
    volume_id: str | None,
    db_path: Path | None,
) -> None:
    """Add a book to your wishlist."""
    console = get_console()
    with open_app(db_path) as app:
        app.session.require_user()
        if volume_id:
            hit = app.search_client().get_by_id(volume_id)
            if hit is None:
                fail(f"No Google Books volume {volume_id}.")
            values = hit.to_wishlist_fields()
        else:
            if not title or not author:
                fail("A title and --author are required unless --from-search is given.")
            values = {
                "title": title,
                "author": author,
                "isbn": isbn,
                "pages": pages,
                "genre": genre,
            }

        if values.get("isbn"):
            owned = app.records.find_by_isbn(Collection.BOOKS, values["isbn"])
            if owned is not None:
                fail(f"{owned.title} is already in your library.")
            if app.records.find_by_isbn(Collection.WISHLIST, values["isbn"]) is not None:
                fail(f"{values['title']} is already on your wishlist.")

        entry = app.records.create(Collection.WISHLIST, values)
    console.print(f"Added [bold]{entry.title}[/bold] to your wishlist [dim]({entry.id})[/dim].")


@wishlist.command("ls")
@click.option("--search", "search_text", default="", help="Match against title or author.")
@db_option
def ls(search_text: str, db_path: Path | None) -> None:
    """List your wishlist, newest first."""
    console = get_console()
    with open_app(db_path) as app:
        entries = app.records.list(Collection.WISHLIST)

    shown = filter_wishlist(entries, search_text)
    if not shown:
        if entries:
            console.print("[yellow]No entries match.[/yellow]")
        else:
            console.print("[yellow]Your wishlist is empty.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", width=5)
    table.add_column("Added", no_wrap=True)
    for entry in shown:
        table.add_row(
            entry.id,
            entry.title,
            entry.author,
            entry.published_year or "",
            format_date(entry.date_added),
        )
    console.print(table)
    console.print(f"\n[dim]{len(shown)} of {len(entries)} entries[/dim]")


@wishlist.command("rm")
@click.argument("entry_id")
@db_option
def rm(entry_id: str, db_path: Path | None) -> None:
    """Remove an entry from your wishlist."""
    with open_app(db_path) as app:
        deleted = app.records.delete(Collection.WISHLIST, entry_id)
    if not deleted:
        fail(f"Could not delete wishlist entry {entry_id}.")
    get_console().print(f"Removed wishlist entry {entry_id}.")


@wishlist.command("move")
@click.argument("entry_id")
@click.option(
    "--status",
    type=status_choice,
    default=ReadingStatus.CURRENTLY_READING.value,
    show_default=True,
    help="Status of the new library book.",
)
@db_option
def move(entry_id: str, status: str, db_path: Path | None) -> None:
    """Move a wishlist entry into your library."""
    with open_app(db_path) as app:
        book = app.records.move_to_library(entry_id, ReadingStatus(status))
    if book is None:
        fail(f"Wishlist entry {entry_id} not found.")
    get_console().print(
        f"Moved [bold]{book.title}[/bold] to your library as {book.status.value} "
        f"[dim]({book.id})[/dim]."
    )
