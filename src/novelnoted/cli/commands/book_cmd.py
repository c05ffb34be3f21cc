# ABOUTME: Library book commands: add, info, status, rate, progress, note, journal, and rm.
# ABOUTME: Each command is one RecordStore call against the signed-in user's library.

from pathlib import Path

import click
from rich.table import Table

from novelnoted.cli.app import fail, format_date, get_console, open_app
from novelnoted.cli.options import db_option, isbn_option, status_choice
from novelnoted.core.derive import reading_days, reading_progress
from novelnoted.metadata.series import extract_series_info
from novelnoted.records.patch import BookPatch
from novelnoted.records.status import initial_dates
from novelnoted.records.types import Book, Collection, OwnershipType, ReadingStatus


def describe_series(book: Book) -> str:
    if not book.series:
        return ""
    if book.series_number is None:
        return book.series
    return f"{book.series} #{book.series_number:g}"


@click.command("add")
@click.argument("title", required=False)
@click.option("--author", default=None, help="Author name.")
@click.option(
    "--status",
    type=status_choice,
    default=ReadingStatus.CURRENTLY_READING.value,
    show_default=True,
    help="Initial reading status.",
)
@click.option(
    "--ownership",
    type=click.Choice([o.value for o in OwnershipType]),
    default=OwnershipType.PHYSICAL.value,
    show_default=True,
)
@isbn_option
@click.option("--pages", type=click.IntRange(min=0), default=None)
@click.option("--genre", default=None)
@click.option("--cover-url", default=None)
@click.option("--from-search", "volume_id", default=None, help="Google Books volume id to copy.")
@db_option
def add(
    title: str | None,
    author: str | None,
    status: str,
    ownership: str,
    isbn: str | None,
    pages: int | None,
    genre: str | None,
    cover_url: str | None,
    volume_id: str | None,
    db_path: Path | None,
) -> None:
    """Add a book to your library, typed in or copied from a search hit."""
    console = get_console()
    reading_status = ReadingStatus(status)

    with open_app(db_path) as app:
        app.session.require_user()
        if volume_id:
            hit = app.search_client().get_by_id(volume_id)
            if hit is None:
                fail(f"No Google Books volume {volume_id}.")
            values = hit.to_book_fields(reading_status)
        else:
            if not title or not author:
                fail("A title and --author are required unless --from-search is given.")
            values = {
                "title": title,
                "author": author,
                "status": reading_status,
                "isbn": isbn,
                "pages": pages,
                "genre": genre,
                "cover_url": cover_url,
            }

        info = extract_series_info(values["title"])
        if info.series:
            values["series"] = info.series
            values["series_number"] = info.series_number

        if values.get("isbn"):
            existing = app.records.find_by_isbn(Collection.BOOKS, values["isbn"])
            if existing is not None:
                fail(f"{existing.title} is already in your library ({existing.status}).")

        now = app.records.now()
        values["ownership"] = OwnershipType(ownership)
        values.update(initial_dates(reading_status, now))
        try:
            book = app.records.create(Collection.BOOKS, values, date_added=now)
        except ValueError as exc:
            fail(str(exc))

    console.print(f"Added [bold]{book.title}[/bold] by {book.author} [dim]({book.id})[/dim].")


@click.command("info")
@click.argument("book_id")
@db_option
def info(book_id: str, db_path: Path | None) -> None:
    """Show everything recorded about a library book."""
    console = get_console()
    with open_app(db_path) as app:
        book = app.records.get(Collection.BOOKS, book_id)
    if book is None:
        fail(f"Book {book_id} not found.")

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("ID", book.id)
    table.add_row("Title", book.title)
    table.add_row("Author", book.author)
    table.add_row("Status", book.status.value)
    table.add_row("Ownership", book.ownership.value)
    if book.series:
        table.add_row("Series", describe_series(book))
    if book.isbn:
        table.add_row("ISBN", book.isbn)
    if book.pages:
        table.add_row("Pages", str(book.pages))
    progress = reading_progress(book)
    if book.status == ReadingStatus.CURRENTLY_READING and progress is not None:
        page = book.current_page or 0
        table.add_row("Progress", f"page {page} of {book.pages} ({progress:.0f}%)")
    if book.genre:
        table.add_row("Genre", book.genre)
    if book.rating:
        table.add_row("Rating", "★" * book.rating + "☆" * (5 - book.rating))
    table.add_row("Added", format_date(book.date_added))
    if book.date_started:
        table.add_row("Started", format_date(book.date_started))
    if book.date_finished:
        table.add_row("Finished", format_date(book.date_finished))
    days = reading_days(book)
    if days is not None:
        table.add_row("Reading time", f"{days} days")
    if book.notes:
        table.add_row("Notes", book.notes)
    if book.thoughts:
        table.add_row("Thoughts", book.thoughts)

    console.print(table)


@click.command("status")
@click.argument("book_id")
@click.argument("new_status", type=status_choice)
@db_option
def status(book_id: str, new_status: str, db_path: Path | None) -> None:
    """Move a book to currently-reading or read."""
    with open_app(db_path) as app:
        book = app.records.change_status(book_id, ReadingStatus(new_status))
    if book is None:
        fail(f"Could not update book {book_id}.")
    get_console().print(f"[bold]{book.title}[/bold] is now [cyan]{book.status.value}[/cyan].")


@click.command("rate")
@click.argument("book_id")
@click.argument("rating", type=click.IntRange(1, 5))
@db_option
def rate(book_id: str, rating: int, db_path: Path | None) -> None:
    """Give a book 1 to 5 stars."""
    console = get_console()
    with open_app(db_path) as app:
        book = app.records.set_rating(book_id, rating)
    if book is None:
        fail(f"Could not update book {book_id}.")
    if book.status != ReadingStatus.READ:
        console.print("[yellow]Ratings only show once the book is marked read.[/yellow]")
    console.print(f"Rated [bold]{book.title}[/bold] {'★' * rating}.")


@click.command("progress")
@click.argument("book_id")
@click.argument("current_page", type=click.IntRange(min=0))
@db_option
def progress(book_id: str, current_page: int, db_path: Path | None) -> None:
    """Record the page you are on."""
    with open_app(db_path) as app:
        try:
            book = app.records.set_progress(book_id, current_page)
        except ValueError as exc:
            fail(str(exc))
    if book is None:
        fail(f"Could not update book {book_id}.")

    percent = reading_progress(book)
    suffix = f" ({percent:.0f}%)" if percent is not None else ""
    get_console().print(f"[bold]{book.title}[/bold]: page {current_page}{suffix}.")


@click.command("note")
@click.argument("book_id")
@click.option("--notes", default=None, help="Free-text notes (empty string clears).")
@click.option("--thoughts", default=None, help="Your thoughts on the book (empty string clears).")
@db_option
def note(book_id: str, notes: str | None, thoughts: str | None, db_path: Path | None) -> None:
    """Set or clear notes and thoughts on a book."""
    patch = BookPatch()
    if notes is not None:
        patch.notes = notes or None
    if thoughts is not None:
        patch.thoughts = thoughts or None
    if patch.is_empty():
        fail("Nothing to change: pass --notes and/or --thoughts.")

    with open_app(db_path) as app:
        book = app.records.update(Collection.BOOKS, book_id, patch)
    if book is None:
        fail(f"Could not update book {book_id}.")
    get_console().print(f"Saved notes for [bold]{book.title}[/bold].")


@click.command("journal")
@click.argument("book_id")
@click.argument("entry", nargs=-1, required=True)
@db_option
def journal(book_id: str, entry: tuple[str, ...], db_path: Path | None) -> None:
    """Add a dated reading-journal entry to a book's thoughts."""
    text = " ".join(entry)
    if not text.strip():
        fail("Journal entry must not be blank.")

    with open_app(db_path) as app:
        book = app.records.add_journal_entry(book_id, text)
    if book is None:
        fail(f"Could not update book {book_id}.")
    get_console().print(f"Added a journal entry to [bold]{book.title}[/bold].")


@click.command("rm")
@click.argument("book_id")
@db_option
def rm(book_id: str, db_path: Path | None) -> None:
    """Delete a book from your library."""
    with open_app(db_path) as app:
        deleted = app.records.delete(Collection.BOOKS, book_id)
    if not deleted:
        fail(f"Could not delete book {book_id}.")
    get_console().print(f"Deleted book {book_id}.")
