# ABOUTME: Reading-journal entries appended to a book's thoughts.
# ABOUTME: Each entry is stamped "[Mon D, YYYY]" and separated from earlier ones by a blank line.

from datetime import datetime

from novelnoted.records.patch import BookPatch
from novelnoted.records.types import Book

ENTRY_SEPARATOR = "\n\n"


def format_journal_entry(text: str, when: datetime) -> str:
    """Stamp *text* with its date, e.g. "[Mar 4, 2024] Loved the ending"."""
    return f"[{when:%b} {when.day}, {when.year}] {text.strip()}"


def append_journal_entry(thoughts: str | None, text: str, when: datetime) -> str:
    """Return *thoughts* with a new dated entry at the end.

    Raises:
        ValueError: If *text* is blank.
    """
    if not text.strip():
        msg = "Journal entry must not be blank"
        raise ValueError(msg)
    entry = format_journal_entry(text, when)
    return f"{thoughts}{ENTRY_SEPARATOR}{entry}" if thoughts else entry


def journal_patch(book: Book, text: str, when: datetime) -> BookPatch:
    return BookPatch(thoughts=append_journal_entry(book.thoughts, text, when))
