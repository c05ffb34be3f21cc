# ABOUTME: Reading-status transitions for library books.
# ABOUTME: Builds the patch that moves a book to a new status and stamps start/finish dates.

from datetime import UTC, datetime

from novelnoted.records.patch import BookPatch
from novelnoted.records.types import Book, ReadingStatus


def status_patch(book: Book, new_status: ReadingStatus, now: datetime | None = None) -> BookPatch:
    """Build the partial update for changing a book's status.

    Moving to currently-reading records date_started if it is missing.
    Moving to read records date_finished if it is missing and backfills
    date_started. No transition ever clears either date.
    """
    now = now or datetime.now(UTC)
    patch = BookPatch(status=new_status)

    if new_status in (ReadingStatus.CURRENTLY_READING, ReadingStatus.READ):
        if book.date_started is None:
            patch.date_started = now
    if new_status == ReadingStatus.READ and book.date_finished is None:
        patch.date_finished = now

    return patch


def initial_dates(status: ReadingStatus, now: datetime) -> dict[str, datetime]:
    """Reading dates for a book that enters the library with *status*."""
    if status == ReadingStatus.READ:
        return {"date_started": now, "date_finished": now}
    if status == ReadingStatus.CURRENTLY_READING:
        return {"date_started": now}
    return {}
