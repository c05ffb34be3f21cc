# ABOUTME: Pure derivations over in-memory library and wishlist records.
# ABOUTME: Reading statistics, status/text filtering, progress percentage, and tab counts.

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from novelnoted.records.types import Book, ReadingStatus, WishListBook

ALL = "all"
WISHLIST_TAB = "wishlist"


@dataclass(frozen=True)
class ReadingStats:
    total: int
    read: int
    currently_reading: int
    want_to_read: int
    wishlist_count: int
    total_pages_read: int


def get_stats(books: Sequence[Book], wishlist: Sequence[WishListBook]) -> ReadingStats:
    """Count books by status and sum pages over finished books (missing pages count as 0)."""
    return ReadingStats(
        total=len(books),
        read=sum(1 for b in books if b.status == ReadingStatus.READ),
        currently_reading=sum(1 for b in books if b.status == ReadingStatus.CURRENTLY_READING),
        want_to_read=sum(1 for b in books if b.status == ReadingStatus.WANT_TO_READ),
        wishlist_count=len(wishlist),
        total_pages_read=sum(b.pages or 0 for b in books if b.status == ReadingStatus.READ),
    )


def _matches_text(title: str, author: str, needle: str) -> bool:
    return needle in title.lower() or needle in author.lower()


def filter_books(
    books: Iterable[Book],
    status_filter: ReadingStatus | str = ALL,
    search_text: str = "",
) -> list[Book]:
    """Keep books matching the status filter and a case-insensitive title/author substring.

    The status filter "all" passes every book; empty search text matches everything.
    """
    needle = search_text.strip().lower()
    return [
        book
        for book in books
        if (status_filter == ALL or book.status == status_filter)
        and (not needle or _matches_text(book.title, book.author, needle))
    ]


def filter_wishlist(wishlist: Iterable[WishListBook], search_text: str = "") -> list[WishListBook]:
    """Keep wishlist entries whose title or author contains the search text."""
    needle = search_text.strip().lower()
    return [w for w in wishlist if not needle or _matches_text(w.title, w.author, needle)]


def reading_progress(book: Book) -> float | None:
    """Percent of the book read, clamped to 100. None when the page count is unknown."""
    if not book.pages:
        return None
    return min((book.current_page or 0) / book.pages * 100, 100.0)


def reading_days(book: Book) -> int | None:
    """Whole days between starting and finishing, rounded up."""
    if book.date_started is None or book.date_finished is None:
        return None
    seconds = (book.date_finished - book.date_started).total_seconds()
    return math.ceil(seconds / 86_400)


def tab_counts(books: Sequence[Book], wishlist: Sequence[WishListBook]) -> dict[str, int]:
    """Number of entries behind each library tab."""
    counts = {ALL: len(books)}
    for status in ReadingStatus:
        counts[status.value] = sum(1 for b in books if b.status == status)
    counts[WISHLIST_TAB] = len(wishlist)
    return counts
