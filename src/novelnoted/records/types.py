# ABOUTME: Core record data structures for the reading tracker.
# ABOUTME: Book, WishListBook, SeriesBook and BookSearchResult flow between store, metadata and CLI.

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class ReadingStatus(StrEnum):
    """Where a library book sits in the reading lifecycle.

    WANT_TO_READ is a legacy value kept so older documents still load.
    """

    WANT_TO_READ = "want-to-read"
    CURRENTLY_READING = "currently-reading"
    READ = "read"


class OwnershipType(StrEnum):
    PHYSICAL = "physical"
    DIGITAL = "digital"


class Collection(StrEnum):
    """Logical collections in the document store."""

    BOOKS = "books"
    WISHLIST = "wishlist"


@dataclass
class Book:
    """A book in the user's library.

    date_added is stamped once at creation and never patched. date_started
    and date_finished are first-recorded markers set by status transitions.
    """

    id: str
    title: str
    author: str
    status: ReadingStatus
    date_added: datetime
    ownership: OwnershipType = OwnershipType.PHYSICAL
    isbn: str | None = None
    cover_url: str | None = None
    pages: int | None = None
    genre: str | None = None
    date_started: datetime | None = None
    date_finished: datetime | None = None
    rating: int | None = None
    current_page: int | None = None
    notes: str | None = None
    thoughts: str | None = None
    user_id: str | None = None
    series: str | None = None
    series_number: float | None = None


def validate_book(book: Book) -> None:
    """Check the cross-field invariants of a Book before it is written.

    Records read back from the store are not re-validated, since other
    clients may have written them.

    Raises:
        ValueError: If rating, progress, or reading dates are inconsistent.
    """
    if book.rating is not None and not 1 <= book.rating <= 5:
        msg = f"rating must be between 1 and 5, got {book.rating}"
        raise ValueError(msg)
    if book.pages is not None and book.pages < 0:
        msg = f"pages must not be negative, got {book.pages}"
        raise ValueError(msg)
    if book.current_page is not None:
        if book.current_page < 0:
            msg = f"current_page must not be negative, got {book.current_page}"
            raise ValueError(msg)
        if book.pages is not None and book.current_page > book.pages:
            msg = f"current_page {book.current_page} exceeds pages {book.pages}"
            raise ValueError(msg)
    if (
        book.date_started is not None
        and book.date_finished is not None
        and book.date_finished < book.date_started
    ):
        raise ValueError("date_finished must not be earlier than date_started")


@dataclass
class WishListBook:
    """A book the user wants to acquire. No status, rating, or progress."""

    id: str
    title: str
    author: str
    date_added: datetime
    isbn: str | None = None
    cover_url: str | None = None
    pages: int | None = None
    genre: str | None = None
    publisher: str | None = None
    published_year: str | None = None
    description: str | None = None
    user_id: str | None = None


@dataclass
class SeriesBook:
    """A candidate entry in a book series. Derived per lookup, never stored."""

    id: str
    title: str
    author: str
    cover_url: str | None = None
    published_year: str | None = None
    description: str | None = None
    series_number: float | None = None
    in_library: bool = False


@dataclass
class BookSearchResult:
    """A normalized hit from the book metadata search API."""

    id: str
    title: str
    author: str
    published_year: str | None = None
    description: str | None = None
    isbn: str | None = None
    pages: int | None = None
    genre: str | None = None
    cover_url: str | None = None
    thumbnail: str | None = None
    publisher: str | None = None
    rating: float | None = None

    def to_book_fields(self, status: ReadingStatus) -> dict[str, object]:
        """Fields for creating a library Book from this search hit."""
        return {
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "cover_url": self.cover_url,
            "pages": self.pages,
            "genre": self.genre,
            "status": status,
        }

    def to_wishlist_fields(self) -> dict[str, object]:
        """Fields for creating a WishListBook from this search hit."""
        return {
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "cover_url": self.cover_url,
            "pages": self.pages,
            "genre": self.genre,
            "publisher": self.publisher,
            "published_year": self.published_year,
            "description": self.description,
        }
