# ABOUTME: Barcode-scan lookup flow: raw decoder output to a metadata hit plus duplicate checks.
# ABOUTME: Produces user-facing messages for invalid codes and unknown ISBNs.

import logging
from dataclasses import dataclass

from novelnoted.metadata.isbn import InvalidIsbnError, clean_scanned_isbn
from novelnoted.metadata.provider import BookSearchProvider
from novelnoted.records.types import Book, BookSearchResult, Collection, WishListBook
from novelnoted.store.adapter import RecordStore

logger = logging.getLogger(__name__)

INVALID_BARCODE_MESSAGE = "Invalid barcode. Please try scanning again."
NOT_FOUND_MESSAGE = "Book not found. Try scanning again or search manually."


@dataclass
class ScanResult:
    """Outcome of looking up a scanned barcode.

    Exactly one of `result` and `error` is set. When a result is found,
    `in_library` / `in_wishlist` hold any existing entries with that ISBN.
    """

    isbn: str | None = None
    result: BookSearchResult | None = None
    in_library: Book | None = None
    in_wishlist: WishListBook | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def lookup_scanned_isbn(
    raw: str,
    provider: BookSearchProvider,
    records: RecordStore,
) -> ScanResult:
    """Turn a decoded barcode into a search hit and duplicate-check it.

    Invalid codes and unknown ISBNs come back as a ScanResult with an
    `error` message rather than an exception, so the caller can prompt for
    a re-scan. NotAuthenticatedError still propagates from the store.
    """
    try:
        isbn = clean_scanned_isbn(raw)
    except InvalidIsbnError:
        logger.info("Rejected scanned code %r", raw)
        return ScanResult(error=INVALID_BARCODE_MESSAGE)

    hit = provider.search_by_isbn(isbn)
    if hit is None:
        return ScanResult(isbn=isbn, error=NOT_FOUND_MESSAGE)

    lookup_isbn = hit.isbn or isbn
    return ScanResult(
        isbn=isbn,
        result=hit,
        in_library=records.find_by_isbn(Collection.BOOKS, lookup_isbn),
        in_wishlist=records.find_by_isbn(Collection.WISHLIST, lookup_isbn),
    )
