# ABOUTME: Record package for the reading tracker's data model.
# ABOUTME: Exports record types, partial-update patches, status transitions, and journal entries.

from novelnoted.records.journal import append_journal_entry
from novelnoted.records.patch import UNSET, BookPatch, WishListPatch
from novelnoted.records.status import status_patch
from novelnoted.records.types import (
    Book,
    BookSearchResult,
    Collection,
    OwnershipType,
    ReadingStatus,
    SeriesBook,
    WishListBook,
)

__all__ = [
    "UNSET",
    "Book",
    "BookPatch",
    "BookSearchResult",
    "Collection",
    "OwnershipType",
    "ReadingStatus",
    "SeriesBook",
    "WishListBook",
    "WishListPatch",
    "append_journal_entry",
    "status_patch",
]
