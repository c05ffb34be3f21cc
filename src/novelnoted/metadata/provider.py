# ABOUTME: BookSearchProvider protocol defining the contract for book metadata sources.
# ABOUTME: Google Books implements it; the scan flow and CLI depend only on this.

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from novelnoted.records.types import Book, BookSearchResult, SeriesBook


@runtime_checkable
class BookSearchProvider(Protocol):
    """Protocol for book metadata lookup services.

    All methods degrade to an empty list or None on failure instead of raising.
    """

    @property
    def name(self) -> str: ...

    def search(self, query: str, max_results: int = 10) -> list[BookSearchResult]: ...

    def get_by_id(self, volume_id: str) -> BookSearchResult | None: ...

    def search_by_isbn(self, isbn: str) -> BookSearchResult | None: ...

    def search_series_books(
        self,
        author: str,
        title: str,
        max_results: int = 20,
        library: Iterable[Book] = (),
    ) -> list[SeriesBook]: ...
