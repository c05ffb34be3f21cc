# ABOUTME: Google Books metadata provider implementation.
# ABOUTME: Free-text and ISBN search, single-volume lookup, and heuristic series discovery.

import logging
from collections.abc import Iterable

from novelnoted.metadata.http import HttpClient, MetadataFetchError
from novelnoted.metadata.parser import parse_search_response, parse_volume, to_series_book
from novelnoted.metadata.series import (
    extract_series_info,
    shares_significant_word,
    titles_match,
)
from novelnoted.records.types import Book, BookSearchResult, SeriesBook

logger = logging.getLogger(__name__)

GOOGLE_BOOKS_URL = "https://www.googleapis.com/books/v1/volumes"
# The API rejects maxResults above 40.
_MAX_RESULTS_LIMIT = 40


def _series_sort_key(book: SeriesBook) -> tuple[int, float, str]:
    if book.series_number is None:
        return (1, 0.0, book.title.lower())
    return (0, float(book.series_number), book.title.lower())


class GoogleBooksClient:
    """Book metadata provider backed by the Google Books volumes API.

    Uses a dependency-injected HttpClient for testability. Failures are
    logged and degrade to empty results.
    """

    def __init__(
        self,
        http_client: HttpClient,
        api_key: str | None = None,
        base_url: str = GOOGLE_BOOKS_URL,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "googlebooks"

    def search(self, query: str, max_results: int = 10) -> list[BookSearchResult]:
        """Search volumes by free text (supports `isbn:`, `inauthor:` and friends).

        A blank query returns [] without a request.
        """
        query = query.strip()
        if not query:
            return []

        params = {
            "q": query,
            "maxResults": str(max(1, min(max_results, _MAX_RESULTS_LIMIT))),
            "orderBy": "relevance",
        }
        if self._api_key:
            params["key"] = self._api_key

        try:
            data = self._http.get(self._base_url, params=params)
        except MetadataFetchError as exc:
            logger.warning("Google Books search failed for %r: %s", query, exc)
            return []
        return parse_search_response(data)

    def get_by_id(self, volume_id: str) -> BookSearchResult | None:
        """Fetch a single volume by its Google Books id. Not found or error -> None."""
        params = {"key": self._api_key} if self._api_key else None
        try:
            data = self._http.get(f"{self._base_url}/{volume_id}", params=params)
        except MetadataFetchError as exc:
            if exc.status_code == 404:
                logger.info("Google Books volume %s not found", volume_id)
            else:
                logger.warning("Google Books lookup failed for %s: %s", volume_id, exc)
            return None
        if not data.get("volumeInfo"):
            return None
        return parse_volume(data)

    def search_by_isbn(self, isbn: str) -> BookSearchResult | None:
        """Look up one volume by ISBN using the `isbn:` query syntax."""
        results = self.search(f"isbn:{isbn}", max_results=1)
        return results[0] if results else None

    def search_series_books(
        self,
        author: str,
        title: str,
        max_results: int = 20,
        library: Iterable[Book] = (),
    ) -> list[SeriesBook]:
        """Find other books in the same series as *title*.

        With series info in the title, queries the author plus the series
        name. Without it, queries the author alone and keeps candidates that
        share a significant word with the title. Books whose titles match a
        library entry are flagged in_library. Numbered entries come first in
        ascending order, unnumbered ones last; ties sort by title.
        """
        info = extract_series_info(title)
        if info.series:
            query = f'inauthor:"{author}" "{info.series}"'
            candidates = self.search(query, max_results=max_results)
        else:
            candidates = [
                result
                for result in self.search(f'inauthor:"{author}"', max_results=max_results)
                if shares_significant_word(result.title, info.clean_title)
            ]

        library_titles = [book.title for book in library]
        seen: set[str] = set()
        series_books: list[SeriesBook] = []
        for result in candidates:
            if result.id in seen:
                continue
            seen.add(result.id)
            series_book = to_series_book(result)
            series_book.in_library = any(
                titles_match(series_book.title, owned) for owned in library_titles
            )
            series_books.append(series_book)

        series_books.sort(key=_series_sort_key)
        return series_books
