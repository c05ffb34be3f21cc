# ABOUTME: Parsing functions for Google Books API JSON responses.
# ABOUTME: Converts volume items into BookSearchResult and SeriesBook instances.

import re
from typing import Any

from novelnoted.metadata.series import extract_series_info
from novelnoted.records.types import BookSearchResult, SeriesBook

_YEAR_RE = re.compile(r"^(\d{4})")


def _https(url: str | None) -> str | None:
    if not url:
        return None
    return url.replace("http:", "https:", 1) if url.startswith("http:") else url


def extract_isbn(identifiers: list[dict[str, Any]] | None) -> str | None:
    """Pick the ISBN from industryIdentifiers, preferring ISBN-13 over ISBN-10."""
    by_type = {
        ident.get("type"): ident.get("identifier")
        for ident in identifiers or []
        if ident.get("identifier")
    }
    return by_type.get("ISBN_13") or by_type.get("ISBN_10")


def extract_year(published_date: str | None) -> str | None:
    """Return the four-digit year from publishedDate ("2006", "2006-07", "2006-07-25")."""
    if not published_date:
        return None
    m = _YEAR_RE.match(published_date.strip())
    return m.group(1) if m else None


def parse_volume(item: dict[str, Any]) -> BookSearchResult:
    """Parse one Google Books volume item into a BookSearchResult.

    The cover prefers the larger `thumbnail` over `smallThumbnail`, and
    both are upgraded to https.
    """
    info = item.get("volumeInfo", {})
    images = info.get("imageLinks") or {}
    authors = info.get("authors") or []
    categories = info.get("categories") or []

    return BookSearchResult(
        id=item.get("id", ""),
        title=info.get("title") or "Unknown Title",
        author=", ".join(authors) if authors else "Unknown Author",
        published_year=extract_year(info.get("publishedDate")),
        description=info.get("description"),
        isbn=extract_isbn(info.get("industryIdentifiers")),
        pages=info.get("pageCount"),
        genre=", ".join(categories) if categories else None,
        cover_url=_https(images.get("thumbnail")) or _https(images.get("smallThumbnail")),
        thumbnail=_https(images.get("smallThumbnail")),
        publisher=info.get("publisher"),
        rating=info.get("averageRating"),
    )


def parse_search_response(data: dict[str, Any]) -> list[BookSearchResult]:
    """Parse a volumes search response. A response without items yields []."""
    return [parse_volume(item) for item in data.get("items") or []]


def to_series_book(result: BookSearchResult) -> SeriesBook:
    """Build a SeriesBook from a search hit, reading its position from the title."""
    info = extract_series_info(result.title)
    return SeriesBook(
        id=result.id,
        title=result.title,
        author=result.author,
        cover_url=result.cover_url,
        published_year=result.published_year,
        description=result.description,
        series_number=info.series_number,
    )
