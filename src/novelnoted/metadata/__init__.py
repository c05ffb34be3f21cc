# ABOUTME: Metadata package for book search, ISBN handling, and series heuristics.
# ABOUTME: Exports the Google Books client, provider protocol, and series parser.

from novelnoted.metadata.googlebooks import GoogleBooksClient
from novelnoted.metadata.http import MetadataFetchError, NovelNotedHttpClient
from novelnoted.metadata.provider import BookSearchProvider
from novelnoted.metadata.series import SeriesInfo, extract_series_info

__all__ = [
    "BookSearchProvider",
    "GoogleBooksClient",
    "MetadataFetchError",
    "NovelNotedHttpClient",
    "SeriesInfo",
    "extract_series_info",
]
