# ABOUTME: Converts between record dataclasses and store documents.
# ABOUTME: Renames fields to the document key convention and maps datetimes to Timestamps.

from dataclasses import fields
from datetime import UTC, datetime
from typing import Any

from novelnoted.records.types import (
    Book,
    Collection,
    OwnershipType,
    ReadingStatus,
    WishListBook,
)
from novelnoted.store.document import Document, Timestamp

# Record attribute -> document key. Anything not listed keeps its name.
_FIELD_TO_KEY: dict[str, str] = {
    "cover_url": "coverUrl",
    "date_added": "dateAdded",
    "date_started": "dateStarted",
    "date_finished": "dateFinished",
    "current_page": "currentPage",
    "user_id": "userId",
    "series_number": "seriesNumber",
    "published_year": "publishedYear",
    "ownership": "ownershipType",
}
_KEY_TO_FIELD = {key: name for name, key in _FIELD_TO_KEY.items()}

_DATE_FIELDS = frozenset({"date_added", "date_started", "date_finished"})

DATE_ADDED_KEY = _FIELD_TO_KEY["date_added"]
USER_ID_KEY = _FIELD_TO_KEY["user_id"]

_RECORD_TYPES: dict[Collection, type] = {
    Collection.BOOKS: Book,
    Collection.WISHLIST: WishListBook,
}


def record_type(collection: Collection) -> type:
    """Return the record dataclass stored in *collection*."""
    return _RECORD_TYPES[Collection(collection)]


def field_to_key(name: str) -> str:
    return _FIELD_TO_KEY.get(name, name)


def _to_store_value(name: str, value: Any) -> Any:
    if value is None:
        return None
    if name in _DATE_FIELDS and isinstance(value, datetime):
        return Timestamp.from_datetime(value)
    if isinstance(value, ReadingStatus | OwnershipType):
        return value.value
    return value


def _stored_date(value: Any) -> datetime | None:
    """Read a date field. ISO strings from other clients are accepted; junk is missing."""
    if isinstance(value, Timestamp):
        return value.to_datetime()
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return None


def _from_store_value(name: str, value: Any) -> Any:
    if name in _DATE_FIELDS:
        return _stored_date(value)
    return value


def _enum_or_default(enum_cls: type, raw: Any, default: Any) -> Any:
    try:
        return enum_cls(raw)
    except ValueError:
        return default


def fields_to_data(values: dict[str, Any]) -> dict[str, Any]:
    """Convert record attributes (a full record or a patch) to document data.

    None values are kept so that a patch can clear a field.
    """
    return {field_to_key(name): _to_store_value(name, value) for name, value in values.items()}


def record_to_data(record: Book | WishListBook) -> dict[str, Any]:
    """Convert a record to document data. The id is not part of the data."""
    values = {f.name: getattr(record, f.name) for f in fields(record) if f.name != "id"}
    return fields_to_data(values)


def document_to_record(collection: Collection, doc: Document) -> Book | WishListBook:
    """Convert a stored document back to its record type.

    Unknown keys are ignored. Missing or unrecognised enum values fall back
    to the defaults used at creation time, and unreadable dates count as
    missing.
    """
    cls = record_type(collection)
    known = {f.name for f in fields(cls)}
    values: dict[str, Any] = {"id": doc.id}
    for key, raw in doc.data.items():
        name = _KEY_TO_FIELD.get(key, key)
        if name in known and name != "id":
            values[name] = _from_store_value(name, raw)

    if cls is Book:
        values["status"] = _enum_or_default(
            ReadingStatus, values.get("status"), ReadingStatus.CURRENTLY_READING
        )
        values["ownership"] = _enum_or_default(
            OwnershipType, values.get("ownership"), OwnershipType.PHYSICAL
        )
    values.setdefault("title", "Unknown Title")
    values.setdefault("author", "Unknown Author")
    if values.get("date_added") is None:
        values["date_added"] = datetime.now(UTC)
    return cls(**values)
