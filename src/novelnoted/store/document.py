# ABOUTME: DocumentStore protocol defining the contract for the per-user document database.
# ABOUTME: Also defines Document, the store-native Timestamp type, and store errors.

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable

_NANOS_PER_SECOND = 1_000_000_000


class StoreError(Exception):
    """Raised when the document store cannot complete an operation."""


class DocumentNotFoundError(StoreError):
    """Raised when a document id does not exist in its collection."""


@dataclass(frozen=True, order=True)
class Timestamp:
    """The store's native temporal type: seconds plus nanoseconds since the epoch, UTC."""

    seconds: int
    nanoseconds: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.nanoseconds < _NANOS_PER_SECOND:
            msg = f"nanoseconds out of range: {self.nanoseconds}"
            raise ValueError(msg)

    @classmethod
    def from_datetime(cls, value: datetime) -> "Timestamp":
        """Convert a datetime to a Timestamp. Naive datetimes are taken as UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        delta = value - datetime(1970, 1, 1, tzinfo=UTC)
        seconds = delta.days * 86_400 + delta.seconds
        return cls(seconds=seconds, nanoseconds=delta.microseconds * 1_000)

    @classmethod
    def now(cls) -> "Timestamp":
        return cls.from_datetime(datetime.now(UTC))

    def to_datetime(self) -> datetime:
        """Convert back to an aware UTC datetime (microsecond precision)."""
        return datetime.fromtimestamp(self.seconds, tz=UTC).replace(
            microsecond=self.nanoseconds // 1_000
        )


@dataclass
class Document:
    """A stored document: store-assigned id plus its field data."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)


SnapshotCallback = Callable[[list[Document]], None]
ErrorCallback = Callable[[StoreError], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class DocumentStore(Protocol):
    """Protocol for a document database partitioned into named collections.

    Queries filter on field equality and may order by one field. watch()
    delivers the full ordered result set on registration and again after
    every change to the collection, until the returned callable is invoked.
    """

    def add(self, collection: str, data: dict[str, Any]) -> str: ...

    def get(self, collection: str, doc_id: str) -> Document | None: ...

    def update(self, collection: str, doc_id: str, changes: dict[str, Any]) -> None: ...

    def delete(self, collection: str, doc_id: str) -> None: ...

    def query(
        self,
        collection: str,
        where: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Document]: ...

    def watch(
        self,
        collection: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
        where: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> Unsubscribe: ...
