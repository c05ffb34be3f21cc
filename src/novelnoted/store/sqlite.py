# ABOUTME: SQLite-backed DocumentStore with JSON documents and live snapshot watchers.
# ABOUTME: Watchers are re-run after local writes and when other connections commit.

import json
import logging
import re
import secrets
import sqlite3
from dataclasses import dataclass
from typing import Any

from novelnoted.store.document import (
    Document,
    DocumentNotFoundError,
    ErrorCallback,
    SnapshotCallback,
    StoreError,
    Timestamp,
    Unsubscribe,
)

logger = logging.getLogger(__name__)

_TIMESTAMP_KEY = "__timestamp__"
_FIELD_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _encode_value(value: Any) -> Any:
    if isinstance(value, Timestamp):
        return {_TIMESTAMP_KEY: [value.seconds, value.nanoseconds]}
    if isinstance(value, dict):
        return {k: _encode_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_encode_value(v) for v in value]
    return value


def _decode_hook(obj: dict[str, Any]) -> Any:
    if set(obj) == {_TIMESTAMP_KEY}:
        seconds, nanoseconds = obj[_TIMESTAMP_KEY]
        return Timestamp(seconds=seconds, nanoseconds=nanoseconds)
    return obj


def dumps(data: Any) -> str:
    """Serialize document data to JSON, encoding Timestamps as tagged objects."""
    return json.dumps(_encode_value(data))


def loads(text: str) -> Any:
    """Deserialize document JSON, restoring tagged Timestamps."""
    return json.loads(text, object_hook=_decode_hook)


def _check_field(name: str) -> str:
    if not _FIELD_NAME_RE.match(name):
        msg = f"Invalid document field name: {name!r}"
        raise ValueError(msg)
    return name


def _order_key(value: Any) -> tuple[int, Any]:
    """Sort key that ranks values by type first, so mixed types never compare."""
    if isinstance(value, bool):
        return (0, value)
    if isinstance(value, int | float):
        return (1, value)
    if isinstance(value, Timestamp):
        return (2, value)
    if isinstance(value, str):
        return (3, value)
    return (4, dumps(value))


def new_document_id() -> str:
    """Generate a random 20-character document id."""
    return secrets.token_urlsafe(15)


@dataclass
class _Watcher:
    collection: str
    where: dict[str, Any]
    order_by: str | None
    descending: bool
    on_snapshot: SnapshotCallback
    on_error: ErrorCallback
    active: bool = True


class SqliteDocumentStore:
    """DocumentStore implementation over the `documents` table.

    Each write commits immediately and then re-delivers snapshots to the
    watchers on that collection. Call refresh() to pick up commits made
    through other connections to the same database file.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._watchers: list[_Watcher] = []
        self._data_version = self._read_data_version()

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def add(self, collection: str, data: dict[str, Any]) -> str:
        """Insert a new document and return its store-assigned id."""
        doc_id = new_document_id()
        try:
            self._conn.execute(
                "INSERT INTO documents (collection, id, data) VALUES (?, ?, ?)",
                (collection, doc_id, dumps(data)),
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to add document to {collection}: {exc}") from exc

        self._notify(collection)
        return doc_id

    def get(self, collection: str, doc_id: str) -> Document | None:
        """Retrieve a document by id, or None if it does not exist."""
        try:
            cursor = self._conn.execute(
                "SELECT id, data FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            )
            row = cursor.fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to read {collection}/{doc_id}: {exc}") from exc
        return Document(id=row["id"], data=loads(row["data"])) if row else None

    def update(self, collection: str, doc_id: str, changes: dict[str, Any]) -> None:
        """Set the given top-level fields on a document, leaving the rest alone.

        Each field is written with json_set in a single statement, so two
        writers touching disjoint fields never overwrite each other.

        Raises:
            DocumentNotFoundError: If the document does not exist.
            StoreError: On any database failure.
        """
        if not changes:
            if self.get(collection, doc_id) is None:
                raise DocumentNotFoundError(f"{collection}/{doc_id} not found")
            return

        assignments = ", ".join(f"'$.{_check_field(k)}', json(?)" for k in changes)
        values = [dumps(v) for v in changes.values()]
        try:
            cursor = self._conn.execute(
                f"UPDATE documents SET data = json_set(data, {assignments}), "
                "update_time = strftime('%Y-%m-%dT%H:%M:%f', 'now') "
                "WHERE collection = ? AND id = ?",
                [*values, collection, doc_id],
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to update {collection}/{doc_id}: {exc}") from exc

        if cursor.rowcount == 0:
            raise DocumentNotFoundError(f"{collection}/{doc_id} not found")
        self._notify(collection)

    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
            StoreError: On any database failure.
        """
        try:
            cursor = self._conn.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to delete {collection}/{doc_id}: {exc}") from exc

        if cursor.rowcount == 0:
            raise DocumentNotFoundError(f"{collection}/{doc_id} not found")
        self._notify(collection)

    def query(
        self,
        collection: str,
        where: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Document]:
        """Return documents matching all equality filters, optionally ordered."""
        sql = "SELECT id, data FROM documents WHERE collection = ?"
        params: list[Any] = [collection]
        for name, value in (where or {}).items():
            sql += f" AND json_extract(data, '$.{_check_field(name)}') = ?"
            params.append(value)

        try:
            rows = self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to query {collection}: {exc}") from exc

        docs = [Document(id=row["id"], data=loads(row["data"])) for row in rows]
        if order_by:
            _check_field(order_by)
            present = [d for d in docs if d.data.get(order_by) is not None]
            missing = [d for d in docs if d.data.get(order_by) is None]
            present.sort(key=lambda d: _order_key(d.data[order_by]), reverse=descending)
            docs = present + missing
        return docs

    def watch(
        self,
        collection: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
        where: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> Unsubscribe:
        """Register a live query. The current snapshot is delivered immediately.

        A watcher whose query fails receives on_error once and is dropped.
        """
        watcher = _Watcher(
            collection=collection,
            where=dict(where or {}),
            order_by=order_by,
            descending=descending,
            on_snapshot=on_snapshot,
            on_error=on_error,
        )
        self._watchers.append(watcher)
        self._deliver(watcher)

        def unsubscribe() -> None:
            watcher.active = False
            if watcher in self._watchers:
                self._watchers.remove(watcher)

        return unsubscribe

    def refresh(self) -> bool:
        """Re-deliver snapshots if another connection committed since the last check.

        Returns True when a change was detected.
        """
        version = self._read_data_version()
        if version == self._data_version:
            return False
        self._data_version = version
        for collection in {w.collection for w in self._watchers}:
            self._notify(collection)
        return True

    @property
    def watcher_count(self) -> int:
        return len(self._watchers)

    def close(self) -> None:
        self._watchers.clear()
        self._conn.close()

    def _read_data_version(self) -> int:
        try:
            return self._conn.execute("PRAGMA data_version").fetchone()[0]
        except sqlite3.Error:
            logger.warning("Could not read data_version", exc_info=True)
            return -1

    def _notify(self, collection: str) -> None:
        for watcher in list(self._watchers):
            if watcher.collection == collection:
                self._deliver(watcher)

    def _deliver(self, watcher: _Watcher) -> None:
        if not watcher.active:
            return
        try:
            docs = self.query(
                watcher.collection,
                where=watcher.where,
                order_by=watcher.order_by,
                descending=watcher.descending,
            )
        except StoreError as exc:
            logger.warning("Watcher on %s failed: %s", watcher.collection, exc)
            watcher.active = False
            if watcher in self._watchers:
                self._watchers.remove(watcher)
            watcher.on_error(exc)
            return
        watcher.on_snapshot(docs)
