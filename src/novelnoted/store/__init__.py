# ABOUTME: Public API for the novelnoted storage layer.
# ABOUTME: Exports the document store protocol, SQLite store, record adapter, and connection.

from novelnoted.store.adapter import RecordStore, Subscription
from novelnoted.store.connection import DEFAULT_DB_PATH, open_database
from novelnoted.store.document import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    StoreError,
    Timestamp,
)
from novelnoted.store.sqlite import SqliteDocumentStore

__all__ = [
    "DEFAULT_DB_PATH",
    "Document",
    "DocumentNotFoundError",
    "DocumentStore",
    "RecordStore",
    "SqliteDocumentStore",
    "StoreError",
    "Subscription",
    "Timestamp",
    "open_database",
]
