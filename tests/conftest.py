# ABOUTME: Shared pytest fixtures for novelnoted tests.
# ABOUTME: Provides a temp database, a fake identity provider, and signed-in record stores.

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from novelnoted.auth.session import Session
from novelnoted.store.adapter import RecordStore
from novelnoted.store.connection import open_database
from novelnoted.store.sqlite import SqliteDocumentStore
from tests.fixtures.fakes import ALICE, FakeAuthProvider, TickingClock


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a fresh novelnoted database."""
    return tmp_path / "library.db"


@pytest.fixture
def conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """An open, migrated database connection."""
    connection = open_database(db_path)
    yield connection
    connection.close()


@pytest.fixture
def doc_store(conn: sqlite3.Connection) -> SqliteDocumentStore:
    return SqliteDocumentStore(conn)


@pytest.fixture
def auth() -> FakeAuthProvider:
    """Fake identity provider with Alice signed in."""
    return FakeAuthProvider(ALICE)


@pytest.fixture
def session(auth: FakeAuthProvider) -> Session:
    return Session(auth)


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def records(
    doc_store: SqliteDocumentStore, session: Session, clock: TickingClock
) -> RecordStore:
    """RecordStore for Alice over a fresh database."""
    return RecordStore(doc_store, session, clock=clock)
