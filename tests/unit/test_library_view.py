# ABOUTME: Unit tests for LibraryView, the live view-model over books and wishlist.
# ABOUTME: Tests snapshot delivery, optimistic edits with rollback, errors, and teardown.

from collections.abc import Iterator
from datetime import timedelta
from typing import Any

import pytest

from novelnoted.auth.provider import NotAuthenticatedError
from novelnoted.auth.session import Session
from novelnoted.core.derive import ALL, WISHLIST_TAB
from novelnoted.core.sync import LibraryView
from novelnoted.records.patch import BookPatch
from novelnoted.records.types import Book, Collection, ReadingStatus
from novelnoted.store.adapter import RecordStore
from novelnoted.store.document import StoreError
from novelnoted.store.sqlite import SqliteDocumentStore
from tests.fixtures.fakes import BASE_TIME, BrokenStore, FakeAuthProvider


def _add(records: RecordStore, title: str, **values: Any) -> Book:
    fields: dict[str, Any] = {
        "author": "Ursula K. Le Guin",
        "status": ReadingStatus.CURRENTLY_READING,
    }
    fields.update(values)
    return records.add_book(title=title, **fields)


@pytest.fixture
def view(records: RecordStore) -> Iterator[LibraryView]:
    library_view = LibraryView(records).open()
    yield library_view
    library_view.close()


class TestSnapshots:
    """Tests for subscription-driven state."""

    def test_open_loads_existing_records(self, records: RecordStore) -> None:
        book = _add(records, "The Dispossessed")
        records.add_wishlist_book(title="Lathe of Heaven", author="Ursula K. Le Guin")

        with LibraryView(records) as view:
            assert view.is_open
            assert view.books == [book]
            assert len(view.wishlist) == 1

    def test_writes_flow_into_view(self, view: LibraryView, records: RecordStore) -> None:
        first = _add(records, "The Dispossessed")
        second = _add(records, "The Left Hand of Darkness")
        assert [b.id for b in view.books] == [second.id, first.id]

        records.delete(Collection.BOOKS, first.id)
        assert view.books == [second]

    def test_listeners_notified(self, view: LibraryView, records: RecordStore) -> None:
        seen: list[int] = []
        remove = view.on_change(lambda v: seen.append(len(v.books)))

        _add(records, "The Dispossessed")
        remove()
        remove()
        _add(records, "Tehanu")

        assert seen == [1]

    def test_close_stops_updates(self, records: RecordStore) -> None:
        view = LibraryView(records).open()
        view.close()
        _add(records, "The Dispossessed")

        assert not view.is_open
        assert view.books == []

    def test_open_twice_keeps_one_pair_of_feeds(
        self, records: RecordStore, doc_store: SqliteDocumentStore
    ) -> None:
        with LibraryView(records) as view:
            view.open()
            assert doc_store.watcher_count == 2
        assert doc_store.watcher_count == 0

    def test_open_requires_sign_in(self, doc_store: SqliteDocumentStore) -> None:
        records = RecordStore(doc_store, Session(FakeAuthProvider(None)))
        with pytest.raises(NotAuthenticatedError):
            LibraryView(records).open()

    def test_feed_error_is_recorded(self, session: Session) -> None:
        view = LibraryView(RecordStore(BrokenStore(), session)).open()

        assert isinstance(view.last_error, StoreError)
        assert view.books == []
        assert view.wishlist == []


class TestDerivedValues:
    def test_stats_and_counts(self, view: LibraryView, records: RecordStore) -> None:
        _add(records, "The Dispossessed", status=ReadingStatus.READ, pages=387)
        _add(records, "Tehanu")
        records.add_wishlist_book(title="Lathe of Heaven", author="Ursula K. Le Guin")

        stats = view.stats()
        assert stats.total == 2
        assert stats.read == 1
        assert stats.total_pages_read == 387
        assert stats.wishlist_count == 1

        counts = view.tab_counts()
        assert counts[ALL] == 2
        assert counts[WISHLIST_TAB] == 1
        assert counts[ReadingStatus.READ.value] == 1

    def test_filters(self, view: LibraryView, records: RecordStore) -> None:
        read = _add(records, "The Dispossessed", status=ReadingStatus.READ)
        _add(records, "Tehanu")
        records.add_wishlist_book(title="Piranesi", author="Susanna Clarke")

        assert view.filtered_books(ReadingStatus.READ) == [read]
        assert view.filtered_books(search_text="dispos") == [read]
        assert [w.title for w in view.filtered_wishlist("clarke")] == ["Piranesi"]


class TestOptimisticUpdates:
    """Tests for local-first edits."""

    def test_update_applies_and_persists(self, view: LibraryView, records: RecordStore) -> None:
        book = _add(records, "The Dispossessed", pages=387)
        updated = view.update_book(book.id, BookPatch(current_page=100))

        assert updated.current_page == 100
        assert view.find_book(book.id).current_page == 100
        assert records.get(Collection.BOOKS, book.id).current_page == 100

    def test_local_copy_changes_before_the_write(
        self, view: LibraryView, records: RecordStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        book = _add(records, "The Dispossessed")
        seen_during_write: list[int | None] = []

        def slow_update(collection: Collection, record_id: str, patch: BookPatch) -> None:
            seen_during_write.append(view.find_book(record_id).rating)
            return None

        monkeypatch.setattr(records, "update", slow_update)
        result = view.update_book(book.id, BookPatch(rating=5))

        assert seen_during_write == [5]
        assert result is None
        assert view.find_book(book.id).rating is None

    def test_invalid_update_reverts_and_raises(
        self, view: LibraryView, records: RecordStore
    ) -> None:
        book = _add(records, "The Dispossessed", pages=387)
        with pytest.raises(ValueError):
            view.update_book(book.id, BookPatch(current_page=400))
        assert view.find_book(book.id).current_page is None

    def test_change_status(self, view: LibraryView, records: RecordStore) -> None:
        book = _add(records, "The Dispossessed")
        finished = view.change_status(book.id, ReadingStatus.READ)

        assert finished.status is ReadingStatus.READ
        assert finished.date_finished is not None
        assert view.find_book(book.id).status is ReadingStatus.READ

    def test_change_status_stamps_with_the_store_clock(
        self, view: LibraryView, records: RecordStore
    ) -> None:
        book = _add(records, "The Lathe of Heaven")
        finished = view.change_status(book.id, ReadingStatus.READ)

        assert BASE_TIME < finished.date_finished < BASE_TIME + timedelta(hours=1)
        assert finished.date_started == finished.date_finished

    def test_change_status_unknown_book(self, view: LibraryView) -> None:
        assert view.change_status("nope", ReadingStatus.READ) is None
