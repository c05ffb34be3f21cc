# ABOUTME: LibraryView keeps in-memory library and wishlist snapshots in step with the store.
# ABOUTME: Owns both live subscriptions and applies optimistic local edits before remote writes.

import logging
from collections.abc import Callable
from dataclasses import replace

from novelnoted.core import derive
from novelnoted.records.patch import BookPatch
from novelnoted.records.status import status_patch
from novelnoted.records.types import Book, Collection, ReadingStatus, WishListBook
from novelnoted.store.adapter import RecordStore, Subscription
from novelnoted.store.document import StoreError

logger = logging.getLogger(__name__)

ChangeListener = Callable[["LibraryView"], None]


class LibraryView:
    """Live view-model over the signed-in user's books and wishlist.

    open() subscribes to both collections; close() releases both. Use it as
    a context manager so the feeds are always torn down. Every snapshot
    replaces the local list wholesale.
    """

    def __init__(self, records: RecordStore) -> None:
        self._records = records
        self._books: list[Book] = []
        self._wishlist: list[WishListBook] = []
        self._subscriptions: list[Subscription] = []
        self._listeners: list[ChangeListener] = []
        self.last_error: StoreError | None = None

    @property
    def books(self) -> list[Book]:
        return list(self._books)

    @property
    def wishlist(self) -> list[WishListBook]:
        return list(self._wishlist)

    @property
    def is_open(self) -> bool:
        return any(s.active for s in self._subscriptions)

    def open(self) -> "LibraryView":
        """Subscribe to both collections. Raises NotAuthenticatedError when signed out."""
        if self._subscriptions:
            return self
        self._subscriptions = [
            self._records.subscribe(Collection.BOOKS, self._on_books, self._on_error),
            self._records.subscribe(Collection.WISHLIST, self._on_wishlist, self._on_error),
        ]
        return self

    def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []

    def __enter__(self) -> "LibraryView":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def on_change(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a listener called after every snapshot or local edit."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def find_book(self, book_id: str) -> Book | None:
        return next((b for b in self._books if b.id == book_id), None)

    def update_book(self, book_id: str, patch: BookPatch) -> Book | None:
        """Apply *patch* locally, then write it. A failed write restores the old record.

        Returns the stored record, or None if the write failed.
        """
        previous = self.find_book(book_id)
        if previous is not None and not patch.is_empty():
            self._replace_book(replace(previous, **patch.changes()))

        try:
            updated = self._records.update(Collection.BOOKS, book_id, patch)
        except ValueError:
            if previous is not None:
                self._replace_book(previous)
            raise
        if updated is None:
            if previous is not None:
                logger.warning("Update of book %s failed, reverting local copy", book_id)
                self._replace_book(previous)
            return None

        self._replace_book(updated)
        return updated

    def change_status(self, book_id: str, new_status: ReadingStatus) -> Book | None:
        book = self.find_book(book_id)
        if book is None:
            return None
        patch = status_patch(book, new_status, now=self._records.now())
        return self.update_book(book_id, patch)

    def stats(self) -> derive.ReadingStats:
        return derive.get_stats(self._books, self._wishlist)

    def tab_counts(self) -> dict[str, int]:
        return derive.tab_counts(self._books, self._wishlist)

    def filtered_books(
        self, status_filter: ReadingStatus | str = derive.ALL, search_text: str = ""
    ) -> list[Book]:
        return derive.filter_books(self._books, status_filter, search_text)

    def filtered_wishlist(self, search_text: str = "") -> list[WishListBook]:
        return derive.filter_wishlist(self._wishlist, search_text)

    def _replace_book(self, book: Book) -> None:
        self._books = [book if b.id == book.id else b for b in self._books]
        self._emit()

    def _on_books(self, books: list[Book]) -> None:
        self._books = list(books)
        self._emit()

    def _on_wishlist(self, wishlist: list[WishListBook]) -> None:
        self._wishlist = list(wishlist)
        self._emit()

    def _on_error(self, exc: StoreError) -> None:
        self.last_error = exc

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self)
