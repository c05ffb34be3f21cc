# ABOUTME: RecordStore: per-user CRUD and live subscriptions over books and wishlist.
# ABOUTME: Reads degrade to empty results, create propagates failures, update/delete degrade.

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from novelnoted.auth.provider import AuthUser
from novelnoted.auth.session import Session
from novelnoted.metadata.isbn import canonical_isbn, isbn_forms
from novelnoted.records.journal import journal_patch
from novelnoted.records.patch import BookPatch, WishListPatch
from novelnoted.records.status import initial_dates, status_patch
from novelnoted.records.types import (
    Book,
    Collection,
    OwnershipType,
    ReadingStatus,
    WishListBook,
    validate_book,
)
from novelnoted.store.document import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    StoreError,
)
from novelnoted.store.mapping import (
    DATE_ADDED_KEY,
    USER_ID_KEY,
    document_to_record,
    field_to_key,
    fields_to_data,
    record_to_data,
    record_type,
)

logger = logging.getLogger(__name__)

RecordsCallback = Callable[[list[Any]], None]

_PATCH_TYPES: dict[Collection, type] = {
    Collection.BOOKS: BookPatch,
    Collection.WISHLIST: WishListPatch,
}
_REQUIRED_FIELDS = frozenset({"title", "author", "status", "ownership"})
_SERVER_FIELDS = frozenset({"id", "user_id", "date_added"})


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Subscription:
    """Handle for a live subscription. Call it (or use it as a context manager) to release."""

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe = unsubscribe
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        """Release the feed. Safe to call more than once."""
        if self._active:
            self._active = False
            self._unsubscribe()

    def __call__(self) -> None:
        self.unsubscribe()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unsubscribe()


class RecordStore:
    """Typed, per-user access to the books and wishlist collections.

    Every operation requires a signed-in identity from the injected Session
    and raises NotAuthenticatedError otherwise. Documents belonging to other
    users are treated as missing.
    """

    def __init__(
        self,
        store: DocumentStore,
        session: Session,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._session = session
        self._clock = clock

    @property
    def session(self) -> Session:
        return self._session

    def now(self) -> datetime:
        """Current time from the injected clock."""
        return self._clock()

    def list(self, collection: Collection) -> list[Any]:
        """Return the user's records, newest first. Store failures yield []."""
        user = self._session.require_user()
        try:
            docs = self._store.query(
                collection,
                where={USER_ID_KEY: user.uid},
                order_by=DATE_ADDED_KEY,
                descending=True,
            )
        except StoreError as exc:
            logger.warning("Error loading %s: %s", collection, exc)
            return []
        return [document_to_record(collection, doc) for doc in docs]

    def get(self, collection: Collection, record_id: str) -> Any | None:
        """Return one of the user's records by id, or None. Store failures yield None."""
        user = self._session.require_user()
        try:
            doc = self._owned_document(collection, record_id, user)
        except StoreError as exc:
            logger.warning("Error loading %s/%s: %s", collection, record_id, exc)
            return None
        return document_to_record(collection, doc) if doc else None

    def create(
        self,
        collection: Collection,
        values: dict[str, Any],
        date_added: datetime | None = None,
    ) -> Any:
        """Create a record for the signed-in user and return it with its new id.

        date_added defaults to now; user_id is always the signed-in uid.

        Raises:
            NotAuthenticatedError: If nobody is signed in.
            ValueError: If the values break a Book invariant.
            TypeError: If required fields are missing or unknown fields are given.
            StoreError: If the store rejects the write.
        """
        user = self._session.require_user()
        cls = record_type(collection)
        values = {k: v for k, v in values.items() if k not in _SERVER_FIELDS}
        if values.get("isbn"):
            values["isbn"] = canonical_isbn(values["isbn"])
        record = cls(
            id="",
            date_added=date_added or self._clock(),
            user_id=user.uid,
            **values,
        )
        if isinstance(record, Book):
            validate_book(record)

        try:
            record.id = self._store.add(collection, record_to_data(record))
        except StoreError as exc:
            logger.error("Error adding %r to %s: %s", record.title, collection, exc)
            raise
        return record

    def add_book(self, **values: Any) -> Book:
        """Create a library Book. Requires title, author, and status."""
        return self.create(Collection.BOOKS, values)

    def add_wishlist_book(self, **values: Any) -> WishListBook:
        """Create a WishListBook. Requires title and author."""
        return self.create(Collection.WISHLIST, values)

    def update(
        self,
        collection: Collection,
        record_id: str,
        patch: BookPatch | WishListPatch,
    ) -> Any | None:
        """Apply a partial update and return the updated record.

        Only fields the patch sets are written; UNSET fields are left as
        they are and None clears a field. An empty patch changes nothing.
        Returns None if the record does not exist or the store fails.

        Raises:
            TypeError: If the patch type does not match the collection.
            ValueError: If the patch clears a required field or breaks a Book invariant.
        """
        user = self._session.require_user()
        expected = _PATCH_TYPES[Collection(collection)]
        if not isinstance(patch, expected):
            msg = f"{collection} expects {expected.__name__}, got {type(patch).__name__}"
            raise TypeError(msg)

        changes = patch.changes()
        if changes.get("isbn"):
            changes["isbn"] = canonical_isbn(changes["isbn"])
        cleared = sorted(n for n in _REQUIRED_FIELDS & changes.keys() if changes[n] is None)
        if cleared:
            msg = f"Cannot clear required field(s): {', '.join(cleared)}"
            raise ValueError(msg)

        try:
            doc = self._owned_document(collection, record_id, user)
            if doc is None:
                logger.warning("Cannot update %s/%s: not found", collection, record_id)
                return None
            current = document_to_record(collection, doc)
            if not changes:
                return current

            merged = replace(current, **changes)
            if isinstance(merged, Book):
                validate_book(merged)

            self._store.update(collection, record_id, fields_to_data(changes))
            updated = self._store.get(collection, record_id)
        except DocumentNotFoundError:
            logger.warning("Cannot update %s/%s: not found", collection, record_id)
            return None
        except StoreError as exc:
            logger.warning("Error updating %s/%s: %s", collection, record_id, exc)
            return None
        return document_to_record(collection, updated) if updated else None

    def delete(self, collection: Collection, record_id: str) -> bool:
        """Delete a record. Returns False instead of raising on any store failure."""
        user = self._session.require_user()
        try:
            if self._owned_document(collection, record_id, user) is None:
                logger.warning("Cannot delete %s/%s: not found", collection, record_id)
                return False
            self._store.delete(collection, record_id)
        except StoreError as exc:
            logger.warning("Error deleting %s/%s: %s", collection, record_id, exc)
            return False
        return True

    def subscribe(
        self,
        collection: Collection,
        callback: RecordsCallback,
        on_error: Callable[[StoreError], None] | None = None,
    ) -> Subscription:
        """Open a live feed of the user's records in *collection*.

        callback receives the full ordered snapshot on registration and on
        every change. If the feed fails, callback receives [] once, on_error
        (if given) receives the error, and the feed stops.
        """
        user = self._session.require_user()

        def handle_snapshot(docs: list[Document]) -> None:
            callback([document_to_record(collection, doc) for doc in docs])

        def handle_error(exc: StoreError) -> None:
            logger.error("Error in %s listener: %s", collection, exc)
            callback([])
            if on_error is not None:
                on_error(exc)

        try:
            unsubscribe = self._store.watch(
                collection,
                handle_snapshot,
                handle_error,
                where={USER_ID_KEY: user.uid},
                order_by=DATE_ADDED_KEY,
                descending=True,
            )
        except StoreError as exc:
            handle_error(exc)
            return Subscription(lambda: None)
        return Subscription(unsubscribe)

    def find_by_isbn(self, collection: Collection, isbn: str) -> Any | None:
        """Return the first of the user's records with this ISBN, or None.

        ISBN-10 and ISBN-13 spellings of the same book match each other.
        """
        user = self._session.require_user()
        try:
            for form in isbn_forms(isbn):
                docs = self._store.query(
                    collection, where={USER_ID_KEY: user.uid, field_to_key("isbn"): form}
                )
                if docs:
                    return document_to_record(collection, docs[0])
        except StoreError as exc:
            logger.warning("Error checking %s for ISBN %s: %s", collection, isbn, exc)
        return None

    def move_to_library(
        self,
        wishlist_id: str,
        target_status: ReadingStatus = ReadingStatus.CURRENTLY_READING,
    ) -> Book | None:
        """Move a wishlist entry into the library as a Book.

        Creates the Book first, then deletes the wishlist entry. The two
        steps are not atomic: if the delete fails the wishlist entry stays
        and a warning is logged. A missing wishlist entry returns None
        without creating anything. Create failures propagate.
        """
        source = self.get(Collection.WISHLIST, wishlist_id)
        if source is None:
            logger.warning("Cannot move wishlist/%s: not found", wishlist_id)
            return None

        now = self._clock()
        status = ReadingStatus(target_status)
        values: dict[str, Any] = {
            "title": source.title,
            "author": source.author,
            "isbn": source.isbn,
            "cover_url": source.cover_url,
            "pages": source.pages,
            "genre": source.genre,
            "status": status,
            "ownership": OwnershipType.PHYSICAL,
            **initial_dates(status, now),
        }
        book = self.create(Collection.BOOKS, values, date_added=now)

        if not self.delete(Collection.WISHLIST, wishlist_id):
            logger.warning(
                "Moved %r to library as %s but wishlist/%s was not removed; duplicate remains",
                source.title,
                book.id,
                wishlist_id,
            )
        return book

    def change_status(self, book_id: str, new_status: ReadingStatus) -> Book | None:
        """Change a book's status, stamping reading dates as the transition requires."""
        book = self.get(Collection.BOOKS, book_id)
        if book is None:
            return None
        patch = status_patch(book, ReadingStatus(new_status), now=self._clock())
        return self.update(Collection.BOOKS, book_id, patch)

    def set_rating(self, book_id: str, rating: int | None) -> Book | None:
        return self.update(Collection.BOOKS, book_id, BookPatch(rating=rating))

    def set_progress(self, book_id: str, current_page: int) -> Book | None:
        return self.update(Collection.BOOKS, book_id, BookPatch(current_page=current_page))

    def add_journal_entry(self, book_id: str, text: str) -> Book | None:
        """Append a dated entry to the book's thoughts.

        Raises:
            ValueError: If *text* is blank.
        """
        book = self.get(Collection.BOOKS, book_id)
        if book is None:
            return None
        return self.update(Collection.BOOKS, book_id, journal_patch(book, text, self._clock()))

    def _owned_document(
        self, collection: Collection, record_id: str, user: AuthUser
    ) -> Document | None:
        doc = self._store.get(collection, record_id)
        if doc is None or doc.data.get(USER_ID_KEY) != user.uid:
            return None
        return doc

