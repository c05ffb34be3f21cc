# ABOUTME: Unit tests for Timestamp and record/document mapping.
# ABOUTME: Tests datetime conversion, key renaming, enum values, and tolerant document decoding.

from datetime import UTC, datetime, timedelta, timezone

import pytest

from novelnoted.records.types import (
    Book,
    Collection,
    OwnershipType,
    ReadingStatus,
    WishListBook,
)
from novelnoted.store.document import Document, Timestamp
from novelnoted.store.mapping import (
    document_to_record,
    field_to_key,
    fields_to_data,
    record_to_data,
    record_type,
)
from tests.fixtures.fakes import BASE_TIME


class TestTimestamp:
    """Tests for the store-native Timestamp type."""

    def test_round_trip_keeps_microseconds(self) -> None:
        value = datetime(2024, 3, 1, 9, 30, 15, 123456, tzinfo=UTC)
        ts = Timestamp.from_datetime(value)
        assert ts.nanoseconds == 123_456_000
        assert ts.to_datetime() == value

    def test_naive_datetime_is_utc(self) -> None:
        ts = Timestamp.from_datetime(datetime(1970, 1, 2))
        assert ts == Timestamp(seconds=86_400)

    def test_offset_datetime_is_normalized(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        value = datetime(2024, 3, 1, 11, 0, tzinfo=plus_two)
        assert Timestamp.from_datetime(value).to_datetime() == BASE_TIME.replace(hour=9)

    def test_ordering(self) -> None:
        assert Timestamp(10, 5) < Timestamp(10, 6) < Timestamp(11, 0)

    def test_nanoseconds_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="nanoseconds"):
            Timestamp(seconds=0, nanoseconds=1_000_000_000)


class TestFieldKeys:
    def test_renamed_fields(self) -> None:
        assert field_to_key("cover_url") == "coverUrl"
        assert field_to_key("date_added") == "dateAdded"
        assert field_to_key("current_page") == "currentPage"
        assert field_to_key("ownership") == "ownershipType"
        assert field_to_key("user_id") == "userId"

    def test_unrenamed_fields(self) -> None:
        assert field_to_key("title") == "title"
        assert field_to_key("isbn") == "isbn"

    def test_record_type(self) -> None:
        assert record_type(Collection.BOOKS) is Book
        assert record_type("wishlist") is WishListBook


class TestRecordToData:
    """Tests for converting records to document data."""

    def test_book(self) -> None:
        book = Book(
            id="ignored",
            title="Dune",
            author="Frank Herbert",
            status=ReadingStatus.READ,
            date_added=BASE_TIME,
            ownership=OwnershipType.DIGITAL,
            pages=412,
            date_finished=BASE_TIME,
            user_id="alice-uid",
        )
        data = record_to_data(book)

        assert "id" not in data
        assert data["status"] == "read"
        assert data["ownershipType"] == "digital"
        assert data["dateAdded"] == Timestamp.from_datetime(BASE_TIME)
        assert data["dateFinished"] == Timestamp.from_datetime(BASE_TIME)
        assert data["userId"] == "alice-uid"
        assert data["pages"] == 412
        assert data["rating"] is None

    def test_fields_to_data_keeps_none_for_clearing(self) -> None:
        assert fields_to_data({"notes": None, "current_page": 10}) == {
            "notes": None,
            "currentPage": 10,
        }


class TestDocumentToRecord:
    """Tests for decoding stored documents."""

    def test_book_document(self) -> None:
        doc = Document(
            id="doc-1",
            data={
                "title": "Dune",
                "author": "Frank Herbert",
                "status": "currently-reading",
                "ownershipType": "physical",
                "dateAdded": Timestamp.from_datetime(BASE_TIME),
                "currentPage": 50,
                "userId": "alice-uid",
            },
        )
        book = document_to_record(Collection.BOOKS, doc)

        assert isinstance(book, Book)
        assert book.id == "doc-1"
        assert book.status is ReadingStatus.CURRENTLY_READING
        assert book.ownership is OwnershipType.PHYSICAL
        assert book.date_added == BASE_TIME
        assert book.current_page == 50
        assert book.user_id == "alice-uid"

    def test_unknown_keys_are_ignored(self) -> None:
        doc = Document(
            id="w1",
            data={"title": "Piranesi", "author": "Susanna Clarke", "legacyField": True},
        )
        entry = document_to_record(Collection.WISHLIST, doc)
        assert isinstance(entry, WishListBook)
        assert entry.title == "Piranesi"

    def test_sparse_book_gets_defaults(self) -> None:
        book = document_to_record(Collection.BOOKS, Document(id="b", data={}))

        assert book.title == "Unknown Title"
        assert book.author == "Unknown Author"
        assert book.status is ReadingStatus.CURRENTLY_READING
        assert book.ownership is OwnershipType.PHYSICAL
        assert book.date_added.tzinfo is not None

    def test_legacy_want_to_read_status_loads(self) -> None:
        doc = Document(id="b", data={"title": "T", "author": "A", "status": "want-to-read"})
        assert document_to_record(Collection.BOOKS, doc).status is ReadingStatus.WANT_TO_READ

    def test_inconsistent_progress_still_loads(self) -> None:
        # Another client may have written currentPage beyond pages; reads do not validate.
        doc = Document(id="b", data={"title": "T", "author": "A", "pages": 10, "currentPage": 20})
        assert document_to_record(Collection.BOOKS, doc).current_page == 20

    def test_unrecognised_enum_values_fall_back_to_defaults(self) -> None:
        doc = Document(
            id="b",
            data={"title": "T", "author": "A", "status": "abandoned", "ownershipType": "borrowed"},
        )
        book = document_to_record(Collection.BOOKS, doc)
        assert book.status is ReadingStatus.CURRENTLY_READING
        assert book.ownership is OwnershipType.PHYSICAL

    def test_iso_string_dates_are_read(self) -> None:
        doc = Document(
            id="b",
            data={"title": "T", "author": "A", "dateStarted": "2024-01-01T00:00:00Z"},
        )
        assert document_to_record(Collection.BOOKS, doc).date_started == datetime(
            2024, 1, 1, tzinfo=UTC
        )

    def test_unreadable_dates_count_as_missing(self) -> None:
        doc = Document(
            id="b",
            data={"title": "T", "author": "A", "dateAdded": 12, "dateFinished": "someday"},
        )
        book = document_to_record(Collection.BOOKS, doc)
        assert book.date_finished is None
        assert book.date_added.tzinfo is not None
