# ABOUTME: Unit tests for partial-update patches and reading-status transitions.
# ABOUTME: Covers UNSET/None/value semantics and the date stamping rules for status changes.

from datetime import timedelta

from novelnoted.records.patch import UNSET, BookPatch, WishListPatch
from novelnoted.records.status import initial_dates, status_patch
from novelnoted.records.types import Book, ReadingStatus
from tests.fixtures.fakes import BASE_TIME

LATER = BASE_TIME + timedelta(days=10)


def _book(**kwargs: object) -> Book:
    values: dict[str, object] = {
        "id": "b1",
        "title": "Dune",
        "author": "Frank Herbert",
        "status": ReadingStatus.CURRENTLY_READING,
        "date_added": BASE_TIME,
    }
    values.update(kwargs)
    return Book(**values)


class TestUnset:
    def test_is_singleton_and_falsy(self) -> None:
        assert type(UNSET)() is UNSET
        assert not UNSET
        assert repr(UNSET) == "UNSET"


class TestBookPatch:
    """Tests for the absent / clear / set contract."""

    def test_new_patch_is_empty(self) -> None:
        patch = BookPatch()
        assert patch.is_empty()
        assert patch.changes() == {}

    def test_set_value_is_a_change(self) -> None:
        assert BookPatch(rating=4).changes() == {"rating": 4}

    def test_none_clears(self) -> None:
        patch = BookPatch(notes=None)
        assert not patch.is_empty()
        assert patch.changes() == {"notes": None}

    def test_falsy_values_are_changes(self) -> None:
        assert BookPatch(current_page=0, thoughts="").changes() == {
            "current_page": 0,
            "thoughts": "",
        }

    def test_wishlist_patch(self) -> None:
        assert WishListPatch(publisher="Tor").changes() == {"publisher": "Tor"}
        assert not hasattr(WishListPatch(), "rating")


class TestStatusPatch:
    """Tests for status_patch()."""

    def test_start_reading_sets_date_started(self) -> None:
        book = _book(status=ReadingStatus.WANT_TO_READ)
        patch = status_patch(book, ReadingStatus.CURRENTLY_READING, now=LATER)
        assert patch.changes() == {
            "status": ReadingStatus.CURRENTLY_READING,
            "date_started": LATER,
        }

    def test_start_reading_keeps_existing_start(self) -> None:
        book = _book(status=ReadingStatus.READ, date_started=BASE_TIME, date_finished=BASE_TIME)
        patch = status_patch(book, ReadingStatus.CURRENTLY_READING, now=LATER)
        # Moving away from read never clears either date
        assert patch.changes() == {"status": ReadingStatus.CURRENTLY_READING}

    def test_finish_sets_finished_and_backfills_started(self) -> None:
        patch = status_patch(_book(), ReadingStatus.READ, now=LATER)
        assert patch.changes() == {
            "status": ReadingStatus.READ,
            "date_started": LATER,
            "date_finished": LATER,
        }

    def test_finish_keeps_existing_start(self) -> None:
        patch = status_patch(_book(date_started=BASE_TIME), ReadingStatus.READ, now=LATER)
        assert patch.date_started is UNSET
        assert patch.date_finished == LATER

    def test_finish_keeps_first_finish_date(self) -> None:
        book = _book(status=ReadingStatus.READ, date_started=BASE_TIME, date_finished=BASE_TIME)
        patch = status_patch(book, ReadingStatus.READ, now=LATER)
        assert patch.changes() == {"status": ReadingStatus.READ}

    def test_want_to_read_sets_no_dates(self) -> None:
        patch = status_patch(_book(), ReadingStatus.WANT_TO_READ, now=LATER)
        assert patch.changes() == {"status": ReadingStatus.WANT_TO_READ}

    def test_defaults_to_current_time(self) -> None:
        patch = status_patch(_book(), ReadingStatus.READ)
        assert patch.date_finished is not UNSET
        assert patch.date_finished.tzinfo is not None


class TestInitialDates:
    def test_read(self) -> None:
        assert initial_dates(ReadingStatus.READ, LATER) == {
            "date_started": LATER,
            "date_finished": LATER,
        }

    def test_currently_reading(self) -> None:
        assert initial_dates(ReadingStatus.CURRENTLY_READING, LATER) == {"date_started": LATER}

    def test_want_to_read(self) -> None:
        assert initial_dates(ReadingStatus.WANT_TO_READ, LATER) == {}
