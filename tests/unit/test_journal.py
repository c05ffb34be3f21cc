# ABOUTME: Unit tests for reading-journal entries on a book's thoughts.
# ABOUTME: Covers the date stamp, blank-line separation, and blank entry rejection.

from datetime import UTC, datetime

import pytest

from novelnoted.records.journal import append_journal_entry, format_journal_entry, journal_patch
from novelnoted.records.types import Book, ReadingStatus
from tests.fixtures.fakes import BASE_TIME


class TestJournalEntries:
    def test_entry_is_date_stamped(self) -> None:
        entry = format_journal_entry("  Loved chapter 3 ", BASE_TIME)
        assert entry == "[Mar 1, 2024] Loved chapter 3"

    def test_single_digit_day_has_no_padding(self) -> None:
        when = datetime(2023, 12, 5, tzinfo=UTC)
        assert format_journal_entry("x", when) == "[Dec 5, 2023] x"

    def test_first_entry_starts_the_thoughts(self) -> None:
        assert append_journal_entry(None, "Started", BASE_TIME) == "[Mar 1, 2024] Started"
        assert append_journal_entry("", "Started", BASE_TIME) == "[Mar 1, 2024] Started"

    def test_later_entries_follow_a_blank_line(self) -> None:
        thoughts = "Gripping so far."
        assert (
            append_journal_entry(thoughts, "Slower middle", BASE_TIME)
            == "Gripping so far.\n\n[Mar 1, 2024] Slower middle"
        )

    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_blank_entry_rejected(self, text: str) -> None:
        with pytest.raises(ValueError, match="blank"):
            append_journal_entry("old", text, BASE_TIME)

    def test_patch_touches_only_thoughts(self) -> None:
        book = Book(
            id="b1",
            title="Dune",
            author="Frank Herbert",
            status=ReadingStatus.READ,
            date_added=BASE_TIME,
            thoughts="Great.",
        )
        patch = journal_patch(book, "Reread it", BASE_TIME)
        assert patch.changes() == {"thoughts": "Great.\n\n[Mar 1, 2024] Reread it"}
