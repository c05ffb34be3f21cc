# ABOUTME: Partial-update wrappers with explicit "absent / clear / set" semantics.
# ABOUTME: UNSET leaves a field alone, None clears it, anything else overwrites it.

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Final

from novelnoted.records.types import OwnershipType, ReadingStatus


class _Unset:
    """Marker type for a field that a patch does not touch."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


@dataclass
class _Patch:
    def changes(self) -> dict[str, Any]:
        """Return only the fields this patch sets or clears."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.changes()


@dataclass
class BookPatch(_Patch):
    """Partial update for a library Book.

    id, user_id and date_added are not patchable.
    """

    title: str | _Unset = UNSET
    author: str | _Unset = UNSET
    status: ReadingStatus | _Unset = UNSET
    ownership: OwnershipType | _Unset = UNSET
    isbn: str | None | _Unset = UNSET
    cover_url: str | None | _Unset = UNSET
    pages: int | None | _Unset = UNSET
    genre: str | None | _Unset = UNSET
    date_started: datetime | None | _Unset = UNSET
    date_finished: datetime | None | _Unset = UNSET
    rating: int | None | _Unset = UNSET
    current_page: int | None | _Unset = UNSET
    notes: str | None | _Unset = UNSET
    thoughts: str | None | _Unset = UNSET
    series: str | None | _Unset = UNSET
    series_number: float | None | _Unset = UNSET


@dataclass
class WishListPatch(_Patch):
    """Partial update for a WishListBook."""

    title: str | _Unset = UNSET
    author: str | _Unset = UNSET
    isbn: str | None | _Unset = UNSET
    cover_url: str | None | _Unset = UNSET
    pages: int | None | _Unset = UNSET
    genre: str | None | _Unset = UNSET
    publisher: str | None | _Unset = UNSET
    published_year: str | None | _Unset = UNSET
    description: str | None | _Unset = UNSET
