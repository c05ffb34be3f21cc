# ABOUTME: ISBN helpers for scanned barcodes and manual entry.
# ABOUTME: Cleans raw decoder output into an ISBN candidate and checks ISBN-10/13 checksums.

import re

_NON_DIGIT_RE = re.compile(r"\D")
MIN_ISBN_DIGITS = 10


class InvalidIsbnError(ValueError):
    """Raised when a scanned or typed code cannot be an ISBN."""


def clean_scanned_isbn(raw: str) -> str:
    """Strip everything but digits from a decoded barcode.

    Raises:
        InvalidIsbnError: If fewer than 10 digits remain.
    """
    cleaned = _NON_DIGIT_RE.sub("", raw)
    if len(cleaned) < MIN_ISBN_DIGITS:
        msg = f"Invalid barcode {raw!r}: need at least {MIN_ISBN_DIGITS} digits"
        raise InvalidIsbnError(msg)
    return cleaned


def _isbn10_valid(isbn: str) -> bool:
    if not re.fullmatch(r"\d{9}[\dX]", isbn):
        return False
    total = sum((10 - i) * (10 if ch == "X" else int(ch)) for i, ch in enumerate(isbn))
    return total % 11 == 0


def _isbn13_valid(isbn: str) -> bool:
    if not re.fullmatch(r"\d{13}", isbn):
        return False
    total = sum((1 if i % 2 == 0 else 3) * int(ch) for i, ch in enumerate(isbn))
    return total % 10 == 0


def normalize_isbn(isbn: str) -> str:
    """Strip hyphens and spaces, uppercase the check character."""
    return re.sub(r"[\s-]", "", isbn).upper()


def is_valid_isbn(isbn: str) -> bool:
    """Check an ISBN-10 or ISBN-13 checksum."""
    clean = normalize_isbn(isbn)
    if len(clean) == 10:
        return _isbn10_valid(clean)
    if len(clean) == 13:
        return _isbn13_valid(clean)
    return False


def to_isbn13(isbn: str) -> str | None:
    """Convert a valid ISBN-10 to ISBN-13. ISBN-13 input is returned as is."""
    clean = normalize_isbn(isbn)
    if len(clean) == 13:
        return clean if _isbn13_valid(clean) else None
    if not _isbn10_valid(clean):
        return None
    body = "978" + clean[:9]
    total = sum((1 if i % 2 == 0 else 3) * int(ch) for i, ch in enumerate(body))
    return body + str((10 - total % 10) % 10)


def to_isbn10(isbn: str) -> str | None:
    """Convert a 978-prefixed ISBN to its ISBN-10 form. Other input gives None."""
    isbn13 = to_isbn13(isbn)
    if isbn13 is None or not isbn13.startswith("978"):
        return None
    body = isbn13[3:12]
    check = (11 - sum((10 - i) * int(ch) for i, ch in enumerate(body)) % 11) % 11
    return body + ("X" if check == 10 else str(check))


def canonical_isbn(isbn: str) -> str:
    """The form ISBNs are stored in: ISBN-13 when valid, else the normalized input."""
    return to_isbn13(isbn) or normalize_isbn(isbn)


def isbn_forms(isbn: str) -> list[str]:
    """Every stored spelling that may refer to this ISBN, canonical form first.

    Records written before ISBNs were canonicalized may hold the ISBN-10 or
    the raw form.
    """
    forms = [canonical_isbn(isbn), to_isbn10(isbn), normalize_isbn(isbn)]
    return list(dict.fromkeys(f for f in forms if f))
