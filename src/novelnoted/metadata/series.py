# ABOUTME: Best-effort extraction of series name and number from free-text book titles.
# ABOUTME: Ordered regex patterns; the first match wins, no match leaves the title alone.

import re
from dataclasses import dataclass

_NUMBER = r"(?P<number>\d+(?:\.\d+)?)"

# Order matters: parenthesized forms are tried before prefix and suffix forms.
_SERIES_PATTERNS: list[re.Pattern[str]] = [
    # "Mistborn (Mistborn #1)"
    re.compile(rf"^(?P<title>.+?)\s*\(\s*(?P<series>[^()]+?),?\s*#\s*{_NUMBER}\s*\)$"),
    # "The Way of Kings (The Stormlight Archive Book 1)"
    re.compile(rf"^(?P<title>.+?)\s*\(\s*(?P<series>[^()]+?),?\s+Book\s+{_NUMBER}\s*\)$", re.I),
    # "Discworld #1: The Colour of Magic"
    re.compile(rf"^(?P<series>[^:]+?)\s*#\s*{_NUMBER}\s*:\s*(?P<title>.+)$"),
    # "Wheel of Time Book 1: The Eye of the World"
    re.compile(rf"^(?P<series>[^:]+?),?\s+Book\s+{_NUMBER}\s*:\s*(?P<title>.+)$", re.I),
    # "The Final Empire: Mistborn #1"
    re.compile(rf"^(?P<title>.+?)\s*:\s*(?P<series>[^:]+?)\s*#\s*{_NUMBER}$"),
    # "The Final Empire - Mistborn #1"
    re.compile(rf"^(?P<title>.+?)\s+-\s+(?P<series>.+?)\s*#\s*{_NUMBER}$"),
]

# Words shorter than this are ignored when comparing titles.
SIGNIFICANT_WORD_LENGTH = 4
_WORD_RE = re.compile(r"[a-z0-9']+")


@dataclass(frozen=True)
class SeriesInfo:
    """Result of parsing a title for series information."""

    clean_title: str
    series: str | None = None
    series_number: float | None = None


def _parse_number(text: str) -> float | int:
    value = float(text)
    return int(value) if value.is_integer() else value


def extract_series_info(title: str) -> SeriesInfo:
    """Split a title into its clean title, series name, and position.

    Recognizes "Title (Series #N)", "Title (Series Book N)", "Series #N: Title",
    "Series Book N: Title", "Title: Series #N" and "Title - Series #N".
    Anything else comes back unchanged with no series. This is a heuristic:
    ambiguous titles can be misread.
    """
    text = title.strip()
    for pattern in _SERIES_PATTERNS:
        m = pattern.match(text)
        if m:
            clean = m.group("title").strip()
            series = m.group("series").strip()
            if not clean or not series:
                continue
            return SeriesInfo(
                clean_title=clean,
                series=series,
                series_number=_parse_number(m.group("number")),
            )
    return SeriesInfo(clean_title=text)


def significant_words(text: str) -> set[str]:
    """Lowercased words of at least SIGNIFICANT_WORD_LENGTH characters."""
    return {w for w in _WORD_RE.findall(text.lower()) if len(w) >= SIGNIFICANT_WORD_LENGTH}


def shares_significant_word(a: str, b: str) -> bool:
    """Whether two titles have a significant word in common."""
    return bool(significant_words(a) & significant_words(b))


def _contains_words(words: list[str], part: list[str]) -> bool:
    size = len(part)
    return any(words[i : i + size] == part for i in range(len(words) - size + 1))


def titles_match(a: str, b: str) -> bool:
    """Loose title comparison used to flag series books already in the library.

    Series markers are stripped, then the titles match when their words are
    equal, or when one title's words appear as a run inside the other's and
    the shorter title has a significant word. "It" therefore never matches
    "The Institute" or "It Ends with Us".
    """
    left = _WORD_RE.findall(extract_series_info(a).clean_title.lower())
    right = _WORD_RE.findall(extract_series_info(b).clean_title.lower())
    if not left or not right:
        return False
    if left == right:
        return True
    shorter, longer = sorted((left, right), key=len)
    return bool(significant_words(" ".join(shorter))) and _contains_words(longer, shorter)
