"""Event date extraction for ticket emails.

Confirmation emails usually carry several dates (order date, event date,
payment deadline) next to digit runs that merely look like dates (order
numbers, phone numbers). Extraction therefore prefers labelled dates, only
then scans the whole text, and accepts a date only inside a plausibility
window around the current year.
"""

import re
from collections.abc import Callable, Iterator
from datetime import date
from typing import NamedTuple

# Longest substring handed to date conversion
MAX_DATE_TEXT = 60

# English and German month names, full and abbreviated
MONTHS = {
    "january": 1,
    "jan": 1,
    "januar": 1,
    "jänner": 1,
    "february": 2,
    "feb": 2,
    "februar": 2,
    "march": 3,
    "mar": 3,
    "märz": 3,
    "maerz": 3,
    "mär": 3,
    "mrz": 3,
    "april": 4,
    "apr": 4,
    "may": 5,
    "mai": 5,
    "june": 6,
    "jun": 6,
    "juni": 6,
    "july": 7,
    "jul": 7,
    "juli": 7,
    "august": 8,
    "aug": 8,
    "september": 9,
    "sep": 9,
    "sept": 9,
    "october": 10,
    "oct": 10,
    "oktober": 10,
    "okt": 10,
    "november": 11,
    "nov": 11,
    "december": 12,
    "dec": 12,
    "dezember": 12,
    "dez": 12,
}

_MONTH_ALT = "|".join(sorted(MONTHS, key=len, reverse=True))


class DateWindow(NamedTuple):
    """Years around ``today.year`` in which an event date is believable."""

    years_back: int = 1
    years_ahead: int = 2


DEFAULT_WINDOW = DateWindow()


class DateCandidate(NamedTuple):
    """A date-shaped substring and the calendar date it converts to."""

    raw: str
    grammar: str
    value: date


class DateGrammar(NamedTuple):
    name: str
    pattern: re.Pattern
    convert: Callable[[re.Match], date | None]


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _day_first(first: str, second: str, year: str) -> date | None:
    """Resolve D/M vs M/D: a component above 12 must be the day."""
    a, b = int(first), int(second)
    if a > 12:
        day, month = a, b
    elif b > 12:
        month, day = a, b
    else:
        day, month = a, b
    return _safe_date(int(year), month, day)


def _convert_dot(match: re.Match) -> date | None:
    return _day_first(match.group(1), match.group(2), match.group(3))


def _convert_iso(match: re.Match) -> date | None:
    return _safe_date(int(match.group(1)), int(match.group(2)), int(match.group(3)))


def _convert_slash(match: re.Match) -> date | None:
    return _day_first(match.group(1), match.group(2), match.group(3))


def _convert_month_day_year(match: re.Match) -> date | None:
    month = MONTHS[match.group(1).lower()]
    return _safe_date(int(match.group(3)), month, int(match.group(2)))


def _convert_day_month_year(match: re.Match) -> date | None:
    month = MONTHS[match.group(2).lower()]
    return _safe_date(int(match.group(3)), month, int(match.group(1)))


# Tried in this order; the first grammar with a valid match wins.
DATE_GRAMMARS: tuple[DateGrammar, ...] = (
    DateGrammar(
        "dot",
        re.compile(r"(?<!\d)(\d{1,2})\.(\d{1,2})\.(\d{4})(?!\d)"),
        _convert_dot,
    ),
    DateGrammar(
        "iso",
        re.compile(r"(?<!\d)(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)"),
        _convert_iso,
    ),
    DateGrammar(
        "slash",
        re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})/(\d{4})(?!\d)"),
        _convert_slash,
    ),
    DateGrammar(
        "month_day_year",
        re.compile(
            rf"\b({_MONTH_ALT})\b\.?[ \t]+(\d{{1,2}})(?:st|nd|rd|th)?,?[ \t]+(\d{{4}})(?!\d)",
            re.IGNORECASE,
        ),
        _convert_month_day_year,
    ),
    DateGrammar(
        "day_month_year",
        re.compile(
            rf"(?<!\d)(\d{{1,2}})(?:st|nd|rd|th)?\.?[ \t]+({_MONTH_ALT})\b\.?,?[ \t]+(\d{{4}})(?!\d)",
            re.IGNORECASE,
        ),
        _convert_day_month_year,
    ),
)

# "Date: ..." / "Datum: ..." at the start of a line
LINE_DATE_LABEL_RE = re.compile(
    r"^[ \t]*(?:date|datum)\b[ \t]*:?[ \t]*(?:\r?\n[ \t]*)?(?=([^\n]{1,200}))",
    re.IGNORECASE | re.MULTILINE,
)

# Labels that name the event date anywhere in the text
CONTEXT_DATE_LABEL_RE = re.compile(
    r"\b(?:event[ \t]+date|show[ \t]+date|concert[ \t]+date|"
    r"veranstaltungsdatum|konzertdatum|when|wann|termin)\b[\s:]+(?=([^\n<]{1,200}))",
    re.IGNORECASE,
)

# "Date:" in the middle of a flattened HTML line
INLINE_DATE_LABEL_RE = re.compile(
    r"(?<![\w-])(?:date|datum)[ \t]*:[ \t]*(?:\r?\n[ \t]*)?(?=([^\n<]{1,200}))",
    re.IGNORECASE,
)

# Words that turn "Date:" into a non-event date ("Order date:")
QUALIFIED_DATE_RE = re.compile(
    r"(?:order|booking|purchase|invoice|payment|bestell|buchungs|rechnungs|kauf)[ \t-]*$",
    re.IGNORECASE,
)


def iter_date_candidates(text: str) -> Iterator[DateCandidate]:
    """Yield every convertible date in ``text``, grammar by grammar.

    Args:
        text: Text to search

    Yields:
        DateCandidate for each valid calendar date, in grammar priority order
    """
    for grammar in DATE_GRAMMARS:
        for match in grammar.pattern.finditer(text):
            value = grammar.convert(match)
            if value is not None:
                yield DateCandidate(match.group(0), grammar.name, value)


def convert_date(text: str | None) -> date | None:
    """Convert a short date string to a date.

    Args:
        text: String such as "15.03.2026", "2026-03-15" or "March 15, 2026"

    Returns:
        First convertible date, or None (also for strings over 60 chars)
    """
    if not text or len(text) > MAX_DATE_TEXT:
        return None
    candidate = next(iter_date_candidates(text.strip()), None)
    return candidate.value if candidate else None


def is_plausible(value: date, today: date, window: DateWindow = DEFAULT_WINDOW) -> bool:
    """Check that a date falls inside the window around ``today.year``."""
    return today.year - window.years_back <= value.year <= today.year + window.years_ahead


def _first_plausible(text: str, today: date, window: DateWindow) -> date | None:
    for candidate in iter_date_candidates(text):
        if is_plausible(candidate.value, today, window):
            return candidate.value
    return None


def _is_qualified(text: str, start: int) -> bool:
    return bool(QUALIFIED_DATE_RE.search(text[max(0, start - 24):start]))


def extract_date(
    text: str,
    today: date | None = None,
    window: DateWindow = DEFAULT_WINDOW,
) -> date | None:
    """Find the most likely event date in email text.

    Order of attempts:
    1. "Date:" / "Datum:" label at the start of a line
    2. Event-date labels ("When", "Event date", "Termin", unqualified "Date:")
    3. Any date in the text, by grammar priority

    Args:
        text: Normalized search text
        today: Reference date for the plausibility window (default: today)
        window: Plausibility window

    Returns:
        Event date, or None if no plausible date exists
    """
    if not text:
        return None
    today = today or date.today()

    for match in LINE_DATE_LABEL_RE.finditer(text):
        found = _first_plausible(match.group(1)[:MAX_DATE_TEXT], today, window)
        if found:
            return found

    for match in CONTEXT_DATE_LABEL_RE.finditer(text):
        found = _first_plausible(match.group(1)[:MAX_DATE_TEXT], today, window)
        if found:
            return found

    for match in INLINE_DATE_LABEL_RE.finditer(text):
        if _is_qualified(text, match.start()):
            continue
        found = _first_plausible(match.group(1)[:MAX_DATE_TEXT], today, window)
        if found:
            return found

    return _first_plausible(text, today, window)
