"""Label-based extraction of show name, venue and city.

Generic fallback for emails no vendor profile understands. Labels are looked
up in order ("Venue: ...", "Ort: ..."); the first label with a non-empty value
wins. Values stop at the end of the line, at a ``<`` or before the next known
label, which matters for HTML bodies flattened to a single line.
"""

import re
from functools import lru_cache
from typing import NamedTuple

from showtracker.parser.city import sanitize_city, title_case_city
from showtracker.parser.text import collapse_whitespace

MAX_LABEL_VALUE = 200

SHOW_LABELS = [
    "event",
    "concert",
    "show",
    "performance",
    "artist",
    "act",
    "veranstaltung",
    "konzert",
    "eventtitel",
    "künstler",
]

VENUE_LABELS = [
    "venue",
    "at venue",
    "location",
    "where",
    "place",
    "veranstaltungsort",
    "spielstätte",
    "ort",
]

CITY_LABELS = [
    "city",
    "stadt",
    "location",
    "ort",
]

# Capitalized phrase ending in a venue-type noun: "Roundhouse Theatre"
VENUE_NOUN_RE = re.compile(
    r"(?<![\w-])((?:[A-Z0-9][\w'&.-]*[ \t]+){0,4}(?:Theatre|Theater|Arena|Hall|Halle))\b"
)

# Labels that may follow a value on a flattened line, or sit where the value should be
TRAILING_LABEL_RE = re.compile(
    r"(?:^|\s+)(?:promoter|veranstalter|date|datum|time|uhrzeit|doors|einlass|begin|beginn|"
    r"venue|location|ort|city|stadt|address|adresse|tickets?|price|preis|seat|platz|"
    r"order\s+number|bestellnummer)\s*:",
    re.IGNORECASE,
)

# Last address segment "10115 Berlin"
POSTAL_LOCALITY_RE = re.compile(r"^\d{4,5}\s+(?P<city>[^\d,]{2,40})$")

# Venue names whose spelling must not follow the email's capitalization
KNOWN_VENUE_SPELLINGS = {
    "so36": "SO36",
}


class VenueInfo(NamedTuple):
    """Venue name and the city its address line names, if any."""

    venue: str | None
    city_from_venue: str | None


@lru_cache(maxsize=64)
def _label_pattern(label: str) -> re.Pattern:
    label_re = r"\s+".join(re.escape(part) for part in label.split())
    # The value may start on the line after the colon
    return re.compile(
        rf"(?<![\w-]){label_re}[ \t]*:[ \t]*(?:\r?\n[ \t]*)?(?=([^\n<]{{1,400}}))",
        re.IGNORECASE,
    )


def clean_label_value(value: str) -> str:
    """Collapse whitespace, cut before a trailing label and cap the length."""
    value = collapse_whitespace(value)
    value = TRAILING_LABEL_RE.split(value, maxsplit=1)[0]
    return value.strip()[:MAX_LABEL_VALUE].strip()


def extract_label(text: str, labels: list[str]) -> str | None:
    """Return the value of the first label found in ``text``.

    Args:
        text: Normalized search text
        labels: Label names in priority order (case-insensitive)

    Returns:
        Cleaned value or None
    """
    for label in labels:
        for match in _label_pattern(label).finditer(text):
            value = clean_label_value(match.group(1))
            if value:
                return value
    return None


def split_venue_address(value: str) -> VenueInfo:
    """Split "Name, Street 1, 10115 Berlin" into venue name and city."""
    segments = [segment.strip() for segment in value.split(",") if segment.strip()]
    if not segments:
        return VenueInfo(None, None)

    venue = KNOWN_VENUE_SPELLINGS.get(segments[0].lower(), segments[0])
    city = None
    if len(segments) > 1:
        match = POSTAL_LOCALITY_RE.match(segments[-1])
        if match:
            city = match.group("city").strip()
    return VenueInfo(venue, city)


def extract_venue(text: str) -> VenueInfo:
    """Find the venue and, when its address carries one, the city."""
    value = extract_label(text, VENUE_LABELS)
    if value is None:
        match = VENUE_NOUN_RE.search(text)
        if match:
            value = clean_label_value(match.group(1))
    if not value:
        return VenueInfo(None, None)
    return split_venue_address(value)


def extract_city(text: str) -> str | None:
    """City from a city-like label, passed through the sanitizer."""
    return sanitize_city(extract_label(text, CITY_LABELS))


def extract_show_name(text: str) -> str | None:
    return extract_label(text, SHOW_LABELS)


def resolve_city(
    vendor_city: str | None,
    venue_info: VenueInfo,
    text: str,
) -> str | None:
    """Pick the city by precedence: vendor, venue address, label."""
    city = vendor_city or venue_info.city_from_venue or extract_city(text)
    return title_case_city(city) if city else None
