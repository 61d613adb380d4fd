"""Parse a ticket email into a show.

Heuristic and best effort: ``parse`` returns a ParsedShow when it can find
both a show name and a plausible event date, and None otherwise. It never
raises for string input and keeps no state between calls.

Field precedence:
- date: vendor body line > labelled date > any plausible date
- show: vendor subject > vendor body line > show label > email subject
- city: vendor body line > venue address > city label > "Unknown"
- venue: venue label > venue-type noun > "Unknown"
"""

from datetime import date

from showtracker.core.show_model import UNKNOWN, ParsedShow
from showtracker.logging import get_logger
from showtracker.parser.dates import DEFAULT_WINDOW, DateWindow, extract_date
from showtracker.parser.fields import (
    extract_show_name,
    extract_venue,
    resolve_city,
)
from showtracker.parser.text import build_line_text, build_search_text
from showtracker.parser.vendors import MAX_SHOW_LENGTH, VendorMatch, match_vendor

logger = get_logger(__name__)


def resolve_show_name(subject: str, text: str, vendor: VendorMatch | None) -> str | None:
    """Pick the show name by precedence, falling back to the subject."""
    if vendor is not None and vendor.show:
        return vendor.show
    show = extract_show_name(text) or subject.strip()
    return show[:MAX_SHOW_LENGTH].strip() or None


def parse(
    subject: str,
    body: str,
    *,
    today: date | None = None,
    window: DateWindow = DEFAULT_WINDOW,
) -> ParsedShow | None:
    """Extract show, date, city and venue from an email.

    Args:
        subject: Email subject
        body: Email body, plain text or HTML
        today: Reference date for the plausibility window (default: today)
        window: Years around ``today`` accepted as event years

    Returns:
        ParsedShow, or None when show name or date cannot be determined
    """
    subject = subject or ""
    body = body or ""
    today = today or date.today()

    text = build_search_text(subject, body)
    vendor = match_vendor(subject, build_line_text(subject, body), today, window)

    event_date = vendor.date if vendor is not None and vendor.date else None
    if event_date is None:
        event_date = extract_date(text, today, window)

    show = resolve_show_name(subject, text, vendor)

    if not show or event_date is None:
        logger.debug(
            "email_unparsed",
            has_show=bool(show),
            has_date=event_date is not None,
            vendor=vendor.vendor if vendor else None,
        )
        return None

    venue_info = extract_venue(text)
    city = resolve_city(vendor.city if vendor else None, venue_info, text)

    parsed = ParsedShow(
        show=show,
        date=event_date.isoformat(),
        city=city or UNKNOWN,
        venue=venue_info.venue or UNKNOWN,
    )
    logger.debug(
        "email_parsed",
        show=parsed.show,
        date=parsed.date,
        vendor=vendor.vendor if vendor else None,
    )
    return parsed
