"""Vendor-specific extraction for well-structured ticket emails.

Some vendors send order confirmations whose fields sit in fixed positions.
Each vendor is described by a VendorProfile; profiles are tried in order and
the first one that contributes anything wins. A match here takes precedence
over the generic label extractors.
"""

import re
from dataclasses import dataclass
from datetime import date as date_type

from showtracker.parser.dates import DEFAULT_WINDOW, DateWindow, convert_date, is_plausible

MAX_SHOW_LENGTH = 200


@dataclass(frozen=True, slots=True)
class VendorProfile:
    """How to read one vendor's confirmation email.

    ``subject_pattern`` must define a ``show`` group; ``body_pattern`` must
    define ``show``, ``city`` and ``date`` groups.
    """

    name: str
    keywords: tuple[str, ...]
    subject_pattern: re.Pattern | None = None
    body_pattern: re.Pattern | None = None


@dataclass(frozen=True, slots=True)
class VendorMatch:
    """Fields a vendor profile could read. Unread fields are None."""

    vendor: str
    show: str | None = None
    city: str | None = None
    date: date_type | None = None


EVENTIM = VendorProfile(
    name="Eventim",
    keywords=("eventim",),
    # "Your EVENTIM order: <artist> - order number <digits>"
    subject_pattern=re.compile(
        r"(?:your|ihre)\s+eventim\s+(?:order|bestellung)\s*:\s*(?P<show>.+?)\s+-\s+"
        r"(?:order\s+number|bestellnummer)\s*:?\s*\d+",
        re.IGNORECASE,
    ),
    # "<act>, <city>, DD.MM.YYYY" on a line (or HTML block) of its own
    body_pattern=re.compile(
        r"^[ \t]*(?P<show>[^,\n]{1,200}?)[ \t]*,[ \t]*(?P<city>[^,\n\d]{2,60}?)[ \t]*,"
        r"[ \t]*(?P<date>\d{1,2}\.\d{1,2}\.\d{4})(?!\d)",
        re.MULTILINE,
    ),
)

VENDOR_PROFILES: list[VendorProfile] = [EVENTIM]


def _clean(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()[:MAX_SHOW_LENGTH]


def match_profile(
    profile: VendorProfile,
    subject: str,
    text: str,
    today: date_type,
    window: DateWindow = DEFAULT_WINDOW,
) -> VendorMatch | None:
    """Apply one profile to an email.

    Args:
        profile: Vendor profile to try
        subject: Raw email subject
        text: Subject and body with one line per HTML block (build_line_text)
        today: Reference date for the plausibility window
        window: Plausibility window

    Returns:
        VendorMatch with whatever the profile could read, or None
    """
    subject_show = None
    if profile.subject_pattern is not None:
        match = profile.subject_pattern.search(subject or "")
        if match:
            subject_show = _clean(match.group("show")) or None

    body_show = body_city = body_date = None
    if profile.body_pattern is not None:
        for match in profile.body_pattern.finditer(text):
            value = convert_date(match.group("date"))
            if value is None or not is_plausible(value, today, window):
                continue
            body_show = _clean(match.group("show")) or None
            body_city = _clean(match.group("city")) or None
            body_date = value
            break

    if subject_show is None and body_date is None:
        return None

    return VendorMatch(
        vendor=profile.name,
        show=subject_show or body_show,
        city=body_city,
        date=body_date,
    )


def match_vendor(
    subject: str,
    text: str,
    today: date_type,
    window: DateWindow = DEFAULT_WINDOW,
    profiles: list[VendorProfile] | None = None,
) -> VendorMatch | None:
    """Try vendor profiles in priority order and return the first match."""
    for profile in profiles if profiles is not None else VENDOR_PROFILES:
        found = match_profile(profile, subject, text, today, window)
        if found is not None:
            return found
    return None


def infer_ticket_vendor(subject: str, profiles: list[VendorProfile] | None = None) -> str:
    """Name the vendor whose keyword appears in the subject, or "" if none."""
    lowered = (subject or "").lower()
    for profile in profiles if profiles is not None else VENDOR_PROFILES:
        if any(keyword in lowered for keyword in profile.keywords):
            return profile.name
    return ""
