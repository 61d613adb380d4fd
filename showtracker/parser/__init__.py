"""Ticket email parsing.

Stages:
- text: HTML stripping and search text
- dates: event date grammars and plausibility window
- vendors: vendor profiles (Eventim)
- fields: show, venue and city labels
- city: city sanitizing
- email_parser: ``parse`` orchestrator
"""

from showtracker.parser.dates import DEFAULT_WINDOW, DateWindow, extract_date
from showtracker.parser.email_parser import parse
from showtracker.parser.vendors import VENDOR_PROFILES, VendorProfile, infer_ticket_vendor

__all__ = [
    "DEFAULT_WINDOW",
    "DateWindow",
    "VENDOR_PROFILES",
    "VendorProfile",
    "extract_date",
    "infer_ticket_vendor",
    "parse",
]
