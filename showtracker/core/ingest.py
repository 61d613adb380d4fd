"""Turn ticket emails into stored shows.

The parser only reads the email; the business rules for the stored row live
here: a forwarded ticket email means a ticket is held, the vendor is inferred
from the subject, and attendance follows from whether the date has passed.
"""

from dataclasses import dataclass
from datetime import date

from showtracker.config import get_settings
from showtracker.core.show_model import Attendance, ParsedShow, ShowCreate, TicketStatus
from showtracker.core.supabase_client import ShowsClient, get_shows_client
from showtracker.logging import get_logger
from showtracker.logging.logger import log_email_ingest
from showtracker.parser import infer_ticket_vendor, parse
from showtracker.parser.text import collapse_whitespace

logger = get_logger(__name__)

UNPARSED_REASON = "Could not parse show details from email (need at least event name and date)"
BODY_PREVIEW_LENGTH = 500


@dataclass
class IngestResult:
    """Outcome of ingesting one email."""

    created: bool = False
    parsed: ParsedShow | None = None
    record: ShowCreate | None = None
    row: dict | None = None
    reason: str | None = None
    dry_run: bool = False


def compute_attendance(show_date: date, today: date) -> Attendance:
    """Past shows count as attended, today's and future ones as not yet."""
    if show_date < today:
        return Attendance.YES
    return Attendance.NOT_YET


def build_show_record(
    parsed: ParsedShow,
    subject: str,
    today: date,
    ticket_location: str = "In App",
) -> ShowCreate:
    """Build the row to insert for a parsed email.

    Args:
        parsed: Parser result
        subject: Email subject, used to infer the ticket vendor
        today: Reference date for attendance
        ticket_location: Where the ticket is kept
    """
    return ShowCreate(
        show=parsed.show,
        date=parsed.date,
        city=parsed.city,
        venue=parsed.venue,
        ticket=TicketStatus.YES,
        ticket_vendor=infer_ticket_vendor(subject),
        ticket_location=ticket_location,
        attendance=compute_attendance(parsed.date_value, today),
        note=None,
        qr_code_url=None,
    )


def body_preview(body: str) -> str:
    return collapse_whitespace((body or "")[:BODY_PREVIEW_LENGTH])


def ingest_email(
    subject: str,
    body: str,
    *,
    client: ShowsClient | None = None,
    dry_run: bool | None = None,
    today: date | None = None,
    channel: str = "inbound",
) -> IngestResult:
    """Parse an email and store the show it describes.

    Args:
        subject: Email subject
        body: Email body, plain text or HTML
        client: Storage client (singleton if omitted, unused on dry run)
        dry_run: Build the row without inserting (default from settings)
        today: Reference date for parsing and attendance
        channel: Where the email came from, for logs

    Returns:
        IngestResult; ``created`` is False when the email could not be parsed

    Raises:
        SupabaseError: If the insert fails
    """
    settings = get_settings()
    today = today or date.today()
    if dry_run is None:
        dry_run = settings.dry_run

    with log_email_ingest(subject or "", channel):
        parsed = parse(subject, body, today=today, window=settings.date_window)
        if parsed is None:
            logger.warning("email_parse_failed", body_preview=body_preview(body))
            return IngestResult(reason=UNPARSED_REASON, dry_run=dry_run)

        record = build_show_record(
            parsed,
            subject,
            today,
            ticket_location=settings.default_ticket_location,
        )

        if dry_run:
            logger.info("show_dry_run", show=record.show, date=record.date)
            return IngestResult(created=False, parsed=parsed, record=record, dry_run=True)

        row = (client or get_shows_client()).insert_show(record)
        logger.info("show_created", id=row.get("id"), show=record.show, date=record.date)
        return IngestResult(created=True, parsed=parsed, record=record, row=row)
