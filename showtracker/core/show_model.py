"""Pydantic models for shows that map to the Supabase ``shows`` table."""

from datetime import date as date_type
from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN = "Unknown"

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class TicketStatus(str, Enum):
    """Whether a ticket is held. Values match the ``ticket`` column."""

    YES = "YES"
    NO = "NO"


class Attendance(str, Enum):
    """Attendance status. Values match the ``attendance`` column."""

    YES = "YES"
    NO = "NO"
    NOT_YET = "NOT YET"
    CANCELLED = "CANCELLED"
    POSTPONED = "POSTPONED"


class ParsedShow(BaseModel):
    """Result of parsing a ticket email.

    ``city`` and ``venue`` hold the ``"Unknown"`` sentinel when they could not
    be determined; it is not a real place name.
    """

    model_config = ConfigDict(frozen=True)

    show: Annotated[str, Field(min_length=1, max_length=200)]
    date: Annotated[str, Field(pattern=ISO_DATE_PATTERN)]
    city: str = UNKNOWN
    venue: str = UNKNOWN

    @property
    def date_value(self) -> date_type:
        return date_type.fromisoformat(self.date)

    @property
    def has_city(self) -> bool:
        return self.city != UNKNOWN

    @property
    def has_venue(self) -> bool:
        return self.venue != UNKNOWN


class ShowCreate(BaseModel):
    """Model for inserting a new show row."""

    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    show: Annotated[str, Field(min_length=1, max_length=200)]
    date: Annotated[str, Field(pattern=ISO_DATE_PATTERN)]
    city: str
    venue: str
    ticket: TicketStatus = TicketStatus.YES
    ticket_vendor: str = ""
    ticket_location: str = ""
    attendance: Attendance = Attendance.NOT_YET
    note: str | None = None
    qr_code_url: str | None = None

    def to_supabase_dict(self) -> dict:
        """Row payload for ``table("shows").insert``."""
        return self.model_dump(mode="json")


class Show(ShowCreate):
    """A stored show row."""

    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
