"""Core modules: show models, storage and email ingestion."""

from showtracker.core.exceptions import (
    ConfigurationError,
    EmailReadError,
    MissingCredentialsError,
    ShowTrackerError,
    StorageError,
    SupabaseError,
)
from showtracker.core.show_model import Attendance, ParsedShow, Show, ShowCreate, TicketStatus

__all__ = [
    # Models
    "Attendance",
    "ParsedShow",
    "Show",
    "ShowCreate",
    "TicketStatus",
    # Exceptions
    "ShowTrackerError",
    "ConfigurationError",
    "EmailReadError",
    "MissingCredentialsError",
    "StorageError",
    "SupabaseError",
]
