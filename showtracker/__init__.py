"""Personal concert tracker: ticket-email parsing and show storage."""

__version__ = "0.1.0"
