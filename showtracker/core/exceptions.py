"""Exception hierarchy for showtracker.

The email parser never raises: an email it cannot read is an ordinary
``None`` result. Errors here come from around the parser:

- ConfigurationError: the service is missing settings it needs
- StorageError: Supabase rejected or failed a request
- EmailReadError: an email file could not be read at all
"""


class ShowTrackerError(Exception):
    """Base exception for all showtracker errors.

    Args:
        message: Human readable description
        source: Subsystem that failed ("supabase", "cli", ...), shown as a prefix
        details: Extra structured context for logs
    """

    def __init__(self, message: str, source: str | None = None, details: dict | None = None):
        self.source = source
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        return f"[{self.source}] {message}" if self.source else message


class ConfigurationError(ShowTrackerError):
    pass


class MissingCredentialsError(ConfigurationError):
    """A client was built without the environment variables it needs."""

    def __init__(self, service: str, variables: list[str]):
        self.service = service
        self.variables = variables
        super().__init__(
            f"Missing {service} credentials. Please set {', '.join(variables)}",
            source=service,
            details={"variables": variables},
        )


class StorageError(ShowTrackerError):
    pass


class SupabaseError(StorageError):
    """A Supabase request on the shows table failed."""

    def __init__(self, message: str, operation: str | None = None, table: str | None = None):
        self.operation = operation
        self.table = table
        super().__init__(
            message,
            source="supabase",
            details={"operation": operation, "table": table},
        )


class EmailReadError(ShowTrackerError):
    """An email file is missing, unreadable or has no text body."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot read email {path}: {reason}", source="email", details={"path": path})
