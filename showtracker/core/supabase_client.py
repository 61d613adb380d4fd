"""Supabase client for show storage operations."""

from typing import Any

from supabase import Client, create_client

from showtracker.config import get_settings
from showtracker.core.exceptions import MissingCredentialsError, SupabaseError
from showtracker.core.show_model import ShowCreate
from showtracker.logging import get_logger

logger = get_logger(__name__)


class ShowsClient:
    """Client for interacting with the Supabase shows table."""

    def __init__(self, client: Client | None = None, table: str | None = None) -> None:
        """Initialize Supabase client.

        Args:
            client: Existing Supabase client (built from settings if omitted)
            table: Table name (default from settings)
        """
        settings = get_settings()
        if client is None:
            if not settings.supabase_url or not settings.supabase_service_role_key:
                raise MissingCredentialsError(
                    "supabase",
                    ["NEXT_PUBLIC_SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY"],
                )
            client = create_client(
                settings.supabase_url,
                settings.supabase_service_role_key,
            )
        self._client: Client = client
        self.table = table or settings.shows_table
        self.logger = get_logger("supabase_client")

    @property
    def client(self) -> Client:
        """Get the Supabase client instance."""
        return self._client

    def insert_show(self, show: ShowCreate) -> dict[str, Any]:
        """Insert a show row and return the stored row.

        Raises:
            SupabaseError: If the insert fails or returns no row
        """
        try:
            response = self._client.table(self.table).insert(show.to_supabase_dict()).execute()
        except Exception as e:
            self.logger.error("show_insert_failed", show=show.show, error=str(e))
            raise SupabaseError(str(e), operation="insert", table=self.table) from e

        if not response.data:
            raise SupabaseError("Insert returned no row", operation="insert", table=self.table)

        row = response.data[0]
        self.logger.info("show_inserted", id=row.get("id"), show=row.get("show"), date=row.get("date"))
        return row

    def list_shows(self, limit: int | None = None) -> list[dict[str, Any]]:
        """List stored shows ordered by date.

        Args:
            limit: Maximum number of rows (all if None)
        """
        try:
            query = self._client.table(self.table).select("*").order("date")
            if limit:
                query = query.limit(limit)
            response = query.execute()
        except Exception as e:
            self.logger.error("show_list_failed", error=str(e))
            raise SupabaseError(str(e), operation="select", table=self.table) from e
        return response.data or []


# Singleton instance
_client: ShowsClient | None = None


def get_shows_client() -> ShowsClient:
    """Get or create the shows client singleton."""
    global _client
    if _client is None:
        _client = ShowsClient()
    return _client
