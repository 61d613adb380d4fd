"""Application settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from showtracker.parser.dates import DateWindow


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase (checked when the storage client is built, not at load time)
    supabase_url: str | None = Field(default=None, alias="NEXT_PUBLIC_SUPABASE_URL")
    supabase_service_role_key: str | None = Field(default=None, alias="SUPABASE_SERVICE_ROLE_KEY")
    shows_table: str = Field(default="shows", alias="SHOWS_TABLE")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )
    log_format: Literal["json", "console"] = Field(default="console", alias="LOG_FORMAT")
    log_file: str | None = Field(default=None, alias="LOG_FILE")

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )
    debug: bool = Field(default=False, alias="DEBUG")

    # Email parser plausibility window, relative to the current year
    parser_years_back: int = Field(default=1, ge=0, alias="PARSER_YEARS_BACK")
    parser_years_ahead: int = Field(default=2, ge=0, alias="PARSER_YEARS_AHEAD")

    # Defaults for rows created from emails
    default_ticket_location: str = Field(default="In App", alias="DEFAULT_TICKET_LOCATION")
    dry_run: bool = Field(default=False, alias="DRY_RUN")

    @property
    def date_window(self) -> DateWindow:
        return DateWindow(
            years_back=self.parser_years_back,
            years_ahead=self.parser_years_ahead,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
