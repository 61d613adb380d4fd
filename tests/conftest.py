"""Pytest configuration and shared fixtures."""

import sys
from datetime import date

import pytest

from showtracker.config import get_settings
from showtracker.core import supabase_client

# Fix encoding for Windows
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")

# Plausible event years for this reference date: 2024-2027
REFERENCE_DATE = date(2025, 6, 1)

SETTINGS_ENV = [
    "NEXT_PUBLIC_SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "DRY_RUN",
    "PARSER_YEARS_BACK",
    "PARSER_YEARS_AHEAD",
    "DEFAULT_TICKET_LOCATION",
]


@pytest.fixture
def today() -> date:
    """Fixed reference date for the plausibility window."""
    return REFERENCE_DATE


@pytest.fixture(autouse=True)
def reset_env(monkeypatch):
    """Reset settings and the storage singleton around each test."""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(supabase_client, "_client", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
