"""Tests for the HTTP API."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from showtracker import __version__
from showtracker.api.main import app
from showtracker.core.exceptions import SupabaseError

YEAR = date.today().year
PLAIN_BODY = f"Event: Jazz Night\nDate: {YEAR}-11-03\nVenue: Roundhouse, 10115 Berlin"


@pytest.fixture
def api():
    return TestClient(app)


@pytest.fixture
def shows_client():
    """Patch the storage client used by the email routes."""
    mock = MagicMock()
    mock.insert_show.return_value = {"id": "row-1"}
    with patch("showtracker.core.ingest.get_shows_client", return_value=mock):
        yield mock


class TestHealth:
    """Tests for health endpoints."""

    def test_root(self, api):
        response = api.get("/")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "showtracker API", "version": __version__}

    def test_health_without_credentials(self, api):
        """A missing database is reported, not raised."""
        response = api.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["database"].startswith("error:")
        assert data["shows_in_db"] == 0


class TestParseEndpoint:
    """Tests for POST /email/parse."""

    def test_parse_plain_text(self, api):
        response = api.post("/email/parse", json={"subject": "Your tickets", "text": PLAIN_BODY})

        assert response.status_code == 200
        assert response.json()["parsed"] == {
            "show": "Jazz Night",
            "date": f"{YEAR}-11-03",
            "city": "Berlin",
            "venue": "Roundhouse",
        }

    def test_parse_html_when_no_text(self, api):
        html = f"<p>Event: Jazz Night</p><p>Date: {YEAR}-11-03</p>"
        response = api.post("/email/parse", json={"subject": "Your tickets", "html": html})

        assert response.json()["parsed"]["show"] == "Jazz Night"

    def test_newsletter(self, api):
        response = api.post(
            "/email/parse",
            json={"subject": "Weekly Newsletter", "text": "Check out our top picks!"},
        )

        assert response.status_code == 200
        assert response.json() == {"parsed": None}


class TestInboundEndpoint:
    """Tests for POST /email/inbound."""

    def test_creates_show(self, api, shows_client):
        response = api.post("/email/inbound", json={"subject": "Your tickets", "text": PLAIN_BODY})

        assert response.status_code == 200
        data = response.json()
        assert data["created"] is True
        assert data["show"]["id"] == "row-1"
        assert data["show"]["ticket"] == "YES"
        shows_client.insert_show.assert_called_once()

    def test_dry_run(self, api):
        """Dry runs need no storage credentials."""
        response = api.post(
            "/email/inbound",
            json={"subject": "Your tickets", "text": PLAIN_BODY, "dry_run": True},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["created"] is False
        assert data["dry_run"] is True
        assert data["show"]["show"] == "Jazz Night"
        assert "id" not in data["show"]

    def test_unparsed_email(self, api, shows_client):
        response = api.post(
            "/email/inbound",
            json={"subject": "Weekly Newsletter", "text": "Check out our top picks!"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["created"] is False
        assert "Could not parse" in data["reason"]
        shows_client.insert_show.assert_not_called()

    def test_unparsed_email_without_credentials(self, api):
        """Storage is only needed once an email has been parsed."""
        response = api.post(
            "/email/inbound",
            json={"subject": "Weekly Newsletter", "text": "Check out our top picks!"},
        )

        assert response.status_code == 200
        assert response.json()["created"] is False

    def test_dry_run_from_environment(self, api, monkeypatch):
        monkeypatch.setenv("DRY_RUN", "true")

        response = api.post("/email/inbound", json={"subject": "Your tickets", "text": PLAIN_BODY})

        assert response.status_code == 200
        assert response.json()["dry_run"] is True

    def test_explicit_dry_run_false_overrides_environment(self, api, shows_client, monkeypatch):
        monkeypatch.setenv("DRY_RUN", "true")

        response = api.post(
            "/email/inbound",
            json={"subject": "Your tickets", "text": PLAIN_BODY, "dry_run": False},
        )

        assert response.json()["created"] is True
        shows_client.insert_show.assert_called_once()

    def test_missing_credentials(self, api):
        response = api.post("/email/inbound", json={"subject": "Your tickets", "text": PLAIN_BODY})

        assert response.status_code == 500
        assert response.json()["detail"].startswith("Server misconfiguration")

    def test_storage_failure(self, api, shows_client):
        shows_client.insert_show.side_effect = SupabaseError("insert failed", operation="insert")

        response = api.post("/email/inbound", json={"subject": "Your tickets", "text": PLAIN_BODY})

        assert response.status_code == 500
        assert response.json()["detail"].startswith("Failed to create show")
