"""Email routes: parse forwarded ticket emails and create shows from them."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from showtracker.core.exceptions import ConfigurationError, StorageError
from showtracker.core.ingest import ingest_email
from showtracker.core.show_model import ParsedShow
from showtracker.config import get_settings
from showtracker.logging import get_logger
from showtracker.parser import parse

logger = get_logger(__name__)

router = APIRouter()


class EmailPayload(BaseModel):
    """A received email. The plain text body is preferred over HTML."""

    subject: str = ""
    text: str | None = None
    html: str | None = None

    @property
    def body(self) -> str:
        return self.text or self.html or ""


class InboundEmailPayload(EmailPayload):
    """``dry_run`` falls back to the DRY_RUN setting when omitted."""

    dry_run: bool | None = None


class ParseResponse(BaseModel):
    parsed: ParsedShow | None


@router.post("/parse", response_model=ParseResponse)
async def parse_email(payload: EmailPayload):
    """Parse an email without storing anything."""
    settings = get_settings()
    parsed = parse(payload.subject, payload.body, window=settings.date_window)
    return ParseResponse(parsed=parsed)


@router.post("/inbound")
async def inbound_email(payload: InboundEmailPayload):
    """Parse a forwarded email and create a show from it.

    An email that cannot be parsed is not an error: the response says
    ``created: false`` with a reason.
    """
    try:
        result = ingest_email(
            payload.subject,
            payload.body,
            dry_run=payload.dry_run,
            channel="api",
        )
    except ConfigurationError as e:
        logger.error("inbound_misconfigured", error=str(e))
        raise HTTPException(status_code=500, detail=f"Server misconfiguration: {e}")
    except StorageError as e:
        logger.error("inbound_storage_failed", error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to create show: {e}")

    if result.parsed is None:
        return {"ok": True, "created": False, "reason": result.reason}

    response = {
        "ok": True,
        "created": result.created,
        "dry_run": result.dry_run,
        "show": result.record.model_dump(mode="json") if result.record else None,
    }
    if result.row:
        response["show"]["id"] = result.row.get("id")
    return response
