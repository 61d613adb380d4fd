"""FastAPI application for showtracker.

Run with:
    uvicorn showtracker.api.main:app --reload --port 8000
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from showtracker import __version__
from showtracker.api.routes import email
from showtracker.config import get_settings
from showtracker.logging import get_logger, setup_logging

settings = get_settings()
setup_logging(level=settings.log_level, log_format=settings.log_format, log_file=settings.log_file)

logger = get_logger(__name__)

app = FastAPI(
    title="showtracker API",
    description="Create concert records from forwarded ticket emails",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(email.router, prefix="/email", tags=["Email"])


@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "showtracker API",
        "version": __version__,
    }


@app.get("/health", tags=["Health"])
async def health():
    """Detailed health check."""
    from showtracker.core.supabase_client import get_shows_client

    try:
        client = get_shows_client()
        result = client.client.table(client.table).select("id", count="exact").limit(1).execute()
        db_status = "connected"
        show_count = result.count
    except Exception as e:
        db_status = f"error: {str(e)}"
        show_count = 0

    return {
        "status": "ok",
        "database": db_status,
        "shows_in_db": show_count,
    }
