"""Command line interface for showtracker.

Usage:
    python -m showtracker.cli [command] [options]

Commands:
    parse       Parse a ticket email file
    list        List stored shows
"""

from showtracker.cli.main import app

__all__ = ["app"]
