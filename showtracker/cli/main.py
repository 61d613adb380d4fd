"""Command line interface for showtracker.

Usage:
    showtracker parse confirmation.eml
    showtracker parse body.txt --subject "Your EVENTIM order: Artist - order number 123"
    showtracker parse body.html --subject "Tickets" --insert
    showtracker list --limit 20
"""

import sys
from datetime import date
from email import policy
from email.parser import BytesParser
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from showtracker.config import get_settings
from showtracker.core.exceptions import EmailReadError, ShowTrackerError
from showtracker.core.ingest import ingest_email
from showtracker.core.show_model import ParsedShow
from showtracker.logging import setup_logging
from showtracker.parser import parse

app = typer.Typer(
    name="showtracker",
    help="Concert tracker: turn ticket emails into show records",
    add_completion=False,
)
console = Console()


def today_callback(value: str | None) -> date | None:
    """Convert --today to a date."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter("Must be a date in YYYY-MM-DD format")


def read_email(path: str, subject: str | None) -> tuple[str, str]:
    """Read subject and body from a file, an .eml message or stdin ("-")."""
    if path == "-":
        return subject or "", sys.stdin.read()

    file_path = Path(path)
    if not file_path.is_file():
        raise EmailReadError(path, "file not found")

    try:
        if file_path.suffix.lower() != ".eml":
            return subject or "", file_path.read_text(encoding="utf-8", errors="replace")
        with file_path.open("rb") as fh:
            message = BytesParser(policy=policy.default).parse(fh)
    except OSError as e:
        raise EmailReadError(path, str(e)) from e

    part = message.get_body(preferencelist=("plain", "html"))
    if part is None:
        raise EmailReadError(path, "no text or HTML part")
    return subject or str(message.get("Subject", "")), part.get_content()


def print_parsed(parsed: ParsedShow) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Show")
    table.add_column("Date")
    table.add_column("City")
    table.add_column("Venue")
    table.add_row(
        escape(parsed.show),
        parsed.date,
        escape(parsed.city) if parsed.has_city else f"[dim]{parsed.city}[/dim]",
        escape(parsed.venue) if parsed.has_venue else f"[dim]{parsed.venue}[/dim]",
    )
    console.print(table)


@app.command("parse")
def parse_command(
    path: str = typer.Argument(..., help="Email file (.eml, .txt, .html) or - for stdin"),
    subject: Optional[str] = typer.Option(
        None,
        "--subject", "-s",
        help="Email subject (read from the message for .eml files)",
    ),
    today: Optional[str] = typer.Option(
        None,
        "--today",
        help="Reference date YYYY-MM-DD for the plausibility window",
        callback=today_callback,
    ),
    insert: bool = typer.Option(
        False,
        "--insert",
        help="Store the parsed show in Supabase",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="With --insert, build the row without storing it",
    ),
):
    """Parse a ticket email and optionally store the show.

    Examples:
        showtracker parse confirmation.eml
        showtracker parse body.txt --subject "Tickets for Arcade Fire" --insert
    """
    settings = get_settings()
    try:
        email_subject, body = read_email(path, subject)
    except EmailReadError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not insert:
        parsed = parse(email_subject, body, today=today, window=settings.date_window)
        if parsed is None:
            console.print("[red]Could not parse show details[/red] (need at least event name and date)")
            raise typer.Exit(1)
        print_parsed(parsed)
        return

    try:
        result = ingest_email(email_subject, body, dry_run=dry_run, today=today, channel="cli")
    except ShowTrackerError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if result.parsed is None:
        console.print(f"[red]Not created:[/red] {result.reason}")
        raise typer.Exit(1)

    print_parsed(result.parsed)
    if result.dry_run:
        console.print(
            f"[yellow]DRY RUN[/yellow] - Would insert with attendance "
            f"{result.record.attendance}, vendor '{result.record.ticket_vendor}'"
        )
    else:
        console.print(f"[green]OK[/green] - Created show {result.row.get('id')}")


@app.command("list")
def list_command(
    limit: Optional[int] = typer.Option(
        None,
        "--limit", "-l",
        help="Max shows to list",
    ),
):
    """List stored shows (requires Supabase connection)."""
    from showtracker.core.supabase_client import get_shows_client

    try:
        rows = get_shows_client().list_shows(limit=limit)
    except ShowTrackerError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not rows:
        console.print("[yellow]No shows stored[/yellow]")
        raise typer.Exit(0)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Date")
    table.add_column("Show")
    table.add_column("City")
    table.add_column("Venue")
    table.add_column("Attendance")
    for row in rows:
        table.add_row(
            str(row.get("date", "")),
            str(row.get("show", ""))[:40],
            str(row.get("city", "")),
            str(row.get("venue", ""))[:30],
            str(row.get("attendance", "")),
        )
    console.print(table)
    console.print(f"[bold]Total:[/bold] {len(rows)} shows")


def main():
    """Entry point for the CLI."""
    settings = get_settings()
    setup_logging(level=settings.log_level, log_format=settings.log_format, log_file=settings.log_file)
    app()


if __name__ == "__main__":
    main()
