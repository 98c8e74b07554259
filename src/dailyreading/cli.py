"""Command-line interface for the daily reading service."""

from __future__ import annotations

import asyncio
import json
from datetime import date, datetime
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.table import Table

from dailyreading import build_assembler, build_client
from dailyreading.catalog import ESSAY_CATALOG, POET_ROSTER
from dailyreading.logconfig import configure_logging
from dailyreading.models import DailyReadings, Reading
from dailyreading.services import essay_for
from dailyreading.settings import Settings, get_settings

console = Console()
app = typer.Typer(help="Daily Reading – one poem and one essay per day")
logger = structlog.get_logger(__name__)


@app.callback()
def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)


def _parse_day(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise typer.BadParameter("Use YYYY-MM-DD, e.g. 2024-06-15") from exc


async def _assemble(settings: Settings, day: Optional[date], poem_only: bool) -> DailyReadings | Reading:
    async with build_client(settings) as client:
        assembler = build_assembler(client, settings)
        if poem_only:
            return await assembler.get_daily_reading(day)
        return await assembler.get_daily_readings(day)


@app.command()
def today(
    day: Optional[str] = typer.Option(None, "--date", help="Calendar day (YYYY-MM-DD); defaults to today"),
    as_json: bool = typer.Option(False, "--json", help="Emit the readings as JSON"),
    poem_only: bool = typer.Option(False, "--poem-only", help="Only resolve the poem"),
) -> None:
    """Print the poem and essay selected for a day."""
    settings = get_settings()
    logger.debug("cli.today", day=day, poem_only=poem_only)
    result = asyncio.run(_assemble(settings, _parse_day(day), poem_only))
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    if isinstance(result, Reading):
        _print_reading(result)
        return
    console.print(f"[bold]Reading for {result.day.isoformat()}[/bold] (seed {result.seed})")
    _print_reading(result.poem)
    _print_reading(result.essay)


def _print_reading(reading: Reading) -> None:
    console.rule(f"{reading.kind.value.upper()}: {reading.title}")
    console.print(f"[italic]by {reading.author}[/italic]\n")
    separator = "\n" if reading.kind.value == "poem" else "\n\n"
    console.print(separator.join(reading.content), highlight=False)
    if reading.citation_text:
        source = reading.citation_text
        if reading.citation_url:
            source += f" – {reading.citation_url}"
        console.print(f"\n[dim]From {source}[/dim]")


@app.command()
def config(as_json: bool = typer.Option(False, "--json", help="Emit settings as JSON")) -> None:
    """Show the effective settings."""
    settings = get_settings()
    payload = settings.model_dump()
    if as_json:
        typer.echo(json.dumps(payload))
        return
    table = Table(title="Daily Reading Settings")
    table.add_column("Setting")
    table.add_column("Value", overflow="fold")
    for key, value in payload.items():
        table.add_row(key, str(value))
    console.print(table)


@app.command()
def catalog(
    day: Optional[str] = typer.Option(None, "--date", help="Highlight the essay chosen for this day"),
) -> None:
    """List the essay catalog in selection order."""
    settings = get_settings()
    chosen = essay_for(_parse_day(day) or datetime.now(settings.zone), settings)
    table = Table(title=f"Essay Catalog ({len(ESSAY_CATALOG)} entries)")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Document")
    for index, entry in enumerate(ESSAY_CATALOG):
        marker = "[green]*[/green] " if entry.document_id == chosen.document_id else ""
        table.add_row(str(index), f"{marker}{entry.title}", entry.author, entry.document_id)
    console.print(table)


@app.command()
def poets() -> None:
    """List the poet roster and which poets are queried."""
    settings = get_settings()
    table = Table(title="Poet Roster")
    table.add_column("#", justify="right")
    table.add_column("Poet")
    table.add_column("Queried")
    for index, name in enumerate(POET_ROSTER):
        queried = "yes" if index < settings.poet_fan_out else "—"
        table.add_row(str(index), name, queried)
    console.print(table)


if __name__ == "__main__":  # pragma: no cover
    app()
