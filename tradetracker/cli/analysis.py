"""Market analysis commands for Trading Tracker CLI.

Analyses are written as JSON files using the camelCase field names,
e.g. ``{"pair": "XAUUSD", "tradingDate": "2024-06-03", "candle4h": "bullish"}``.
"""

from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradetracker.cli.common import (
    console,
    fail,
    get_default_days,
    get_journal,
    load_payload,
    score_color,
)


@click.group()
def analysis() -> None:
    """Market analysis commands.

    \b
    Commands:
      add     - Save an analysis from a JSON file
      list    - View recent analyses
      remove  - Delete an analysis
    """
    pass


@analysis.command("add")
@click.argument("source", type=click.File("r"))
@click.option("--id", "entry_id", type=str, default=None, help="Replace the analysis with this ID.")
def add(source, entry_id: Optional[str]) -> None:
    """Save a market analysis from a JSON file ('-' for stdin).

    \b
    Examples:
      tradetracker analysis add london.json
      cat london.json | tradetracker analysis add -
      tradetracker analysis add london.json --id 3f2a...
    """
    from tradetracker.db.store import DuplicateEntryError, EntryNotFoundError
    from tradetracker.models import MarketAnalysisEntry

    payload = load_payload(source)
    try:
        entry = MarketAnalysisEntry.model_validate(payload)
    except ValidationError as e:
        fail(f"Invalid analysis:\n\n{e}")

    try:
        stored = get_journal().save_analysis(entry, entry_id=entry_id)
    except DuplicateEntryError as e:
        fail(f"{e}\n\nExisting analysis: {e.existing_id}\nUse --id to replace it.", title="Duplicate")
    except EntryNotFoundError as e:
        fail(str(e), title="Not Found")

    color = score_color(stored.analysis_score)
    console.print(Panel(
        f"[bold]Pair:[/bold]       {stored.pair or '-'}\n"
        f"[bold]Date:[/bold]       {stored.trading_date or '-'}\n"
        f"[bold]Conclusion:[/bold] {stored.conclusion or '-'}\n"
        f"[bold]Completion:[/bold] [{color}]{stored.analysis_score:.1f}%[/{color}]\n\n"
        f"[dim]ID: {stored.id}[/dim]",
        title="[bold cyan]Analysis Saved[/bold cyan]",
        border_style="cyan",
    ))


@analysis.command("list")
@click.option("--days", type=str, default=None, help="Window in days (1-365, default 30).")
@click.option("--day-id", type=str, default=None, help="Only analyses for this trading day.")
def list_analyses(days: Optional[str], day_id: Optional[str]) -> None:
    """Display recent market analyses.

    \b
    Examples:
      tradetracker analysis list
      tradetracker analysis list --days 7
    """
    journal = get_journal()
    window = journal.window(days if days is not None else get_default_days())
    entries = journal.history("analysis", window.days)
    if day_id:
        entries = [entry for entry in entries if entry.day_id == day_id]

    if not entries:
        console.print(Panel(
            f"[dim]No analyses in the last {window.days} days[/dim]",
            title="[bold]Market Analyses[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title=f"Market Analyses ({window.days} days)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Pair")
    table.add_column("Session")
    table.add_column("Conclusion")
    table.add_column("Bias")
    table.add_column("Score", justify="right")
    table.add_column("ID", style="dim")

    for entry in entries:
        color = score_color(entry.analysis_score)
        table.add_row(
            entry.trading_date or "-",
            entry.pair or "-",
            entry.session_name or "-",
            entry.conclusion or "-",
            entry.directional_bias or "-",
            f"[{color}]{entry.analysis_score:.1f}[/{color}]" if entry.analysis_score is not None else "-",
            entry.id or "-",
        )

    console.print(table)


@analysis.command("remove")
@click.argument("entry_id")
def remove(entry_id: str) -> None:
    """Delete a market analysis."""
    from tradetracker.db.store import EntryNotFoundError

    try:
        get_journal().remove("analysis", entry_id)
    except EntryNotFoundError as e:
        fail(str(e), title="Not Found")

    console.print(f"[green]Deleted analysis {entry_id}[/green]")
