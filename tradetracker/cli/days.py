"""Trading day commands for Trading Tracker CLI."""

from datetime import date
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradetracker.cli.common import console, fail, get_default_days, get_journal


def _check_date(value: str) -> str:
    try:
        date.fromisoformat(value)
    except ValueError:
        fail(f"Invalid date format: {value}. Use YYYY-MM-DD")
    return value


@click.group()
def days() -> None:
    """Trading day commands.

    \b
    Commands:
      add     - Create a trading day
      update  - Change a trading day
      list    - View recent trading days
      remove  - Delete a trading day
    """
    pass


@days.command("add")
@click.argument("trading_date", required=False)
@click.option("--title", type=str, default=None, help="Short title.")
@click.option("--notes", type=str, default=None, help="Notes for the day.")
def add(trading_date: Optional[str], title: Optional[str], notes: Optional[str]) -> None:
    """Create a trading day (defaults to today).

    \b
    Examples:
      tradetracker days add
      tradetracker days add 2024-06-03 --title "NFP Friday"
    """
    from tradetracker.db.store import DuplicateEntryError
    from tradetracker.models import TradingDay

    trading_date = _check_date(trading_date) if trading_date else date.today().isoformat()
    try:
        day = get_journal().add_trading_day(TradingDay(trading_date=trading_date, title=title, notes=notes))
    except DuplicateEntryError as e:
        fail(str(e), title="Duplicate")

    console.print(Panel(
        f"[bold]{day.trading_date}[/bold] {day.title or ''}\n\n[dim]ID: {day.id}[/dim]",
        title="[bold cyan]Trading Day Created[/bold cyan]",
        border_style="cyan",
    ))


@days.command("update")
@click.argument("day_id")
@click.argument("trading_date")
@click.option("--title", type=str, default=None, help="Short title.")
@click.option("--notes", type=str, default=None, help="Notes for the day.")
def update(day_id: str, trading_date: str, title: Optional[str], notes: Optional[str]) -> None:
    """Change the date, title or notes of a trading day."""
    from tradetracker.db.store import DuplicateEntryError, EntryNotFoundError
    from tradetracker.models import TradingDay

    try:
        get_journal().update_trading_day(
            day_id, TradingDay(trading_date=_check_date(trading_date), title=title, notes=notes)
        )
    except DuplicateEntryError as e:
        fail(str(e), title="Duplicate")
    except EntryNotFoundError as e:
        fail(str(e), title="Not Found")

    console.print(f"[green]Updated trading day {day_id}[/green]")


@days.command("list")
@click.option("--days", "window_days", type=str, default=None, help="Window in days (1-365, default 30).")
def list_days(window_days: Optional[str]) -> None:
    """Display recent trading days."""
    journal = get_journal()
    window = journal.window(window_days if window_days is not None else get_default_days())
    trading_days = journal.trading_days(window.days)

    if not trading_days:
        console.print(Panel(
            f"[dim]No trading days in the last {window.days} days[/dim]",
            title="[bold]Trading Days[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Trading Days", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Title")
    table.add_column("Notes", max_width=40)
    table.add_column("ID", style="dim")
    for day in trading_days:
        table.add_row(day.trading_date, day.title or "-", day.notes or "-", day.id or "-")
    console.print(table)


@days.command("remove")
@click.argument("day_id")
def remove(day_id: str) -> None:
    """Delete a trading day."""
    from tradetracker.db.store import EntryNotFoundError

    try:
        get_journal().remove_trading_day(day_id)
    except EntryNotFoundError as e:
        fail(str(e), title="Not Found")

    console.print(f"[green]Deleted trading day {day_id}[/green]")
