"""Trade log commands for Trading Tracker CLI.

Handles logging trades, listing them and removing them.
"""

from datetime import date
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
    money,
    score_color,
)
from tradetracker.models.trade_log import FEELINGS


@click.group()
def trade() -> None:
    """Trade log commands.

    \b
    Commands:
      log     - Log a new trade or update one
      list    - View recent trades
      remove  - Delete a trade
    """
    pass


@trade.command("log")
@click.option("--file", "source", type=click.File("r"), default=None, help="Read the trade from a JSON file.")
@click.option("--id", "entry_id", type=str, default=None, help="Replace the trade with this ID.")
@click.option("--date", "trade_date", type=str, default=None, help="Trade date (YYYY-MM-DD). Defaults to today.")
@click.option("--time", "trade_time", type=str, default=None, help="Trade time (HH:MM).")
@click.option("--session", "session_name", type=str, default=None, help="Session label.")
@click.option("--asset", "trading_asset", type=str, default=None, help="Traded instrument.")
@click.option("--strategy", type=str, default=None, help="Strategy name.")
@click.option("-c", "--confluence", "confluences", multiple=True, help="Confluence tag (repeatable).")
@click.option("--entry", "entry_price", type=float, default=None, help="Entry price.")
@click.option("--stop", "stop_loss_price", type=float, default=None, help="Stop-loss price.")
@click.option("--take-profit", "take_profit_price", type=float, default=None, help="Take-profit price.")
@click.option("--rr", "risk_reward_ratio", type=float, default=None, help="Risk-reward ratio.")
@click.option("--exit", "exit_price", type=float, default=None, help="Exit price.")
@click.option("--profit", "total_profit", type=float, default=None, help="Total profit, used when there is no exit price.")
@click.option("--feelings", type=click.Choice(FEELINGS), default=None, help="How the trade felt.")
@click.option("--comments", type=str, default=None, help="Comments.")
@click.option("--chart", "chart_link", type=str, default=None, help="Chart link.")
def log(source, entry_id: Optional[str], **fields) -> None:
    """Log a trade.

    Loss, profit targets and realised profit are derived from the
    prices when they are given.

    \b
    Examples:
      tradetracker trade log --asset XAUUSD --strategy "Break & retest" \\
          --entry 2330 --stop 2325 --take-profit 2345 --rr 3 -c "RSI - Above 55"
      tradetracker trade log --file trade.json
      tradetracker trade log --id 3f2a... --exit 2344 --feelings Satisfied
    """
    from tradetracker.db.store import EntryNotFoundError
    from tradetracker.models import TradeLogEntry
    from tradetracker.models.base import to_camel

    journal = get_journal()
    payload = load_payload(source) if source else {}
    if entry_id and not source:
        existing = journal.store.get_entry(journal.user_id, entry_id)
        if existing is None or existing.kind != "trade":
            fail(f"trade entry {entry_id} not found", title="Not Found")
        payload = existing.to_record()
        for key in ("id", "createdAt", "journalScore"):
            payload.pop(key, None)

    for name, value in fields.items():
        if name == "confluences":
            if value:
                payload["confluences"] = list(value)
        elif value is not None:
            payload[to_camel(name)] = value

    if not payload.get("tradeDate"):
        payload["tradeDate"] = date.today().isoformat()

    try:
        entry = TradeLogEntry.model_validate(payload)
    except ValidationError as e:
        fail(f"Invalid trade:\n\n{e}")

    try:
        stored = journal.log_trade(entry, entry_id=entry_id)
    except EntryNotFoundError as e:
        fail(str(e), title="Not Found")

    color = score_color(stored.journal_score)
    lines = [
        f"[bold]{stored.trading_asset}[/bold] - {stored.strategy} ({stored.trade_date})\n",
        f"Estimated Loss:   {stored.estimated_loss if stored.estimated_loss is not None else '-'}",
        f"Estimated Profit: {stored.estimated_profit if stored.estimated_profit is not None else '-'}",
        f"Total Profit:     {money(stored.total_profit)}",
        f"Journal Score:    [{color}]{stored.journal_score:.1f}%[/{color}]\n",
        f"[dim]ID: {stored.id}[/dim]",
    ]
    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Trade Logged[/bold cyan]",
        border_style="cyan",
    ))


@trade.command("list")
@click.option("--days", type=str, default=None, help="Window in days (1-365, default 30).")
def list_trades(days: Optional[str]) -> None:
    """Display recent trades.

    \b
    Examples:
      tradetracker trade list
      tradetracker trade list --days 7
    """
    journal = get_journal()
    window = journal.window(days if days is not None else get_default_days())
    entries = journal.history("trade", window.days)

    if not entries:
        console.print(Panel(
            f"[dim]No trades in the last {window.days} days[/dim]",
            title="[bold]Trade Log[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title=f"Trade Log ({window.days} days)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Asset")
    table.add_column("Strategy")
    table.add_column("Entry", justify="right")
    table.add_column("Exit", justify="right")
    table.add_column("Profit", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("ID", style="dim")

    total_profit = 0.0
    for entry in entries:
        color = score_color(entry.journal_score)
        table.add_row(
            f"{entry.trade_date} {entry.trade_time or ''}".strip(),
            entry.trading_asset,
            entry.strategy,
            f"{entry.entry_price:.2f}" if entry.entry_price is not None else "-",
            f"{entry.exit_price:.2f}" if entry.exit_price is not None else "-",
            money(entry.total_profit),
            f"[{color}]{entry.journal_score:.1f}[/{color}]" if entry.journal_score is not None else "-",
            entry.id or "-",
        )
        total_profit += entry.total_profit or 0.0

    console.print(table)
    console.print(f"\n[bold]Total Trades:[/bold] {len(entries)}")
    console.print(f"[bold]Total Profit:[/bold] {money(total_profit)}")


@trade.command("remove")
@click.argument("entry_id")
def remove(entry_id: str) -> None:
    """Delete a trade."""
    from tradetracker.db.store import EntryNotFoundError

    try:
        get_journal().remove("trade", entry_id)
    except EntryNotFoundError as e:
        fail(str(e), title="Not Found")

    console.print(f"[green]Deleted trade {entry_id}[/green]")
