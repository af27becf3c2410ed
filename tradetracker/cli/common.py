"""Helpers shared by the CLI command modules."""

import json
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

console = Console()


def get_journal(ctx: Optional[click.Context] = None):
    """Build the journal service from the loaded configuration."""
    from tradetracker.config import get_config, get_db_path, get_user_id
    from tradetracker.db.store import JournalStore
    from tradetracker.journal import TradeJournal

    ctx = ctx or click.get_current_context(silent=True)
    config = ctx.obj.get("config") if ctx and ctx.obj else get_config()
    store = JournalStore(get_db_path(config))
    return TradeJournal(store, get_user_id(config))


def get_default_days(ctx: Optional[click.Context] = None):
    """Get the configured default window length."""
    from tradetracker.config import get_config, get_default_days as configured_days

    ctx = ctx or click.get_current_context(silent=True)
    config = ctx.obj.get("config") if ctx and ctx.obj else get_config()
    return configured_days(config)


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def load_payload(source) -> dict:
    """Read a JSON object from an open click file."""
    try:
        payload = json.load(source)
    except json.JSONDecodeError as e:
        fail(f"Invalid JSON: {e}")
    if not isinstance(payload, dict):
        fail("Expected a JSON object")
    return payload


def score_color(score: Optional[float]) -> str:
    """Pick a color for a 0-100 score."""
    if score is None:
        return "dim"
    if score >= 80:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


def money(value: Optional[float]) -> str:
    """Format a signed money value with color."""
    if value is None:
        return "-"
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else ""
    return f"[{color}]{sign}{value:,.2f}[/{color}]"
