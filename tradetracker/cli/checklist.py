"""Checklist commands for Trading Tracker CLI.

Handles the pre-session readiness checklist and its history.
"""

from datetime import date
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradetracker.cli.common import console, fail, get_default_days, get_journal, score_color
from tradetracker.models.checklist import CHECKLIST_FLAGS


def _flag_options(func):
    """Attach a --x/--no-x option for every readiness flag."""
    for name, label in reversed(CHECKLIST_FLAGS):
        option = name.replace("_", "-")
        func = click.option(
            f"--{option}/--no-{option}",
            name,
            default=None,
            help=label,
        )(func)
    return func


@click.command()
@click.option("--date", "trading_date", type=str, default=None, help="Trading date (YYYY-MM-DD). Defaults to today.")
@click.option("--session", "session_name", type=str, default=None, help="Session label, e.g. 'London Open'.")
@click.option("--signature", type=str, default=None, help="Your signature.")
@click.option("--notes", type=str, default=None, help="Optional notes.")
@click.option("--yes-all", is_flag=True, help="Answer yes to every question not set explicitly.")
@_flag_options
def check(
    trading_date: Optional[str],
    session_name: Optional[str],
    signature: Optional[str],
    notes: Optional[str],
    yes_all: bool,
    **flags: Optional[bool],
) -> None:
    """Capture a pre-session readiness checklist.

    Asks the four self-evaluation questions and the four commitments,
    then stores the checklist with its readiness score.

    \b
    Examples:
      tradetracker check
      tradetracker check --yes-all --signature "JD"
      tradetracker check --no-mentally-ready --session "NY Open"
    """
    from tradetracker.models import ChecklistEntry

    if trading_date:
        try:
            date.fromisoformat(trading_date)
        except ValueError:
            fail(f"Invalid date format: {trading_date}. Use YYYY-MM-DD")
    else:
        trading_date = date.today().isoformat()

    answers = {}
    for name, label in CHECKLIST_FLAGS:
        value = flags.get(name)
        if value is None:
            value = True if yes_all else click.confirm(label, default=False)
        answers[name] = value

    if signature is None:
        signature = click.prompt("Signature", default="", show_default=False)

    entry = ChecklistEntry(
        trading_date=trading_date,
        session_name=session_name,
        signature=signature,
        notes=notes,
        **answers,
    )
    stored = get_journal().capture_checklist(entry)

    color = score_color(stored.score)
    ticked = sum(stored.flags())
    console.print(Panel(
        f"[bold]Trading date:[/bold] {stored.trading_date}\n"
        f"[bold]Readiness:[/bold]    [{color}]{stored.score:.1f}%[/{color}] "
        f"({ticked}/{len(CHECKLIST_FLAGS)} checks)\n\n"
        f"[dim]ID: {stored.id}[/dim]",
        title="[bold cyan]Checklist Captured[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.option("--days", type=str, default=None, help="Window in days (1-365, default 30).")
def checks(days: Optional[str]) -> None:
    """Display checklist history.

    \b
    Examples:
      tradetracker checks
      tradetracker checks --days 7
    """
    journal = get_journal()
    window = journal.window(days if days is not None else get_default_days())
    entries = journal.history("checklist", window.days)

    if not entries:
        console.print(Panel(
            f"[dim]No checklists in the last {window.days} days[/dim]",
            title="[bold]Checklist History[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title=f"Checklist History ({window.days} days)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Session")
    table.add_column("Score", justify="right")
    table.add_column("Signature")
    table.add_column("ID", style="dim")

    for entry in entries:
        color = score_color(entry.score)
        table.add_row(
            entry.trading_date,
            entry.session_name or "-",
            f"[{color}]{entry.score:.1f}[/{color}]" if entry.score is not None else "-",
            entry.signature or "-",
            entry.id or "-",
        )

    console.print(table)
