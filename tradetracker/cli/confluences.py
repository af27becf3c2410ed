"""Confluence tag commands for Trading Tracker CLI.

The shared base catalog is edited with ``--base``.
"""

import click
from rich.table import Table

from tradetracker.cli.common import console, fail, get_journal

_base_option = click.option("--base", is_flag=True, help="Target the shared base catalog.")


@click.group()
def confluences() -> None:
    """Confluence tag commands.

    \b
    Commands:
      list    - View base and custom tags
      add     - Add a tag
      rename  - Rename a tag
      remove  - Delete a tag
    """
    pass


@confluences.command("list")
def list_confluences() -> None:
    """Display base and custom confluence tags."""
    tags = get_journal().confluences()

    table = Table(title="Confluences", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Type", justify="center")
    table.add_column("ID", style="dim")
    for tag in tags:
        kind = "[cyan]Base[/cyan]" if tag.is_base else "[green]Custom[/green]"
        table.add_row(tag.name, kind, tag.id)
    console.print(table)


@confluences.command("add")
@click.argument("name")
@_base_option
def add(name: str, base: bool) -> None:
    """Add a confluence tag."""
    from tradetracker.db.store import DuplicateEntryError

    try:
        tag = get_journal().add_confluence(name, base=base)
    except DuplicateEntryError as e:
        fail(str(e), title="Duplicate")
    except ValueError as e:
        fail(str(e))

    console.print(f"[green]Added {'base ' if base else ''}confluence '{tag.name}'[/green] [dim]({tag.id})[/dim]")


@confluences.command("rename")
@click.argument("confluence_id")
@click.argument("name")
@_base_option
def rename(confluence_id: str, name: str, base: bool) -> None:
    """Rename a confluence tag."""
    from tradetracker.db.store import DuplicateEntryError, EntryNotFoundError

    try:
        get_journal().rename_confluence(confluence_id, name, base=base)
    except DuplicateEntryError as e:
        fail(str(e), title="Duplicate")
    except EntryNotFoundError as e:
        fail(str(e), title="Not Found")
    except ValueError as e:
        fail(str(e))

    console.print(f"[green]Renamed confluence {confluence_id}[/green]")


@confluences.command("remove")
@click.argument("confluence_id")
@_base_option
def remove(confluence_id: str, base: bool) -> None:
    """Delete a confluence tag."""
    from tradetracker.db.store import EntryNotFoundError

    try:
        get_journal().remove_confluence(confluence_id, base=base)
    except EntryNotFoundError as e:
        fail(str(e), title="Not Found")

    console.print(f"[green]Deleted confluence {confluence_id}[/green]")
