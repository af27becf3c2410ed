"""Configuration commands for Trading Tracker CLI."""

import click
from rich.console import Console
from rich.panel import Panel

console = Console()


@click.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
def init(force: bool) -> None:
    """Create a template config file.

    \b
    Examples:
      tradetracker init
      tradetracker init --force
    """
    from tradetracker.config import create_template_config, get_config_path

    config_path = get_config_path()
    if config_path.exists() and not force:
        console.print(Panel(
            f"Config already exists at [cyan]{config_path}[/cyan]\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Config[/bold yellow]",
            border_style="yellow",
        ))
        return

    path = create_template_config()
    console.print(Panel(
        f"Created [cyan]{path}[/cyan]\n\n"
        "[dim]Edit it to set your user name, database path and default window.[/dim]",
        title="[bold green]Config[/bold green]",
        border_style="green",
    ))
