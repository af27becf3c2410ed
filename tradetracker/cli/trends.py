"""Trend report commands for Trading Tracker CLI.

Every report is rebuilt from the stored entries on each run.
"""

import json
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradetracker.cli.common import console, get_default_days, get_journal, money, score_color
from tradetracker.models.checklist import CHECKLIST_FLAGS

_days_option = click.option("--days", type=str, default=None, help="Window in days (1-365, default 30).")
_json_option = click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")


def _print_json(report) -> None:
    click.echo(json.dumps(report.to_record(), indent=2))


def _mix_table(title: str, mix: dict[str, float]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Value", style="bold")
    table.add_column("Share", justify="right")
    for key, share in sorted(mix.items(), key=lambda item: -item[1]):
        table.add_row(key, f"{share:.1f}%")
    return table


@click.group()
def trends() -> None:
    """Trend reports over a window of days.

    \b
    Commands:
      checks    - Checklist readiness trends
      analysis  - Market analysis completion trends
      trades    - Trade performance trends
    """
    pass


@trends.command("checks")
@_days_option
@_json_option
def checks_report(days: Optional[str], as_json: bool) -> None:
    """Checklist readiness report.

    \b
    Examples:
      tradetracker trends checks
      tradetracker trends checks --days 7 --json
    """
    report = get_journal().checklist_trends(days if days is not None else get_default_days())
    if as_json:
        _print_json(report)
        return

    color = score_color(report.average_score if report.total_captures else None)
    console.print(Panel(
        f"[bold]Captures:[/bold]      {report.total_captures}\n"
        f"[bold]Average score:[/bold] [{color}]{report.average_score:.1f}%[/{color}]",
        title=f"[bold cyan]Checklist Trends ({report.days} days)[/bold cyan]",
        border_style="cyan",
    ))
    if not report.total_captures:
        return

    rates = Table(title="Readiness Rates", show_header=True, header_style="bold cyan")
    rates.add_column("Check")
    rates.add_column("Rate", justify="right")
    for name, label in CHECKLIST_FLAGS:
        rate = report.readiness_rates.get(name, 0.0)
        rate_color = score_color(rate)
        rates.add_row(label, f"[{rate_color}]{rate:.1f}%[/{rate_color}]")
    console.print(rates)

    daily = Table(title="Daily Scores", show_header=True, header_style="bold cyan")
    daily.add_column("Date", style="bold")
    daily.add_column("Captures", justify="right")
    daily.add_column("Average", justify="right")
    for bucket in report.daily_scores:
        bucket_color = score_color(bucket.average_score)
        daily.add_row(bucket.date, str(bucket.captures), f"[{bucket_color}]{bucket.average_score:.1f}[/{bucket_color}]")
    console.print(daily)


@trends.command("analysis")
@_days_option
@_json_option
def analysis_report(days: Optional[str], as_json: bool) -> None:
    """Market analysis completion report.

    \b
    Examples:
      tradetracker trends analysis --days 14
    """
    report = get_journal().analysis_trends(days if days is not None else get_default_days())
    if as_json:
        _print_json(report)
        return

    color = score_color(report.average_completion_score if report.total_analyses else None)
    console.print(Panel(
        f"[bold]Analyses:[/bold]           {report.total_analyses}\n"
        f"[bold]Average completion:[/bold] [{color}]{report.average_completion_score:.1f}%[/{color}]",
        title=f"[bold cyan]Analysis Trends ({report.days} days)[/bold cyan]",
        border_style="cyan",
    ))
    if not report.total_analyses:
        return

    console.print(_mix_table("Conclusion Mix", report.conclusion_mix))
    console.print(_mix_table("Directional Bias Mix", report.directional_bias_mix))

    daily = Table(title="Daily Completion", show_header=True, header_style="bold cyan")
    daily.add_column("Date", style="bold")
    daily.add_column("Analyses", justify="right")
    daily.add_column("Average", justify="right")
    for bucket in report.daily_completion:
        bucket_color = score_color(bucket.average_score)
        daily.add_row(bucket.date, str(bucket.analyses), f"[{bucket_color}]{bucket.average_score:.1f}[/{bucket_color}]")
    console.print(daily)


def _rollup_table(title: str, label: str, rows: list, key: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column(label, style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Net Profit", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("Avg RR", justify="right")
    for row in rows:
        table.add_row(
            getattr(row, key),
            str(row.trades),
            money(row.net_profit),
            f"{row.win_rate:.1f}%",
            f"{row.average_risk_reward_ratio:.2f}",
        )
    return table


@trends.command("trades")
@_days_option
@_json_option
def trades_report(days: Optional[str], as_json: bool) -> None:
    """Trade performance report.

    \b
    Examples:
      tradetracker trends trades
      tradetracker trends trades --days 90 --json
    """
    report = get_journal().trade_trends(days if days is not None else get_default_days())
    if as_json:
        _print_json(report)
        return

    color = score_color(report.average_journal_score if report.total_trades else None)
    console.print(Panel(
        f"[bold]Trades:[/bold]         {report.total_trades}\n"
        f"[bold]Net profit:[/bold]     {money(report.net_profit)}\n"
        f"[bold]Win rate:[/bold]       {report.win_rate:.1f}%\n"
        f"[bold]Average RR:[/bold]     {report.average_risk_reward_ratio:.2f}\n"
        f"[bold]Journal score:[/bold]  [{color}]{report.average_journal_score:.1f}%[/{color}]",
        title=f"[bold cyan]Trade Trends ({report.days} days)[/bold cyan]",
        border_style="cyan",
    ))
    if not report.total_trades:
        return

    console.print(_rollup_table("Weekly", "Week of", report.weekly_stats, "week_start"))
    console.print(_rollup_table("By Strategy", "Strategy", report.by_strategy, "name"))
    console.print(_rollup_table("By Asset", "Asset", report.by_asset, "name"))
