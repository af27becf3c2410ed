"""CLI commands for Trading Tracker.

This package provides the command-line interface for capturing
checklists, analyses and trades, and for viewing trend reports.
"""

from tradetracker.cli.main import cli, main

__all__ = ["cli", "main"]
