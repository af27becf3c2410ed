"""Journal service.

Joins the store, the scorer and the trend aggregator for a single user.
Scoring happens on write; reports are rebuilt on every read.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from tradetracker.db.store import DuplicateEntryError, JournalStore
from tradetracker.models import (
    AnalysisTrendReport,
    ChecklistEntry,
    ChecklistTrendReport,
    Confluence,
    MarketAnalysisEntry,
    TradeLogEntry,
    TradeTrendReport,
    TradingDay,
)
from tradetracker.scoring import score_entry
from tradetracker.trends import (
    TrendWindow,
    build_analysis_trend,
    build_checklist_trend,
    build_trade_trend,
    resolve_window,
)

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TradeJournal:
    """One user's view of the journal.

    Args:
        store: Storage backend.
        user_id: Owner of every record read or written.
        now: Clock used to resolve trend windows.
    """

    def __init__(
        self,
        store: JournalStore,
        user_id: str,
        now: Callable[[], datetime] = _utc_now,
    ):
        self.store = store
        self.user_id = user_id
        self._now = now

    # ==================== Writes ====================

    def capture_checklist(self, entry: ChecklistEntry) -> ChecklistEntry:
        """Score and store a pre-session checklist."""
        stored = self.store.save_entry(self.user_id, score_entry(entry), created_at=self._now())
        logger.info("Captured checklist for %s (score %.1f)", stored.trading_date, stored.score)
        return stored

    def save_analysis(
        self, entry: MarketAnalysisEntry, entry_id: Optional[str] = None
    ) -> MarketAnalysisEntry:
        """Score and store a market analysis, replacing ``entry_id`` if given.

        Raises:
            DuplicateEntryError: If a new analysis targets a trading day
                that already has one.
            EntryNotFoundError: If ``entry_id`` does not exist.
        """
        scored = score_entry(entry)
        if entry_id:
            return self.store.replace_entry(self.user_id, entry_id, scored)

        if entry.day_id:
            for existing in self.store.get_entries(self.user_id, "analysis"):
                if existing.day_id == entry.day_id:
                    raise DuplicateEntryError(
                        "Market analysis already exists for this trading day",
                        existing_id=existing.id,
                    )

        stored = self.store.save_entry(self.user_id, scored, created_at=self._now())
        logger.info("Saved analysis for %s %s (score %.1f)", stored.pair, stored.trading_date, stored.analysis_score)
        return stored

    def log_trade(self, entry: TradeLogEntry, entry_id: Optional[str] = None) -> TradeLogEntry:
        """Derive, score and store a trade log, replacing ``entry_id`` if given.

        Raises:
            EntryNotFoundError: If ``entry_id`` does not exist.
        """
        scored = score_entry(entry)
        if entry_id:
            return self.store.replace_entry(self.user_id, entry_id, scored)

        stored = self.store.save_entry(self.user_id, scored, created_at=self._now())
        logger.info("Logged %s trade on %s (score %.1f)", stored.trading_asset, stored.trade_date, stored.journal_score)
        return stored

    def remove(self, kind: str, entry_id: str) -> None:
        """Delete an entry of the given kind."""
        self.store.delete_entry(self.user_id, kind, entry_id)

    # ==================== Reads ====================

    def window(self, days: Any) -> TrendWindow:
        """Resolve a raw day count against the journal's clock."""
        resolved = resolve_window(days, self._now())
        logger.debug("Window of %d days starting %s", resolved.days, resolved.start.isoformat())
        return resolved

    def history(self, kind: str, days: Any = None) -> list:
        """List entries of one kind inside the window, newest first."""
        resolved = self.window(days)
        return self.store.get_entries(self.user_id, kind, since=resolved.start)

    def checklist_trends(self, days: Any = None) -> ChecklistTrendReport:
        """Build the checklist report for the requested window."""
        resolved = self.window(days)
        entries = self.store.get_entries(self.user_id, "checklist", since=resolved.start)
        return build_checklist_trend(entries, resolved.days)

    def analysis_trends(self, days: Any = None) -> AnalysisTrendReport:
        """Build the market analysis report for the requested window."""
        resolved = self.window(days)
        entries = self.store.get_entries(self.user_id, "analysis", since=resolved.start)
        return build_analysis_trend(entries, resolved.days)

    def trade_trends(self, days: Any = None) -> TradeTrendReport:
        """Build the trade log report for the requested window."""
        resolved = self.window(days)
        entries = self.store.get_entries(self.user_id, "trade", since=resolved.start)
        return build_trade_trend(entries, resolved.days)

    # ==================== Trading Days ====================

    def add_trading_day(self, day: TradingDay) -> TradingDay:
        """Create a trading day; one per date."""
        return self.store.save_trading_day(self.user_id, day, created_at=self._now())

    def update_trading_day(self, day_id: str, day: TradingDay) -> TradingDay:
        """Update a trading day."""
        return self.store.update_trading_day(self.user_id, day_id, day)

    def trading_days(self, days: Any = None) -> list[TradingDay]:
        """List trading days created inside the window."""
        return self.store.get_trading_days(self.user_id, since=self.window(days).start)

    def remove_trading_day(self, day_id: str) -> None:
        """Delete a trading day."""
        self.store.delete_trading_day(self.user_id, day_id)

    # ==================== Confluences ====================

    def confluences(self) -> list[Confluence]:
        """List base and custom confluence tags."""
        return self.store.get_confluences(self.user_id)

    def add_confluence(self, name: str, base: bool = False) -> Confluence:
        """Add a confluence tag."""
        return self.store.add_confluence(self.user_id, name, base=base, created_at=self._now())

    def rename_confluence(self, confluence_id: str, name: str, base: bool = False) -> None:
        """Rename a confluence tag."""
        self.store.rename_confluence(self.user_id, confluence_id, name, base=base)

    def remove_confluence(self, confluence_id: str, base: bool = False) -> None:
        """Delete a confluence tag."""
        self.store.delete_confluence(self.user_id, confluence_id, base=base)
