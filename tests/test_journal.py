"""Tests for the journal service.

**Feature: trading-tracker**
"""

import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from tradetracker.db import DuplicateEntryError, EntryNotFoundError, JournalStore
from tradetracker.journal import TradeJournal
from tradetracker.models import ChecklistEntry, MarketAnalysisEntry, TradeLogEntry, TradingDay
from tradetracker.models.checklist import FLAG_NAMES
from tradetracker.scoring import score_entry

NOW = datetime(2024, 6, 5, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def journal():
    """Create a journal on a temporary database with a fixed clock."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JournalStore(Path(tmpdir) / "test.db")
        yield TradeJournal(store, "trader-1", now=lambda: NOW)


def full_checklist(trading_date: str = "2024-06-05") -> ChecklistEntry:
    return ChecklistEntry(trading_date=trading_date, **{name: True for name in FLAG_NAMES})


class TestCapture:
    """
    **Feature: trading-tracker, Property 25: Entries Are Scored On Write**
    """

    def test_checklist_scored_and_timestamped(self, journal: TradeJournal):
        stored = journal.capture_checklist(full_checklist())

        assert stored.score == 100.0
        assert stored.created_at == NOW
        assert journal.store.get_entry("trader-1", stored.id).score == 100.0

    def test_trade_derived_then_scored(self, journal: TradeJournal):
        stored = journal.log_trade(
            TradeLogEntry(
                trade_date="2024-06-05",
                trade_time="09:30",
                trading_asset="XAUUSD",
                strategy="Breakout",
                confluences=["RSI - Above 55"],
                entry_price=100,
                stop_loss_price=90,
                take_profit_price=120,
                risk_reward_ratio=2,
                exit_price=130,
                feelings="Satisfied",
            )
        )

        assert stored.estimated_loss == 10.0
        assert stored.estimated_profit == 20.0
        assert stored.total_profit == 30.0
        # All 11 open fields, 3 of 5 close fields
        assert stored.journal_score == 84.0

    def test_log_trade_replaces_existing(self, journal: TradeJournal):
        first = journal.log_trade(TradeLogEntry(trade_date="2024-06-05", trading_asset="XAUUSD", strategy="S"))
        updated = journal.log_trade(
            TradeLogEntry(trade_date="2024-06-05", trading_asset="XAUUSD", strategy="S", total_profit=12.0),
            entry_id=first.id,
        )

        assert updated.id == first.id
        assert updated.journal_score > first.journal_score
        assert len(journal.history("trade")) == 1

    def test_remove(self, journal: TradeJournal):
        stored = journal.capture_checklist(full_checklist())
        journal.remove("checklist", stored.id)

        assert journal.history("checklist") == []
        with pytest.raises(EntryNotFoundError):
            journal.remove("checklist", stored.id)


class TestAnalysisPerDay:
    """
    **Feature: trading-tracker, Property 26: One Analysis Per Trading Day**

    A second new analysis for the same trading day is rejected and points
    at the one already stored.
    """

    def test_duplicate_day_rejected(self, journal: TradeJournal):
        day = journal.add_trading_day(TradingDay(trading_date="2024-06-05"))
        first = journal.save_analysis(MarketAnalysisEntry(day_id=day.id, pair="XAUUSD"))

        with pytest.raises(DuplicateEntryError) as excinfo:
            journal.save_analysis(MarketAnalysisEntry(day_id=day.id, pair="EURUSD"))
        assert excinfo.value.existing_id == first.id

    def test_replace_by_id_allowed(self, journal: TradeJournal):
        day = journal.add_trading_day(TradingDay(trading_date="2024-06-05"))
        first = journal.save_analysis(MarketAnalysisEntry(day_id=day.id, pair="XAUUSD"))
        replaced = journal.save_analysis(
            MarketAnalysisEntry(day_id=day.id, pair="XAUUSD", candle_daily="bullish"), entry_id=first.id
        )

        assert replaced.id == first.id
        assert replaced.analysis_score > first.analysis_score

    def test_analyses_without_day_are_unrestricted(self, journal: TradeJournal):
        journal.save_analysis(MarketAnalysisEntry(pair="XAUUSD"))
        journal.save_analysis(MarketAnalysisEntry(pair="XAUUSD"))

        assert len(journal.history("analysis")) == 2


class TestWindowedReports:
    """
    **Feature: trading-tracker, Property 27: Reports Only See The Window**

    *For any* window, entries created before its start are left out.
    """

    def test_old_entries_excluded(self, journal: TradeJournal):
        journal.capture_checklist(full_checklist())
        journal.store.save_entry(
            "trader-1",
            score_entry(ChecklistEntry(trading_date="2024-05-01")),
            created_at=datetime(2024, 5, 1, 9, tzinfo=timezone.utc),
        )

        week = journal.checklist_trends(7)
        quarter = journal.checklist_trends("90")

        assert (week.days, week.total_captures, week.average_score) == (7, 1, 100.0)
        assert (quarter.days, quarter.total_captures, quarter.average_score) == (90, 2, 50.0)

    def test_invalid_days_fall_back(self, journal: TradeJournal):
        assert journal.trade_trends("abc").days == 30
        assert journal.analysis_trends(0).days == 30

    def test_trade_report(self, journal: TradeJournal):
        for profit in (30.0, -10.0):
            journal.log_trade(
                TradeLogEntry(trade_date="2024-06-05", trading_asset="XAUUSD", strategy="S", total_profit=profit)
            )

        report = journal.trade_trends()
        assert report.total_trades == 2
        assert report.net_profit == 20.0
        assert report.win_rate == 50.0
        assert report.weekly_stats[0].week_start == "2024-06-03"

    def test_other_users_not_counted(self, journal: TradeJournal):
        journal.capture_checklist(full_checklist())
        other = TradeJournal(journal.store, "trader-2", now=lambda: NOW)

        assert other.checklist_trends().total_captures == 0


class TestReferenceData:
    """
    **Feature: trading-tracker, Property 28: Trading Days And Confluences Per User**
    """

    def test_trading_days_in_window(self, journal: TradeJournal):
        journal.add_trading_day(TradingDay(trading_date="2024-06-05"))
        assert [d.trading_date for d in journal.trading_days(7)] == ["2024-06-05"]

    def test_trading_day_stamped_with_journal_clock(self, journal: TradeJournal):
        day = journal.add_trading_day(TradingDay(trading_date="2024-06-05"))

        assert day.created_at == NOW
        assert journal.store.get_trading_day("trader-1", day.id).created_at == NOW

    def test_future_clock_sees_new_days(self):
        future = datetime(2100, 1, 1, 9, tzinfo=timezone.utc)
        with tempfile.TemporaryDirectory() as tmpdir:
            journal = TradeJournal(JournalStore(Path(tmpdir) / "test.db"), "trader-1", now=lambda: future)
            journal.add_trading_day(TradingDay(trading_date="2100-01-01"))

            assert [d.trading_date for d in journal.trading_days(1)] == ["2100-01-01"]

    def test_confluence_stamped_with_journal_clock(self, journal: TradeJournal):
        tag = journal.add_confluence("London sweep")

        assert tag.created_at == NOW
        assert journal.confluences()[-1].created_at == NOW

    def test_confluence_round_trip(self, journal: TradeJournal):
        tag = journal.add_confluence("London sweep")
        journal.rename_confluence(tag.id, "Asia sweep")

        assert journal.confluences()[-1].name == "Asia sweep"
        journal.remove_confluence(tag.id)
        assert all(t.is_base for t in journal.confluences())
