"""Property-based tests for the journal store.

**Feature: trading-tracker**
"""

import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradetracker.db import DuplicateEntryError, EntryNotFoundError, JournalStore
from tradetracker.models import ChecklistEntry, MarketAnalysisEntry, TradeLogEntry, TradingDay
from tradetracker.models.confluence import BASE_CONFLUENCES
from tradetracker.scoring import score_entry


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield JournalStore(db_path)


def at(day: int, hour: int = 12) -> datetime:
    return datetime(2024, 6, day, hour, tzinfo=timezone.utc)


def make_trade(**fields) -> TradeLogEntry:
    fields.setdefault("trade_date", "2024-06-03")
    fields.setdefault("trading_asset", "XAUUSD")
    fields.setdefault("strategy", "Breakout")
    return score_entry(TradeLogEntry(**fields))


class TestDatabaseSchemaCompleteness:
    """
    **Feature: trading-tracker, Property 20: Database Schema Completeness**

    *For any* fresh database, the entries, trading_days and confluences
    tables exist.
    """

    def test_schema_completeness(self, temp_db: JournalStore):
        tables = temp_db.get_tables()

        for table in JournalStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_reopening_keeps_data(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "test.db"
            saved = JournalStore(db_path).save_entry("u1", make_trade())

            reopened = JournalStore(db_path)
            assert reopened.get_entry("u1", saved.id) is not None


class TestEntryStorage:
    """
    **Feature: trading-tracker, Property 21: Entries Round-Trip Through Storage**

    *For any* stored entry, reading it back by ID returns the same record,
    and it is only visible to its owner.
    """

    def test_save_assigns_id_and_time(self, temp_db: JournalStore):
        stored = temp_db.save_entry("u1", make_trade(), created_at=at(5))

        assert stored.id
        assert stored.created_at == at(5)

    def test_get_returns_same_record(self, temp_db: JournalStore):
        stored = temp_db.save_entry("u1", make_trade(entry_price=2330.0, exit_price=2340.0), created_at=at(5))
        loaded = temp_db.get_entry("u1", stored.id)

        assert isinstance(loaded, TradeLogEntry)
        assert loaded.id == stored.id
        assert loaded.total_profit == 10.0
        assert loaded.journal_score == stored.journal_score
        assert loaded.created_at == at(5)

    def test_entries_are_private_to_user(self, temp_db: JournalStore):
        stored = temp_db.save_entry("u1", make_trade())

        assert temp_db.get_entry("u2", stored.id) is None
        assert temp_db.get_entries("u2", "trade") == []

    def test_entries_filtered_by_kind(self, temp_db: JournalStore):
        temp_db.save_entry("u1", make_trade())
        temp_db.save_entry("u1", score_entry(ChecklistEntry(trading_date="2024-06-03")))
        temp_db.save_entry("u1", score_entry(MarketAnalysisEntry(pair="EURUSD")))

        assert len(temp_db.get_entries("u1", "trade")) == 1
        assert [e.kind for e in temp_db.get_entries("u1", "checklist")] == ["checklist"]
        assert temp_db.get_entries("u1", "analysis")[0].pair == "EURUSD"

    def test_newest_first(self, temp_db: JournalStore):
        for day in (3, 5, 4):
            temp_db.save_entry("u1", make_trade(trade_date=f"2024-06-0{day}"), created_at=at(day))

        assert [e.trade_date for e in temp_db.get_entries("u1", "trade")] == [
            "2024-06-05",
            "2024-06-04",
            "2024-06-03",
        ]

    def test_since_is_inclusive(self, temp_db: JournalStore):
        temp_db.save_entry("u1", make_trade(strategy="old"), created_at=at(2, 23))
        temp_db.save_entry("u1", make_trade(strategy="edge"), created_at=datetime(2024, 6, 3, tzinfo=timezone.utc))
        temp_db.save_entry("u1", make_trade(strategy="new"), created_at=at(4))

        since = datetime(2024, 6, 3, tzinfo=timezone.utc)
        assert [e.strategy for e in temp_db.get_entries("u1", "trade", since=since)] == ["new", "edge"]

    def test_unknown_kind_rejected(self, temp_db: JournalStore):
        with pytest.raises(ValueError):
            temp_db.get_entries("u1", "session")

    @given(count=st.integers(min_value=0, max_value=10))
    @settings(max_examples=10)
    def test_stats_count_entries(self, count: int):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JournalStore(Path(tmpdir) / "test.db")
            for _ in range(count):
                store.save_entry("u1", make_trade())

            assert store.get_stats()["entries"] == count


class TestEntryUpdates:
    """
    **Feature: trading-tracker, Property 22: Replace And Delete Respect Kind**
    """

    def test_replace_keeps_id_and_creation_time(self, temp_db: JournalStore):
        stored = temp_db.save_entry("u1", make_trade(), created_at=at(3))
        replaced = temp_db.replace_entry("u1", stored.id, make_trade(exit_price=2400.0, entry_price=2330.0))

        assert replaced.id == stored.id
        assert replaced.created_at == at(3)
        assert temp_db.get_entry("u1", stored.id).exit_price == 2400.0

    def test_replace_with_other_kind_fails(self, temp_db: JournalStore):
        stored = temp_db.save_entry("u1", make_trade())

        with pytest.raises(EntryNotFoundError):
            temp_db.replace_entry("u1", stored.id, score_entry(ChecklistEntry(trading_date="2024-06-03")))

    def test_replace_missing_fails(self, temp_db: JournalStore):
        with pytest.raises(EntryNotFoundError):
            temp_db.replace_entry("u1", "missing", make_trade())

    def test_delete(self, temp_db: JournalStore):
        stored = temp_db.save_entry("u1", make_trade())
        temp_db.delete_entry("u1", "trade", stored.id)

        assert temp_db.get_entry("u1", stored.id) is None

    def test_delete_wrong_kind_fails(self, temp_db: JournalStore):
        stored = temp_db.save_entry("u1", make_trade())

        with pytest.raises(EntryNotFoundError):
            temp_db.delete_entry("u1", "analysis", stored.id)
        assert temp_db.get_entry("u1", stored.id) is not None


class TestTradingDays:
    """
    **Feature: trading-tracker, Property 23: One Trading Day Per Date**
    """

    def test_add_and_get(self, temp_db: JournalStore):
        day = temp_db.save_trading_day("u1", TradingDay(trading_date="2024-06-03", title="NFP"))
        loaded = temp_db.get_trading_day("u1", day.id)

        assert loaded.trading_date == "2024-06-03"
        assert loaded.title == "NFP"

    def test_duplicate_date_rejected(self, temp_db: JournalStore):
        temp_db.save_trading_day("u1", TradingDay(trading_date="2024-06-03"))

        with pytest.raises(DuplicateEntryError):
            temp_db.save_trading_day("u1", TradingDay(trading_date="2024-06-03"))

    def test_same_date_for_other_user(self, temp_db: JournalStore):
        temp_db.save_trading_day("u1", TradingDay(trading_date="2024-06-03"))
        temp_db.save_trading_day("u2", TradingDay(trading_date="2024-06-03"))

        assert len(temp_db.get_trading_days("u1")) == 1
        assert len(temp_db.get_trading_days("u2")) == 1

    def test_update_to_taken_date_rejected(self, temp_db: JournalStore):
        temp_db.save_trading_day("u1", TradingDay(trading_date="2024-06-03"))
        other = temp_db.save_trading_day("u1", TradingDay(trading_date="2024-06-04"))

        with pytest.raises(DuplicateEntryError):
            temp_db.update_trading_day("u1", other.id, TradingDay(trading_date="2024-06-03"))

    def test_update(self, temp_db: JournalStore):
        day = temp_db.save_trading_day("u1", TradingDay(trading_date="2024-06-03"))
        temp_db.update_trading_day("u1", day.id, TradingDay(trading_date="2024-06-05", notes="moved"))

        loaded = temp_db.get_trading_day("u1", day.id)
        assert (loaded.trading_date, loaded.notes) == ("2024-06-05", "moved")

    def test_update_missing_fails(self, temp_db: JournalStore):
        with pytest.raises(EntryNotFoundError):
            temp_db.update_trading_day("u1", "missing", TradingDay(trading_date="2024-06-03"))

    def test_delete(self, temp_db: JournalStore):
        day = temp_db.save_trading_day("u1", TradingDay(trading_date="2024-06-03"))
        temp_db.delete_trading_day("u1", day.id)

        assert temp_db.get_trading_day("u1", day.id) is None
        with pytest.raises(EntryNotFoundError):
            temp_db.delete_trading_day("u1", day.id)


class TestConfluences:
    """
    **Feature: trading-tracker, Property 24: Confluence Catalog Rules**

    The base catalog is seeded once and listed first; custom tags may not
    duplicate any visible tag after normalisation.
    """

    def test_base_catalog_seeded(self, temp_db: JournalStore):
        tags = temp_db.get_confluences("u1")

        assert [tag.name for tag in tags] == list(BASE_CONFLUENCES)
        assert all(tag.is_base for tag in tags)

    def test_custom_listed_after_base(self, temp_db: JournalStore):
        temp_db.add_confluence("u1", "  London sweep  ")
        tags = temp_db.get_confluences("u1")

        assert tags[-1].name == "London sweep"
        assert tags[-1].is_base is False
        assert len(temp_db.get_confluences("u2")) == len(BASE_CONFLUENCES)

    def test_duplicate_of_base_rejected(self, temp_db: JournalStore):
        with pytest.raises(DuplicateEntryError):
            temp_db.add_confluence("u1", " rsi -  ABOVE 55 ")

    def test_duplicate_custom_rejected(self, temp_db: JournalStore):
        temp_db.add_confluence("u1", "London sweep")

        with pytest.raises(DuplicateEntryError):
            temp_db.add_confluence("u1", "london   SWEEP")

    @pytest.mark.parametrize("name", ["", " ", "a", " b ", "x" * 181])
    def test_name_length_enforced(self, temp_db: JournalStore, name: str):
        with pytest.raises(ValueError):
            temp_db.add_confluence("u1", name)

    def test_length_bounds_inclusive(self, temp_db: JournalStore):
        temp_db.add_confluence("u1", "ab")
        temp_db.add_confluence("u1", "y" * 180)

        assert len(temp_db.get_confluences("u1")) == len(BASE_CONFLUENCES) + 2

    def test_rename(self, temp_db: JournalStore):
        tag = temp_db.add_confluence("u1", "London sweep")
        temp_db.rename_confluence("u1", tag.id, "Asia sweep")

        assert "Asia sweep" in [t.name for t in temp_db.get_confluences("u1")]

    def test_rename_to_own_name_allowed(self, temp_db: JournalStore):
        tag = temp_db.add_confluence("u1", "London sweep")
        temp_db.rename_confluence("u1", tag.id, "LONDON SWEEP")

        assert temp_db.get_confluences("u1")[-1].name == "LONDON SWEEP"

    def test_rename_to_taken_name_rejected(self, temp_db: JournalStore):
        tag = temp_db.add_confluence("u1", "London sweep")

        with pytest.raises(DuplicateEntryError):
            temp_db.rename_confluence("u1", tag.id, "Break & retest")

    def test_base_tags_need_base_flag(self, temp_db: JournalStore):
        base_id = temp_db.get_confluences("u1")[0].id

        with pytest.raises(EntryNotFoundError):
            temp_db.delete_confluence("u1", base_id)

        temp_db.delete_confluence("u1", base_id, base=True)
        assert len(temp_db.get_confluences("u1")) == len(BASE_CONFLUENCES) - 1

    def test_add_base_tag_visible_to_everyone(self, temp_db: JournalStore):
        temp_db.add_confluence("admin", "Fair value gap", base=True)

        names = [t.name for t in temp_db.get_confluences("u2") if t.is_base]
        assert "Fair value gap" in names

    def test_later_base_tag_hides_custom_duplicate(self, temp_db: JournalStore):
        temp_db.add_confluence("u1", "Fair value gap")

        # Base tags only clash with other base tags; listing shows one copy.
        temp_db.add_confluence("admin", "fair value gap", base=True)
        names = [t.name.lower() for t in temp_db.get_confluences("u1")]
        assert names.count("fair value gap") == 1
