"""Data models for Trading Tracker."""

from typing import Annotated, Union

from pydantic import Field, TypeAdapter

from tradetracker.models.analysis import MarketAnalysisEntry, MarketStructureRow
from tradetracker.models.checklist import ChecklistEntry
from tradetracker.models.confluence import Confluence
from tradetracker.models.trade_log import TradeLogEntry
from tradetracker.models.trading_day import TradingDay
from tradetracker.models.trends import (
    AnalysisTrendReport,
    ChecklistTrendReport,
    DailyCompletion,
    DailyScore,
    GroupTradeStats,
    TradeTrendReport,
    WeeklyTradeStats,
)

JournalEntry = Annotated[
    Union[ChecklistEntry, MarketAnalysisEntry, TradeLogEntry],
    Field(discriminator="kind"),
]

ENTRY_KINDS: dict[str, type] = {
    "checklist": ChecklistEntry,
    "analysis": MarketAnalysisEntry,
    "trade": TradeLogEntry,
}

_entry_adapter = TypeAdapter(JournalEntry)


def parse_entry(record: dict) -> Union[ChecklistEntry, MarketAnalysisEntry, TradeLogEntry]:
    """Build the right entry model from a mapping carrying a ``kind`` key."""
    return _entry_adapter.validate_python(record)


__all__ = [
    "AnalysisTrendReport",
    "ChecklistEntry",
    "ChecklistTrendReport",
    "Confluence",
    "DailyCompletion",
    "DailyScore",
    "ENTRY_KINDS",
    "GroupTradeStats",
    "JournalEntry",
    "MarketAnalysisEntry",
    "MarketStructureRow",
    "TradeLogEntry",
    "TradeTrendReport",
    "TradingDay",
    "WeeklyTradeStats",
    "parse_entry",
]
