"""MarketAnalysisEntry data model."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from tradetracker.models.base import JournalModel, to_choice, to_text

Direction = Literal["bullish", "bearish", "consolidation", "none"]
StructureBias = Literal["buy", "sell", "none"]

DIRECTIONS: tuple[str, ...] = ("bullish", "bearish", "consolidation", "none")
STRUCTURE_BIASES: tuple[str, ...] = ("buy", "sell", "none")
CONCLUSIONS: tuple[str, ...] = (
    "bullish",
    "bearish",
    "consolidation",
    "bearishConsolidation",
    "bullishConsolidation",
)

# Timeframe and indicator judgments, then the current-trend judgment.
DIRECTIONAL_FIELDS: tuple[str, ...] = (
    "fundamentals_sentiment",
    "moving_averages_5m",
    "patterns_trend_5m",
    "moving_averages_1h",
    "patterns_trend_1h",
    "relative_strength_5m",
    "relative_strength_1h",
    "candle_1h",
    "candle_4h",
    "candle_daily",
    "candle_weekly",
    "candle_monthly",
    "current_trend",
)

CORE_FIELDS: tuple[str, ...] = (
    "pair",
    "trading_date",
    "session_name",
    "conclusion",
    "news_time",
    "sell_rsi_level",
    "buy_rsi_level",
)

ZONE_FIELDS: tuple[str, ...] = (
    "sell_zone_1",
    "sell_zone_2",
    "sell_zone_3",
    "buy_zone_1",
    "buy_zone_2",
    "buy_zone_3",
    "reversal_zone_1",
    "reversal_zone_2",
    "swing_zone_1",
    "swing_zone_2",
)

MARKET_STRUCTURE_ROWS = 13

_TEXT_FIELDS: tuple[str, ...] = ZONE_FIELDS + (
    "news_time",
    "sell_rsi_level",
    "buy_rsi_level",
    "prev_day_low",
    "prev_day_high",
    "current_day_low",
    "current_day_high",
    "futures_price",
)


class MarketStructureRow(JournalModel):
    """One row of the market-structure table."""

    range_name: str = Field(default="", description="Row label")
    bias: StructureBias = Field(default="none", description="Buy/sell bias for the range")
    level: Optional[str] = Field(default=None, description="Price level")

    @field_validator("bias", mode="before")
    @classmethod
    def _known_bias(cls, value):
        return to_choice(value, STRUCTURE_BIASES, "none")

    @field_validator("range_name", mode="before")
    @classmethod
    def _range_text(cls, value):
        return to_text(value) or ""

    @field_validator("level", mode="before")
    @classmethod
    def _level_text(cls, value):
        return to_text(value)


def default_market_structure() -> list[MarketStructureRow]:
    """Return the blank 13-row market-structure table."""
    return [
        MarketStructureRow(range_name=f"Range {index + 1}")
        for index in range(MARKET_STRUCTURE_ROWS)
    ]


class MarketAnalysisEntry(JournalModel):
    """Represents a structural market read for one trading day and pair."""

    kind: Literal["analysis"] = "analysis"
    id: Optional[str] = Field(default=None, description="Storage ID")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp (UTC)")

    day_id: Optional[str] = Field(default=None, description="Trading day this analysis belongs to")
    analysis_time: Optional[str] = Field(default=None, description="Time of analysis")
    pair: str = Field(default="", description="Instrument, e.g. XAUUSD")
    trading_date: str = Field(default="", description="Trading date (YYYY-MM-DD)")
    session_name: str = Field(default="", description="Session label")

    fundamentals_sentiment: Direction = "none"
    moving_averages_5m: Direction = "none"
    patterns_trend_5m: Direction = "none"
    moving_averages_1h: Direction = "none"
    patterns_trend_1h: Direction = "none"
    relative_strength_5m: Direction = "none"
    relative_strength_1h: Direction = "none"
    candle_1h: Direction = "none"
    candle_4h: Direction = "none"
    candle_daily: Direction = "none"
    candle_weekly: Direction = "none"
    candle_monthly: Direction = "none"
    current_trend: Direction = "none"

    conclusion: Optional[str] = Field(default=None, description="Overall conclusion")
    directional_bias: Optional[Literal["bullish", "bearish", "none"]] = None
    has_clear_trend: bool = False
    trading_style: Optional[Literal["trend", "consolidation"]] = None
    trading_notes: Optional[str] = None

    prev_day_low: Optional[str] = None
    prev_day_high: Optional[str] = None
    current_day_low: Optional[str] = None
    current_day_high: Optional[str] = None
    futures_price: Optional[str] = None
    price_action_notes: Optional[str] = None

    red_folder_news: bool = False
    news_impact: Optional[Literal["high", "low"]] = None
    news_time: Optional[str] = None
    news_notes: Optional[str] = None
    sell_rsi_level: Optional[str] = None
    buy_rsi_level: Optional[str] = None

    sell_zone_1: Optional[str] = None
    sell_zone_2: Optional[str] = None
    sell_zone_3: Optional[str] = None
    buy_zone_1: Optional[str] = None
    buy_zone_2: Optional[str] = None
    buy_zone_3: Optional[str] = None
    reversal_zone_1: Optional[str] = None
    reversal_zone_2: Optional[str] = None
    swing_zone_1: Optional[str] = None
    swing_zone_2: Optional[str] = None

    market_structure: list[MarketStructureRow] = Field(default_factory=default_market_structure)
    analysis_score: Optional[float] = Field(default=None, ge=0, le=100, description="Completion score")

    @field_validator(*DIRECTIONAL_FIELDS, mode="before")
    @classmethod
    def _known_direction(cls, value):
        return to_choice(value, DIRECTIONS, "none")

    @field_validator(*_TEXT_FIELDS, "conclusion", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return to_text(value)

    @field_validator("pair", "trading_date", "session_name", mode="before")
    @classmethod
    def _required_text(cls, value):
        return to_text(value) or ""

    @field_validator("directional_bias", mode="before")
    @classmethod
    def _known_bias(cls, value):
        return to_choice(value, ("bullish", "bearish", "none"), None)

    @field_validator("trading_style", mode="before")
    @classmethod
    def _known_style(cls, value):
        return to_choice(value, ("trend", "consolidation"), None)

    @field_validator("news_impact", mode="before")
    @classmethod
    def _known_impact(cls, value):
        return to_choice(value, ("high", "low"), None)

    @field_validator("has_clear_trend", "red_folder_news", mode="before")
    @classmethod
    def _strict_flag(cls, value):
        return value is True

    @field_validator("market_structure", mode="before")
    @classmethod
    def _structure_rows(cls, value):
        if not isinstance(value, list):
            return default_market_structure()
        # Unreadable rows stay as blank rows so the table keeps its size.
        return [
            row if isinstance(row, (dict, MarketStructureRow)) else MarketStructureRow(range_name=f"Range {index + 1}")
            for index, row in enumerate(value)
        ]
