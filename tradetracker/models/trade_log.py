"""TradeLogEntry data model."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from tradetracker.models.base import JournalModel, to_choice, to_number, to_text

Feeling = Literal["Satisfied", "Neutral", "Disappointed", "Not filled"]
FEELINGS: tuple[str, ...] = ("Satisfied", "Neutral", "Disappointed", "Not filled")

PRICE_FIELDS: tuple[str, ...] = (
    "entry_price",
    "risk_reward_ratio",
    "stop_loss_price",
    "take_profit_price",
    "estimated_loss",
    "estimated_profit",
    "exit_price",
    "total_profit",
)


class TradeLogEntry(JournalModel):
    """Represents one executed or planned trade."""

    kind: Literal["trade"] = "trade"
    id: Optional[str] = Field(default=None, description="Storage ID")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp (UTC)")

    trade_date: str = Field(..., description="Trade date (YYYY-MM-DD)")
    trade_time: Optional[str] = Field(default=None, description="Trade time (HH:MM)")
    session_name: Optional[str] = Field(default=None, description="Session label")
    trading_asset: str = Field(..., description="Traded instrument")
    strategy: str = Field(..., description="Strategy name")
    confluences: list[str] = Field(default_factory=list, description="Confluence tags")

    entry_price: Optional[float] = None
    risk_reward_ratio: Optional[float] = None
    stop_loss_price: Optional[float] = None
    take_profit_price: Optional[float] = None
    estimated_loss: Optional[float] = None
    estimated_profit: Optional[float] = None

    exit_price: Optional[float] = None
    total_profit: Optional[float] = None
    feelings: Optional[Feeling] = None
    comments: Optional[str] = None
    chart_link: Optional[str] = None

    journal_score: Optional[float] = Field(default=None, ge=0, le=100, description="Journal score")

    @field_validator(*PRICE_FIELDS, mode="before")
    @classmethod
    def _optional_number(cls, value):
        return to_number(value)

    @field_validator("confluences", mode="before")
    @classmethod
    def _tag_list(cls, value):
        if not isinstance(value, list):
            return []
        return [tag for tag in value if isinstance(tag, str)]

    @field_validator("feelings", mode="before")
    @classmethod
    def _known_feeling(cls, value):
        return to_choice(value, FEELINGS, None)

    @field_validator("trade_time", "session_name", "comments", "chart_link", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return to_text(value)

    @property
    def is_closed(self) -> bool:
        """A trade is closed once it has an exit price or a profit figure."""
        return self.exit_price is not None or self.total_profit is not None

    @property
    def is_win(self) -> bool:
        """A win is a closed trade with strictly positive profit."""
        return self.is_closed and self.total_profit is not None and self.total_profit > 0
