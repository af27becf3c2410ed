"""TradingDay data model."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from tradetracker.models.base import JournalModel


class TradingDay(JournalModel):
    """A trading day that analyses can be attached to."""

    id: Optional[str] = Field(default=None, description="Storage ID")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp (UTC)")
    trading_date: str = Field(..., min_length=1, description="Trading date (YYYY-MM-DD)")
    title: Optional[str] = Field(default=None, description="Short title")
    notes: Optional[str] = Field(default=None, description="User notes")
