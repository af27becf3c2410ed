"""Confluence tag data model."""

import re
from datetime import datetime
from typing import Optional

from pydantic import Field

from tradetracker.models.base import JournalModel

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 180

BASE_CONFLUENCES: tuple[str, ...] = (
    "Higher timeframe bias alignment",
    "Break & retest",
    "Rejection at high",
    "Moving average - Bullish - Price above 21 & 50 SMA",
    "Moving average - Bullish - 21 crossing above 50",
    "RSI - Above 55",
    "RSI - Below 45",
    "MACD - Histogram expanding in direction of trade",
)


def normalize_confluence_name(name: str) -> str:
    """Normalise a tag name for duplicate detection."""
    return re.sub(r"\s+", " ", name.strip()).lower()


class Confluence(JournalModel):
    """A confluence tag, either from the shared base catalog or user-defined."""

    id: str = Field(..., description="Storage ID")
    name: str = Field(..., min_length=1, description="Tag name")
    is_base: bool = Field(default=False, description="Part of the shared catalog")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp (UTC)")
