"""Trend report data models.

Reports are recomputed on every query and never stored.
"""

from pydantic import Field

from tradetracker.models.base import JournalModel


class DailyScore(JournalModel):
    """Average checklist score for one trading date."""

    date: str
    average_score: float
    captures: int = Field(..., ge=1)


class ChecklistTrendReport(JournalModel):
    """Checklist rollup over a window."""

    days: int
    total_captures: int = 0
    average_score: float = 0.0
    readiness_rates: dict[str, float] = Field(default_factory=dict)
    daily_scores: list[DailyScore] = Field(default_factory=list)


class DailyCompletion(JournalModel):
    """Average analysis completion for one trading date."""

    date: str
    average_score: float
    analyses: int = Field(..., ge=1)


class AnalysisTrendReport(JournalModel):
    """Market analysis rollup over a window."""

    days: int
    total_analyses: int = 0
    average_completion_score: float = 0.0
    conclusion_mix: dict[str, float] = Field(default_factory=dict)
    directional_bias_mix: dict[str, float] = Field(default_factory=dict)
    daily_completion: list[DailyCompletion] = Field(default_factory=list)


class TradeRollup(JournalModel):
    """Trade metrics shared by weekly, strategy and asset buckets."""

    trades: int = Field(..., ge=1)
    net_profit: float
    win_rate: float = Field(..., ge=0, le=100)
    average_risk_reward_ratio: float


class WeeklyTradeStats(TradeRollup):
    """Trade metrics for the ISO week starting on week_start (a Monday)."""

    week_start: str


class GroupTradeStats(TradeRollup):
    """Trade metrics for one strategy or asset."""

    name: str


class TradeTrendReport(JournalModel):
    """Trade log rollup over a window."""

    days: int
    total_trades: int = 0
    net_profit: float = 0.0
    win_rate: float = 0.0
    average_risk_reward_ratio: float = 0.0
    average_journal_score: float = 0.0
    weekly_stats: list[WeeklyTradeStats] = Field(default_factory=list)
    by_strategy: list[GroupTradeStats] = Field(default_factory=list)
    by_asset: list[GroupTradeStats] = Field(default_factory=list)
