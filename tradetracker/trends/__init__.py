"""Trend aggregation over windows of scored entries."""

from tradetracker.trends.aggregator import (
    build_analysis_trend,
    build_checklist_trend,
    build_trade_trend,
    week_start,
)
from tradetracker.trends.window import (
    DEFAULT_DAYS,
    TrendWindow,
    parse_query_days,
    resolve_window,
    window_start,
)

__all__ = [
    "DEFAULT_DAYS",
    "TrendWindow",
    "build_analysis_trend",
    "build_checklist_trend",
    "build_trade_trend",
    "parse_query_days",
    "resolve_window",
    "week_start",
    "window_start",
]
