"""Scoring engine: derived trade values and write-time scores."""

from tradetracker.scoring.derived import (
    TradeDerivedValues,
    apply_derived_values,
    calculate_trade_derived_values,
    is_long_position,
)
from tradetracker.scoring.rounding import percentage, round1, round2
from tradetracker.scoring.scorer import (
    score_analysis,
    score_checklist,
    score_entry,
    score_trade_log,
)

__all__ = [
    "TradeDerivedValues",
    "apply_derived_values",
    "calculate_trade_derived_values",
    "is_long_position",
    "percentage",
    "round1",
    "round2",
    "score_analysis",
    "score_checklist",
    "score_entry",
    "score_trade_log",
]
