"""Derived trade values.

Computes risk and reward magnitudes and realised profit for a trade log
before it is scored. Missing inputs never raise; they fall back to what
the user supplied.
"""

from typing import NamedTuple, Optional

from tradetracker.models.trade_log import TradeLogEntry
from tradetracker.scoring.rounding import round2


class TradeDerivedValues(NamedTuple):
    """Values computed from the trade's prices."""

    estimated_loss: Optional[float]
    estimated_profit: Optional[float]
    trade_profit: Optional[float]


def is_long_position(
    entry_price: Optional[float], take_profit_price: Optional[float]
) -> bool:
    """Infer direction from the take-profit target.

    A trade is long when the target sits at or above the entry, or when
    either price is missing.
    """
    if entry_price is None or take_profit_price is None:
        return True
    return take_profit_price >= entry_price


def calculate_trade_derived_values(entry: TradeLogEntry) -> TradeDerivedValues:
    """Compute estimated loss, estimated profit and realised profit.

    Args:
        entry: Trade log as submitted.

    Returns:
        TradeDerivedValues where each value falls back to the entry's own
        field when its inputs are missing.
    """
    entry_price = entry.entry_price
    stop = entry.stop_loss_price
    take = entry.take_profit_price
    exit_price = entry.exit_price

    estimated_loss = entry.estimated_loss
    if entry_price is not None and stop is not None:
        estimated_loss = round2(abs(entry_price - stop))

    estimated_profit = entry.estimated_profit
    if entry_price is not None and take is not None:
        estimated_profit = round2(abs(take - entry_price))

    trade_profit = entry.total_profit
    if entry_price is not None and exit_price is not None:
        if is_long_position(entry_price, take):
            trade_profit = round2(exit_price - entry_price)
        else:
            trade_profit = round2(entry_price - exit_price)

    return TradeDerivedValues(estimated_loss, estimated_profit, trade_profit)


def apply_derived_values(entry: TradeLogEntry) -> TradeLogEntry:
    """Return a copy of the entry with its derived fields filled in."""
    derived = calculate_trade_derived_values(entry)
    return entry.model_copy(
        update={
            "estimated_loss": derived.estimated_loss,
            "estimated_profit": derived.estimated_profit,
            "total_profit": derived.trade_profit,
        }
    )
