"""Write-time scoring rules.

Each rule is a pure function of one entry and returns a score in
[0, 100] rounded to one decimal place.
"""

from typing import Any, Optional, Union

from tradetracker.models.analysis import (
    CORE_FIELDS,
    DIRECTIONAL_FIELDS,
    ZONE_FIELDS,
    MarketAnalysisEntry,
)
from tradetracker.models.checklist import ChecklistEntry
from tradetracker.models.trade_log import TradeLogEntry
from tradetracker.scoring.derived import apply_derived_values
from tradetracker.scoring.rounding import round1

DIRECTIONAL_WEIGHT = 40
CORE_WEIGHT = 20
ZONE_WEIGHT = 20
STRUCTURE_WEIGHT = 20

OPEN_PHASE_WEIGHT = 60
CLOSE_PHASE_WEIGHT = 40


def _is_filled(value: Optional[str]) -> bool:
    return bool((value or "").strip())


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def score_checklist(entry: ChecklistEntry) -> float:
    """Score a checklist as the share of readiness flags that are set."""
    flags = entry.flags()
    return round1(sum(flags) / len(flags) * 100)


def score_analysis(entry: MarketAnalysisEntry) -> float:
    """Score a market analysis as a weighted completion composite.

    Directional judgments weigh 40, core identity fields 20, zones 20 and
    the market-structure table 20. A structure row counts once it has a
    bias or a level.
    """
    directional = [getattr(entry, name) for name in DIRECTIONAL_FIELDS]
    filled_directional = sum(1 for value in directional if value != "none")

    core = [getattr(entry, name) for name in CORE_FIELDS]
    filled_core = sum(1 for value in core if _is_filled(value))

    zones = [getattr(entry, name) for name in ZONE_FIELDS]
    filled_zones = sum(1 for value in zones if _is_filled(value))

    rows = entry.market_structure
    set_rows = sum(1 for row in rows if row.bias != "none" or _is_filled(row.level))

    weighted = (
        filled_directional / len(directional) * DIRECTIONAL_WEIGHT
        + filled_core / len(core) * CORE_WEIGHT
        + filled_zones / len(zones) * ZONE_WEIGHT
        + set_rows / max(len(rows), 1) * STRUCTURE_WEIGHT
    )
    return round1(weighted)


def score_trade_log(entry: TradeLogEntry) -> float:
    """Score a trade log in two phases.

    The open phase (planning fields) weighs 60, the close phase
    (outcome and reflection fields) weighs 40.
    """
    open_phase = [
        entry.trade_date,
        entry.trade_time,
        entry.trading_asset,
        entry.strategy,
        ",".join(entry.confluences) if entry.confluences else None,
        entry.entry_price,
        entry.risk_reward_ratio,
        entry.stop_loss_price,
        entry.take_profit_price,
        entry.estimated_loss,
        entry.estimated_profit,
    ]
    close_phase = [
        entry.exit_price,
        entry.total_profit,
        entry.feelings,
        entry.comments,
        entry.chart_link,
    ]

    open_done = sum(1 for value in open_phase if _is_present(value))
    close_done = sum(1 for value in close_phase if _is_present(value))

    weighted = (
        open_done / len(open_phase) * OPEN_PHASE_WEIGHT
        + close_done / len(close_phase) * CLOSE_PHASE_WEIGHT
    )
    return round1(weighted)


ScoredEntry = Union[ChecklistEntry, MarketAnalysisEntry, TradeLogEntry]


def score_entry(entry: ScoredEntry) -> ScoredEntry:
    """Return a copy of the entry with its score attached.

    Trade logs get their derived values first, and the augmented record
    is what gets scored.

    Raises:
        TypeError: If the entry is not one of the three journal kinds.
    """
    if isinstance(entry, ChecklistEntry):
        return entry.model_copy(update={"score": score_checklist(entry)})
    if isinstance(entry, MarketAnalysisEntry):
        return entry.model_copy(update={"analysis_score": score_analysis(entry)})
    if isinstance(entry, TradeLogEntry):
        derived = apply_derived_values(entry)
        return derived.model_copy(update={"journal_score": score_trade_log(derived)})
    raise TypeError(f"Cannot score {type(entry).__name__}")
