"""Read-time trend aggregation.

Each builder takes entries of one kind, already filtered to the caller's
window and already scored, and folds them into a report. Empty input
gives a zero-valued report of the right shape.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from tradetracker.models.analysis import MarketAnalysisEntry
from tradetracker.models.checklist import FLAG_NAMES, ChecklistEntry
from tradetracker.models.trade_log import TradeLogEntry
from tradetracker.models.trends import (
    AnalysisTrendReport,
    ChecklistTrendReport,
    DailyCompletion,
    DailyScore,
    GroupTradeStats,
    TradeTrendReport,
    WeeklyTradeStats,
)
from tradetracker.scoring.rounding import percentage, round1, round2

UNKNOWN_CATEGORY = "unknown"
UNKNOWN_GROUP = "Unknown"


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _group_scores_by_date(pairs: Iterable[tuple[str, float]]) -> dict[str, list[float]]:
    by_date: dict[str, list[float]] = {}
    for trading_date, score in pairs:
        by_date.setdefault(trading_date, []).append(score)
    return by_date


def _mix(values: Iterable[Optional[str]], total: int) -> dict[str, float]:
    counts: dict[str, int] = {}
    for value in values:
        key = value if value and value.strip() else UNKNOWN_CATEGORY
        counts[key] = counts.get(key, 0) + 1
    return {key: percentage(count, total) for key, count in counts.items()}


def build_checklist_trend(entries: list[ChecklistEntry], days: int) -> ChecklistTrendReport:
    """Roll checklist captures up into readiness rates and daily scores.

    Args:
        entries: Scored checklist entries inside the window.
        days: Window length, carried through to the report.

    Returns:
        ChecklistTrendReport with daily buckets in ascending date order.
    """
    if not entries:
        return ChecklistTrendReport(days=days)

    total = len(entries)
    scores = [entry.score or 0.0 for entry in entries]
    flag_counts = {
        name: sum(1 for entry in entries if getattr(entry, name) is True)
        for name in FLAG_NAMES
    }

    by_date = _group_scores_by_date(
        (entry.trading_date, score) for entry, score in zip(entries, scores)
    )
    daily_scores = sorted(
        (
            DailyScore(date=day, average_score=round1(_mean(day_scores)), captures=len(day_scores))
            for day, day_scores in by_date.items()
        ),
        key=lambda bucket: bucket.date,
    )

    return ChecklistTrendReport(
        days=days,
        total_captures=total,
        average_score=round1(sum(scores) / total),
        readiness_rates={name: percentage(count, total) for name, count in flag_counts.items()},
        daily_scores=daily_scores,
    )


def build_analysis_trend(entries: list[MarketAnalysisEntry], days: int) -> AnalysisTrendReport:
    """Roll market analyses up into completion, conclusion and bias mixes.

    Missing conclusions and biases are counted under ``"unknown"``.
    """
    if not entries:
        return AnalysisTrendReport(days=days)

    total = len(entries)
    scores = [entry.analysis_score or 0.0 for entry in entries]

    by_date = _group_scores_by_date(
        (entry.trading_date, score) for entry, score in zip(entries, scores)
    )
    daily_completion = sorted(
        (
            DailyCompletion(date=day, average_score=round1(_mean(day_scores)), analyses=len(day_scores))
            for day, day_scores in by_date.items()
        ),
        key=lambda bucket: bucket.date,
    )

    return AnalysisTrendReport(
        days=days,
        total_analyses=total,
        average_completion_score=round1(sum(scores) / total),
        conclusion_mix=_mix((entry.conclusion for entry in entries), total),
        directional_bias_mix=_mix((entry.directional_bias for entry in entries), total),
        daily_completion=daily_completion,
    )


def week_start(trade_date: str) -> str:
    """Return the Monday of the ISO week containing trade_date.

    Dates that do not parse as ``YYYY-MM-DD`` are returned unchanged so
    they still form their own bucket.
    """
    try:
        day = date.fromisoformat(trade_date[:10])
    except ValueError:
        return trade_date
    return (day - timedelta(days=day.weekday())).isoformat()


@dataclass
class _Rollup:
    """Running totals for one bucket of trades."""

    trades: int = 0
    net_profit: float = 0.0
    wins: int = 0
    rr_total: float = 0.0
    rr_count: int = 0

    def add(self, entry: TradeLogEntry) -> None:
        self.trades += 1
        self.net_profit += entry.total_profit or 0.0
        if entry.is_win:
            self.wins += 1
        if entry.risk_reward_ratio is not None:
            self.rr_total += entry.risk_reward_ratio
            self.rr_count += 1

    def metrics(self) -> dict:
        return {
            "trades": self.trades,
            "net_profit": round2(self.net_profit),
            "win_rate": percentage(self.wins, self.trades),
            "average_risk_reward_ratio": round2(self.rr_total / max(self.rr_count, 1)),
        }


def _group_name(value: str) -> str:
    return value if value and value.strip() else UNKNOWN_GROUP


def _by_count(rollups: dict[str, _Rollup]) -> list[GroupTradeStats]:
    groups = [GroupTradeStats(name=name, **rollup.metrics()) for name, rollup in rollups.items()]
    # sorted() is stable, so equal counts keep first-seen order.
    return sorted(groups, key=lambda group: -group.trades)


def build_trade_trend(entries: list[TradeLogEntry], days: int) -> TradeTrendReport:
    """Roll trade logs up into profit, win rate, RR and score summaries.

    Weekly buckets are keyed by the Monday of each trade's week and sorted
    by date; strategy and asset groups are sorted by descending trade
    count.

    Args:
        entries: Scored trade logs inside the window.
        days: Window length, carried through to the report.

    Returns:
        TradeTrendReport for the entries.
    """
    if not entries:
        return TradeTrendReport(days=days)

    overall = _Rollup()
    closed = 0
    score_total = 0.0
    weekly: dict[str, _Rollup] = {}
    by_strategy: dict[str, _Rollup] = {}
    by_asset: dict[str, _Rollup] = {}

    for entry in entries:
        overall.add(entry)
        if entry.is_closed:
            closed += 1
        score_total += entry.journal_score or 0.0

        weekly.setdefault(week_start(entry.trade_date), _Rollup()).add(entry)
        by_strategy.setdefault(_group_name(entry.strategy), _Rollup()).add(entry)
        by_asset.setdefault(_group_name(entry.trading_asset), _Rollup()).add(entry)

    weekly_stats = sorted(
        (WeeklyTradeStats(week_start=key, **rollup.metrics()) for key, rollup in weekly.items()),
        key=lambda bucket: bucket.week_start,
    )

    return TradeTrendReport(
        days=days,
        total_trades=len(entries),
        net_profit=round2(overall.net_profit),
        win_rate=percentage(overall.wins, closed),
        average_risk_reward_ratio=round2(overall.rr_total / max(overall.rr_count, 1)),
        average_journal_score=round1(score_total / len(entries)),
        weekly_stats=weekly_stats,
        by_strategy=_by_count(by_strategy),
        by_asset=_by_count(by_asset),
    )
