"""Trend window resolution.

A window of N days covers today and the N - 1 UTC calendar days before
it. The current time is always passed in.
"""

import re
from datetime import datetime, time, timedelta, timezone
from typing import Any, NamedTuple

DEFAULT_DAYS = 30
MIN_DAYS = 1
MAX_DAYS = 365

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class TrendWindow(NamedTuple):
    """A resolved window: its length in days and its inclusive UTC start."""

    days: int
    start: datetime


def parse_query_days(value: Any) -> int:
    """Parse a requested day count, falling back to 30.

    Strings are read up to their first non-digit, so ``"7d"`` means 7.
    Values outside [1, 365] or without a leading integer give the default.
    """
    if isinstance(value, bool) or value is None:
        return DEFAULT_DAYS
    if isinstance(value, int):
        parsed = value
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            return DEFAULT_DAYS
        parsed = int(match.group(1))

    if parsed < MIN_DAYS or parsed > MAX_DAYS:
        return DEFAULT_DAYS
    return parsed


def window_start(days: int, now: datetime) -> datetime:
    """Return midnight UTC of ``today - (days - 1)``.

    Naive datetimes are taken to already be in UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    today = now.astimezone(timezone.utc).date()
    start_day = today - timedelta(days=days - 1)
    return datetime.combine(start_day, time.min, tzinfo=timezone.utc)


def resolve_window(value: Any, now: datetime) -> TrendWindow:
    """Parse the requested day count and compute where the window starts."""
    days = parse_query_days(value)
    return TrendWindow(days=days, start=window_start(days, now))
