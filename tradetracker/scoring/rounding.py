"""Decimal rounding helpers.

Scores, rates and averages round to one decimal place; money and ratios
round to two. Halves always round away from zero.
"""

from decimal import ROUND_HALF_UP, Decimal

_ONE_PLACE = Decimal("0.1")
_TWO_PLACES = Decimal("0.01")


def _round(value: float, places: Decimal) -> float:
    # repr() gives the shortest decimal form, so 0.125 rounds as written.
    return float(Decimal(repr(float(value))).quantize(places, rounding=ROUND_HALF_UP))


def round1(value: float) -> float:
    """Round half away from zero to one decimal place."""
    return _round(value, _ONE_PLACE)


def round2(value: float) -> float:
    """Round half away from zero to two decimal places."""
    return _round(value, _TWO_PLACES)


def percentage(count: int, total: int) -> float:
    """Return ``round1(100 * count / total)`` with the divisor guarded at 1."""
    return round1(count / max(total, 1) * 100)
