from __future__ import annotations

from typing import Final, Optional, Sequence


MONTHS_IN_YEAR: Final[int] = 12
HORIZON_MONTHS: Final[int] = 360


def monthly_rate(annual_rate: float) -> float:
    """Convert an annual percentage (e.g. 6.5 for 6.5%) to a nominal monthly rate."""
    return annual_rate / 100.0 / MONTHS_IN_YEAR


def grow(value: float, annual_rate: float, years: int) -> float:
    """Apply ``years`` annual steps of ``annual_rate`` percent to ``value``."""
    if years <= 0:
        return value
    return value * (1 + annual_rate / 100.0) ** years


def compound_monthly(
    start: float,
    annual_rate: float,
    months: int,
    contributions: Optional[Sequence[float]] = None,
) -> float:
    """Invest ``start`` and compound it monthly.

    Each month the contribution for that month (if any) is added first, then
    the whole balance grows by one month of ``annual_rate``.
    """
    rate = monthly_rate(annual_rate)
    value = float(start)
    for i in range(max(months, 0)):
        if contributions is not None:
            value += float(contributions[i])
        value *= 1 + rate
    return value


def window_sum(values, start: int, length: int = MONTHS_IN_YEAR) -> float:
    """Sum ``values[start:start + length]`` clipped to the series bounds."""
    if start < 0:
        start = 0
    return float(sum(values[start:start + length]))
