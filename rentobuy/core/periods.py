from __future__ import annotations

from dataclasses import dataclass
from typing import Final, List, Optional, Tuple

from .utils import HORIZON_MONTHS, MONTHS_IN_YEAR


EXTENDED_YEARS: Final[Tuple[int, ...]] = (15, 20, 30)
LOAN_TERM_PREFIX: Final[str] = "X"
PAYOFF_PREFIX: Final[str] = "P"


@dataclass(frozen=True)
class Period:
    label: str
    months: int


def year_label(years: int) -> str:
    return f"{years}y"


def loan_term_label(months: int, prefix: str = LOAN_TERM_PREFIX) -> str:
    years, rest = divmod(months, MONTHS_IN_YEAR)
    if rest == 0:
        return f"{prefix} {years}y"
    if years == 0:
        return f"{prefix} {rest}m"
    return f"{prefix} {years}y{rest}m"


def get_periods(loan_term: int, projection_years: int) -> List[Period]:
    """Display periods up to the projection horizon.

    Yearly rows for the first ten years, then 15, 20 and 30 years, capped at
    the projection horizon (which is always shown). When the loan ends inside
    the horizon a marker row is added at its payoff month; on a year row it
    takes over that row's label.
    """
    horizon = min(max(int(projection_years), 0) * MONTHS_IN_YEAR, HORIZON_MONTHS)

    year_months = [y * MONTHS_IN_YEAR for y in range(0, 11)]
    year_months += [y * MONTHS_IN_YEAR for y in EXTENDED_YEARS]
    year_months = [m for m in year_months if m <= horizon]
    if horizon not in year_months:
        year_months.append(horizon)

    labels = {m: year_label(m // MONTHS_IN_YEAR) for m in year_months}
    if 0 < loan_term <= horizon:
        labels[int(loan_term)] = loan_term_label(int(loan_term))

    return [Period(label=labels[m], months=m) for m in sorted(labels)]


def add_marker(periods: List[Period], months: Optional[int], label: str) -> List[Period]:
    """Return ``periods`` with an extra marker row at ``months``.

    Markers outside the displayed horizon are dropped. A marker on a year row
    takes over its label; the loan-term marker is never replaced.
    """
    if months is None or not periods or not 0 < months <= periods[-1].months:
        return list(periods)
    labels = {p.months: p.label for p in periods}
    current = labels.get(months)
    if current is None or not current.startswith(LOAN_TERM_PREFIX):
        labels[months] = label
    return [Period(label=labels[m], months=m) for m in sorted(labels)]
