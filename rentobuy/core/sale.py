from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

import pandas as pd

from .inputs import CalculatorInputs
from .schedule import RateSchedule
from .taxes import capital_gains_tax
from .utils import MONTHS_IN_YEAR, grow


@dataclass(frozen=True)
class SaleProceeds:
    sale_price: float
    total_selling_costs: float
    loan_payoff: float
    capital_gains: float
    tax_on_gains: float
    net_proceeds: float


def calculate_asset_value(
    starting_price: float,
    months: int,
    rates: Union[RateSchedule, Iterable[float]],
) -> float:
    """Compound ``starting_price`` over ``months`` with per-year rates.

    Full years use the rate of that year; a trailing partial year is
    compounded fractionally, ``(1 + r) ** (months / 12)``.
    """
    schedule = RateSchedule.coerce(rates)
    value = float(starting_price)
    years, remaining = divmod(int(months), MONTHS_IN_YEAR)

    for year in range(years):
        value *= 1 + schedule.rate_for_year(year) / 100.0

    if remaining > 0:
        value *= (1 + schedule.rate_for_year(years) / 100.0) ** (remaining / MONTHS_IN_YEAR)

    return value


def loan_balance_at(monthly: pd.DataFrame, months: int, opening_balance: float) -> float:
    """Outstanding loan after ``months`` payments; ``opening_balance`` at month 0."""
    if months <= 0:
        return float(opening_balance)
    index = min(months - 1, len(monthly) - 1)
    return float(monthly["loan_balance"].iloc[index])


def calculate_sale_proceeds(
    inputs: CalculatorInputs,
    months: int,
    monthly: pd.DataFrame,
    opening_balance: float,
    include_selling: bool = True,
) -> SaleProceeds:
    """Proceeds of selling the asset after ``months``.

    Without selling analysis only the loan is paid off: costs, gains and tax
    are reported as zero.
    """
    sale_price = calculate_asset_value(inputs.starting_value, months, inputs.appreciation_rate)
    loan_payoff = loan_balance_at(monthly, months, opening_balance)

    if not include_selling:
        return SaleProceeds(
            sale_price=sale_price,
            total_selling_costs=0.0,
            loan_payoff=loan_payoff,
            capital_gains=0.0,
            tax_on_gains=0.0,
            net_proceeds=sale_price - loan_payoff,
        )

    years = int(months) // MONTHS_IN_YEAR
    staging = grow(inputs.staging_costs, inputs.inflation_rate, years)
    total_selling_costs = sale_price * (inputs.agent_commission / 100.0) + staging

    capital_gains = sale_price - inputs.purchase_price - total_selling_costs
    # Limit for the holding period; sales within the first two years share the first entry
    tax_free_limit = inputs.tax_free_limits.rate_for_year(years - 1)
    tax = capital_gains_tax(capital_gains, tax_free_limit, inputs.capital_gains_tax)

    return SaleProceeds(
        sale_price=sale_price,
        total_selling_costs=total_selling_costs,
        loan_payoff=loan_payoff,
        capital_gains=capital_gains,
        tax_on_gains=tax,
        net_proceeds=sale_price - total_selling_costs - loan_payoff - tax,
    )
