from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

from .inputs import CalculatorInputs
from .utils import HORIZON_MONTHS, compound_monthly, monthly_rate


RECOVERABLE_DEPOSIT_SHARE = 0.75


def track_net_position(
    monthly_costs: Sequence[float],
    annual_return_rate: float,
    months: int = HORIZON_MONTHS,
    initial_cash: float = 0.0,
) -> pd.DataFrame:
    """Track the cash position of holding an asset month by month.

    ``monthly_costs`` is signed: positive is an expense, negative is income.
    The position can go negative; a deficit is left unfunded, so it neither
    earns nor costs anything until later income clears it. Only a positive
    position earns the monthly investment return.
    """
    rate = monthly_rate(annual_return_rate)
    position = float(initial_cash)
    total_returns = 0.0

    rows: List[Dict[str, float]] = []
    for i in range(months):
        position -= float(monthly_costs[i])
        earned = 0.0
        if position > 0:
            earned = position * rate
            position += earned
            total_returns += earned
        rows.append(
            {
                "net_position": position,
                "investment_return": earned,
                "cumulative_returns": total_returns,
                "invested_value": max(position, 0.0),
                "unfunded_deficit": max(-position, 0.0),
            }
        )

    df = pd.DataFrame(
        rows,
        columns=["net_position", "investment_return", "cumulative_returns", "invested_value", "unfunded_deficit"],
    )
    df.index.name = "month"
    return df


def calculate_renting_net_worth(
    inputs: CalculatorInputs,
    months: int,
    monthly: pd.DataFrame,
) -> float:
    """Net worth of renting instead of buying after ``months``.

    The downpayment (less the rent deposit) is invested at month 0 and the
    monthly difference between buying and renting cost is added every month
    before compounding. Part of the deposit comes back at move-out.
    """
    savings = (monthly["buying_cost"] - monthly["renting_cost"]).tolist()
    invested = compound_monthly(
        inputs.downpayment - inputs.rent_deposit,
        inputs.investment_return_rate,
        months,
        savings,
    )
    return invested + inputs.rent_deposit * RECOVERABLE_DEPOSIT_SHARE
