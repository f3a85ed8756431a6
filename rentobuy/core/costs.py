from __future__ import annotations

from typing import Dict, List

import pandas as pd

from .amortization import amort_schedule
from .inputs import CalculatorInputs
from .loan import EffectiveLoanValues
from .taxes import mortgage_interest_deduction
from .utils import HORIZON_MONTHS, MONTHS_IN_YEAR, monthly_rate


def simulate_monthly_costs(inputs: CalculatorInputs, loan: EffectiveLoanValues) -> pd.DataFrame:
    """Walk the fixed 30-year horizon month by month.

    Returns one row per month (index 0..359) with the buying and renting cash
    cost of that month, the loan split and running loan totals.

    Inflation steps once per anniversary: renting and recurring costs are
    flat inside a year and jump by ``inflation_rate`` at months 12, 24, ...
    The interest deduction lowers the buying cost but ``cumulative_interest``
    keeps the nominal interest.
    """
    schedule = amort_schedule(
        loan.effective_loan_amount,
        monthly_rate(inputs.loan_rate),
        loan.effective_loan_term,
        horizon=HORIZON_MONTHS,
        payment=loan.monthly_loan_payment,
    )
    payments = schedule["payment"].tolist()
    interests = schedule["interest"].tolist()
    principals = schedule["principal"].tolist()
    balances = schedule["balance"].tolist()

    inflation = 1 + inputs.inflation_rate / 100.0
    recurring = (inputs.annual_insurance + inputs.annual_taxes - inputs.annual_income) / MONTHS_IN_YEAR
    renting = (
        inputs.monthly_rent
        + inputs.annual_rent_costs / MONTHS_IN_YEAR
        + inputs.other_annual_costs / MONTHS_IN_YEAR
    )

    rows: List[Dict[str, float]] = []
    total_principal = 0.0
    total_interest = 0.0
    total_deduction = 0.0
    for i in range(HORIZON_MONTHS):
        if i > 0 and i % MONTHS_IN_YEAR == 0:
            renting *= inflation
            recurring *= inflation

        deduction = mortgage_interest_deduction(interests[i], inputs.mortgage_interest_deduction)
        total_principal += principals[i]
        total_interest += interests[i]
        total_deduction += deduction

        rows.append(
            {
                "buying_cost": payments[i] - deduction + recurring,
                "renting_cost": renting,
                "loan_payment": payments[i],
                "interest": interests[i],
                "principal": principals[i],
                "tax_deduction": deduction,
                "recurring_cost": recurring,
                "loan_balance": balances[i],
                "cumulative_principal": total_principal,
                "cumulative_interest": total_interest,
                "cumulative_tax_deduction": total_deduction,
            }
        )

    df = pd.DataFrame(rows)
    df.index.name = "month"
    return df
