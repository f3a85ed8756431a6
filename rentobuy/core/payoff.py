from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd

from .amortization import amort_schedule, monthly_payment
from .inputs import PayoffVsInvestInputs
from .loan import EffectiveLoanValues
from .taxes import mortgage_interest_deduction
from .utils import HORIZON_MONTHS, monthly_rate


@dataclass(frozen=True)
class LoanPath:
    """Monthly loan and investment series of one payoff strategy."""

    monthly: pd.DataFrame
    opening_balance: float
    opening_investment: float

    def balance_at(self, months: int) -> float:
        if months <= 0:
            return self.opening_balance
        return float(self.monthly["balance"].iloc[min(months, len(self.monthly)) - 1])

    def investment_at(self, months: int) -> float:
        if months <= 0:
            return self.opening_investment
        return float(self.monthly["investment_value"].iloc[min(months, len(self.monthly)) - 1])

    @property
    def payoff_month(self) -> Optional[int]:
        """First month the loan balance reaches zero, None if it never does."""
        if self.opening_balance <= 0:
            return None
        closed = self.monthly.index[self.monthly["balance"] <= 1e-6]
        if len(closed) == 0:
            return None
        return int(self.monthly["month"].loc[closed[0]])


def _invest_budget(
    schedule: pd.DataFrame,
    inputs: PayoffVsInvestInputs,
    loan: EffectiveLoanValues,
    opening_investment: float,
) -> pd.DataFrame:
    """Invest whatever is left of the monthly budget after the loan outflow."""
    rate = monthly_rate(inputs.investment_return_rate)
    df = schedule.copy()
    df["tax_deduction"] = [
        mortgage_interest_deduction(interest, inputs.mortgage_interest_deduction)
        for interest in df["interest"]
    ]
    df["cumulative_principal"] = df["principal"].cumsum()
    df["cumulative_interest"] = df["interest"].cumsum()
    df["cumulative_tax_deduction"] = df["tax_deduction"].cumsum()

    contributions = []
    values = []
    value = float(opening_investment)
    for i, (paid, deduction) in enumerate(zip(df["payment"], df["tax_deduction"])):
        budget = inputs.extra_monthly_payment
        if i < loan.effective_loan_term:
            budget += loan.monthly_loan_payment
        contribution = budget - paid + deduction
        value = (value + contribution) * (1 + rate)
        contributions.append(contribution)
        values.append(value)

    df["contribution"] = contributions
    df["investment_value"] = values
    return df


def simulate_payoff_paths(
    inputs: PayoffVsInvestInputs,
    loan: EffectiveLoanValues,
    horizon: int = HORIZON_MONTHS,
) -> Tuple[LoanPath, LoanPath]:
    """Simulate paying the loan down early against investing the extra cash.

    Both paths spend the same monthly budget (the regular payment plus the
    extra amount) and start with the same upfront cash:

    - payoff: upfront cash and extra payments go to principal; once the loan
      is closed the freed-up budget is invested.
    - invest: the loan runs its normal schedule and the extra cash is invested
      from month one.
    """
    rate = monthly_rate(inputs.loan_rate)
    principal = loan.effective_loan_amount
    term = loan.effective_loan_term

    applied_upfront = min(max(inputs.extra_upfront_payment, 0.0), principal)
    payoff_principal = principal - applied_upfront
    payoff_payment = loan.monthly_loan_payment
    if inputs.recalculate_payment:
        payoff_payment = monthly_payment(payoff_principal, rate, term)

    payoff_schedule = amort_schedule(
        payoff_principal,
        rate,
        term,
        horizon=horizon,
        payment=payoff_payment,
        extra_payment=inputs.extra_monthly_payment,
    )
    invest_schedule = amort_schedule(principal, rate, term, horizon=horizon, payment=loan.monthly_loan_payment)

    payoff_cash = inputs.extra_upfront_payment - applied_upfront
    payoff = LoanPath(
        monthly=_invest_budget(payoff_schedule, inputs, loan, payoff_cash),
        opening_balance=payoff_principal,
        opening_investment=payoff_cash,
    )
    invest = LoanPath(
        monthly=_invest_budget(invest_schedule, inputs, loan, inputs.extra_upfront_payment),
        opening_balance=principal,
        opening_investment=inputs.extra_upfront_payment,
    )
    return payoff, invest
