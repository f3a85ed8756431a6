from __future__ import annotations

import logging
from dataclasses import dataclass

from .amortization import amort_schedule, monthly_payment
from .inputs import CalculatorInputs, SellVsKeepInputs
from .utils import monthly_rate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectiveLoanValues:
    effective_loan_amount: float = 0.0
    effective_loan_term: int = 0
    monthly_loan_payment: float = 0.0
    # Negative when the owner has to bring cash to close the refinance
    refinance_cash_out: float = 0.0


def effective_loan_values(inputs: CalculatorInputs) -> EffectiveLoanValues:
    """Resolve the loan actually being repaid from today on.

    Collapses the original loan, time already elapsed on it and an optional
    refinance into one (balance, term, payment) triple. An existing loan part
    way through its term is walked forward with its original payment so the
    remaining balance reflects real amortization.
    """
    # A loan with no term never amortizes; treat it as no loan at all
    if inputs.loan_amount <= 0 or inputs.loan_term <= 0:
        return EffectiveLoanValues()

    rate = monthly_rate(inputs.loan_rate)

    if isinstance(inputs, SellVsKeepInputs) and inputs.include_refinance:
        # Refinance restarts the clock on the new loan
        values = EffectiveLoanValues(
            effective_loan_amount=inputs.loan_amount,
            effective_loan_term=inputs.loan_term,
            monthly_loan_payment=monthly_payment(inputs.loan_amount, rate, inputs.loan_term),
            refinance_cash_out=inputs.loan_amount - inputs.payoff_balance - inputs.closing_costs,
        )
        logger.debug("Refinanced loan: %s", values)
        return values

    remaining = inputs.loan_term
    if isinstance(inputs, SellVsKeepInputs) and inputs.remaining_loan_term is not None:
        remaining = max(int(inputs.remaining_loan_term), 0)

    if remaining >= inputs.loan_term:
        return EffectiveLoanValues(
            effective_loan_amount=inputs.loan_amount,
            effective_loan_term=inputs.loan_term,
            monthly_loan_payment=monthly_payment(inputs.loan_amount, rate, inputs.loan_term),
        )

    months_elapsed = inputs.loan_term - remaining
    elapsed = amort_schedule(inputs.loan_amount, rate, inputs.loan_term, horizon=months_elapsed)
    balance = float(elapsed["balance"].iloc[-1])

    values = EffectiveLoanValues(
        effective_loan_amount=balance,
        effective_loan_term=remaining,
        monthly_loan_payment=monthly_payment(balance, rate, remaining),
    )
    logger.debug("Loan after %d elapsed months: %s", months_elapsed, values)
    return values
