from __future__ import annotations

from typing import Optional

import pandas as pd

from .utils import HORIZON_MONTHS


SCHEDULE_COLUMNS = ["month", "payment", "interest", "principal", "balance"]


def monthly_payment(principal: float, monthly_rate: float, months: int) -> float:
    """Compute the fixed monthly payment for a fully amortizing loan.

    Parameters
    ----------
    principal : float
        Loan balance to amortize.
    monthly_rate : float
        Periodic interest rate as a decimal (e.g., 0.065 / 12).
    months : int
        Number of monthly payments.

    Returns
    -------
    float
        The constant monthly payment, ``M = P * r(1+r)^n / ((1+r)^n - 1)``.

    Raises
    ------
    ValueError
        If ``monthly_rate`` is at or below -100%.
    """
    if monthly_rate <= -1.0:
        raise ValueError(f"monthly rate {monthly_rate!r} is at or below -100%")
    if principal <= 0 or months <= 0:
        return 0.0
    if monthly_rate == 0:
        return principal / months
    factor = (1 + monthly_rate) ** months
    return principal * (monthly_rate * factor) / (factor - 1)


def amort_schedule(
    principal: float,
    monthly_rate: float,
    months: int,
    horizon: int = HORIZON_MONTHS,
    payment: Optional[float] = None,
    extra_payment: float = 0.0,
) -> pd.DataFrame:
    """Generate a monthly amortization schedule over ``horizon`` months.

    Columns: month (1..horizon), payment, interest, principal, balance

    Notes
    -----
    - Payments are made while ``month <= months`` and a balance remains.
    - ``extra_payment`` goes to principal every month and shortens the loan.
    - The last payment is capped at balance + interest so the loan closes at zero.
    """
    if payment is None:
        payment = monthly_payment(principal, monthly_rate, months)

    rows = []
    balance = max(float(principal), 0.0)
    for m in range(1, horizon + 1):
        interest = 0.0
        paid = 0.0
        if m <= months and balance > 0:
            interest = balance * monthly_rate
            paid = min(payment + extra_payment, balance + interest)
            balance = balance + interest - paid
            # Fold floating-point residue into the final payment
            if m == months and abs(balance) < 1e-6:
                paid += balance
                balance = 0.0
        rows.append(
            {
                "month": m,
                "payment": float(paid),
                "interest": float(interest),
                "principal": float(paid - interest),
                "balance": float(balance),
            }
        )

    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)
