from __future__ import annotations


def capital_gains_tax(gain: float, tax_free_limit: float, rate: float) -> float:
    """Tax due on the part of ``gain`` above ``tax_free_limit``.

    ``rate`` is a percentage. Gains at or below the limit are not taxed.
    """
    taxable = max(0.0, gain - tax_free_limit)
    return taxable * (rate / 100.0)


def mortgage_interest_deduction(interest: float, rate: float) -> float:
    """Tax saved on ``interest`` at an effective deduction ``rate`` percent."""
    if rate <= 0 or interest <= 0:
        return 0.0
    return interest * (rate / 100.0)
