import math

from rentobuy.core.amortization import amort_schedule, monthly_payment
from rentobuy.core.inputs import BuyVsRentInputs, SellVsKeepInputs
from rentobuy.core.loan import EffectiveLoanValues, effective_loan_values


def test_no_loan_resolves_to_zeros():
    loan = effective_loan_values(BuyVsRentInputs(loan_amount=0))
    assert loan == EffectiveLoanValues(0.0, 0, 0.0, 0.0)


def test_new_loan_passes_through():
    loan = effective_loan_values(BuyVsRentInputs(loan_amount=400_000, loan_rate=6.5, loan_term=360))
    assert loan.effective_loan_amount == 400_000
    assert loan.effective_loan_term == 360
    assert math.isclose(loan.monthly_loan_payment, monthly_payment(400_000, 0.065 / 12, 360))
    assert loan.refinance_cash_out == 0


def test_elapsed_loan_uses_real_amortization():
    inputs = SellVsKeepInputs(loan_amount=400_000, loan_rate=6.5, loan_term=360, remaining_loan_term=300)
    loan = effective_loan_values(inputs)

    rate = 0.065 / 12
    original = monthly_payment(400_000, rate, 360)
    growth = (1 + rate) ** 60
    expected_balance = 400_000 * growth - original * (growth - 1) / rate

    assert loan.effective_loan_term == 300
    assert math.isclose(loan.effective_loan_amount, expected_balance, rel_tol=1e-9)
    # Early payments are interest heavy: more than 5/6 of the loan is still owed
    assert loan.effective_loan_amount > 400_000 * 300 / 360
    # Re-amortizing the true balance over the remaining term keeps the same payment
    assert math.isclose(loan.monthly_loan_payment, original, rel_tol=1e-9)


def test_effective_loan_fully_amortizes():
    inputs = SellVsKeepInputs(loan_amount=300_000, loan_rate=4.0, loan_term=360, remaining_loan_term=187)
    loan = effective_loan_values(inputs)
    df = amort_schedule(
        loan.effective_loan_amount,
        0.04 / 12,
        loan.effective_loan_term,
        horizon=loan.effective_loan_term,
        payment=loan.monthly_loan_payment,
    )
    assert abs(df.iloc[-1]["balance"]) < 1e-6


def test_remaining_term_not_shorter_is_ignored():
    inputs = SellVsKeepInputs(loan_amount=200_000, loan_term=240, remaining_loan_term=240)
    loan = effective_loan_values(inputs)
    assert loan.effective_loan_amount == 200_000
    assert loan.effective_loan_term == 240


def test_refinance_restarts_the_clock_and_reports_cash_out():
    inputs = SellVsKeepInputs(
        loan_amount=300_000,
        loan_rate=5.0,
        loan_term=360,
        remaining_loan_term=120,
        include_refinance=True,
        payoff_balance=250_000,
        closing_costs=5_000,
    )
    loan = effective_loan_values(inputs)
    assert loan.effective_loan_amount == 300_000
    assert loan.effective_loan_term == 360
    assert math.isclose(loan.monthly_loan_payment, monthly_payment(300_000, 0.05 / 12, 360))
    assert loan.refinance_cash_out == 45_000


def test_refinance_cash_out_can_be_negative():
    inputs = SellVsKeepInputs(
        loan_amount=200_000,
        include_refinance=True,
        payoff_balance=210_000,
        closing_costs=4_000,
    )
    assert effective_loan_values(inputs).refinance_cash_out == -14_000
