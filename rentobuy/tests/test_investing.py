import pytest

from rentobuy.core.costs import simulate_monthly_costs
from rentobuy.core.inputs import BuyVsRentInputs
from rentobuy.core.investing import calculate_renting_net_worth, track_net_position
from rentobuy.core.loan import effective_loan_values


def test_deficit_earns_nothing_until_cleared():
    # 12% a year is 1% a month
    df = track_net_position([100, -50, -100], 12.0, months=3)
    assert df["net_position"].tolist() == pytest.approx([-100, -50, 50.5])
    assert df["cumulative_returns"].tolist() == pytest.approx([0, 0, 0.5])
    assert df["unfunded_deficit"].iloc[0] == 100
    assert df["invested_value"].iloc[2] == pytest.approx(50.5)


def test_positive_position_compounds_monthly():
    df = track_net_position([0] * 12, 12.0, months=12, initial_cash=1_000)
    assert df["net_position"].iloc[-1] == pytest.approx(1_000 * 1.01 ** 12)
    assert df["cumulative_returns"].iloc[-1] == pytest.approx(1_000 * (1.01 ** 12 - 1))


def test_returns_never_grow_while_in_deficit():
    costs = [500, 300, -200, -900, 50, 700, -1_000, 20]
    df = track_net_position(costs, 8.0, months=len(costs), initial_cash=400)
    previous = 0.0
    for position, total in zip(df["net_position"], df["cumulative_returns"]):
        if position <= 0:
            assert total == previous
        previous = total


def test_income_raises_position():
    df = track_net_position([-100] * 3, 0.0, months=3)
    assert df["net_position"].tolist() == [100, 200, 300]


def test_renting_net_worth_without_returns():
    inputs = BuyVsRentInputs(investment_return_rate=0.0, rent_deposit=4_000)
    loan = effective_loan_values(inputs)
    monthly = simulate_monthly_costs(inputs, loan)
    savings = (monthly["buying_cost"] - monthly["renting_cost"]).iloc[:24].sum()

    value = calculate_renting_net_worth(inputs, 24, monthly)
    assert value == pytest.approx(inputs.downpayment - 4_000 + savings + 3_000)


def test_renting_net_worth_at_start_keeps_recoverable_deposit():
    inputs = BuyVsRentInputs(purchase_price=500_000, loan_amount=400_000, rent_deposit=3_000)
    monthly = simulate_monthly_costs(inputs, effective_loan_values(inputs))
    assert calculate_renting_net_worth(inputs, 0, monthly) == pytest.approx(100_000 - 3_000 + 2_250)


def test_savings_are_invested_monthly_not_up_front():
    inputs = BuyVsRentInputs(investment_return_rate=12.0, rent_deposit=0, purchase_price=0, loan_amount=0)
    monthly = simulate_monthly_costs(inputs, effective_loan_values(inputs))
    # Renting costs more than buying here, so the balance drains month by month
    value = calculate_renting_net_worth(inputs, 12, monthly)
    flow = (monthly["buying_cost"] - monthly["renting_cost"]).iloc[0]
    expected = sum(flow * 1.01 ** (12 - i) for i in range(12))
    assert value == pytest.approx(expected)
