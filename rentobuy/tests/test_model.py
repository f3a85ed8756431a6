import pytest

from rentobuy.core.inputs import BuyVsRentInputs, SellVsKeepInputs
from rentobuy.core.model import ProjectionModel


def test_buy_vs_rent_month_zero_rows():
    model = ProjectionModel(BuyVsRentInputs(purchase_price=500_000, loan_amount=400_000, rent_deposit=3_000))

    expenditure = model.expenditure_table().iloc[0]
    assert expenditure["buying_expenditure"] == 100_000
    assert expenditure["renting_expenditure"] == 3_000
    assert expenditure["difference"] == 97_000

    comparison = model.comparison_table().iloc[0]
    assert comparison["asset_value"] == 500_000
    assert comparison["buying_net_worth"] == 100_000
    assert comparison["renting_net_worth"] == pytest.approx(97_000 + 2_250)
    # Only the unrecoverable part of the deposit separates the two at the start
    assert comparison["difference"] == pytest.approx(-750)


def test_renting_wins_with_cheap_rent_and_flat_prices():
    inputs = BuyVsRentInputs(monthly_rent=100, annual_rent_costs=0, appreciation_rate=[0], investment_return_rate=10)
    table = ProjectionModel(inputs).comparison_table()
    assert table.iloc[-1]["difference"] > 0


def test_buying_wins_with_expensive_rent_and_rising_prices():
    inputs = BuyVsRentInputs(monthly_rent=10_000, appreciation_rate=[5])
    table = ProjectionModel(inputs).comparison_table()
    assert table.iloc[-1]["difference"] < 0
    assert table.iloc[-1]["buying_net_worth"] > 0


def test_comparison_columns_are_consistent():
    table = ProjectionModel(BuyVsRentInputs(include_selling=True)).comparison_table()
    recoverable = 3_000 * 0.75
    for _, row in table.iterrows():
        assert row["difference"] == pytest.approx(row["renting_net_worth"] - row["buying_net_worth"])
        assert row["market_return"] == pytest.approx(
            row["renting_net_worth"] - row["cumulative_savings"] - recoverable
        )


def test_amortization_table_tracks_simulated_loan():
    model = ProjectionModel(BuyVsRentInputs(mortgage_interest_deduction=20))
    table = model.amortization_table().set_index("months")
    assert table.loc[0, "loan_balance"] == 400_000
    assert table.loc[0, "principal_paid"] == 0
    assert table.loc[12, "loan_balance"] == model.monthly["loan_balance"].iloc[11]
    assert table.loc[12, "effective_interest"] == pytest.approx(0.8 * table.loc[12, "interest_paid"])
    assert table.loc[120, "effective_loan_payment"] == pytest.approx(
        table.loc[120, "principal_paid"] + table.loc[120, "effective_interest"]
    )


def test_no_amortization_table_without_loan():
    assert ProjectionModel(BuyVsRentInputs(loan_amount=0)).amortization_table() is None


def test_expenditure_annual_figures_look_forward_one_year():
    model = ProjectionModel(BuyVsRentInputs(loan_term=120, inflation_rate=2, annual_income=0))
    table = model.expenditure_table().set_index("period")
    assert table.loc["0y", "loan_payment"] == pytest.approx(12 * model.loan.monthly_loan_payment)
    assert table.loc["X 10y", "loan_payment"] == 0
    assert table.loc["2y", "costs"] == pytest.approx((1_500 + 6_000) * 1.02 ** 2)


def test_keep_expenses_signs():
    model = ProjectionModel(SellVsKeepInputs(annual_income=30_000, annual_insurance=1_000, annual_taxes=2_000))
    table = model.keep_expenses_table().set_index("months")
    assert table.loc[0, "loan_payment"] < 0
    assert table.loc[0, "income_minus_costs"] == pytest.approx(27_000)
    assert table.loc[0, "cumulative_exp"] == 0
    assert table.loc[12, "cumulative_exp"] == pytest.approx(-model.monthly["buying_cost"].iloc[:12].sum())
    assert table.loc[12, "net_position"] == model.keep_tracking["net_position"].iloc[11]


def test_keep_expenses_separate_deficit_from_invested_cash():
    deficit = ProjectionModel(SellVsKeepInputs(annual_income=0)).keep_expenses_table().set_index("months")
    assert deficit.loc[12, "net_position"] < 0
    assert deficit.loc[12, "invested_value"] == 0

    surplus = ProjectionModel(SellVsKeepInputs(loan_amount=0, annual_income=60_000)).keep_expenses_table()
    row = surplus.set_index("months").loc[12]
    assert row["net_position"] > 0
    assert row["invested_value"] == row["net_position"]
