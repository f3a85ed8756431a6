from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional

from .schedule import RateSchedule


class Scenario(str, Enum):
    BUY_VS_RENT = "buy_vs_rent"
    SELL_VS_KEEP = "sell_vs_keep"
    PAYOFF_VS_INVEST = "payoff_vs_invest"


@dataclass(frozen=True)
class CalculatorInputs:
    """Fully parsed inputs shared by every scenario.

    Rates are annual percentages (6.5 means 6.5%), amounts are in currency
    units and ``loan_term`` is in months.
    """

    scenario: ClassVar[Scenario]

    # Economic assumptions
    inflation_rate: float = 3.0
    investment_return_rate: float = 7.0
    projection_years: int = 10

    # Asset
    purchase_price: float = 500_000.0
    annual_insurance: float = 1_500.0
    annual_taxes: float = 6_000.0
    annual_income: float = 0.0
    appreciation_rate: RateSchedule = field(default_factory=lambda: RateSchedule((3.0,)))

    # Loan
    loan_amount: float = 400_000.0
    loan_rate: float = 6.5
    loan_term: int = 360
    mortgage_interest_deduction: float = 0.0

    # Renting
    rent_deposit: float = 3_000.0
    monthly_rent: float = 2_500.0
    annual_rent_costs: float = 300.0
    other_annual_costs: float = 0.0

    # Selling
    include_selling: bool = False
    agent_commission: float = 5.0
    staging_costs: float = 10_000.0
    tax_free_limits: RateSchedule = field(default_factory=lambda: RateSchedule((0.0,)))
    capital_gains_tax: float = 15.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "appreciation_rate", RateSchedule.coerce(self.appreciation_rate))
        object.__setattr__(self, "tax_free_limits", RateSchedule.coerce(self.tax_free_limits))

    @property
    def downpayment(self) -> float:
        return self.purchase_price - self.loan_amount

    @property
    def starting_value(self) -> float:
        """Value the asset is compounded from when projecting its price."""
        return self.purchase_price


@dataclass(frozen=True)
class BuyVsRentInputs(CalculatorInputs):
    scenario: ClassVar[Scenario] = Scenario.BUY_VS_RENT


@dataclass(frozen=True)
class SellVsKeepInputs(CalculatorInputs):
    scenario: ClassVar[Scenario] = Scenario.SELL_VS_KEEP

    include_selling: bool = True
    current_market_value: float = 0.0
    remaining_loan_term: Optional[int] = None
    include_refinance: bool = False
    payoff_balance: float = 0.0
    closing_costs: float = 0.0
    include_renting_sell: bool = False

    @property
    def starting_value(self) -> float:
        return self.current_market_value or self.purchase_price


@dataclass(frozen=True)
class PayoffVsInvestInputs(CalculatorInputs):
    scenario: ClassVar[Scenario] = Scenario.PAYOFF_VS_INVEST

    extra_monthly_payment: float = 0.0
    extra_upfront_payment: float = 0.0
    # Re-amortize the level payment over the original term after the upfront payment
    recalculate_payment: bool = False


INPUT_TYPES = {
    Scenario.BUY_VS_RENT: BuyVsRentInputs,
    Scenario.SELL_VS_KEEP: SellVsKeepInputs,
    Scenario.PAYOFF_VS_INVEST: PayoffVsInvestInputs,
}
