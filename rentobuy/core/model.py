from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import pandas as pd

from .costs import simulate_monthly_costs
from .inputs import CalculatorInputs, PayoffVsInvestInputs, Scenario, SellVsKeepInputs
from .investing import RECOVERABLE_DEPOSIT_SHARE, calculate_renting_net_worth, track_net_position
from .loan import EffectiveLoanValues, effective_loan_values
from .payoff import LoanPath, simulate_payoff_paths
from .periods import PAYOFF_PREFIX, Period, add_marker, get_periods, loan_term_label
from .sale import calculate_asset_value, calculate_sale_proceeds
from .utils import HORIZON_MONTHS, MONTHS_IN_YEAR, compound_monthly, grow, window_sum

logger = logging.getLogger(__name__)


@dataclass
class CalculationResults:
    scenario: Scenario
    loan: EffectiveLoanValues
    # Shared 360-month series every table reads from
    monthly: pd.DataFrame
    keep_tracking: pd.DataFrame
    periods: List[Period]
    sale_proceeds: pd.DataFrame
    amortization: Optional[pd.DataFrame] = None
    expenditure: Optional[pd.DataFrame] = None
    comparison: Optional[pd.DataFrame] = None
    keep_expenses: Optional[pd.DataFrame] = None
    sell_vs_keep: Optional[pd.DataFrame] = None
    payoff_vs_invest: Optional[pd.DataFrame] = None
    payoff_amortization: Optional[pd.DataFrame] = None
    invest_amortization: Optional[pd.DataFrame] = None


class ProjectionModel:
    def __init__(self, inputs: CalculatorInputs):
        self.inputs = inputs

        self.loan = effective_loan_values(inputs)
        self.monthly = simulate_monthly_costs(inputs, self.loan)
        self.keep_tracking = track_net_position(
            self.monthly["buying_cost"].tolist(),
            inputs.investment_return_rate,
            HORIZON_MONTHS,
            initial_cash=self.loan.refinance_cash_out,
        )
        self.periods = get_periods(self.loan.effective_loan_term, inputs.projection_years)

        self._buying = self.monthly["buying_cost"].tolist()
        self._renting = self.monthly["renting_cost"].tolist()
        logger.debug(
            "Projection for %s: %s, %d periods",
            type(inputs).__name__,
            self.loan,
            len(self.periods),
        )

    # ------------------------- Shared helpers ------------------------- #
    @staticmethod
    def _index(months: int) -> int:
        return min(months - 1, HORIZON_MONTHS - 1)

    def _annual_costs(self, months: int) -> float:
        """Recurring costs net of income for the year starting at ``months``."""
        base = self.inputs.annual_insurance + self.inputs.annual_taxes - self.inputs.annual_income
        return grow(base, self.inputs.inflation_rate, months // MONTHS_IN_YEAR)

    def _annual_loan(self, months: int) -> Dict[str, float]:
        """Loan payment and interest deduction over the 12 months starting at ``months``."""
        payment = window_sum(self.monthly["loan_payment"].tolist(), months)
        deduction = window_sum(self.monthly["tax_deduction"].tolist(), months)
        return {"loan_payment": payment, "tax_deduction": deduction}

    @staticmethod
    def _amortization_rows(
        periods: List[Period],
        monthly: pd.DataFrame,
        balance_column: str,
        opening_balance: float,
    ) -> pd.DataFrame:
        rows = []
        for period in periods:
            if period.months == 0:
                principal = interest = deduction = 0.0
                balance = opening_balance
            else:
                row = monthly.iloc[min(period.months, len(monthly)) - 1]
                principal = float(row["cumulative_principal"])
                interest = float(row["cumulative_interest"])
                deduction = float(row["cumulative_tax_deduction"])
                balance = float(row[balance_column])
            rows.append(
                {
                    "period": period.label,
                    "months": period.months,
                    "principal_paid": principal,
                    "interest_paid": interest,
                    "tax_deduction": deduction,
                    "effective_interest": interest - deduction,
                    "effective_loan_payment": principal + interest - deduction,
                    "loan_balance": balance,
                }
            )
        return pd.DataFrame(rows)

    # ------------------------- Common tables ------------------------- #
    def amortization_table(self) -> Optional[pd.DataFrame]:
        if self.loan.effective_loan_amount <= 0 or self.loan.effective_loan_term <= 0:
            return None
        return self._amortization_rows(
            self.periods, self.monthly, "loan_balance", self.loan.effective_loan_amount
        )

    def sale_proceeds_table(self) -> pd.DataFrame:
        rows = []
        for period in self.periods:
            proceeds = calculate_sale_proceeds(
                self.inputs,
                period.months,
                self.monthly,
                self.loan.effective_loan_amount,
                include_selling=self.inputs.include_selling,
            )
            rows.append({"period": period.label, "months": period.months, **asdict(proceeds)})
        return pd.DataFrame(rows)

    # ------------------------- Buy vs rent ------------------------- #
    def expenditure_table(self) -> pd.DataFrame:
        """Cumulative cash spent buying vs renting at each period."""
        rows = []
        for period in self.periods:
            m = period.months
            buying = self.inputs.downpayment + sum(self._buying[:m])
            renting = self.inputs.rent_deposit + sum(self._renting[:m])
            annual = self._annual_loan(m)
            rows.append(
                {
                    "period": period.label,
                    "months": m,
                    "loan_payment": annual["loan_payment"],
                    "tax_deduction": annual["tax_deduction"],
                    "effective_loan_payment": annual["loan_payment"] - annual["tax_deduction"],
                    "costs": self._annual_costs(m),
                    "buying_expenditure": buying,
                    "renting_expenditure": renting,
                    "difference": buying - renting,
                }
            )
        return pd.DataFrame(rows)

    def comparison_table(self) -> pd.DataFrame:
        """Net worth of buying vs renting; positive difference means renting wins."""
        recoverable = self.inputs.rent_deposit * RECOVERABLE_DEPOSIT_SHARE
        rows = []
        for period in self.periods:
            m = period.months
            asset_value = calculate_asset_value(self.inputs.starting_value, m, self.inputs.appreciation_rate)
            # Without selling analysis net proceeds reduce to asset value minus loan
            buying = calculate_sale_proceeds(
                self.inputs,
                m,
                self.monthly,
                self.loan.effective_loan_amount,
                include_selling=self.inputs.include_selling,
            ).net_proceeds
            renting = calculate_renting_net_worth(self.inputs, m, self.monthly)
            savings = (
                self.inputs.downpayment
                - self.inputs.rent_deposit
                + sum(self._buying[:m])
                - sum(self._renting[:m])
            )
            rows.append(
                {
                    "period": period.label,
                    "months": m,
                    "asset_value": asset_value,
                    "buying_net_worth": buying,
                    "cumulative_savings": savings,
                    "market_return": renting - savings - recoverable,
                    "renting_net_worth": renting,
                    "difference": renting - buying,
                }
            )
        return pd.DataFrame(rows)

    # ------------------------- Sell vs keep ------------------------- #
    def keep_expenses_table(self) -> pd.DataFrame:
        """Cash flow of keeping the asset; negative values are outflows."""
        rows = []
        for period in self.periods:
            m = period.months
            annual = self._annual_loan(m)
            if m == 0:
                returns = 0.0
                position = self.loan.refinance_cash_out
                invested = max(position, 0.0)
            else:
                tracked = self.keep_tracking.iloc[self._index(m)]
                returns = float(tracked["cumulative_returns"])
                position = float(tracked["net_position"])
                invested = float(tracked["invested_value"])
            rows.append(
                {
                    "period": period.label,
                    "months": m,
                    "loan_payment": -annual["loan_payment"],
                    "tax_deduction": annual["tax_deduction"],
                    "effective_loan_payment": annual["tax_deduction"] - annual["loan_payment"],
                    "income_minus_costs": -self._annual_costs(m),
                    "cumulative_exp": -sum(self._buying[:m]),
                    "investment_returns": returns,
                    "invested_value": invested,
                    "net_position": position,
                }
            )
        return pd.DataFrame(rows)

    def sell_vs_keep_table(self) -> pd.DataFrame:
        """Net worth of keeping vs selling today; positive difference means keeping wins."""
        inputs = self.inputs
        if not isinstance(inputs, SellVsKeepInputs):
            raise TypeError("sell vs keep needs SellVsKeepInputs")

        # Selling today repays the loan as it stands before any refinance
        opening = inputs.payoff_balance if inputs.include_refinance else self.loan.effective_loan_amount
        proceeds_now = calculate_sale_proceeds(
            inputs, 0, self.monthly, opening, include_selling=inputs.include_selling
        ).net_proceeds
        recoverable = inputs.rent_deposit * RECOVERABLE_DEPOSIT_SHARE
        rent_outflows = [-cost for cost in self._renting]

        rows = []
        for period in self.periods:
            m = period.months
            if m == 0:
                keep_position = self.loan.refinance_cash_out
            else:
                keep_position = float(self.keep_tracking["net_position"].iloc[self._index(m)])
            keep_proceeds = calculate_sale_proceeds(
                inputs,
                m,
                self.monthly,
                self.loan.effective_loan_amount,
                include_selling=inputs.include_selling,
            ).net_proceeds
            keep_net_worth = keep_proceeds + keep_position

            row = {"period": period.label, "months": m}
            if inputs.include_renting_sell:
                sell_net_worth = (
                    compound_monthly(
                        proceeds_now - inputs.rent_deposit,
                        inputs.investment_return_rate,
                        m,
                        rent_outflows,
                    )
                    + recoverable
                )
                row["sell_cumulative_expenses"] = inputs.rent_deposit + sum(self._renting[:m]) - recoverable
            else:
                sell_net_worth = compound_monthly(proceeds_now, inputs.investment_return_rate, m)

            row.update(
                {
                    "sell_net_worth": sell_net_worth,
                    "keep_sale_proceeds": keep_proceeds,
                    "keep_net_position": keep_position,
                    "keep_net_worth": keep_net_worth,
                    "difference": keep_net_worth - sell_net_worth,
                }
            )
            rows.append(row)
        return pd.DataFrame(rows)

    # ------------------------- Payoff vs invest ------------------------- #
    def payoff_paths(self) -> Dict[str, LoanPath]:
        if not isinstance(self.inputs, PayoffVsInvestInputs):
            raise TypeError("payoff vs invest needs PayoffVsInvestInputs")
        payoff, invest = simulate_payoff_paths(self.inputs, self.loan)
        return {"payoff": payoff, "invest": invest}

    def payoff_periods(self, paths: Dict[str, LoanPath]) -> List[Period]:
        """Display periods plus a marker at the month the payoff path closes the loan."""
        month = paths["payoff"].payoff_month
        if month is None:
            return list(self.periods)
        return add_marker(self.periods, month, loan_term_label(month, PAYOFF_PREFIX))

    def payoff_vs_invest_table(self, paths: Optional[Dict[str, LoanPath]] = None) -> pd.DataFrame:
        """Wealth (investments minus loan) of each path; positive difference means paying off wins."""
        paths = paths or self.payoff_paths()
        payoff, invest = paths["payoff"], paths["invest"]
        rows = []
        for period in self.payoff_periods(paths):
            m = period.months
            payoff_balance = payoff.balance_at(m)
            payoff_value = payoff.investment_at(m)
            invest_balance = invest.balance_at(m)
            invest_value = invest.investment_at(m)
            rows.append(
                {
                    "period": period.label,
                    "months": m,
                    "payoff_loan_balance": payoff_balance,
                    "payoff_investment_value": payoff_value,
                    "payoff_wealth": payoff_value - payoff_balance,
                    "invest_loan_balance": invest_balance,
                    "invest_investment_value": invest_value,
                    "invest_wealth": invest_value - invest_balance,
                    "difference": (payoff_value - payoff_balance) - (invest_value - invest_balance),
                }
            )
        return pd.DataFrame(rows)

    def path_amortization_table(
        self, path: LoanPath, periods: Optional[List[Period]] = None
    ) -> pd.DataFrame:
        return self._amortization_rows(periods or self.periods, path.monthly, "balance", path.opening_balance)

    # ------------------------- Results ------------------------- #
    def results(self, **tables: Optional[pd.DataFrame]) -> CalculationResults:
        return CalculationResults(
            scenario=self.inputs.scenario,
            loan=self.loan,
            monthly=self.monthly,
            keep_tracking=self.keep_tracking,
            periods=self.periods,
            sale_proceeds=self.sale_proceeds_table(),
            **tables,
        )
