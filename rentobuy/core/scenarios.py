from __future__ import annotations

import logging
from typing import Callable, Dict

from .inputs import (
    BuyVsRentInputs,
    CalculatorInputs,
    PayoffVsInvestInputs,
    Scenario,
    SellVsKeepInputs,
)
from .model import CalculationResults, ProjectionModel

logger = logging.getLogger(__name__)


def build_buy_vs_rent(inputs: BuyVsRentInputs) -> CalculationResults:
    model = ProjectionModel(inputs)
    return model.results(
        amortization=model.amortization_table(),
        expenditure=model.expenditure_table(),
        comparison=model.comparison_table(),
    )


def build_sell_vs_keep(inputs: SellVsKeepInputs) -> CalculationResults:
    model = ProjectionModel(inputs)
    return model.results(
        amortization=model.amortization_table(),
        keep_expenses=model.keep_expenses_table(),
        sell_vs_keep=model.sell_vs_keep_table(),
    )


def build_payoff_vs_invest(inputs: PayoffVsInvestInputs) -> CalculationResults:
    model = ProjectionModel(inputs)
    paths = model.payoff_paths()
    periods = model.payoff_periods(paths)
    return model.results(
        payoff_vs_invest=model.payoff_vs_invest_table(paths),
        payoff_amortization=model.path_amortization_table(paths["payoff"], periods),
        invest_amortization=model.path_amortization_table(paths["invest"], periods),
    )


_BUILDERS: Dict[Scenario, Callable[..., CalculationResults]] = {
    Scenario.BUY_VS_RENT: build_buy_vs_rent,
    Scenario.SELL_VS_KEEP: build_sell_vs_keep,
    Scenario.PAYOFF_VS_INVEST: build_payoff_vs_invest,
}


def calculate(inputs: CalculatorInputs) -> CalculationResults:
    """Project every table of the scenario ``inputs`` was built for.

    Pure function of its input: no state survives between calls.
    """
    scenario = getattr(type(inputs), "scenario", None)
    if not isinstance(inputs, CalculatorInputs) or scenario not in _BUILDERS:
        raise TypeError(f"expected a scenario input record, got {type(inputs).__name__}")
    logger.debug("Calculating %s", scenario.value)
    return _BUILDERS[scenario](inputs)
