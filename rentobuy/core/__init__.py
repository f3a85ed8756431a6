from .amortization import amort_schedule, monthly_payment
from .costs import simulate_monthly_costs
from .inputs import (
	BuyVsRentInputs,
	CalculatorInputs,
	PayoffVsInvestInputs,
	Scenario,
	SellVsKeepInputs,
)
from .investing import calculate_renting_net_worth, track_net_position
from .loan import EffectiveLoanValues, effective_loan_values
from .model import CalculationResults, ProjectionModel
from .periods import Period, get_periods
from .sale import SaleProceeds, calculate_asset_value, calculate_sale_proceeds
from .schedule import RateSchedule
from .scenarios import calculate

__all__ = [
	"amort_schedule",
	"monthly_payment",
	"simulate_monthly_costs",
	"BuyVsRentInputs",
	"CalculatorInputs",
	"PayoffVsInvestInputs",
	"Scenario",
	"SellVsKeepInputs",
	"calculate_renting_net_worth",
	"track_net_position",
	"EffectiveLoanValues",
	"effective_loan_values",
	"CalculationResults",
	"ProjectionModel",
	"Period",
	"get_periods",
	"SaleProceeds",
	"calculate_asset_value",
	"calculate_sale_proceeds",
	"RateSchedule",
	"calculate",
]
