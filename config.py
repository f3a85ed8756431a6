from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from rentobuy.core.inputs import INPUT_TYPES, CalculatorInputs, Scenario
from rentobuy.core.parsers import parse_amount, parse_duration, parse_rate_list

logger = logging.getLogger(__name__)

# Project root (parent of this file)
BASE_DIR = Path(__file__).resolve().parent
CONFIG_PATH = BASE_DIR / "config.yaml"

DURATION_FIELDS = {"loan_term", "remaining_loan_term"}
SCHEDULE_FIELDS = {"appreciation_rate", "tax_free_limits"}
BOOLEAN_FIELDS = {"include_selling", "include_refinance", "include_renting_sell", "recalculate_payment"}
SCENARIO_SECTIONS = {Scenario.SELL_VS_KEEP.value, Scenario.PAYOFF_VS_INVEST.value}


def _load_yaml(path: Path = CONFIG_PATH) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        logger.info("Loaded default assumptions from %s", path)
        return data


CFG = _load_yaml()


def _parse_value(name: str, value: Any) -> Any:
    if name in BOOLEAN_FIELDS:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "y"}
        return bool(value)
    if name in DURATION_FIELDS:
        return None if value in (None, "") else parse_duration(value)
    if name in SCHEDULE_FIELDS:
        return parse_rate_list(value)
    if name == "projection_years":
        return int(value)
    return parse_amount(value)


def default_inputs(
    scenario: Union[Scenario, str] = Scenario.BUY_VS_RENT,
    overrides: Optional[Dict[str, Any]] = None,
    cfg: Optional[Dict[str, Any]] = None,
) -> CalculatorInputs:
    """Build the input record for ``scenario`` from the YAML defaults.

    Scenario sections (``sell_vs_keep``, ``payoff_vs_invest``) override the
    shared keys; ``overrides`` take precedence over both. Values may be raw
    form strings ("500k", "6.5%", "5y6m", "10, 5, 3").
    """
    scenario = Scenario(scenario)
    cfg = CFG if cfg is None else cfg
    input_type = INPUT_TYPES[scenario]

    raw = {k: v for k, v in cfg.items() if k not in SCENARIO_SECTIONS}
    raw.update(cfg.get(scenario.value) or {})
    raw.update(overrides or {})

    known = {f.name for f in fields(input_type)}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning("Ignoring unknown %s settings: %s", scenario.value, ", ".join(unknown))

    values = {name: _parse_value(name, value) for name, value in raw.items() if name in known}
    return input_type(**values)
