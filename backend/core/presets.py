"""Default form values and the small heuristics that fill inputs in for the user."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from backend.core.numbers import NumberLike, optional_number, round_half_up
from backend.schemas.projection import CalculatorInputs, PrefillPayload, StrategyRates

DEFAULT_INPUTS = CalculatorInputs(
    currentAge=35,
    annualIncome=60000,
    currentSavings=30000,
    monthlyContribution=500,
    monthlyBudget=2561,
    otherMonthlyIncome=0,
    retirementAge=67,
    lifeExpectancy=95,
    preRetirementRate=6,
    postRetirementRate=5,
    inflationRate=3,
    incomeGrowthRate=2,
)

# Share of pre-retirement income assumed to be needed in retirement.
INCOME_REPLACEMENT_RATE = 0.75

STRATEGIES: Dict[str, StrategyRates] = {
    "conservative": StrategyRates(preRetirementRate=4, postRetirementRate=3),
    "moderate": StrategyRates(preRetirementRate=7, postRetirementRate=5),
    "aggressive": StrategyRates(preRetirementRate=9, postRetirementRate=7),
}

# prefill key -> form field
PREFILL_FIELDS = {
    "current_age": "currentAge",
    "annual_pre_tax_income": "annualIncome",
    "current_retirement_savings": "currentSavings",
    "monthly_contributions": "monthlyContribution",
    "monthly_budget_in_retirement": "monthlyBudget",
    "other_retirement_income": "otherMonthlyIncome",
    "retirement_age": "retirementAge",
    "life_expectancy": "lifeExpectancy",
    "pre_retirement_rate_of_return": "preRetirementRate",
    "post_retirement_rate_of_return": "postRetirementRate",
    "inflation_rate": "inflationRate",
    "annual_income_increase": "incomeGrowthRate",
}


class UnknownStrategyError(LookupError):
    def __init__(self, name: str):
        super().__init__(f"unknown investment strategy: {name!r}")
        self.name = name


def merge_with_defaults(
    values: Mapping[str, Any],
    base: CalculatorInputs = DEFAULT_INPUTS,
) -> CalculatorInputs:
    """Overlay the provided fields on ``base``.

    Unknown keys are rejected by ``CalculatorInputs`` validation.
    """
    merged = base.model_dump()
    merged.update(values)
    return CalculatorInputs.model_validate(merged)


def inputs_from_prefill(
    payload: PrefillPayload,
    base: CalculatorInputs = DEFAULT_INPUTS,
) -> CalculatorInputs:
    """Seed the form from profile data. Empty or zero values keep the base value."""
    overrides = {
        field: getattr(payload, key)
        for key, field in PREFILL_FIELDS.items()
        if getattr(payload, key)
    }
    return merge_with_defaults(overrides, base)


def suggest_monthly_budget(annual_income: NumberLike) -> Optional[int]:
    income = optional_number(annual_income)
    if income is None:
        return None
    return round_half_up(income * INCOME_REPLACEMENT_RATE / 12)


def strategy_rates(name: str) -> StrategyRates:
    try:
        return STRATEGIES[name.lower()]
    except KeyError:
        raise UnknownStrategyError(name) from None


def apply_strategy(inputs: CalculatorInputs, name: str) -> CalculatorInputs:
    rates = strategy_rates(name)
    return inputs.model_copy(update=rates.model_dump())
