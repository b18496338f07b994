"""Parse the raw form snapshot and decide whether a projection can run."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from backend.core.numbers import parse_number
from backend.schemas.projection import AmountMode, CalculatorInputs

# Fields without which there is nothing to project.
REQUIRED_FIELDS = (
    "currentAge",
    "retirementAge",
    "lifeExpectancy",
    "annualIncome",
    "currentSavings",
)


@dataclass(frozen=True)
class ParsedInputs:
    """Numeric view of ``CalculatorInputs``; rates already divided by 100."""

    current_age: float
    retirement_age: float
    life_expectancy: float
    annual_income: float
    current_savings: float
    monthly_contribution: float
    monthly_budget: float
    other_monthly_income: float
    contribution_mode: AmountMode
    pre_rate: float
    post_rate: float
    inflation: float
    income_growth: float

    @property
    def years_pre(self) -> float:
        return self.retirement_age - self.current_age

    @property
    def years_post(self) -> float:
        return self.life_expectancy - self.retirement_age


def invalid_fields(inputs: CalculatorInputs) -> List[str]:
    """Names of required fields that do not hold a usable number."""
    return [
        name
        for name in REQUIRED_FIELDS
        if not math.isfinite(parse_number(getattr(inputs, name)))
    ]


def validate_inputs(inputs: CalculatorInputs) -> Optional[ParsedInputs]:
    """Return the parsed snapshot, or ``None`` when the projection must abort.

    Only the required fields are checked. Everything else is parsed as-is and
    may come through as NaN.
    """
    if invalid_fields(inputs):
        return None

    return ParsedInputs(
        current_age=parse_number(inputs.currentAge),
        retirement_age=parse_number(inputs.retirementAge),
        life_expectancy=parse_number(inputs.lifeExpectancy),
        annual_income=parse_number(inputs.annualIncome),
        current_savings=parse_number(inputs.currentSavings),
        monthly_contribution=parse_number(inputs.monthlyContribution),
        monthly_budget=parse_number(inputs.monthlyBudget),
        other_monthly_income=parse_number(inputs.otherMonthlyIncome),
        contribution_mode=inputs.contributionMode,
        pre_rate=parse_number(inputs.preRetirementRate) / 100,
        post_rate=parse_number(inputs.postRetirementRate) / 100,
        inflation=parse_number(inputs.inflationRate) / 100,
        income_growth=parse_number(inputs.incomeGrowthRate) / 100,
    )
