"""Data contracts for the retirement projection."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Form fields may be typed as numbers or left as the raw strings the user typed.
RawNumber = Optional[Union[float, str]]
Number = Union[int, float]


class AmountMode(str, Enum):
    CURRENCY = "$"
    PERCENT = "%"


class CalculatorInputs(BaseModel):
    """Complete snapshot of the calculator form.

    Rates are whole-number percentages (6 means 6%).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    currentAge: RawNumber = None
    retirementAge: RawNumber = None
    lifeExpectancy: RawNumber = None

    annualIncome: RawNumber = None
    currentSavings: RawNumber = None
    monthlyContribution: RawNumber = None
    monthlyBudget: RawNumber = None
    otherMonthlyIncome: RawNumber = None

    contributionMode: AmountMode = AmountMode.CURRENCY
    # accepted for completeness; the budget is always read as currency
    budgetMode: AmountMode = AmountMode.CURRENCY

    preRetirementRate: RawNumber = None
    postRetirementRate: RawNumber = None
    inflationRate: RawNumber = None
    incomeGrowthRate: RawNumber = None


class YearPoint(BaseModel):
    """Balances as of the start of one age."""

    model_config = ConfigDict(frozen=True)

    age: Number
    currentBalance: Number
    recommendedBalance: Number


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    corpusNeeded: Number
    corpusHaveAtRetirement: Number
    requiredMonthlyContribution: Number
    currentMonthlyContribution: Number
    runOutAgeCurrent: Number
    runOutAgeRecommended: Number
    yearlySeries: List[YearPoint]


class BudgetSuggestionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    annualIncome: RawNumber = None


class BudgetSuggestionResponse(BaseModel):
    monthlyBudget: int


class StrategyRates(BaseModel):
    """Pre/post-retirement return presets, whole-number percentages."""

    model_config = ConfigDict(frozen=True)

    preRetirementRate: float = Field(..., description="Return before retirement, in percent.")
    postRetirementRate: float = Field(..., description="Return after retirement, in percent.")


class PrefillPayload(BaseModel):
    """Snake_case profile data used to seed the form."""

    model_config = ConfigDict(extra="ignore")

    current_age: RawNumber = None
    annual_pre_tax_income: RawNumber = None
    current_retirement_savings: RawNumber = None
    monthly_contributions: RawNumber = None
    monthly_budget_in_retirement: RawNumber = None
    other_retirement_income: RawNumber = None
    retirement_age: RawNumber = None
    life_expectancy: RawNumber = None
    pre_retirement_rate_of_return: RawNumber = None
    post_retirement_rate_of_return: RawNumber = None
    inflation_rate: RawNumber = None
    annual_income_increase: RawNumber = None
