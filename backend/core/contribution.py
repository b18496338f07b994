"""Annual contribution that closes the retirement gap."""

from __future__ import annotations

from backend.core.numbers import step_count


def future_value(present: float, rate: float, years: float) -> float:
    return present * (1 + rate) ** years


def accumulation_factor(income_growth: float, pre_rate: float, years_pre: float) -> float:
    """
    Value at retirement of a contribution stream starting at 1.

    The k-th contribution has grown with income for k years and then compounds
    at ``pre_rate`` for the years left until retirement.
    """
    factor = 0.0
    for k in range(step_count(years_pre)):
        factor += (1 + income_growth) ** k * (1 + pre_rate) ** (years_pre - 1 - k)
    return factor


def required_annual_contribution(
    corpus: float,
    current_savings: float,
    pre_rate: float,
    income_growth: float,
    years_pre: float,
) -> float:
    """First-year contribution needed, growing with income afterwards.

    Zero whenever there is no accumulation period. Negative when existing
    savings already outgrow the need.
    """
    gap = corpus - future_value(current_savings, pre_rate, years_pre)
    factor = accumulation_factor(income_growth, pre_rate, years_pre)
    if factor > 0:
        return gap / factor
    return 0.0
