"""How much needs to be in the account on retirement day."""

from __future__ import annotations

from backend.core.numbers import floor_at_zero, step_count


def annual_shortfall_today(monthly_budget: float, other_monthly_income: float) -> float:
    """Yearly spending not covered by other income, in today's dollars."""
    return floor_at_zero(monthly_budget - other_monthly_income) * 12


def shortfall_at_retirement(shortfall_today: float, inflation: float, years_pre: float) -> float:
    return shortfall_today * (1 + inflation) ** years_pre


def corpus_needed(
    shortfall_at_retire: float,
    inflation: float,
    post_rate: float,
    years_post: float,
) -> float:
    """
    Discount every retirement year's payout back to the retirement date.

    Runs backwards from the last payout: each year the payout is added and the
    running total is discounted one year at ``post_rate``. Payouts grow with
    inflation from ``shortfall_at_retire`` in the first retirement year.
    A non-positive ``years_post`` needs nothing.
    """
    balance = 0.0
    for i in range(step_count(years_post)):
        payout = shortfall_at_retire * (1 + inflation) ** (years_post - 1 - i)
        balance = (balance + payout) / (1 + post_rate)
    return balance
