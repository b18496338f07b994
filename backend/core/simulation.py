"""Year-by-year balance projection for the current and recommended paths."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from backend.core.numbers import as_age, floor_at_zero, inclusive_step_count, round_half_up
from backend.schemas.projection import AmountMode, YearPoint


# Overshoot, relative to the payout, still treated as landing exactly on zero.
RESIDUE_TOLERANCE = 1e-9


class Phase(str, Enum):
    ACCUMULATING = "accumulating"
    DRAWING_DOWN = "drawing_down"


def phase_at(age: float, retirement_age: float) -> Phase:
    if age >= retirement_age:
        return Phase.DRAWING_DOWN
    return Phase.ACCUMULATING


@dataclass(frozen=True)
class ContributionPolicy:
    """How a path's annual contribution starts and evolves while working.

    ``mode`` is CURRENCY for a fixed amount, PERCENT for a share of salary, or
    ``None`` for an amount that grows with income every year.
    """

    mode: Optional[AmountMode]
    amount: float
    income_growth: float = 0.0

    @classmethod
    def declared(cls, mode: AmountMode, monthly_amount: float) -> "ContributionPolicy":
        return cls(mode=mode, amount=monthly_amount)

    @classmethod
    def growing(cls, annual_amount: float, income_growth: float) -> "ContributionPolicy":
        return cls(mode=None, amount=annual_amount, income_growth=income_growth)

    def initial(self, salary: float) -> float:
        if self.mode is None:
            return self.amount
        monthly = self.amount
        if self.mode is AmountMode.PERCENT:
            monthly = (salary / 12) * (self.amount / 100)
        return monthly * 12

    def next(self, contribution: float, salary: float) -> float:
        """Contribution for the next year, given the already-raised salary."""
        if self.mode is None:
            return contribution * (1 + self.income_growth)
        if self.mode is AmountMode.PERCENT:
            return salary * (self.amount / 100)
        return contribution


@dataclass(frozen=True)
class Rates:
    pre_rate: float
    post_rate: float
    inflation: float
    income_growth: float


@dataclass
class PathState:
    policy: ContributionPolicy
    balance: float
    annual_contribution: float
    salary: float
    run_out_age: Optional[float] = None

    @classmethod
    def start(cls, policy: ContributionPolicy, savings: float, salary: float) -> "PathState":
        return cls(
            policy=policy,
            balance=savings,
            annual_contribution=policy.initial(salary),
            salary=salary,
        )


def step(state: PathState, phase: Phase, age: float, payout: float, rates: Rates) -> None:
    """Advance one path by one year in place."""
    if phase is Phase.ACCUMULATING:
        state.balance = state.balance * (1 + rates.pre_rate) + state.annual_contribution
        state.salary *= 1 + rates.income_growth
        state.annual_contribution = state.policy.next(state.annual_contribution, state.salary)
        return

    # depleted paths stay at zero
    if state.balance > 0:
        state.balance = state.balance * (1 + rates.post_rate) - payout
        if state.balance < 0:
            # float residue of an exactly funded year is not a depletion
            depleted = -state.balance > RESIDUE_TOLERANCE * payout
            state.balance = 0.0
            if depleted and state.run_out_age is None:
                state.run_out_age = age


@dataclass(frozen=True)
class SimulationOutcome:
    series: List[YearPoint]
    current: PathState
    recommended: PathState


def simulate_paths(
    current_age: float,
    retirement_age: float,
    life_expectancy: float,
    savings: float,
    salary: float,
    current_policy: ContributionPolicy,
    recommended_policy: ContributionPolicy,
    shortfall_at_retire: float,
    rates: Rates,
) -> SimulationOutcome:
    """
    Run both paths from ``current_age`` to ``life_expectancy`` inclusive.

    Order of operations (per age):
      1) Record both balances as of the start of the age (rounded).
      2) Working: grow at the pre-retirement rate, add the contribution, raise
         the salary and update the contribution.
      3) Retired: grow at the post-retirement rate and pay out the shortfall
         inflated since retirement. A path that drops below zero is clamped
         and remembers the age.
    """
    paths: Tuple[PathState, PathState] = (
        PathState.start(current_policy, savings, salary),
        PathState.start(recommended_policy, savings, salary),
    )
    current, recommended = paths

    series: List[YearPoint] = []
    for offset in range(inclusive_step_count(life_expectancy - current_age)):
        age = current_age + offset
        series.append(
            YearPoint(
                age=as_age(age),
                currentBalance=round_half_up(current.balance),
                recommendedBalance=round_half_up(recommended.balance),
            )
        )

        phase = phase_at(age, retirement_age)
        payout = 0.0
        if phase is Phase.DRAWING_DOWN:
            payout = shortfall_at_retire * (1 + rates.inflation) ** (age - retirement_age)

        for path in paths:
            step(path, phase, age, payout, rates)

    return SimulationOutcome(series=series, current=current, recommended=recommended)


def recommended_start(required_annual: float) -> float:
    """The recommended path never contributes a negative amount."""
    return floor_at_zero(required_annual)
