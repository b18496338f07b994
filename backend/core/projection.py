from __future__ import annotations

import logging
from typing import List, Optional

from backend.core.contribution import required_annual_contribution
from backend.core.corpus import annual_shortfall_today, corpus_needed, shortfall_at_retirement
from backend.core.numbers import as_age, round_half_up
from backend.core.simulation import (
    ContributionPolicy,
    Rates,
    recommended_start,
    simulate_paths,
)
from backend.core.validation import validate_inputs
from backend.schemas.projection import CalculatorInputs, ProjectionResult, YearPoint

logger = logging.getLogger(__name__)


def balance_at_age(series: List[YearPoint], age: float) -> float:
    """Current-path balance recorded at ``age``; 0 when the age is not in the series."""
    for point in series:
        if point.age == age:
            return point.currentBalance
    return 0


def project(inputs: CalculatorInputs) -> Optional[ProjectionResult]:
    """
    Compute the full retirement projection for one input snapshot.

    Stages:
      1) Validate and parse the snapshot (abort -> None).
      2) Size the corpus needed at retirement.
      3) Solve the annual contribution that closes the gap.
      4) Simulate the current and recommended paths to life expectancy.
    """
    parsed = validate_inputs(inputs)
    if parsed is None:
        logger.info("Projection aborted: required inputs are missing or not numeric")
        return None

    years_pre = parsed.years_pre
    years_post = parsed.years_post

    # ---------- What you'll need ----------
    shortfall_today = annual_shortfall_today(parsed.monthly_budget, parsed.other_monthly_income)
    shortfall_at_retire = shortfall_at_retirement(shortfall_today, parsed.inflation, years_pre)
    needed = corpus_needed(shortfall_at_retire, parsed.inflation, parsed.post_rate, years_post)

    # ---------- Required contribution ----------
    required_annual = required_annual_contribution(
        corpus=needed,
        current_savings=parsed.current_savings,
        pre_rate=parsed.pre_rate,
        income_growth=parsed.income_growth,
        years_pre=years_pre,
    )

    # ---------- Current vs recommended paths ----------
    outcome = simulate_paths(
        current_age=parsed.current_age,
        retirement_age=parsed.retirement_age,
        life_expectancy=parsed.life_expectancy,
        savings=parsed.current_savings,
        salary=parsed.annual_income,
        current_policy=ContributionPolicy.declared(
            parsed.contribution_mode, parsed.monthly_contribution
        ),
        recommended_policy=ContributionPolicy.growing(
            recommended_start(required_annual), parsed.income_growth
        ),
        shortfall_at_retire=shortfall_at_retire,
        rates=Rates(
            pre_rate=parsed.pre_rate,
            post_rate=parsed.post_rate,
            inflation=parsed.inflation,
            income_growth=parsed.income_growth,
        ),
    )

    def run_out(age: Optional[float]) -> float:
        return as_age(parsed.life_expectancy if age is None else age)

    # a NaN balance at retirement stays NaN rather than reading as 0
    result = ProjectionResult(
        corpusNeeded=round_half_up(needed),
        corpusHaveAtRetirement=round_half_up(balance_at_age(outcome.series, parsed.retirement_age)),
        requiredMonthlyContribution=round_half_up(required_annual / 12),
        currentMonthlyContribution=round_half_up(outcome.current.annual_contribution / 12),
        runOutAgeCurrent=run_out(outcome.current.run_out_age),
        runOutAgeRecommended=run_out(outcome.recommended.run_out_age),
        yearlySeries=outcome.series,
    )
    logger.debug(
        "Projection computed: need=%s have=%s required_monthly=%s",
        result.corpusNeeded,
        result.corpusHaveAtRetirement,
        result.requiredMonthlyContribution,
    )
    return result


class ProjectionSession:
    """Keeps the last good projection for a caller that recomputes on every edit."""

    def __init__(self) -> None:
        self.last_result: Optional[ProjectionResult] = None

    def recompute(self, inputs: CalculatorInputs) -> Optional[ProjectionResult]:
        """Return the fresh result, or ``None`` leaving ``last_result`` as it was."""
        result = project(inputs)
        if result is not None:
            self.last_result = result
        return result


__all__ = [
    "ProjectionSession",
    "balance_at_age",
    "project",
]
