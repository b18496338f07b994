from __future__ import annotations

from math import isclose

from backend.core.simulation import (
    ContributionPolicy,
    PathState,
    Phase,
    Rates,
    phase_at,
    recommended_start,
    simulate_paths,
    step,
)
from backend.schemas.projection import AmountMode

FLAT = Rates(pre_rate=0.0, post_rate=0.0, inflation=0.0, income_growth=0.0)


def test_phase_flips_once_at_retirement_age():
    assert phase_at(66, 67) is Phase.ACCUMULATING
    assert phase_at(67, 67) is Phase.DRAWING_DOWN
    assert phase_at(90, 67) is Phase.DRAWING_DOWN


def test_currency_policy_is_fixed():
    policy = ContributionPolicy.declared(AmountMode.CURRENCY, 500.0)
    assert policy.initial(60000.0) == 6000.0
    assert policy.next(6000.0, 61200.0) == 6000.0


def test_percent_policy_follows_salary():
    policy = ContributionPolicy.declared(AmountMode.PERCENT, 10.0)
    assert isclose(policy.initial(60000.0), 6000.0, rel_tol=1e-12)
    assert isclose(policy.next(6000.0, 61200.0), 6120.0, rel_tol=1e-12)


def test_growing_policy_ignores_salary():
    policy = ContributionPolicy.growing(1000.0, 0.02)
    assert policy.initial(60000.0) == 1000.0
    assert isclose(policy.next(1000.0, 0.0), 1020.0, rel_tol=1e-12)


def test_recommended_start_never_negative():
    assert recommended_start(-250.0) == 0.0
    assert recommended_start(250.0) == 250.0


def test_accumulating_step_grows_then_contributes():
    rates = Rates(pre_rate=0.10, post_rate=0.0, inflation=0.0, income_growth=0.05)
    state = PathState.start(ContributionPolicy.declared(AmountMode.CURRENCY, 100.0), 1000.0, 50000.0)

    step(state, Phase.ACCUMULATING, 40, 0.0, rates)

    assert isclose(state.balance, 1000.0 * 1.1 + 1200.0, rel_tol=1e-12)
    assert isclose(state.salary, 52500.0, rel_tol=1e-12)
    assert state.annual_contribution == 1200.0


def test_drawdown_step_records_first_depletion_age_only():
    state = PathState.start(ContributionPolicy.growing(0.0, 0.0), 1500.0, 0.0)

    step(state, Phase.DRAWING_DOWN, 70, 1000.0, FLAT)
    assert state.balance == 500.0
    assert state.run_out_age is None

    step(state, Phase.DRAWING_DOWN, 71, 1000.0, FLAT)
    assert state.balance == 0.0
    assert state.run_out_age == 71

    step(state, Phase.DRAWING_DOWN, 72, 1000.0, FLAT)
    assert state.balance == 0.0
    assert state.run_out_age == 71


def test_exactly_funded_year_is_not_a_depletion():
    state = PathState.start(ContributionPolicy.growing(0.0, 0.0), 1000.0 + 1e-10, 0.0)

    step(state, Phase.DRAWING_DOWN, 80, 1000.0 + 2e-10, FLAT)

    assert state.balance == 0.0
    assert state.run_out_age is None


def test_simulation_records_start_of_year_balances():
    outcome = simulate_paths(
        current_age=60,
        retirement_age=62,
        life_expectancy=64,
        savings=1000.0,
        salary=12000.0,
        current_policy=ContributionPolicy.declared(AmountMode.CURRENCY, 100.0),
        recommended_policy=ContributionPolicy.growing(3000.0, 0.0),
        shortfall_at_retire=2000.0,
        rates=FLAT,
    )

    ages = [point.age for point in outcome.series]
    current = [point.currentBalance for point in outcome.series]
    recommended = [point.recommendedBalance for point in outcome.series]

    assert ages == [60, 61, 62, 63, 64]
    # 1000 + 2 x 1200, then 2000 a year out
    assert current == [1000, 2200, 3400, 1400, 0]
    # 1000 + 2 x 3000, then 2000 a year out
    assert recommended == [1000, 4000, 7000, 5000, 3000]
    assert outcome.current.run_out_age == 63
    assert outcome.recommended.run_out_age is None


def test_depleted_path_stays_at_zero():
    outcome = simulate_paths(
        current_age=65,
        retirement_age=65,
        life_expectancy=75,
        savings=5000.0,
        salary=0.0,
        current_policy=ContributionPolicy.declared(AmountMode.CURRENCY, 0.0),
        recommended_policy=ContributionPolicy.growing(0.0, 0.0),
        shortfall_at_retire=2000.0,
        rates=Rates(pre_rate=0.0, post_rate=0.0, inflation=0.03, income_growth=0.0),
    )

    balances = [point.currentBalance for point in outcome.series]
    first_zero = balances.index(0)
    assert all(balance == 0 for balance in balances[first_zero:])
    assert outcome.current.run_out_age == 67


def test_small_real_overshoot_still_counts_as_running_out():
    state = PathState.start(ContributionPolicy.growing(0.0, 0.0), 11999.7, 0.0)

    step(state, Phase.DRAWING_DOWN, 66, 12000.0, FLAT)
    assert state.balance == 0.0
    assert state.run_out_age == 66

    step(state, Phase.DRAWING_DOWN, 67, 12000.0, FLAT)
    assert state.balance == 0.0
    assert state.run_out_age == 66
