import math

import pytest

from household_plan.core.what_if import WhatIfScenario, apply_what_if, run_what_if
from tests.helpers import make_scenario, three_tranche_debts


def test_apply_what_if_returns_edited_copy(scenario):
    edited = apply_what_if(
        scenario,
        WhatIfScenario(
            income_multiplier=1.1,
            expense_multiplier=2.0,
            target_overrides={"down_payment": 80_000},
            planning_horizon=36,
            paced_fund_start_month=24,
        ),
    )

    assert edited.income_by_year[0] == pytest.approx(176_000)
    assert edited.monthly_expense_details.rent == 4_000
    assert edited.monthly_expense_details.tithing_rate == 0.10
    assert edited.down_payment_target == 80_000
    assert edited.planning_horizon == 36
    assert edited.plan.paced_fund_start_month == 24

    assert scenario.income_by_year[0] == 160_000
    assert scenario.down_payment_target == 60_000
    assert scenario.monthly_expense_details.rent == 2_000


def test_identity_what_if_matches_baseline():
    scenario = make_scenario(planning_horizon=12, initial_debts=three_tranche_debts())
    result = run_what_if(scenario, WhatIfScenario())

    assert result.summary["final_net_worth_change"] == pytest.approx(0)
    assert result.summary["debt_free_month"] == result.summary["baseline_debt_free_month"] == 3
    assert len(result.path) == 12


def test_higher_income_improves_outcome(scenario):
    result = run_what_if(scenario, WhatIfScenario(income_multiplier=1.2))

    assert result.summary["final_net_worth_change"] > 0
    assert result.summary["debt_free_month"] < result.summary["baseline_debt_free_month"]


def test_debt_free_month_is_nan_when_debt_remains():
    scenario = make_scenario(planning_horizon=2, initial_debts=three_tranche_debts(balance=50_000))
    result = run_what_if(scenario, WhatIfScenario())
    assert math.isnan(result.summary["debt_free_month"])


def test_invalid_what_if_raises(scenario):
    with pytest.raises(ValueError, match="target cannot be negative"):
        run_what_if(scenario, WhatIfScenario(target_overrides={"vacation": -1}))
