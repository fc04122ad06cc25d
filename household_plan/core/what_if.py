from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Dict, Optional

import pandas as pd

from household_plan.validation.checks import validate_inputs

from .engine import run_months
from .export import snapshots_frame
from .inputs import ExpenseDetails, FinancialScenario

_NON_SCALED_EXPENSES = {"tithing", "tithing_rate"}


@dataclass
class WhatIfScenario:
    income_multiplier: float = 1.0
    expense_multiplier: float = 1.0
    target_overrides: Dict[str, float] = field(default_factory=dict)
    planning_horizon: Optional[int] = None
    paced_fund_start_month: Optional[int] = None


@dataclass
class WhatIfResult:
    path: pd.DataFrame
    summary: Dict[str, float]


def _scale_details(details: ExpenseDetails, multiplier: float) -> ExpenseDetails:
    scaled = {
        f.name: getattr(details, f.name) * multiplier for f in fields(details) if f.name not in _NON_SCALED_EXPENSES
    }
    return replace(details, **scaled)


def apply_what_if(scenario: FinancialScenario, what_if: WhatIfScenario) -> FinancialScenario:
    """Edited copy of the scenario; the original is left untouched."""
    goals = tuple(
        replace(goal, target=what_if.target_overrides[goal.key]) if goal.key in what_if.target_overrides else goal
        for goal in scenario.goals
    )
    details = scenario.monthly_expense_details
    if details is not None:
        details = _scale_details(details, what_if.expense_multiplier)
    plan = scenario.plan
    if what_if.paced_fund_start_month is not None:
        plan = replace(plan, paced_fund_start_month=what_if.paced_fund_start_month)

    return replace(
        scenario,
        income_by_year=tuple(income * what_if.income_multiplier for income in scenario.income_by_year),
        monthly_expenses=scenario.monthly_expenses * what_if.expense_multiplier,
        monthly_expense_details=details,
        goals=goals,
        planning_horizon=what_if.planning_horizon or scenario.planning_horizon,
        plan=plan,
    )


def _debt_free_month(path: pd.DataFrame) -> float:
    paid_off = path.index[path["total_debt"] <= 0]
    return float(paid_off[0]) if len(paid_off) else float("nan")


def run_what_if(scenario: FinancialScenario, what_if: WhatIfScenario) -> WhatIfResult:
    """Re-simulate an edited scenario from month 1 and compare it with the baseline."""
    baseline = run_months(scenario)
    edited_scenario = apply_what_if(scenario, what_if)
    validate_inputs(edited_scenario)
    edited = run_months(edited_scenario)
    path_df = snapshots_frame(edited)

    final = edited[-1]
    baseline_final = baseline[-1]
    summary = {
        "final_net_worth": final.net_worth,
        "final_net_worth_change": final.net_worth - baseline_final.net_worth,
        "final_down_payment_change": final.down_payment - baseline_final.down_payment,
        "debt_free_month": _debt_free_month(path_df),
        "baseline_debt_free_month": _debt_free_month(snapshots_frame(baseline)),
    }
    return WhatIfResult(path=path_df, summary=summary)
