import copy
import json
from pathlib import Path

from household_plan.core.inputs import Ages, DebtTranche, FinancialScenario, GoalTarget

STANDARD_ORDER = (
    "earnest",
    "ef_starter",
    "debt_avalanche",
    "vacation",
    "ef_final",
    "trust_fund",
    "down_payment",
)


def goals(**targets: float) -> tuple[GoalTarget, ...]:
    """Goals in the standard priority order; unspecified targets are zero."""
    return tuple(
        GoalTarget(key=key, target=targets.get(key, 0.0), priority=priority)
        for priority, key in enumerate(STANDARD_ORDER, start=1)
    )


def make_scenario(**overrides) -> FinancialScenario:
    values = dict(
        filing_status="MFJ",
        ages=Ages(primary=30, spouse=30),
        location="Atlanta, GA",
        planning_horizon=12,
        income_by_year=(120_000,),
        initial_debts=(),
        goals=goals(),
        monthly_expenses=0.0,
        monthly_expense_details=None,
    )
    values.update(overrides)
    return FinancialScenario(**values)


def three_tranche_debts(balance: float = 2_000, minimum: float = 50) -> tuple[DebtTranche, ...]:
    return (
        DebtTranche(name="Private 10%", balance=balance, apr=0.10, minimum_payment=minimum),
        DebtTranche(name="Student 7%", balance=balance, apr=0.07, minimum_payment=minimum),
        DebtTranche(name="Private 0%", balance=balance, apr=0.00, minimum_payment=minimum),
    )


def write_scenario(tmp_path: Path, data: dict, filename: str = "scenario.json") -> Path:
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def clone_scenario(data: dict) -> dict:
    return copy.deepcopy(data)
