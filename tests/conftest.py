import pytest

from household_plan.core.engine import run_months
from household_plan.core.scenarios import default_scenario


@pytest.fixture
def scenario():
    return default_scenario()


@pytest.fixture(scope="session")
def default_snapshots():
    return run_months(default_scenario())


@pytest.fixture
def scenario_dict() -> dict:
    return {
        "filing_status": "MFJ",
        "ages": {"primary": 22, "spouse": 23},
        "location": "Atlanta, GA",
        "planning_horizon": 24,
        "income_by_year": [160000, 185000],
        "monthly_expense_details": {"rent": 2000, "groceries": 400, "tithing_rate": 0.1},
        "initial_debts": [
            {"name": "Private 10%", "balance": 50000, "apr": 0.10, "minimum_payment": 600},
            {"name": "Student 7%", "balance": 40000, "apr": 0.07, "minimum_payment": 350},
        ],
        "goals": [
            {"key": "earnest", "target": 15000, "priority": 1},
            {"key": "ef_starter", "target": 5000, "priority": 2},
            {"key": "debt_avalanche", "priority": 3},
            {"key": "vacation", "target": 5000, "priority": 4},
            {"key": "ef_final", "target": 20000, "priority": 5},
            {"key": "charity_fund", "target": 50000, "priority": 6},
            {"key": "down_payment", "target": 60000, "priority": 7},
        ],
        "payroll": {"loan_assistance_monthly": 100, "benefits_in_gross": 0},
        "plan": {"paced_fund_start_month": 12},
    }
