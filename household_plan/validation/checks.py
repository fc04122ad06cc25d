from __future__ import annotations

from household_plan.core.inputs import (
    GOAL_KEYS,
    DebtTranche,
    FinancialScenario,
    PayrollSettings,
    PlanSettings,
)
from household_plan.core.tax_data import FILING_STATUSES


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def _fraction(value: float) -> bool:
    return 0 <= value < 1


def validate_income(scenario: FinancialScenario) -> None:
    _require(len(scenario.income_by_year) > 0, "Income by year must have at least one entry.")
    _require(all(income >= 0 for income in scenario.income_by_year), "Annual income cannot be negative.")


def validate_debt(debt: DebtTranche) -> None:
    _require(debt.balance >= 0, f"Debt '{debt.name}' balance cannot be negative.")
    _require(debt.apr >= 0, f"Debt '{debt.name}' APR cannot be negative.")
    _require(debt.minimum_payment >= 0, f"Debt '{debt.name}' minimum payment cannot be negative.")


def validate_expenses(scenario: FinancialScenario) -> None:
    _require(scenario.monthly_expenses >= 0, "Monthly expenses cannot be negative.")
    details = scenario.monthly_expense_details
    if details is None:
        return
    for name, value in vars(details).items():
        _require(value >= 0, f"Expense '{name}' cannot be negative.")
    _require(_fraction(details.tithing_rate), "Tithing rate must be between 0 and 1.")


def validate_goals(scenario: FinancialScenario) -> None:
    keys = [goal.key for goal in scenario.goals]
    for key in keys:
        _require(key in GOAL_KEYS, f"Unknown goal '{key}'.")
    _require(len(keys) == len(set(keys)), "Each goal may appear only once.")
    for goal in scenario.goals:
        _require(goal.target >= 0, f"Goal '{goal.key}' target cannot be negative.")


def validate_payroll(inputs: PayrollSettings) -> None:
    _require(_fraction(inputs.low_401k_rate), "Low 401(k) rate must be between 0 and 1.")
    _require(_fraction(inputs.high_401k_rate), "High 401(k) rate must be between 0 and 1.")
    _require(_fraction(inputs.employer_match_rate), "Employer match rate must be between 0 and 1.")
    _require(_fraction(inputs.wealth_builder_rate), "Wealth builder rate must be between 0 and 1.")
    _require(inputs.hsa_employee_monthly >= 0, "HSA employee contribution cannot be negative.")
    _require(inputs.hsa_employer_monthly >= 0, "HSA employer contribution cannot be negative.")
    _require(inputs.loan_assistance_monthly >= 0, "Loan assistance cannot be negative.")
    _require(inputs.well_being_monthly >= 0, "Well-being subsidy cannot be negative.")
    _require(inputs.benefits_in_gross >= 0, "Benefits in gross cannot be negative.")
    _require(inputs.retirement_growth_annual > -1, "Retirement growth must be greater than -100%.")


def validate_plan(inputs: PlanSettings) -> None:
    _require(inputs.paced_fund_start_month >= 1, "Paced fund start month must be at least 1.")
    _require(inputs.reconciliation_tolerance > 0, "Reconciliation tolerance must be positive.")
    _require(inputs.down_payment_milestone >= 0, "Down payment milestone cannot be negative.")
    _require(all(t >= 0 for t in inputs.paced_fund_milestones), "Paced fund milestones cannot be negative.")


def validate_inputs(scenario: FinancialScenario) -> None:
    _require(scenario.filing_status in FILING_STATUSES, "Filing status must be 'MFJ' or 'Single'.")
    _require(isinstance(scenario.planning_horizon, int), "Planning horizon must be a whole number of months.")
    _require(scenario.planning_horizon >= 1, "Planning horizon must be at least one month.")
    validate_income(scenario)
    validate_expenses(scenario)
    for debt in scenario.initial_debts:
        validate_debt(debt)
    validate_goals(scenario)
    validate_payroll(scenario.payroll)
    validate_plan(scenario.plan)
