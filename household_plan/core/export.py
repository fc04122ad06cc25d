from __future__ import annotations

from pathlib import Path
from typing import Dict, Sequence

import pandas as pd

from .engine import MonthlySnapshot, debt_column

MONTHLY_HEADERS: Dict[str, str] = {
    "month": "Month",
    "year": "Year",
    "annual_gross": "Annual Gross",
    "employee_401k_rate": "401k Rate",
    "employee_401k_monthly": "401k Monthly",
    "employer_match_monthly": "Employer Match",
    "employer_wealth_builder_monthly": "Employer Wealth Builder",
    "hsa_employee_monthly": "HSA Employee",
    "hsa_employer_monthly": "HSA Employer",
    "student_loan_assistance": "Student Loan Assistance",
    "well_being_subsidy": "Well-Being Subsidy",
    "fed_tax_monthly": "Fed Tax Monthly",
    "state_tax_monthly": "State Tax Monthly",
    "fica_monthly": "FICA Monthly",
    "net_take_home_monthly": "Net Take Home Monthly",
    "monthly_expenses": "Fixed Expenses",
    "debt_minimums_paid_monthly": "Debt Minimums",
    "goal_budget_dynamic_monthly": "Goal Budget",
    "alloc_earnest": "Alloc Earnest",
    "alloc_ef_starter": "Alloc EF Starter",
    "alloc_debt_avalanche": "Alloc Debt Avalanche",
    "alloc_vacation": "Alloc Vacation",
    "alloc_ef_final": "Alloc EF Final",
    "alloc_trust_fund": "Alloc Trust Fund",
    "alloc_charity_fund": "Alloc Charity Fund",
    "alloc_down_payment": "Alloc Down Payment",
    "loan_assistance_applied": "Loan Assistance Applied",
    "budget_allocated_monthly": "Budget Allocated",
    "earnest": "Earnest Balance",
    "emergency_fund": "Emergency Fund Balance",
    "vacation_fund": "Vacation Fund Balance",
    "trust_fund": "Trust Fund Balance",
    "charity_fund": "Charity Fund Balance",
    "down_payment": "Down Payment Balance",
    "total_debt": "Total Debt",
    "employee_401k": "Employee 401k",
    "employer_match": "Employer Match Balance",
    "employer_wealth_builder": "Wealth Builder Balance",
    "hsa_balance": "HSA Balance",
    "retirement_balance_total": "Retirement Total",
    "monthly_tithing": "Monthly Tithing",
    "tithing_ytd": "Tithing YTD",
    "tithing_carryforward": "Tithing Carryforward",
    "primary_alloc_label": "Primary Allocation",
    "milestone": "Milestone",
}

RECONCILIATION_HEADERS: Dict[str, str] = {
    "year": "Year",
    "months": "Months",
    "annual_gross": "Annual Gross",
    "employee_401k": "Employee 401k",
    "employer_match": "Employer Match",
    "fed_tax": "Federal Tax",
    "state_tax": "State Tax",
    "fica": "FICA",
    "net_take_home": "Net Take Home",
    "expenses": "Expenses",
    "debt_minimums": "Debt Minimums",
    "goal_allocations": "Goal Budget Used",
    "loan_assistance_applied": "Loan Assistance Applied",
    "total_used": "Total Used",
    "difference": "Difference",
    "check_passed": "Check Passed",
}


def snapshots_frame(snapshots: Sequence[MonthlySnapshot]) -> pd.DataFrame:
    """One row per month indexed by month; debt tranches become ``debt_<name>`` columns."""
    return pd.DataFrame([snapshot.to_record() for snapshot in snapshots]).set_index("month")


def monthly_export_frame(snapshots: Sequence[MonthlySnapshot]) -> pd.DataFrame:
    frame = snapshots_frame(snapshots).reset_index()
    headers = dict(MONTHLY_HEADERS)
    if snapshots:
        for name in snapshots[0].debt_names:
            headers[debt_column(name)] = f"Debt {name}"
    return frame.rename(columns=headers)


def write_monthly_csv(snapshots: Sequence[MonthlySnapshot], path: str | Path) -> Path:
    target = Path(path)
    monthly_export_frame(snapshots).to_csv(target, index=False, float_format="%.2f")
    return target


def write_reconciliation_csv(reconciliation: pd.DataFrame, path: str | Path) -> Path:
    target = Path(path)
    frame = reconciliation.reset_index().rename(columns=RECONCILIATION_HEADERS)
    frame["Check Passed"] = frame["Check Passed"].map({True: "Yes", False: "No"})
    frame.to_csv(target, index=False, float_format="%.2f")
    return target
