from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import List, Sequence

import numpy as np
import pandas as pd

from .engine import MonthlySnapshot

logger = logging.getLogger(__name__)

SUMMED_COLUMNS = {
    "employee_401k_monthly": "employee_401k",
    "employer_match_monthly": "employer_match",
    "fed_tax_monthly": "fed_tax",
    "state_tax_monthly": "state_tax",
    "fica_monthly": "fica",
    "net_take_home_monthly": "net_take_home",
    "monthly_expenses": "expenses",
    "debt_minimums_paid_monthly": "debt_minimums",
    "budget_allocated_monthly": "goal_allocations",
    "loan_assistance_applied": "loan_assistance_applied",
}


@dataclass(frozen=True)
class AnnualReconciliation:
    year: int
    months: int
    annual_gross: float
    employee_401k: float
    employer_match: float
    fed_tax: float
    state_tax: float
    fica: float
    net_take_home: float
    expenses: float
    debt_minimums: float
    goal_allocations: float
    loan_assistance_applied: float
    total_used: float
    difference: float
    check_passed: bool


def reconciliation_frame(snapshots: Sequence[MonthlySnapshot], tolerance: float = 1.0) -> pd.DataFrame:
    """Per-year totals of the monthly flows and whether take-home was fully accounted for."""
    columns = ["year", "annual_gross", *SUMMED_COLUMNS]
    monthly = pd.DataFrame([{col: getattr(s, col) for col in columns} for s in snapshots], columns=columns)
    if monthly.empty:
        return pd.DataFrame(columns=[f.name for f in fields(AnnualReconciliation)]).set_index("year")

    grouped = monthly.groupby("year", sort=True)
    annual = grouped[list(SUMMED_COLUMNS)].sum().rename(columns=SUMMED_COLUMNS)
    annual.insert(0, "annual_gross", grouped["annual_gross"].first())
    annual.insert(0, "months", grouped.size())

    annual["total_used"] = annual["expenses"] + annual["debt_minimums"] + annual["goal_allocations"]
    annual["difference"] = annual["net_take_home"] - annual["total_used"]
    annual["check_passed"] = np.abs(annual["difference"].to_numpy()) < tolerance

    for year, row in annual[~annual["check_passed"]].iterrows():
        logger.warning("Year %d does not reconcile: difference %.2f", year, row["difference"])
    return annual


def reconcile(snapshots: Sequence[MonthlySnapshot], tolerance: float = 1.0) -> List[AnnualReconciliation]:
    frame = reconciliation_frame(snapshots, tolerance)
    rows = []
    for year, row in frame.iterrows():
        rows.append(
            AnnualReconciliation(
                year=int(year),
                months=int(row["months"]),
                annual_gross=float(row["annual_gross"]),
                employee_401k=float(row["employee_401k"]),
                employer_match=float(row["employer_match"]),
                fed_tax=float(row["fed_tax"]),
                state_tax=float(row["state_tax"]),
                fica=float(row["fica"]),
                net_take_home=float(row["net_take_home"]),
                expenses=float(row["expenses"]),
                debt_minimums=float(row["debt_minimums"]),
                goal_allocations=float(row["goal_allocations"]),
                loan_assistance_applied=float(row["loan_assistance_applied"]),
                total_used=float(row["total_used"]),
                difference=float(row["difference"]),
                check_passed=bool(row["check_passed"]),
            )
        )
    return rows
