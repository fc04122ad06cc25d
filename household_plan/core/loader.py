"""JSON scenario loading."""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List

from .inputs import (
    Ages,
    DebtTranche,
    ExpenseDetails,
    FinancialScenario,
    GoalTarget,
    PayrollSettings,
    PlanSettings,
)


class SchemaError(ValueError):
    """Raised when raw JSON cannot be parsed into a scenario."""


def _expect_dict(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"{path}: expected object")
    return value


def _expect_list(value: Any, path: str) -> List[Any]:
    if not isinstance(value, list):
        raise SchemaError(f"{path}: expected array")
    return value


def _require(data: Dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        raise SchemaError(f"{path}.{key}: missing required field")
    return data[key]


def _number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"{path}: expected number")
    return float(value)


def _integer(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"{path}: expected integer")
    return value


def _settings(cls: type, raw: Any, path: str) -> Any:
    """Build a flat settings dataclass, keeping defaults for absent keys."""
    data = _expect_dict(raw, path)
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise SchemaError(f"{path}.{unknown[0]}: unknown field")
    values = {}
    for key, value in data.items():
        if isinstance(value, list):
            values[key] = tuple(_number(v, f"{path}.{key}[{i}]") for i, v in enumerate(value))
        elif isinstance(value, int) and not isinstance(value, bool) and key.endswith("_month"):
            values[key] = value
        else:
            values[key] = _number(value, f"{path}.{key}")
    return cls(**values)


def _debt(raw: Any, path: str) -> DebtTranche:
    data = _expect_dict(raw, path)
    return DebtTranche(
        name=str(_require(data, "name", path)),
        balance=_number(_require(data, "balance", path), f"{path}.balance"),
        apr=_number(_require(data, "apr", path), f"{path}.apr"),
        minimum_payment=_number(_require(data, "minimum_payment", path), f"{path}.minimum_payment"),
    )


def _goal(raw: Any, path: str) -> GoalTarget:
    data = _expect_dict(raw, path)
    priority = _integer(_require(data, "priority", path), f"{path}.priority")
    return GoalTarget(
        key=str(_require(data, "key", path)),
        target=_number(data.get("target", 0.0), f"{path}.target"),
        priority=priority,
    )


def scenario_from_dict(data: Dict[str, Any], path: str = "scenario") -> FinancialScenario:
    ages_raw = _expect_dict(_require(data, "ages", path), f"{path}.ages")
    spouse = ages_raw.get("spouse")
    ages = Ages(
        primary=_integer(_require(ages_raw, "primary", f"{path}.ages"), f"{path}.ages.primary"),
        spouse=None if spouse is None else _integer(spouse, f"{path}.ages.spouse"),
    )

    income = _expect_list(_require(data, "income_by_year", path), f"{path}.income_by_year")
    debts = _expect_list(data.get("initial_debts", []), f"{path}.initial_debts")
    goals = _expect_list(_require(data, "goals", path), f"{path}.goals")
    horizon = _integer(data.get("planning_horizon", 60), f"{path}.planning_horizon")

    details_raw = data.get("monthly_expense_details")
    details = None
    if details_raw is not None:
        details = _settings(ExpenseDetails, details_raw, f"{path}.monthly_expense_details")

    return FinancialScenario(
        filing_status=str(_require(data, "filing_status", path)),
        ages=ages,
        location=str(data.get("location", "")),
        planning_horizon=horizon,
        income_by_year=tuple(_number(v, f"{path}.income_by_year[{i}]") for i, v in enumerate(income)),
        monthly_expenses=_number(data.get("monthly_expenses", 0.0), f"{path}.monthly_expenses"),
        monthly_expense_details=details,
        initial_debts=tuple(_debt(d, f"{path}.initial_debts[{i}]") for i, d in enumerate(debts)),
        goals=tuple(_goal(g, f"{path}.goals[{i}]") for i, g in enumerate(goals)),
        tax_year=_integer(data.get("tax_year", 2024), f"{path}.tax_year"),
        payroll=_settings(PayrollSettings, data.get("payroll", {}), f"{path}.payroll"),
        plan=_settings(PlanSettings, data.get("plan", {}), f"{path}.plan"),
    )


def load_scenario(path: str | Path) -> FinancialScenario:
    """Load scenario JSON into the frozen scenario dataclasses."""
    source = Path(path)
    raw = json.loads(source.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SchemaError("scenario: root must be a JSON object")
    return scenario_from_dict(raw)
