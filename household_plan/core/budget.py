from __future__ import annotations

from .inputs import FinancialScenario


def base_salary(scenario: FinancialScenario, annual_gross: float) -> float:
    """Gross income less any benefits value folded into the income figures."""
    return max(0.0, annual_gross - scenario.payroll.benefits_in_gross)


def monthly_tithing(scenario: FinancialScenario, annual_gross: float) -> float:
    details = scenario.monthly_expense_details
    rate = details.tithing_rate if details is not None else 0.10
    return base_salary(scenario, annual_gross) * rate / 12.0


def monthly_living_expenses(scenario: FinancialScenario, tithing: float) -> float:
    """Line items plus this month's tithing; the stored tithing constant is ignored."""
    details = scenario.monthly_expense_details
    if details is None:
        return scenario.monthly_expenses
    return details.non_charitable_total() + tithing


def month_in_year(month: int) -> int:
    return (month - 1) % 12 + 1


def goal_budget(net_take_home: float, expenses: float, debt_minimums: float) -> float:
    return max(0.0, net_take_home - expenses - debt_minimums)


def tithing_year_to_date(month: int, tithing: float) -> float:
    return month_in_year(month) * tithing


def roll_tithing_carryforward(month: int, carryforward: float, prior_ytd: float) -> float:
    """Fold the previous year's giving into the carryforward at each year boundary."""
    if month > 1 and month_in_year(month) == 1:
        return carryforward + prior_ytd
    return carryforward
