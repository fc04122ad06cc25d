from __future__ import annotations

from dataclasses import replace

from .inputs import (
    Ages,
    DebtTranche,
    ExpenseDetails,
    FinancialScenario,
    GoalTarget,
    PayrollSettings,
    PlanSettings,
)


def default_expense_details(base_salary_annual: float = 160_000) -> ExpenseDetails:
    return ExpenseDetails(
        rent=2000,
        parking=200,
        renters_insurance=30,
        electricity=170,
        natural_gas=70,
        water_sewer_trash=90,
        internet=70,
        mobile_phones=120,
        subscriptions=350,
        auto_insurance=600,
        gas=300,
        maintenance=140,
        registration=8,
        eating_out=600,
        groceries=400,
        tithing=base_salary_annual / 12.0 * 0.10,
        tithing_rate=0.10,
    )


def default_debts() -> tuple[DebtTranche, ...]:
    return (
        DebtTranche(name="Private 10%", balance=50_000, apr=0.10, minimum_payment=600),
        DebtTranche(name="Student 7%", balance=40_000, apr=0.07, minimum_payment=350),
        DebtTranche(name="Private 0%", balance=50_000, apr=0.00, minimum_payment=200),
    )


def default_goals(paced_fund: str = "trust_fund", paced_target: float = 50_000) -> tuple[GoalTarget, ...]:
    return (
        GoalTarget(key="earnest", target=15_000, priority=1),
        GoalTarget(key="ef_starter", target=5_000, priority=2),
        GoalTarget(key="debt_avalanche", target=0, priority=3),
        GoalTarget(key="vacation", target=5_000, priority=4),
        GoalTarget(key="ef_final", target=20_000, priority=5),
        GoalTarget(key=paced_fund, target=paced_target, priority=6),
        GoalTarget(key="down_payment", target=60_000, priority=7),
    )


def default_scenario() -> FinancialScenario:
    """Two-earner household with base salaries only in gross income."""
    details = default_expense_details()
    return FinancialScenario(
        filing_status="MFJ",
        ages=Ages(primary=22, spouse=23),
        location="Atlanta, GA",
        planning_horizon=60,
        income_by_year=(160_000, 185_000, 214_000, 248_000, 287_000),
        monthly_expenses=details.non_charitable_total() + details.tithing,
        monthly_expense_details=details,
        initial_debts=default_debts(),
        goals=default_goals(),
        tax_year=2024,
        payroll=PayrollSettings(),
        plan=PlanSettings(),
    )


def charity_scenario() -> FinancialScenario:
    """Same household, long-horizon goal is a charity fund instead of a trust fund."""
    return replace(default_scenario(), goals=default_goals(paced_fund="charity_fund"))


def benefits_in_gross_scenario() -> FinancialScenario:
    """Variant whose income figures include $15,200/yr of employer benefits."""
    return replace(
        default_scenario(),
        income_by_year=(175_200, 202_400, 234_024, 271_458, 315_000),
        goals=tuple(
            replace(goal, target=75_000) if goal.key == "down_payment" else goal for goal in default_goals()
        ),
        payroll=PayrollSettings(benefits_in_gross=15_200),
    )


SCENARIO_VARIANTS = {
    "trust": default_scenario,
    "charity": charity_scenario,
    "benefits": benefits_in_gross_scenario,
}
