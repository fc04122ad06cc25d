from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


GOAL_KEYS = (
    "earnest",
    "ef_starter",
    "debt_avalanche",
    "vacation",
    "ef_final",
    "trust_fund",
    "charity_fund",
    "down_payment",
)


@dataclass(frozen=True)
class DebtTranche:
    name: str
    balance: float
    apr: float
    minimum_payment: float

    def monthly_interest(self) -> float:
        return self.balance * (self.apr / 12.0)


@dataclass(frozen=True)
class ExpenseDetails:
    # Housing & utilities
    rent: float = 0.0
    parking: float = 0.0
    renters_insurance: float = 0.0
    electricity: float = 0.0
    natural_gas: float = 0.0
    water_sewer_trash: float = 0.0
    internet: float = 0.0
    mobile_phones: float = 0.0
    subscriptions: float = 0.0
    # Transportation
    auto_insurance: float = 0.0
    gas: float = 0.0
    maintenance: float = 0.0
    registration: float = 0.0
    # Food
    eating_out: float = 0.0
    groceries: float = 0.0
    # Charitable base figure; the simulation recomputes it from income each month
    tithing: float = 0.0
    tithing_rate: float = 0.10

    def housing(self) -> float:
        return (
            self.rent
            + self.parking
            + self.renters_insurance
            + self.electricity
            + self.natural_gas
            + self.water_sewer_trash
            + self.internet
            + self.mobile_phones
            + self.subscriptions
        )

    def transport(self) -> float:
        return self.auto_insurance + self.gas + self.maintenance + self.registration

    def food(self) -> float:
        return self.eating_out + self.groceries

    def non_charitable_total(self) -> float:
        return self.housing() + self.transport() + self.food()


@dataclass(frozen=True)
class GoalTarget:
    key: str
    target: float
    priority: int


@dataclass(frozen=True)
class PayrollSettings:
    low_401k_rate: float = 0.06
    high_401k_rate: float = 0.15
    employer_match_rate: float = 0.045
    wealth_builder_rate: float = 0.06
    hsa_employee_monthly: float = 200.0  # only once primary goals are complete
    hsa_employer_monthly: float = 58.33
    loan_assistance_monthly: float = 100.0
    well_being_monthly: float = 83.33
    benefits_in_gross: float = 0.0  # flat benefits value netted out of gross before payroll math
    retirement_growth_annual: float = 0.06


@dataclass(frozen=True)
class PlanSettings:
    paced_fund_start_month: int = 30
    reconciliation_tolerance: float = 1.0
    down_payment_milestone: float = 50_000.0
    paced_fund_milestones: Tuple[float, ...] = (10_000.0, 25_000.0)


@dataclass(frozen=True)
class Ages:
    primary: int
    spouse: Optional[int] = None


@dataclass(frozen=True)
class FinancialScenario:
    filing_status: str
    ages: Ages
    location: str
    income_by_year: Tuple[float, ...]
    initial_debts: Tuple[DebtTranche, ...]
    goals: Tuple[GoalTarget, ...]
    planning_horizon: int = 60
    monthly_expenses: float = 0.0
    monthly_expense_details: Optional[ExpenseDetails] = None
    tax_year: int = 2024
    payroll: PayrollSettings = field(default_factory=PayrollSettings)
    plan: PlanSettings = field(default_factory=PlanSettings)

    def annual_gross(self, year: int) -> float:
        """Income for a 1-based plan year; the last entry repeats past the end."""
        index = year - 1
        if 0 <= index < len(self.income_by_year):
            return self.income_by_year[index]
        return self.income_by_year[-1]

    def state_code(self) -> str:
        return self.location.rsplit(",", 1)[-1].strip().upper()

    def goal_targets(self) -> Dict[str, float]:
        return {goal.key: goal.target for goal in self.goals}

    def target_for(self, key: str) -> float:
        return self.goal_targets().get(key, 0.0)

    def ordered_goals(self) -> list[GoalTarget]:
        # sorted() is stable, so equal priorities keep list order
        return sorted(self.goals, key=lambda goal: goal.priority)

    def has_goal(self, key: str) -> bool:
        return any(goal.key == key for goal in self.goals)

    @property
    def earnest_money_target(self) -> float:
        return self.target_for("earnest")

    @property
    def ef_starter_target(self) -> float:
        return self.target_for("ef_starter")

    @property
    def ef_final_target(self) -> float:
        return self.target_for("ef_final")

    @property
    def down_payment_target(self) -> float:
        return self.target_for("down_payment")

    @property
    def vacation_fund_target(self) -> float:
        return self.target_for("vacation")

    @property
    def trust_fund_target(self) -> float:
        return self.target_for("trust_fund")

    @property
    def charity_target(self) -> float:
        return self.target_for("charity_fund")
