from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from .budget import (
    goal_budget,
    monthly_living_expenses,
    monthly_tithing,
    roll_tithing_carryforward,
    tithing_year_to_date,
)
from .debt import pay_minimums, total_balance
from .inputs import DebtTranche, FinancialScenario
from .milestones import Milestone, MilestoneContext, detect_milestones, milestone_table
from .retirement import RetirementBalances, accrue, monthly_growth_rate
from .taxes import compute_payroll
from .waterfall import allocate, empty_funds


@dataclass(frozen=True)
class SimulationState:
    """Running balances carried from one month to the next."""

    funds: Mapping[str, float]
    debts: Tuple[DebtTranche, ...]
    retirement: RetirementBalances
    tithing_carryforward: float = 0.0
    prior_tithing_ytd: float = 0.0
    fired_milestones: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class MonthlySnapshot:
    month: int
    year: int
    annual_gross: float
    employee_401k_rate: float
    employee_401k_monthly: float
    employer_match_monthly: float
    employer_wealth_builder_monthly: float
    hsa_employee_monthly: float
    hsa_employer_monthly: float
    student_loan_assistance: float
    well_being_subsidy: float
    fed_tax_monthly: float
    state_tax_monthly: float
    fica_monthly: float
    net_take_home_monthly: float
    monthly_expenses: float
    debt_minimums_paid_monthly: float
    goal_budget_dynamic_monthly: float
    alloc_earnest: float
    alloc_ef_starter: float
    alloc_debt_avalanche: float
    alloc_vacation: float
    alloc_ef_final: float
    alloc_trust_fund: float
    alloc_charity_fund: float
    alloc_down_payment: float
    loan_assistance_applied: float
    budget_allocated_monthly: float
    earnest: float
    emergency_fund: float
    vacation_fund: float
    trust_fund: float
    charity_fund: float
    down_payment: float
    debt_names: Tuple[str, ...]
    debt_balances: Tuple[float, ...]
    total_debt: float
    employee_401k: float
    employer_match: float
    employer_wealth_builder: float
    hsa_balance: float
    retirement_balance_total: float
    monthly_tithing: float
    tithing_ytd: float
    tithing_carryforward: float
    primary_alloc_label: str
    milestone: str

    @property
    def cash_total(self) -> float:
        return self.earnest + self.emergency_fund + self.vacation_fund + self.trust_fund + self.charity_fund + self.down_payment

    @property
    def net_worth(self) -> float:
        return self.cash_total + self.retirement_balance_total - self.total_debt

    def milestones(self) -> List[str]:
        return [name.strip() for name in self.milestone.split(",") if name.strip()] if self.milestone else []

    def to_record(self) -> Dict[str, Any]:
        """Flat dict with one column per debt tranche, for frames and CSV export."""
        record = asdict(self)
        names = record.pop("debt_names")
        balances = record.pop("debt_balances")
        for name, balance in zip(names, balances):
            record[debt_column(name)] = balance
        return record


def debt_column(name: str) -> str:
    slug = re.sub(r"[^0-9a-z]+", "_", name.lower()).strip("_")
    return f"debt_{slug}"


def year_for_month(month: int) -> int:
    return (month - 1) // 12 + 1


def initial_state(scenario: FinancialScenario) -> SimulationState:
    return SimulationState(
        funds=empty_funds(),
        debts=tuple(scenario.initial_debts),
        retirement=RetirementBalances(),
    )


def primary_goals_complete(scenario: FinancialScenario, funds: Mapping[str, float], total_debt: float) -> bool:
    return (
        funds["earnest"] >= scenario.earnest_money_target
        and funds["emergency_fund"] >= scenario.ef_final_target
        and funds["down_payment"] >= scenario.down_payment_target
        and total_debt <= 0
    )


def step(
    state: SimulationState,
    scenario: FinancialScenario,
    month: int,
    milestones: Optional[List[Milestone]] = None,
) -> Tuple[SimulationState, MonthlySnapshot]:
    """Advance one month; returns the next state and the month's snapshot."""
    year = year_for_month(month)
    annual_gross = scenario.annual_gross(year)

    prev_total_debt = total_balance(state.debts)
    goals_complete = primary_goals_complete(scenario, state.funds, prev_total_debt)
    payroll = compute_payroll(month, annual_gross, goals_complete, scenario)

    debts, minimums_paid = pay_minimums(state.debts)

    tithing = monthly_tithing(scenario, annual_gross)
    expenses = monthly_living_expenses(scenario, tithing)
    tithing_ytd = tithing_year_to_date(month, tithing)
    carryforward = roll_tithing_carryforward(month, state.tithing_carryforward, state.prior_tithing_ytd)

    budget = goal_budget(payroll.net_take_home_monthly, expenses, minimums_paid)
    waterfall = allocate(
        budget,
        state.funds,
        debts,
        scenario,
        month,
        loan_assistance=payroll.student_loan_assistance,
        well_being=payroll.well_being_subsidy,
    )

    retirement = accrue(state.retirement, payroll, monthly_growth_rate(scenario.payroll.retirement_growth_annual))

    total_debt = total_balance(waterfall.debts)
    context = MilestoneContext(
        month=month,
        funds=waterfall.funds,
        total_debt=total_debt,
        prev_total_debt=prev_total_debt,
        goals_complete=goals_complete,
    )
    table = milestones if milestones is not None else milestone_table(scenario)
    crossed, fired = detect_milestones(table, context, state.fired_milestones)

    allocations = waterfall.allocations
    funds = waterfall.funds
    snapshot = MonthlySnapshot(
        month=month,
        year=year,
        annual_gross=annual_gross,
        employee_401k_rate=payroll.employee_401k_rate,
        employee_401k_monthly=payroll.employee_401k_monthly,
        employer_match_monthly=payroll.employer_match_monthly,
        employer_wealth_builder_monthly=payroll.employer_wealth_builder_monthly,
        hsa_employee_monthly=payroll.hsa_employee_monthly,
        hsa_employer_monthly=payroll.hsa_employer_monthly,
        student_loan_assistance=payroll.student_loan_assistance,
        well_being_subsidy=waterfall.well_being_applied,
        fed_tax_monthly=payroll.fed_tax_monthly,
        state_tax_monthly=payroll.state_tax_monthly,
        fica_monthly=payroll.fica_monthly,
        net_take_home_monthly=payroll.net_take_home_monthly,
        monthly_expenses=expenses,
        debt_minimums_paid_monthly=minimums_paid,
        goal_budget_dynamic_monthly=budget,
        alloc_earnest=allocations["earnest"],
        alloc_ef_starter=allocations["ef_starter"],
        alloc_debt_avalanche=allocations["debt_avalanche"],
        alloc_vacation=allocations["vacation"],
        alloc_ef_final=allocations["ef_final"],
        alloc_trust_fund=allocations["trust_fund"],
        alloc_charity_fund=allocations["charity_fund"],
        alloc_down_payment=allocations["down_payment"],
        loan_assistance_applied=waterfall.loan_assistance_applied,
        budget_allocated_monthly=waterfall.budget_allocated(),
        earnest=funds["earnest"],
        emergency_fund=funds["emergency_fund"],
        vacation_fund=funds["vacation_fund"],
        trust_fund=funds["trust_fund"],
        charity_fund=funds["charity_fund"],
        down_payment=funds["down_payment"],
        debt_names=tuple(debt.name for debt in waterfall.debts),
        debt_balances=tuple(debt.balance for debt in waterfall.debts),
        total_debt=total_debt,
        employee_401k=retirement.employee_401k,
        employer_match=retirement.employer_match,
        employer_wealth_builder=retirement.employer_wealth_builder,
        hsa_balance=retirement.hsa,
        retirement_balance_total=retirement.total,
        monthly_tithing=tithing,
        tithing_ytd=tithing_ytd,
        tithing_carryforward=carryforward,
        primary_alloc_label=", ".join(waterfall.labels),
        milestone=", ".join(crossed),
    )

    next_state = SimulationState(
        funds=funds,
        debts=waterfall.debts,
        retirement=retirement,
        tithing_carryforward=carryforward,
        prior_tithing_ytd=tithing_ytd,
        fired_milestones=fired,
    )
    return next_state, snapshot


def run_months(scenario: FinancialScenario) -> List[MonthlySnapshot]:
    """Fold ``step`` over months 1..horizon from a fresh state."""
    table = milestone_table(scenario)
    state = initial_state(scenario)
    snapshots: List[MonthlySnapshot] = []
    for month in range(1, scenario.planning_horizon + 1):
        state, snapshot = step(state, scenario, month, milestones=table)
        snapshots.append(snapshot)
    return snapshots
