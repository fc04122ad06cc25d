"""Fixed-priority allocation of the monthly goal budget.

Goals are visited in scenario priority order. Each goal key maps to a rule
that decides how much of the remaining budget it takes:

* ``top_up``      fill toward the target, never past it
* ``avalanche``   loan-assistance subsidy, then budget, into the highest-APR debt
* ``subsidised``  well-being subsidy lands first, then a normal top-up
* ``paced``       spread the remaining target evenly over the months left
* ``sink``        everything still unallocated

The two subsidies never draw on the goal budget. The avalanche, vacation and
down payment steps run every month: when the scenario does not list them they
are appended after its own goals with a zero target.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .debt import active_by_apr
from .inputs import GOAL_KEYS, DebtTranche, FinancialScenario, GoalTarget

FUND_KEYS = ("earnest", "emergency_fund", "vacation_fund", "trust_fund", "charity_fund", "down_payment")

# Steps that run whether or not the scenario lists them, in fallback order.
ALWAYS_RUN = ("debt_avalanche", "vacation", "down_payment")


@dataclass(frozen=True)
class GoalRule:
    kind: str
    label: str
    fund: Optional[str] = None


GOAL_RULES: Dict[str, GoalRule] = {
    "earnest": GoalRule("top_up", "Earnest", "earnest"),
    "ef_starter": GoalRule("top_up", "EF-Starter", "emergency_fund"),
    "debt_avalanche": GoalRule("avalanche", "Debt-Avalanche"),
    "vacation": GoalRule("subsidised", "Vacation", "vacation_fund"),
    "ef_final": GoalRule("top_up", "EF-Final", "emergency_fund"),
    "trust_fund": GoalRule("paced", "Trust-Fund", "trust_fund"),
    "charity_fund": GoalRule("paced", "Charity-Fund", "charity_fund"),
    "down_payment": GoalRule("sink", "House-Fund", "down_payment"),
}


def empty_funds() -> Dict[str, float]:
    return {key: 0.0 for key in FUND_KEYS}


@dataclass(frozen=True)
class WaterfallResult:
    allocations: Dict[str, float]
    funds: Dict[str, float]
    debts: Tuple[DebtTranche, ...]
    labels: Tuple[str, ...]
    loan_assistance_applied: float
    well_being_applied: float
    remaining: float

    def budget_allocated(self) -> float:
        """Allocations drawn from the goal budget, excluding subsidy money."""
        return sum(self.allocations.values()) - self.loan_assistance_applied


@dataclass
class _Ledger:
    remaining: float
    funds: Dict[str, float]
    debts: List[DebtTranche]
    allocations: Dict[str, float] = field(default_factory=lambda: {key: 0.0 for key in GOAL_KEYS})
    labels: List[str] = field(default_factory=list)
    loan_assistance_applied: float = 0.0
    well_being_applied: float = 0.0

    def credit(self, goal_key: str, fund: str, amount: float) -> None:
        self.allocations[goal_key] += amount
        self.funds[fund] += amount
        self.remaining -= amount

    def pay_top_debt(self, amount: float) -> float:
        """Reduce the highest-APR active tranche by up to ``amount``; return what was applied."""
        order = active_by_apr(self.debts)
        if not order or amount <= 0:
            return 0.0
        idx = order[0]
        target = self.debts[idx]
        applied = min(amount, target.balance)
        self.debts[idx] = replace(target, balance=max(0.0, target.balance - applied))
        return applied


def _top_up(ledger: _Ledger, key: str, rule: GoalRule, target: float) -> None:
    balance = ledger.funds[rule.fund]
    if balance < target and ledger.remaining > 0:
        ledger.credit(key, rule.fund, min(ledger.remaining, target - balance))


def _avalanche(ledger: _Ledger, key: str, loan_assistance: float) -> None:
    if loan_assistance > 0:
        applied = ledger.pay_top_debt(loan_assistance)
        ledger.loan_assistance_applied += applied
        ledger.allocations[key] += applied

    if ledger.remaining > 0:
        applied = ledger.pay_top_debt(ledger.remaining)
        ledger.allocations[key] += applied
        ledger.remaining -= applied


def _subsidised(ledger: _Ledger, key: str, rule: GoalRule, target: float, subsidy: float) -> None:
    subsidy = max(0.0, subsidy)
    ledger.funds[rule.fund] += subsidy
    ledger.well_being_applied += subsidy
    _top_up(ledger, key, rule, target)


def _paced(ledger: _Ledger, key: str, rule: GoalRule, target: float, month: int, scenario: FinancialScenario) -> None:
    if month < scenario.plan.paced_fund_start_month:
        return
    balance = ledger.funds[rule.fund]
    if balance >= target or ledger.remaining <= 0:
        return
    shortfall = target - balance
    months_remaining = max(1, scenario.planning_horizon - month + 1)
    ledger.credit(key, rule.fund, min(ledger.remaining, shortfall / months_remaining, shortfall))


def _sink(ledger: _Ledger, key: str, rule: GoalRule) -> None:
    if ledger.remaining > 0:
        ledger.credit(key, rule.fund, ledger.remaining)
        ledger.remaining = 0.0


def waterfall_steps(scenario: FinancialScenario) -> List[GoalTarget]:
    """Scenario goals by priority, followed by any missing always-run steps."""
    steps = scenario.ordered_goals()
    last_priority = steps[-1].priority if steps else 0
    for offset, key in enumerate(k for k in ALWAYS_RUN if not scenario.has_goal(k)):
        steps.append(GoalTarget(key=key, target=0.0, priority=last_priority + offset + 1))
    return steps


def allocate(
    goal_budget: float,
    funds: Mapping[str, float],
    debts: Sequence[DebtTranche],
    scenario: FinancialScenario,
    month: int,
    loan_assistance: float,
    well_being: float,
) -> WaterfallResult:
    """Run one month of the waterfall without mutating the inputs."""
    ledger = _Ledger(remaining=max(0.0, goal_budget), funds=dict(funds), debts=list(debts))

    for goal in waterfall_steps(scenario):
        rule = GOAL_RULES[goal.key]
        before = ledger.allocations[goal.key]

        if rule.kind == "top_up":
            _top_up(ledger, goal.key, rule, goal.target)
        elif rule.kind == "avalanche":
            _avalanche(ledger, goal.key, loan_assistance)
        elif rule.kind == "subsidised":
            _subsidised(ledger, goal.key, rule, goal.target, well_being)
        elif rule.kind == "paced":
            _paced(ledger, goal.key, rule, goal.target, month, scenario)
        elif rule.kind == "sink":
            _sink(ledger, goal.key, rule)

        if ledger.allocations[goal.key] > before and rule.label not in ledger.labels:
            ledger.labels.append(rule.label)

    return WaterfallResult(
        allocations=ledger.allocations,
        funds=ledger.funds,
        debts=tuple(ledger.debts),
        labels=tuple(ledger.labels),
        loan_assistance_applied=ledger.loan_assistance_applied,
        well_being_applied=ledger.well_being_applied,
        remaining=max(0.0, ledger.remaining),
    )
