from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Mapping, Tuple

from .inputs import FinancialScenario

logger = logging.getLogger(__name__)

PACED_FUND_TITLES = {"trust_fund": "Trust fund", "charity_fund": "Charity fund"}


@dataclass(frozen=True)
class MilestoneContext:
    month: int
    funds: Mapping[str, float]
    total_debt: float
    prev_total_debt: float
    goals_complete: bool


@dataclass(frozen=True)
class Milestone:
    key: str
    name: str
    condition: Callable[[MilestoneContext], bool]


def _money(amount: float) -> str:
    # no thousands separators: snapshot milestone lists are comma-joined
    if amount >= 1000 and amount % 1000 == 0:
        return f"${amount / 1000:.0f}k"
    return f"${amount:.0f}"


def _fund_at_least(fund: str, threshold: float) -> Callable[[MilestoneContext], bool]:
    return lambda ctx: ctx.funds[fund] >= threshold


def milestone_table(scenario: FinancialScenario) -> List[Milestone]:
    """Named one-time conditions for the goals this scenario actually tracks."""
    plan = scenario.plan
    table: List[Milestone] = []

    if scenario.has_goal("earnest"):
        target = scenario.earnest_money_target
        table.append(Milestone("earnest_target", f"Earnest {_money(target)} reached", _fund_at_least("earnest", target)))
    if scenario.has_goal("ef_starter"):
        target = scenario.ef_starter_target
        table.append(
            Milestone("ef_starter", f"EF {_money(target)} starter reached", _fund_at_least("emergency_fund", target))
        )
    if scenario.initial_debts:
        table.append(
            Milestone(
                "debt_free",
                "All debts paid off",
                lambda ctx: ctx.total_debt <= 0 and ctx.prev_total_debt > 0,
            )
        )
    if scenario.has_goal("down_payment"):
        threshold = plan.down_payment_milestone
        target = scenario.down_payment_target
        if 0 < threshold < target:
            table.append(
                Milestone("down_payment_threshold", f"Down Payment {_money(threshold)} reached", _fund_at_least("down_payment", threshold))
            )
        table.append(Milestone("down_payment_target", "Down Payment target reached!", _fund_at_least("down_payment", target)))
    if scenario.has_goal("ef_final"):
        target = scenario.ef_final_target
        table.append(Milestone("ef_final", f"EF {_money(target)} final reached", _fund_at_least("emergency_fund", target)))
    if scenario.has_goal("vacation"):
        target = scenario.vacation_fund_target
        table.append(Milestone("vacation_target", f"Vacation fund {_money(target)} reached", _fund_at_least("vacation_fund", target)))

    for fund, title in PACED_FUND_TITLES.items():
        if not scenario.has_goal(fund):
            continue
        target = scenario.target_for(fund)
        for threshold in plan.paced_fund_milestones:
            if 0 < threshold < target:
                table.append(
                    Milestone(f"{fund}_{threshold:.0f}", f"{title} {_money(threshold)} milestone", _fund_at_least(fund, threshold))
                )
        table.append(Milestone(f"{fund}_target", f"{title} {_money(target)} target reached!", _fund_at_least(fund, target)))

    high_rate = scenario.payroll.high_401k_rate
    table.append(
        Milestone("rate_increase", f"401k rate increased to {high_rate:.0%}", lambda ctx: ctx.goals_complete)
    )
    return table


def detect_milestones(
    table: List[Milestone], context: MilestoneContext, fired: FrozenSet[str]
) -> Tuple[List[str], FrozenSet[str]]:
    """Return (names crossed this month, updated fired keys)."""
    names: List[str] = []
    newly_fired = set()
    for milestone in table:
        if milestone.key in fired:
            continue
        if milestone.condition(context):
            names.append(milestone.name)
            newly_fired.add(milestone.key)
            logger.debug("Month %d: milestone %r", context.month, milestone.name)
    return names, fired | newly_fired
