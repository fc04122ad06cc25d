from household_plan.core.inputs import GoalTarget
from household_plan.core.milestones import MilestoneContext, detect_milestones, milestone_table
from household_plan.core.waterfall import empty_funds
from tests.helpers import make_scenario


def _context(month=1, total_debt=0.0, prev_total_debt=0.0, goals_complete=False, **funds):
    balances = empty_funds()
    balances.update(funds)
    return MilestoneContext(
        month=month,
        funds=balances,
        total_debt=total_debt,
        prev_total_debt=prev_total_debt,
        goals_complete=goals_complete,
    )


def test_default_table_names(scenario):
    names = [milestone.name for milestone in milestone_table(scenario)]

    assert names == [
        "Earnest $15k reached",
        "EF $5k starter reached",
        "All debts paid off",
        "Down Payment $50k reached",
        "Down Payment target reached!",
        "EF $20k final reached",
        "Vacation fund $5k reached",
        "Trust fund $10k milestone",
        "Trust fund $25k milestone",
        "Trust fund $50k target reached!",
        "401k rate increased to 15%",
    ]


def test_table_only_covers_tracked_goals():
    scenario = make_scenario(goals=(GoalTarget("charity_fund", 20_000, 1),))
    keys = [milestone.key for milestone in milestone_table(scenario)]

    assert keys == ["charity_fund_10000", "charity_fund_target", "rate_increase"]


def test_milestone_fires_once(scenario):
    table = milestone_table(scenario)
    names, fired = detect_milestones(table, _context(earnest=15_000), frozenset())
    assert names == ["Earnest $15k reached"]

    again, fired_again = detect_milestones(table, _context(month=2, earnest=16_000), fired)
    assert again == []
    assert fired_again == fired


def test_several_milestones_in_one_month_keep_table_order(scenario):
    table = milestone_table(scenario)
    names, _ = detect_milestones(table, _context(earnest=15_000, emergency_fund=20_000), frozenset())
    assert names == ["Earnest $15k reached", "EF $5k starter reached", "EF $20k final reached"]


def test_debt_free_needs_a_transition(scenario):
    table = milestone_table(scenario)

    names, _ = detect_milestones(table, _context(total_debt=0, prev_total_debt=0), frozenset())
    assert "All debts paid off" not in names

    names, _ = detect_milestones(table, _context(total_debt=0, prev_total_debt=120), frozenset())
    assert "All debts paid off" in names
