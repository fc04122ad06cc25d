import pytest

from household_plan.core.loader import SchemaError, load_scenario, scenario_from_dict
from tests.helpers import clone_scenario, write_scenario


def test_load_scenario_from_json(tmp_path, scenario_dict):
    scenario = load_scenario(write_scenario(tmp_path, scenario_dict))

    assert scenario.filing_status == "MFJ"
    assert scenario.ages.spouse == 23
    assert scenario.planning_horizon == 24
    assert scenario.income_by_year == (160_000, 185_000)
    assert scenario.initial_debts[1].name == "Student 7%"
    assert scenario.target_for("debt_avalanche") == 0
    assert scenario.charity_target == 50_000
    assert scenario.monthly_expense_details.groceries == 400
    assert scenario.monthly_expense_details.parking == 0
    assert scenario.plan.paced_fund_start_month == 12
    assert scenario.payroll.low_401k_rate == 0.06


def test_optional_sections_take_defaults(scenario_dict):
    data = clone_scenario(scenario_dict)
    for key in ("payroll", "plan", "monthly_expense_details", "initial_debts", "planning_horizon"):
        del data[key]
    data["monthly_expenses"] = 3_000

    scenario = scenario_from_dict(data)
    assert scenario.planning_horizon == 60
    assert scenario.initial_debts == ()
    assert scenario.monthly_expense_details is None
    assert scenario.monthly_expenses == 3_000
    assert scenario.plan.paced_fund_milestones == (10_000.0, 25_000.0)


def test_paced_fund_milestones_list_becomes_tuple(scenario_dict):
    data = clone_scenario(scenario_dict)
    data["plan"]["paced_fund_milestones"] = [5000, 20000]
    assert scenario_from_dict(data).plan.paced_fund_milestones == (5_000.0, 20_000.0)


def test_missing_field_names_the_path(scenario_dict):
    data = clone_scenario(scenario_dict)
    del data["goals"]
    with pytest.raises(SchemaError, match=r"scenario\.goals: missing required field"):
        scenario_from_dict(data)


def test_debt_field_errors_include_index(scenario_dict):
    data = clone_scenario(scenario_dict)
    data["initial_debts"][1]["apr"] = "seven"
    with pytest.raises(SchemaError, match=r"initial_debts\[1\]\.apr"):
        scenario_from_dict(data)


def test_unknown_settings_field_rejected(scenario_dict):
    data = clone_scenario(scenario_dict)
    data["payroll"]["bonus_rate"] = 0.1
    with pytest.raises(SchemaError, match="unknown field"):
        scenario_from_dict(data)


def test_priority_must_be_integer(scenario_dict):
    data = clone_scenario(scenario_dict)
    data["goals"][0]["priority"] = "first"
    with pytest.raises(SchemaError, match="priority"):
        scenario_from_dict(data)


def test_root_must_be_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(SchemaError):
        load_scenario(path)


@pytest.mark.parametrize(
    "section, key, value, where",
    [
        ("ages", "primary", None, r"ages\.primary: expected integer"),
        ("ages", "spouse", "twenty", r"ages\.spouse: expected integer"),
        (None, "tax_year", [2024], r"tax_year: expected integer"),
        (None, "planning_horizon", 24.5, r"planning_horizon: expected integer"),
    ],
)
def test_integer_fields_reject_other_types(scenario_dict, section, key, value, where):
    data = clone_scenario(scenario_dict)
    (data[section] if section else data)[key] = value
    with pytest.raises(SchemaError, match=where):
        scenario_from_dict(data)


def test_spouse_age_is_optional(scenario_dict):
    data = clone_scenario(scenario_dict)
    del data["ages"]["spouse"]
    assert scenario_from_dict(data).ages.spouse is None
