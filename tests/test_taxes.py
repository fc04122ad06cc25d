from dataclasses import replace

import pytest

from household_plan.core.inputs import PayrollSettings
from household_plan.core.tax_data import FEDERAL_BRACKETS, Bracket
from household_plan.core.taxes import (
    compute_federal_tax,
    compute_fica,
    compute_payroll,
    compute_state_tax,
    progressive_tax,
    standard_deduction,
)


def test_federal_tax_progressive_mfj():
    assert compute_federal_tax(100_000, "MFJ") == pytest.approx(12_106.0)


def test_federal_tax_progressive_single():
    assert compute_federal_tax(50_000, "Single") == pytest.approx(6_053.0)


def test_federal_tax_floors_taxable_income_at_zero():
    assert compute_federal_tax(-5_000, "MFJ") == 0.0
    assert progressive_tax(0, FEDERAL_BRACKETS[2024]["MFJ"]) == 0.0


def test_progressive_tax_top_band_has_no_ceiling():
    brackets = [Bracket(0.0, 10.0, 0.1), Bracket(10.0, None, 0.5)]
    assert progressive_tax(110.0, brackets) == pytest.approx(1.0 + 50.0)


def test_unknown_tax_year_falls_back_to_default_tables():
    assert compute_federal_tax(100_000, "MFJ", 2031) == compute_federal_tax(100_000, "MFJ", 2024)
    assert standard_deduction("MFJ", 2031) == 29_200.0


def test_state_tax_flat_rate_after_deduction():
    assert compute_state_tax(124_000, "GA", "MFJ") == pytest.approx(5_190.0)
    assert compute_state_tax(10_000, "GA", "MFJ") == 0.0


def test_unknown_state_pays_no_state_tax(caplog):
    assert compute_state_tax(124_000, "TX", "MFJ") == 0.0
    assert "No state tax schedule" in caplog.text


def test_fica_caps_social_security_and_adds_additional_medicare():
    assert compute_fica(100_000, "MFJ") == pytest.approx(7_650.0)
    assert compute_fica(300_000, "MFJ") == pytest.approx(176_100 * 0.062 + 300_000 * 0.0145 + 50_000 * 0.009)
    assert compute_fica(300_000, "Single") == pytest.approx(176_100 * 0.062 + 300_000 * 0.0145 + 100_000 * 0.009)


def test_payroll_low_tier_month_one(scenario):
    payroll = compute_payroll(1, 160_000, False, scenario)

    assert payroll.employee_401k_rate == 0.06
    assert payroll.employee_401k_monthly == pytest.approx(800.0)
    assert payroll.employer_match_monthly == pytest.approx(600.0)
    assert payroll.employer_wealth_builder_monthly == pytest.approx(800.0)
    assert payroll.hsa_employee_monthly == 0.0
    assert payroll.hsa_employer_monthly == pytest.approx(58.33)
    assert payroll.student_loan_assistance == 100.0
    assert payroll.well_being_subsidy == pytest.approx(83.33)
    assert payroll.fica_monthly == pytest.approx(12_240.0 / 12)
    assert payroll.net_take_home_monthly == pytest.approx(9_585.01, abs=0.05)


def test_payroll_net_is_gross_less_deductions_and_taxes(scenario):
    payroll = compute_payroll(7, 214_000, True, scenario)
    expected = (
        214_000 / 12
        - payroll.employee_401k_monthly
        - payroll.hsa_employee_monthly
        - payroll.fed_tax_monthly
        - payroll.state_tax_monthly
        - payroll.fica_monthly
    )
    assert payroll.net_take_home_monthly == pytest.approx(expected)


def test_same_gross_pays_less_take_home_once_goals_complete(scenario):
    before = compute_payroll(1, 160_000, False, scenario)
    after = compute_payroll(1, 160_000, True, scenario)

    assert after.employee_401k_rate == 0.15
    assert after.hsa_employee_monthly == 200.0
    assert after.net_take_home_monthly < before.net_take_home_monthly
    assert after.fed_tax_monthly < before.fed_tax_monthly


def test_benefits_in_gross_are_netted_out_of_contribution_base(scenario):
    with_benefits = replace(scenario, payroll=PayrollSettings(benefits_in_gross=15_200))
    payroll = compute_payroll(1, 175_200, False, with_benefits)

    assert payroll.employee_401k_monthly == pytest.approx(800.0)
    assert payroll.employer_match_monthly == pytest.approx(600.0)
