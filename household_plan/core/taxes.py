"""Payroll deductions, employer benefits and federal/state/FICA tax for one month."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .budget import base_salary
from .inputs import FinancialScenario, PayrollSettings
from .tax_data import (
    ADDITIONAL_MEDICARE_THRESHOLDS,
    DEFAULT_TAX_YEAR,
    FEDERAL_BRACKETS,
    FICA_RATES,
    STANDARD_DEDUCTIONS,
    STATE_SCHEDULES,
    Bracket,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollBreakdown:
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

    def employer_contributions_monthly(self) -> float:
        return self.employer_match_monthly + self.employer_wealth_builder_monthly + self.hsa_employer_monthly


def _table_year(table: dict, tax_year: int) -> int:
    return tax_year if tax_year in table else DEFAULT_TAX_YEAR


def _normalize_filing_status(filing_status: str) -> str:
    if filing_status in FEDERAL_BRACKETS[DEFAULT_TAX_YEAR]:
        return filing_status
    return "Single"


def progressive_tax(taxable_income: float, brackets: List[Bracket]) -> float:
    """Sum each band's slice of income times its rate."""
    if taxable_income <= 0:
        return 0.0

    tax = 0.0
    for bracket in brackets:
        if taxable_income <= bracket.floor:
            break
        ceiling = taxable_income if bracket.ceiling is None else bracket.ceiling
        tax += min(taxable_income - bracket.floor, ceiling - bracket.floor) * bracket.rate
    return max(0.0, tax)


def compute_federal_tax(taxable_income: float, filing_status: str, tax_year: int = DEFAULT_TAX_YEAR) -> float:
    fs = _normalize_filing_status(filing_status)
    brackets = FEDERAL_BRACKETS[_table_year(FEDERAL_BRACKETS, tax_year)][fs]
    return progressive_tax(max(0.0, taxable_income), brackets)


def standard_deduction(filing_status: str, tax_year: int = DEFAULT_TAX_YEAR) -> float:
    fs = _normalize_filing_status(filing_status)
    return STANDARD_DEDUCTIONS[_table_year(STANDARD_DEDUCTIONS, tax_year)][fs]


def compute_state_tax(
    income_after_pretax: float, state: str, filing_status: str, tax_year: int = DEFAULT_TAX_YEAR
) -> float:
    """Flat state tax on income after pre-tax deductions and the state's own deduction."""
    schedules = STATE_SCHEDULES[_table_year(STATE_SCHEDULES, tax_year)]
    schedule = schedules.get(state.upper())
    if schedule is None:
        logger.warning("No state tax schedule for %r; state tax treated as zero", state)
        return 0.0
    fs = _normalize_filing_status(filing_status)
    taxable = max(0.0, income_after_pretax - schedule.deductions[fs])
    return taxable * schedule.rate


def compute_fica(annual_gross: float, filing_status: str, tax_year: int = DEFAULT_TAX_YEAR) -> float:
    if annual_gross <= 0:
        return 0.0

    rates = FICA_RATES[_table_year(FICA_RATES, tax_year)]
    threshold = ADDITIONAL_MEDICARE_THRESHOLDS[_normalize_filing_status(filing_status)]

    social_security = min(annual_gross, rates["social_security_wage_base"]) * rates["social_security_rate"]
    medicare = annual_gross * rates["medicare_rate"]
    additional = max(0.0, annual_gross - threshold) * rates["additional_medicare_rate"]
    return social_security + medicare + additional


def employee_401k_rate(payroll: PayrollSettings, goals_complete: bool) -> float:
    return payroll.high_401k_rate if goals_complete else payroll.low_401k_rate


def compute_payroll(month: int, annual_gross: float, goals_complete: bool, scenario: FinancialScenario) -> PayrollBreakdown:
    """Monthly payroll figures for a given annual gross.

    The 401(k) rate and the employee HSA contribution depend on whether every
    primary goal was already met, so identical income can produce different
    take-home pay at different points in the plan.
    """
    payroll = scenario.payroll
    salary = base_salary(scenario, annual_gross)

    rate = employee_401k_rate(payroll, goals_complete)
    employee_401k_annual = salary * rate
    employer_match_annual = salary * payroll.employer_match_rate
    wealth_builder_annual = salary * payroll.wealth_builder_rate

    hsa_employee_monthly = payroll.hsa_employee_monthly if goals_complete else 0.0
    hsa_employer_monthly = payroll.hsa_employer_monthly
    hsa_annual_deduction = (hsa_employee_monthly + hsa_employer_monthly) * 12

    after_pretax = annual_gross - employee_401k_annual - hsa_annual_deduction
    federal_taxable = max(0.0, after_pretax - standard_deduction(scenario.filing_status, scenario.tax_year))
    fed_tax_annual = compute_federal_tax(federal_taxable, scenario.filing_status, scenario.tax_year)
    state_tax_annual = compute_state_tax(after_pretax, scenario.state_code(), scenario.filing_status, scenario.tax_year)
    fica_annual = compute_fica(annual_gross, scenario.filing_status, scenario.tax_year)

    net_annual = (
        annual_gross
        - employee_401k_annual
        - hsa_employee_monthly * 12
        - fed_tax_annual
        - state_tax_annual
        - fica_annual
    )

    return PayrollBreakdown(
        employee_401k_rate=rate,
        employee_401k_monthly=employee_401k_annual / 12,
        employer_match_monthly=employer_match_annual / 12,
        employer_wealth_builder_monthly=wealth_builder_annual / 12,
        hsa_employee_monthly=hsa_employee_monthly,
        hsa_employer_monthly=hsa_employer_monthly,
        student_loan_assistance=payroll.loan_assistance_monthly,
        well_being_subsidy=payroll.well_being_monthly,
        fed_tax_monthly=fed_tax_annual / 12,
        state_tax_monthly=state_tax_annual / 12,
        fica_monthly=fica_annual / 12,
        net_take_home_monthly=net_annual / 12,
    )
