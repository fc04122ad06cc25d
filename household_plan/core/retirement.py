from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .taxes import PayrollBreakdown


def monthly_growth_rate(annual_rate: float) -> float:
    """Monthly rate that compounds to ``annual_rate`` over twelve months."""
    return float(np.power(1.0 + annual_rate, 1.0 / 12.0) - 1.0)


@dataclass(frozen=True)
class RetirementBalances:
    employee_401k: float = 0.0
    employer_match: float = 0.0
    employer_wealth_builder: float = 0.0
    hsa: float = 0.0

    @property
    def total(self) -> float:
        return self.employee_401k + self.employer_match + self.employer_wealth_builder + self.hsa


def accrue(balances: RetirementBalances, payroll: PayrollBreakdown, monthly_rate: float) -> RetirementBalances:
    """Add this month's contributions, then grow every account by one month."""
    growth = 1.0 + monthly_rate
    return RetirementBalances(
        employee_401k=(balances.employee_401k + payroll.employee_401k_monthly) * growth,
        employer_match=(balances.employer_match + payroll.employer_match_monthly) * growth,
        employer_wealth_builder=(balances.employer_wealth_builder + payroll.employer_wealth_builder_monthly) * growth,
        hsa=(balances.hsa + payroll.hsa_employee_monthly + payroll.hsa_employer_monthly) * growth,
    )
