"""Salary projections used to build ``income_by_year`` for a scenario."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class CompensationBand:
    base_salary: float
    bonus_rate: float
    annual_increase: float


COMPENSATION_DATA: Dict[str, Dict[str, CompensationBand]] = {
    "PwC": {
        "Associate": CompensationBand(75_000, 0.10, 0.08),
        "Senior Associate": CompensationBand(95_000, 0.12, 0.10),
        "Manager": CompensationBand(125_000, 0.15, 0.12),
        "Senior Manager": CompensationBand(155_000, 0.18, 0.10),
        "Director": CompensationBand(195_000, 0.20, 0.08),
        "Partner": CompensationBand(300_000, 0.25, 0.05),
    },
    "Deloitte": {
        "Associate": CompensationBand(73_000, 0.10, 0.08),
        "Senior Associate": CompensationBand(92_000, 0.12, 0.10),
        "Manager": CompensationBand(120_000, 0.15, 0.12),
        "Senior Manager": CompensationBand(150_000, 0.18, 0.10),
        "Director": CompensationBand(190_000, 0.20, 0.08),
        "Partner": CompensationBand(290_000, 0.25, 0.05),
    },
}

LOCATION_ADJUSTMENTS: Dict[str, float] = {
    "New York, NY": 1.25,
    "San Francisco, CA": 1.30,
    "Los Angeles, CA": 1.20,
    "Chicago, IL": 1.10,
    "Boston, MA": 1.15,
    "Seattle, WA": 1.18,
    "Washington, DC": 1.15,
    "Atlanta, GA": 1.00,
    "Dallas, TX": 1.05,
    "Houston, TX": 1.05,
    "Other": 1.00,
}

# position -> (years before promotion, next position)
PROMOTION_TIMELINE: Dict[str, Tuple[int, str]] = {
    "Associate": (2, "Senior Associate"),
    "Senior Associate": (3, "Manager"),
    "Manager": (4, "Senior Manager"),
    "Senior Manager": (5, "Director"),
    "Director": (6, "Partner"),
    "Partner": (999, "Partner"),
}

COMMON_BENEFITS = [
    "401(k) with company match",
    "Health, dental, and vision insurance",
    "Paid time off and holidays",
    "Professional development budget",
    "CPA exam support and bonuses",
]

FIRM_BENEFITS: Dict[str, List[str]] = {
    "PwC": [
        "Wealth Builder contribution (additional retirement)",
        "Student loan assistance ($100/month)",
        "Wellness reimbursement",
        "Flexible work arrangements",
    ],
    "Deloitte": [
        "Cash Balance Plan (pension)",
        "Well-being subsidy ($1,000/year)",
        "Backup care for family",
        "Sabbatical program (after 5 years)",
    ],
}


@dataclass(frozen=True)
class ProjectedIncome:
    year: int
    base_salary: float
    bonus: float
    total_compensation: float
    position: str


@dataclass(frozen=True)
class CompensationProjection:
    income_by_year: Tuple[float, ...]
    projected: Tuple[ProjectedIncome, ...]
    benefits: Tuple[str, ...]


def projected_position(position: str, years_in_position: int) -> str:
    timeline = PROMOTION_TIMELINE.get(position)
    if timeline is None:
        return position
    years_needed, next_position = timeline
    if years_in_position >= years_needed and next_position != position:
        return projected_position(next_position, years_in_position - years_needed)
    return position


def firm_benefits(firm: str) -> List[str]:
    return COMMON_BENEFITS + FIRM_BENEFITS.get(firm, [])


def project_income(
    firm: str, position: str, location: str = "Other", years_at_firm: int = 0, years: int = 5
) -> CompensationProjection:
    """Salary plus bonus for each of the next ``years`` years, rounded to whole dollars.

    Raises ``ValueError`` when the firm/position pair has no compensation data.
    """
    band = COMPENSATION_DATA.get(firm, {}).get(position)
    if band is None:
        raise ValueError(f"Compensation data not found for {firm} {position}")

    multiplier = LOCATION_ADJUSTMENTS.get(location, LOCATION_ADJUSTMENTS["Other"])
    projected = []
    for year in range(years):
        base = band.base_salary * multiplier * (1 + band.annual_increase) ** year
        bonus = base * band.bonus_rate
        projected.append(
            ProjectedIncome(
                year=year + 1,
                base_salary=round(base),
                bonus=round(bonus),
                total_compensation=round(base + bonus),
                position=projected_position(position, years_at_firm + year),
            )
        )

    return CompensationProjection(
        income_by_year=tuple(float(p.total_compensation) for p in projected),
        projected=tuple(projected),
        benefits=tuple(firm_benefits(firm)),
    )
