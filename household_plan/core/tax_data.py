"""Simplified tax bracket, deduction and payroll-tax reference data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Final, List, Optional

DEFAULT_TAX_YEAR: Final[int] = 2024

FILING_STATUSES: Final[set[str]] = {"MFJ", "Single"}


@dataclass(frozen=True)
class Bracket:
    floor: float
    ceiling: Optional[float]  # None means no upper bound
    rate: float


@dataclass(frozen=True)
class StateSchedule:
    rate: float
    deductions: Dict[str, float]


FEDERAL_BRACKETS: Final[Dict[int, Dict[str, List[Bracket]]]] = {
    2024: {
        "MFJ": [
            Bracket(0.0, 23_200.0, 0.10),
            Bracket(23_200.0, 94_300.0, 0.12),
            Bracket(94_300.0, 201_050.0, 0.22),
            Bracket(201_050.0, 383_900.0, 0.24),
            Bracket(383_900.0, 487_450.0, 0.32),
            Bracket(487_450.0, 731_200.0, 0.35),
            Bracket(731_200.0, None, 0.37),
        ],
        "Single": [
            Bracket(0.0, 11_600.0, 0.10),
            Bracket(11_600.0, 47_150.0, 0.12),
            Bracket(47_150.0, 100_525.0, 0.22),
            Bracket(100_525.0, 191_950.0, 0.24),
            Bracket(191_950.0, 243_725.0, 0.32),
            Bracket(243_725.0, 609_350.0, 0.35),
            Bracket(609_350.0, None, 0.37),
        ],
    }
}

STANDARD_DEDUCTIONS: Final[Dict[int, Dict[str, float]]] = {
    2024: {
        "MFJ": 29_200.0,
        "Single": 14_600.0,
    }
}

# Flat-rate state schedules keyed by two-letter code.
STATE_SCHEDULES: Final[Dict[int, Dict[str, StateSchedule]]] = {
    2024: {
        "GA": StateSchedule(rate=0.0519, deductions={"MFJ": 24_000.0, "Single": 12_000.0}),
    }
}

FICA_RATES: Final[Dict[int, Dict[str, float]]] = {
    2024: {
        "social_security_rate": 0.062,
        "social_security_wage_base": 176_100.0,
        "medicare_rate": 0.0145,
        "additional_medicare_rate": 0.009,
    }
}

ADDITIONAL_MEDICARE_THRESHOLDS: Final[Dict[str, float]] = {
    "MFJ": 250_000.0,
    "Single": 200_000.0,
}
