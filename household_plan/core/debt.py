from __future__ import annotations

from dataclasses import replace
from typing import Sequence, Tuple

from .inputs import DebtTranche


def apply_minimum_payment(debt: DebtTranche) -> DebtTranche:
    """One month of interest and minimum payment on a single tranche.

    Only the part of the minimum that exceeds interest reduces principal; when
    interest is larger the balance stays put rather than growing.
    """
    if debt.balance <= 0:
        return debt
    principal_paid = max(0.0, debt.minimum_payment - debt.monthly_interest())
    return replace(debt, balance=max(0.0, debt.balance - principal_paid))


def pay_minimums(debts: Sequence[DebtTranche]) -> Tuple[Tuple[DebtTranche, ...], float]:
    """Return (updated tranches, total minimums paid) for one month."""
    updated = []
    total_minimums = 0.0
    for debt in debts:
        if debt.balance > 0:
            total_minimums += debt.minimum_payment
        updated.append(apply_minimum_payment(debt))
    return tuple(updated), total_minimums


def active_by_apr(debts: Sequence[DebtTranche]) -> list[int]:
    """Indices of tranches with a balance, highest APR first; ties keep list order."""
    active = [idx for idx, debt in enumerate(debts) if debt.balance > 0]
    return sorted(active, key=lambda idx: -debts[idx].apr)


def total_balance(debts: Sequence[DebtTranche]) -> float:
    return sum(debt.balance for debt in debts)
