from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import pandas as pd

from household_plan.validation.checks import validate_inputs

from .engine import MonthlySnapshot, run_months
from .export import snapshots_frame
from .inputs import FinancialScenario
from .reconciliation import AnnualReconciliation, reconcile, reconciliation_frame
from .scenarios import default_scenario

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    snapshots: List[MonthlySnapshot]
    paths: pd.DataFrame
    reconciliation: pd.DataFrame
    summary: Dict[str, float]


class FinancialEngine:
    """Month-by-month projection of one scenario.

    The engine holds only the scenario. Every call to :meth:`simulate` starts
    from fresh balances and an empty milestone set, so repeated calls return
    identical sequences.
    """

    def __init__(self, scenario: Optional[FinancialScenario] = None) -> None:
        self.scenario = scenario if scenario is not None else default_scenario()

    def simulate(self) -> List[MonthlySnapshot]:
        validate_inputs(self.scenario)
        logger.info(
            "Simulating %d months for %s (%s)",
            self.scenario.planning_horizon,
            self.scenario.location,
            self.scenario.filing_status,
        )
        snapshots = run_months(self.scenario)
        logger.info("Simulation finished; total debt at horizon %.2f", snapshots[-1].total_debt)
        return snapshots

    def annual_reconciliation(self) -> List[AnnualReconciliation]:
        return reconcile(self.simulate(), self.scenario.plan.reconciliation_tolerance)


def _summary(snapshots: List[MonthlySnapshot], reconciliation: pd.DataFrame) -> Dict[str, float]:
    final = snapshots[-1]
    debt_free = next((s.month for s in snapshots if s.total_debt <= 0), None)
    return {
        "months": float(len(snapshots)),
        "final_net_worth": final.net_worth,
        "final_cash": final.cash_total,
        "final_retirement": final.retirement_balance_total,
        "final_debt": final.total_debt,
        "debt_free_month": float(debt_free) if debt_free is not None else float("nan"),
        "all_years_reconciled": float(bool(reconciliation["check_passed"].all())),
    }


def simulate(scenario: Optional[FinancialScenario] = None) -> SimulationResult:
    engine = FinancialEngine(scenario)
    snapshots = engine.simulate()
    paths_df = snapshots_frame(snapshots)
    reconciliation_df = reconciliation_frame(snapshots, engine.scenario.plan.reconciliation_tolerance)
    return SimulationResult(
        snapshots=snapshots,
        paths=paths_df,
        reconciliation=reconciliation_df,
        summary=_summary(snapshots, reconciliation_df),
    )
