"""CLI entry point for the household plan simulator."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from household_plan.core.export import write_monthly_csv, write_reconciliation_csv
from household_plan.core.inputs import FinancialScenario
from household_plan.core.loader import SchemaError, load_scenario
from household_plan.core.scenarios import SCENARIO_VARIANTS
from household_plan.core.simulator import simulate
from household_plan.validation.checks import validate_inputs


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Monthly household cash-flow and goal planner")
    parser.add_argument("scenario", nargs="?", help="Path to scenario JSON file (defaults to a built-in scenario)")
    parser.add_argument("--variant", choices=sorted(SCENARIO_VARIANTS), default="trust", help="Built-in scenario to use when no file is given")
    parser.add_argument("--months", type=int, help="Override planning horizon in months")
    parser.add_argument("--csv", help="Write monthly snapshots to this CSV path")
    parser.add_argument("--reconciliation-csv", help="Write annual reconciliation to this CSV path")
    parser.add_argument("--validate", action="store_true", help="Validate the scenario only")
    parser.add_argument("--summary", action="store_true", help="Print text summary to stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _load(args: argparse.Namespace) -> FinancialScenario:
    scenario = load_scenario(args.scenario) if args.scenario else SCENARIO_VARIANTS[args.variant]()
    if args.months is not None:
        scenario = replace(scenario, planning_horizon=args.months)
    return scenario


def _print_summary(result) -> None:
    final = result.snapshots[-1]
    print(f"Months: {len(result.snapshots)}")
    print(f"Ending net worth: ${final.net_worth:,.0f}")
    print(f"Ending cash: ${final.cash_total:,.0f}")
    print(f"Ending retirement: ${final.retirement_balance_total:,.0f}")
    print(f"Ending debt: ${final.total_debt:,.0f}")
    for snapshot in result.snapshots:
        if snapshot.milestone:
            print(f"  Month {snapshot.month}: {snapshot.milestone}")
    failed = result.reconciliation.index[~result.reconciliation["check_passed"]].tolist()
    print("Reconciliation: all years balance" if not failed else f"Reconciliation FAILED for years {failed}")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        scenario = _load(args)
    except (SchemaError, OSError, ValueError) as exc:
        print(f"Failed to load scenario: {exc}", file=sys.stderr)
        return 2

    try:
        validate_inputs(scenario)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if args.validate:
        print("Scenario is valid.")
        return 0

    result = simulate(scenario)
    if args.csv:
        print(f"Wrote monthly data to {write_monthly_csv(result.snapshots, args.csv)}")
    if args.reconciliation_csv:
        print(f"Wrote reconciliation to {write_reconciliation_csv(result.reconciliation, args.reconciliation_csv)}")
    if args.summary:
        _print_summary(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
