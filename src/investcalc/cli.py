"""Command-line interface for investcalc."""
from __future__ import annotations

import argparse
import logging

import matplotlib.pyplot as plt

from .charting import draw_stacked_bars
from .computation import ENGINES, PARALLEL_MODES, normalize_workers, resolve_use_numpy
from .parsing import ProjectionInputs, parse_amount, parse_years
from .profiles import DEFAULT_PROFILE, PROFILES, load_profile_table
from .reporting import (
    YEAR_TABLE_HEADER,
    export_csv,
    format_currency,
    render_summary,
    year_rows,
)
from .scenarios import ScenarioSummary, evaluate_scenarios

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="investcalc",
        description="Project a lump sum plus monthly deposits under monthly compounding.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--cli", action="store_true", help="Run in CLI mode")
    mode.add_argument("--gui", action="store_true", help="Run GUI")
    parser.add_argument("--start-amount", default="25000", help="Initial lump sum (e.g. 25000 or 25.000)")
    parser.add_argument("--monthly-deposit", default="1000", help="Deposit at the end of every month")
    parser.add_argument("--deposit-years", type=parse_years, default=10, help="Years the monthly deposit runs")
    parser.add_argument("--horizon", type=parse_years, default=25, help="Investment horizon in years")
    parser.add_argument(
        "--profile",
        default=DEFAULT_PROFILE,
        help=f"Risk profile ({', '.join(PROFILES)})",
    )
    parser.add_argument("--profiles", default="", help="JSON file replacing the built-in profile table")
    parser.add_argument(
        "--engine",
        choices=list(ENGINES),
        default="python",
        help="Computation engine: python month loop or vectorised NumPy",
    )
    parser.add_argument(
        "--parallel",
        choices=list(PARALLEL_MODES),
        default="none",
        help="Parallel execution mode for the three scenario runs",
    )
    parser.add_argument("--workers", type=int, default=0, help="Worker count for parallel execution (0 = auto)")
    parser.add_argument("--table", action="store_true", help="Print the year-by-year breakdown")
    parser.add_argument("--csv", default="", help="Write the year-by-year breakdown to this CSV file")
    parser.add_argument("--chart", action="store_true", help="Show a stacked bar chart (CLI)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_table(summary: ScenarioSummary) -> None:
    print(" | ".join(YEAR_TABLE_HEADER))
    for row in year_rows(summary.series):
        year, *amounts = row
        print(" | ".join([str(year)] + [format_currency(v) for v in amounts]))


def run_cli(args: argparse.Namespace) -> ScenarioSummary:
    setup_logging(args.log_level)
    table = load_profile_table(args.profiles) if args.profiles else None

    raw = ProjectionInputs(
        start_amount=parse_amount(args.start_amount),
        monthly_deposit=parse_amount(args.monthly_deposit),
        deposit_years=args.deposit_years,
        investment_horizon=args.horizon,
        profile=args.profile,
    )
    inputs = raw.normalized()
    if inputs.deposit_years != raw.deposit_years:
        logger.warning(
            "Deposit years clamped from %s to %s", raw.deposit_years, inputs.deposit_years
        )
    if (inputs.start_amount, inputs.monthly_deposit) != (raw.start_amount, raw.monthly_deposit):
        logger.warning("Negative amounts are treated as zero")

    summary = evaluate_scenarios(
        inputs.start_amount,
        inputs.monthly_deposit,
        inputs.deposit_years,
        inputs.investment_horizon,
        inputs.profile,
        table=table,
        parallel=args.parallel,
        workers=normalize_workers(args.workers),
        use_numpy=resolve_use_numpy(args.engine),
    )

    print(render_summary(summary, inputs))
    if args.table:
        print()
        _print_table(summary)
    if args.csv:
        export_csv(args.csv, YEAR_TABLE_HEADER, year_rows(summary.series))
        logger.info("Wrote %d row(s) to %s", len(summary.series), args.csv)
    if args.chart:
        fig, ax = plt.subplots(figsize=(10, 6))
        draw_stacked_bars(
            ax,
            summary.series,
            f"Expected result {format_currency(summary.expected)} ({summary.profile})",
        )
        fig.tight_layout()
        plt.show()
    return summary


__all__ = ["build_parser", "run_cli", "setup_logging"]
