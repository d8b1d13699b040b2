"""investcalc package entry points."""
from __future__ import annotations

import sys

# Avoid leaving ``__pycache__`` folders behind when the calculator runs.
sys.dont_write_bytecode = True

from .cli import build_parser, run_cli
from .finance import YearRecord, final_balance, project
from .geometry import ChartAnchor, Margins, resolve_anchor
from .profiles import InvalidProfileTable, UnknownProfile
from .scenarios import ScenarioSummary, evaluate_scenarios

__all__ = [
    "ChartAnchor",
    "Margins",
    "ScenarioSummary",
    "YearRecord",
    "build_parser",
    "evaluate_scenarios",
    "final_balance",
    "main",
    "main_cli",
    "project",
    "resolve_anchor",
    "run_cli",
    "run_gui",
]

CLI_ERRORS = (InvalidProfileTable, UnknownProfile, ValueError, OSError)


def run_gui() -> None:
    # Tk is only needed for the desktop front end.
    from .gui.app import run

    run()


def _run_cli_or_exit(parser, args) -> None:
    try:
        run_cli(args)
    except CLI_ERRORS as exc:
        parser.error(str(exc))


def main(argv=None) -> None:
    """Console entry point supporting both CLI and GUI modes."""

    parser = build_parser()
    default_args = parser.parse_args([])
    args = parser.parse_args(argv)

    if args.gui:
        run_gui()
        return

    if args.cli:
        _run_cli_or_exit(parser, args)
        return

    cli_fields = [
        "start_amount",
        "monthly_deposit",
        "deposit_years",
        "horizon",
        "profile",
        "profiles",
        "engine",
        "parallel",
        "workers",
        "table",
        "csv",
        "chart",
        "log_level",
    ]
    if any(getattr(args, field) != getattr(default_args, field) for field in cli_fields):
        parser.error("CLI options require --cli; add --cli to run command-line mode.")

    run_gui()


def main_cli(argv=None) -> None:
    """Dedicated console entry point for CLI usage."""

    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.cli:
        args.cli = True
    _run_cli_or_exit(parser, args)
