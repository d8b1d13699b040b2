"""Expected, worst and best case outcomes for a risk profile."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .computation import compute_scenario, execute_parallel, resolve_parallel_mode
from .finance import YearRecord, terminal_balance
from .profiles import RiskProfile, get_profile

logger = logging.getLogger(__name__)

SCENARIO_KINDS = ("expected", "worst", "best")


@dataclass(frozen=True)
class ScenarioSummary:
    profile: str
    expected: float
    worst: float
    best: float
    series: Tuple[YearRecord, ...] = field(default=(), repr=False)

    @property
    def final_balance(self) -> float:
        return self.expected


def evaluate_scenarios(
    start_amount,
    monthly_deposit,
    deposit_years,
    investment_horizon,
    profile: str,
    table: Optional[Mapping[str, RiskProfile]] = None,
    parallel: str = "none",
    workers: Optional[int] = None,
    use_numpy: bool = False,
) -> ScenarioSummary:
    """Run one projection per scenario rate and collect the terminal balances.

    Each run keeps its own balance; only the compounding rate differs.
    Raises :class:`~investcalc.profiles.UnknownProfile` for an unknown profile.
    """

    rates = get_profile(profile, table).rates()
    tasks = [
        (
            kind,
            rates[kind],
            start_amount,
            monthly_deposit,
            deposit_years,
            investment_horizon,
            use_numpy,
        )
        for kind in SCENARIO_KINDS
    ]
    mode = resolve_parallel_mode(parallel, len(tasks))
    results = dict(execute_parallel(compute_scenario, tasks, mode, workers))

    terminal = {
        kind: terminal_balance(series, start_amount) for kind, series in results.items()
    }
    logger.debug(
        "Scenarios for %s: worst=%.2f expected=%.2f best=%.2f",
        profile,
        terminal["worst"],
        terminal["expected"],
        terminal["best"],
    )
    return ScenarioSummary(
        profile=profile,
        expected=terminal["expected"],
        worst=terminal["worst"],
        best=terminal["best"],
        series=tuple(results["expected"]),
    )


__all__ = ["SCENARIO_KINDS", "ScenarioSummary", "evaluate_scenarios"]
