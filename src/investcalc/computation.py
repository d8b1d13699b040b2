"""Computation helpers and concurrency utilities."""
from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import List, Optional, Tuple

from .finance import project

ENGINES = ("python", "numpy")
PARALLEL_MODES = ("auto", "process", "thread", "none")


def resolve_use_numpy(engine: str) -> bool:
    """Return True if the NumPy engine should be used for simulations."""

    normalized = engine.lower()
    if normalized not in ENGINES:
        raise ValueError(f"Unknown engine '{engine}' (expected python/numpy)")
    return normalized == "numpy"


def resolve_parallel_mode(mode: str, task_count: int) -> str:
    """Return concrete parallel mode (process/thread/none) given the request."""

    normalized = mode.lower()
    if normalized not in PARALLEL_MODES:
        raise ValueError(f"Unknown parallel mode '{mode}'")
    if task_count <= 1:
        return "none"
    if normalized == "auto":
        return "process"
    return normalized


def normalize_workers(workers: Optional[int]) -> Optional[int]:
    if workers is None or workers <= 0:
        return None
    return workers


def execute_parallel(func, tasks: List[Tuple], mode: str, workers: Optional[int]):
    """Execute a callable for each argument tuple using the requested parallel mode.

    Results come back in task order regardless of mode.
    """

    if mode == "none" or not tasks:
        return [func(*args) for args in tasks]
    Executor = ProcessPoolExecutor if mode == "process" else ThreadPoolExecutor
    with Executor(max_workers=normalize_workers(workers)) as executor:
        futures = [executor.submit(func, *args) for args in tasks]
        return [f.result() for f in futures]


def compute_scenario(
    kind: str,
    rate: float,
    start_amount,
    monthly_deposit,
    deposit_years,
    investment_horizon,
    use_numpy: bool = False,
):
    """Pure function executed in workers: one independent run per scenario."""

    return kind, project(
        start_amount, monthly_deposit, deposit_years, investment_horizon, rate, use_numpy
    )


__all__ = [
    "ENGINES",
    "PARALLEL_MODES",
    "compute_scenario",
    "execute_parallel",
    "normalize_workers",
    "resolve_parallel_mode",
    "resolve_use_numpy",
]
