"""Monthly compounding projection for a lump sum plus recurring deposits."""
from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Dict, List, Tuple

import numpy as np

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class YearRecord:
    """Account state at the end of one simulated year (1-indexed)."""

    year: int
    balance: float
    cumulative_deposits: float
    initial_balance: float
    year_start_balance: float

    @property
    def accrued_return(self) -> float:
        return self.balance - (self.initial_balance + self.cumulative_deposits)

    @property
    def stacked_total(self) -> float:
        """Height of the principal/deposits/return stack; negative return is not drawn."""

        return self.initial_balance + self.cumulative_deposits + max(0.0, self.accrued_return)

    def as_dict(self) -> Dict[str, float]:
        data = asdict(self)
        data["accrued_return"] = self.accrued_return
        return data


def coerce_amount(value) -> float:
    """Negative, non-finite or non-numeric amounts become 0."""

    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def coerce_years(value, minimum: int = 0) -> int:
    """Truncate fractional years; non-finite or non-numeric counts give ``minimum``."""

    try:
        years = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return minimum
    return max(years, minimum)


def _normalize(
    start_amount: float,
    monthly_deposit: float,
    deposit_years: float,
    investment_horizon: float,
    annual_return: float,
) -> Tuple[float, float, int, int, float]:
    """Clamp inputs to their domains: amounts >= 0, whole non-negative years."""

    rate = float(annual_return)
    if not math.isfinite(rate):
        raise ValueError(f"annual return must be a finite number (got {annual_return!r})")
    return (
        coerce_amount(start_amount),
        coerce_amount(monthly_deposit),
        coerce_years(deposit_years),
        coerce_years(investment_horizon),
        rate,
    )


def project_py(
    start_amount: float,
    monthly_deposit: float,
    deposit_years: int,
    investment_horizon: int,
    annual_return: float,
) -> List[YearRecord]:
    """Pure-Python month loop with yearly snapshots.

    Each month the balance is compounded first and the deposit (if still
    active) is added at month end, so a deposit earns nothing in the month it
    is made.
    """

    start, deposit, dep_years, years, rate = _normalize(
        start_amount, monthly_deposit, deposit_years, investment_horizon, annual_return
    )
    i = rate / MONTHS_PER_YEAR
    deposit_months = dep_years * MONTHS_PER_YEAR
    value = start
    out: List[YearRecord] = []
    for year in range(1, years + 1):
        year_start = value
        first = (year - 1) * MONTHS_PER_YEAR + 1
        for month in range(first, first + MONTHS_PER_YEAR):
            value *= (1 + i)
            if month <= deposit_months:
                value += deposit
        active = min(year * MONTHS_PER_YEAR, deposit_months)
        out.append(
            YearRecord(
                year=year,
                balance=value,
                cumulative_deposits=active * deposit,
                initial_balance=start,
                year_start_balance=year_start,
            )
        )
    logger.debug("Projected %d year(s) at %.4f (python engine)", years, rate)
    return out


def project_np(
    start_amount: float,
    monthly_deposit: float,
    deposit_years: int,
    investment_horizon: int,
    annual_return: float,
) -> List[YearRecord]:
    """Vectorized equivalent of :func:`project_py`."""

    start, deposit, dep_years, years, rate = _normalize(
        start_amount, monthly_deposit, deposit_years, investment_horizon, annual_return
    )
    if years == 0:
        return []
    growth = 1 + rate / MONTHS_PER_YEAR
    months = years * MONTHS_PER_YEAR
    deposit_months = min(dep_years * MONTHS_PER_YEAR, months)

    add_vec = np.zeros(months, dtype=np.float64)
    add_vec[:deposit_months] = deposit
    powers = growth ** np.arange(months, dtype=np.float64)
    conv = np.convolve(add_vec, powers, mode="full")[:months]

    values = np.empty(months + 1, dtype=np.float64)
    values[0] = start
    values[1:] = start * growth ** np.arange(1, months + 1, dtype=np.float64) + conv

    out = [
        YearRecord(
            year=year,
            balance=float(values[year * MONTHS_PER_YEAR]),
            cumulative_deposits=min(year * MONTHS_PER_YEAR, deposit_months) * deposit,
            initial_balance=start,
            year_start_balance=float(values[(year - 1) * MONTHS_PER_YEAR]),
        )
        for year in range(1, years + 1)
    ]
    logger.debug("Projected %d year(s) at %.4f (numpy engine)", years, rate)
    return out


def project(
    start_amount,
    monthly_deposit,
    deposit_years,
    investment_horizon,
    annual_return,
    use_numpy=False,
) -> List[YearRecord]:
    if use_numpy:
        return project_np(
            start_amount, monthly_deposit, deposit_years, investment_horizon, annual_return
        )
    return project_py(
        start_amount, monthly_deposit, deposit_years, investment_horizon, annual_return
    )


def final_balance(
    start_amount,
    monthly_deposit,
    deposit_years,
    investment_horizon,
    annual_return,
    use_numpy=False,
) -> float:
    """Terminal balance; with no simulated years this is the start amount."""

    series = project(
        start_amount,
        monthly_deposit,
        deposit_years,
        investment_horizon,
        annual_return,
        use_numpy,
    )
    return terminal_balance(series, start_amount)


def terminal_balance(series, start_amount) -> float:
    """Last balance of a series, or the coerced start amount when it is empty."""

    if not series:
        return coerce_amount(start_amount)
    return series[-1].balance


__all__ = [
    "MONTHS_PER_YEAR",
    "YearRecord",
    "coerce_amount",
    "coerce_years",
    "final_balance",
    "project",
    "project_np",
    "project_py",
    "terminal_balance",
]
