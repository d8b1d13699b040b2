"""Input parsing and coercion for investcalc."""
from __future__ import annotations

import re
from dataclasses import dataclass, replace

from .finance import coerce_amount, coerce_years
from .profiles import DEFAULT_PROFILE

# Slider ranges offered by the calculator (min, max, step).
START_AMOUNT_RANGE = (0, 1_000_000, 1_000)
MONTHLY_DEPOSIT_RANGE = (0, 10_000, 100)
HORIZON_RANGE = (1, 50, 1)

_GROUPED = re.compile(r"^\d{1,3}([.,])\d{3}(\1\d{3})*$")


def snap_to_step(value: float, minimum: float, maximum: float, step: float) -> float:
    """Round a slider position to its step grid within [minimum, maximum]."""

    if maximum <= minimum:
        return minimum
    snapped = minimum + round((float(value) - minimum) / step) * step
    return min(max(snapped, minimum), maximum)


def clamp_deposit_years(deposit_years: int, investment_horizon: int) -> int:
    """Keep the contribution period within the investment horizon."""

    if deposit_years > investment_horizon:
        return investment_horizon
    return deposit_years


def deposit_years_bound(deposit_years: int, investment_horizon: int) -> int:
    """Upper bound shown by the deposit-duration widget."""

    return min(deposit_years, investment_horizon)


@dataclass(frozen=True)
class ProjectionInputs:
    start_amount: float = 25_000.0
    monthly_deposit: float = 1_000.0
    deposit_years: int = 10
    investment_horizon: int = 25
    profile: str = DEFAULT_PROFILE

    def normalized(self) -> "ProjectionInputs":
        horizon = coerce_years(self.investment_horizon)
        return replace(
            self,
            start_amount=coerce_amount(self.start_amount),
            monthly_deposit=coerce_amount(self.monthly_deposit),
            deposit_years=clamp_deposit_years(coerce_years(self.deposit_years), horizon),
            investment_horizon=horizon,
        )

    def with_horizon(self, investment_horizon: int) -> "ProjectionInputs":
        return replace(self, investment_horizon=investment_horizon).normalized()

    def with_deposit_years(self, deposit_years: int) -> "ProjectionInputs":
        return replace(self, deposit_years=deposit_years).normalized()


def parse_amount(text: str) -> float:
    """Parse a monetary amount such as ``25000``, ``25,000``, ``€ 25.000,50``.

    A single separator followed by groups of exactly three digits is read as
    a thousands separator; when both ``.`` and ``,`` appear the last one is
    the decimal mark.
    """

    cleaned = text.replace("€", "").replace("\u00a0", "").replace(" ", "").strip()
    if not cleaned:
        raise ValueError("Amount is empty")
    if "," in cleaned and "." in cleaned:
        decimal = "," if cleaned.rfind(",") > cleaned.rfind(".") else "."
        thousands = "." if decimal == "," else ","
        cleaned = cleaned.replace(thousands, "").replace(decimal, ".")
    elif _GROUPED.match(cleaned):
        cleaned = cleaned.replace(",", "").replace(".", "")
    else:
        cleaned = cleaned.replace(",", ".")
    try:
        return float(cleaned)
    except ValueError:
        raise ValueError(f"Cannot parse amount '{text}'") from None


def parse_years(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise ValueError(f"Year count '{text}' must be a whole number") from None


__all__ = [
    "HORIZON_RANGE",
    "MONTHLY_DEPOSIT_RANGE",
    "ProjectionInputs",
    "START_AMOUNT_RANGE",
    "clamp_deposit_years",
    "coerce_amount",
    "coerce_years",
    "deposit_years_bound",
    "parse_amount",
    "parse_years",
    "snap_to_step",
]
