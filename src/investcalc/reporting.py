"""Reporting helpers: currency formatting, yearly tables and CSV export."""
from __future__ import annotations

import csv
import numbers
from typing import Iterable, List, Sequence

from .finance import YearRecord
from .parsing import ProjectionInputs
from .scenarios import ScenarioSummary

YEAR_TABLE_HEADER = ["Year", "Start amount", "Contributions", "Return", "Balance"]
YEAR_TABLE_FIELDS = ("year", "initial_balance", "cumulative_deposits", "accrued_return", "balance")


def format_currency(amount: float) -> str:
    """Euro amount in Dutch notation without decimals, e.g. ``€ 25.000``."""

    rounded = round(amount)
    grouped = f"{abs(rounded):,.0f}".replace(",", ".")
    sign = "-" if rounded < 0 else ""
    return f"€ {sign}{grouped}"


def format_currency_short(amount: float) -> str:
    """Compact axis label: ``€1.2M``, ``€25K`` or the full amount below 1,000."""

    if amount >= 1_000_000:
        return f"€{amount / 1_000_000:.1f}M"
    if amount >= 1_000:
        return f"€{amount / 1_000:.0f}K"
    return format_currency(amount)


def year_rows(series: Sequence[YearRecord]) -> List[List[float]]:
    rows = []
    for record in series:
        data = record.as_dict()
        rows.append([data[key] for key in YEAR_TABLE_FIELDS])
    return rows


def render_summary(summary: ScenarioSummary, inputs: ProjectionInputs) -> str:
    lines = [
        f"Profile: {summary.profile}",
        f"Expected final balance: {format_currency(summary.expected)}",
    ]
    if summary.series:
        last = summary.series[-1]
        own = last.initial_balance + last.cumulative_deposits
        lines.append(f"  own contributions {format_currency(own)}")
        lines.append(f"  return            {format_currency(last.accrued_return)}")
    lines.append(
        "Other outcomes are possible; the result will likely lie between "
        f"{format_currency(summary.worst)} and {format_currency(summary.best)}."
    )
    lines.append(
        f"Amounts are net of costs. Contributions run {inputs.deposit_years} "
        "year(s) and stop after that."
    )
    return "\n".join(lines)


def export_csv(path: str, header: Sequence[str], rows: Iterable[Sequence]):
    """Write header/row data to a CSV file."""

    def _format_cell(value: object) -> str:
        """Format cells to avoid decimal places in numeric output."""

        if isinstance(value, numbers.Real):
            return format(value, ".0f")
        return str(value)

    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([_format_cell(h) for h in header])
        for row in rows:
            writer.writerow([_format_cell(cell) for cell in row])


__all__ = [
    "YEAR_TABLE_FIELDS",
    "YEAR_TABLE_HEADER",
    "export_csv",
    "format_currency",
    "format_currency_short",
    "render_summary",
    "year_rows",
]
