"""Stacked bar rendering of a yearly projection on Matplotlib axes."""
from __future__ import annotations

from typing import Sequence

from matplotlib.ticker import FuncFormatter

from .finance import YearRecord
from .geometry import max_stacked_total
from .reporting import format_currency_short

STACK_STYLES = (
    ("initial_balance", "Start amount", "#ffffff"),
    ("cumulative_deposits", "Contributions", "#0D2A28"),
    ("return", "Return", "#D2BB5D"),
)
BAR_EDGE = "#D1D5DB"


def draw_stacked_bars(ax, series: Sequence[YearRecord], title: str = "") -> None:
    """Draw principal, contributions and non-negative return as stacked bars.

    One bar per year, each centred in an equal-width slot, with the y-axis
    running from 0 to the largest stacked total so that bar tops line up with
    :func:`investcalc.geometry.resolve_anchor`.
    """

    ax.clear()
    if title:
        ax.set_title(title)
    ax.set_xlabel("Years")
    if not series:
        return

    positions = list(range(len(series)))
    base = [0.0] * len(series)
    for key, label, color in STACK_STYLES:
        if key == "return":
            heights = [max(0.0, r.accrued_return) for r in series]
        else:
            heights = [getattr(r, key) for r in series]
        ax.bar(
            positions,
            heights,
            bottom=base,
            width=0.8,
            color=color,
            edgecolor=BAR_EDGE if key == "initial_balance" else color,
            linewidth=1,
            label=label,
        )
        base = [b + h for b, h in zip(base, heights)]

    ax.set_xlim(-0.5, len(series) - 0.5)
    ax.set_ylim(0, max_stacked_total(series))
    ax.set_xticks(positions)
    ax.set_xticklabels(
        [str(r.year) for r in series], fontsize=10 if len(series) >= 26 else 12
    )
    ax.yaxis.set_major_formatter(FuncFormatter(lambda value, _pos: format_currency_short(value)))
    for side in ("top", "right", "left", "bottom"):
        ax.spines[side].set_visible(False)
    ax.tick_params(length=0)
    ax.legend(loc="upper left", frameon=False, ncol=3)


__all__ = ["BAR_EDGE", "STACK_STYLES", "draw_stacked_bars"]
