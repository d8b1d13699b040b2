"""Pixel geometry for anchoring an inspection overlay on the stacked bar chart.

All coordinates are in pixels with the origin at the top-left corner of the
chart container, matching how overlays are positioned on screen.
"""
from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .finance import YearRecord


@dataclass(frozen=True)
class Margins:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0


# Layout of the calculator's bar chart.
CHART_MARGINS = Margins(top=20, right=30, bottom=40, left=20)
Y_AXIS_WIDTH = 70


@dataclass(frozen=True)
class ChartAnchor:
    x: float
    y: float


def plot_size(
    container_width: float,
    container_height: float,
    margins: Margins = CHART_MARGINS,
    axis_width: float = Y_AXIS_WIDTH,
) -> Tuple[float, float]:
    """Drawable (width, height) left after margins and the reserved axis."""

    width = container_width - margins.left - margins.right - axis_width
    height = container_height - margins.top - margins.bottom
    return width, height


def max_stacked_total(series: Sequence[YearRecord]) -> float:
    return max([record.stacked_total for record in series] + [1.0])


def resolve_anchor(
    series: Sequence[YearRecord],
    hovered_index: Optional[int],
    plot_width: float,
    plot_height: float,
    margins: Margins = Margins(),
    axis_width: float = 0.0,
) -> Optional[ChartAnchor]:
    """Anchor point above the hovered bar, or None when nothing should be drawn."""

    if hovered_index is None:
        return None
    try:
        hovered_index = operator.index(hovered_index)
    except TypeError:
        return None
    if not 0 <= hovered_index < len(series):
        return None
    # NaN sizes fail both comparisons.
    if not (plot_width > 0 and plot_height > 0):
        return None

    step = plot_width / len(series)
    x = margins.left + axis_width + step * hovered_index + step / 2
    total = series[hovered_index].stacked_total
    y = margins.top + (1 - total / max_stacked_total(series)) * plot_height
    return ChartAnchor(x=x, y=y)


def slot_at(
    x: float,
    count: int,
    plot_width: float,
    margins: Margins = Margins(),
    axis_width: float = 0.0,
) -> Optional[int]:
    """Index of the bar slot under pointer position ``x``, if any."""

    if count <= 0 or not plot_width > 0:
        return None
    offset = x - margins.left - axis_width
    if not 0 <= offset < plot_width:
        return None
    return min(int(offset / (plot_width / count)), count - 1)


__all__ = [
    "CHART_MARGINS",
    "ChartAnchor",
    "Margins",
    "Y_AXIS_WIDTH",
    "max_stacked_total",
    "plot_size",
    "resolve_anchor",
    "slot_at",
]
