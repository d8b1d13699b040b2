"""Tkinter GUI application for investcalc."""
from __future__ import annotations

import logging
import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from typing import Dict, Optional, Tuple

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from ..charting import draw_stacked_bars
from ..geometry import ChartAnchor, Margins, plot_size, resolve_anchor, slot_at
from ..parsing import (
    HORIZON_RANGE,
    MONTHLY_DEPOSIT_RANGE,
    START_AMOUNT_RANGE,
    ProjectionInputs,
    clamp_deposit_years,
    deposit_years_bound,
    snap_to_step,
)
from ..profiles import UnknownProfile, profile_names
from ..reporting import (
    YEAR_TABLE_HEADER,
    export_csv,
    format_currency,
    render_summary,
    year_rows,
)
from ..scenarios import ScenarioSummary, evaluate_scenarios

logger = logging.getLogger(__name__)

OVERLAY_FACE = (45 / 255, 45 / 255, 45 / 255, 0.95)


class App(tk.Tk):
    def __init__(self) -> None:
        super().__init__()
        self.title("Investment Calculator")
        self.geometry("1200x760")
        defaults = ProjectionInputs()
        self._start_var = tk.DoubleVar(value=defaults.start_amount)
        self._monthly_var = tk.DoubleVar(value=defaults.monthly_deposit)
        self._horizon_var = tk.IntVar(value=defaults.investment_horizon)
        self._deposit_years_var = tk.IntVar(value=defaults.deposit_years)
        self._profile_var = tk.StringVar(value=defaults.profile)
        self._value_labels: Dict[str, ttk.Label] = {}
        self._summary: Optional[ScenarioSummary] = None
        self._hovered_index: Optional[int] = None
        self._overlay = None

        self._build_menu()
        self._build_inputs()
        self._build_chart()
        self._build_text()
        self._recompute()

    # ---------- Menu ----------
    def _build_menu(self) -> None:
        menubar = tk.Menu(self)
        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Export table to CSV…", command=self._export_table_csv)
        file_menu.add_separator()
        file_menu.add_command(label="Quit", command=self.destroy)
        menubar.add_cascade(label="File", menu=file_menu)
        self.config(menu=menubar)

    # ---------- Inputs ----------
    def _add_slider(self, parent, row: int, key: str, text: str, var, bounds) -> ttk.Scale:
        lo, hi, _step = bounds
        ttk.Label(parent, text=text).grid(row=row * 2, column=0, sticky="w", pady=(8, 0))
        value_label = ttk.Label(parent, font=("TkDefaultFont", 11, "bold"))
        value_label.grid(row=row * 2, column=1, sticky="e", pady=(8, 0))
        self._value_labels[key] = value_label
        scale = ttk.Scale(
            parent,
            from_=lo,
            to=hi,
            variable=var,
            orient=tk.HORIZONTAL,
            command=lambda _value: self._on_input_changed(),
        )
        scale.grid(row=row * 2 + 1, column=0, columnspan=2, sticky="we")
        return scale

    def _build_inputs(self) -> None:
        frm = ttk.LabelFrame(self, text="Your investment")
        frm.pack(side=tk.LEFT, fill=tk.Y, padx=8, pady=6)
        frm.grid_columnconfigure(0, weight=1, minsize=300)

        self._add_slider(frm, 0, "start", "Start amount", self._start_var, START_AMOUNT_RANGE)
        self._add_slider(
            frm, 1, "monthly", "Monthly deposit", self._monthly_var, MONTHLY_DEPOSIT_RANGE
        )
        self._add_slider(frm, 2, "horizon", "Investment horizon", self._horizon_var, HORIZON_RANGE)
        horizon = self._horizon_var.get()
        self.scl_deposit_years = self._add_slider(
            frm, 3, "deposit_years", "Deposit duration", self._deposit_years_var, (0, horizon, 1)
        )

        ttk.Label(frm, text="Risk profile").grid(row=8, column=0, sticky="w", pady=(12, 0))
        cmb = ttk.Combobox(
            frm,
            textvariable=self._profile_var,
            values=profile_names(),
            state="readonly",
        )
        cmb.grid(row=9, column=0, columnspan=2, sticky="we")
        cmb.bind("<<ComboboxSelected>>", lambda _event: self._on_input_changed())

    # ---------- Chart ----------
    def _build_chart(self) -> None:
        frm = ttk.Frame(self)
        frm.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=8, pady=6)
        self.lbl_result = ttk.Label(frm, font=("TkDefaultFont", 20, "bold"), anchor="center")
        self.lbl_result.pack(side=tk.TOP, fill=tk.X)

        self.fig = Figure(figsize=(8.0, 4.5), dpi=100)
        self.ax = self.fig.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(self.fig, master=frm)
        self.canvas.get_tk_widget().pack(side=tk.TOP, fill=tk.BOTH, expand=True)
        self.canvas.mpl_connect("motion_notify_event", self._on_motion)
        self.canvas.mpl_connect("figure_leave_event", lambda _event: self._set_hover(None))
        self.canvas.mpl_connect("resize_event", lambda _event: self._refresh_overlay())

    def _build_text(self) -> None:
        self.lbl_summary = ttk.Label(self, justify=tk.LEFT, wraplength=760, foreground="#6B7280")
        self.lbl_summary.pack(side=tk.TOP, fill=tk.X, padx=8, pady=(0, 8))

    # ---------- state ----------
    def _read_inputs(self) -> ProjectionInputs:
        start = snap_to_step(self._start_var.get(), *START_AMOUNT_RANGE)
        monthly = snap_to_step(self._monthly_var.get(), *MONTHLY_DEPOSIT_RANGE)
        horizon = int(snap_to_step(self._horizon_var.get(), *HORIZON_RANGE))
        deposit_years = clamp_deposit_years(int(round(self._deposit_years_var.get())), horizon)
        self._start_var.set(start)
        self._monthly_var.set(monthly)
        self._horizon_var.set(horizon)
        self._deposit_years_var.set(deposit_years)
        self.scl_deposit_years.configure(to=horizon)
        return ProjectionInputs(
            start_amount=start,
            monthly_deposit=monthly,
            deposit_years=deposit_years_bound(deposit_years, horizon),
            investment_horizon=horizon,
            profile=self._profile_var.get(),
        )

    def _on_input_changed(self) -> None:
        self._recompute()

    def _recompute(self) -> None:
        inputs = self._read_inputs()
        try:
            self._summary = evaluate_scenarios(
                inputs.start_amount,
                inputs.monthly_deposit,
                inputs.deposit_years,
                inputs.investment_horizon,
                inputs.profile,
            )
        except (UnknownProfile, ValueError) as exc:
            logger.exception("Projection failed")
            messagebox.showerror("Error", str(exc))
            return

        self._value_labels["start"].configure(text=format_currency(inputs.start_amount))
        self._value_labels["monthly"].configure(text=format_currency(inputs.monthly_deposit))
        self._value_labels["horizon"].configure(text=f"{inputs.investment_horizon} years")
        self._value_labels["deposit_years"].configure(text=f"{inputs.deposit_years} years")
        self.lbl_result.configure(
            text=f"Expected final result*  {format_currency(self._summary.expected)}"
        )
        self.lbl_summary.configure(text="*" + render_summary(self._summary, inputs))

        draw_stacked_bars(self.ax, self._summary.series)
        self.fig.tight_layout()
        if self._hovered_index is not None and self._hovered_index >= len(self._summary.series):
            self._hovered_index = None
        self._refresh_overlay()

    # ---------- hover overlay ----------
    def _plot_rect(self) -> Tuple[Margins, float, float, float]:
        """Axes placement measured from the canvas' top-left corner."""

        canvas_height = self.fig.bbox.height
        box = self.ax.bbox
        margins = Margins(
            top=canvas_height - box.y1,
            right=self.fig.bbox.width - box.x1,
            bottom=box.y0,
            left=box.x0,
        )
        width, height = plot_size(self.fig.bbox.width, canvas_height, margins, axis_width=0)
        return margins, width, height, canvas_height

    def _on_motion(self, event) -> None:
        if self._summary is None or event.inaxes is not self.ax:
            self._set_hover(None)
            return
        margins, width, _height, _canvas_height = self._plot_rect()
        self._set_hover(slot_at(event.x, len(self._summary.series), width, margins))

    def _set_hover(self, index: Optional[int]) -> None:
        if index == self._hovered_index:
            return
        self._hovered_index = index
        self._refresh_overlay()

    def _refresh_overlay(self) -> None:
        if self._overlay is not None:
            self._overlay.remove()
            self._overlay = None
        if self._summary is not None:
            margins, width, height, canvas_height = self._plot_rect()
            anchor = resolve_anchor(
                self._summary.series, self._hovered_index, width, height, margins
            )
            if anchor is not None:
                self._overlay = self._draw_overlay(anchor, canvas_height)
        self.canvas.draw_idle()

    def _draw_overlay(self, anchor: ChartAnchor, canvas_height: float):
        record = self._summary.series[self._hovered_index]
        text = (
            f"{record.year}\n"
            f"Own contributions: {format_currency(record.initial_balance + record.cumulative_deposits)}\n"
            f"Return: {format_currency(record.accrued_return)}"
        )
        return self.fig.text(
            anchor.x / self.fig.bbox.width,
            (canvas_height - anchor.y) / canvas_height,
            text,
            ha="center",
            va="bottom",
            color="white",
            fontsize=9,
            zorder=5,
            bbox={"boxstyle": "round,pad=0.5", "facecolor": OVERLAY_FACE, "edgecolor": "none"},
        )

    # ---------- export ----------
    def _export_table_csv(self) -> None:
        if self._summary is None or not self._summary.series:
            messagebox.showinfo("Export", "Nothing to export yet.")
            return
        path = filedialog.asksaveasfilename(
            defaultextension=".csv", filetypes=[("CSV files", "*.csv")]
        )
        if not path:
            return
        try:
            export_csv(path, YEAR_TABLE_HEADER, year_rows(self._summary.series))
        except OSError as exc:
            messagebox.showerror("Error", str(exc))


def run() -> None:
    App().mainloop()


__all__ = ["run", "App"]
