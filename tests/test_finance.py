from __future__ import annotations

import math

import pytest

from investcalc.finance import final_balance, project, project_np, project_py


def month_loop(start, deposit, deposit_years, horizon, annual_return):
    """Straight month-by-month recomputation: compound first, then deposit."""
    balance = start
    monthly = annual_return / 12
    for month in range(1, horizon * 12 + 1):
        balance = balance * (1 + monthly)
        if month <= deposit_years * 12:
            balance += deposit
    return balance


def closed_form(start, deposit, deposit_years, horizon, annual_return):
    g = 1 + annual_return / 12
    n_dep = deposit_years * 12
    n_rest = (horizon - deposit_years) * 12
    at_cutoff = start * g**n_dep + deposit * (g**n_dep - 1) / (g - 1)
    return at_cutoff * g**n_rest


CASES = [
    (25000, 1000, 10, 25, 0.057),
    (0, 100, 5, 5, 0.044),
    (100000, 0, 0, 30, 0.084),
    (5000, 250, 0, 3, 0.0),
    (1000, 50, 2, 7, -0.03),
    (0, 0, 0, 4, 0.069),
]


def test_golden_first_year():
    series = project(25000, 1000, 10, 25, 0.057)
    first = series[0]
    assert first.year == 1
    assert first.cumulative_deposits == 12000
    assert first.year_start_balance == 25000
    assert first.balance == pytest.approx(month_loop(25000, 1000, 1, 1, 0.057), rel=1e-6)
    assert first.balance == pytest.approx(closed_form(25000, 1000, 1, 1, 0.057), rel=1e-9)


def test_golden_final_balance_matches_closed_form():
    series = project(25000, 1000, 10, 25, 0.057)
    assert series[-1].balance == pytest.approx(closed_form(25000, 1000, 10, 25, 0.057), rel=1e-9)
    assert series[-1].balance == month_loop(25000, 1000, 10, 25, 0.057)


@pytest.mark.parametrize("start,deposit,deposit_years,horizon,rate", CASES)
def test_record_count_and_contiguous_years(start, deposit, deposit_years, horizon, rate):
    series = project(start, deposit, deposit_years, horizon, rate)
    assert [r.year for r in series] == list(range(1, horizon + 1))


@pytest.mark.parametrize("start,deposit,deposit_years,horizon,rate", CASES)
def test_year_start_is_previous_year_end(start, deposit, deposit_years, horizon, rate):
    series = project(start, deposit, deposit_years, horizon, rate)
    assert series[0].year_start_balance == start
    for prev, cur in zip(series, series[1:]):
        assert cur.year_start_balance == prev.balance


@pytest.mark.parametrize("start,deposit,deposit_years,horizon,rate", [c for c in CASES if c[4] >= 0])
def test_balance_non_decreasing(start, deposit, deposit_years, horizon, rate):
    balances = [r.balance for r in project(start, deposit, deposit_years, horizon, rate)]
    assert all(b2 >= b1 for b1, b2 in zip(balances, balances[1:]))


def test_deposit_cutoff():
    series = project(25000, 1000, 10, 25, 0.057)
    at_cutoff = series[9].cumulative_deposits
    assert at_cutoff == 10 * 12 * 1000
    for record in series[10:]:
        assert record.cumulative_deposits == at_cutoff
    growth = [r.cumulative_deposits for r in series[:10]]
    assert growth == [12000 * y for y in range(1, 11)]


def test_deposits_stop_but_balance_keeps_compounding():
    series = project(0, 1000, 1, 3, 0.06)
    assert series[1].cumulative_deposits == series[0].cumulative_deposits
    assert series[1].balance == pytest.approx(series[0].balance * (1.005 ** 12), rel=1e-12)


def test_last_deposit_earns_nothing_in_its_month():
    # one year of deposits at 12% nominal: the December deposit is added after compounding
    series = project(0, 100, 1, 1, 0.12)
    expected = sum(100 * 1.01 ** (12 - m) for m in range(1, 13))
    assert series[0].balance == pytest.approx(expected, rel=1e-12)


def test_accrued_return_is_derived():
    for record in project(25000, 1000, 10, 25, 0.057):
        assert record.accrued_return == record.balance - (25000 + record.cumulative_deposits)
        assert record.initial_balance == 25000


def test_negative_rate_accrued_return_and_stacked_total():
    series = project(1000, 0, 0, 2, -0.12)
    last = series[-1]
    assert last.accrued_return < 0
    assert last.stacked_total == 1000
    assert last.as_dict()["accrued_return"] == last.accrued_return


@pytest.mark.parametrize("horizon", [0, -1, -10])
def test_zero_horizon_is_empty(horizon):
    assert project(25000, 1000, 10, horizon, 0.057) == []
    assert project_np(25000, 1000, 10, horizon, 0.057) == []
    assert final_balance(25000, 1000, 10, horizon, 0.057) == 25000


def test_inputs_are_coerced():
    assert len(project(1000, 10, 1, 2.9, 0.05)) == 2
    series = project(-500, -10, 1.7, 2, 0.05)
    assert series[0].initial_balance == 0
    assert all(r.cumulative_deposits == 0 for r in series)
    assert all(r.balance == 0 for r in series)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_amounts_become_zero(bad):
    assert project(bad, 100, 1, 2, 0.05) == project(0, 100, 1, 2, 0.05)
    assert project(100, bad, 1, 2, 0.05) == project(100, 0, 1, 2, 0.05)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_rate_rejected(bad):
    with pytest.raises(ValueError):
        project(100, 100, 1, 2, bad)


@pytest.mark.parametrize("use_numpy", [False, True])
@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_years_do_not_crash(bad, use_numpy):
    stopped = project(100, 100, bad, 2, 0.05, use_numpy=use_numpy)
    assert stopped == project(100, 100, 0, 2, 0.05, use_numpy=use_numpy)
    assert all(r.cumulative_deposits == 0 for r in stopped)

    assert project(100, 100, 1, bad, 0.05, use_numpy=use_numpy) == []
    assert final_balance(100, 100, 1, bad, 0.05, use_numpy=use_numpy) == 100


@pytest.mark.parametrize("start,deposit,deposit_years,horizon,rate", CASES)
def test_numpy_engine_agrees_with_month_loop(start, deposit, deposit_years, horizon, rate):
    reference = project_py(start, deposit, deposit_years, horizon, rate)
    vectorised = project(start, deposit, deposit_years, horizon, rate, use_numpy=True)
    assert len(vectorised) == len(reference)
    for ref, vec in zip(reference, vectorised):
        assert vec.year == ref.year
        assert vec.cumulative_deposits == ref.cumulative_deposits
        assert vec.balance == pytest.approx(ref.balance, rel=1e-9, abs=1e-9)
        assert vec.year_start_balance == pytest.approx(ref.year_start_balance, rel=1e-9, abs=1e-9)


def test_project_is_deterministic():
    assert project(25000, 1000, 10, 25, 0.057) == project(25000, 1000, 10, 25, 0.057)
