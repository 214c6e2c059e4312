"""
Tests for reporting: compute_metrics, print_report.
"""

from datetime import date

import pytest

from folio_core import Portfolio, PriceSeries
from reporting import compute_metrics, print_report


def _portfolio() -> Portfolio:
    series = PriceSeries(symbol="SPY")
    for day, price in {"2024-01-02": 100.0, "2024-01-03": 110.0, "2024-01-05": 99.0}.items():
        series.add_price(day, price)
    p = Portfolio(name="core")
    p.add_stock("SPY", 10, series)
    return p


# --- compute_metrics ---


def test_compute_metrics_basic():
    curve = [
        (date(2024, 1, 1), 1000.0),
        (date(2024, 1, 2), 1100.0),
        (date(2024, 1, 3), 990.0),
        (date(2024, 1, 4), 1200.0),
    ]
    m = compute_metrics(curve)
    assert m.start_value == 1000.0
    assert m.end_value == 1200.0
    assert m.total_change == 200.0
    assert m.total_return_pct == pytest.approx(20.0)
    assert m.max_drawdown == pytest.approx(110.0)
    assert m.max_drawdown_pct == pytest.approx(10.0)
    assert m.volatility_pct > 0
    assert m.valued_days == 4


def test_compute_metrics_skips_unvalued_days():
    curve = [
        (date(2024, 1, 5), 1000.0),
        (date(2024, 1, 6), 0.0),
        (date(2024, 1, 7), 0.0),
        (date(2024, 1, 8), 1050.0),
    ]
    m = compute_metrics(curve)
    assert m.valued_days == 2
    assert m.max_drawdown == 0.0
    assert m.total_return_pct == pytest.approx(5.0)


def test_compute_metrics_empty_curve():
    m = compute_metrics([])
    assert m.end_value == 0.0
    assert m.total_change == 0.0
    assert m.volatility_pct == 0.0
    assert m.valued_days == 0


# --- print_report ---


def test_print_report(capsys):
    m = print_report(_portfolio(), "2024-01-02", "2024-01-05")
    out = capsys.readouterr().out
    assert "Performance of core" in out
    assert "Valued days:     3 of 4" in out
    assert m.start_value == 1000.0
    assert m.end_value == 990.0
    assert m.max_drawdown == pytest.approx(110.0)


def test_print_report_lists_unbound_symbols(capsys):
    p = _portfolio()
    p.positions["TSLA"] = 1.0
    print_report(p, "2024-01-02", "2024-01-02")
    assert "No prices bound: TSLA" in capsys.readouterr().out
