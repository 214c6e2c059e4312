"""
Performance metrics for a valuation run: change, return, drawdown, volatility.

Input is the (date, value) curve from Portfolio.get_performance_curve. Calendar days
valued at exactly 0 (weekends, holidays, no quotes) are dropped before computing.
Annualization assumes 252 trading days.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

import numpy as np

TRADING_DAYS_PER_YEAR = 252


@dataclass
class Metrics:
    """Summary of a portfolio's value over a date range."""

    start_value: float
    end_value: float
    total_change: float
    total_return_pct: float
    max_drawdown: float
    max_drawdown_pct: float
    volatility_pct: float
    valued_days: int


def compute_metrics(
    curve: Sequence[tuple[date, float]],
    *,
    trading_days_per_year: int = TRADING_DAYS_PER_YEAR,
) -> Metrics:
    """
    Compute performance metrics from a valuation curve.

    Parameters
    ----------
    curve : sequence of (date, value)
        Time-ordered (day, portfolio value) pairs.
    trading_days_per_year : int
        Used for annualizing volatility (default 252).

    Returns
    -------
    Metrics
        start/end value, total change and return, max drawdown (absolute and %),
        annualized volatility of daily returns (%), and the number of valued days.
    """
    values = np.array([v for _, v in curve if v != 0], dtype=float)
    if len(values) == 0:
        return Metrics(
            start_value=0.0,
            end_value=0.0,
            total_change=0.0,
            total_return_pct=0.0,
            max_drawdown=0.0,
            max_drawdown_pct=0.0,
            volatility_pct=0.0,
            valued_days=0,
        )

    start_value = float(values[0])
    end_value = float(values[-1])
    total_change = end_value - start_value
    total_return_pct = (total_change / start_value * 100.0) if start_value else 0.0

    # Volatility of day-over-day returns between valued days
    returns = np.diff(values) / np.maximum(values[:-1], 1e-14)
    if len(returns) < 2:
        volatility_pct = 0.0
    else:
        volatility_pct = float(np.std(returns) * np.sqrt(trading_days_per_year) * 100.0)

    # Max drawdown
    peak = np.maximum.accumulate(values)
    drawdowns = peak - values
    max_drawdown = float(np.max(drawdowns))
    worst = int(np.argmax(drawdowns))
    max_dd_pct = (max_drawdown / peak[worst] * 100.0) if peak[worst] > 0 else 0.0

    return Metrics(
        start_value=start_value,
        end_value=end_value,
        total_change=total_change,
        total_return_pct=total_return_pct,
        max_drawdown=max_drawdown,
        max_drawdown_pct=float(max_dd_pct),
        volatility_pct=volatility_pct,
        valued_days=len(values),
    )
