"""
Performance report: print a portfolio's value summary over a date range.
"""

from __future__ import annotations

from folio_core.portfolio import Portfolio
from reporting.metrics import TRADING_DAYS_PER_YEAR, Metrics, compute_metrics


def print_report(
    portfolio: Portfolio,
    start,
    end,
    *,
    trading_days_per_year: int = TRADING_DAYS_PER_YEAR,
) -> Metrics:
    """
    Compute metrics for portfolio between start and end and print a summary.

    Parameters
    ----------
    portfolio : Portfolio
        Portfolio with price series bound for the symbols it holds.
    start, end : date or ISO string
        Inclusive valuation range.
    trading_days_per_year : int
        Used for annualized volatility (default 252).

    Returns
    -------
    Metrics
        The computed metrics (e.g. for programmatic use).
    """
    curve = portfolio.get_performance_curve(start, end)
    metrics = compute_metrics(curve, trading_days_per_year=trading_days_per_year)
    print(f"--- Performance of {portfolio.name} ({curve[0][0]} to {curve[-1][0]}) ---")
    print(f"Start value:     {metrics.start_value:,.2f}")
    print(f"End value:       {metrics.end_value:,.2f}")
    print(f"Change:          {metrics.total_change:,.2f}")
    print(f"Total return:    {metrics.total_return_pct:.2f}%")
    print(f"Volatility:      {metrics.volatility_pct:.2f}%")
    print(f"Max drawdown:    {metrics.max_drawdown:,.2f} ({metrics.max_drawdown_pct:.2f}%)")
    print(f"Valued days:     {metrics.valued_days} of {len(curve)}")
    unbound = portfolio.unbound_symbols()
    if unbound:
        print(f"No prices bound: {', '.join(unbound)}")
    print("-" * 40)
    return metrics
