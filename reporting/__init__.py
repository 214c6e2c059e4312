"""
Reporting on top of folio-core.

Loads closing prices from CSV into PriceSeries; computes and prints performance
metrics for a portfolio's valuation over a date range.
"""

from reporting.data_loader import (
    CsvQuoteSource,
    load_csv,
    performance_frame,
    series_from_dataframe,
)
from reporting.metrics import Metrics, compute_metrics
from reporting.performance_report import print_report

__all__ = [
    "CsvQuoteSource",
    "load_csv",
    "series_from_dataframe",
    "performance_frame",
    "Metrics",
    "compute_metrics",
    "print_report",
]
