"""
Load daily closing prices from CSV or DataFrame into PriceSeries.

Expects a date column and a close column (OHLCV files work as-is). Also provides a
file-backed QuoteSource and DataFrame views of valuation runs.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from pathlib import Path

import pandas as pd

from folio_core.errors import DataSourceError, InvalidInputError
from folio_core.price_series import PriceSeries
from folio_core.quote_source import QuoteSource


# Standard column names; lowercase for normalization
CLOSE = "close"


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Ensure columns are lowercase; map common aliases to open/high/low/close/volume."""
    out = df.copy()
    out.columns = [str(c).lower().strip() for c in out.columns]
    renames = {
        "o": "open",
        "h": "high",
        "l": "low",
        "c": "close",
        "v": "volume",
        "vol": "volume",
        "timestamp": "date",
        "adj close": "adj_close",
    }
    out = out.rename(columns={k: v for k, v in renames.items() if k in out.columns})
    return out


def load_csv(
    path: str | Path,
    *,
    date_column: str | None = None,
    datetime_format: str | None = None,
    symbol: str | None = None,
) -> pd.DataFrame:
    """
    Load daily price data from a CSV file.

    Parameters
    ----------
    path : str or Path
        Path to the CSV file.
    date_column : str, optional
        Column to use as the date index. If None, 'date' (or 'timestamp') or the
        first column is used.
    datetime_format : str, optional
        Format for parsing dates (e.g. '%Y-%m-%d').
    symbol : str, optional
        Symbol to attach (stored in df.attrs['symbol'] if provided).

    Returns
    -------
    pd.DataFrame
        DataFrame with a sorted DatetimeIndex named 'date' and the price columns
        found in the file (at least 'close').
    """
    df = _normalize_columns(pd.read_csv(path))
    date_col = (date_column or "").lower().strip() or ("date" if "date" in df.columns else df.columns[0])
    if date_col not in df.columns:
        date_col = df.columns[0]
    df["date"] = pd.to_datetime(df[date_col], format=datetime_format)
    if date_col != "date":
        df = df.drop(columns=[date_col])
    df = df.set_index("date").sort_index()
    if CLOSE not in df.columns:
        raise ValueError(f"{path}: no '{CLOSE}' column in {list(df.columns)}")
    if symbol is not None:
        df.attrs["symbol"] = symbol
    return df


def series_from_dataframe(df: pd.DataFrame, symbol: str | None = None) -> PriceSeries:
    """
    Build a PriceSeries from a DataFrame with a datetime index and a close column.
    Rows with a missing close are dropped. Symbol defaults to df.attrs['symbol'].
    """
    sym = symbol or df.attrs.get("symbol", "UNKNOWN")
    out = _normalize_columns(df)
    if not isinstance(out.index, pd.DatetimeIndex):
        out.index = pd.to_datetime(out.index)
    closes = out[CLOSE].dropna()
    series = PriceSeries(symbol=sym)
    for ts, close in closes.items():
        series.add_price(ts.date(), float(close))
    return series


class CsvQuoteSource(QuoteSource):
    """
    QuoteSource over a directory of '<SYMBOL>.csv' files, one per ticker.
    Useful offline and in tests; a remote API client implements the same interface.
    """

    def __init__(self, directory: str | Path, *, suffix: str = ".csv") -> None:
        self.directory = Path(directory)
        self.suffix = suffix

    def path_for(self, symbol: str) -> Path:
        return self.directory / f"{symbol.upper()}{self.suffix}"

    def fetch_series(self, symbol: str) -> PriceSeries:
        path = self.path_for(symbol)
        if not path.exists():
            raise DataSourceError(f"No quote file for {symbol} at {path}")
        try:
            return series_from_dataframe(load_csv(path, symbol=symbol), symbol)
        except (OSError, ValueError, InvalidInputError, pd.errors.ParserError) as exc:
            raise DataSourceError(f"Could not read quotes for {symbol} from {path}: {exc}") from exc


def performance_frame(curve: Sequence[tuple[date, float]]) -> pd.DataFrame:
    """Valuation run (e.g. Portfolio.get_performance_curve) as a 'value' column by date."""
    index = pd.DatetimeIndex(pd.to_datetime([d for d, _ in curve]), name="date")
    return pd.DataFrame({"value": [float(v) for _, v in curve]}, index=index)
