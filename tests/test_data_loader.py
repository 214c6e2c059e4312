"""
Tests for reporting data_loader: load_csv, series_from_dataframe, CsvQuoteSource.
"""

from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from folio_core import DataSourceError
from reporting.data_loader import (
    CsvQuoteSource,
    load_csv,
    performance_frame,
    series_from_dataframe,
)


def _write_csv(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


def test_load_csv_normalizes_columns(tmp_path):
    csv = _write_csv(
        tmp_path / "spy.csv",
        "Date,Open,High,Low,Close,Volume\n"
        "2024-01-03,101,103,100,102,1000\n"
        "2024-01-02,100,102,99,101,1000\n",
    )
    df = load_csv(csv, symbol="SPY")
    assert "close" in df.columns
    assert isinstance(df.index, pd.DatetimeIndex)
    assert df.index.name == "date"
    assert df.index.is_monotonic_increasing
    assert df.attrs.get("symbol") == "SPY"


def test_load_csv_timestamp_column(tmp_path):
    csv = _write_csv(tmp_path / "q.csv", "timestamp,close\n2024-01-02,10.5\n")
    df = load_csv(csv)
    assert df["close"].iloc[0] == 10.5
    assert "timestamp" not in df.columns


def test_load_csv_requires_close(tmp_path):
    csv = _write_csv(tmp_path / "bad.csv", "date,open\n2024-01-02,1\n")
    with pytest.raises(ValueError):
        load_csv(csv)


def test_series_from_dataframe_drops_missing_close():
    df = pd.DataFrame(
        {"Close": [100.0, None, 102.0]},
        index=pd.to_datetime(["2024-01-02", "2024-01-03", "2024-01-04"]),
    )
    series = series_from_dataframe(df, "QQQ")
    assert series.symbol == "QQQ"
    assert series.dates() == [date(2024, 1, 2), date(2024, 1, 4)]
    assert series.price_on(date(2024, 1, 4)) == 102.0


def test_series_from_dataframe_symbol_from_attrs():
    df = pd.DataFrame({"c": [5.0]}, index=pd.to_datetime(["2024-01-02"]))
    df.attrs["symbol"] = "IWM"
    assert series_from_dataframe(df).symbol == "IWM"


def test_csv_quote_source_fetch(tmp_path):
    _write_csv(tmp_path / "AAPL.csv", "timestamp,close\n2024-01-02,185.64\n2024-01-03,184.25\n")
    series = CsvQuoteSource(tmp_path).fetch_series("aapl")
    assert series.symbol == "aapl"
    assert series.gain_loss_value("2024-01-02", "2024-01-03") == pytest.approx(-1.39)


def test_csv_quote_source_missing_file(tmp_path):
    with pytest.raises(DataSourceError):
        CsvQuoteSource(tmp_path).fetch_series("NOPE")


def test_csv_quote_source_unreadable_file(tmp_path):
    _write_csv(tmp_path / "BAD.csv", "date,open\n2024-01-02,1\n")
    with pytest.raises(DataSourceError):
        CsvQuoteSource(tmp_path).fetch_series("BAD")


def test_sample_data_loads():
    """Use the sample CSVs in examples/data if present."""
    data_dir = Path(__file__).resolve().parent.parent / "examples" / "data"
    if not (data_dir / "AAPL.csv").exists():
        pytest.skip("sample data not found")
    series = CsvQuoteSource(data_dir).fetch_series("AAPL")
    assert len(series) > 0
    assert series.price_on(date(2024, 1, 2)) == pytest.approx(185.64)


def test_performance_frame():
    frame = performance_frame([(date(2024, 1, 2), 10.0), (date(2024, 1, 3), 0.0)])
    assert list(frame["value"]) == [10.0, 0.0]
    assert isinstance(frame.index, pd.DatetimeIndex)


def test_csv_quote_source_non_numeric_close(tmp_path):
    _write_csv(tmp_path / "BAD.csv", "date,close\n2024-01-02,abc\n")
    with pytest.raises(DataSourceError):
        CsvQuoteSource(tmp_path).fetch_series("BAD")


def test_csv_quote_source_negative_close(tmp_path):
    _write_csv(tmp_path / "NEG.csv", "date,close\n2024-01-02,-5\n")
    with pytest.raises(DataSourceError):
        CsvQuoteSource(tmp_path).fetch_series("NEG")
