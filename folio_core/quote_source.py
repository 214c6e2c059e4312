"""
Quote source abstraction.

QuoteSource ABC: fetch_series. Callers construct a source (local CSV files, a remote
quote API) and hand it to the registry; the ledger never talks to one directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from folio_core.price_series import PriceSeries


class QuoteSource(ABC):
    """
    Supplies a completed daily closing-price series for a symbol.
    Implementations: reporting.data_loader.CsvQuoteSource (files on disk).
    """

    @abstractmethod
    def fetch_series(self, symbol: str) -> "PriceSeries":
        """
        Return every closing price available for symbol.
        Raise DataSourceError when the source cannot supply it.
        """
        ...
