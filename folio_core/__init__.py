"""
folio-core: time-series valuation engine for stock portfolios.

Price series, holding ledgers and a name-keyed registry. No quote fetching, no UI.
"""

__version__ = "0.1.0"

from folio_core.errors import (
    DataSourceError,
    FolioError,
    InvalidInputError,
    InvalidRangeError,
    MissingDataError,
    NotFoundError,
    PersistenceError,
    PortfolioExistsError,
    PortfolioNotFoundError,
    SymbolNotFoundError,
)
from folio_core.price_series import PriceSeries
from folio_core.portfolio import EQUAL_WEIGHT_KEY, Portfolio
from folio_core.quote_source import QuoteSource
from folio_core.registry import PortfolioRegistry

__all__ = [
    "PriceSeries",
    "Portfolio",
    "PortfolioRegistry",
    "QuoteSource",
    "EQUAL_WEIGHT_KEY",
    "FolioError",
    "InvalidInputError",
    "InvalidRangeError",
    "MissingDataError",
    "NotFoundError",
    "PortfolioNotFoundError",
    "SymbolNotFoundError",
    "PortfolioExistsError",
    "PersistenceError",
    "DataSourceError",
]
