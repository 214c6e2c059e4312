"""
Registry: portfolios by name and the shared price series they reference.

The only place an unknown portfolio name is reported (PortfolioNotFoundError), as
distinct from an unknown symbol or a missing price.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from folio_core.errors import (
    DataSourceError,
    InvalidInputError,
    PortfolioExistsError,
    PortfolioNotFoundError,
    SymbolNotFoundError,
)
from folio_core.portfolio import Portfolio
from folio_core.price_series import PriceSeries
from folio_core.quote_source import QuoteSource

logger = logging.getLogger(__name__)


class PortfolioRegistry:
    """
    In-memory portfolios and price series for one session. Not thread-safe; callers
    serialize access when several front ends share it.
    """

    def __init__(self) -> None:
        self._portfolios: dict[str, Portfolio] = {}
        self._series: dict[str, PriceSeries] = {}

    # --- portfolios ---

    def create(self, name: str) -> Portfolio:
        """Register an empty portfolio. Names are unique."""
        if not name or not name.strip():
            raise InvalidInputError("Portfolio name cannot be empty")
        if name != name.strip() or "\n" in name or "\r" in name:
            raise InvalidInputError(f"Portfolio name cannot have surrounding spaces or line breaks: {name!r}")
        if name in self._portfolios:
            raise PortfolioExistsError(f"Portfolio {name!r} already exists")
        portfolio = Portfolio(name=name)
        self._portfolios[name] = portfolio
        logger.info("Created portfolio %s", name)
        return portfolio

    def contains(self, name: str) -> bool:
        return name in self._portfolios

    def names(self) -> list[str]:
        return list(self._portfolios)

    def get(self, name: str) -> Portfolio:
        try:
            return self._portfolios[name]
        except KeyError:
            raise PortfolioNotFoundError(f"Portfolio {name!r} not found") from None

    def remove(self, name: str) -> None:
        self.get(name)
        del self._portfolios[name]
        logger.info("Removed portfolio %s", name)

    # --- price series ---

    def add_series(self, series: PriceSeries) -> None:
        """Store (or replace) the series for its symbol."""
        self._series[series.symbol] = series

    def has_series(self, symbol: str) -> bool:
        return symbol in self._series

    def get_series(self, symbol: str) -> PriceSeries:
        try:
            return self._series[symbol]
        except KeyError:
            raise SymbolNotFoundError(f"No price series for {symbol}") from None

    def fetch_series(self, symbol: str, source: QuoteSource) -> PriceSeries:
        """Fetch symbol from source, store the result and return it."""
        try:
            series = source.fetch_series(symbol)
        except DataSourceError:
            raise
        except Exception as exc:
            raise DataSourceError(f"Could not fetch {symbol}: {exc}") from exc
        self.add_series(series)
        logger.info("Fetched %d prices for %s", len(series), symbol)
        return series

    # --- ledger operations by name ---

    def add_stock(self, name: str, symbol: str, shares: float) -> None:
        portfolio = self.get(name)
        portfolio.add_stock(symbol, shares, self.get_series(symbol))
        logger.info("Added %s shares of %s to %s", shares, symbol, name)

    def update_stock(self, name: str, symbol: str, shares: float) -> None:
        portfolio = self.get(name)
        portfolio.update_stock(symbol, shares, self.get_series(symbol))
        logger.info("Set %s shares of %s in %s", shares, symbol, name)

    def remove_stock(self, name: str, symbol: str, shares: float, day=None) -> None:
        self.get(name).remove_stock(symbol, shares, day)
        logger.info("Removed %s shares of %s from %s", shares, symbol, name)

    def get_composition(self, name: str, day=None) -> dict[str, float]:
        return self.get(name).get_composition(day)

    def get_value(self, name: str, day) -> float:
        return self.get(name).get_value(day)

    def get_value_distribution(self, name: str, day) -> dict[str, float]:
        return self.get(name).get_value_distribution(day)

    def rebalance(self, name: str, target_weights: Mapping[str, float], day) -> None:
        self.get(name).rebalance(target_weights, day)

    def get_performance(self, name: str, start, end) -> list[float]:
        return self.get(name).get_performance(start, end)

    # --- persistence ---

    def save(self, name: str, path: str | Path) -> None:
        self.get(name).save_to_file(path)
        logger.info("Saved portfolio %s to %s", name, path)

    def load(self, path: str | Path, *, replace: bool = False) -> Portfolio:
        """
        Load a portfolio file and register it under its stored name. Symbols with a
        series already in the registry are bound; the rest stay unbound until fetched.
        """
        portfolio = Portfolio.load_from_file(path)
        if portfolio.name in self._portfolios:
            if not replace:
                raise PortfolioExistsError(f"Portfolio {portfolio.name!r} already exists")
            logger.warning("Replacing portfolio %s with contents of %s", portfolio.name, path)
        self._portfolios[portfolio.name] = portfolio
        self.rebind(portfolio.name)
        logger.info("Loaded portfolio %s from %s", portfolio.name, path)
        return portfolio

    def rebind(self, name: str) -> list[str]:
        """Bind stored series to any unbound symbols of name. Returns those still unbound."""
        portfolio = self.get(name)
        for symbol in portfolio.unbound_symbols():
            if symbol in self._series:
                portfolio.bind_series(symbol, self._series[symbol])
        return portfolio.unbound_symbols()

