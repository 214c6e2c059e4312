"""
Portfolio: a named holding ledger. Share quantities per symbol plus a reference to
each symbol's PriceSeries for valuation.

Holdings are a single current state, not a history of positions. Valuation on a date
uses the prices recorded for that date; symbols without one contribute nothing.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from folio_core.errors import InvalidInputError, SymbolNotFoundError
from folio_core.price_series import PriceSeries, date_range, to_date, validate_range
from folio_core.storage import read_portfolio_file, write_portfolio_file

logger = logging.getLogger(__name__)

# Target-weight key that requests an equal split across every held symbol
EQUAL_WEIGHT_KEY = "ALL"


def _is_positive(shares) -> bool:
    return shares is not None and math.isfinite(shares) and shares > 0


@dataclass
class Portfolio:
    """
    Positions and their price series. Mutable; updated by add/update/remove and rebalance.

    A quantity is always > 0: any operation that takes it to zero or below drops the
    symbol and its series binding.
    """

    name: str
    positions: dict[str, float] = field(default_factory=dict)
    price_series: dict[str, PriceSeries] = field(default_factory=dict, repr=False, compare=False)

    def position(self, symbol: str) -> float:
        """Quantity held in symbol. 0 if not present."""
        return self.positions.get(symbol, 0.0)

    def _drop(self, symbol: str) -> None:
        self.positions.pop(symbol, None)
        self.price_series.pop(symbol, None)

    def _price(self, symbol: str, day: date) -> float | None:
        series = self.price_series.get(symbol)
        return series.price_on(day) if series is not None else None

    # --- mutation ---

    def add_stock(self, symbol: str, shares: float, series: PriceSeries) -> None:
        """Buy shares: adds to any existing quantity and (re)binds the series."""
        if not _is_positive(shares):
            raise InvalidInputError(f"Shares to add must be positive, got {shares!r}")
        self.positions[symbol] = self.position(symbol) + shares
        self.price_series[symbol] = series

    def update_stock(self, symbol: str, shares: float, series: PriceSeries) -> None:
        """Set the quantity outright (not additive) and rebind the series."""
        if shares is None or not math.isfinite(shares) or shares < 0:
            raise InvalidInputError(f"Shares cannot be negative, got {shares!r}")
        if shares == 0:
            self._drop(symbol)
            return
        self.positions[symbol] = float(shares)
        self.price_series[symbol] = series

    def remove_stock(self, symbol: str, shares: float, day=None) -> None:
        """Sell shares. Selling all of it (or more) removes the symbol entirely."""
        if not _is_positive(shares):
            raise InvalidInputError(f"Shares to remove must be positive, got {shares!r}")
        if symbol not in self.positions:
            return
        remaining = self.positions[symbol] - shares
        if remaining <= 0:
            self._drop(symbol)
        else:
            self.positions[symbol] = remaining

    def bind_series(self, symbol: str, series: PriceSeries) -> None:
        """Attach a price series to a held symbol without changing its quantity."""
        if symbol not in self.positions:
            raise SymbolNotFoundError(f"{symbol} is not held in portfolio {self.name!r}")
        self.price_series[symbol] = series

    def unbound_symbols(self) -> list[str]:
        """Held symbols with no price series, e.g. right after loading from file."""
        return [s for s in self.positions if s not in self.price_series]

    # --- queries ---

    def get_composition(self, day=None) -> dict[str, float]:
        """Snapshot of symbol -> quantity. Holdings are not versioned by date."""
        return dict(self.positions)

    def _stock_values(self, day: date) -> dict[str, float]:
        values: dict[str, float] = {}
        for symbol, quantity in self.positions.items():
            price = self._price(symbol, day)
            if price is not None:
                values[symbol] = quantity * price
        return values

    def get_value(self, day) -> float:
        return sum(self._stock_values(to_date(day)).values(), 0.0)

    def get_value_distribution(self, day) -> dict[str, float]:
        """
        Percentage of total value per symbol priced on day. If the total is zero,
        every priced symbol reports 0.0.
        """
        values = self._stock_values(to_date(day))
        total = sum(values.values(), 0.0)
        if total == 0:
            return {symbol: 0.0 for symbol in values}
        return {symbol: 100.0 * value / total for symbol, value in values.items()}

    def rebalance(self, target_weights: Mapping[str, float], day) -> None:
        """
        Move holdings to target weights of the portfolio value on day.

        With the EQUAL_WEIGHT_KEY present, every held symbol gets 1/N (its value is
        ignored). Otherwise each listed symbol gets weight * total value. Weights are
        not checked to sum to 1. Symbols not held or without a price on day are skipped.
        """
        day = to_date(day)
        if EQUAL_WEIGHT_KEY in target_weights:
            if not self.positions:
                return
            equal = 1.0 / len(self.positions)
            targets = {symbol: equal for symbol in self.positions}
        else:
            targets = dict(target_weights)
            if any(w is None or not math.isfinite(w) or w < 0 for w in targets.values()):
                raise InvalidInputError(f"Target weights must be finite and non-negative: {targets}")
        total = self.get_value(day)

        for symbol, weight in targets.items():
            price = self._price(symbol, day) if symbol in self.positions else None
            if not price:
                logger.debug("Rebalance %s: skipping %s, no price on %s", self.name, symbol, day)
                continue
            shares = total * weight / price
            if shares > 0:
                self.positions[symbol] = shares
            else:
                self._drop(symbol)
        logger.info("Rebalanced portfolio %s on %s (value %.2f)", self.name, day, total)

    def get_performance(self, start, end) -> list[float]:
        """Portfolio value for every calendar day from start to end inclusive."""
        return [value for _, value in self.get_performance_curve(start, end)]

    def get_performance_curve(self, start, end) -> list[tuple[date, float]]:
        """Same as get_performance, paired with the day each value belongs to."""
        start, end = validate_range(start, end)
        return [(day, self.get_value(day)) for day in date_range(start, end)]

    # --- persistence ---

    def save_to_file(self, path: str | Path) -> None:
        """Write name and (symbol, quantity) records. Price history is not saved."""
        write_portfolio_file(path, self.name, self.positions.items())

    @classmethod
    def load_from_file(cls, path: str | Path) -> "Portfolio":
        """Rebuild a portfolio from file. No price series are bound on the result."""
        name, positions = read_portfolio_file(path)
        return cls(name=name, positions=positions)
