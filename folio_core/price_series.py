"""
PriceSeries: closing prices for one ticker, keyed by calendar date.

Append-only from the engine's point of view. Analytics (gain/loss, moving average,
crossovers) are pure functions of the stored prices.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from folio_core.errors import InvalidInputError, InvalidRangeError, MissingDataError

if TYPE_CHECKING:
    import pandas as pd

ONE_DAY = timedelta(days=1)


def to_date(value: date | datetime | str | None) -> date:
    """Coerce a date, datetime, or ISO 'YYYY-MM-DD' string to a date."""
    if value is None:
        raise InvalidInputError("Date is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise InvalidInputError(f"Not a date: {value!r}") from exc


def date_range(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive."""
    day = start
    while day <= end:
        yield day
        day += ONE_DAY


def validate_range(start, end) -> tuple[date, date]:
    start, end = to_date(start), to_date(end)
    if start > end:
        raise InvalidRangeError(f"Start date {start} is after end date {end}")
    return start, end


@dataclass
class PriceSeries:
    """
    Closing prices for one symbol. Shared by reference between portfolios, so a
    price added here is seen by every portfolio holding the symbol.
    """

    symbol: str
    prices: dict[date, float] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.prices)

    def __contains__(self, day: object) -> bool:
        return self.has_price(day)

    def add_price(self, day: date | datetime | str, price: float) -> None:
        """Record the close for a day. Overwrites any earlier price for that day."""
        day = to_date(day)
        if price is None or not math.isfinite(price) or price < 0:
            raise InvalidInputError(f"Invalid price for {self.symbol} on {day}: {price!r}")
        self.prices[day] = float(price)

    def has_price(self, day) -> bool:
        try:
            return to_date(day) in self.prices
        except InvalidInputError:
            return False

    def price_on(self, day) -> float | None:
        """Close on the given day, or None when nothing was recorded."""
        return self.prices.get(to_date(day))

    def dates(self) -> list[date]:
        return sorted(self.prices)

    def gain_loss_value(self, start, end) -> float:
        """
        Price change from start to end. Both endpoints must have a recorded price;
        gaps are not interpolated.
        """
        start, end = validate_range(start, end)
        if start not in self.prices or end not in self.prices:
            missing = start if start not in self.prices else end
            raise MissingDataError(f"No price for {self.symbol} on {missing}")
        return self.prices[end] - self.prices[start]

    def get_moving_average(self, day, x: int) -> float:
        """
        Mean close over the x calendar days ending at day (inclusive).

        Days without a price are skipped: the denominator is the number of days that
        have data. Returns 0.0 when none of the x days has a price.
        """
        if x is None or not math.isfinite(x) or x <= 0:
            raise InvalidInputError(f"Moving average window must be positive, got {x!r}")
        day = to_date(day)
        window = [self.prices[d] for d in date_range(day - (x - 1) * ONE_DAY, day) if d in self.prices]
        if not window:
            return 0.0
        return sum(window) / len(window)

    def get_crossovers(self, start, end, x: int) -> list[date]:
        """Days in [start, end] whose close is strictly above the x-day moving average."""
        start, end = validate_range(start, end)
        crossovers: list[date] = []
        for day in date_range(start, end):
            price = self.prices.get(day)
            if price is not None and price > self.get_moving_average(day, x):
                crossovers.append(day)
        return crossovers

    def to_series(self) -> "pd.Series":
        """Prices as a date-sorted pandas Series named after the symbol."""
        import pandas as pd

        days = self.dates()
        index = pd.DatetimeIndex(pd.to_datetime(days), name="date")
        return pd.Series([self.prices[d] for d in days], index=index, name=self.symbol, dtype=float)
