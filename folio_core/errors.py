"""
Error types raised by the valuation engine.

Validation failures raise at the operation boundary. Aggregate queries over sparse
quote calendars (value, distribution, moving average) do not raise for missing days.
"""


class FolioError(Exception):
    """Base class for all folio-core errors."""


class InvalidInputError(FolioError, ValueError):
    """Bad argument: negative price, non-positive share count or window, missing date."""


class InvalidRangeError(InvalidInputError):
    """Start date falls after end date."""


class MissingDataError(FolioError, LookupError):
    """A date required by the operation has no recorded price."""


class NotFoundError(FolioError, LookupError):
    """Unknown name at the registry boundary."""


class PortfolioNotFoundError(NotFoundError):
    pass


class SymbolNotFoundError(NotFoundError):
    pass


class PortfolioExistsError(FolioError, ValueError):
    """A portfolio with this name is already registered."""


class PersistenceError(FolioError, OSError):
    """Portfolio file could not be read, written, or parsed."""


class DataSourceError(FolioError):
    """A quote source failed to supply a price series."""
