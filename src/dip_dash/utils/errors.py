"""Custom exceptions."""


class DataRetrievalError(Exception):
    """Raised when a loader fails to return usable data."""


class FeedUnavailableError(DataRetrievalError):
    """Raised when the remote source is unreachable or malformed."""


class SymbolNotFoundError(DataRetrievalError):
    """Raised when the remote source has no data for a symbol."""


class EmptySeriesError(ValueError):
    """Raised when a symbol has no valid samples."""
