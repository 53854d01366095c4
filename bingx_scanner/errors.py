"""Exception hierarchy for market data retrieval and signal analysis."""


class ScannerError(Exception):
    """Base class for all scanner failures."""


class MarketDataError(ScannerError):
    """Market data could not be retrieved."""


class TransientIOError(MarketDataError):
    """Network failure, timeout or server-side error. Safe to retry."""


class ShapeError(MarketDataError):
    """Exchange response is malformed or empty. Not retried."""


class AnalysisError(ScannerError, ValueError):
    """A batch of price points could not be analyzed."""


class PriceValidationError(AnalysisError):
    """A single price point is malformed."""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index
