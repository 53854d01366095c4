"""BingX perpetual swap scanner: market data retrieval and wave signals."""

__version__ = "0.1.0"
