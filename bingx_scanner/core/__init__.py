"""Core analysis and retry utilities."""

from bingx_scanner.core.classifiers import (
    RandomTrendClassifier,
    RandomWaveClassifier,
    TrendClassifier,
    WaveClassifier,
)
from bingx_scanner.core.retry import with_retry
from bingx_scanner.core.signal_engine import (
    SignalEngine,
    analyze,
    calculate_probability,
    format_price,
    normalize_symbol,
    price_levels,
)

__all__ = [
    "RandomTrendClassifier",
    "RandomWaveClassifier",
    "TrendClassifier",
    "WaveClassifier",
    "with_retry",
    "SignalEngine",
    "analyze",
    "calculate_probability",
    "format_price",
    "normalize_symbol",
    "price_levels",
]
