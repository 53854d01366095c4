"""Data models."""

from bingx_scanner.models.market import Instrument, PricePoint
from bingx_scanner.models.signal import SignalRecord, Trend, WavePattern

__all__ = [
    "Instrument",
    "PricePoint",
    "SignalRecord",
    "Trend",
    "WavePattern",
]
