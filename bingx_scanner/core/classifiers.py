"""Classifier protocol and the random reference classifiers.

This module provides:
- TrendClassifier / WaveClassifier: runtime-checkable Protocols the engine calls
- RandomTrendClassifier: weighted draw over Up / Down / Sideways
- RandomWaveClassifier: uniform draw over the eight wave labels

Neither reference classifier looks at price or history. They exist so a real
model can replace them behind the same signature.
"""

from __future__ import annotations

import random
from decimal import Decimal
from typing import Protocol, Sequence, runtime_checkable

from bingx_scanner.models.signal import Trend, WavePattern


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------
@runtime_checkable
class TrendClassifier(Protocol):
    """Assigns a trend to a price."""

    def classify_trend(
        self, price: Decimal, history: Sequence[Decimal] | None = None
    ) -> Trend:
        """Classify the trend for the current price.

        Args:
            price: Current price.
            history: Optional earlier prices, oldest first.
        """
        ...


@runtime_checkable
class WaveClassifier(Protocol):
    """Assigns a wave label to a price."""

    def classify_wave(
        self, price: Decimal, history: Sequence[Decimal] | None = None
    ) -> WavePattern:
        """Classify the wave position for the current price."""
        ...


# ---------------------------------------------------------------------------
# Reference implementations
# ---------------------------------------------------------------------------
TREND_WEIGHTS: dict[Trend, float] = {
    Trend.UP: 0.4,
    Trend.DOWN: 0.3,
    Trend.SIDEWAYS: 0.3,
}

WAVE_PATTERNS: tuple[WavePattern, ...] = tuple(WavePattern)


class RandomTrendClassifier:
    """Weighted random trend (Up 40%, Down 30%, Sideways 30%)."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()
        self._trends = list(TREND_WEIGHTS)
        self._weights = list(TREND_WEIGHTS.values())

    def classify_trend(
        self, price: Decimal, history: Sequence[Decimal] | None = None
    ) -> Trend:
        return self._rng.choices(self._trends, weights=self._weights, k=1)[0]


class RandomWaveClassifier:
    """Uniform random wave label, independent of trend."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def classify_wave(
        self, price: Decimal, history: Sequence[Decimal] | None = None
    ) -> WavePattern:
        return self._rng.choice(WAVE_PATTERNS)
