"""Signal engine: turns price points into trading signals.

Pure computation. The engine performs no I/O and keeps no state between
calls apart from its injected classifiers, so one instance can be shared by
concurrent requests.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Iterable, Mapping, Sequence

from bingx_scanner.core.classifiers import (
    RandomTrendClassifier,
    RandomWaveClassifier,
    TrendClassifier,
    WaveClassifier,
)
from bingx_scanner.errors import AnalysisError, PriceValidationError
from bingx_scanner.models import PricePoint, SignalRecord, Trend, WavePattern

logger = logging.getLogger(__name__)

DEFAULT_QUOTE_SUFFIXES = ("USDT",)
SYMBOL_SEPARATORS = "-_/"

# (entry, take profit, stop loss) as fractions of current price
LEVEL_MULTIPLIERS: dict[Trend, tuple[Decimal, Decimal, Decimal]] = {
    Trend.UP: (Decimal("0.98"), Decimal("1.05"), Decimal("0.95")),
    Trend.DOWN: (Decimal("0.95"), Decimal("1.03"), Decimal("0.92")),
    Trend.SIDEWAYS: (Decimal("1.00"), Decimal("1.02"), Decimal("0.97")),
}

BASE_PROBABILITY = Decimal("0.50")
TREND_ADJUSTMENT: dict[Trend, Decimal] = {
    Trend.UP: Decimal("0.10"),
    Trend.DOWN: Decimal("0.05"),
    Trend.SIDEWAYS: Decimal("0"),
}
WAVE_ADJUSTMENT: dict[WavePattern, Decimal] = {
    WavePattern.W3: Decimal("0.15"),
    WavePattern.W5: Decimal("0.15"),
    WavePattern.W2: Decimal("-0.10"),
    WavePattern.W4: Decimal("-0.10"),
}

_TWO_PLACES = Decimal("0.01")
_FOUR_PLACES = Decimal("0.0001")
_WIDE_PRICE = Decimal("100")


def format_price(value: Decimal) -> str:
    """Format a price with 2 decimals at or above 100, otherwise 4."""
    places = _TWO_PLACES if value >= _WIDE_PRICE else _FOUR_PLACES
    # quantize needs room for every integer digit plus the decimals
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 6)
        return f"{value.quantize(places, rounding=ROUND_HALF_UP):f}"


def price_levels(price: Decimal, trend: Trend) -> tuple[Decimal, Decimal, Decimal]:
    """Return (entry, take_profit, stop_loss) for a price and trend."""
    entry, take_profit, stop_loss = LEVEL_MULTIPLIERS[trend]
    return price * entry, price * take_profit, price * stop_loss


def calculate_probability(trend: Trend, wave: WavePattern) -> Decimal:
    """Success probability for a trend/wave combination, clamped to [0, 1]."""
    probability = (
        BASE_PROBABILITY
        + TREND_ADJUSTMENT[trend]
        + WAVE_ADJUSTMENT.get(wave, Decimal("0"))
    )
    probability = min(max(probability, Decimal("0")), Decimal("1"))
    return probability.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def normalize_symbol(
    symbol: str, quote_suffixes: Sequence[str] = DEFAULT_QUOTE_SUFFIXES
) -> str:
    """
    Strip a trailing quote currency and lowercase.

    "BTCUSDT" -> "btc", "BTC-USDT" -> "btc". A symbol that is nothing but
    the quote currency is only lowercased.
    """
    upper = symbol.upper()
    for suffix in quote_suffixes:
        suffix = suffix.upper()
        if suffix and upper.endswith(suffix) and len(upper) > len(suffix):
            base = symbol[: -len(suffix)].rstrip(SYMBOL_SEPARATORS)
            if base:
                return base.lower()
    return symbol.lower()


def parse_price(raw: Any, symbol: str = "", index: int | None = None) -> Decimal:
    """Parse a raw price into a finite, non-negative Decimal."""
    if raw is None or isinstance(raw, bool):
        raise PriceValidationError(f"Missing price for symbol {symbol!r}", index)
    try:
        price = Decimal(str(raw).strip())
    except InvalidOperation:
        raise PriceValidationError(
            f"Invalid price for symbol {symbol!r}: {raw!r}", index
        ) from None
    if not price.is_finite():
        raise PriceValidationError(
            f"Non-finite price for symbol {symbol!r}: {raw!r}", index
        )
    if price < 0:
        raise PriceValidationError(
            f"Negative price for symbol {symbol!r}: {raw!r}", index
        )
    return price


def _fields(point: PricePoint | Mapping[str, Any]) -> tuple[Any, Any]:
    if isinstance(point, Mapping):
        return point.get("symbol"), point.get("price")
    return getattr(point, "symbol", None), getattr(point, "price", None)


class SignalEngine:
    """Derives a SignalRecord from each price point.

    Trend and wave classification are delegated to the injected classifiers;
    price levels and probability are deterministic given price and trend/wave.
    """

    def __init__(
        self,
        trend_classifier: TrendClassifier | None = None,
        wave_classifier: WaveClassifier | None = None,
        quote_suffixes: Sequence[str] = DEFAULT_QUOTE_SUFFIXES,
    ):
        self.trend_classifier = trend_classifier or RandomTrendClassifier()
        self.wave_classifier = wave_classifier or RandomWaveClassifier()
        self.quote_suffixes = tuple(quote_suffixes)

    def analyze_point(
        self, point: PricePoint | Mapping[str, Any], index: int | None = None
    ) -> SignalRecord:
        """Analyze a single price point."""
        symbol, raw_price = _fields(point)
        if not isinstance(symbol, str) or not symbol.strip():
            raise PriceValidationError("Price point is missing a symbol", index)

        price = parse_price(raw_price, symbol, index)
        trend = self.trend_classifier.classify_trend(price)
        wave = self.wave_classifier.classify_wave(price)
        entry, take_profit, stop_loss = price_levels(price, trend)

        return SignalRecord(
            symbol=normalize_symbol(symbol.strip(), self.quote_suffixes),
            trend=trend,
            current_price=format_price(price),
            wave_pattern=wave,
            entry_point=format_price(entry),
            take_profit=format_price(take_profit),
            stop_loss=format_price(stop_loss),
            probability=f"{calculate_probability(trend, wave):f}",
        )

    def analyze(
        self, points: Iterable[PricePoint | Mapping[str, Any]]
    ) -> list[SignalRecord]:
        """
        Analyze a batch of price points.

        Args:
            points: Non-empty sequence of price points

        Returns:
            One SignalRecord per point, in input order

        Raises:
            AnalysisError: If the batch is empty
            PriceValidationError: On the first malformed point; no partial output
        """
        points = list(points)
        if not points:
            raise AnalysisError("No price points to analyze")

        records = [self.analyze_point(point, i) for i, point in enumerate(points)]
        logger.debug(f"Analyzed {len(records)} price points")
        return records


def analyze(
    points: Iterable[PricePoint | Mapping[str, Any]],
    trend_classifier: TrendClassifier | None = None,
    wave_classifier: WaveClassifier | None = None,
) -> list[SignalRecord]:
    """Analyze price points with a fresh engine."""
    return SignalEngine(trend_classifier, wave_classifier).analyze(points)
