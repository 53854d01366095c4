"""Signal models produced by the analysis engine."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Trend(str, Enum):
    """Coarse direction of a price series."""

    UP = "Up"
    DOWN = "Down"
    SIDEWAYS = "Sideways"


class WavePattern(str, Enum):
    """Elliott-style wave label."""

    W1 = "W1"
    W2 = "W2"
    W3 = "W3"
    W4 = "W4"
    W5 = "W5"
    WA = "WA"
    WB = "WB"
    WC = "WC"


class SignalRecord(BaseModel):
    """Trading signal for one contract.

    Prices are pre-formatted strings so the web layer can render them as-is.
    Serialize with ``model_dump(by_alias=True)`` for camelCase keys.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    symbol: str
    trend: Trend
    current_price: str
    wave_pattern: WavePattern
    entry_point: str
    take_profit: str
    stop_loss: str
    probability: str
