"""Exchange market data models.

Only ``symbol`` is part of the response shape. Prices and volumes are kept as
raw strings (or None) so one bad entry does not sink the whole list; volumes
are ranked leniently and prices are checked by the signal engine.
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


def _raw_string(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)


class Instrument(BaseModel):
    """Perpetual contract from the exchange catalog."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    symbol: str
    volume: str | None = None

    @field_validator("volume", mode="before")
    @classmethod
    def raw_volume(cls, value: Any) -> str | None:
        return _raw_string(value)

    @property
    def volume_value(self) -> float:
        """Volume as a float for ranking. Missing or unparseable volumes rank last."""
        if self.volume is None:
            return -math.inf
        try:
            value = float(self.volume)
        except ValueError:
            return -math.inf
        return value if not math.isnan(value) else -math.inf


class PricePoint(BaseModel):
    """Latest price for a single contract."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    symbol: str
    price: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def raw_price(cls, value: Any) -> str | None:
        return _raw_string(value)
