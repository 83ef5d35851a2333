"""
Candle Model - Core market data structure
=========================================
Immutable OHLCV bar for one market and interval.
"""

import datetime as dt

from pydantic import BaseModel, Field, ConfigDict, model_validator


class Candle(BaseModel):
    """One OHLCV bar. Frozen once constructed."""

    model_config = ConfigDict(frozen=True)

    open_price: float = Field(..., description="Opening price")
    high_price: float = Field(..., description="Highest traded price")
    low_price: float = Field(..., description="Lowest traded price")
    close_price: float = Field(..., description="Closing price")
    volume: float = Field(default=0.0, description="Volume in base currency")
    quote_volume: float = Field(default=0.0, description="Volume in quote currency")
    timestamp: dt.datetime = Field(..., description="Bar open time")
    market: str = Field(default="", description="Market identifier (e.g., KRW-BTC)")
    interval: str = Field(default="", description="Interval tag (e.g., 1m, 1h)")

    @model_validator(mode='after')
    def validate_price_range(self):
        # Written as "greater than" checks so NaN/Inf fields pass through;
        # indicator builders absorb non-finite values themselves.
        low, high = self.low_price, self.high_price
        if low > high:
            raise ValueError(f"low_price {low} is above high_price {high}")
        for name in ('open_price', 'close_price'):
            price = getattr(self, name)
            if price < low or price > high:
                raise ValueError(f"{name} {price} outside [{low}, {high}]")
        return self

    @property
    def typical_price(self) -> float:
        """(high + low + close) / 3"""
        return (self.high_price + self.low_price + self.close_price) / 3.0

    @property
    def datetime(self) -> dt.datetime:
        """Alias of timestamp"""
        return self.timestamp

    def __repr__(self):
        return (f"Candle({self.timestamp.isoformat()} O={self.open_price} H={self.high_price} "
                f"L={self.low_price} C={self.close_price} V={self.volume})")
