"""
ATR - Average True Range
========================
Wilder RMA of the true range, seeded by the SMA of the first `period`
true ranges. Value is 0.0 until `period` candles have been seen.
"""

from dataclasses import dataclass
from typing import Optional

from ...models.candle import Candle
from .incremental_base import IndicatorBuilder, WilderSmoother, is_finite, require_period, true_range


@dataclass(frozen=True)
class ATR:
    period: int
    value: float

    def __str__(self):
        return f"ATR({self.period}: {self.value:.4f})"


class ATRBuilder(IndicatorBuilder[ATR]):
    """Incremental ATR, O(1) per update"""

    kind = "atr"

    def __init__(self, period: int = 14):
        self.period = require_period("period", period)
        self.smoother = WilderSmoother(period)
        self.previous_close: Optional[float] = None

    def next(self, candle: Candle) -> ATR:
        high, low, close = candle.high_price, candle.low_price, candle.close_price
        if not is_finite(high, low, close):
            self._absorb_non_finite(candle, ["high_price", "low_price", "close_price"])
            return ATR(self.period, self.value)

        self.smoother.update(true_range(high, low, self.previous_close))
        self.previous_close = close
        return ATR(self.period, self.value)

    @property
    def value(self) -> float:
        return self.smoother.value if self.smoother.is_ready() else 0.0

    def is_ready(self) -> bool:
        return self.smoother.is_ready()

    def neutral(self) -> ATR:
        return ATR(self.period, 0.0)

    def reset(self):
        self.smoother.reset()
        self.previous_close = None

    def __repr__(self):
        return f"ATRBuilder(period={self.period})"


__all__ = ['ATR', 'ATRBuilder']
