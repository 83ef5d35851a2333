"""
SuperTrend
==========
basic_upper = (high + low) / 2 + multiplier * ATR
basic_lower = (high + low) / 2 - multiplier * ATR

Final bands only move toward price unless the previous close crossed them:
final_upper = basic_upper if basic_upper < prev_upper or prev_close > prev_upper else prev_upper
final_lower = basic_lower if basic_lower > prev_lower or prev_close < prev_lower else prev_lower

Direction flips to down (-1) when close falls below the final lower band
and to up (+1) when close rises above the final upper band. The reported
value is the lower band in an uptrend and the upper band in a downtrend.

Until the ATR is ready the snapshot is all zeros with direction 0.
"""

from dataclasses import dataclass
from typing import Optional

from ...models.candle import Candle
from .atr import ATRBuilder
from .incremental_base import IndicatorBuilder, is_finite, require_period, require_positive


@dataclass(frozen=True)
class SuperTrendParams:
    period: int = 10
    multiplier: float = 3.0

    def __str__(self):
        return f"{self.period}/{self.multiplier}"


@dataclass(frozen=True)
class SuperTrend:
    """SuperTrend snapshot; direction is 1 (up), -1 (down) or 0 (not ready)"""
    value: float
    upper_band: float
    lower_band: float
    direction: int

    def is_uptrend(self) -> bool:
        return self.direction == 1

    def is_downtrend(self) -> bool:
        return self.direction == -1


class SuperTrendBuilder(IndicatorBuilder[SuperTrend]):
    """Incremental SuperTrend, O(1) per update"""

    kind = "supertrend"

    def __init__(self, period: int = 10, multiplier: float = 3.0):
        self.params = SuperTrendParams(require_period("period", period), require_positive("multiplier", multiplier))
        self.atr = ATRBuilder(period)
        self.final_upper: Optional[float] = None
        self.final_lower: Optional[float] = None
        self.direction = 0
        self.previous_close: Optional[float] = None
        self._last = self.neutral()

    @classmethod
    def from_params(cls, params: SuperTrendParams) -> 'SuperTrendBuilder':
        return cls(params.period, params.multiplier)

    def next(self, candle: Candle) -> SuperTrend:
        high, low, close = candle.high_price, candle.low_price, candle.close_price
        if not is_finite(high, low, close):
            self._absorb_non_finite(candle, ["high_price", "low_price", "close_price"])
            return self._last

        atr = self.atr.next(candle).value
        previous_close = self.previous_close
        self.previous_close = close
        if not self.atr.is_ready():
            return self._last

        mid = (high + low) / 2.0
        basic_upper = mid + self.params.multiplier * atr
        basic_lower = mid - self.params.multiplier * atr

        if self.final_upper is None:
            self.final_upper = basic_upper
            self.final_lower = basic_lower
            self.direction = 1 if close >= mid else -1
        else:
            prev_upper, prev_lower = self.final_upper, self.final_lower
            if basic_upper < prev_upper or previous_close > prev_upper:
                self.final_upper = basic_upper
            if basic_lower > prev_lower or previous_close < prev_lower:
                self.final_lower = basic_lower

            if self.direction == 1 and close < self.final_lower:
                self.direction = -1
            elif self.direction == -1 and close > self.final_upper:
                self.direction = 1

        value = self.final_lower if self.direction == 1 else self.final_upper
        self._last = SuperTrend(value, self.final_upper, self.final_lower, self.direction)
        return self._last

    def neutral(self) -> SuperTrend:
        return SuperTrend(0.0, 0.0, 0.0, 0)

    def reset(self):
        self.atr.reset()
        self.final_upper = None
        self.final_lower = None
        self.direction = 0
        self.previous_close = None
        self._last = self.neutral()

    def __repr__(self):
        return f"SuperTrendBuilder({self.params})"


__all__ = ['SuperTrendParams', 'SuperTrend', 'SuperTrendBuilder']
