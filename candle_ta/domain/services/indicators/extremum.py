"""
Rolling MAX / MIN
=================
Highest high (MAX) or lowest low (MIN) over the last `period` candles.
Before `period` candles the extreme of the available candles is reported.
"""

from dataclasses import dataclass
from typing import Optional

from ...models.candle import Candle
from .incremental_base import IndicatorBuilder, RollingExtremum, is_finite, require_period


@dataclass(frozen=True)
class Extremum:
    period: int
    value: float


class _ExtremumBuilder(IndicatorBuilder[Extremum]):
    mode = "max"
    field = "high_price"

    def __init__(self, period: int = 20):
        self.period = require_period("period", period)
        self.extremum = RollingExtremum(period, self.mode)
        self._last: Optional[Extremum] = None

    def next(self, candle: Candle) -> Extremum:
        price = getattr(candle, self.field)
        if not is_finite(price):
            self._absorb_non_finite(candle, [self.field])
            return self._last or self.neutral()

        self._last = Extremum(self.period, self.extremum.append(price))
        return self._last

    def neutral(self) -> Extremum:
        return Extremum(self.period, 0.0)

    def reset(self):
        self.extremum.clear()
        self._last = None

    def __repr__(self):
        return f"{self.__class__.__name__}(period={self.period})"


class MaxBuilder(_ExtremumBuilder):
    """Highest high over `period` candles"""
    kind = "max"
    mode = "max"
    field = "high_price"


class MinBuilder(_ExtremumBuilder):
    """Lowest low over `period` candles"""
    kind = "min"
    mode = "min"
    field = "low_price"


__all__ = ['Extremum', 'MaxBuilder', 'MinBuilder']
