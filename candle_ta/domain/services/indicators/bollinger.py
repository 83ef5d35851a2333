"""
Bollinger Bands
===============
middle = SMA(close, period)
upper/lower = middle ± multiplier * population_stddev(close, period)

Warm-up: fewer than `period` closes -> upper = middle = lower = close.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ...models.candle import Candle
from .incremental_base import (
    IndicatorBuilder,
    RollingWindow,
    is_finite,
    require_period,
    require_positive,
    resolve_resync_interval,
)

_EPSILON = 1e-12


@dataclass(frozen=True)
class BollingerBands:
    """Bollinger Bands snapshot; lower <= middle <= upper always holds"""
    period: int
    multiplier: float
    upper: float
    middle: float
    lower: float

    @property
    def bandwidth(self) -> float:
        """(upper - lower) / middle, 0.0 when middle is ~0"""
        if abs(self.middle) < _EPSILON:
            return 0.0
        return (self.upper - self.lower) / self.middle

    def percent_b(self, price: float) -> float:
        """Position of price inside the bands (0 = lower, 1 = upper), 0.5 when bands collapse"""
        band_range = self.upper - self.lower
        if abs(band_range) < _EPSILON:
            return 0.5
        return (price - self.lower) / band_range

    def __str__(self):
        return f"BBand({self.period}, {self.multiplier}: {self.lower:.4f}/{self.middle:.4f}/{self.upper:.4f})"


class BollingerBandsBuilder(IndicatorBuilder[BollingerBands]):
    """
    Incremental Bollinger Bands over a rolling window of closes.

    Complexity: O(period) per update (running mean, two-pass variance)
    Memory: O(period)
    """

    kind = "bband"

    def __init__(self, period: int = 20, multiplier: float = 2.0, resync_interval: Optional[int] = None):
        """
        Args:
            period: Window length
            multiplier: Standard deviation multiplier (> 0)
            resync_interval: Updates between exact recomputations of the running sums
        """
        self.period = require_period("period", period)
        self.multiplier = require_positive("multiplier", multiplier)
        self.window = RollingWindow(period, resolve_resync_interval(resync_interval))
        self._last: Optional[BollingerBands] = None

    def next(self, candle: Candle) -> BollingerBands:
        price = candle.close_price
        if not is_finite(price):
            self._absorb_non_finite(candle, ["close_price"])
            return self._last or self.neutral()

        self.window.append(price)

        if not self.window.is_full():
            self._last = self._flat(price)
            return self._last

        middle = self.window.mean()
        stddev = math.sqrt(self.window.population_variance())
        upper = middle + self.multiplier * stddev
        lower = middle - self.multiplier * stddev

        if not is_finite(middle, upper, lower):
            self._last = self._flat(price)
        else:
            self._last = BollingerBands(self.period, self.multiplier, upper, middle, lower)
        return self._last

    def _flat(self, price: float) -> BollingerBands:
        return BollingerBands(self.period, self.multiplier, price, price, price)

    def neutral(self) -> BollingerBands:
        return self._flat(0.0)

    def reset(self):
        self.window.clear()
        self._last = None

    def __repr__(self):
        return f"BollingerBandsBuilder(period={self.period}, multiplier={self.multiplier})"


__all__ = ['BollingerBands', 'BollingerBandsBuilder']
