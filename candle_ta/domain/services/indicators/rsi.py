"""
RSI - Relative Strength Index
=============================
Incremental RSI with Wilder's smoothing.

Formula:
1. change = close(t) - close(t-1); gain = max(change, 0), loss = max(-change, 0)
2. avg = (avg * (period - 1) + x) / period   (seeded by the running mean)
3. RSI = 100 - 100 / (1 + avg_gain / avg_loss)

Warm-up: 50.0 (neutral) until `period` candles have been seen.
Zero average loss: 100.0.
"""

from dataclasses import dataclass
from typing import Optional

from ...models.candle import Candle
from .incremental_base import IndicatorBuilder, WilderSmoother, is_finite, require_period

NEUTRAL_RSI = 50.0
_ZERO_LOSS_EPSILON = 1e-12


@dataclass(frozen=True)
class RSI:
    """RSI snapshot (0-100)"""
    period: int
    value: float

    def is_overbought(self, threshold: float = 70.0) -> bool:
        return self.value >= threshold

    def is_oversold(self, threshold: float = 30.0) -> bool:
        return self.value <= threshold

    def is_within_range(self, lower: float, upper: float) -> bool:
        return lower <= self.value <= upper

    def __str__(self):
        return f"RSI({self.period}: {self.value:.2f})"


class RSIBuilder(IndicatorBuilder[RSI]):
    """
    Incremental RSI.

    Complexity: O(1) per update
    Memory: O(1) - previous close and two smoothed averages
    """

    kind = "rsi"

    def __init__(self, period: int = 14):
        """
        Args:
            period: RSI period (default: 14)
        """
        self.period = require_period("period", period)
        self.avg_gain = WilderSmoother(period)
        self.avg_loss = WilderSmoother(period)
        self.previous_close: Optional[float] = None
        self.candles_seen = 0

    def next(self, candle: Candle) -> RSI:
        price = candle.close_price
        if not is_finite(price):
            self._absorb_non_finite(candle, ["close_price"])
            return RSI(self.period, self._current())

        if self.previous_close is not None:
            change = price - self.previous_close
            self.avg_gain.update(max(change, 0.0))
            self.avg_loss.update(max(-change, 0.0))

        self.previous_close = price
        self.candles_seen += 1
        return RSI(self.period, self._current())

    def _current(self) -> float:
        if self.candles_seen < self.period or self.avg_gain.count == 0:
            return NEUTRAL_RSI

        if self.avg_loss.value < _ZERO_LOSS_EPSILON:
            return 100.0

        rs = self.avg_gain.value / self.avg_loss.value
        rsi = 100.0 - 100.0 / (1.0 + rs)
        if not is_finite(rsi):
            return NEUTRAL_RSI
        return min(max(rsi, 0.0), 100.0)

    def is_ready(self) -> bool:
        return self.candles_seen >= self.period

    def neutral(self) -> RSI:
        return RSI(self.period, NEUTRAL_RSI)

    def reset(self):
        self.avg_gain.reset()
        self.avg_loss.reset()
        self.previous_close = None
        self.candles_seen = 0

    def __repr__(self):
        return f"RSIBuilder(period={self.period})"


__all__ = ['RSI', 'RSIBuilder', 'NEUTRAL_RSI']
