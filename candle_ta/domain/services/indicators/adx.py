"""
ADX - Average Directional Index
===============================
1. +DM = high - prev_high if it exceeds prev_low - low (and > 0), else 0
   -DM = prev_low - low if it exceeds high - prev_high (and > 0), else 0
   TR  = max(high - low, |high - prev_close|, |low - prev_close|)
2. Wilder-smooth TR, +DM and -DM over `period`
3. +DI = 100 * +DM_s / TR_s, -DI = 100 * -DM_s / TR_s
4. DX = 100 * |+DI - -DI| / (+DI + -DI)
5. ADX = Wilder average of DX over `period`

Warm-up: DI fields are 0 until `period + 1` candles, ADX is 0 until
`2 * period` candles.
"""

from dataclasses import dataclass
from typing import Optional

from ...models.candle import Candle
from .incremental_base import IndicatorBuilder, WilderSmoother, finite_or, is_finite, require_period, true_range


@dataclass(frozen=True)
class ADX:
    """ADX snapshot with directional indicators"""
    period: int
    adx: float
    plus_di: float
    minus_di: float

    def is_strong_trend(self, threshold: float = 25.0) -> bool:
        return self.adx >= threshold

    def is_very_strong_trend(self, threshold: float = 50.0) -> bool:
        return self.adx >= threshold

    def is_weak_trend(self, threshold: float = 20.0) -> bool:
        return self.adx < threshold

    def is_bullish(self) -> bool:
        """+DI above -DI"""
        return self.plus_di > self.minus_di

    def __str__(self):
        return f"ADX({self.period}: {self.adx:.2f}, +DI {self.plus_di:.2f}, -DI {self.minus_di:.2f})"


class ADXBuilder(IndicatorBuilder[ADX]):
    """Incremental ADX, O(1) per update"""

    kind = "adx"

    def __init__(self, period: int = 14):
        self.period = require_period("period", period)
        self.tr = WilderSmoother(period)
        self.plus_dm = WilderSmoother(period)
        self.minus_dm = WilderSmoother(period)
        self.dx = WilderSmoother(period)
        self.previous: Optional[tuple] = None  # (high, low, close)
        self._plus_di = 0.0
        self._minus_di = 0.0

    def next(self, candle: Candle) -> ADX:
        high, low, close = candle.high_price, candle.low_price, candle.close_price
        if not is_finite(high, low, close):
            self._absorb_non_finite(candle, ["high_price", "low_price", "close_price"])
            return self._snapshot()

        if self.previous is not None:
            prev_high, prev_low, prev_close = self.previous
            up_move = high - prev_high
            down_move = prev_low - low
            plus_dm = up_move if up_move > down_move and up_move > 0 else 0.0
            minus_dm = down_move if down_move > up_move and down_move > 0 else 0.0

            self.tr.update(true_range(high, low, prev_close))
            self.plus_dm.update(plus_dm)
            self.minus_dm.update(minus_dm)

            if self.tr.is_ready():
                self._update_directional()

        self.previous = (high, low, close)
        return self._snapshot()

    def _update_directional(self):
        tr = self.tr.value
        if tr <= 0:
            self._plus_di = 0.0
            self._minus_di = 0.0
        else:
            self._plus_di = finite_or(100.0 * self.plus_dm.value / tr, 0.0)
            self._minus_di = finite_or(100.0 * self.minus_dm.value / tr, 0.0)

        di_sum = self._plus_di + self._minus_di
        dx = 0.0 if di_sum <= 0 else 100.0 * abs(self._plus_di - self._minus_di) / di_sum
        self.dx.update(dx)

    def _snapshot(self) -> ADX:
        adx = self.dx.value if self.dx.is_ready() else 0.0
        return ADX(self.period, finite_or(adx, 0.0), self._plus_di, self._minus_di)

    def is_ready(self) -> bool:
        return self.dx.is_ready()

    def neutral(self) -> ADX:
        return ADX(self.period, 0.0, 0.0, 0.0)

    def reset(self):
        for smoother in (self.tr, self.plus_dm, self.minus_dm, self.dx):
            smoother.reset()
        self.previous = None
        self._plus_di = 0.0
        self._minus_di = 0.0

    def __repr__(self):
        return f"ADXBuilder(period={self.period})"


__all__ = ['ADX', 'ADXBuilder']
