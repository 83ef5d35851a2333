"""
ADX Analyzer
============
Trend strength queries: strong/weak trend, strengthening, weakening,
reversal of trend strength and directional-indicator crosses.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ...models.candle import Candle
from ...storage.candle_store import CandleStore
from ..indicators.adx import ADX
from ..indicators.container import TAs
from ..indicators.factory import adxs_builder
from .base import Analyzer, AnalyzerData


@dataclass(frozen=True)
class ADXAnalyzerData(AnalyzerData):
    adxs: TAs

    def get_adx(self, period: int) -> ADX:
        return self.adxs.get(period)

    def is_all_adx_strong_trend(self, threshold: float = 25.0) -> bool:
        return self.adxs.is_all(lambda adx: adx.is_strong_trend(threshold))

    def is_all_adx_weak_trend(self, threshold: float = 20.0) -> bool:
        return self.adxs.is_all(lambda adx: adx.is_weak_trend(threshold))


class ADXAnalyzer(Analyzer[ADXAnalyzerData]):
    """Rolling analyzer over ADX for several periods"""

    def __init__(self, periods: Optional[Sequence[int]] = None, storage: Optional[CandleStore] = None,
                 history_depth: Optional[int] = None):
        super().__init__(history_depth)
        self.adxsbuilder = adxs_builder(periods)
        if storage is not None:
            self.init_from_storage(storage)

    def next_data(self, candle: Candle) -> ADXAnalyzerData:
        return ADXAnalyzerData(candle, self.adxsbuilder.next(candle))

    def get_adx(self, period: int) -> float:
        return self.get_value(0, lambda data: data.get_adx(period).adx)

    def is_strong_trend(self, n: int, p: int = 0, threshold: float = 25.0) -> bool:
        """Every configured period shows ADX >= threshold for n items"""
        return self.is_all(lambda data: data.is_all_adx_strong_trend(threshold), n, p)

    def is_very_strong_trend(self, n: int, p: int = 0, threshold: float = 50.0) -> bool:
        return self.is_all(lambda data: data.is_all_adx_strong_trend(threshold), n, p)

    def is_weak_trend(self, n: int, p: int = 0, threshold: float = 20.0) -> bool:
        return self.is_all(lambda data: data.is_all_adx_weak_trend(threshold), n, p)

    def is_trend_strengthening(self, period: int, n: int, p: int = 0) -> bool:
        """ADX rose on each of the last n steps"""
        return self.is_increasing(lambda data: data.get_adx(period).adx, n, p)

    def is_trend_weakening(self, period: int, n: int, p: int = 0) -> bool:
        return self.is_decreasing(lambda data: data.get_adx(period).adx, n, p)

    def is_trend_reversal(self, period: int, n: int, m: int) -> bool:
        """ADX rising over the last n steps after falling over the m steps before"""
        value_fn = lambda data: data.get_adx(period).adx  # noqa: E731
        return self.is_increasing(value_fn, n) and self.is_decreasing(value_fn, m, p=n)

    def is_adx_sideways(self, period: int, n: int, p: int = 0, threshold: float = 0.05) -> bool:
        return self.is_sideways(lambda data: data.get_adx(period).adx, n, p, threshold)

    def is_di_golden_cross(self, period: int, n: int, m: int, p: int = 0) -> bool:
        """+DI above -DI for n items after m items where it was not"""
        return self.is_break_through_by_satisfying(lambda data: data.get_adx(period).is_bullish(), n, m, p)

    def is_di_dead_cross(self, period: int, n: int, m: int, p: int = 0) -> bool:
        return self.is_break_through_by_satisfying(
            lambda data: data.get_adx(period).minus_di > data.get_adx(period).plus_di, n, m, p
        )


__all__ = ['ADXAnalyzerData', 'ADXAnalyzer']
