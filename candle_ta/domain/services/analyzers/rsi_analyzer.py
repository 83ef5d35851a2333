"""
RSI Analyzer
============
Overbought/oversold, range, stability and divergence queries over RSI
computed for several periods.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ...models.candle import Candle
from ...storage.candle_store import CandleStore
from ..indicators.container import TAs
from ..indicators.factory import rsis_builder
from .base import Analyzer, AnalyzerData


@dataclass(frozen=True)
class RSIAnalyzerData(AnalyzerData):
    rsis: TAs

    def get_rsi(self, period: int) -> float:
        return self.rsis.get(period).value


class RSIAnalyzer(Analyzer[RSIAnalyzerData]):
    """Rolling analyzer over RSI for several periods"""

    def __init__(self, periods: Optional[Sequence[int]] = None, storage: Optional[CandleStore] = None,
                 history_depth: Optional[int] = None):
        super().__init__(history_depth)
        self.rsisbuilder = rsis_builder(periods)
        if storage is not None:
            self.init_from_storage(storage)

    def next_data(self, candle: Candle) -> RSIAnalyzerData:
        return RSIAnalyzerData(candle, self.rsisbuilder.next(candle))

    def get_rsi(self, period: int) -> float:
        return self.get_value(0, lambda data: data.get_rsi(period))

    def is_overbought(self, period: int, n: int, p: int = 0, threshold: float = 70.0) -> bool:
        return self.is_all(lambda data: data.get_rsi(period) >= threshold, n, p)

    def is_oversold(self, period: int, n: int, p: int = 0, threshold: float = 30.0) -> bool:
        return self.is_all(lambda data: data.get_rsi(period) <= threshold, n, p)

    def is_within_range(self, period: int, lower: float, upper: float, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: lower <= data.get_rsi(period) <= upper, n, p)

    def is_rsi_sideways(self, period: int, n: int, p: int = 0, threshold: float = 0.05) -> bool:
        return self.is_sideways(lambda data: data.get_rsi(period), n, p, threshold)

    def detect_overbought_index(self, period: int, n: int, threshold: float = 70.0, p: int = 0) -> Optional[int]:
        """Most recent index within [p, p + n) where RSI reached the overbought threshold"""
        return self.detect_buy_signal(lambda data: data.get_rsi(period), n, threshold, p)

    def detect_oversold_index(self, period: int, n: int, threshold: float = 30.0, p: int = 0) -> Optional[int]:
        """Most recent index within [p, p + n) where RSI fell to the oversold threshold"""
        return self.detect_sell_signal(lambda data: data.get_rsi(period), n, threshold, p)

    def is_oversold_escape(self, period: int, n: int, m: int, p: int = 0, threshold: float = 30.0) -> bool:
        """RSI above threshold for n items after m oversold items"""
        return self.is_break_through_by_satisfying(lambda data: data.get_rsi(period) > threshold, n, m, p)

    def is_overbought_escape(self, period: int, n: int, m: int, p: int = 0, threshold: float = 70.0) -> bool:
        return self.is_break_through_by_satisfying(lambda data: data.get_rsi(period) < threshold, n, m, p)

    def is_rsi_bullish_divergence(self, period: int, n: int, p: int = 0) -> bool:
        return self.is_bullish_divergence(lambda data: data.get_rsi(period), n, p)

    def is_rsi_bearish_divergence(self, period: int, n: int, p: int = 0) -> bool:
        return self.is_bearish_divergence(lambda data: data.get_rsi(period), n, p)


__all__ = ['RSIAnalyzerData', 'RSIAnalyzer']
