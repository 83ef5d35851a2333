"""
ATR Analyzer
============
Volatility queries over Average True Range, and ATR bands around a candle.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ...models.candle import Candle
from ...storage.candle_store import CandleStore
from ..indicators.container import TAs
from ..indicators.factory import atrs_builder
from .base import Analyzer, AnalyzerData


@dataclass(frozen=True)
class ATRAnalyzerData(AnalyzerData):
    atrs: TAs

    def get_atr(self, period: int) -> float:
        return self.atrs.get(period).value

    def get_atr_ratio(self, period: int) -> float:
        """ATR relative to close, 0.0 when close is 0"""
        if self.close == 0:
            return 0.0
        return self.get_atr(period) / self.close


class ATRAnalyzer(Analyzer[ATRAnalyzerData]):

    def __init__(self, periods: Optional[Sequence[int]] = None, storage: Optional[CandleStore] = None,
                 history_depth: Optional[int] = None):
        super().__init__(history_depth)
        self.atrsbuilder = atrs_builder(periods)
        if storage is not None:
            self.init_from_storage(storage)

    def next_data(self, candle: Candle) -> ATRAnalyzerData:
        return ATRAnalyzerData(candle, self.atrsbuilder.next(candle))

    def get_atr(self, period: int) -> float:
        return self.get_value(0, lambda data: data.get_atr(period))

    def is_atr_expanding(self, period: int, n: int, p: int = 0) -> bool:
        return self.is_increasing(lambda data: data.get_atr(period), n, p)

    def is_atr_contracting(self, period: int, n: int, p: int = 0) -> bool:
        return self.is_decreasing(lambda data: data.get_atr(period), n, p)

    def is_high_volatility(self, period: int, threshold: float, n: int, p: int = 0) -> bool:
        """ATR / close at least threshold for n items"""
        return self.is_all(lambda data: data.get_atr_ratio(period) >= threshold, n, p)

    def _latest_atr(self, period: int) -> float:
        latest = self.get(0)
        return latest.get_atr(period) if latest is not None else 0.0

    def calculate_upper_band(self, candle: Candle, period: int, multiplier: float) -> float:
        """Candle midpoint (high + low) / 2 plus multiplier x the newest ATR (0 with no history)"""
        return (candle.high_price + candle.low_price) / 2.0 + self._latest_atr(period) * multiplier

    def calculate_lower_band(self, candle: Candle, period: int, multiplier: float) -> float:
        return (candle.high_price + candle.low_price) / 2.0 - self._latest_atr(period) * multiplier


__all__ = ['ATRAnalyzerData', 'ATRAnalyzer']
