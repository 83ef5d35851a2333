"""
MACD Analyzer
=============
Histogram thresholds, MACD/signal crosses and histogram momentum.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ...models.candle import Candle
from ...storage.candle_store import CandleStore
from ..indicators.container import TAs
from ..indicators.factory import macds_builder
from ..indicators.macd import MACD, MACDParams
from .base import Analyzer, AnalyzerData


@dataclass(frozen=True)
class MACDAnalyzerData(AnalyzerData):
    macds: TAs

    def get_macd(self, params: MACDParams) -> MACD:
        return self.macds.get(params)


class MACDAnalyzer(Analyzer[MACDAnalyzerData]):
    """Rolling analyzer over MACD for several parameter sets"""

    def __init__(self, params: Optional[Sequence[MACDParams]] = None, storage: Optional[CandleStore] = None,
                 history_depth: Optional[int] = None):
        super().__init__(history_depth)
        self.macdsbuilder = macds_builder(params)
        if storage is not None:
            self.init_from_storage(storage)

    def next_data(self, candle: Candle) -> MACDAnalyzerData:
        return MACDAnalyzerData(candle, self.macdsbuilder.next(candle))

    def get_macd(self, params: MACDParams) -> MACD:
        return self.get_value(0, lambda data: data.get_macd(params))

    def is_histogram_above(self, params: MACDParams, threshold: float, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.get_macd(params).histogram > threshold, n, p)

    def is_histogram_below(self, params: MACDParams, threshold: float, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.get_macd(params).histogram < threshold, n, p)

    def is_macd_golden_cross(self, params: MACDParams, n: int, m: int, p: int = 0) -> bool:
        """MACD above signal for n items after m items where it was not"""
        return self.is_break_through_by_satisfying(lambda data: data.get_macd(params).is_bullish(), n, m, p)

    def is_macd_dead_cross(self, params: MACDParams, n: int, m: int, p: int = 0) -> bool:
        return self.is_break_through_by_satisfying(
            lambda data: data.get_macd(params).macd < data.get_macd(params).signal, n, m, p
        )

    def is_histogram_increasing(self, params: MACDParams, n: int, p: int = 0) -> bool:
        return self.is_increasing(lambda data: data.get_macd(params).histogram, n, p)

    def is_histogram_decreasing(self, params: MACDParams, n: int, p: int = 0) -> bool:
        return self.is_decreasing(lambda data: data.get_macd(params).histogram, n, p)


__all__ = ['MACDAnalyzerData', 'MACDAnalyzer']
