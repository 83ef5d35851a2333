"""
VWAP Analyzer
=============
Price position relative to one or more VWAPs, VWAP breakouts/breakdowns,
rebounds off VWAP and price-to-VWAP divergence/convergence.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ...models.candle import Candle
from ...storage.candle_store import CandleStore
from ..indicators.container import TAs
from ..indicators.factory import vwaps_builder
from .base import Analyzer, AnalyzerData


@dataclass(frozen=True)
class VWAPAnalyzerData(AnalyzerData):
    vwaps: TAs

    def get_vwap(self, period: int) -> float:
        return self.vwaps.get(period).value

    def is_above_all_vwaps(self) -> bool:
        return self.vwaps.is_all(lambda vwap: vwap.is_price_above(self.close))

    def is_below_all_vwaps(self) -> bool:
        return self.vwaps.is_all(lambda vwap: vwap.is_price_below(self.close))

    def distance_percent(self, period: int) -> float:
        """Absolute close-to-VWAP distance in percent"""
        return abs(self.vwaps.get(period).price_to_vwap_percent(self.close))


class VWAPAnalyzer(Analyzer[VWAPAnalyzerData]):
    """Rolling analyzer over VWAP for several windows (0 = unbounded)"""

    def __init__(self, periods: Sequence[int] = (0,), storage: Optional[CandleStore] = None,
                 history_depth: Optional[int] = None):
        super().__init__(history_depth)
        self.vwapsbuilder = vwaps_builder(periods)
        if storage is not None:
            self.init_from_storage(storage)

    def next_data(self, candle: Candle) -> VWAPAnalyzerData:
        return VWAPAnalyzerData(candle, self.vwapsbuilder.next(candle))

    def get_vwap(self, period: int = 0) -> float:
        return self.get_value(0, lambda data: data.get_vwap(period))

    def is_above_all_vwaps(self, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.is_above_all_vwaps(), n, p)

    def is_below_all_vwaps(self, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.is_below_all_vwaps(), n, p)

    def is_vwap_breakout(self, n: int, m: int, p: int = 0) -> bool:
        """Close above every VWAP for n items after m items where it was not"""
        return self.is_break_through_by_satisfying(lambda data: data.is_above_all_vwaps(), n, m, p)

    def is_vwap_breakdown(self, n: int, m: int, p: int = 0) -> bool:
        return self.is_break_through_by_satisfying(lambda data: data.is_below_all_vwaps(), n, m, p)

    def is_vwap_rebound(self, period: int = 0, threshold: float = 0.5) -> bool:
        """
        Previous close touched VWAP (within threshold percent) and the latest
        close moved back above it and above the previous close.
        """
        current, previous = self.get(0), self.get(1)
        if current is None or previous is None:
            return False
        touched = previous.distance_percent(period) <= threshold
        return touched and current.close > current.get_vwap(period) and current.close > previous.close

    def is_vwap_diverging(self, period: int, n: int, p: int = 0) -> bool:
        """Close-to-VWAP distance grew on each of the last n steps"""
        return self.is_increasing(lambda data: data.distance_percent(period), n, p)

    def is_vwap_converging(self, period: int, n: int, p: int = 0) -> bool:
        return self.is_decreasing(lambda data: data.distance_percent(period), n, p)


__all__ = ['VWAPAnalyzerData', 'VWAPAnalyzer']
