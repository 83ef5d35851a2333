"""
SuperTrend Analyzer
===================
Trend direction, direction flips, and close price against the SuperTrend line.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ...models.candle import Candle
from ...storage.candle_store import CandleStore
from ..indicators.container import TAs
from ..indicators.factory import supertrends_builder
from ..indicators.supertrend import SuperTrend, SuperTrendParams
from .base import Analyzer, AnalyzerData


@dataclass(frozen=True)
class SuperTrendAnalyzerData(AnalyzerData):
    supertrends: TAs

    def get_supertrend(self, params: SuperTrendParams) -> SuperTrend:
        return self.supertrends.get(params)

    def is_price_above_supertrend(self, params: SuperTrendParams) -> bool:
        supertrend = self.get_supertrend(params)
        return supertrend.direction != 0 and self.close > supertrend.value

    def is_price_below_supertrend(self, params: SuperTrendParams) -> bool:
        supertrend = self.get_supertrend(params)
        return supertrend.direction != 0 and self.close < supertrend.value


class SuperTrendAnalyzer(Analyzer[SuperTrendAnalyzerData]):

    def __init__(self, params: Optional[Sequence[SuperTrendParams]] = None, storage: Optional[CandleStore] = None,
                 history_depth: Optional[int] = None):
        super().__init__(history_depth)
        self.supertrendsbuilder = supertrends_builder(params)
        if storage is not None:
            self.init_from_storage(storage)

    def next_data(self, candle: Candle) -> SuperTrendAnalyzerData:
        return SuperTrendAnalyzerData(candle, self.supertrendsbuilder.next(candle))

    def get_supertrend(self, params: SuperTrendParams) -> SuperTrend:
        return self.get_value(0, lambda data: data.get_supertrend(params))

    def is_uptrend(self, params: SuperTrendParams, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.get_supertrend(params).is_uptrend(), n, p)

    def is_downtrend(self, params: SuperTrendParams, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.get_supertrend(params).is_downtrend(), n, p)

    def is_trend_changed_to_up(self, params: SuperTrendParams, n: int = 1, m: int = 1, p: int = 0) -> bool:
        """Uptrend for n items after m items that were not in uptrend"""
        return self.is_break_through_by_satisfying(lambda data: data.get_supertrend(params).is_uptrend(), n, m, p)

    def is_trend_changed_to_down(self, params: SuperTrendParams, n: int = 1, m: int = 1, p: int = 0) -> bool:
        return self.is_break_through_by_satisfying(lambda data: data.get_supertrend(params).is_downtrend(), n, m, p)

    def is_price_above_supertrend(self, params: SuperTrendParams, n: int = 1, p: int = 0) -> bool:
        """Close above the SuperTrend line for n items (warm-up items never count)"""
        return self.is_all(lambda data: data.is_price_above_supertrend(params), n, p)

    def is_price_below_supertrend(self, params: SuperTrendParams, n: int = 1, p: int = 0) -> bool:
        return self.is_all(lambda data: data.is_price_below_supertrend(params), n, p)

    def is_price_crossing_above_supertrend(self, params: SuperTrendParams, p: int = 0) -> bool:
        """Close below the line at p + 1 and above it at p"""
        current, previous = self.get(p), self.get(p + 1)
        if current is None or previous is None:
            return False
        return previous.is_price_below_supertrend(params) and current.is_price_above_supertrend(params)

    def is_price_crossing_below_supertrend(self, params: SuperTrendParams, p: int = 0) -> bool:
        current, previous = self.get(p), self.get(p + 1)
        if current is None or previous is None:
            return False
        return previous.is_price_above_supertrend(params) and current.is_price_below_supertrend(params)


__all__ = ['SuperTrendAnalyzerData', 'SuperTrendAnalyzer']
