"""
Ichimoku Analyzer
=================
Cloud position, Tenkan/Kijun crosses and cloud colour.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ...models.candle import Candle
from ...storage.candle_store import CandleStore
from ..indicators.container import TAs
from ..indicators.factory import ichimokus_builder
from ..indicators.ichimoku import Ichimoku, IchimokuParams
from .base import Analyzer, AnalyzerData


@dataclass(frozen=True)
class IchimokuAnalyzerData(AnalyzerData):
    ichimokus: TAs

    def get_ichimoku(self, params: IchimokuParams) -> Ichimoku:
        return self.ichimokus.get(params)


class IchimokuAnalyzer(Analyzer[IchimokuAnalyzerData]):

    def __init__(self, params: Optional[Sequence[IchimokuParams]] = None, storage: Optional[CandleStore] = None,
                 history_depth: Optional[int] = None):
        super().__init__(history_depth)
        self.ichimokusbuilder = ichimokus_builder(params)
        if storage is not None:
            self.init_from_storage(storage)

    def next_data(self, candle: Candle) -> IchimokuAnalyzerData:
        return IchimokuAnalyzerData(candle, self.ichimokusbuilder.next(candle))

    def get_ichimoku(self, params: IchimokuParams) -> Ichimoku:
        return self.get_value(0, lambda data: data.get_ichimoku(params))

    def is_price_above_cloud(self, params: IchimokuParams, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.get_ichimoku(params).is_price_above_cloud(data.close), n, p)

    def is_price_below_cloud(self, params: IchimokuParams, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.get_ichimoku(params).is_price_below_cloud(data.close), n, p)

    def is_price_in_cloud(self, params: IchimokuParams, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.get_ichimoku(params).is_price_in_cloud(data.close), n, p)

    def is_tenkan_kijun_golden_cross(self, params: IchimokuParams, n: int, m: int, p: int = 0) -> bool:
        """Tenkan above Kijun for n items after m items where it was not"""
        return self.is_break_through_by_satisfying(
            lambda data: data.get_ichimoku(params).is_tenkan_above_kijun(), n, m, p
        )

    def is_tenkan_kijun_dead_cross(self, params: IchimokuParams, n: int, m: int, p: int = 0) -> bool:
        return self.is_break_through_by_satisfying(
            lambda data: data.get_ichimoku(params).tenkan < data.get_ichimoku(params).kijun, n, m, p
        )

    def is_bullish_cloud(self, params: IchimokuParams, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.get_ichimoku(params).is_bullish_cloud(), n, p)


__all__ = ['IchimokuAnalyzerData', 'IchimokuAnalyzer']
