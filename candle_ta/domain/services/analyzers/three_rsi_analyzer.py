"""
Three-RSI Analyzer
==================
Several RSI periods read together with one moving average and one ADX:
RSI alignment around the 50 line, RSI arrangement, candle extremes
against the MA, and trend strength.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ...models.candle import Candle
from ...storage.candle_store import CandleStore
from ..indicators.adx import ADX, ADXBuilder
from ..indicators.container import TAs
from ..indicators.factory import rsis_builder
from ..indicators.moving_average import MA, MAType, create_ma_builder
from .base import Analyzer, AnalyzerData

RSI_MIDLINE = 50.0


def _rsi_value(rsi) -> float:
    return rsi.value


@dataclass(frozen=True)
class ThreeRSIAnalyzerData(AnalyzerData):
    rsis: TAs
    ma: MA
    adx: ADX

    def get_rsi(self, period: int) -> float:
        return self.rsis.get(period).value

    def is_candle_greater_than(self, candle_fn: Callable[[Candle], float],
                               value_fn: Callable[['ThreeRSIAnalyzerData'], float]) -> bool:
        return candle_fn(self.candle) > value_fn(self)

    def is_candle_less_than(self, candle_fn: Callable[[Candle], float],
                            value_fn: Callable[['ThreeRSIAnalyzerData'], float]) -> bool:
        return candle_fn(self.candle) < value_fn(self)


class ThreeRSIAnalyzer(Analyzer[ThreeRSIAnalyzerData]):
    """
    Rolling analyzer over RSIs (keyed by period, shortest first), one
    moving average and one ADX computed on the same candles.
    """

    def __init__(self, rsi_periods: Optional[Sequence[int]] = None, ma_type: MAType = MAType.SMA,
                 ma_period: int = 20, adx_period: int = 14, storage: Optional[CandleStore] = None,
                 history_depth: Optional[int] = None):
        super().__init__(history_depth)
        self.rsisbuilder = rsis_builder(rsi_periods)
        self.mabuilder = create_ma_builder(ma_type, ma_period)
        self.adxbuilder = ADXBuilder(adx_period)
        if storage is not None:
            self.init_from_storage(storage)

    def next_data(self, candle: Candle) -> ThreeRSIAnalyzerData:
        return ThreeRSIAnalyzerData(
            candle,
            self.rsisbuilder.next(candle),
            self.mabuilder.next(candle),
            self.adxbuilder.next(candle),
        )

    def is_rsi_all_less_than_50(self, n: int, p: int = 0) -> bool:
        """Every RSI below 50 for n items (bearish alignment)"""
        return self.is_all(lambda data: data.rsis.is_all(lambda rsi: rsi.value < RSI_MIDLINE), n, p)

    def is_rsi_all_greater_than_50(self, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.rsis.is_all(lambda rsi: rsi.value > RSI_MIDLINE), n, p)

    def is_rsi_regular_arrangement(self, n: int, p: int = 0) -> bool:
        """Shorter-period RSI above longer-period RSI for n items"""
        return self.is_regular_arrangement(lambda data: data.rsis, _rsi_value, n, p)

    def is_rsi_reverse_arrangement(self, n: int, p: int = 0) -> bool:
        return self.is_reverse_arrangement(lambda data: data.rsis, _rsi_value, n, p)

    def is_candle_low_below_ma(self, n: int, p: int = 0) -> bool:
        return self.is_all(
            lambda data: data.is_candle_less_than(lambda candle: candle.low_price, lambda d: d.ma.value), n, p
        )

    def is_candle_high_above_ma(self, n: int, p: int = 0) -> bool:
        return self.is_all(
            lambda data: data.is_candle_greater_than(lambda candle: candle.high_price, lambda d: d.ma.value), n, p
        )

    def is_adx_greater_than_20(self, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.adx.adx > 20.0, n, p)


__all__ = ['ThreeRSIAnalyzerData', 'ThreeRSIAnalyzer']
