"""
Moving Average Analyzer
=======================
MA arrangement (bullish/bearish stacking), golden/dead cross and MA
crossing queries over a set of moving averages keyed by ascending period.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ...models.candle import Candle
from ...storage.candle_store import CandleStore
from ..indicators.container import TAs
from ..indicators.factory import mas_builder
from ..indicators.moving_average import MA, MAType
from .base import Analyzer, AnalyzerData


@dataclass(frozen=True)
class MAAnalyzerData(AnalyzerData):
    mas: TAs

    def get_ma(self, index: int) -> float:
        """MA value by period position (0 = shortest period)"""
        return self.mas.get_by_key_index(index).value

    def is_ma_regular_arrangement(self) -> bool:
        """Short MA above long MA for every adjacent pair"""
        return self.is_regular_arrangement(lambda data: data.mas, _ma_value)

    def is_ma_reverse_arrangement(self) -> bool:
        return self.is_reverse_arrangement(lambda data: data.mas, _ma_value)


def _ma_value(ma: MA) -> float:
    return ma.value


class MAAnalyzer(Analyzer[MAAnalyzerData]):
    """Rolling analyzer over one MA type for several periods"""

    def __init__(self, ma_type: MAType = MAType.SMA, periods: Optional[Sequence[int]] = None,
                 storage: Optional[CandleStore] = None, history_depth: Optional[int] = None):
        """
        Args:
            ma_type: SMA, EMA or WMA
            periods: Strictly ascending periods (default: IndicatorSettings.ma_periods)
            storage: Optional candle history replayed on construction
            history_depth: Items retained (default: AnalyzerSettings.history_depth)
        """
        super().__init__(history_depth)
        self.masbuilder = mas_builder(ma_type, periods)
        if storage is not None:
            self.init_from_storage(storage)

    def next_data(self, candle: Candle) -> MAAnalyzerData:
        return MAAnalyzerData(candle, self.masbuilder.next(candle))

    def is_ma_regular_arrangement(self, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.is_ma_regular_arrangement(), n, p)

    def is_ma_reverse_arrangement(self, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.is_ma_reverse_arrangement(), n, p)

    def is_ma_regular_arrangement_golden_cross(self, n: int, m: int, p: int = 0) -> bool:
        """Regular arrangement for the last n items, not for the m items before"""
        return self.is_break_through_by_satisfying(lambda data: data.is_ma_regular_arrangement(), n, m, p)

    def is_ma_reverse_arrangement_dead_cross(self, n: int, m: int, p: int = 0) -> bool:
        return self.is_break_through_by_satisfying(lambda data: data.is_ma_reverse_arrangement(), n, m, p)

    def get_ma(self, index: int) -> float:
        """Latest MA value by period position"""
        return self.get_value(0, lambda data: data.get_ma(index))

    def is_ma_crossed(self, short_index: int, long_index: int) -> bool:
        """Short and long MA swapped sides between the previous and the latest item"""
        current, previous = self.get(0), self.get(1)
        if current is None or previous is None:
            return False

        current_diff = current.get_ma(short_index) - current.get_ma(long_index)
        previous_diff = previous.get_ma(short_index) - previous.get_ma(long_index)
        return (current_diff > 0 >= previous_diff) or (current_diff < 0 <= previous_diff)

    def is_ma_greater_than_rate_of_return(self, index: int, rate_of_return: float, n: int, p: int = 0) -> bool:
        """(close - MA) / MA above rate_of_return for n items"""
        return self.is_all(
            lambda data: data.get_rate_of_return(lambda d: d.get_ma(index)) > rate_of_return, n, p
        )

    def is_ma_less_than_rate_of_return(self, index: int, rate_of_return: float, n: int, p: int = 0) -> bool:
        return self.is_all(
            lambda data: data.get_rate_of_return(lambda d: d.get_ma(index)) < rate_of_return, n, p
        )


__all__ = ['MAAnalyzerData', 'MAAnalyzer']
