"""
Bollinger Band Analyzer
=======================
Band position, band width and band breakout queries. Bands are keyed by
(period, multiplier) tuples.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ...models.candle import Candle
from ...storage.candle_store import CandleStore
from ..indicators.bollinger import BollingerBands
from ..indicators.container import TAs
from ..indicators.factory import bbands_builder
from .base import Analyzer, AnalyzerData

BandKey = Tuple[int, float]


@dataclass(frozen=True)
class BBandAnalyzerData(AnalyzerData):
    bbands: TAs

    def get_bband(self, key: BandKey) -> BollingerBands:
        return self.bbands.get(key)

    def is_below_lower_band(self, key: BandKey) -> bool:
        return self.close < self.get_bband(key).lower

    def is_above_upper_band(self, key: BandKey) -> bool:
        return self.close > self.get_bband(key).upper

    def is_above_middle_band(self, key: BandKey) -> bool:
        return self.close > self.get_bband(key).middle

    def is_below_middle_band(self, key: BandKey) -> bool:
        return self.close < self.get_bband(key).middle


class BBandAnalyzer(Analyzer[BBandAnalyzerData]):
    """Rolling analyzer over Bollinger Bands"""

    def __init__(self, params: Optional[Sequence[BandKey]] = None, storage: Optional[CandleStore] = None,
                 history_depth: Optional[int] = None):
        """
        Args:
            params: (period, multiplier) keys (default: IndicatorSettings bband_period/bband_multiplier)
            storage: Optional candle history replayed on construction
            history_depth: Items retained
        """
        super().__init__(history_depth)
        self.bbandsbuilder = bbands_builder(params)
        if storage is not None:
            self.init_from_storage(storage)

    def next_data(self, candle: Candle) -> BBandAnalyzerData:
        return BBandAnalyzerData(candle, self.bbandsbuilder.next(candle))

    def get_bband(self, key: BandKey) -> BollingerBands:
        return self.get_value(0, lambda data: data.get_bband(key))

    def is_below_lower_band(self, key: BandKey, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.is_below_lower_band(key), n, p)

    def is_above_upper_band(self, key: BandKey, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.is_above_upper_band(key), n, p)

    def is_above_middle_band(self, key: BandKey, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.is_above_middle_band(key), n, p)

    def is_below_middle_band(self, key: BandKey, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.is_below_middle_band(key), n, p)

    def is_band_width_sufficient(self, key: BandKey, min_width: float, n: int, p: int = 0) -> bool:
        """Bandwidth ((upper - lower) / middle) at least min_width for n items"""
        return self.is_all(lambda data: data.get_bband(key).bandwidth >= min_width, n, p)

    def is_band_width_sideways(self, key: BandKey, n: int, p: int = 0, threshold: float = 0.02) -> bool:
        return self.is_sideways(lambda data: data.get_bband(key).bandwidth, n, p, threshold)

    def is_middle_band_sideways(self, key: BandKey, n: int, p: int = 0, threshold: float = 0.02) -> bool:
        return self.is_sideways(lambda data: data.get_bband(key).middle, n, p, threshold)

    def is_break_through_upper_band(self, key: BandKey, n: int, m: int, p: int = 0) -> bool:
        """Close above the upper band for n items after m items that were not"""
        return self.is_break_through_by_satisfying(lambda data: data.is_above_upper_band(key), n, m, p)

    def is_break_through_lower_band(self, key: BandKey, n: int, m: int, p: int = 0) -> bool:
        """Close below the lower band for n items after m items that were not"""
        return self.is_break_through_by_satisfying(lambda data: data.is_below_lower_band(key), n, m, p)


__all__ = ['BBandAnalyzerData', 'BBandAnalyzer']
