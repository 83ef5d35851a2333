"""
Volume Analyzer
===============
Volume ratio thresholds, rising volume and volume-confirmed breakouts.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ...models.candle import Candle
from ...storage.candle_store import CandleStore
from ..indicators.container import TAs
from ..indicators.factory import volumes_builder
from ..indicators.volume import Volume
from .base import Analyzer, AnalyzerData


@dataclass(frozen=True)
class VolumeAnalyzerData(AnalyzerData):
    volumes: TAs

    def get_volume(self, period: int) -> Volume:
        return self.volumes.get(period)


class VolumeAnalyzer(Analyzer[VolumeAnalyzerData]):
    """Rolling analyzer over average volume for several periods"""

    def __init__(self, periods: Optional[Sequence[int]] = None, storage: Optional[CandleStore] = None,
                 history_depth: Optional[int] = None):
        super().__init__(history_depth)
        self.volumesbuilder = volumes_builder(periods)
        if storage is not None:
            self.init_from_storage(storage)

    def next_data(self, candle: Candle) -> VolumeAnalyzerData:
        return VolumeAnalyzerData(candle, self.volumesbuilder.next(candle))

    def get_volume_ratio(self, period: int) -> float:
        return self.get_value(0, lambda data: data.get_volume(period).volume_ratio)

    def is_volume_ratio_above(self, period: int, ratio: float, n: int, p: int = 0) -> bool:
        return self.is_all(lambda data: data.get_volume(period).is_above_average(ratio), n, p)

    def is_volume_increasing(self, n: int, p: int = 0) -> bool:
        """Candle volume rose on each of the last n steps"""
        return self.is_increasing(lambda data: data.candle.volume, n, p)

    def is_volume_surge_breakthrough(self, period: int, ratio: float, n: int, m: int, p: int = 0) -> bool:
        """Volume ratio above `ratio` for n items after m quieter items"""
        return self.is_break_through_by_satisfying(
            lambda data: data.get_volume(period).is_above_average(ratio), n, m, p
        )

    def is_volume_ratio_sideways(self, period: int, n: int, p: int = 0, threshold: float = 0.1) -> bool:
        return self.is_sideways(lambda data: data.get_volume(period).volume_ratio, n, p, threshold)


__all__ = ['VolumeAnalyzerData', 'VolumeAnalyzer']
