"""
Volume Ratio
============
average_volume = mean(volume over the last `period` candles, current included)
volume_ratio   = current_volume / average_volume   (1.0 when the average is 0)
"""

from dataclasses import dataclass
from typing import Optional

from ...models.candle import Candle
from .incremental_base import IndicatorBuilder, RollingWindow, is_finite, require_period, resolve_resync_interval


@dataclass(frozen=True)
class Volume:
    period: int
    average_volume: float
    current_volume: float
    volume_ratio: float

    def is_above_average(self, ratio: float = 1.0) -> bool:
        return self.volume_ratio > ratio


class VolumeBuilder(IndicatorBuilder[Volume]):
    """Incremental volume average and ratio, O(1) per update"""

    kind = "volume"

    def __init__(self, period: int = 20, resync_interval: Optional[int] = None):
        self.period = require_period("period", period)
        self.window = RollingWindow(period, resolve_resync_interval(resync_interval))

    def next(self, candle: Candle) -> Volume:
        volume = candle.volume
        if not is_finite(volume):
            self._absorb_non_finite(candle, ["volume"])
            volume = 0.0

        self.window.append(volume)
        average = self.window.mean()
        ratio = volume / average if average > 0 else 1.0
        return Volume(self.period, average, volume, ratio if is_finite(ratio) else 1.0)

    def neutral(self) -> Volume:
        return Volume(self.period, 0.0, 0.0, 1.0)

    def reset(self):
        self.window.clear()

    def __repr__(self):
        return f"VolumeBuilder(period={self.period})"


__all__ = ['Volume', 'VolumeBuilder']
