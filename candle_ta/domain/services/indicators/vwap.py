"""
VWAP - Volume-Weighted Average Price
====================================
VWAP = Σ(typical_price * volume) / Σ(volume) over the last `period` candles.

- period == 0 means "all data", capped at a safety ceiling
  (IndicatorSettings.vwap_max_window, default 500) to bound memory
- While period > 0 and fewer than `period` candles were seen, the
  current typical price is returned
- Σ(volume) == 0 -> 0.0
- Non-finite typical price: candle skipped; non-finite volume: treated as 0
"""

from dataclasses import dataclass
from typing import Optional

from ....core.logger import get_logger
from ....infrastructure.config.settings import get_indicator_settings
from ...models.candle import Candle
from .incremental_base import (
    IndicatorBuilder,
    RollingWindow,
    is_finite,
    require_period,
    resolve_resync_interval,
)

logger = get_logger(__name__)

_VOLUME_EPSILON = 1e-12


@dataclass(frozen=True)
class VWAP:
    """VWAP snapshot"""
    period: int
    value: float

    def is_price_above(self, price: float) -> bool:
        return price > self.value

    def is_price_below(self, price: float) -> bool:
        return price < self.value

    def price_to_vwap_percent(self, price: float) -> float:
        """Distance of price from VWAP in percent, 0.0 when VWAP is 0"""
        if self.value == 0.0:
            return 0.0
        return (price - self.value) / self.value * 100.0

    def __str__(self):
        label = self.period if self.period > 0 else "all"
        return f"VWAP({label}: {self.value:.4f})"


class VWAPBuilder(IndicatorBuilder[VWAP]):
    """
    Incremental rolling VWAP.

    Complexity: O(1) per update - evicted (pv, v) pair is subtracted
    Memory: O(period) or O(max_window) for unbounded VWAP
    """

    kind = "vwap"

    def __init__(self, period: int = 0, max_window: Optional[int] = None, resync_interval: Optional[int] = None):
        """
        Args:
            period: Window length in candles (0 = unbounded)
            max_window: Safety ceiling for the unbounded window
            resync_interval: Updates between exact recomputations of the running sums
        """
        self.period = require_period("period", period, minimum=0)
        if max_window is None:
            max_window = get_indicator_settings().vwap_max_window
        self.max_window = require_period("max_window", max_window)

        window = period if period > 0 else self.max_window
        interval = resolve_resync_interval(resync_interval)
        self.pv_window = RollingWindow(window, interval)
        self.volume_window = RollingWindow(window, interval)
        self._capped_logged = False
        self._last: Optional[VWAP] = None

    def next(self, candle: Candle) -> VWAP:
        typical = candle.typical_price
        if not is_finite(typical):
            self._absorb_non_finite(candle, ["high_price", "low_price", "close_price"])
            return self._last or self.neutral()

        volume = candle.volume
        if not is_finite(volume):
            self._absorb_non_finite(candle, ["volume"])
            volume = 0.0

        if self.period == 0 and self.volume_window.is_full() and not self._capped_logged:
            self._capped_logged = True
            logger.info("vwap.window_capped", {"max_window": self.max_window})

        self.pv_window.append(typical * volume)
        self.volume_window.append(volume)

        self._last = VWAP(self.period, self._compute(typical))
        return self._last

    def _compute(self, typical: float) -> float:
        if self.period > 0 and len(self.volume_window) < self.period:
            return typical

        volume_sum = self.volume_window.total
        if abs(volume_sum) < _VOLUME_EPSILON:
            # Running sum may carry residue from evicted volumes
            self.pv_window.resync()
            self.volume_window.resync()
            volume_sum = self.volume_window.total
            if abs(volume_sum) < _VOLUME_EPSILON:
                return 0.0

        value = self.pv_window.total / volume_sum
        return value if is_finite(value) else 0.0

    def neutral(self) -> VWAP:
        return VWAP(self.period, 0.0)

    def reset(self):
        self.pv_window.clear()
        self.volume_window.clear()
        self._capped_logged = False
        self._last = None

    def __repr__(self):
        return f"VWAPBuilder(period={self.period})"


__all__ = ['VWAP', 'VWAPBuilder']
