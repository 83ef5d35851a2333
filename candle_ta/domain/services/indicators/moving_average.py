"""
Moving Averages
===============
SMA, EMA and WMA builders over closing prices, plus the factory that
creates one builder per period for MA arrangement analysis.

Warm-up behavior:
- SMA/WMA average whatever closes are available (fewer than `period`)
- EMA is seeded with the first close
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ....core.exceptions import ConfigurationError
from ....core.logger import get_logger
from ...models.candle import Candle
from .container import TAsBuilder
from .incremental_base import (
    IndicatorBuilder,
    RollingWindow,
    ExponentialSmoother,
    is_finite,
    require_period,
    resolve_resync_interval,
)

logger = get_logger(__name__)


class MAType(str, Enum):
    """Moving average flavor"""
    SMA = "sma"
    EMA = "ema"
    WMA = "wma"


@dataclass(frozen=True)
class MA:
    """Moving average snapshot"""
    ma_type: MAType
    period: int
    value: float

    def get(self) -> float:
        return self.value

    def __str__(self):
        return f"{self.ma_type.value.upper()}({self.period}: {self.value})"


# ============================================================================
# SMA - Simple Moving Average
# ============================================================================

class SMABuilder(IndicatorBuilder[MA]):
    """
    Incremental SMA using a rolling window with running sum.

    Complexity: O(1) per update
    Memory: O(period)
    """

    kind = "sma"

    def __init__(self, period: int, resync_interval: Optional[int] = None):
        self.period = require_period("period", period)
        self.window = RollingWindow(period, resolve_resync_interval(resync_interval))
        self._last: Optional[MA] = None

    def next(self, candle: Candle) -> MA:
        price = candle.close_price
        if not is_finite(price):
            self._absorb_non_finite(candle, ["close_price"])
            return self._last or self.neutral()

        self.window.append(price)
        self._last = MA(MAType.SMA, self.period, self.window.mean())
        return self._last

    def neutral(self) -> MA:
        return MA(MAType.SMA, self.period, 0.0)

    def reset(self):
        self.window.clear()
        self._last = None

    def __repr__(self):
        return f"SMABuilder(period={self.period})"


# ============================================================================
# EMA - Exponential Moving Average
# ============================================================================

class EMABuilder(IndicatorBuilder[MA]):
    """
    Incremental EMA.

    Formula: EMA(t) = α * Close(t) + (1 - α) * EMA(t-1), α = 2 / (period + 1)

    Complexity: O(1) per update
    Memory: O(1)
    """

    kind = "ema"

    def __init__(self, period: int):
        self.period = require_period("period", period)
        self.smoother = ExponentialSmoother(period, seed="first")

    def next(self, candle: Candle) -> MA:
        price = candle.close_price
        if not is_finite(price):
            self._absorb_non_finite(candle, ["close_price"])
            if self.smoother.value is None:
                return self.neutral()
            return MA(MAType.EMA, self.period, self.smoother.value)

        return MA(MAType.EMA, self.period, self.smoother.update(price))

    def neutral(self) -> MA:
        return MA(MAType.EMA, self.period, 0.0)

    def reset(self):
        self.smoother.reset()

    def __repr__(self):
        return f"EMABuilder(period={self.period})"


# ============================================================================
# WMA - Linearly Weighted Moving Average
# ============================================================================

class WMABuilder(IndicatorBuilder[MA]):
    """
    Incremental WMA with weights 1..n (newest close weighs n).

    Maintains the weighted numerator alongside the plain window sum:
    when the window is full, numerator' = numerator + n * x - sum_before.
    """

    kind = "wma"

    def __init__(self, period: int, resync_interval: Optional[int] = None):
        self.period = require_period("period", period)
        self.window = RollingWindow(period, resolve_resync_interval(resync_interval))
        self._numerator = 0.0
        self._updates = 0
        self._last: Optional[MA] = None

    def next(self, candle: Candle) -> MA:
        price = candle.close_price
        if not is_finite(price):
            self._absorb_non_finite(candle, ["close_price"])
            return self._last or self.neutral()

        sum_before = self.window.total
        if self.window.is_full():
            self.window.append(price)
            self._numerator += self.period * price - sum_before
        else:
            self.window.append(price)
            self._numerator += len(self.window) * price

        self._updates += 1
        if self._updates % self.window.resync_interval == 0:
            self._resync()

        n = len(self.window)
        value = self._numerator / (n * (n + 1) / 2.0)
        self._last = MA(MAType.WMA, self.period, value)
        return self._last

    def _resync(self):
        self._numerator = sum((i + 1) * v for i, v in enumerate(self.window))

    def neutral(self) -> MA:
        return MA(MAType.WMA, self.period, 0.0)

    def reset(self):
        self.window.clear()
        self._numerator = 0.0
        self._updates = 0
        self._last = None

    def __repr__(self):
        return f"WMABuilder(period={self.period})"


# ============================================================================
# FACTORY
# ============================================================================

def create_ma_builder(ma_type: MAType, period: int) -> IndicatorBuilder[MA]:
    """Create one moving-average builder"""
    ma_type = MAType(ma_type)
    if ma_type == MAType.SMA:
        return SMABuilder(period)
    elif ma_type == MAType.EMA:
        return EMABuilder(period)
    return WMABuilder(period)


class MAsBuilderFactory:
    """Builds a TAsBuilder of moving averages keyed by period"""

    @staticmethod
    def build(ma_type: MAType, periods: Sequence[int]):
        """
        Args:
            ma_type: SMA, EMA or WMA
            periods: Non-empty, strictly ascending periods (shortest first)

        Returns:
            TAsBuilder[int, MA] named after the MA type

        Raises:
            ConfigurationError: If periods are empty or not strictly ascending
        """
        periods = list(periods)
        if not periods:
            logger.error("ma.invalid_periods", {"periods": periods})
            raise ConfigurationError("periods", periods, "at least one period is required")
        if any(later <= earlier for earlier, later in zip(periods, periods[1:])):
            logger.error("ma.invalid_periods", {"periods": periods})
            raise ConfigurationError("periods", periods, "periods must be strictly ascending")

        ma_type = MAType(ma_type)
        return TAsBuilder(ma_type.value, periods, lambda period: create_ma_builder(ma_type, period))


__all__ = [
    'MAType',
    'MA',
    'SMABuilder',
    'EMABuilder',
    'WMABuilder',
    'create_ma_builder',
    'MAsBuilderFactory',
]
