"""
Ichimoku Kinko Hyo
==================
tenkan   = (highest high + lowest low) / 2 over tenkan_period
kijun    = (highest high + lowest low) / 2 over kijun_period
span A   = (tenkan + kijun) / 2
span B   = (highest high + lowest low) / 2 over senkou_period
chikou   = current close

Values are reported at the time of computation (no forward/backward
displacement). Until `senkou_period` candles have been seen every field
equals the current close.
"""

from dataclasses import dataclass
from typing import Optional

from ....core.exceptions import ConfigurationError
from ....core.logger import get_logger
from ...models.candle import Candle
from .incremental_base import IndicatorBuilder, RollingExtremum, is_finite, require_period

logger = get_logger(__name__)


@dataclass(frozen=True)
class IchimokuParams:
    tenkan_period: int = 9
    kijun_period: int = 26
    senkou_period: int = 52

    def __str__(self):
        return f"{self.tenkan_period}/{self.kijun_period}/{self.senkou_period}"


@dataclass(frozen=True)
class Ichimoku:
    """Ichimoku snapshot"""
    tenkan: float
    kijun: float
    senkou_span_a: float
    senkou_span_b: float
    chikou: float

    @property
    def cloud_top(self) -> float:
        return max(self.senkou_span_a, self.senkou_span_b)

    @property
    def cloud_bottom(self) -> float:
        return min(self.senkou_span_a, self.senkou_span_b)

    @property
    def cloud_thickness(self) -> float:
        return abs(self.senkou_span_a - self.senkou_span_b)

    def is_price_above_cloud(self, price: float) -> bool:
        return price > self.cloud_top

    def is_price_below_cloud(self, price: float) -> bool:
        return price < self.cloud_bottom

    def is_price_in_cloud(self, price: float) -> bool:
        return self.cloud_bottom <= price <= self.cloud_top

    def is_tenkan_above_kijun(self) -> bool:
        return self.tenkan > self.kijun

    def is_bullish_cloud(self) -> bool:
        """Span A above span B"""
        return self.senkou_span_a > self.senkou_span_b


class _Donchian:
    """Rolling (highest high + lowest low) / 2"""

    def __init__(self, period: int):
        self.highs = RollingExtremum(period, "max")
        self.lows = RollingExtremum(period, "min")

    def update(self, high: float, low: float) -> float:
        return (self.highs.append(high) + self.lows.append(low)) / 2.0

    def clear(self):
        self.highs.clear()
        self.lows.clear()


class IchimokuBuilder(IndicatorBuilder[Ichimoku]):
    """Incremental Ichimoku, amortized O(1) per update"""

    kind = "ichimoku"

    def __init__(self, tenkan_period: int = 9, kijun_period: int = 26, senkou_period: int = 52):
        require_period("tenkan_period", tenkan_period)
        require_period("kijun_period", kijun_period)
        require_period("senkou_period", senkou_period)
        if not tenkan_period < kijun_period < senkou_period:
            logger.error("ichimoku.invalid_periods", {
                "tenkan_period": tenkan_period,
                "kijun_period": kijun_period,
                "senkou_period": senkou_period,
            })
            raise ConfigurationError(
                "periods", (tenkan_period, kijun_period, senkou_period),
                "must satisfy tenkan < kijun < senkou"
            )

        self.params = IchimokuParams(tenkan_period, kijun_period, senkou_period)
        self.tenkan = _Donchian(tenkan_period)
        self.kijun = _Donchian(kijun_period)
        self.senkou = _Donchian(senkou_period)
        self.count = 0
        self._last: Optional[Ichimoku] = None

    @classmethod
    def from_params(cls, params: IchimokuParams) -> 'IchimokuBuilder':
        return cls(params.tenkan_period, params.kijun_period, params.senkou_period)

    def next(self, candle: Candle) -> Ichimoku:
        high, low, close = candle.high_price, candle.low_price, candle.close_price
        if not is_finite(high, low, close):
            self._absorb_non_finite(candle, ["high_price", "low_price", "close_price"])
            return self._last or self.neutral()

        tenkan = self.tenkan.update(high, low)
        kijun = self.kijun.update(high, low)
        span_b = self.senkou.update(high, low)
        self.count += 1

        if self.count < self.params.senkou_period:
            self._last = Ichimoku(close, close, close, close, close)
        else:
            self._last = Ichimoku(tenkan, kijun, (tenkan + kijun) / 2.0, span_b, close)
        return self._last

    def neutral(self) -> Ichimoku:
        return Ichimoku(0.0, 0.0, 0.0, 0.0, 0.0)

    def reset(self):
        self.tenkan.clear()
        self.kijun.clear()
        self.senkou.clear()
        self.count = 0
        self._last = None

    def __repr__(self):
        return f"IchimokuBuilder({self.params})"


__all__ = ['IchimokuParams', 'Ichimoku', 'IchimokuBuilder']
