"""
MACD - Moving Average Convergence Divergence
============================================
macd      = EMA(close, fast) - EMA(close, slow)
signal    = EMA(macd, signal_period)
histogram = macd - signal

Both price EMAs and the signal EMA are seeded with the SMA of their first
`period` inputs. All fields are 0.0 until `slow` candles have been seen;
while the signal EMA is still seeding it equals the mean of the MACD
values produced so far.
"""

from dataclasses import dataclass

from ....core.exceptions import ConfigurationError
from ....core.logger import get_logger
from ...models.candle import Candle
from .incremental_base import ExponentialSmoother, IndicatorBuilder, finite_or, is_finite, require_period

logger = get_logger(__name__)


@dataclass(frozen=True)
class MACDParams:
    """Compound parameter key"""
    fast_period: int = 12
    slow_period: int = 26
    signal_period: int = 9

    def __str__(self):
        return f"{self.fast_period}/{self.slow_period}/{self.signal_period}"


@dataclass(frozen=True)
class MACD:
    """MACD snapshot"""
    macd: float
    signal: float
    histogram: float

    def is_bullish(self) -> bool:
        """MACD line above signal line"""
        return self.macd > self.signal

    def __str__(self):
        return f"MACD({self.macd:.4f}, signal {self.signal:.4f}, hist {self.histogram:.4f})"


class MACDBuilder(IndicatorBuilder[MACD]):
    """Incremental MACD, O(1) per update"""

    kind = "macd"

    def __init__(self, fast_period: int = 12, slow_period: int = 26, signal_period: int = 9):
        require_period("fast_period", fast_period)
        require_period("slow_period", slow_period)
        require_period("signal_period", signal_period)
        if fast_period >= slow_period:
            logger.error("macd.invalid_periods", {"fast_period": fast_period, "slow_period": slow_period})
            raise ConfigurationError("fast_period", fast_period, f"must be smaller than slow_period ({slow_period})")

        self.params = MACDParams(fast_period, slow_period, signal_period)
        self.fast = ExponentialSmoother(fast_period, seed="sma")
        self.slow = ExponentialSmoother(slow_period, seed="sma")
        self.signal = ExponentialSmoother(signal_period, seed="sma")
        self._last = self.neutral()

    @classmethod
    def from_params(cls, params: MACDParams) -> 'MACDBuilder':
        return cls(params.fast_period, params.slow_period, params.signal_period)

    def next(self, candle: Candle) -> MACD:
        price = candle.close_price
        if not is_finite(price):
            self._absorb_non_finite(candle, ["close_price"])
            return self._last

        fast = self.fast.update(price)
        slow = self.slow.update(price)
        if not self.slow.is_ready():
            return self._last

        macd = finite_or(fast - slow, 0.0)
        signal = finite_or(self.signal.update(macd), 0.0)
        self._last = MACD(macd, signal, macd - signal)
        return self._last

    def neutral(self) -> MACD:
        return MACD(0.0, 0.0, 0.0)

    def reset(self):
        self.fast.reset()
        self.slow.reset()
        self.signal.reset()
        self._last = self.neutral()

    def __repr__(self):
        return f"MACDBuilder({self.params})"


__all__ = ['MACDParams', 'MACD', 'MACDBuilder']
