"""
Incremental Indicator Infrastructure
====================================
Base classes and accumulators for O(1) incremental indicator calculations.

- Rolling windows with running sums (SMA, Bollinger, VWAP, volume)
- Monotonic rolling extremes (Ichimoku, MAX/MIN)
- Exponential and Wilder smoothers (EMA, MACD, RSI, ATR, ADX)
- IndicatorBuilder: next() / build() / build_from_storage() contract

Every builder must satisfy incremental equivalence: feeding candles one at
a time through next() yields the same snapshot as build() over the same
candles. build() achieves this by replaying through a fresh copy of the
builder, so both paths run identical arithmetic.
"""

import copy
import logging
import math
from abc import ABC, abstractmethod
from collections import deque
from typing import Generic, Iterable, Optional, Sequence, TypeVar

from ....core.exceptions import ConfigurationError
from ....core.logger import get_logger
from ....infrastructure.config.settings import get_indicator_settings
from ...models.candle import Candle
from .window_calculations import ema_alpha, ema_step

logger = get_logger(__name__)

T = TypeVar('T')


# ============================================================================
# NUMERIC GUARDS
# ============================================================================

def is_finite(*values: float) -> bool:
    """True when every value is a finite float"""
    return all(math.isfinite(v) for v in values)


def finite_or(value: float, default: float) -> float:
    """Replace NaN/Inf with default"""
    return value if math.isfinite(value) else default


def require_period(name: str, value: int, minimum: int = 1) -> int:
    """Validate an integer construction parameter"""
    if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
        logger.error("indicator.invalid_parameter", {"parameter": name, "value": value, "minimum": minimum})
        raise ConfigurationError(name, value, f"must be an integer >= {minimum}")
    return value


def require_positive(name: str, value: float) -> float:
    """Validate a positive float construction parameter (multipliers)"""
    if not is_finite(value) or value <= 0:
        logger.error("indicator.invalid_parameter", {"parameter": name, "value": value})
        raise ConfigurationError(name, value, "must be a positive finite number")
    return float(value)


def resolve_resync_interval(resync_interval: Optional[int]) -> int:
    if resync_interval is not None:
        return require_period("resync_interval", resync_interval)
    return get_indicator_settings().rolling_resync_interval


# ============================================================================
# ROLLING WINDOW - Fixed-size FIFO with running sums
# ============================================================================

class RollingWindow:
    """
    Fixed-size window with an O(1) running sum.

    Subtracting evicted values accumulates floating-point drift, so the
    sum is recomputed exactly (math.fsum) every `resync_interval` pushes.
    The variance is taken in two passes over the buffer: a running sum of
    squares cancels catastrophically at large price scales.

    Use case: SMA, Bollinger Bands, VWAP numerator/denominator, volume average.
    """

    def __init__(self, maxlen: int, resync_interval: int = 256):
        """
        Args:
            maxlen: Maximum number of elements (automatically ejects oldest)
            resync_interval: Pushes between exact recomputations of the sum
        """
        if maxlen <= 0:
            raise ConfigurationError("maxlen", maxlen, "must be positive")

        self.maxlen = maxlen
        self.resync_interval = resync_interval
        self.buffer = deque(maxlen=maxlen)
        self.total = 0.0
        self._pushes = 0

    def append(self, value: float) -> Optional[float]:
        """Append value (O(1)), returning the evicted value if the window was full"""
        evicted = None
        if len(self.buffer) == self.maxlen:
            evicted = self.buffer[0]
            self.total -= evicted

        self.buffer.append(value)
        self.total += value

        self._pushes += 1
        if self._pushes % self.resync_interval == 0:
            self.resync()
        return evicted

    def resync(self):
        """Recompute the running sum exactly from the buffered values"""
        self.total = math.fsum(self.buffer)

    def mean(self) -> Optional[float]:
        if not self.buffer:
            return None
        return self.total / len(self.buffer)

    def population_variance(self) -> float:
        """Population variance of the buffered values, O(len)"""
        n = len(self.buffer)
        if n == 0:
            return 0.0
        mean = math.fsum(self.buffer) / n
        return math.fsum((v - mean) * (v - mean) for v in self.buffer) / n

    def is_full(self) -> bool:
        return len(self.buffer) == self.maxlen

    def clear(self):
        self.buffer.clear()
        self.total = 0.0
        self._pushes = 0

    def __len__(self):
        return len(self.buffer)

    def __iter__(self):
        return iter(self.buffer)

    def __repr__(self):
        return f"RollingWindow(maxlen={self.maxlen}, size={len(self.buffer)})"


# ============================================================================
# ROLLING EXTREMUM - Monotonic deque for windowed max/min
# ============================================================================

class RollingExtremum:
    """
    Windowed maximum (or minimum) in amortized O(1) per update.

    Keeps a deque of (sequence, value) whose values are monotonic, so the
    front is always the extreme of the last `period` pushes.
    """

    def __init__(self, period: int, mode: str = "max"):
        if mode not in ("max", "min"):
            raise ConfigurationError("mode", mode, "must be 'max' or 'min'")
        self.period = period
        self.mode = mode
        self._candidates: deque = deque()
        self._seq = 0

    def append(self, value: float) -> float:
        dominated = (lambda old: old <= value) if self.mode == "max" else (lambda old: old >= value)
        while self._candidates and dominated(self._candidates[-1][1]):
            self._candidates.pop()
        self._candidates.append((self._seq, value))

        # Drop candidates that left the window
        while self._candidates[0][0] <= self._seq - self.period:
            self._candidates.popleft()

        self._seq += 1
        return self._candidates[0][1]

    def value(self) -> Optional[float]:
        return self._candidates[0][1] if self._candidates else None

    @property
    def count(self) -> int:
        """Number of values pushed so far"""
        return self._seq

    def clear(self):
        self._candidates.clear()
        self._seq = 0


# ============================================================================
# SMOOTHERS - Exponential averages
# ============================================================================

class ExponentialSmoother:
    """
    Standard EMA: new = alpha * x + (1 - alpha) * previous, alpha = 2 / (period + 1).

    With seed="first" the first value initializes the average.
    With seed="sma" the running mean of the first `period` values is used
    until the SMA seed is complete, then exponential smoothing takes over.
    """

    def __init__(self, period: int, seed: str = "first"):
        self.period = period
        self.alpha = ema_alpha(period)
        self.seed = seed
        self.value: Optional[float] = None
        self.count = 0
        self._seed_sum = 0.0

    def update(self, x: float) -> float:
        self.count += 1
        if self.seed == "sma" and self.count <= self.period:
            self._seed_sum += x
            self.value = self._seed_sum / self.count
        elif self.value is None:
            self.value = x
        else:
            self.value = ema_step(self.value, x, self.alpha)
        return self.value

    def is_ready(self) -> bool:
        if self.seed == "sma":
            return self.count >= self.period
        return self.value is not None

    def reset(self):
        self.value = None
        self.count = 0
        self._seed_sum = 0.0


class WilderSmoother:
    """
    Wilder's smoothing: avg = (avg * (period - 1) + x) / period.

    Seeded by the running mean of the first `period` values, which is the
    same as avg += (x - avg) / min(count, period).
    """

    def __init__(self, period: int):
        self.period = period
        self.value = 0.0
        self.count = 0

    def update(self, x: float) -> float:
        self.count += 1
        k = min(self.count, self.period)
        self.value += (x - self.value) / k
        return self.value

    def is_ready(self) -> bool:
        return self.count >= self.period

    def reset(self):
        self.value = 0.0
        self.count = 0


def true_range(high: float, low: float, prev_close: Optional[float]) -> float:
    """True range; the first candle (no previous close) uses high - low"""
    if prev_close is None:
        return high - low
    return max(high - low, abs(high - prev_close), abs(low - prev_close))


# ============================================================================
# BASE CLASS - IndicatorBuilder
# ============================================================================

class IndicatorBuilder(ABC, Generic[T]):
    """
    Abstract base class for incremental indicator builders.

    Key principles:
    1. next() is O(1) amortized (bounded by the indicator's own window)
    2. Insufficient history yields a documented neutral snapshot, never an error
    3. Non-finite candle fields are absorbed, never propagated
    4. build() is pure: it never touches this builder's running state

    Subclasses must implement:
    - next(candle): Advance state with one candle and return the new snapshot
    - neutral(): Snapshot returned for an empty candle sequence
    - reset(): Return to the freshly constructed state
    """

    #: Short indicator name used in logs and factories
    kind: str = "indicator"

    @abstractmethod
    def next(self, candle: Candle) -> T:
        """Update with one candle and return the latest snapshot"""
        pass

    @abstractmethod
    def neutral(self) -> T:
        """Snapshot for "no data yet" """
        pass

    @abstractmethod
    def reset(self):
        """Reset builder to initial state"""
        pass

    def fresh(self) -> 'IndicatorBuilder[T]':
        """Copy of this builder with the same parameters and empty state"""
        clone = copy.deepcopy(self)
        clone.reset()
        return clone

    def build(self, candles: Iterable[Candle]) -> T:
        """
        One-shot recomputation over candles (oldest first).

        Args:
            candles: Candle sequence in ascending time order

        Returns:
            Snapshot after the last candle, or neutral() when empty
        """
        replay = self.fresh()
        value = replay.neutral()
        for candle in candles:
            value = replay.next(candle)
        return value

    def build_from_storage(self, storage) -> T:
        """build() over every candle currently held by a CandleStore"""
        return self.build(storage.get_time_ordered_items())

    def _absorb_non_finite(self, candle: Candle, fields: Sequence[str]):
        if logger.is_enabled_for(logging.DEBUG):
            logger.debug("indicator.non_finite_input", {
                "indicator": self.kind,
                "timestamp": candle.timestamp,
                "fields": list(fields),
            })

    def __repr__(self):
        return f"{self.__class__.__name__}()"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'is_finite',
    'finite_or',
    'require_period',
    'require_positive',
    'resolve_resync_interval',
    'RollingWindow',
    'RollingExtremum',
    'ExponentialSmoother',
    'WilderSmoother',
    'true_range',
    'IndicatorBuilder',
]
