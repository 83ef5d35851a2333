"""
Rolling-Window Analyzer Engine
==============================
AnalyzerData: one candle paired with the indicator snapshot(s) computed
for it, plus derived comparison helpers.

Analyzer: fixed-depth, newest-first history of AnalyzerData (index 0 is
the most recent candle) and the generic multi-bar pattern combinators
every concrete indicator analyzer is built from.

Window convention used by every combinator:
    n - number of consecutive items tested
    p - offset: skip the `p` most recent items first
    m - number of items immediately older than the tested window
so `is_all(pred, n, p)` looks at items [p, p + n).
"""

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, Sequence, TypeVar

from ....core.exceptions import ConfigurationError, InsufficientHistoryError
from ....core.logger import get_logger
from ....infrastructure.config.settings import get_analyzer_settings
from ...models.candle import Candle
from ..indicators.container import TAs

logger = get_logger(__name__)


# ============================================================================
# ANALYZER DATA
# ============================================================================

@dataclass(frozen=True)
class AnalyzerData:
    """Base record: a candle and helpers shared by every indicator's data"""
    candle: Candle

    @property
    def close(self) -> float:
        return self.candle.close_price

    def get_rate_of_return(self, value_fn: Callable[['AnalyzerData'], float]) -> float:
        """(close - value) / value, 0.0 when value is 0"""
        value = value_fn(self)
        if value == 0:
            return 0.0
        return (self.candle.close_price - value) / value

    def is_greater_than(self, value_fn: Callable[['AnalyzerData'], float], target: float) -> bool:
        return value_fn(self) > target

    def is_less_than(self, value_fn: Callable[['AnalyzerData'], float], target: float) -> bool:
        return value_fn(self) < target

    def is_regular_arrangement(self, tas_fn: Callable[['AnalyzerData'], TAs],
                               value_fn: Callable[[object], float]) -> bool:
        """Values strictly decrease in key order (see TAs.is_regular_arrangement)"""
        return tas_fn(self).is_regular_arrangement(value_fn)

    def is_reverse_arrangement(self, tas_fn: Callable[['AnalyzerData'], TAs],
                               value_fn: Callable[[object], float]) -> bool:
        return tas_fn(self).is_reverse_arrangement(value_fn)


D = TypeVar('D', bound=AnalyzerData)


# ============================================================================
# ANALYZER
# ============================================================================

class Analyzer(ABC, Generic[D]):
    """
    Abstract rolling-window analyzer.

    Subclasses implement next_data(candle) only; history management and
    every pattern combinator live here.
    """

    def __init__(self, history_depth: Optional[int] = None):
        """
        Args:
            history_depth: Items retained (default: AnalyzerSettings.history_depth)
        """
        if history_depth is None:
            history_depth = get_analyzer_settings().history_depth
        if history_depth < 1:
            raise ConfigurationError("history_depth", history_depth, "must be >= 1")

        self.history_depth = history_depth
        self._items: deque = deque(maxlen=history_depth)

    # ------------------------------------------------------------------
    # State transition
    # ------------------------------------------------------------------

    @abstractmethod
    def next_data(self, candle: Candle) -> D:
        """Run the owned indicator builder(s) for one candle"""
        pass

    def next(self, candle: Candle) -> D:
        """Compute data for candle and push it as index 0 (oldest evicted beyond depth)"""
        data = self.next_data(candle)
        self._items.appendleft(data)
        return data

    def init(self, candles: Iterable[Candle]):
        """Replay candles in ascending time order"""
        count = 0
        for candle in candles:
            self.next(candle)
            count += 1
        logger.debug("analyzer.initialized", {
            "analyzer": self.__class__.__name__,
            "candles": count,
            "retained": len(self._items),
        })

    def init_from_storage(self, storage):
        """Replay every candle held by a CandleStore"""
        self.init(storage.get_time_ordered_items())

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def items(self) -> List[D]:
        """History, newest first"""
        return list(self._items)

    def datum(self) -> List[D]:
        """History, newest first"""
        return list(self._items)

    def get(self, index: int) -> Optional[D]:
        """Safe lookup: None when index is out of range"""
        if index < 0 or index >= len(self._items):
            return None
        return self._items[index]

    def get_value(self, index: int, value_fn: Optional[Callable[[D], float]] = None):
        """
        Asserting accessor for callers that already know the history is long enough.

        Raises:
            InsufficientHistoryError: If index is out of range
        """
        if index < 0 or index >= len(self._items):
            raise InsufficientHistoryError(index, len(self._items))
        item = self._items[index]
        return value_fn(item) if value_fn is not None else item

    def _window(self, n: int, p: int = 0) -> Optional[List[D]]:
        """Items [p, p + n) or None when history is too short"""
        if n < 0 or p < 0 or len(self._items) < n + p:
            return None
        return [self._items[i] for i in range(p, p + n)]

    # ------------------------------------------------------------------
    # Pattern combinators
    # ------------------------------------------------------------------

    def is_all(self, predicate: Callable[[D], bool], n: int, p: int = 0) -> bool:
        """True iff items [p, p + n) all satisfy predicate; False if fewer than n + p items"""
        window = self._window(n, p)
        if window is None:
            return False
        return all(predicate(item) for item in window)

    def is_break_through_by_satisfying(self, predicate: Callable[[D], bool], n: int, m: int, p: int = 0) -> bool:
        """
        "Condition just started holding": the `n` items from offset `p` all
        satisfy predicate and the `m` items right before them (older) all fail.
        False if fewer than n + m + p items.
        """
        window = self._window(n + m, p)
        if window is None:
            return False
        head, tail = window[:n], window[n:]
        return all(predicate(item) for item in head) and not any(predicate(item) for item in tail)

    def is_sideways(self, value_fn: Callable[[D], float], n: int, p: int = 0, threshold: float = 0.02) -> bool:
        """
        Relative variation (max - min) / |mean| of value_fn over the window
        stays within threshold. False when history is short, n == 0 or the
        mean is 0.
        """
        window = self._window(n, p)
        if not window:
            return False
        values = [value_fn(item) for item in window]
        mean = sum(values) / len(values)
        if mean == 0:
            return False
        return (max(values) - min(values)) / abs(mean) <= threshold

    def is_increasing(self, value_fn: Callable[[D], float], n: int, p: int = 0) -> bool:
        """
        value_fn strictly rises toward the present over n steps:
        value(i) > value(i + 1) for every i in [p, p + n). Needs n + p + 1 items.
        """
        window = self._window(n + 1, p)
        if window is None or n < 1:
            return False
        values = [value_fn(item) for item in window]
        return all(newer > older for newer, older in zip(values, values[1:]))

    def is_decreasing(self, value_fn: Callable[[D], float], n: int, p: int = 0) -> bool:
        """Mirror of is_increasing: value(i) < value(i + 1) for every i in [p, p + n)"""
        window = self._window(n + 1, p)
        if window is None or n < 1:
            return False
        values = [value_fn(item) for item in window]
        return all(newer < older for newer, older in zip(values, values[1:]))

    def detect_buy_signal(self, signal_fn: Callable[[D], float], n: int, threshold: float,
                          p: int = 0) -> Optional[int]:
        """Index (newest to oldest) of the first item in [p, p + n) with signal >= threshold"""
        window = self._window(n, p)
        if window is None:
            return None
        for offset, item in enumerate(window):
            if signal_fn(item) >= threshold:
                return p + offset
        return None

    def detect_sell_signal(self, signal_fn: Callable[[D], float], n: int, threshold: float,
                           p: int = 0) -> Optional[int]:
        """Index (newest to oldest) of the first item in [p, p + n) with signal <= threshold"""
        window = self._window(n, p)
        if window is None:
            return None
        for offset, item in enumerate(window):
            if signal_fn(item) <= threshold:
                return p + offset
        return None

    def detect_pattern(self, conditions: Sequence[Callable[[D], bool]], n: int, p: int = 0) -> bool:
        """Every condition holds for at least one item in [p, p + n)"""
        window = self._window(n, p)
        if not window:
            return False
        return all(any(condition(item) for item in window) for condition in conditions)

    def is_volume_spike(self, n: int, p: int = 0, threshold: float = 2.0) -> bool:
        """
        Any candle volume in [p, p + n) exceeds threshold * average volume of
        the older retained items. False when there are no older items or
        their average volume is 0.
        """
        if len(self._items) <= n + p:
            return False
        older = [self._items[i].candle.volume for i in range(n + p, len(self._items))]
        average = sum(older) / len(older)
        if average <= 0:
            return False
        window = self._window(n, p)
        return any(item.candle.volume > average * threshold for item in window)

    def is_bullish_divergence(self, value_fn: Callable[[D], float], n: int, p: int = 0) -> bool:
        """
        Price prints a new low at offset p (below every older close in the
        window) while the indicator stays above its older minimum.
        """
        window = self._window(n, p)
        if window is None or n < 2:
            return False
        current, older = window[0], window[1:]
        lowest_close = min(item.candle.close_price for item in older)
        lowest_value = min(value_fn(item) for item in older)
        return current.candle.close_price < lowest_close and value_fn(current) > lowest_value

    def is_bearish_divergence(self, value_fn: Callable[[D], float], n: int, p: int = 0) -> bool:
        """Price prints a new high at offset p while the indicator stays below its older maximum"""
        window = self._window(n, p)
        if window is None or n < 2:
            return False
        current, older = window[0], window[1:]
        highest_close = max(item.candle.close_price for item in older)
        highest_value = max(value_fn(item) for item in older)
        return current.candle.close_price > highest_close and value_fn(current) < highest_value

    def is_regular_arrangement(self, tas_fn: Callable[[D], TAs], value_fn: Callable[[object], float],
                               n: int, p: int = 0) -> bool:
        """TAs values strictly decrease in key order for every item in the window"""
        return self.is_all(lambda item: item.is_regular_arrangement(tas_fn, value_fn), n, p)

    def is_reverse_arrangement(self, tas_fn: Callable[[D], TAs], value_fn: Callable[[object], float],
                               n: int, p: int = 0) -> bool:
        """TAs values strictly increase in key order for every item in the window"""
        return self.is_all(lambda item: item.is_reverse_arrangement(tas_fn, value_fn), n, p)

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"{self.__class__.__name__}(depth={self.history_depth}, size={len(self._items)})"


__all__ = ['AnalyzerData', 'Analyzer']
