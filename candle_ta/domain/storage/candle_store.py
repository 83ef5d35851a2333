"""
Candle Store
============
Bounded, time-ordered buffer of raw candles.

The store decouples "candle history we have" from "what the indicator
pipeline currently needs". Indicator logic only reads from it.
"""

from bisect import bisect_right
from collections import deque
from typing import Iterable, Iterator, List, Optional

from ...core.exceptions import ConfigurationError
from ..models.candle import Candle


class CandleStore:
    """
    Fixed-capacity FIFO of candles, kept in ascending time order.

    Once full, adding a candle evicts the oldest one. Callers are expected
    to add candles in increasing time order; a late candle is still placed
    at its chronological position (and evicted immediately if it is older
    than everything retained in a full store).
    """

    def __init__(self, capacity: int, items: Iterable[Candle] = (), use_duplicated_filter: bool = False):
        """
        Args:
            capacity: Maximum number of candles retained
            items: Initial candles, any order
            use_duplicated_filter: Ignore a candle equal to the newest stored one
        """
        if capacity < 1:
            raise ConfigurationError("capacity", capacity, "must be >= 1")

        self.capacity = capacity
        self.use_duplicated_filter = use_duplicated_filter
        self._items: deque = deque(maxlen=capacity)

        for candle in sorted(items, key=lambda c: c.timestamp):
            self._items.append(candle)

    def add(self, candle: Candle):
        """Add candle (amortized O(1) for in-order candles)"""
        if self.use_duplicated_filter and self._items and self._items[-1] == candle:
            return

        if not self._items or candle.timestamp >= self._items[-1].timestamp:
            self._items.append(candle)
            return

        # Out-of-order candle: insert chronologically, then drop the oldest
        ordered = list(self._items)
        position = bisect_right([c.timestamp for c in ordered], candle.timestamp)
        ordered.insert(position, candle)
        self._items = deque(ordered[-self.capacity:], maxlen=self.capacity)

    def get_time_ordered_items(self) -> List[Candle]:
        """All candles, oldest to newest"""
        return list(self._items)

    def get_reversed_items(self) -> List[Candle]:
        """All candles, newest to oldest"""
        return list(reversed(self._items))

    def get(self, index: int) -> Optional[Candle]:
        """Candle by newest-first index (0 = newest), None if out of range"""
        if index < 0 or index >= len(self._items):
            return None
        return self._items[-1 - index]

    def first(self) -> Optional[Candle]:
        """Newest candle"""
        return self._items[-1] if self._items else None

    def last(self) -> Optional[Candle]:
        """Oldest candle"""
        return self._items[0] if self._items else None

    @property
    def is_empty(self) -> bool:
        return not self._items

    def is_full(self) -> bool:
        return len(self._items) == self.capacity

    def is_rise(self, n: int) -> bool:
        """
        True when closes of the newest min(n, len) candles strictly rise
        toward the present. Fewer than two candles is never a rise.
        """
        closes = self._newest_closes(n)
        if len(closes) < 2:
            return False
        return all(newer > older for newer, older in zip(closes, closes[1:]))

    def is_fall(self, n: int) -> bool:
        """Mirror of is_rise for strictly falling closes"""
        closes = self._newest_closes(n)
        if len(closes) < 2:
            return False
        return all(newer < older for newer, older in zip(closes, closes[1:]))

    def _newest_closes(self, n: int) -> List[float]:
        count = min(n, len(self._items))
        return [self._items[-1 - i].close_price for i in range(count)]

    def clear(self):
        self._items.clear()

    def __len__(self):
        return len(self._items)

    def __iter__(self) -> Iterator[Candle]:
        return iter(list(self._items))

    def __repr__(self):
        return f"CandleStore(capacity={self.capacity}, size={len(self._items)})"
