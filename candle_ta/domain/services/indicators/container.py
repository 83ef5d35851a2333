"""
Parameterized Indicator Container
=================================
TAs: ordered mapping parameter key -> latest indicator snapshot.
TAsBuilder: runs one builder per parameter key as a single logical unit.

Key order is the declaration order and is stable; positional queries
("first MA", "last MA") and arrangement checks rely on it.
"""

from typing import Callable, Dict, Generic, Hashable, Iterable, Iterator, List, Sequence, Tuple, TypeVar

from ....core.exceptions import ConfigurationError, IndicatorKeyError
from ....core.logger import get_logger
from ...models.candle import Candle
from .incremental_base import IndicatorBuilder

logger = get_logger(__name__)

K = TypeVar('K', bound=Hashable)
T = TypeVar('T')


class TAs(Generic[K, T]):
    """Snapshot of one indicator kind for every registered parameter key"""

    __slots__ = ('name', '_keys', '_values')

    def __init__(self, name: str, entries: Iterable[Tuple[K, T]]):
        self.name = name
        self._keys: List[K] = []
        self._values: Dict[K, T] = {}
        for key, value in entries:
            if key not in self._values:
                self._keys.append(key)
            self._values[key] = value

    def get(self, key: K) -> T:
        """
        Value for a registered key.

        Raises:
            IndicatorKeyError: If the key was never registered
        """
        try:
            return self._values[key]
        except KeyError:
            raise IndicatorKeyError(key, self.name) from None

    def get_by_key_index(self, index: int) -> T:
        """Value by declaration position (0 = first declared key)"""
        if index < 0 or index >= len(self._keys):
            raise IndexError(f"Key index {index} out of range for '{self.name}' ({len(self._keys)} keys)")
        return self._values[self._keys[index]]

    def get_all(self) -> List[T]:
        """All values in declaration order"""
        return [self._values[key] for key in self._keys]

    def keys(self) -> List[K]:
        return list(self._keys)

    def values(self) -> List[T]:
        return self.get_all()

    def items(self) -> List[Tuple[K, T]]:
        return [(key, self._values[key]) for key in self._keys]

    def is_all(self, predicate: Callable[[T], bool]) -> bool:
        """True when every value satisfies predicate (vacuously true when empty)"""
        return all(predicate(value) for value in self.get_all())

    def is_regular_arrangement(self, value_fn: Callable[[T], float]) -> bool:
        """
        Values strictly decrease along key order.

        For MAs keyed by ascending period this is the bullish stack:
        short MA > mid MA > long MA.
        """
        values = [value_fn(v) for v in self.get_all()]
        return all(later < earlier for earlier, later in zip(values, values[1:]))

    def is_reverse_arrangement(self, value_fn: Callable[[T], float]) -> bool:
        """Values strictly increase along key order (bearish MA stack)"""
        values = [value_fn(v) for v in self.get_all()]
        return all(later > earlier for earlier, later in zip(values, values[1:]))

    def __contains__(self, key) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._keys))

    def __len__(self):
        return len(self._keys)

    def __eq__(self, other):
        if not isinstance(other, TAs):
            return NotImplemented
        return self.name == other.name and self.items() == other.items()

    def __repr__(self):
        body = ", ".join(f"{key!r}: {value}" for key, value in self.items())
        return f"TAs({self.name}, {{{body}}})"


class TAsBuilder(Generic[K, T]):
    """
    One builder per parameter key, fanned out on every call.

    Example:
        rsis = TAsBuilder("rsi", [9, 14], lambda period: RSIBuilder(period))
        snapshot = rsis.next(candle)
        snapshot.get(14).value
    """

    def __init__(self, name: str, keys: Sequence[K], factory: Callable[[K], IndicatorBuilder[T]]):
        """
        Args:
            name: Indicator name (used in errors and logs)
            keys: Parameter keys in declaration order
            factory: Creates the builder for one key

        Raises:
            ConfigurationError: If a key is declared twice
        """
        keys = list(keys)
        if len(set(keys)) != len(keys):
            logger.error("tas_builder.duplicate_keys", {"name": name, "keys": [str(k) for k in keys]})
            raise ConfigurationError("keys", keys, f"duplicate parameter keys for '{name}'")

        self.name = name
        self.keys: List[K] = keys
        self.builders: Dict[K, IndicatorBuilder[T]] = {key: factory(key) for key in keys}

        logger.debug("tas_builder.created", {"name": name, "keys": [str(k) for k in keys]})

    def next(self, candle: Candle) -> TAs[K, T]:
        """Advance every builder by one candle"""
        return TAs(self.name, ((key, self.builders[key].next(candle)) for key in self.keys))

    def build(self, candles: Sequence[Candle]) -> TAs[K, T]:
        """One-shot recomputation for every key (builders' own state untouched)"""
        candles = list(candles)
        return TAs(self.name, ((key, self.builders[key].build(candles)) for key in self.keys))

    def build_from_storage(self, storage) -> TAs[K, T]:
        return self.build(storage.get_time_ordered_items())

    def reset(self):
        for builder in self.builders.values():
            builder.reset()

    def get_builder(self, key: K) -> IndicatorBuilder[T]:
        try:
            return self.builders[key]
        except KeyError:
            raise IndicatorKeyError(key, self.name) from None

    def __len__(self):
        return len(self.keys)

    def __repr__(self):
        return f"TAsBuilder({self.name}, keys={self.keys!r})"


__all__ = ['TAs', 'TAsBuilder']
