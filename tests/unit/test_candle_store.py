"""
Unit Tests for Candle model and CandleStore
===========================================

Test Coverage:
- Candle validation, immutability and derived prices
- Bounded FIFO eviction and time ordering
- Newest-first access, duplicate filter
- Rise/fall checks
"""

import math

import pytest
from pydantic import ValidationError

from candle_ta.core.exceptions import ConfigurationError
from candle_ta.domain.storage.candle_store import CandleStore


class TestCandle:
    """Test Candle model"""

    def test_typical_price(self, make_candle):
        candle = make_candle(10.0, high=12.0, low=8.0, open_price=9.0)
        assert candle.typical_price == pytest.approx(10.0)

    def test_low_above_high_rejected(self, make_candle):
        with pytest.raises(ValidationError):
            make_candle(10.0, high=9.0, low=11.0)

    def test_close_outside_range_rejected(self, make_candle):
        with pytest.raises(ValidationError):
            make_candle(15.0, high=12.0, low=8.0, open_price=10.0)

    def test_candle_is_frozen(self, make_candle):
        candle = make_candle(10.0)
        with pytest.raises(ValidationError):
            candle.close_price = 11.0

    def test_non_finite_values_accepted(self, nan_candle):
        """Builders absorb NaN themselves; the model must not reject it"""
        assert math.isnan(nan_candle.close_price)
        assert math.isnan(nan_candle.typical_price)

    def test_datetime_alias(self, make_candle):
        candle = make_candle(10.0, minute=5)
        assert candle.datetime == candle.timestamp


class TestCandleStoreCapacity:
    """Test bounded FIFO behavior"""

    def test_oldest_evicted_when_full(self, make_candle):
        store = CandleStore(3)
        for minute in (1, 2, 3, 4):
            store.add(make_candle(float(minute), minute=minute))

        assert len(store) == 3
        assert store.is_full()
        assert [c.close_price for c in store.get_time_ordered_items()] == [2.0, 3.0, 4.0]

    def test_never_exceeds_capacity(self, random_candles):
        store = CandleStore(50)
        for candle in random_candles:
            store.add(candle)
            assert len(store) <= 50
        assert store.get_time_ordered_items() == random_candles[-50:]

    def test_invalid_capacity(self):
        with pytest.raises(ConfigurationError):
            CandleStore(0)

    def test_initial_items_sorted(self, make_candle):
        items = [make_candle(3.0, minute=3), make_candle(1.0, minute=1), make_candle(2.0, minute=2)]
        store = CandleStore(5, items)
        assert [c.close_price for c in store] == [1.0, 2.0, 3.0]

    def test_clear(self, make_candle):
        store = CandleStore(3, [make_candle(1.0)])
        store.clear()
        assert store.is_empty
        assert store.first() is None
        assert store.last() is None


class TestCandleStoreOrdering:
    """Test ordering guarantees"""

    def test_reversed_items(self, make_candle):
        store = CandleStore(5, [make_candle(float(m), minute=m) for m in range(3)])
        assert [c.close_price for c in store.get_reversed_items()] == [2.0, 1.0, 0.0]

    def test_get_is_newest_first(self, make_candle):
        store = CandleStore(5, [make_candle(float(m), minute=m) for m in range(3)])
        assert store.get(0).close_price == 2.0
        assert store.get(2).close_price == 0.0
        assert store.get(3) is None
        assert store.get(-1) is None
        assert store.first().close_price == 2.0
        assert store.last().close_price == 0.0

    def test_late_candle_inserted_chronologically(self, make_candle):
        store = CandleStore(5, [make_candle(float(m), minute=m) for m in (1, 3, 4)])
        store.add(make_candle(2.0, minute=2))
        minutes = [c.timestamp.minute for c in store]
        assert minutes == [1, 2, 3, 4]

    def test_late_candle_older_than_full_store_dropped(self, make_candle):
        store = CandleStore(3, [make_candle(float(m), minute=m) for m in (2, 3, 4)])
        store.add(make_candle(1.0, minute=1))
        assert [c.timestamp.minute for c in store] == [2, 3, 4]

    def test_duplicate_filter(self, make_candle):
        candle = make_candle(1.0)
        filtered = CandleStore(5, use_duplicated_filter=True)
        unfiltered = CandleStore(5)
        for store in (filtered, unfiltered):
            store.add(candle)
            store.add(candle)

        assert len(filtered) == 1
        assert len(unfiltered) == 2


class TestCandleStoreTrend:
    """Test rise/fall checks"""

    def test_is_rise(self, make_series):
        store = CandleStore(10, make_series([1.0, 2.0, 3.0]))
        assert store.is_rise(3)
        assert store.is_rise(10)
        assert not store.is_fall(3)

    def test_is_fall(self, make_series):
        store = CandleStore(10, make_series([5.0, 3.0, 4.0, 2.0, 1.0]))
        assert store.is_fall(2)
        assert store.is_fall(3)
        assert not store.is_fall(4)

    def test_single_candle_is_not_a_trend(self, make_series):
        store = CandleStore(10, make_series([1.0]))
        assert not store.is_rise(5)
        assert not store.is_fall(5)
