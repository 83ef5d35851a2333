"""
Unit Tests for TAs / TAsBuilder
===============================

Test Coverage:
- Key lookup and declaration order
- Arrangement checks
- Duplicate key rejection
- build() leaves running builders untouched
"""

import pytest

from candle_ta.core.exceptions import ConfigurationError, IndicatorKeyError
from candle_ta.domain.services.indicators import RSIBuilder, TAs, TAsBuilder


class TestTAs:
    """Test TAs snapshot container"""

    def test_declaration_order_preserved(self):
        tas = TAs("ma", [(20, 1.0), (5, 2.0), (10, 3.0)])
        assert tas.keys() == [20, 5, 10]
        assert tas.get_all() == [1.0, 2.0, 3.0]
        assert tas.get_by_key_index(1) == 2.0

    def test_missing_key_raises(self):
        tas = TAs("rsi", [(14, 50.0)])
        with pytest.raises(IndicatorKeyError) as exc_info:
            tas.get(21)
        assert exc_info.value.key == 21
        assert "rsi" in str(exc_info.value)

    def test_missing_key_is_key_error(self):
        tas = TAs("rsi", [(14, 50.0)])
        with pytest.raises(KeyError):
            tas.get(9)

    def test_key_index_out_of_range(self):
        tas = TAs("rsi", [(14, 50.0)])
        with pytest.raises(IndexError):
            tas.get_by_key_index(1)

    def test_contains_and_len(self):
        tas = TAs("rsi", [(9, 40.0), (14, 50.0)])
        assert 9 in tas
        assert 21 not in tas
        assert len(tas) == 2
        assert list(tas) == [9, 14]

    def test_regular_arrangement(self):
        tas = TAs("ma", [(5, 3.0), (10, 2.0), (20, 1.0)])
        assert tas.is_regular_arrangement(lambda v: v)
        assert not tas.is_reverse_arrangement(lambda v: v)

    def test_reverse_arrangement(self):
        tas = TAs("ma", [(5, 1.0), (10, 2.0), (20, 3.0)])
        assert tas.is_reverse_arrangement(lambda v: v)
        assert not tas.is_regular_arrangement(lambda v: v)

    def test_equal_values_are_neither_arrangement(self):
        tas = TAs("ma", [(5, 2.0), (10, 2.0)])
        assert not tas.is_regular_arrangement(lambda v: v)
        assert not tas.is_reverse_arrangement(lambda v: v)

    def test_is_all(self):
        tas = TAs("rsi", [(9, 40.0), (14, 50.0)])
        assert tas.is_all(lambda v: v >= 40.0)
        assert not tas.is_all(lambda v: v > 40.0)

    def test_equality(self):
        assert TAs("x", [(1, 1.0)]) == TAs("x", [(1, 1.0)])
        assert TAs("x", [(1, 1.0)]) != TAs("y", [(1, 1.0)])


class TestTAsBuilder:
    """Test TAsBuilder fan-out"""

    def test_duplicate_keys_rejected(self):
        with pytest.raises(ConfigurationError):
            TAsBuilder("rsi", [14, 14], RSIBuilder)

    def test_next_returns_every_key(self, random_candles):
        builder = TAsBuilder("rsi", [9, 14], RSIBuilder)
        snapshot = None
        for candle in random_candles[:30]:
            snapshot = builder.next(candle)

        assert snapshot.keys() == [9, 14]
        assert snapshot.get(9).period == 9
        assert snapshot.get(14).period == 14

    def test_next_matches_build(self, random_candles):
        builder = TAsBuilder("rsi", [9, 14], RSIBuilder)
        incremental = None
        for candle in random_candles:
            incremental = builder.next(candle)

        batch = TAsBuilder("rsi", [9, 14], RSIBuilder).build(random_candles)
        assert incremental == batch

    def test_build_does_not_disturb_running_state(self, random_candles):
        running = TAsBuilder("rsi", [9, 14], RSIBuilder)
        reference = TAsBuilder("rsi", [9, 14], RSIBuilder)
        for candle in random_candles[:50]:
            running.next(candle)
            reference.next(candle)

        running.build(random_candles)

        assert running.next(random_candles[50]) == reference.next(random_candles[50])

    def test_get_builder(self):
        builder = TAsBuilder("rsi", [9, 14], RSIBuilder)
        assert builder.get_builder(9).period == 9
        with pytest.raises(IndicatorKeyError):
            builder.get_builder(21)

    def test_reset(self, random_candles):
        builder = TAsBuilder("rsi", [14], RSIBuilder)
        for candle in random_candles[:40]:
            builder.next(candle)
        builder.reset()

        assert builder.get_builder(14).candles_seen == 0
