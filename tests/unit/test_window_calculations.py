"""
Unit Tests for window_calculations pure functions
"""

import pytest

from candle_ta.domain.services.indicators.window_calculations import (
    calculate_sma,
    detect_price_spike,
    ema_alpha,
    ema_step,
)


class TestCalculateSMA:
    """Test calculate_sma"""

    def test_last_period_values(self):
        assert calculate_sma([1.0, 2.0, 3.0, 4.0], 2) == pytest.approx(3.5)

    def test_fewer_values_than_period(self):
        assert calculate_sma([1.0, 2.0], 5) == pytest.approx(1.5)

    def test_empty_or_invalid(self):
        assert calculate_sma([], 3) == 0.0
        assert calculate_sma([1.0], 0) == 0.0


class TestEMAHelpers:
    """Test ema_alpha / ema_step"""

    def test_alpha(self):
        assert ema_alpha(9) == pytest.approx(0.2)

    def test_step(self):
        assert ema_step(10.0, 20.0, 0.5) == pytest.approx(15.0)


class TestDetectPriceSpike:
    """Test detect_price_spike"""

    def test_spike(self, make_series):
        assert detect_price_spike(make_series([100.0, 104.0]), threshold=0.03)

    def test_no_spike(self, make_series):
        assert not detect_price_spike(make_series([100.0, 102.0]), threshold=0.03)

    def test_exact_threshold_is_spike(self, make_series):
        assert detect_price_spike(make_series([100.0, 103.0]), threshold=0.03)

    def test_drop_counts_as_spike(self, make_series):
        assert detect_price_spike(make_series([100.0, 95.0]))

    def test_single_candle(self, make_series):
        assert not detect_price_spike(make_series([100.0]))
