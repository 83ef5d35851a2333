"""
Unit Tests for Incremental Indicators
=====================================

Test Coverage:
- Warm-up / neutral values for every builder
- Hand-computed scenarios (RSI, WMA, MACD, Ichimoku, ATR, ADX)
- Degenerate inputs: zero volume, flat prices, NaN candles
- Parameter validation
- Aggregate analysis helpers
"""

import pytest

from candle_ta.core.exceptions import ConfigurationError
from candle_ta.domain.services.indicators import (
    ADXBuilder,
    ATRBuilder,
    BollingerBands,
    BollingerBandsBuilder,
    EMABuilder,
    IchimokuBuilder,
    MACDBuilder,
    MAType,
    MAsBuilderFactory,
    MaxBuilder,
    MinBuilder,
    RSI,
    RSIBuilder,
    SMABuilder,
    SuperTrendBuilder,
    TechnicalAnalysisBuilder,
    VWAP,
    VWAPBuilder,
    VolumeBuilder,
    WMABuilder,
    create_indicator_builder,
    overbought_oversold_analysis,
    quick_analysis,
)
from candle_ta.domain.services.indicators.rsi import NEUTRAL_RSI
from candle_ta.domain.storage.candle_store import CandleStore


def _run(builder, candles):
    return [builder.next(candle) for candle in candles]


class TestRSI:
    """Test RSI builder"""

    def test_neutral_during_warmup(self, make_series):
        values = _run(RSIBuilder(14), make_series([100.0 + i for i in range(13)]))
        assert all(v.value == NEUTRAL_RSI for v in values)

    def test_rising_closes_reach_100(self, make_series):
        values = _run(RSIBuilder(14), make_series([100.0 + i for i in range(14)]))
        assert values[-1].value == 100.0

    def test_first_loss_after_gains(self, make_series):
        closes = [100.0 + i for i in range(14)] + [112.0]
        values = _run(RSIBuilder(14), make_series(closes))
        # avg_gain = 13/14, avg_loss = 1/14 -> RS = 13
        assert values[-1].value == pytest.approx(100.0 - 100.0 / 14.0)

    def test_flat_prices(self, make_series):
        values = _run(RSIBuilder(5), make_series([100.0] * 10))
        assert values[-1].value == 100.0

    def test_always_in_range(self, random_candles):
        for value in _run(RSIBuilder(9), random_candles):
            assert 0.0 <= value.value <= 100.0

    def test_nan_candle_is_skipped(self, random_candles, nan_candle):
        with_nan = list(random_candles[:60])
        with_nan.insert(30, nan_candle)

        assert RSIBuilder(14).build(with_nan) == RSIBuilder(14).build(random_candles[:60])

    def test_overbought_oversold(self):
        assert RSI(14, 75.0).is_overbought()
        assert RSI(14, 25.0).is_oversold()
        assert RSI(14, 50.0).is_within_range(40.0, 60.0)

    @pytest.mark.parametrize("period", [0, -1])
    def test_invalid_period(self, period):
        with pytest.raises(ConfigurationError):
            RSIBuilder(period)

    def test_invalid_period_is_value_error(self):
        with pytest.raises(ValueError):
            RSIBuilder(0)


class TestBollingerBands:
    """Test Bollinger Bands builder"""

    def test_warmup_collapses_to_close(self, make_series):
        values = _run(BollingerBandsBuilder(5, 2.0), make_series([10.0, 11.0, 12.0, 13.0]))
        for value, close in zip(values, [10.0, 11.0, 12.0, 13.0]):
            assert value.upper == value.middle == value.lower == close

    def test_band_ordering(self, random_candles):
        for value in _run(BollingerBandsBuilder(20, 2.0), random_candles):
            assert value.lower <= value.middle <= value.upper

    def test_flat_prices_zero_width(self, make_series):
        values = _run(BollingerBandsBuilder(20, 2.0), make_series([100.0] * 30))
        assert values[-1].upper == values[-1].middle == values[-1].lower == 100.0
        assert values[-1].bandwidth == 0.0

    def test_known_values(self, make_series):
        value = BollingerBandsBuilder(4, 2.0).build(make_series([1.0, 2.0, 3.0, 4.0]))
        # mean 2.5, population variance 1.25
        assert value.middle == pytest.approx(2.5)
        assert value.upper == pytest.approx(2.5 + 2.0 * 1.25 ** 0.5)
        assert value.lower == pytest.approx(2.5 - 2.0 * 1.25 ** 0.5)

    def test_percent_b(self):
        bands = BollingerBands(20, 2.0, upper=110.0, middle=100.0, lower=90.0)
        assert bands.percent_b(100.0) == pytest.approx(0.5)
        assert bands.percent_b(110.0) == pytest.approx(1.0)

    def test_invalid_multiplier(self):
        with pytest.raises(ConfigurationError):
            BollingerBandsBuilder(20, 0.0)


class TestVWAP:
    """Test VWAP builder"""

    def test_warmup_returns_typical_price(self, make_candle):
        builder = VWAPBuilder(3)
        first = builder.next(make_candle(10.0, high=12.0, low=8.0, open_price=10.0, volume=5.0))
        assert first.value == pytest.approx(10.0)

    def test_known_values(self, make_series):
        candles = make_series([10.0, 20.0, 30.0], volumes=[1.0, 2.0, 3.0])
        value = VWAPBuilder(3).build(candles)
        assert value.value == pytest.approx((10.0 * 1 + 20.0 * 2 + 30.0 * 3) / 6.0)

    def test_window_evicts_oldest(self, make_series):
        candles = make_series([10.0, 20.0, 30.0, 40.0], volumes=[1.0, 1.0, 1.0, 3.0])
        value = VWAPBuilder(2).build(candles)
        assert value.value == pytest.approx((30.0 + 40.0 * 3) / 4.0)

    def test_zero_volume_returns_zero(self, make_series):
        candles = make_series([10.0, 11.0, 12.0, 13.0], volumes=[0.0] * 4)
        assert VWAPBuilder(2).build(candles).value == 0.0
        assert VWAPBuilder(0).build(candles).value == 0.0

    def test_zero_volume_window_after_eviction(self, make_series):
        candles = make_series([10.0, 11.0, 12.0, 13.0], volumes=[5.0, 5.0, 0.0, 0.0])
        assert VWAPBuilder(2).build(candles).value == 0.0

    def test_nan_volume_counts_as_zero(self, make_candle, make_series):
        candles = make_series([10.0, 20.0], volumes=[1.0, 1.0])
        with_nan = candles + [make_candle(30.0, minute=2, high=30.5, low=29.5, volume=float('nan'))]
        with_zero = candles + [make_candle(30.0, minute=2, high=30.5, low=29.5, volume=0.0)]
        assert VWAPBuilder(0).build(with_nan) == VWAPBuilder(0).build(with_zero)

    def test_nan_price_does_not_poison_later_values(self, random_candles, nan_candle):
        with_nan = list(random_candles[:50])
        with_nan.insert(25, nan_candle)
        result = VWAPBuilder(10).build(with_nan)

        assert result == VWAPBuilder(10).build(random_candles[:50])
        assert result.value == result.value  # not NaN

    def test_unbounded_window_is_capped(self, random_candles):
        capped = VWAPBuilder(0, max_window=20)
        bounded = VWAPBuilder(20)
        for candle in random_candles[:100]:
            capped_value = capped.next(candle)
            bounded_value = bounded.next(candle)
        assert capped_value.value == bounded_value.value

    def test_price_helpers(self):
        vwap = VWAP(0, 100.0)
        assert vwap.is_price_above(101.0)
        assert vwap.is_price_below(99.0)
        assert vwap.price_to_vwap_percent(110.0) == pytest.approx(10.0)
        assert VWAP(0, 0.0).price_to_vwap_percent(110.0) == 0.0

    def test_negative_period_rejected(self):
        with pytest.raises(ConfigurationError):
            VWAPBuilder(-1)


class TestADX:
    """Test ADX builder"""

    def test_warmup_phases(self, make_series):
        values = _run(ADXBuilder(3), make_series([100.0 + i for i in range(8)]))

        # DI appears after period + 1 candles, ADX after 2 * period candles
        for value in values[:3]:
            assert value.plus_di == 0.0 and value.minus_di == 0.0
        assert values[3].plus_di > 0.0
        for value in values[:5]:
            assert value.adx == 0.0
        assert values[5].adx > 0.0

    def test_pure_uptrend(self, make_series):
        value = ADXBuilder(3).build(make_series([100.0 + i for i in range(20)]))
        # +DM = 1, TR = 1.5 each step, -DM = 0
        assert value.plus_di == pytest.approx(100.0 / 1.5)
        assert value.minus_di == 0.0
        assert value.adx == pytest.approx(100.0)
        assert value.is_bullish()
        assert value.is_strong_trend()

    def test_always_in_range(self, random_candles):
        for value in _run(ADXBuilder(14), random_candles):
            assert 0.0 <= value.adx <= 100.0
            assert value.plus_di >= 0.0 and value.minus_di >= 0.0


class TestATR:
    """Test ATR builder"""

    def test_zero_until_ready(self, make_series):
        values = _run(ATRBuilder(3), make_series([10.0, 11.0, 12.0]))
        assert values[0].value == 0.0
        assert values[1].value == 0.0
        # TRs: 1.0 (first candle high - low), 1.5, 1.5
        assert values[2].value == pytest.approx(4.0 / 3.0)

    def test_wilder_smoothing(self, make_series):
        value = ATRBuilder(3).build(make_series([10.0, 11.0, 12.0, 13.0]))
        assert value.value == pytest.approx((4.0 / 3.0 * 2 + 1.5) / 3.0)


class TestMACD:
    """Test MACD builder"""

    def test_zero_until_slow_period(self, make_series):
        values = _run(MACDBuilder(3, 6, 2), make_series([float(i) for i in range(1, 6)]))
        assert all(v.macd == 0.0 and v.signal == 0.0 and v.histogram == 0.0 for v in values)

    def test_linear_trend_converges(self, make_series):
        values = _run(MACDBuilder(3, 6, 2), make_series([float(i) for i in range(1, 40)]))
        # EMA lag on a linear series is (period - 1) / 2, so MACD = (6 - 3) / 2
        assert values[5].macd == pytest.approx(1.5)
        assert values[-1].macd == pytest.approx(1.5)
        assert values[-1].signal == pytest.approx(1.5)
        assert values[-1].histogram == pytest.approx(0.0, abs=1e-9)

    def test_signal_seeded_with_first_macd(self, make_series):
        values = _run(MACDBuilder(3, 6, 4), make_series([1.0, 3.0, 2.0, 5.0, 4.0, 6.0]))
        assert values[-1].signal == values[-1].macd
        assert values[-1].histogram == 0.0

    def test_fast_must_be_below_slow(self):
        with pytest.raises(ConfigurationError):
            MACDBuilder(26, 12, 9)
        with pytest.raises(ConfigurationError):
            MACDBuilder(12, 12, 9)


class TestIchimoku:
    """Test Ichimoku builder"""

    def test_warmup_collapses_to_close(self, make_series):
        values = _run(IchimokuBuilder(2, 3, 4), make_series([10.0, 11.0, 12.0]))
        for value, close in zip(values, [10.0, 11.0, 12.0]):
            assert value.tenkan == value.kijun == value.senkou_span_a == value.senkou_span_b == close
            assert value.chikou == close

    def test_known_values(self, make_series):
        value = IchimokuBuilder(2, 3, 4).build(make_series([10.0, 11.0, 12.0, 13.0]))
        assert value.tenkan == pytest.approx((13.5 + 11.5) / 2)
        assert value.kijun == pytest.approx((13.5 + 10.5) / 2)
        assert value.senkou_span_a == pytest.approx((value.tenkan + value.kijun) / 2)
        assert value.senkou_span_b == pytest.approx((13.5 + 9.5) / 2)
        assert value.chikou == 13.0
        assert value.is_price_above_cloud(13.0)
        assert value.is_bullish_cloud()

    def test_invalid_period_order(self):
        with pytest.raises(ConfigurationError):
            IchimokuBuilder(26, 9, 52)


class TestSuperTrend:
    """Test SuperTrend builder"""

    def test_zero_snapshot_until_atr_ready(self, make_series):
        values = _run(SuperTrendBuilder(3, 3.0), make_series([10.0, 11.0]))
        for value in values:
            assert value.direction == 0
            assert value.value == 0.0

    def test_direction_flips_on_crash(self, make_series):
        closes = [100.0 + i for i in range(10)] + [90.0, 80.0]
        values = _run(SuperTrendBuilder(3, 3.0), make_series(closes))

        assert values[2].direction == 1
        assert values[9].is_uptrend()
        assert values[-1].is_downtrend()
        assert values[-1].value == values[-1].upper_band

    def test_uptrend_value_is_lower_band(self, make_series):
        value = SuperTrendBuilder(3, 3.0).build(make_series([100.0 + i for i in range(10)]))
        assert value.value == value.lower_band


class TestMovingAverages:
    """Test SMA / EMA / WMA builders"""

    def test_sma_partial_mean(self, make_series):
        values = _run(SMABuilder(5), make_series([1.0, 2.0, 3.0, 4.0, 5.0, 6.0]))
        assert values[2].value == pytest.approx(2.0)
        assert values[-1].value == pytest.approx(4.0)

    def test_ema_seeded_with_first_close(self, make_series):
        values = _run(EMABuilder(3), make_series([10.0, 20.0]))
        assert values[0].value == 10.0
        assert values[1].value == pytest.approx(15.0)

    def test_wma_weights(self, make_series):
        values = _run(WMABuilder(3), make_series([1.0, 2.0, 3.0, 4.0]))
        assert values[1].value == pytest.approx(5.0 / 3.0)
        assert values[2].value == pytest.approx(14.0 / 6.0)
        assert values[3].value == pytest.approx(20.0 / 6.0)

    def test_factory_periods_must_ascend(self):
        with pytest.raises(ConfigurationError):
            MAsBuilderFactory.build(MAType.SMA, [20, 5])
        with pytest.raises(ConfigurationError):
            MAsBuilderFactory.build(MAType.SMA, [5, 5])
        with pytest.raises(ConfigurationError):
            MAsBuilderFactory.build(MAType.SMA, [])

    def test_factory_builds_one_ma_per_period(self, make_series):
        builder = MAsBuilderFactory.build(MAType.EMA, [2, 4])
        snapshot = builder.build(make_series([1.0, 2.0, 3.0]))
        assert snapshot.keys() == [2, 4]
        assert snapshot.get(2).ma_type == MAType.EMA


class TestVolumeAndExtremum:
    """Test volume ratio and rolling MAX/MIN"""

    def test_volume_ratio(self, make_series):
        value = VolumeBuilder(2).build(make_series([1.0, 1.0], volumes=[10.0, 30.0]))
        assert value.average_volume == pytest.approx(20.0)
        assert value.volume_ratio == pytest.approx(1.5)
        assert value.is_above_average()

    def test_zero_volume_ratio_is_one(self, make_series):
        value = VolumeBuilder(3).build(make_series([1.0, 1.0], volumes=[0.0, 0.0]))
        assert value.volume_ratio == 1.0

    def test_max_and_min(self, make_series):
        candles = make_series([5.0, 1.0, 3.0, 2.0], spread=0.0)
        assert [v.value for v in _run(MaxBuilder(2), candles)] == [5.0, 5.0, 3.0, 3.0]
        assert [v.value for v in _run(MinBuilder(2), candles)] == [5.0, 1.0, 1.0, 2.0]


class TestIndicatorFactory:
    """Test create_indicator_builder"""

    def test_known_kinds(self):
        assert isinstance(create_indicator_builder("rsi", period=9), RSIBuilder)
        assert isinstance(create_indicator_builder("BBAND"), BollingerBandsBuilder)
        assert isinstance(create_indicator_builder("wma", period=3), WMABuilder)

    def test_unknown_kind(self):
        with pytest.raises(ConfigurationError) as exc_info:
            create_indicator_builder("stochastic")
        assert exc_info.value.parameter == "kind"

    def test_empty_build_returns_neutral(self):
        builder = create_indicator_builder("rsi", period=14)
        assert builder.build([]) == builder.neutral()

    def test_unknown_param_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            create_indicator_builder("rsi", periods=[14])
        assert exc_info.value.parameter == "params"
        assert "periods" in str(exc_info.value)

    def test_supported_params_forwarded(self):
        builder = create_indicator_builder("bband", period=5, multiplier=3.0, resync_interval=16)
        assert builder.window.resync_interval == 16
        assert builder.multiplier == 3.0
        assert create_indicator_builder("sma", period=4, resync_interval=8).window.resync_interval == 8

    def test_ma_period_defaults(self):
        assert create_indicator_builder("sma").period == 20
        assert create_indicator_builder("ema").period == 20


class TestTechnicalAnalysisBuilder:
    """Test the aggregate builder and quick analysis helpers"""

    def test_next_matches_build(self, random_candles):
        streaming = TechnicalAnalysisBuilder()
        for candle in random_candles:
            latest = streaming.next(candle)
        assert latest == TechnicalAnalysisBuilder().build(random_candles)

    def test_keys_from_settings(self, random_candles):
        analysis = TechnicalAnalysisBuilder().build(random_candles)
        assert analysis.smas.keys() == [5, 10, 20, 50, 100, 200]
        assert analysis.rsis.keys() == [9, 14, 25]
        assert analysis.bbands.keys() == [(20, 2.0)]
        assert analysis.volumes.keys() == [10, 20, 50]

    def test_build_from_storage(self, random_candles):
        store = CandleStore(300, random_candles)
        expected = TechnicalAnalysisBuilder().build(random_candles)
        assert TechnicalAnalysisBuilder().build_from_storage(store) == expected

    def test_reset(self, random_candles):
        builder = TechnicalAnalysisBuilder()
        for candle in random_candles[:50]:
            builder.next(candle)
        builder.reset()
        for candle in random_candles:
            latest = builder.next(candle)
        assert latest == builder.build(random_candles)

    def test_quick_analysis(self, make_series):
        sma, ema, rsi = quick_analysis(make_series([1.0, 2.0, 3.0, 4.0]), 2)
        assert sma == pytest.approx(3.5)
        assert ema == pytest.approx(95.0 / 27.0)
        assert rsi == pytest.approx(100.0)

    def test_quick_analysis_empty(self):
        assert quick_analysis([], 14) == (0.0, 0.0, NEUTRAL_RSI)

    def test_overbought_oversold(self, make_series):
        assert overbought_oversold_analysis(make_series([100.0 + i for i in range(20)])) == 1
        assert overbought_oversold_analysis(make_series([100.0 - i for i in range(20)])) == -1
        assert overbought_oversold_analysis(make_series([100.0 + (i % 2) for i in range(20)])) == 0
        assert overbought_oversold_analysis([]) == 0
