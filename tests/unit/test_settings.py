"""
Unit Tests for Configuration Settings
=====================================

Test Coverage:
- Defaults
- Environment overrides (section prefix and nested delimiter)
- Validation of periods and period ordering
- Settings flowing into factories
"""

import pytest
from pydantic import ValidationError

from candle_ta.domain.services.indicators import rsis_builder, vwaps_builder
from candle_ta.infrastructure.config import (
    AnalyzerSettings,
    IndicatorSettings,
    LoggingSettings,
    LogLevel,
    get_settings,
)


class TestDefaults:
    """Test default values"""

    def test_indicator_defaults(self):
        settings = IndicatorSettings()
        assert settings.vwap_max_window == 500
        assert settings.rolling_resync_interval == 256
        assert settings.ma_periods == [5, 10, 20, 50, 100, 200]
        assert settings.bband_period == 20
        assert settings.bband_multiplier == 2.0

    def test_analyzer_defaults(self):
        settings = AnalyzerSettings()
        assert settings.history_depth == 20
        assert settings.candle_store_capacity == 500

    def test_logging_defaults(self):
        settings = LoggingSettings()
        assert settings.level == LogLevel.INFO
        assert settings.file_enabled is False


class TestEnvironmentOverrides:
    """Test environment variable overrides"""

    def test_section_prefix(self, monkeypatch):
        monkeypatch.setenv("CANDLE_TA_INDICATOR_VWAP_MAX_WINDOW", "100")
        assert IndicatorSettings().vwap_max_window == 100

    def test_list_override(self, monkeypatch):
        monkeypatch.setenv("CANDLE_TA_INDICATOR_RSI_PERIODS", "[7, 21]")
        assert IndicatorSettings().rsi_periods == [7, 21]

    def test_nested_delimiter(self, monkeypatch):
        monkeypatch.setenv("CANDLE_TA_ANALYZER__HISTORY_DEPTH", "50")
        assert get_settings().analyzer.history_depth == 50

    def test_factory_reads_settings(self, monkeypatch):
        monkeypatch.setenv("CANDLE_TA_INDICATOR_RSI_PERIODS", "[7, 21]")
        assert rsis_builder().keys == [7, 21]

    def test_explicit_settings_object(self):
        settings = IndicatorSettings(vwap_max_window=42)
        builder = vwaps_builder((0,), settings=settings)
        assert builder.get_builder(0).max_window == 42


class TestValidation:
    """Test settings validation"""

    def test_non_positive_period_in_list(self):
        with pytest.raises(ValidationError):
            IndicatorSettings(rsi_periods=[14, 0])

    def test_non_positive_scalar(self):
        with pytest.raises(ValidationError):
            IndicatorSettings(vwap_max_window=0)

    def test_macd_ordering(self):
        with pytest.raises(ValidationError):
            IndicatorSettings(macd_fast_period=26, macd_slow_period=12)

    def test_ichimoku_ordering(self):
        with pytest.raises(ValidationError):
            IndicatorSettings(ichimoku_tenkan_period=30)

    def test_history_depth_minimum(self):
        with pytest.raises(ValidationError):
            AnalyzerSettings(history_depth=0)

    def test_multiplier_must_be_positive(self):
        with pytest.raises(ValidationError):
            IndicatorSettings(bband_multiplier=0.0)
