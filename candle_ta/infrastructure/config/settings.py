"""
Unified Configuration Settings - Single Source of Truth
=======================================================
All engine configuration using Pydantic Settings.

Every section can be overridden from the environment, e.g.
CANDLE_TA_ANALYZER_HISTORY_DEPTH=50 or, through the aggregate
EngineSettings, CANDLE_TA_ANALYZER__HISTORY_DEPTH=50.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, model_validator
from typing import List
from enum import Enum


class LogLevel(str, Enum):
    """Logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# === LOGGING CONFIGURATION ===

class LoggingSettings(BaseSettings):
    """Logging configuration"""
    level: LogLevel = Field(default=LogLevel.INFO)
    file_enabled: bool = Field(default=False)
    console_enabled: bool = Field(default=True)
    structured_logging: bool = Field(default=True)
    log_dir: str = Field(default="logs")
    max_file_size_mb: int = Field(default=100)
    backup_count: int = Field(default=5)

    class Config:
        env_prefix = "CANDLE_TA_LOG_"


# === INDICATOR CONFIGURATION ===

class IndicatorSettings(BaseSettings):
    """Default indicator parameters and safety limits"""

    # Unbounded VWAP (period == 0) keeps at most this many candles
    vwap_max_window: int = Field(default=500, description="Safety ceiling for cumulative VWAP window")
    # Running window sums are recomputed exactly every N updates to bound drift
    rolling_resync_interval: int = Field(default=256)

    ma_periods: List[int] = Field(default_factory=lambda: [5, 10, 20, 50, 100, 200])
    rsi_periods: List[int] = Field(default_factory=lambda: [9, 14, 25])
    adx_periods: List[int] = Field(default_factory=lambda: [14])
    atr_periods: List[int] = Field(default_factory=lambda: [14])
    volume_periods: List[int] = Field(default_factory=lambda: [10, 20, 50])
    extremum_periods: List[int] = Field(default_factory=lambda: [10, 20, 50])

    bband_period: int = Field(default=20)
    bband_multiplier: float = Field(default=2.0, gt=0)

    macd_fast_period: int = Field(default=12)
    macd_slow_period: int = Field(default=26)
    macd_signal_period: int = Field(default=9)

    ichimoku_tenkan_period: int = Field(default=9)
    ichimoku_kijun_period: int = Field(default=26)
    ichimoku_senkou_period: int = Field(default=52)

    supertrend_period: int = Field(default=10)
    supertrend_multiplier: float = Field(default=3.0, gt=0)

    @field_validator('ma_periods', 'rsi_periods', 'adx_periods', 'atr_periods',
                     'volume_periods', 'extremum_periods')
    @classmethod
    def validate_period_lists(cls, v):
        """Every configured period must be a positive integer"""
        for period in v:
            if period < 1:
                raise ValueError(f"Invalid period {period}: periods must be >= 1")
        return v

    @field_validator('vwap_max_window', 'rolling_resync_interval', 'bband_period',
                     'macd_fast_period', 'macd_slow_period', 'macd_signal_period',
                     'ichimoku_tenkan_period', 'ichimoku_kijun_period',
                     'ichimoku_senkou_period', 'supertrend_period')
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError(f"Value must be >= 1, got {v}")
        return v

    @model_validator(mode='after')
    def validate_period_ordering(self):
        if self.macd_fast_period >= self.macd_slow_period:
            raise ValueError("macd_fast_period must be smaller than macd_slow_period")
        if not (self.ichimoku_tenkan_period < self.ichimoku_kijun_period < self.ichimoku_senkou_period):
            raise ValueError("Ichimoku periods must satisfy tenkan < kijun < senkou")
        return self

    class Config:
        env_prefix = "CANDLE_TA_INDICATOR_"


# === ANALYZER CONFIGURATION ===

class AnalyzerSettings(BaseSettings):
    """Rolling-window analyzer configuration"""
    history_depth: int = Field(default=20, ge=1, description="Number of AnalyzerData items retained")
    candle_store_capacity: int = Field(default=500, ge=1, description="Default CandleStore capacity")

    class Config:
        env_prefix = "CANDLE_TA_ANALYZER_"


class EngineSettings(BaseSettings):
    """Main engine settings - Single Source of Truth"""

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    indicators: IndicatorSettings = Field(default_factory=IndicatorSettings)
    analyzer: AnalyzerSettings = Field(default_factory=AnalyzerSettings)

    class Config:
        env_prefix = "CANDLE_TA_"
        env_nested_delimiter = "__"  # Allows CANDLE_TA_ANALYZER__HISTORY_DEPTH=50
        case_sensitive = False
        extra = "ignore"


# === SETTINGS FACTORY FUNCTIONS ===
# Note: These functions create new instances - no singleton pattern

def get_settings() -> EngineSettings:
    """Create engine settings from defaults and environment"""
    return EngineSettings()


def get_indicator_settings() -> IndicatorSettings:
    return IndicatorSettings()


def get_analyzer_settings() -> AnalyzerSettings:
    return AnalyzerSettings()
