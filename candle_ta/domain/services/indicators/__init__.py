"""
Incremental Indicator System
============================
O(1) indicator builders over streaming candles, computed for several
parameter sets at once through TAsBuilder.

Module structure:
- incremental_base: IndicatorBuilder contract, rolling windows, smoothers
- container: TAs / TAsBuilder parameterized containers
- rsi, bollinger, vwap, adx, atr, macd, ichimoku, supertrend, volume,
  extremum, moving_average: concrete builders and their snapshots
- factory: builder and parameter-set factories, TechnicalAnalysisBuilder

Usage:
    from candle_ta.domain.services.indicators import RSIBuilder, rsis_builder

    rsi = RSIBuilder(14)
    snapshot = rsi.next(candle)            # incremental, O(1)
    same = RSIBuilder(14).build(candles)   # one-shot recomputation
"""

from .incremental_base import (
    IndicatorBuilder,
    RollingWindow,
    RollingExtremum,
    ExponentialSmoother,
    WilderSmoother,
)
from .container import TAs, TAsBuilder
from .moving_average import MAType, MA, SMABuilder, EMABuilder, WMABuilder, MAsBuilderFactory, create_ma_builder
from .rsi import RSI, RSIBuilder
from .bollinger import BollingerBands, BollingerBandsBuilder
from .vwap import VWAP, VWAPBuilder
from .adx import ADX, ADXBuilder
from .atr import ATR, ATRBuilder
from .macd import MACD, MACDParams, MACDBuilder
from .ichimoku import Ichimoku, IchimokuParams, IchimokuBuilder
from .supertrend import SuperTrend, SuperTrendParams, SuperTrendBuilder
from .volume import Volume, VolumeBuilder
from .extremum import Extremum, MaxBuilder, MinBuilder
from .factory import (
    create_indicator_builder,
    mas_builder,
    rsis_builder,
    bbands_builder,
    vwaps_builder,
    adxs_builder,
    atrs_builder,
    macds_builder,
    ichimokus_builder,
    supertrends_builder,
    volumes_builder,
    maxs_builder,
    mins_builder,
    TechnicalAnalysis,
    TechnicalAnalysisBuilder,
    quick_analysis,
    overbought_oversold_analysis,
)

__all__ = [
    # Base classes
    'IndicatorBuilder',
    'RollingWindow',
    'RollingExtremum',
    'ExponentialSmoother',
    'WilderSmoother',
    # Containers
    'TAs',
    'TAsBuilder',
    # Snapshots and builders
    'MAType', 'MA', 'SMABuilder', 'EMABuilder', 'WMABuilder', 'MAsBuilderFactory', 'create_ma_builder',
    'RSI', 'RSIBuilder',
    'BollingerBands', 'BollingerBandsBuilder',
    'VWAP', 'VWAPBuilder',
    'ADX', 'ADXBuilder',
    'ATR', 'ATRBuilder',
    'MACD', 'MACDParams', 'MACDBuilder',
    'Ichimoku', 'IchimokuParams', 'IchimokuBuilder',
    'SuperTrend', 'SuperTrendParams', 'SuperTrendBuilder',
    'Volume', 'VolumeBuilder',
    'Extremum', 'MaxBuilder', 'MinBuilder',
    # Factories
    'create_indicator_builder',
    'mas_builder',
    'rsis_builder',
    'bbands_builder',
    'vwaps_builder',
    'adxs_builder',
    'atrs_builder',
    'macds_builder',
    'ichimokus_builder',
    'supertrends_builder',
    'volumes_builder',
    'maxs_builder',
    'mins_builder',
    # Aggregate analysis
    'TechnicalAnalysis',
    'TechnicalAnalysisBuilder',
    'quick_analysis',
    'overbought_oversold_analysis',
]
