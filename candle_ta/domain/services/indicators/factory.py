"""
Indicator Factory
=================
Create builders by indicator kind, and TAsBuilder sets for lists of
parameters (defaults come from IndicatorSettings).

Example:
    rsi = create_indicator_builder("rsi", period=14)
    rsis = rsis_builder([9, 14, 25])
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ....core.exceptions import ConfigurationError
from ....core.logger import get_logger
from ....infrastructure.config.settings import IndicatorSettings, get_indicator_settings
from ...models.candle import Candle
from .adx import ADXBuilder
from .atr import ATRBuilder
from .bollinger import BollingerBandsBuilder
from .container import TAs, TAsBuilder
from .extremum import MaxBuilder, MinBuilder
from .ichimoku import IchimokuBuilder, IchimokuParams
from .incremental_base import IndicatorBuilder
from .macd import MACDBuilder, MACDParams
from .moving_average import EMABuilder, MAType, MAsBuilderFactory, SMABuilder, WMABuilder
from .rsi import NEUTRAL_RSI, RSIBuilder
from .supertrend import SuperTrendBuilder, SuperTrendParams
from .volume import VolumeBuilder
from .vwap import VWAPBuilder

logger = get_logger(__name__)


# ============================================================================
# SINGLE BUILDER FACTORY
# ============================================================================

# kind -> (constructor, accepted keyword parameters)
_BUILDERS = {
    "sma": (SMABuilder, ("period", "resync_interval")),
    "ema": (EMABuilder, ("period",)),
    "wma": (WMABuilder, ("period", "resync_interval")),
    "rsi": (RSIBuilder, ("period",)),
    "bband": (BollingerBandsBuilder, ("period", "multiplier", "resync_interval")),
    "bollinger": (BollingerBandsBuilder, ("period", "multiplier", "resync_interval")),
    "vwap": (VWAPBuilder, ("period", "max_window", "resync_interval")),
    "adx": (ADXBuilder, ("period",)),
    "atr": (ATRBuilder, ("period",)),
    "macd": (MACDBuilder, ("fast_period", "slow_period", "signal_period")),
    "ichimoku": (IchimokuBuilder, ("tenkan_period", "kijun_period", "senkou_period")),
    "supertrend": (SuperTrendBuilder, ("period", "multiplier")),
    "volume": (VolumeBuilder, ("period", "resync_interval")),
    "max": (MaxBuilder, ("period",)),
    "min": (MinBuilder, ("period",)),
}

# Moving averages have no constructor default
_DEFAULT_MA_PERIOD = 20


def create_indicator_builder(kind: str, **params) -> IndicatorBuilder:
    """
    Factory function to create incremental indicator builders.

    Args:
        kind: "sma", "ema", "wma", "rsi", "bband", "vwap", "adx", "atr",
              "macd", "ichimoku", "supertrend", "volume", "max", "min"
        **params: Constructor parameters of that kind; omitted ones take
            the builder's defaults

    Returns:
        Indicator builder instance

    Raises:
        ConfigurationError: Unknown kind, unsupported parameter name or
            invalid parameter value
    """
    kind = kind.lower()
    if kind not in _BUILDERS:
        logger.error("indicator_factory.unknown_kind", {"kind": kind})
        raise ConfigurationError("kind", kind, "unknown indicator kind")

    builder_cls, accepted = _BUILDERS[kind]
    unknown = sorted(set(params) - set(accepted))
    if unknown:
        logger.error("indicator_factory.unknown_params", {"kind": kind, "params": unknown})
        raise ConfigurationError("params", unknown, f"not accepted by '{kind}' (expected one of {list(accepted)})")

    if kind in ("sma", "ema", "wma"):
        params.setdefault("period", _DEFAULT_MA_PERIOD)
    return builder_cls(**params)


# ============================================================================
# PARAMETER SET FACTORIES
# ============================================================================

def _settings(settings: Optional[IndicatorSettings]) -> IndicatorSettings:
    return settings if settings is not None else get_indicator_settings()


def mas_builder(ma_type: MAType = MAType.SMA, periods: Optional[Sequence[int]] = None,
                settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    periods = periods if periods is not None else _settings(settings).ma_periods
    return MAsBuilderFactory.build(ma_type, periods)


def rsis_builder(periods: Optional[Sequence[int]] = None, settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    periods = periods if periods is not None else _settings(settings).rsi_periods
    return TAsBuilder("rsi", periods, RSIBuilder)


def bbands_builder(params: Optional[Sequence[tuple]] = None, settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    """Keys are (period, multiplier) tuples"""
    if params is None:
        cfg = _settings(settings)
        params = [(cfg.bband_period, cfg.bband_multiplier)]
    return TAsBuilder("bband", list(params), lambda key: BollingerBandsBuilder(key[0], key[1]))


def vwaps_builder(periods: Sequence[int] = (0,), settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    """Keys are VWAP periods (0 = unbounded, capped by vwap_max_window)"""
    max_window = _settings(settings).vwap_max_window
    return TAsBuilder("vwap", periods, lambda period: VWAPBuilder(period, max_window))


def adxs_builder(periods: Optional[Sequence[int]] = None, settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    periods = periods if periods is not None else _settings(settings).adx_periods
    return TAsBuilder("adx", periods, ADXBuilder)


def atrs_builder(periods: Optional[Sequence[int]] = None, settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    periods = periods if periods is not None else _settings(settings).atr_periods
    return TAsBuilder("atr", periods, ATRBuilder)


def macds_builder(params: Optional[Sequence[MACDParams]] = None,
                  settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    if params is None:
        cfg = _settings(settings)
        params = [MACDParams(cfg.macd_fast_period, cfg.macd_slow_period, cfg.macd_signal_period)]
    return TAsBuilder("macd", list(params), MACDBuilder.from_params)


def ichimokus_builder(params: Optional[Sequence[IchimokuParams]] = None,
                      settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    if params is None:
        cfg = _settings(settings)
        params = [IchimokuParams(cfg.ichimoku_tenkan_period, cfg.ichimoku_kijun_period, cfg.ichimoku_senkou_period)]
    return TAsBuilder("ichimoku", list(params), IchimokuBuilder.from_params)


def supertrends_builder(params: Optional[Sequence[SuperTrendParams]] = None,
                        settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    if params is None:
        cfg = _settings(settings)
        params = [SuperTrendParams(cfg.supertrend_period, cfg.supertrend_multiplier)]
    return TAsBuilder("supertrend", list(params), SuperTrendBuilder.from_params)


def volumes_builder(periods: Optional[Sequence[int]] = None, settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    periods = periods if periods is not None else _settings(settings).volume_periods
    return TAsBuilder("volume", periods, VolumeBuilder)


def maxs_builder(periods: Optional[Sequence[int]] = None, settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    periods = periods if periods is not None else _settings(settings).extremum_periods
    return TAsBuilder("max", periods, MaxBuilder)


def mins_builder(periods: Optional[Sequence[int]] = None, settings: Optional[IndicatorSettings] = None) -> TAsBuilder:
    periods = periods if periods is not None else _settings(settings).extremum_periods
    return TAsBuilder("min", periods, MinBuilder)


# ============================================================================
# AGGREGATE ANALYSIS
# ============================================================================

@dataclass(frozen=True)
class TechnicalAnalysis:
    """Latest snapshots of every commonly used indicator family"""
    smas: TAs
    emas: TAs
    rsis: TAs
    adxs: TAs
    bbands: TAs
    macds: TAs
    maxs: TAs
    mins: TAs
    ichimokus: TAs
    volumes: TAs


class TechnicalAnalysisBuilder:
    """
    Runs the standard indicator set side by side.

    Parameter sets come from IndicatorSettings: MA periods for both SMA and
    EMA, RSI/ADX/volume/extremum periods, one Bollinger, MACD and Ichimoku
    parameter set.

    Example:
        >>> builder = TechnicalAnalysisBuilder()
        >>> analysis = builder.build_from_storage(store)
        >>> analysis.rsis.get(14).value
    """

    def __init__(self, settings: Optional[IndicatorSettings] = None):
        cfg = _settings(settings)
        self._builders = {
            "smas": mas_builder(MAType.SMA, settings=cfg),
            "emas": mas_builder(MAType.EMA, settings=cfg),
            "rsis": rsis_builder(settings=cfg),
            "adxs": adxs_builder(settings=cfg),
            "bbands": bbands_builder(settings=cfg),
            "macds": macds_builder(settings=cfg),
            "maxs": maxs_builder(settings=cfg),
            "mins": mins_builder(settings=cfg),
            "ichimokus": ichimokus_builder(settings=cfg),
            "volumes": volumes_builder(settings=cfg),
        }

    def next(self, candle: Candle) -> TechnicalAnalysis:
        return TechnicalAnalysis(**{name: builder.next(candle) for name, builder in self._builders.items()})

    def build(self, candles: Sequence[Candle]) -> TechnicalAnalysis:
        candles = list(candles)
        return TechnicalAnalysis(**{name: builder.build(candles) for name, builder in self._builders.items()})

    def build_from_storage(self, storage) -> TechnicalAnalysis:
        return self.build(storage.get_time_ordered_items())

    def reset(self):
        for builder in self._builders.values():
            builder.reset()


def quick_analysis(candles: Sequence[Candle], period: int) -> Tuple[float, float, float]:
    """
    (SMA, EMA, RSI) over candles for a single period.

    Returns (0.0, 0.0, 50.0) for an empty sequence.
    """
    candles = list(candles)
    if not candles:
        return 0.0, 0.0, NEUTRAL_RSI
    return (
        SMABuilder(period).build(candles).value,
        EMABuilder(period).build(candles).value,
        RSIBuilder(period).build(candles).value,
    )


def overbought_oversold_analysis(candles: Sequence[Candle]) -> int:
    """RSI(14) zone: 1 overbought, -1 oversold, 0 neutral or no data"""
    candles = list(candles)
    if not candles:
        return 0
    rsi = RSIBuilder(14).build(candles)
    if rsi.is_overbought():
        return 1
    if rsi.is_oversold():
        return -1
    return 0


__all__ = [
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
    'TechnicalAnalysis',
    'TechnicalAnalysisBuilder',
    'quick_analysis',
    'overbought_oversold_analysis',
]
