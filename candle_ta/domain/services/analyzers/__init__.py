"""
Analyzers
=========
Rolling-window analyzers over indicator snapshots.
"""

from .base import Analyzer, AnalyzerData
from .ma_analyzer import MAAnalyzer, MAAnalyzerData
from .rsi_analyzer import RSIAnalyzer, RSIAnalyzerData
from .bband_analyzer import BBandAnalyzer, BBandAnalyzerData
from .adx_analyzer import ADXAnalyzer, ADXAnalyzerData
from .macd_analyzer import MACDAnalyzer, MACDAnalyzerData
from .vwap_analyzer import VWAPAnalyzer, VWAPAnalyzerData
from .volume_analyzer import VolumeAnalyzer, VolumeAnalyzerData
from .ichimoku_analyzer import IchimokuAnalyzer, IchimokuAnalyzerData
from .supertrend_analyzer import SuperTrendAnalyzer, SuperTrendAnalyzerData
from .atr_analyzer import ATRAnalyzer, ATRAnalyzerData
from .three_rsi_analyzer import ThreeRSIAnalyzer, ThreeRSIAnalyzerData

__all__ = [
    'Analyzer',
    'AnalyzerData',
    'MAAnalyzer',
    'MAAnalyzerData',
    'RSIAnalyzer',
    'RSIAnalyzerData',
    'BBandAnalyzer',
    'BBandAnalyzerData',
    'ADXAnalyzer',
    'ADXAnalyzerData',
    'MACDAnalyzer',
    'MACDAnalyzerData',
    'VWAPAnalyzer',
    'VWAPAnalyzerData',
    'VolumeAnalyzer',
    'VolumeAnalyzerData',
    'IchimokuAnalyzer',
    'IchimokuAnalyzerData',
    'SuperTrendAnalyzer',
    'SuperTrendAnalyzerData',
    'ATRAnalyzer',
    'ATRAnalyzerData',
    'ThreeRSIAnalyzer',
    'ThreeRSIAnalyzerData',
]
