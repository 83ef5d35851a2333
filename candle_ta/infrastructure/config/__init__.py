from .settings import (
    LogLevel,
    LoggingSettings,
    IndicatorSettings,
    AnalyzerSettings,
    EngineSettings,
    get_settings,
    get_indicator_settings,
    get_analyzer_settings,
)

__all__ = [
    'LogLevel',
    'LoggingSettings',
    'IndicatorSettings',
    'AnalyzerSettings',
    'EngineSettings',
    'get_settings',
    'get_indicator_settings',
    'get_analyzer_settings',
]
