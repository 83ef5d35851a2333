"""
Core module for candle_ta: structured logging and exception hierarchy.
"""

from .exceptions import (
    CandleTAError,
    ConfigurationError,
    IndicatorKeyError,
    InsufficientHistoryError,
)
from .logger import StructuredLogger, get_logger

__all__ = [
    'CandleTAError',
    'ConfigurationError',
    'IndicatorKeyError',
    'InsufficientHistoryError',
    'StructuredLogger',
    'get_logger',
]
