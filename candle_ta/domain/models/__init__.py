"""
Domain Models
=============
Immutable market data records.
"""

from .candle import Candle

__all__ = ['Candle']
