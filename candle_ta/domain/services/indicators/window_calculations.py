"""
Pure Functions for Window-Based Calculations
============================================
Stateless helpers over price sequences. All functions are pure.
"""

import math
from typing import Sequence

from ...models.candle import Candle


def calculate_sma(values: Sequence[float], period: int) -> float:
    """
    Mean of the last `period` values.

    Uses every value when fewer than `period` are available; 0.0 for an
    empty sequence or a non-positive period.
    """
    if not values or period <= 0:
        return 0.0
    window = values[-period:]
    return math.fsum(window) / len(window)


def ema_alpha(period: int) -> float:
    """Standard EMA smoothing factor 2 / (period + 1)"""
    return 2.0 / (period + 1)


def ema_step(previous: float, value: float, alpha: float) -> float:
    return alpha * value + (1.0 - alpha) * previous


def detect_price_spike(candles: Sequence[Candle], threshold: float = 0.03) -> bool:
    """
    True when the newest close moved by at least `threshold` relative to
    the previous close. The threshold is a fraction (0.03 = 3%), not a
    percentage.

    Args:
        candles: Candles in ascending time order
        threshold: Relative move considered a spike
    """
    if len(candles) < 2:
        return False
    previous = candles[-2].close_price
    current = candles[-1].close_price
    if previous == 0 or not (math.isfinite(previous) and math.isfinite(current)):
        return False
    return abs(current - previous) / abs(previous) >= threshold


__all__ = ['calculate_sma', 'ema_alpha', 'ema_step', 'detect_price_spike']
