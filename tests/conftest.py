"""
Shared fixtures: deterministic candle factories.
"""

import datetime as dt
import math
import random

import pytest

from candle_ta.domain.models.candle import Candle

BASE_TIME = dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc)


def _make_candle(close, minute=0, high=None, low=None, open_price=None, volume=1.0):
    open_price = close if open_price is None else open_price
    if high is None:
        high = close if math.isnan(close) else max(open_price, close)
    if low is None:
        low = close if math.isnan(close) else min(open_price, close)
    return Candle(
        open_price=open_price,
        high_price=high,
        low_price=low,
        close_price=close,
        volume=volume,
        timestamp=BASE_TIME + dt.timedelta(minutes=minute),
        market="KRW-BTC",
        interval="1m",
    )


def _make_series(closes, volumes=None, spread=0.5):
    """Candles with symmetric high/low around each close (typical price == close)"""
    candles = []
    for i, close in enumerate(closes):
        volume = 1.0 if volumes is None else volumes[i]
        candles.append(_make_candle(close, minute=i, high=close + spread, low=close - spread, volume=volume))
    return candles


def _random_walk(count=300, seed=7, start=100.0):
    rng = random.Random(seed)
    candles = []
    close = start
    for i in range(count):
        open_price = close
        close = max(1.0, open_price + rng.uniform(-2.0, 2.0))
        high = max(open_price, close) + rng.uniform(0.0, 1.0)
        low = min(open_price, close) - rng.uniform(0.0, 1.0)
        candles.append(Candle(
            open_price=open_price,
            high_price=high,
            low_price=max(low, 0.5),
            close_price=close,
            volume=rng.uniform(10.0, 100.0),
            timestamp=BASE_TIME + dt.timedelta(minutes=i),
        ))
    return candles


@pytest.fixture
def make_candle():
    """Factory: make_candle(close, minute=0, high=None, low=None, open_price=None, volume=1.0)"""
    return _make_candle


@pytest.fixture
def make_series():
    """Factory: make_series(closes, volumes=None, spread=0.5)"""
    return _make_series


@pytest.fixture
def random_candles():
    """300 deterministic random-walk candles"""
    return _random_walk()


@pytest.fixture
def nan_candle():
    nan = float('nan')
    return Candle(
        open_price=nan,
        high_price=nan,
        low_price=nan,
        close_price=nan,
        volume=nan,
        timestamp=BASE_TIME + dt.timedelta(days=1),
    )
