from .candle_store import CandleStore

__all__ = ['CandleStore']
