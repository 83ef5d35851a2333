"""
candle_ta - Incremental Technical Analysis
==========================================
Candle storage, O(1) incremental indicator builders and rolling-window
analyzers for streaming market data.
"""

__version__ = "0.1.0"
