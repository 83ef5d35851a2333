"""
Core Exceptions - candle_ta
===========================
Centralized exception definitions for the indicator engine.

Insufficient history and non-finite market data are NOT errors in this
engine; builders and analyzers return neutral values for them. The
exceptions below are reserved for caller contract violations.
"""


class CandleTAError(Exception):
    """Base exception for all indicator engine errors."""
    pass


class ConfigurationError(CandleTAError, ValueError):
    """
    Raised when an indicator, container or analyzer is constructed with
    invalid parameters (non-positive period, fast >= slow MACD periods,
    duplicate parameter keys, unknown indicator kind, ...).
    """
    def __init__(self, parameter: str, value, reason: str):
        self.parameter = parameter
        self.value = value
        self.reason = reason
        self.message = f"Invalid {parameter}={value!r}: {reason}"
        super().__init__(self.message)


class IndicatorKeyError(CandleTAError, KeyError):
    """
    Raised when a parameter key that was never registered is requested
    from a TAs snapshot.
    """
    def __init__(self, key, name: str = None):
        self.key = key
        self.name = name
        self.message = f"Unknown parameter key {key!r} for indicator set '{name}'"
        super().__init__(self.message)

    def __str__(self):
        # KeyError.__str__ wraps the message in quotes
        return self.message


class InsufficientHistoryError(CandleTAError, IndexError):
    """
    Raised by asserting accessors (Analyzer.get_value) when the requested
    position is beyond the retained history.
    """
    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        self.message = f"History index {index} out of range (history length: {length})"
        super().__init__(self.message)
