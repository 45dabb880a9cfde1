"""
Core components of the paper trader.

This module contains the fundamental data structures and types used throughout
the package: candles, the rolling candle buffer, actions, trades and errors.
"""

from .candle import Candle, IndicatedCandle
from .buffer import CandleBuffer, DEFAULT_CAPACITY
from .signals import Action, PositionState, Trade
from .errors import PaperTraderError, ConfigError, TransportError, StateError

__all__ = [
    'Candle',
    'IndicatedCandle',
    'CandleBuffer',
    'DEFAULT_CAPACITY',
    'Action',
    'PositionState',
    'Trade',
    'PaperTraderError',
    'ConfigError',
    'TransportError',
    'StateError',
]
