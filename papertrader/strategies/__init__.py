"""
Signal rules - classify the newest bar into an action.
"""

from .base import Strategy
from .sma_rsi import SmaRsiStrategy

__all__ = [
    'Strategy',
    'SmaRsiStrategy',
]
