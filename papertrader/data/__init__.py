"""
Market data - providers for history and live prices.
"""

from .base import HistoryProvider, PriceProvider
from .fetcher import BinanceFetcher
from .replay import ReplayFeed

__all__ = [
    'HistoryProvider',
    'PriceProvider',
    'BinanceFetcher',
    'ReplayFeed',
]
