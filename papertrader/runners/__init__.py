"""
Runners module - Drive a trading session.

Provides the session itself plus simple functions for replaying recorded
candles and paper trading against live prices.
"""

from .session import TradingSession, Update
from .replay import replay, ReplayResult
from .paper import paper_trade

__all__ = [
    'TradingSession',
    'Update',
    'replay',
    'ReplayResult',
    'paper_trade'
]
