"""
Trading Signals - Communication between the strategy and the ledger.

The strategy classifies a bar as BUY, SELL or NONE. The ledger turns an
effective BUY or SELL into one of four logged trades: BUY, SELL, SHORT or
COVER.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Action(Enum):
    """Trading action, both as a signal and as a logged trade type."""
    NONE = 'None'
    BUY = 'Buy'
    SELL = 'Sell'
    SHORT = 'Short'
    COVER = 'Cover'


class PositionState(Enum):
    """Which way the ledger is exposed. Only one direction at a time."""
    FLAT = 'flat'
    LONG = 'long'
    SHORT = 'short'


@dataclass(frozen=True)
class Trade:
    """
    One entry in the trade log.

    Attributes:
        action: BUY, SELL, SHORT or COVER
        price: Fill price (the bar's close)
        capital_after: Uncommitted capital after the trade
        long_size_after: Long position size after the trade
        short_size_after: Short position size after the trade
        timestamp: Timestamp of the bar that triggered the trade
        stop_loss: ATR-based stop level when opening (informational)
        take_profit: ATR-based target level when opening (informational)
    """
    action: Action
    price: float
    capital_after: float
    long_size_after: float
    short_size_after: float
    timestamp: Optional[int] = None
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            'action': self.action.value,
            'price': self.price,
            'capital': self.capital_after,
            'position': self.long_size_after,
            'shortPosition': self.short_size_after,
            'timestamp': self.timestamp,
            'stopLoss': self.stop_loss,
            'takeProfit': self.take_profit
        }
