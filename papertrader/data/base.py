"""
Market data providers - what the session needs from the outside world.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.candle import Candle


class HistoryProvider(ABC):
    """Supplies the candles that seed a session."""

    @abstractmethod
    def fetch_history(self, symbol: str, limit: int) -> List[Candle]:
        """
        Fetch the most recent candles for a symbol.

        Args:
            symbol: Normalised uppercase ticker (e.g. "BTCUSDT")
            limit: Maximum number of candles

        Returns:
            Up to `limit` candles, oldest first

        Raises:
            TransportError: the fetch failed
        """
        pass


class PriceProvider(ABC):
    """Supplies the latest traded price for live ticks."""

    @abstractmethod
    def fetch_latest_price(self, symbol: str) -> float:
        """
        Fetch the current price for a symbol.

        Raises:
            TransportError: the fetch failed
        """
        pass
