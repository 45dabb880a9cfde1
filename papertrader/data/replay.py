"""
ReplayFeed - Serve recorded candles as if they came from an exchange.
"""

from typing import List, Optional, Sequence

from ..core.candle import Candle
from ..core.errors import TransportError
from .base import HistoryProvider, PriceProvider


class ReplayFeed(HistoryProvider, PriceProvider):
    """
    In-memory provider over a fixed list of candles.

    History is the first `warmup` candles; each price request then walks
    forward one candle and returns its close. Useful for replays and tests.

    Example:
        >>> feed = ReplayFeed(candles, warmup=50)
        >>> session = TradingSession(feed, feed)
    """

    def __init__(self, candles: Sequence[Candle], warmup: Optional[int] = None):
        self._candles: List[Candle] = list(candles)
        self.warmup = len(self._candles) if warmup is None else min(warmup, len(self._candles))
        self._index = self.warmup

    def fetch_history(self, symbol: str, limit: int) -> List[Candle]:
        self._index = self.warmup
        return self._candles[:self.warmup][-limit:]

    def fetch_latest_price(self, symbol: str) -> float:
        if self._index >= len(self._candles):
            raise TransportError("Replay exhausted")
        candle = self._candles[self._index]
        self._index += 1
        return candle.close

    def remaining(self) -> List[Candle]:
        """Candles not yet served, oldest first."""
        return self._candles[self._index:]

    @property
    def progress(self) -> float:
        """Get replay progress (0.0 - 1.0)."""
        if not self._candles:
            return 1.0
        return self._index / len(self._candles)

    @property
    def is_complete(self) -> bool:
        return self._index >= len(self._candles)
