"""
CandleBuffer - Bounded rolling window of candles.

Holds at most `capacity` bars in chronological order. Appending past
capacity discards the oldest bar (FIFO).
"""

from collections import deque
from typing import Iterable, Optional, Tuple

from .candle import Candle
from .errors import ConfigError

DEFAULT_CAPACITY = 192


class CandleBuffer:
    """
    Fixed-capacity FIFO of candles.

    Example:
        >>> buffer = CandleBuffer(capacity=3)
        >>> for c in candles[:5]:
        ...     buffer.append(c)
        >>> [c.timestamp for c in buffer.snapshot()]  # last three only
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ConfigError(f"capacity must be >= 1, got {capacity}")
        self._candles: deque = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._candles.maxlen

    def append(self, candle: Candle):
        """Add a candle at the end, evicting the oldest one when full."""
        self._candles.append(candle)

    def extend(self, candles: Iterable[Candle]):
        for candle in candles:
            self.append(candle)

    def clear(self):
        self._candles.clear()

    def snapshot(self) -> Tuple[Candle, ...]:
        """Current contents, oldest first."""
        return tuple(self._candles)

    @property
    def latest(self) -> Optional[Candle]:
        return self._candles[-1] if self._candles else None

    def __len__(self) -> int:
        return len(self._candles)

    def __iter__(self):
        return iter(self.snapshot())
