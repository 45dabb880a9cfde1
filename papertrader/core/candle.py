"""
Candle - The fundamental unit of market data.

A candle represents price action over a specific time period (15m by default)
and contains the open, high, low, close prices plus volume. IndicatedCandle
carries the same bar together with the indicator values computed for it.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence
import math


@dataclass(frozen=True, slots=True)
class Candle:
    """
    OHLCV candlestick data.

    Attributes:
        timestamp: Unix timestamp (seconds since epoch)
        open: Opening price
        high: Highest price during period
        low: Lowest price during period
        close: Closing price
        volume: Trading volume (0 for synthesized tick candles)

    Example:
        >>> candle = Candle(1706900400, 42000.0, 42500.0, 41800.0, 42300.0, 150.5)
        >>> candle.close
        42300.0
    """
    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def __post_init__(self):
        for name in ('open', 'high', 'low', 'close', 'volume'):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value!r}")
        if self.volume < 0:
            raise ValueError(f"volume must be >= 0, got {self.volume}")
        if self.high < self.low:
            raise ValueError(f"high ({self.high}) must be >= low ({self.low})")

    @property
    def datetime(self) -> datetime:
        """Convert timestamp to datetime object."""
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    @property
    def range(self) -> float:
        """Total price range (high - low)."""
        return self.high - self.low

    @classmethod
    def flat(cls, price: float, timestamp: int) -> 'Candle':
        """
        Build a zero-volume candle from a single live price.

        Live ticks arrive between real candle closes, so open, high,
        low and close are all the tick price.
        """
        price = float(price)
        return cls(
            timestamp=int(timestamp),
            open=price,
            high=price,
            low=price,
            close=price,
            volume=0.0
        )

    @classmethod
    def from_kline(cls, row: Sequence) -> 'Candle':
        """
        Create a Candle from a Binance kline row.

        Binance returns: [open_time_ms, open, high, low, close, volume, ...]
        with prices encoded as strings.
        """
        return cls(
            timestamp=int(row[0]) // 1000,
            open=float(row[1]),
            high=float(row[2]),
            low=float(row[3]),
            close=float(row[4]),
            volume=float(row[5])
        )

    def to_dict(self) -> dict:
        """Chart-friendly representation (time in milliseconds)."""
        return {
            'time': self.timestamp * 1000,
            'open': self.open,
            'high': self.high,
            'low': self.low,
            'close': self.close,
            'volume': self.volume
        }

    def __str__(self) -> str:
        dt_str = self.datetime.strftime("%Y-%m-%d %H:%M")
        return f"{dt_str} | O:{self.open:.2f} H:{self.high:.2f} L:{self.low:.2f} C:{self.close:.2f} V:{self.volume:.2f}"


@dataclass(frozen=True, slots=True)
class IndicatedCandle:
    """
    A candle with its aligned indicator values.

    Each indicator is None while the buffer holds too little history
    for it (the warm-up period).
    """
    candle: Candle
    sma_short: Optional[float] = None
    sma_long: Optional[float] = None
    rsi: Optional[float] = None
    atr: Optional[float] = None

    @property
    def timestamp(self) -> int:
        return self.candle.timestamp

    @property
    def close(self) -> float:
        return self.candle.close

    @property
    def is_ready(self) -> bool:
        """True once every indicator has a value."""
        return None not in (self.sma_short, self.sma_long, self.rsi, self.atr)

    def indicators(self) -> dict:
        return {
            'smaShort': self.sma_short,
            'smaLong': self.sma_long,
            'rsi': self.rsi,
            'atr': self.atr
        }

    def to_dict(self) -> dict:
        """Candle fields (time in milliseconds) plus indicator values."""
        data = self.candle.to_dict()
        data.update(self.indicators())
        return data
