"""
Technical indicators for the signal rule.

All indicators operate on lists of Candles and return one value per candle,
aligned to the input index. Indices inside the warm-up period are None.
These are pure functions with no side effects.
"""

from typing import List, Optional, Sequence
from ..core.candle import Candle


def _malformed(candles: Sequence[Candle], period: int) -> bool:
    return period <= 0 or len(candles) < 2


def sma(candles: Sequence[Candle], period: int) -> List[Optional[float]]:
    """
    Calculate Simple Moving Average.

    Args:
        candles: List of Candle objects
        period: SMA period (e.g., 5, 16)

    Returns:
        List of SMA values (None for insufficient data points)
    """
    if _malformed(candles, period) or len(candles) < period:
        return [None] * len(candles)

    prices = [c.close for c in candles]
    result = [None] * (period - 1)

    for i in range(period - 1, len(prices)):
        avg = sum(prices[i - period + 1:i + 1]) / period
        result.append(avg)

    return result


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def rsi(candles: Sequence[Candle], period: int = 14) -> List[Optional[float]]:
    """
    Calculate Relative Strength Index (Wilder smoothing).

    The first close has no predecessor and counts as an unchanged bar,
    so the first value lands on index period - 1 like the other
    indicators.

    Args:
        candles: List of Candle objects
        period: RSI period (default: 14)

    Returns:
        List of RSI values (0-100 range, None for insufficient data)

    Example:
        >>> rsi_values = rsi(candles, 14)
        >>> if rsi_values[-1] < 30:
        ...     print("Oversold!")
    """
    if _malformed(candles, period) or len(candles) < period:
        return [None] * len(candles)

    prices = [c.close for c in candles]
    gains = [0.0]
    losses = [0.0]
    for i in range(1, len(prices)):
        delta = prices[i] - prices[i - 1]
        gains.append(delta if delta > 0 else 0.0)
        losses.append(-delta if delta < 0 else 0.0)

    result = [None] * (period - 1)

    # First RSI uses simple average
    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period
    result.append(_rsi_value(avg_gain, avg_loss))

    # Subsequent RSIs use smoothed average
    for i in range(period, len(prices)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result.append(_rsi_value(avg_gain, avg_loss))

    return result


def true_range(candles: Sequence[Candle]) -> List[float]:
    """True range per candle. The first one is just its high-low range."""
    if not candles:
        return []

    ranges = [candles[0].range]
    for i in range(1, len(candles)):
        ranges.append(max(
            candles[i].high - candles[i].low,
            abs(candles[i].high - candles[i - 1].close),
            abs(candles[i].low - candles[i - 1].close)
        ))
    return ranges


def atr(candles: Sequence[Candle], period: int = 14) -> List[Optional[float]]:
    """
    Calculate Average True Range (volatility indicator).

    Args:
        candles: List of Candle objects
        period: ATR period (default: 14)

    Returns:
        List of ATR values (None for insufficient data)
    """
    if _malformed(candles, period) or len(candles) < period:
        return [None] * len(candles)

    true_ranges = true_range(candles)

    result = [None] * (period - 1)

    # First ATR is simple average
    current = sum(true_ranges[:period]) / period
    result.append(current)

    # Subsequent ATRs use Wilder smoothing
    for i in range(period, len(true_ranges)):
        current = (current * (period - 1) + true_ranges[i]) / period
        result.append(current)

    return result


__all__ = ['sma', 'rsi', 'atr', 'true_range']
