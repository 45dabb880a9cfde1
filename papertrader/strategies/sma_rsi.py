"""
SMA Crossover with RSI filter

Buys while the short SMA is above the long SMA unless RSI says overbought,
sells while the short SMA is below the long SMA unless RSI says oversold.
"""

from typing import List
import math

from .base import Strategy
from ..core.candle import IndicatedCandle
from ..core.errors import ConfigError
from ..core.signals import Action


class SmaRsiStrategy(Strategy):
    """
    SMA trend with RSI filter.

    No hysteresis and no multi-bar confirmation: each bar is judged on its
    own values. Equal SMAs (to within float rounding) give NONE.

    Parameters:
        overbought: RSI must be below this to buy (default: 70)
        oversold: RSI must be above this to sell (default: 30)
    """

    def __init__(self, overbought: float = 70.0, oversold: float = 30.0):
        if not 0 <= oversold < overbought <= 100:
            raise ConfigError(
                f"need 0 <= oversold < overbought <= 100, got {oversold}/{overbought}"
            )
        self.overbought = overbought
        self.oversold = oversold

    def classify(self, candle: IndicatedCandle) -> Action:
        if not candle.is_ready:
            return Action.NONE
        # Summation noise on a flat window is not a crossover
        if math.isclose(candle.sma_short, candle.sma_long, rel_tol=1e-9):
            return Action.NONE

        if candle.sma_short > candle.sma_long and candle.rsi < self.overbought:
            return Action.BUY
        if candle.sma_short < candle.sma_long and candle.rsi > self.oversold:
            return Action.SELL
        return Action.NONE

    def explain(self) -> List[str]:
        return [
            f"Strategy: {self.name}",
            "",
            f"Buy: short SMA above long SMA and RSI < {self.overbought:g}",
            f"Sell: short SMA below long SMA and RSI > {self.oversold:g}"
        ]
