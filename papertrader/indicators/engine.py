"""
IndicatorEngine - Recompute every indicator series over a candle window.
"""

from typing import List, Sequence

from ..config import Config
from ..core.candle import Candle, IndicatedCandle
from ..core.errors import ConfigError
from . import sma, rsi, atr


class IndicatorEngine:
    """
    Computes short/long SMA, RSI and ATR for every candle in a window.

    The whole window is recomputed on each call. Eviction shifts the start
    of the window, so updating only the newest point would drift away from
    a batch computation over the same bars.

    Example:
        >>> engine = IndicatorEngine()
        >>> indicated = engine.recompute(buffer.snapshot())
        >>> indicated[-1].rsi
    """

    def __init__(
        self,
        sma_short: int = 5,
        sma_long: int = 16,
        rsi_period: int = 14,
        atr_period: int = 14
    ):
        for name, value in (('sma_short', sma_short), ('sma_long', sma_long),
                            ('rsi_period', rsi_period), ('atr_period', atr_period)):
            if value < 1:
                raise ConfigError(f"{name} must be >= 1, got {value}")
        self.sma_short = sma_short
        self.sma_long = sma_long
        self.rsi_period = rsi_period
        self.atr_period = atr_period

    @classmethod
    def from_config(cls, config: Config) -> 'IndicatorEngine':
        return cls(
            sma_short=config.sma_short,
            sma_long=config.sma_long,
            rsi_period=config.rsi_period,
            atr_period=config.atr_period
        )

    @property
    def warmup(self) -> int:
        """Number of candles needed before every indicator has a value."""
        return max(self.sma_short, self.sma_long, self.rsi_period, self.atr_period)

    def recompute(self, candles: Sequence[Candle]) -> List[IndicatedCandle]:
        candles = list(candles)
        short = sma(candles, self.sma_short)
        long_ = sma(candles, self.sma_long)
        rsi_values = rsi(candles, self.rsi_period)
        atr_values = atr(candles, self.atr_period)

        return [
            IndicatedCandle(
                candle=candle,
                sma_short=short[i],
                sma_long=long_[i],
                rsi=rsi_values[i],
                atr=atr_values[i]
            )
            for i, candle in enumerate(candles)
        ]
