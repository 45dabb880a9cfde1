"""
Strategy - The base class for signal rules.

A strategy looks at the newest indicated candle and says what to do:
BUY, SELL or NONE. It never touches capital or positions; the ledger
decides what an action means for the current position.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.candle import IndicatedCandle
from ..core.signals import Action


class Strategy(ABC):
    """
    Abstract base class for signal rules.

    To create a strategy, inherit from this class and implement
    classify(candle), returning Action.BUY, Action.SELL or Action.NONE.

    Example:
        class AlwaysBuy(Strategy):
            def classify(self, candle: IndicatedCandle) -> Action:
                return Action.BUY if candle.is_ready else Action.NONE
    """

    @abstractmethod
    def classify(self, candle: IndicatedCandle) -> Action:
        """
        Classify one bar.

        Args:
            candle: The newest bar with its indicator values

        Returns:
            Action.BUY, Action.SELL or Action.NONE
        """
        pass

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def explain(self) -> List[str]:
        """Human-readable description of the rule."""
        return [f"Strategy: {self.name}"]
