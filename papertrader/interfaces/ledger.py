"""
PositionLedger - Simulated capital, positions and the trade log.

No real money is used and no orders leave the process. The ledger is a
small state machine over FLAT, LONG and SHORT driven by BUY/SELL signals.
"""

from typing import List, Optional, Tuple
import math

from ..core.errors import ConfigError
from ..core.signals import Action, PositionState, Trade


class PositionLedger:
    """
    Paper position state machine.

    All capital is committed when a position opens and released when it
    closes. Only one direction can be open at a time.

    Transitions (p = trade price):
        FLAT  + BUY  -> LONG(capital / p), logs BUY
        FLAT  + SELL -> SHORT(capital / p), logs SHORT
        LONG  + SELL -> FLAT, capital = size * p, logs SELL
        SHORT + BUY  -> FLAT, capital = size * (2 * entry - p), logs COVER
        anything else -> no-op, nothing logged

    The short payoff mirrors the long one around the entry price recorded
    when the short was opened. A cover above twice the entry leaves zero
    capital; the loss cannot exceed the committed capital.

    Example:
        >>> ledger = PositionLedger(1000)
        >>> ledger.apply(Action.BUY, 100).long_size_after
        10.0
        >>> ledger.apply(Action.SELL, 110).capital_after
        1100.0
    """

    # Multiples of ATR used for the informational risk levels on entries
    STOP_LOSS_ATR = 1.0
    TAKE_PROFIT_ATR = 1.5

    def __init__(self, starting_capital: float = 0.0):
        self.reset(starting_capital)

    def reset(self, starting_capital: float = 0.0):
        """Drop all positions and trades and start over with fresh capital."""
        if not math.isfinite(starting_capital) or starting_capital < 0:
            raise ConfigError(f"starting capital must be a finite number >= 0, got {starting_capital}")

        self.starting_capital = float(starting_capital)
        self.capital = float(starting_capital)
        self.long_size = 0.0
        self.short_size = 0.0
        self._long_entry = 0.0
        self._short_entry = 0.0
        self._trades: List[Trade] = []

    @property
    def position(self) -> PositionState:
        if self.long_size > 0:
            return PositionState.LONG
        if self.short_size > 0:
            return PositionState.SHORT
        return PositionState.FLAT

    @property
    def entry_price(self) -> Optional[float]:
        """Entry price of the open position, None when flat."""
        if self.long_size > 0:
            return self._long_entry
        if self.short_size > 0:
            return self._short_entry
        return None

    @property
    def trades(self) -> Tuple[Trade, ...]:
        return tuple(self._trades)

    def apply(
        self,
        action: Action,
        price: float,
        timestamp: Optional[int] = None,
        atr: Optional[float] = None
    ) -> Optional[Trade]:
        """
        Apply a signal at the given price.

        Args:
            action: Action.BUY, Action.SELL or Action.NONE
            price: Trade price (must be > 0)
            timestamp: Bar timestamp recorded on the trade
            atr: Current ATR, used for the risk levels on entries

        Returns:
            The logged Trade, or None when the action was a no-op
        """
        if action not in (Action.BUY, Action.SELL, Action.NONE):
            raise ValueError(f"{action} is not a signal")
        if not math.isfinite(price) or price <= 0:
            raise ValueError(f"price must be a finite number > 0, got {price}")

        position = self.position

        if action is Action.BUY:
            if position is PositionState.FLAT and self.capital > 0:
                return self._open_long(price, timestamp, atr)
            if position is PositionState.SHORT:
                return self._close_short(price, timestamp)
        elif action is Action.SELL:
            if position is PositionState.FLAT and self.capital > 0:
                return self._open_short(price, timestamp, atr)
            if position is PositionState.LONG:
                return self._close_long(price, timestamp)

        return None

    def _open_long(self, price: float, timestamp: Optional[int], atr: Optional[float]) -> Trade:
        self.long_size = self.capital / price
        self._long_entry = price
        self.capital = 0.0

        stop_loss = take_profit = None
        if atr is not None:
            stop_loss = price - self.STOP_LOSS_ATR * atr
            take_profit = price + self.TAKE_PROFIT_ATR * atr

        return self._record(Action.BUY, price, timestamp, stop_loss, take_profit)

    def _close_long(self, price: float, timestamp: Optional[int]) -> Trade:
        self.capital = self.long_size * price
        self.long_size = 0.0
        self._long_entry = 0.0
        return self._record(Action.SELL, price, timestamp)

    def _open_short(self, price: float, timestamp: Optional[int], atr: Optional[float]) -> Trade:
        self.short_size = self.capital / price
        self._short_entry = price
        self.capital = 0.0

        stop_loss = take_profit = None
        if atr is not None:
            stop_loss = price + self.STOP_LOSS_ATR * atr
            take_profit = price - self.TAKE_PROFIT_ATR * atr

        return self._record(Action.SHORT, price, timestamp, stop_loss, take_profit)

    def _close_short(self, price: float, timestamp: Optional[int]) -> Trade:
        self.capital = max(0.0, self.short_size * (2 * self._short_entry - price))
        self.short_size = 0.0
        self._short_entry = 0.0
        return self._record(Action.COVER, price, timestamp)

    def _record(
        self,
        action: Action,
        price: float,
        timestamp: Optional[int],
        stop_loss: Optional[float] = None,
        take_profit: Optional[float] = None
    ) -> Trade:
        trade = Trade(
            action=action,
            price=price,
            capital_after=self.capital,
            long_size_after=self.long_size,
            short_size_after=self.short_size,
            timestamp=timestamp,
            stop_loss=stop_loss,
            take_profit=take_profit
        )
        self._trades.append(trade)
        self.validate_position()
        return trade

    def total_value(self, current_price: float) -> float:
        """
        Mark-to-market value in quote currency.

        Long positions are worth size * price; short positions use the same
        mirrored payoff as a cover at the current price.
        """
        if self.long_size > 0:
            return self.long_size * current_price
        if self.short_size > 0:
            return max(0.0, self.short_size * (2 * self._short_entry - current_price))
        return self.capital

    def validate_position(self):
        """
        Validate that the position is clearly defined.

        At most one direction may be open, and an open position holds all
        of the capital.
        """
        if self.long_size > 0 and self.short_size > 0:
            raise ValueError(
                f"Invalid state: long ({self.long_size:.8f}) and short "
                f"({self.short_size:.8f}) both open"
            )
        if self.position is not PositionState.FLAT and self.capital != 0:
            raise ValueError(
                f"Invalid state: ${self.capital:.2f} uncommitted while {self.position.value}"
            )
        if self.capital < 0:
            raise ValueError(f"Invalid state: negative capital ${self.capital:.2f}")

    def get_trade_count(self) -> int:
        """Get total number of trades."""
        return len(self._trades)

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"capital=${self.capital:.2f}, "
            f"long={self.long_size:.8f}, "
            f"short={self.short_size:.8f}, "
            f"position={self.position.value})"
        )
