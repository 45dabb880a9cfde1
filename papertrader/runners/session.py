"""
TradingSession - One symbol, one strategy, one simulated account.

Owns the candle buffer, the indicator engine, the strategy and the ledger,
and runs the pipeline on every new bar:

    append -> recompute indicators -> classify newest bar -> apply to ledger
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
import math
import threading
import time

from ..bot_logger import BotLogger
from ..config import Config
from ..core.buffer import CandleBuffer, DEFAULT_CAPACITY
from ..core.candle import Candle, IndicatedCandle
from ..core.errors import ConfigError, StateError, TransportError
from ..core.signals import Action, PositionState, Trade
from ..data.base import HistoryProvider, PriceProvider
from ..indicators.engine import IndicatorEngine
from ..interfaces.ledger import PositionLedger
from ..strategies.base import Strategy
from ..strategies.sma_rsi import SmaRsiStrategy


@dataclass(frozen=True)
class Update:
    """Outcome of ingesting one bar."""
    candle: IndicatedCandle
    action: Action
    trade: Optional[Trade] = None


class TradingSession:
    """
    Paper trading session.

    All mutation goes through one lock, so concurrent ingest calls are
    serialized and every indicator recompute sees the buffer that matches
    the current trade log. Network fetches happen outside the lock.

    Example:
        >>> fetcher = BinanceFetcher()
        >>> session = TradingSession(fetcher, fetcher)
        >>> session.start('BTCUSDT', 1000)
        >>> session.tick()          # fetch price, ingest one flat candle
        >>> session.trades
        >>> session.stop()
    """

    def __init__(
        self,
        history_provider: HistoryProvider,
        price_provider: Optional[PriceProvider] = None,
        capacity: int = DEFAULT_CAPACITY,
        engine: Optional[IndicatorEngine] = None,
        strategy: Optional[Strategy] = None,
        on_update: Optional[Callable[[Dict[str, Any]], None]] = None,
        logger: Optional[BotLogger] = None,
        clock: Callable[[], float] = time.time
    ):
        """
        Args:
            history_provider: Supplies the seed candles on start
            price_provider: Supplies live prices for tick()
            capacity: Maximum candles kept in the rolling window
            engine: Indicator engine (default SMA 5/16, RSI 14, ATR 14)
            strategy: Signal rule (default SmaRsiStrategy)
            on_update: Called with the update payload after every ingest
            logger: Session logger (default: stdout only)
            clock: Time source for tick candle timestamps
        """
        self._history = history_provider
        self._prices = price_provider
        self._buffer = CandleBuffer(capacity)
        self._engine = engine or IndicatorEngine()
        self._strategy = strategy or SmaRsiStrategy()
        self._ledger = PositionLedger()
        self._indicated: List[IndicatedCandle] = []
        self.on_update = on_update
        self.logger = logger or BotLogger(log_dir=None, echo=True)
        self._clock = clock

        self._lock = threading.Lock()
        self._symbol = ''
        self._initial_capital = 0.0
        self._running = False

    @classmethod
    def from_config(
        cls,
        config: Config,
        history_provider: HistoryProvider,
        price_provider: Optional[PriceProvider] = None,
        strategy: Optional[Strategy] = None,
        **kwargs
    ) -> 'TradingSession':
        """Build a session whose window, indicators and thresholds come from config."""
        config.validate()
        engine = IndicatorEngine.from_config(config)
        if strategy is None:
            strategy = SmaRsiStrategy(
                overbought=config.rsi_overbought,
                oversold=config.rsi_oversold
            )
        return cls(
            history_provider,
            price_provider,
            capacity=config.capacity,
            engine=engine,
            strategy=strategy,
            **kwargs
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, symbol: Any, initial_capital: Any) -> Dict[str, Any]:
        """
        Start (or restart) the session.

        Validates the inputs, fetches history, then resets capital, trade log
        and buffer and seeds the buffer. No signals are evaluated on the seed
        candles.

        Raises:
            ConfigError: bad symbol or capital, nothing changed
            TransportError: history fetch failed, nothing changed
        """
        symbol = self._normalize_symbol(symbol)
        capital = self._parse_capital(initial_capital)

        self.logger.log_main(f"📦 Loading history for {symbol}...")
        try:
            history = self._history.fetch_history(symbol, self._buffer.capacity)
        except TransportError as e:
            self.logger.log_main(f"❌ Start failed for {symbol}: {e}")
            raise

        with self._lock:
            self._ledger.reset(capital)
            self._buffer.clear()
            self._buffer.extend(history)
            self._indicated = self._engine.recompute(self._buffer.snapshot())
            self._symbol = symbol
            self._initial_capital = capital
            self._running = True

        self.logger.log_main(
            f"🚀 Session started: {symbol} with ${capital:,.2f} "
            f"({len(self._buffer)} candles loaded)"
        )
        return self.snapshot()

    def stop(self) -> Dict[str, str]:
        """Stop ingesting. Buffer and ledger are kept as they are."""
        with self._lock:
            was_running = self._running
            self._running = False

        if was_running:
            self.logger.log_main(f"🛑 Session stopped: {self._symbol}")
        return {'status': 'stopped'}

    @staticmethod
    def _normalize_symbol(symbol: Any) -> str:
        if not isinstance(symbol, str) or not symbol.strip():
            raise ConfigError("symbol is required")
        symbol = symbol.strip().upper()
        if not symbol.isalnum():
            raise ConfigError(f"invalid symbol '{symbol}'")
        return symbol

    @staticmethod
    def _parse_capital(value: Any) -> float:
        if isinstance(value, bool):
            raise ConfigError(f"invalid capital {value!r}")
        try:
            capital = float(value)
        except (TypeError, ValueError):
            raise ConfigError(f"invalid capital {value!r}") from None
        if not math.isfinite(capital) or capital <= 0:
            raise ConfigError(f"capital must be a positive number, got {value!r}")
        return capital

    def _ensure_running(self):
        if not self._running:
            raise StateError("session is not running")

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def ingest(self, candle: Candle) -> Optional[Update]:
        """
        Run one bar through the pipeline.

        Returns:
            The Update for the newest bar, or None if the session is stopped
            (nothing is changed in that case)
        """
        with self._lock:
            try:
                self._ensure_running()
            except StateError as e:
                self.logger.log_stream(f"⏸️  Bar at {candle.timestamp} ignored: {e}")
                return None

            self._buffer.append(candle)
            self._indicated = self._engine.recompute(self._buffer.snapshot())
            newest = self._indicated[-1]

            action = self._strategy.classify(newest)
            trade = None
            if action is not Action.NONE:
                if candle.close > 0:
                    trade = self._ledger.apply(
                        action, candle.close, timestamp=candle.timestamp, atr=newest.atr
                    )
                else:
                    self.logger.log_main(f"⚠️  {action.value} skipped: non-positive price {candle.close}")

            update = Update(candle=newest, action=action, trade=trade)
            payload = self._payload(newest)

        self.logger.log_stream(
            f"📈 {self._symbol} {newest.close:,.2f} | "
            f"SMA {_fmt(newest.sma_short)}/{_fmt(newest.sma_long)} "
            f"RSI {_fmt(newest.rsi)} ATR {_fmt(newest.atr)} -> {action.value}"
        )
        if trade is not None:
            self.logger.log_main(_describe(trade))

        if self.on_update:
            try:
                self.on_update(payload)
            except Exception as e:
                self.logger.log_main(f"⚠️  Update callback error: {e}")

        return update

    def tick(self) -> Optional[Update]:
        """
        Fetch the latest price and ingest it as a zero-volume flat candle.

        A failed fetch is logged and skipped; buffer and ledger are left as
        they were.
        """
        if not self._running:
            return None
        if self._prices is None:
            raise StateError("no price provider configured")

        symbol = self._symbol
        try:
            price = self._prices.fetch_latest_price(symbol)
        except TransportError as e:
            self.logger.log_main(f"⚠️  Price fetch failed for {symbol}, tick skipped: {e}")
            return None

        return self.ingest(Candle.flat(price, int(self._clock())))

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def initial_capital(self) -> float:
        return self._initial_capital

    @property
    def capital(self) -> float:
        return self._ledger.capital

    @property
    def position(self) -> PositionState:
        return self._ledger.position

    @property
    def capacity(self) -> int:
        return self._buffer.capacity

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @property
    def trades(self) -> Tuple[Trade, ...]:
        with self._lock:
            return self._ledger.trades

    @property
    def candles(self) -> Tuple[Candle, ...]:
        with self._lock:
            return self._buffer.snapshot()

    @property
    def indicated(self) -> Tuple[IndicatedCandle, ...]:
        with self._lock:
            return tuple(self._indicated)

    def trade_log(self) -> List[Dict[str, Any]]:
        return [t.to_dict() for t in self.trades]

    def total_value(self, price: Optional[float] = None) -> float:
        """Mark-to-market account value at price (default: latest close)."""
        with self._lock:
            if price is None:
                latest = self._buffer.latest
                if latest is None:
                    return self._ledger.capital
                price = latest.close
            return self._ledger.total_value(price)

    def snapshot(self) -> Dict[str, Any]:
        """Everything a client needs to render the session."""
        with self._lock:
            ledger = self._ledger
            newest = self._indicated[-1] if self._indicated else None
            price = newest.close if newest else None
            value = ledger.total_value(price) if price is not None else ledger.capital
            initial = self._initial_capital

            return {
                'symbol': self._symbol,
                'strategy': self._strategy.name,
                'running': self._running,
                'initialCapital': initial,
                'capital': ledger.capital,
                'position': ledger.position.value,
                'longSize': ledger.long_size,
                'shortSize': ledger.short_size,
                'entryPrice': ledger.entry_price,
                'price': price,
                'value': value,
                'profitPct': ((value - initial) / initial) * 100 if initial else 0.0,
                'tradeCount': ledger.get_trade_count(),
                'candleCount': len(self._buffer),
                'capacity': self._buffer.capacity,
                'indicators': newest.indicators() if newest else {}
            }

    def _payload(self, newest: IndicatedCandle) -> Dict[str, Any]:
        payload = {
            'action': 'update',
            'symbol': self._symbol,
            'price': newest.close,
            'timestamp': newest.timestamp
        }
        payload.update(newest.indicators())
        payload['tradeLog'] = [t.to_dict() for t in self._ledger.trades]
        return payload


def _fmt(value: Optional[float]) -> str:
    return '-' if value is None else f"{value:,.2f}"


def _describe(trade: Trade) -> str:
    icons = {
        Action.BUY: '💰',
        Action.SELL: '💵',
        Action.SHORT: '📉',
        Action.COVER: '🔄',
    }
    msg = (
        f"{icons[trade.action]} {trade.action.value.upper()} @ ${trade.price:,.2f} | "
        f"Capital: ${trade.capital_after:,.2f} | "
        f"Long: {trade.long_size_after:.8f} | Short: {trade.short_size_after:.8f}"
    )
    if trade.stop_loss is not None:
        msg += f" | SL ${trade.stop_loss:,.2f} TP ${trade.take_profit:,.2f}"
    return msg
