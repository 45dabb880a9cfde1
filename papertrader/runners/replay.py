"""
Replay Runner - Push recorded candles through a fresh session.

Same bars in, same trades out: the pipeline has no hidden state beyond the
session, so a replay is fully deterministic.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from tqdm import tqdm

from ..bot_logger import BotLogger
from ..config import Config
from ..core.candle import Candle
from ..core.signals import Trade
from ..data.replay import ReplayFeed
from ..indicators.engine import IndicatorEngine
from ..strategies.base import Strategy
from .session import TradingSession


@dataclass
class ReplayResult:
    """Outcome of a replay."""
    symbol: str
    starting_capital: float
    final_value: float
    candles_replayed: int
    trades: List[Trade] = field(default_factory=list)

    @property
    def profit_pct(self) -> float:
        return ((self.final_value - self.starting_capital) / self.starting_capital) * 100

    @property
    def trade_count(self) -> int:
        return len(self.trades)

    def summary(self) -> str:
        lines = [
            "=" * 60,
            f"📊 REPLAY SUMMARY - {self.symbol}",
            "=" * 60,
            f"Candles Replayed: {self.candles_replayed}",
            f"Starting Value:   ${self.starting_capital:,.2f}",
            f"Ending Value:     ${self.final_value:,.2f}",
            f"Profit/Loss:      {self.profit_pct:+.2f}%",
            f"Total Trades:     {self.trade_count}",
            "=" * 60,
        ]
        return "\n".join(lines)


def replay(
    candles: Sequence[Candle],
    starting_capital: float = 1000.0,
    symbol: str = 'REPLAY',
    warmup: Optional[int] = None,
    config: Optional[Config] = None,
    strategy: Optional[Strategy] = None,
    progress: bool = False,
    logger: Optional[BotLogger] = None
) -> ReplayResult:
    """
    Replay candles through a new session.

    The first `warmup` candles seed the buffer (no trading); every later
    candle is ingested one at a time.

    Args:
        candles: Recorded candles, oldest first
        starting_capital: Initial paper capital
        symbol: Label for the session
        warmup: Seed candles (default: enough for every indicator)
        config: Window, indicator and threshold settings
        strategy: Signal rule override
        progress: Show a tqdm progress bar
        logger: Session logger (default: silent)

    Example:
        >>> result = replay(candles, starting_capital=1000)
        >>> print(result.summary())
    """
    config = config or Config(log_dir=None)
    logger = logger or BotLogger(log_dir=None)

    if warmup is None:
        warmup = IndicatorEngine.from_config(config).warmup
    feed = ReplayFeed(candles, warmup=warmup)
    session = TradingSession.from_config(config, feed, feed, strategy=strategy, logger=logger)

    session.start(symbol, starting_capital)

    remaining = feed.remaining()
    iterator = remaining
    if progress:
        iterator = tqdm(remaining, desc="Replaying", unit="candle")

    for candle in iterator:
        session.ingest(candle)

    session.stop()

    return ReplayResult(
        symbol=session.symbol,
        starting_capital=session.initial_capital,
        final_value=session.total_value(),
        candles_replayed=len(remaining),
        trades=list(session.trades)
    )
