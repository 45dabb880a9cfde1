"""
Paper Trading Runner - Run the session against live prices with fake money.

Polls the latest price every `check_interval` seconds and feeds it to the
session until interrupted.
"""

from typing import Optional
import signal
import time

from ..bot_logger import BotLogger
from ..config import Config
from ..data.fetcher import BinanceFetcher
from .session import TradingSession


def paper_trade(
    symbol: str = 'BTCUSDT',
    starting_capital: float = 1000.0,
    config: Optional[Config] = None,
    run_forever: bool = True
) -> TradingSession:
    """
    Run the SMA/RSI rule in paper trading mode (fake money, real prices).

    Args:
        symbol: Binance symbol (e.g., "BTCUSDT")
        starting_capital: Initial fake balance
        config: Window, indicator, data and logging settings
        run_forever: If True, run until Ctrl+C; else a single tick

    Example:
        >>> from papertrader import paper_trade
        >>> paper_trade('ETHUSDT', starting_capital=5000)

        # Press Ctrl+C to stop
    """
    config = (config or Config()).validate()
    logger = BotLogger(log_dir=config.log_dir, echo=config.verbose)

    fetcher = BinanceFetcher(
        interval=config.interval,
        base_url=config.base_url,
        timeout=config.request_timeout,
        logger=logger.log_stream
    )
    session = TradingSession.from_config(config, fetcher, fetcher, logger=logger)

    print("=" * 60)
    print("📝 PAPER TRADING MODE")
    print("=" * 60)
    print(f"Strategy:    {session.strategy.name}")
    print(f"Symbol:      {symbol.upper()}")
    print(f"Interval:    {config.interval} history, tick every {config.check_interval:g}s")
    print(f"Starting:    ${float(starting_capital):,.2f}")
    print("=" * 60)
    print()

    running = True

    def handle_stop(signum, frame):
        nonlocal running
        print("\n\n🛑 Stopping paper trading...")
        running = False

    signal.signal(signal.SIGINT, handle_stop)
    signal.signal(signal.SIGTERM, handle_stop)

    try:
        session.start(symbol, starting_capital)

        while running:
            session.tick()

            if not run_forever:
                break

            time.sleep(config.check_interval)

    finally:
        session.stop()
        fetcher.close()

    summary = session.snapshot()

    print()
    print("=" * 60)
    print("📊 PAPER TRADING SUMMARY")
    print("=" * 60)
    print(f"Starting Value:  ${summary['initialCapital']:,.2f}")
    print(f"Ending Value:    ${summary['value']:,.2f}")
    print(f"Profit/Loss:     {summary['profitPct']:+.2f}%")
    print(f"Total Trades:    {summary['tradeCount']}")
    print(f"Final Position:  {summary['position'].upper()}")
    print("=" * 60)

    return session
