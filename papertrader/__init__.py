"""
Paper Trader - Rolling-window SMA/RSI paper trading

Keeps a bounded window of recent candles, recomputes SMA, RSI and ATR over
it on every new bar, and runs a simple crossover rule against a simulated
account that can go long or short.

Quick Start:
    from papertrader import TradingSession, BinanceFetcher

    fetcher = BinanceFetcher()
    session = TradingSession(fetcher, fetcher)
    session.start('BTCUSDT', 1000)
    session.tick()
    print(session.trade_log())

    # Replay recorded candles
    from papertrader import replay
    result = replay(candles, starting_capital=1000)

    # Serve the control API
    from papertrader import launch_dashboard
    launch_dashboard()

License: MIT
"""

__version__ = "1.0.0"

# Core types
from .core.candle import Candle, IndicatedCandle
from .core.buffer import CandleBuffer
from .core.signals import Action, PositionState, Trade
from .core.errors import PaperTraderError, ConfigError, TransportError, StateError

# Pipeline
from .indicators.engine import IndicatorEngine
from .strategies import Strategy, SmaRsiStrategy
from .interfaces import PositionLedger

# Data
from .data import HistoryProvider, PriceProvider, BinanceFetcher, ReplayFeed

# Running
from .runners import TradingSession, Update, replay, ReplayResult, paper_trade
from .config import Config
from .bot_logger import BotLogger

# Control surface
from .dashboard import launch_dashboard

__all__ = [
    # Core types
    'Candle',
    'IndicatedCandle',
    'CandleBuffer',
    'Action',
    'PositionState',
    'Trade',
    'PaperTraderError',
    'ConfigError',
    'TransportError',
    'StateError',

    # Pipeline
    'IndicatorEngine',
    'Strategy',
    'SmaRsiStrategy',
    'PositionLedger',

    # Data
    'HistoryProvider',
    'PriceProvider',
    'BinanceFetcher',
    'ReplayFeed',

    # Runners
    'TradingSession',
    'Update',
    'replay',
    'ReplayResult',
    'paper_trade',
    'Config',
    'BotLogger',

    # Control surface
    'launch_dashboard',
]
