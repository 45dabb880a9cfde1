import os
import sys
from typing import List, Sequence

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from papertrader.bot_logger import BotLogger
from papertrader.core.candle import Candle
from papertrader.core.errors import TransportError
from papertrader.core.signals import Action
from papertrader.data.base import HistoryProvider, PriceProvider
from papertrader.runners.session import TradingSession
from papertrader.strategies.base import Strategy

START_TS = 1_700_000_000
STEP = 900


def candles_from_closes(closes: Sequence[float], start_ts: int = START_TS, spread: float = 0.5) -> List[Candle]:
    """Candles whose open is the previous close and whose range is close +/- spread."""
    candles = []
    prev = closes[0]
    for i, close in enumerate(closes):
        candles.append(Candle(
            timestamp=start_ts + i * STEP,
            open=prev,
            high=max(prev, close) + spread,
            low=min(prev, close) - spread,
            close=close,
            volume=10.0
        ))
        prev = close
    return candles


def walk(start: float, deltas: Sequence[float]) -> List[float]:
    closes = [start]
    for d in deltas:
        closes.append(closes[-1] + d)
    return closes


def up_then_down() -> List[float]:
    """60 bars of choppy rise (+2/-1.5) followed by 40 bars of choppy fall."""
    return walk(100.0, [2.0, -1.5] * 30 + [-2.0, 1.5] * 20)


class FakeFeed(HistoryProvider, PriceProvider):
    """History and prices from lists, with switchable failures."""

    def __init__(self, history=None, prices=None):
        self.history = list(history or [])
        self.prices = list(prices or [])
        self.fail_history = False
        self.fail_price = False
        self.history_calls = []

    def fetch_history(self, symbol, limit):
        self.history_calls.append((symbol, limit))
        if self.fail_history:
            raise TransportError("history unavailable")
        return self.history[-limit:]

    def fetch_latest_price(self, symbol):
        if self.fail_price or not self.prices:
            raise TransportError("price unavailable")
        return self.prices.pop(0)


class ScriptedStrategy(Strategy):
    """Returns queued actions in order, then NONE."""

    def __init__(self, actions=None):
        self.actions = list(actions or [])
        self.seen = []

    def classify(self, candle):
        self.seen.append(candle)
        return self.actions.pop(0) if self.actions else Action.NONE


class FakeClock:
    def __init__(self, start=START_TS + 10_000):
        self.now = start

    def __call__(self):
        self.now += 60
        return self.now


@pytest.fixture
def quiet_logger():
    return BotLogger(log_dir=None)


@pytest.fixture
def seed_candles():
    return candles_from_closes([100.0 + (i % 3) for i in range(30)])


@pytest.fixture
def feed(seed_candles):
    return FakeFeed(history=seed_candles, prices=[100.0, 101.0, 102.0])


@pytest.fixture
def make_session(feed, quiet_logger):
    def _make(**kwargs):
        kwargs.setdefault('logger', quiet_logger)
        kwargs.setdefault('clock', FakeClock())
        history = kwargs.pop('history_provider', feed)
        prices = kwargs.pop('price_provider', feed)
        return TradingSession(history, prices, **kwargs)
    return _make
