"""Tests for indicator functions and the indicator engine."""

import pytest

from papertrader.config import Config
from papertrader.core.buffer import CandleBuffer
from papertrader.core.candle import Candle
from papertrader.core.errors import ConfigError
from papertrader.indicators import atr, rsi, sma, true_range
from papertrader.indicators.engine import IndicatorEngine

from conftest import candles_from_closes, up_then_down


def test_sma_warmup_and_values():
    candles = candles_from_closes([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
    assert sma(candles, 3) == [None, None, 2.0, 3.0, 4.0, 5.0]


def test_sma_longer_than_history():
    candles = candles_from_closes([1.0, 2.0, 3.0])
    assert sma(candles, 5) == [None, None, None]


@pytest.mark.parametrize("func", [sma, rsi, atr])
def test_malformed_input_is_unavailable_everywhere(func):
    candles = candles_from_closes([1.0, 2.0, 3.0, 4.0])
    assert func(candles, 0) == [None] * 4
    assert func(candles, -3) == [None] * 4
    assert func(candles[:1], 1) == [None]
    assert func([], 3) == []


def test_rsi_alternating_closes():
    candles = candles_from_closes([10.0, 11.0, 10.0, 11.0, 10.0])
    values = rsi(candles, 2)

    assert values[0] is None
    assert values[1] == pytest.approx(100.0)
    # avg gain 0.25, avg loss 0.5
    assert values[2] == pytest.approx(100 - 100 / 1.5)
    # avg gain 0.625, avg loss 0.25
    assert values[3] == pytest.approx(100 - 100 / 3.5)
    # avg gain 0.3125, avg loss 0.625
    assert values[4] == pytest.approx(100 - 100 / 1.5)


def test_rsi_one_way_and_flat_markets():
    rising = candles_from_closes([float(i) for i in range(1, 20)])
    falling = candles_from_closes([float(i) for i in range(20, 1, -1)])
    flat = candles_from_closes([5.0] * 20)

    assert rsi(rising, 14)[-1] == pytest.approx(100.0)
    assert rsi(falling, 14)[-1] == pytest.approx(0.0)
    # No losses at all reads as fully overbought
    assert rsi(flat, 14)[-1] == pytest.approx(100.0)


def test_rsi_stays_in_range():
    values = rsi(candles_from_closes(up_then_down()), 14)
    assert all(0.0 <= v <= 100.0 for v in values if v is not None)


def _bar(ts, high, low, close):
    return Candle(ts, close, high, low, close, 1.0)


def test_true_range_uses_previous_close():
    candles = [
        _bar(1, 12.0, 10.0, 11.0),
        _bar(2, 20.0, 19.0, 19.5),  # gap up above previous close
        _bar(3, 19.0, 15.0, 16.0),
    ]
    assert true_range(candles) == [2.0, 9.0, 4.5]


def test_atr_wilder_smoothing():
    candles = [
        _bar(1, 12.0, 10.0, 11.0),  # TR 2
        _bar(2, 13.0, 11.0, 12.0),  # TR 2
        _bar(3, 15.0, 12.0, 14.0),  # TR 3
        _bar(4, 14.0, 9.0, 10.0),   # TR 5
    ]
    assert atr(candles, 2) == [None, pytest.approx(2.0), pytest.approx(2.5), pytest.approx(3.75)]


def test_engine_warmup_indices():
    candles = candles_from_closes(up_then_down())
    indicated = IndicatorEngine().recompute(candles)

    assert len(indicated) == len(candles)
    for i, item in enumerate(indicated):
        assert item.candle is candles[i]
        assert (item.sma_short is None) == (i < 4)
        assert (item.sma_long is None) == (i < 15)
        assert (item.rsi is None) == (i < 13)
        assert (item.atr is None) == (i < 13)

    assert indicated[15].is_ready
    assert indicated[15].sma_long == pytest.approx(sum(c.close for c in candles[:16]) / 16)
    assert indicated[20].sma_short == pytest.approx(sum(c.close for c in candles[16:21]) / 5)


def test_engine_matches_batch_after_eviction():
    candles = candles_from_closes(up_then_down())
    engine = IndicatorEngine()
    buffer = CandleBuffer(capacity=30)

    for candle in candles:
        buffer.append(candle)
        rolling = engine.recompute(buffer.snapshot())
        batch = engine.recompute(candles[max(0, candles.index(candle) - 29):candles.index(candle) + 1])
        assert rolling == batch

    # Warm-up restarts at the start of the window
    window = engine.recompute(buffer.snapshot())
    assert window[0].candle is candles[-30]
    assert window[0].sma_short is None
    assert window[14].sma_long is None
    assert window[15].sma_long is not None


def test_engine_rejects_bad_periods():
    with pytest.raises(ConfigError):
        IndicatorEngine(sma_short=0)
    assert IndicatorEngine(sma_short=3, sma_long=20).warmup == 20


def test_engine_from_config():
    engine = IndicatorEngine.from_config(Config(sma_short=3, sma_long=30, rsi_period=21, log_dir=None))
    assert (engine.sma_short, engine.sma_long, engine.rsi_period, engine.atr_period) == (3, 30, 21, 14)
    assert engine.warmup == 30
