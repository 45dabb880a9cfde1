"""Tests for the bounded candle buffer."""

import pytest

from papertrader.core.buffer import CandleBuffer, DEFAULT_CAPACITY
from papertrader.core.errors import ConfigError

from conftest import candles_from_closes


def test_default_capacity():
    assert CandleBuffer().capacity == DEFAULT_CAPACITY == 192


def test_length_never_exceeds_capacity():
    candles = candles_from_closes([float(i + 1) for i in range(50)])
    buffer = CandleBuffer(capacity=7)

    for i, candle in enumerate(candles, start=1):
        buffer.append(candle)
        assert len(buffer) == min(i, 7)
        assert list(buffer.snapshot()) == candles[max(0, i - 7):i]


def test_fewer_than_capacity_keeps_everything():
    candles = candles_from_closes([1.0, 2.0, 3.0])
    buffer = CandleBuffer(capacity=10)
    buffer.extend(candles)
    assert list(buffer.snapshot()) == candles
    assert buffer.latest is candles[-1]


def test_fifo_eviction_order():
    candles = candles_from_closes([1.0, 2.0, 3.0, 4.0])
    buffer = CandleBuffer(capacity=2)
    buffer.extend(candles)
    assert [c.close for c in buffer] == [3.0, 4.0]


def test_snapshot_is_detached():
    candles = candles_from_closes([1.0, 2.0, 3.0])
    buffer = CandleBuffer(capacity=3)
    buffer.extend(candles[:2])
    snap = buffer.snapshot()
    buffer.append(candles[2])
    assert len(snap) == 2
    assert isinstance(snap, tuple)


def test_clear_and_empty_latest():
    buffer = CandleBuffer(capacity=3)
    buffer.extend(candles_from_closes([1.0, 2.0]))
    buffer.clear()
    assert len(buffer) == 0
    assert buffer.latest is None


def test_invalid_capacity():
    with pytest.raises(ConfigError):
        CandleBuffer(capacity=0)
