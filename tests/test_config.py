"""Tests for configuration, logging and the command line."""

import pytest

from papertrader import __main__ as cli
from papertrader.bot_logger import BotLogger
from papertrader.config import Config
from papertrader.core.errors import ConfigError
from papertrader.runners import paper

from conftest import FakeFeed, candles_from_closes


def test_defaults_are_valid():
    config = Config().validate()
    assert (config.capacity, config.sma_short, config.sma_long) == (192, 5, 16)
    assert (config.rsi_period, config.atr_period) == (14, 14)
    assert (config.rsi_overbought, config.rsi_oversold) == (70.0, 30.0)
    assert config.to_dict()['port'] == 3000


@pytest.mark.parametrize("kwargs", [
    {'capacity': 0},
    {'sma_short': 16, 'sma_long': 16},
    {'rsi_period': 0},
    {'rsi_overbought': 20, 'rsi_oversold': 30},
    {'request_timeout': 0},
    {'port': 70000},
])
def test_invalid_config(kwargs):
    with pytest.raises(ConfigError):
        Config(**kwargs).validate()


def test_from_args():
    config = Config.from_args([
        '--capacity', '50', '--sma-long', '20', '--rsi-oversold', '25.5',
        '--log-dir', 'none', '--no-verbose'
    ])
    assert config.capacity == 50
    assert config.sma_long == 20
    assert config.rsi_oversold == 25.5
    assert config.log_dir is None
    assert config.verbose is False


def test_from_args_validates():
    with pytest.raises(ConfigError):
        Config.from_args(['--sma-short', '20'])


def test_logger_writes_files_and_forwards(tmp_path):
    forwarded = []
    logger = BotLogger(session_id=3, log_dir=str(tmp_path), web_logger=forwarded.append)

    logger.log_main("session started")
    logger.log_stream("tick 100.00")

    files = logger.get_log_files()
    main = open(files['main'], encoding='utf-8').read()
    stream = open(files['stream'], encoding='utf-8').read()
    assert files['main'].endswith('session_3_main.log')
    assert 'Session 3' in main
    assert 'session started' in main
    assert 'tick 100.00' in stream
    assert 'tick 100.00' not in main
    assert forwarded == ["session started", "tick 100.00"]


def test_logger_without_files(tmp_path, capsys):
    logger = BotLogger(log_dir=None, echo=True)
    logger.log_main("hello")

    assert logger.get_log_files() == {'main': None, 'stream': None}
    assert "hello" in capsys.readouterr().out


def test_cli_parser():
    args = cli.build_parser().parse_args(['paper', 'ethusdt', '250', '--once', '--check-interval', '5'])
    assert args.command == 'paper'
    assert args.symbol == 'ethusdt'
    assert args.capital == 250.0
    assert args.once
    assert args.check_interval == 5.0


def test_cli_reports_config_errors(capsys):
    assert cli.main(['serve', '--sma-short', '20']) == 1
    assert 'sma_short' in capsys.readouterr().err


def test_cli_paper_once(monkeypatch):
    calls = []
    monkeypatch.setattr(paper, 'paper_trade', lambda *args, **kwargs: calls.append((args, kwargs)))

    assert cli.main(['paper', 'BTCUSDT', '1000', '--once', '--log-dir', 'none']) == 0

    (args, kwargs), = calls
    assert args == ('BTCUSDT', 1000.0)
    assert kwargs['run_forever'] is False
    assert kwargs['config'].log_dir is None


class ClosableFeed(FakeFeed):
    closed = False

    def close(self):
        self.closed = True


def test_paper_trade_single_tick(monkeypatch, capsys):
    feed = ClosableFeed(history=candles_from_closes([100.0 + (i % 3) for i in range(30)]), prices=[101.5])
    monkeypatch.setattr(paper, 'BinanceFetcher', lambda **kwargs: feed)
    monkeypatch.setattr(paper.signal, 'signal', lambda *args: None)

    session = paper.paper_trade('btcusdt', 1000, config=Config(log_dir=None, verbose=False), run_forever=False)

    assert feed.closed
    assert not session.running
    assert session.symbol == 'BTCUSDT'
    assert session.candles[-1].close == 101.5
    assert 'PAPER TRADING SUMMARY' in capsys.readouterr().out
