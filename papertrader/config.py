"""
Configuration for the paper trader.

Defaults: 192 fifteen-minute candles from Binance, SMA 5/16, RSI 14 with
70/30 bounds, ATR 14.
"""

from dataclasses import dataclass, asdict, fields
from typing import List, Optional
import argparse

from .core.errors import ConfigError


@dataclass
class Config:
    # Market data
    interval: str = '15m'
    base_url: str = 'https://api.binance.com'
    request_timeout: float = 10.0

    # Rolling window and indicators
    capacity: int = 192
    sma_short: int = 5
    sma_long: int = 16
    rsi_period: int = 14
    atr_period: int = 14

    # Signal rule
    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0

    # Control surface
    host: str = '0.0.0.0'
    port: int = 3000

    # Headless runner
    check_interval: float = 60.0

    # Logging
    log_dir: Optional[str] = 'logs'
    verbose: bool = True

    def validate(self) -> 'Config':
        """Raise ConfigError on the first bad value, return self otherwise."""
        for name in ('capacity', 'sma_short', 'sma_long', 'rsi_period', 'atr_period'):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.sma_short >= self.sma_long:
            raise ConfigError(
                f"sma_short ({self.sma_short}) must be shorter than sma_long ({self.sma_long})"
            )
        if not 0 <= self.rsi_oversold < self.rsi_overbought <= 100:
            raise ConfigError(
                f"need 0 <= rsi_oversold < rsi_overbought <= 100, "
                f"got {self.rsi_oversold}/{self.rsi_overbought}"
            )
        if self.request_timeout <= 0:
            raise ConfigError(f"request_timeout must be > 0, got {self.request_timeout}")
        if self.check_interval <= 0:
            raise ConfigError(f"check_interval must be > 0, got {self.check_interval}")
        if not 0 < self.port < 65536:
            raise ConfigError(f"port out of range: {self.port}")
        return self

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser):
        """Register one --option per field, defaulting to the dataclass value."""
        for f in fields(cls):
            flag = '--' + f.name.replace('_', '-')
            if f.type is bool:
                parser.add_argument(flag, dest=f.name, action=argparse.BooleanOptionalAction,
                                    default=f.default)
            elif f.name == 'log_dir':
                parser.add_argument(flag, dest=f.name, default=f.default,
                                    help="Log directory ('none' disables log files)")
            else:
                kind = f.type if f.type in (int, float) else str
                parser.add_argument(flag, dest=f.name, type=kind, default=f.default)

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> 'Config':
        values = {f.name: getattr(args, f.name) for f in fields(cls) if hasattr(args, f.name)}
        if isinstance(values.get('log_dir'), str) and values['log_dir'].lower() == 'none':
            values['log_dir'] = None
        return cls(**values).validate()

    @classmethod
    def from_args(cls, argv: Optional[List[str]] = None) -> 'Config':
        parser = argparse.ArgumentParser(description="Paper trader configuration")
        cls.add_arguments(parser)
        return cls.from_namespace(parser.parse_args(argv))
