"""
BinanceFetcher - Candles and prices from the Binance public REST API.

No API key is needed. Failures are raised as TransportError and never
retried here; whoever drives the session decides whether to try again.
"""

from typing import Callable, List, Optional
import math
import requests

from ..core.candle import Candle
from ..core.errors import TransportError
from .base import HistoryProvider, PriceProvider


class BinanceFetcher(HistoryProvider, PriceProvider):
    """
    History and price provider backed by api.binance.com.

    Example:
        >>> with BinanceFetcher() as fetcher:
        ...     candles = fetcher.fetch_history('BTCUSDT', limit=192)
        ...     price = fetcher.fetch_latest_price('BTCUSDT')

    Supported Intervals:
        '1m', '5m', '15m', '1h', '4h', '1d'
    """

    BASE_URL = "https://api.binance.com"
    MAX_CANDLES_PER_REQUEST = 1000  # Binance API limit

    INTERVALS = ('1m', '5m', '15m', '1h', '4h', '1d')

    def __init__(
        self,
        interval: str = '15m',
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        logger: Optional[Callable[[str], None]] = None
    ):
        """
        Initialize the fetcher.

        Args:
            interval: Kline interval used for history
            base_url: API root, defaults to BASE_URL
            timeout: Per-request timeout in seconds
            logger: Custom logging function
        """
        if interval not in self.INTERVALS:
            raise ValueError(
                f"Invalid interval '{interval}'. "
                f"Choose from: {list(self.INTERVALS)}"
            )

        self.interval = interval
        self.base_url = (base_url or self.BASE_URL).rstrip('/')
        self.timeout = timeout
        self._log = logger or print

        self._session = requests.Session()
        self._session.headers.update({'User-Agent': 'papertrader/1.0'})

    def _get(self, path: str, params: dict):
        url = f"{self.base_url}{path}"
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise TransportError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"GET {path} returned invalid JSON: {e}") from e

    def fetch_history(self, symbol: str, limit: int = 192) -> List[Candle]:
        limit = max(1, min(limit, self.MAX_CANDLES_PER_REQUEST))
        rows = self._get('/api/v3/klines', {
            'symbol': symbol,
            'interval': self.interval,
            'limit': limit
        })

        try:
            candles = [Candle.from_kline(row) for row in rows]
        except (TypeError, ValueError, IndexError) as e:
            raise TransportError(f"Malformed kline data for {symbol}: {e}") from e

        candles.sort(key=lambda c: c.timestamp)
        self._log(f"📦 Fetched {len(candles)} {self.interval} candles for {symbol}")
        return candles[-limit:]

    def fetch_latest_price(self, symbol: str) -> float:
        data = self._get('/api/v3/ticker/price', {'symbol': symbol})

        try:
            price = float(data['price'])
        except (TypeError, KeyError, ValueError) as e:
            raise TransportError(f"Malformed ticker data for {symbol}: {e}") from e

        if not math.isfinite(price) or price <= 0:
            raise TransportError(f"Invalid price for {symbol}: {data['price']!r}")
        return price

    def close(self):
        """Close the session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
