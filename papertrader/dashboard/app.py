"""
Control API - Flask + Socket.IO front for a trading session.

HTTP:
    POST /start         {symbol, capital} -> start the session
    POST /stop          stop the session
    GET  /trades        trade log
    GET  /update        run one live tick
    GET  /api/state     session snapshot
    GET  /api/candles   candles in the rolling window with indicator values
    GET  /api/indicators  aligned indicator series

Socket.IO:
    client 'update' (or a plain 'update' message) runs one live tick;
    the server emits 'update' after every ingested bar and 'log' for
    every log line.
"""

from flask import Flask, jsonify, request
from flask_socketio import SocketIO
from flask_cors import CORS
from datetime import datetime
from typing import Optional

from ..bot_logger import BotLogger
from ..config import Config
from ..core.errors import ConfigError, StateError, TransportError
from ..data.fetcher import BinanceFetcher
from ..runners.session import TradingSession


def create_app(
    session: Optional[TradingSession] = None,
    config: Optional[Config] = None
):
    """
    Create and configure the Flask control application.

    Args:
        session: Session to control; built from config against Binance if None
        config: Settings used when building the session

    Returns:
        (app, socketio)
    """
    config = (config or Config()).validate()

    app = Flask(__name__)
    app.config['SECRET_KEY'] = 'papertrader-secret'

    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", async_mode='threading')

    def web_log(msg: str):
        """Forward log lines to connected clients."""
        socketio.emit('log', {
            'time': datetime.now().strftime("%H:%M:%S"),
            'message': msg
        })

    if session is None:
        logger = BotLogger(log_dir=config.log_dir, web_logger=web_log, echo=config.verbose)
        fetcher = BinanceFetcher(
            interval=config.interval,
            base_url=config.base_url,
            timeout=config.request_timeout,
            logger=logger.log_stream
        )
        session = TradingSession.from_config(config, fetcher, fetcher, logger=logger)

    def publish(payload: dict):
        socketio.emit('update', payload)

    session.on_update = publish
    app.extensions['papertrader.session'] = session

    @app.errorhandler(ConfigError)
    def handle_config_error(e):
        return jsonify({'error': str(e)}), 400

    @app.errorhandler(TransportError)
    def handle_transport_error(e):
        return jsonify({'error': str(e)}), 502

    @app.errorhandler(StateError)
    def handle_state_error(e):
        return jsonify({'error': str(e)}), 409

    @app.route('/start', methods=['POST'])
    def start():
        """Start the session with {symbol, capital}."""
        body = request.get_json(silent=True) or {}
        snapshot = session.start(body.get('symbol'), body.get('capital'))
        return jsonify({
            'status': 'started',
            'symbol': snapshot['symbol'],
            'capital': snapshot['initialCapital']
        })

    @app.route('/stop', methods=['POST'])
    def stop():
        return jsonify(session.stop())

    @app.route('/trades')
    def get_trades():
        return jsonify(session.trade_log())

    @app.route('/update')
    def update():
        """Run one live tick."""
        if not session.running:
            return jsonify({'status': 'idle'})
        session.tick()
        return jsonify({'status': 'updated'})

    @app.route('/api/state')
    def get_state():
        return jsonify(session.snapshot())

    @app.route('/api/candles')
    def get_candles():
        return jsonify([c.to_dict() for c in session.indicated])

    @app.route('/api/indicators')
    def get_indicators():
        """Indicator series aligned to /api/candles (null during warm-up)."""
        indicated = session.indicated
        return jsonify({
            'times': [c.timestamp * 1000 for c in indicated],
            'smaShort': [c.sma_short for c in indicated],
            'smaLong': [c.sma_long for c in indicated],
            'rsi': [c.rsi for c in indicated],
            'atr': [c.atr for c in indicated]
        })

    @socketio.on('update')
    def handle_update(data=None):
        """Client-requested tick; the result is pushed as an 'update' event."""
        session.tick()

    @socketio.on('message')
    def handle_message(message):
        if message == 'update':
            session.tick()

    return app, socketio
