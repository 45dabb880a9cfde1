"""
Dashboard - Web control surface for a paper trading session.
"""

from typing import Optional

from ..config import Config


def launch_dashboard(config: Optional[Config] = None):
    """
    Launch the control API and Socket.IO server.

    Args:
        config: Settings (host, port, data source, logging)

    Example:
        >>> from papertrader import launch_dashboard
        >>> launch_dashboard(Config(port=3000))
    """
    from .app import create_app

    config = (config or Config()).validate()
    app, socketio = create_app(config=config)

    print(f"🌐 Paper trader running at http://localhost:{config.port}")
    socketio.run(
        app,
        host=config.host,
        port=config.port,
        debug=False,
        use_reloader=False,
        allow_unsafe_werkzeug=True
    )
