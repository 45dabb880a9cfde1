"""
Command line entry point.

    python -m papertrader serve [--port 3000] [...]
    python -m papertrader paper BTCUSDT 1000 [--check-interval 60] [...]
"""

import argparse
import sys

from .config import Config
from .core.errors import PaperTraderError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='papertrader', description="SMA/RSI paper trader")
    sub = parser.add_subparsers(dest='command', required=True)

    serve = sub.add_parser('serve', help="Run the HTTP + Socket.IO control API")
    Config.add_arguments(serve)

    paper = sub.add_parser('paper', help="Paper trade headless until Ctrl+C")
    paper.add_argument('symbol', help="Binance symbol, e.g. BTCUSDT")
    paper.add_argument('capital', type=float, help="Starting paper capital")
    paper.add_argument('--once', action='store_true', help="Run a single tick and exit")
    Config.add_arguments(paper)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_namespace(args)

        if args.command == 'serve':
            from .dashboard import launch_dashboard
            launch_dashboard(config)
        elif args.command == 'paper':
            from .runners.paper import paper_trade
            paper_trade(args.symbol, args.capital, config=config, run_forever=not args.once)

    except PaperTraderError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
