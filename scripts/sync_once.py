import argparse
import logging
import os
import sys

# Add repo root to Python import path so `import chartfeed...` works
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from chartfeed.context import build_context


def main() -> None:
    parser = argparse.ArgumentParser(description="Run one sync cycle and exit")
    parser.add_argument("tickers", nargs="*", help="Tickers to sync (default: all)")
    parser.add_argument("--no-bars", action="store_true", help="Only update trades.json")
    args = parser.parse_args()

    ctx = build_context()
    logging.basicConfig(level=ctx.settings.log_level.upper())

    tickers = args.tickers or ctx.symbols.tickers()
    try:
        for ticker in tickers:
            result = ctx.reconciler.sync(ticker, generate_bars=not args.no_bars)
            print(f"{result.ticker}: total={result.total_trades} new={result.new_trades} bars={result.bars}")
    finally:
        ctx.source.close()


if __name__ == "__main__":
    main()
