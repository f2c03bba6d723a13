from __future__ import annotations

import os
import random
import sys
from datetime import datetime, timedelta, timezone

# Add repo root to Python import path so `import chartfeed...` works
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from chartfeed.candles.builder import build_bars
from chartfeed.candles.resolutions import parse_resolutions
from chartfeed.models.market import Trade


def run(trades_count: int = 2000, labels: tuple = ("30", "60", "360", "1D")) -> None:
    """
    Generates fake DEX trades and prints the bars built from them.

    - One trade every 1-20 minutes, with the odd multi-hour quiet spell.
    - Price does a random walk (moves up/down a bit each trade).
    - Trades are handed to build_bars newest first, like the trades file.
    """
    ts = datetime.now(timezone.utc).replace(second=0, microsecond=0) - timedelta(days=30)
    price = 0.05

    trades: list[Trade] = []
    for _ in range(trades_count):
        gap = random.randint(1, 20)
        if random.random() < 0.01:
            gap += 6 * 60
        ts += timedelta(minutes=gap)
        price = max(0.0001, price + random.uniform(-0.001, 0.001))
        trades.append(Trade(time=ts, price=round(price, 6), amount=float(random.randint(1, 5000))))

    trades.reverse()
    print(f"Simulated {len(trades)} trades {trades[-1].time.isoformat()} -> {trades[0].time.isoformat()}\n")

    for res in parse_resolutions(labels):
        bars = build_bars(trades, res.minutes)
        print(f"[{res.label}] {len(bars)} closed bars")
        for bar in bars[-3:]:
            print(
                f"  {bar.start.isoformat()} -> "
                f"O={bar.open} H={bar.high} L={bar.low} C={bar.close} V={bar.volume}"
            )


if __name__ == "__main__":
    run()
