from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from chartfeed.models.market import Bar, Resolution, Trade


# -------------------------
# Row <-> model conversion
# -------------------------
def trade_to_row(t: Trade) -> dict:
    return {"time": t.time.isoformat(), "price": t.price, "amount": t.amount}


def trade_from_row(row: dict) -> Trade:
    dt = datetime.fromisoformat(str(row["time"]).replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return Trade(
        time=dt.astimezone(timezone.utc),
        price=float(row["price"]),
        amount=float(row["amount"]),
    )


def bar_to_row(b: Bar) -> dict:
    # Same short keys the UDF history response uses.
    return {"t": b.unix_time, "o": b.open, "h": b.high, "l": b.low, "c": b.close, "v": b.volume}


def bar_from_row(row: dict, duration: timedelta) -> Bar:
    start = datetime.fromtimestamp(int(row["t"]), tz=timezone.utc)
    return Bar(
        start=start,
        end=start + duration,
        open=float(row["o"]),
        high=float(row["h"]),
        low=float(row["l"]),
        close=float(row["c"]),
        volume=float(row["v"]),
    )


class JsonFileStore:
    """
    Per-symbol JSON files under one data directory.

    Layout:
      {data_dir}/{ticker}/trades.json      -> newest-first trade history
      {data_dir}/{ticker}/{resolution}.json -> oldest-first bars
    """

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)

    def symbol_dir(self, ticker: str) -> Path:
        return self.data_dir / ticker.lower()

    def trades_path(self, ticker: str) -> Path:
        return self.symbol_dir(ticker) / "trades.json"

    def bars_path(self, ticker: str, label: str) -> Path:
        return self.symbol_dir(ticker) / f"{label}.json"

    # -------------------------
    # Raw JSON
    # -------------------------
    def read_json(self, path: Path) -> Any:
        """Raises FileNotFoundError if missing; OSError/ValueError otherwise."""
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def write_json(self, path: Path, payload: Any) -> None:
        """Write via temp file + rename so readers never see half a file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, separators=(",", ":"))
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    # -------------------------
    # Trades
    # -------------------------
    def load_trades(self, ticker: str) -> list[Trade]:
        rows = self.read_json(self.trades_path(ticker))
        if not isinstance(rows, list):
            raise ValueError(f"trades file for {ticker} is not a JSON array")
        return [trade_from_row(r) for r in rows]

    def save_trades(self, ticker: str, trades: list[Trade]) -> None:
        self.write_json(self.trades_path(ticker), [trade_to_row(t) for t in trades])

    # -------------------------
    # Bars
    # -------------------------
    def load_bars(self, ticker: str, resolution: Resolution) -> list[Bar]:
        rows = self.read_json(self.bars_path(ticker, resolution.label))
        if not isinstance(rows, list):
            raise ValueError(f"bars file for {ticker}/{resolution.label} is not a JSON array")
        return [bar_from_row(r, resolution.duration) for r in rows]

    def save_bars(self, ticker: str, label: str, bars: list[Bar]) -> None:
        self.write_json(self.bars_path(ticker, label), [bar_to_row(b) for b in bars])
