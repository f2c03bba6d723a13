from __future__ import annotations

import threading
import time
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from chartfeed.candles.builder import floor_to_bucket
from chartfeed.config import Settings, SplitConfig
from chartfeed.models.market import Trade
from chartfeed.providers.base import TradeSource

# 2019-ish instant aligned to every bucket the tests use (30, 60, 100, 360 and
# 1440 all divide 7200), so minute offsets land on bucket boundaries.
BASE = floor_to_bucket(datetime(2019, 6, 1, tzinfo=timezone.utc), 7200)


def at(minutes: float) -> datetime:
    return BASE + timedelta(minutes=minutes)


def trades_desc(*rows: tuple) -> list[Trade]:
    """(minute, price, amount) rows in any order -> newest-first trades."""
    out = [Trade(time=at(m), price=p, amount=a) for m, p, a in rows]
    out.sort(key=lambda t: t.time, reverse=True)
    return out


def make_settings(data_dir: str, **overrides) -> Settings:
    settings = Settings(
        app_env="test",
        log_level="WARNING",
        provider="FAKE",
        exchange_name="HaloDEX",
        host="127.0.0.1",
        port=3000,
        data_dir=data_dir,
        sync_interval_mins=5,
        sync_on_startup=False,
        resolutions=["30", "60", "360", "1D"],
        split=SplitConfig(ticker="", amount=0.0, cutover=None),
        ignore_trades_before=None,
        halodex_base_url="http://halodex.test",
        halodex_timeout_seconds=1.0,
        halodex_page_size=500,
    )
    return replace(settings, **overrides)


class FakeSource(TradeSource):
    """
    Trade source that serves queued batches and records every call.

    Each fetch pops the next batch (empty list when none left), filtered to
    trades at or after `since` like a real source.
    """

    def __init__(self, *batches: list, error: Exception | None = None, delay: float = 0.0):
        self.batches = list(batches)
        self.error = error
        self.delay = delay
        self.calls: list[tuple] = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()
        self.closed = False

    def fetch_trades(self, token_address, base_token_address, since):
        with self._lock:
            self.calls.append((token_address, base_token_address, since))
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            if self.error is not None:
                raise self.error
            with self._lock:
                batch = self.batches.pop(0) if self.batches else []
            return [t for t in batch if t.time >= since]
        finally:
            with self._lock:
                self.active -= 1

    def close(self) -> None:
        self.closed = True
