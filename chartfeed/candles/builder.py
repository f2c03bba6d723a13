from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from chartfeed.models.market import Bar, Trade

log = logging.getLogger("bar_builder")

# Buckets are counted from 0001-01-01 UTC, so weekly bars start on Mondays.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def floor_to_bucket(ts: datetime, minutes: int) -> datetime:
    """Round timestamp down to the start of its `minutes`-wide bucket (UTC)."""
    bucket = timedelta(minutes=minutes)
    ts = ts.astimezone(timezone.utc)
    return ZERO_TIME + ((ts - ZERO_TIME) // bucket) * bucket


def build_bars(
    trades: Sequence[Trade],
    minutes: int,
    ignore_before: Optional[datetime] = None,
) -> list[Bar]:
    """
    Build closed bars from a newest-first trade list.

    - walks trades oldest -> newest
    - skips trades before `ignore_before` (known test/bad data)
    - a trade past the current bar's end closes it and opens a new bar at
      its own bucket start, so quiet periods produce no bars
    - the last bar is only emitted once a later trade closes it; a bar still
      open at the end of the list is dropped
    """
    bucket = timedelta(minutes=minutes)
    bars: list[Bar] = []
    current: Bar | None = None

    for i in range(len(trades) - 1, -1, -1):
        t = trades[i]
        if ignore_before is not None and t.time < ignore_before:
            continue

        if current is not None and t.time > current.end:
            bars.append(current)
            current = None

        if current is None:
            start = floor_to_bucket(t.time, minutes)
            current = Bar(start=start, end=start + bucket)

        current.update(price=t.price, amount=t.amount)

    if current is not None:
        log.debug(
            "Dropping open bar start=%s trades=%d (not closed yet)",
            current.start.isoformat(),
            current.trades,
        )

    return bars
