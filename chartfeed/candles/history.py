from __future__ import annotations

import logging

from chartfeed.candles.store import BarCache
from chartfeed.errors import BarsNotFoundError
from chartfeed.models.datafeed import History

log = logging.getLogger("history")

STATUS_OK = "ok"
STATUS_NO_DATA = "no_data"


def query_history(cache: BarCache, ticker: str, resolution: str, from_ts: int, to_ts: int) -> History:
    """
    Bars whose start falls in [from_ts, to_ts] (unix seconds), UDF column form.

    Never builds bars or fetches trades: reads only what sync produced.
    Missing bars come back as no_data, with nextTime pointing at the newest
    bar before the window when there is one.
    """
    try:
        bars = cache.get(ticker, resolution)
    except BarsNotFoundError as e:
        log.info("History no_data ticker=%s resolution=%s reason=%s", ticker, resolution, e)
        return History(s=STATUS_NO_DATA)

    t: list[int] = []
    o: list[float] = []
    h: list[float] = []
    l: list[float] = []
    c: list[float] = []
    v: list[float] = []
    next_time = None

    for bar in bars:
        ts = bar.unix_time
        if ts < from_ts:
            next_time = ts
            continue
        if ts > to_ts:
            break
        t.append(ts)
        o.append(bar.open)
        h.append(bar.high)
        l.append(bar.low)
        c.append(bar.close)
        v.append(bar.volume)

    if not t:
        return History(s=STATUS_NO_DATA, nextTime=next_time)

    return History(s=STATUS_OK, t=t, o=o, h=h, l=l, c=c, v=v)
