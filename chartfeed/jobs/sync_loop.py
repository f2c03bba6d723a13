from __future__ import annotations

import asyncio
import logging
import traceback
from typing import Dict, Optional

from chartfeed.jobs.sync import SyncReconciler, SyncResult

log = logging.getLogger("sync_loop")


async def sync_all_async(reconciler: SyncReconciler) -> Dict[str, Optional[SyncResult]]:
    """
    One pass over every ticker. Tickers run side by side in worker threads;
    each ticker's own cycle is still sequential (reconciler lock).
    """
    tickers = reconciler.symbols.tickers()
    results = await asyncio.gather(
        *(asyncio.to_thread(reconciler.sync_safely, t) for t in tickers)
    )
    return dict(zip(tickers, results))


async def sync_loop(reconciler: SyncReconciler, interval_mins: int, run_first: bool = True) -> None:
    """
    Background loop:
    sync all tickers on startup (optional), then every `interval_mins` minutes.
    """
    if not run_first:
        await asyncio.sleep(interval_mins * 60)

    while True:
        try:
            results = await sync_all_async(reconciler)
            failed = [t for t, r in results.items() if r is None]
            log.info("Sync pass done tickers=%d failed=%s", len(results), failed)
        except Exception as e:
            # Keep loop alive even if a pass blows up, but log the error.
            log.error("Sync pass failed error=%s", repr(e))
            log.error(traceback.format_exc())

        await asyncio.sleep(interval_mins * 60)
