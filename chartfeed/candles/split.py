from __future__ import annotations

import logging
from dataclasses import replace

from chartfeed.config import SplitConfig
from chartfeed.models.market import Trade

log = logging.getLogger("split")


def apply_split(ticker: str, trades: list[Trade], split: SplitConfig) -> int:
    """
    Rescale pre-split trades so the series reads as post-split units.

    Mutates `trades` in place: each trade strictly before split.cutover gets
    amount * split.amount and price / split.amount. Returns how many changed.
    Call once per sync cycle, before building bars.
    """
    if not split.ticker or split.ticker.upper() != ticker.upper():
        return 0
    if split.amount <= 0 or split.cutover is None:
        return 0

    adjusted = 0
    for i, t in enumerate(trades):
        if t.time < split.cutover:
            trades[i] = replace(t, amount=t.amount * split.amount, price=t.price / split.amount)
            adjusted += 1

    if adjusted:
        log.info(
            "Split adjusted ticker=%s ratio=%s cutover=%s trades=%d",
            ticker,
            split.amount,
            split.cutover.isoformat(),
            adjusted,
        )
    return adjusted
