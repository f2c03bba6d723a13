from __future__ import annotations

import logging
import threading
from typing import Dict, List, Sequence, Tuple

from chartfeed.errors import BarsNotFoundError
from chartfeed.models.market import Bar, Resolution
from chartfeed.storage import JsonFileStore

log = logging.getLogger("bar_cache")


class BarCache:
    """
    In-memory bars per (ticker, resolution label), backed by the bar files.

    bars[(ticker, label)] -> closed bars, oldest first

    - read path: get() serves from memory, loading the bar file on a miss
    - write path: replace() swaps the whole list after a sync
    - nothing is evicted; memory grows with symbols x resolutions, which is
      fine for a handful of tickers but is the ceiling for larger tables
    - one lock guards the whole key space (lazy load vs. sync replacement)
    """

    def __init__(self, storage: JsonFileStore, resolutions: Sequence[Resolution]):
        self.storage = storage
        self.resolutions: Dict[str, Resolution] = {r.label: r for r in resolutions}
        self._bars: Dict[Tuple[str, str], List[Bar]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(ticker: str, label: str) -> Tuple[str, str]:
        return ticker.lower(), label

    def get(self, ticker: str, label: str) -> List[Bar]:
        key = self._key(ticker, label)
        with self._lock:
            bars = self._bars.get(key)
            if bars is not None:
                return bars

            resolution = self.resolutions.get(label)
            if resolution is None:
                raise BarsNotFoundError(ticker, label, "unsupported resolution")

            log.info("Loading bars from storage ticker=%s resolution=%s", key[0], label)
            try:
                bars = self.storage.load_bars(key[0], resolution)
            except FileNotFoundError:
                raise BarsNotFoundError(ticker, label, "no bar file") from None
            except (OSError, ValueError, KeyError, TypeError) as e:
                log.warning("Failed to load bars ticker=%s resolution=%s error=%r", key[0], label, e)
                raise BarsNotFoundError(ticker, label, "failed to load") from e

            self._bars[key] = bars
            return bars

    def replace(self, ticker: str, label: str, bars: List[Bar]) -> None:
        with self._lock:
            self._bars[self._key(ticker, label)] = bars

    def has(self, ticker: str, label: str) -> bool:
        with self._lock:
            return self._key(ticker, label) in self._bars

    def keys(self) -> List[Tuple[str, str]]:
        with self._lock:
            return sorted(self._bars)
