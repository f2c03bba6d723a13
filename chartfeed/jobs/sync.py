from __future__ import annotations

import logging
import threading
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from chartfeed.candles.builder import ZERO_TIME, build_bars
from chartfeed.candles.split import apply_split
from chartfeed.candles.store import BarCache
from chartfeed.config import SplitConfig
from chartfeed.errors import FetchError, StorageError, SymbolNotFoundError
from chartfeed.models.market import Resolution, Trade
from chartfeed.providers.base import TradeSource
from chartfeed.storage import JsonFileStore
from chartfeed.symbols import SymbolTable

log = logging.getLogger("sync")

# Smallest step a datetime can take; makes the fetch lower bound exclusive.
WATERMARK_STEP = timedelta(microseconds=1)


@dataclass
class SyncResult:
    ticker: str
    total_trades: int
    new_trades: int
    bars: Dict[str, int] = field(default_factory=dict)


def watermark(trades: Sequence[Trade]) -> datetime:
    """Fetch lower bound: just past the newest known trade, or the zero instant."""
    if not trades:
        return ZERO_TIME
    return trades[0].time + WATERMARK_STEP


class SyncReconciler:
    """
    Keeps {data_dir}/{ticker}/trades.json in step with the trade source and
    rebuilds every resolution's bars after each sync.

    One cycle for one ticker:
      1. load the persisted history (missing file -> empty history)
      2. watermark = newest trade time + 1us
      3. fetch trades at or after the watermark
      4. prepend them to the history
      5. persist the merged history
      6. split-adjust, build bars per resolution, save + cache them

    Any failure in 1-5 raises and leaves the cache alone. Cycles for the same
    ticker never overlap (one lock per ticker).
    """

    def __init__(
        self,
        symbols: SymbolTable,
        storage: JsonFileStore,
        cache: BarCache,
        source: TradeSource,
        resolutions: Sequence[Resolution],
        split: SplitConfig,
        ignore_trades_before: Optional[datetime] = None,
    ):
        self.symbols = symbols
        self.storage = storage
        self.cache = cache
        self.source = source
        self.resolutions = list(resolutions)
        self.split = split
        self.ignore_trades_before = ignore_trades_before
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, ticker: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(ticker, threading.Lock())

    def sync(self, ticker: str, generate_bars: bool = True) -> SyncResult:
        symbol = self.symbols.find(ticker)
        if symbol is None:
            raise SymbolNotFoundError(ticker)
        # "HaloDEX:HALO" and "halo" share one lock, one data dir and one cache key.
        ticker = symbol.ticker.lower()

        with self._lock_for(ticker):
            log.info("Syncing trades ticker=%s", ticker)
            trades = self._load(ticker)
            log.info("Loaded existing trades ticker=%s count=%d", ticker, len(trades))

            since = watermark(trades)
            try:
                new_trades = self.source.fetch_trades(symbol.address, symbol.base_address, since)
            except Exception as e:
                log.error("Failed to retrieve trades ticker=%s error=%r", ticker, e)
                raise FetchError(f"fetch failed for {ticker}: {e!r}") from e

            trades = list(new_trades) + trades

            try:
                self.storage.save_trades(ticker, trades)
            except OSError as e:
                log.error("Trades file save failed ticker=%s error=%r", ticker, e)
                raise StorageError(f"could not save trades for {ticker}: {e}") from e

            log.info(
                "Sync complete ticker=%s total_trades=%d new=%d",
                ticker,
                len(trades),
                len(new_trades),
            )

            result = SyncResult(ticker=ticker, total_trades=len(trades), new_trades=len(new_trades))
            if generate_bars:
                result.bars = self.generate_bars(ticker, trades)
            return result

    def _load(self, ticker: str) -> List[Trade]:
        try:
            return self.storage.load_trades(ticker)
        except FileNotFoundError:
            try:
                self.storage.symbol_dir(ticker).mkdir(parents=True, exist_ok=True)
            except OSError as e:
                log.error("Failed to create directory ticker=%s error=%r", ticker, e)
                raise StorageError(f"could not create data dir for {ticker}: {e}") from e
            return []
        except (OSError, ValueError, KeyError, TypeError) as e:
            log.error("Failed to load trades ticker=%s error=%r", ticker, e)
            raise StorageError(f"could not load trades for {ticker}: {e}") from e

    def generate_bars(self, ticker: str, trades: List[Trade]) -> Dict[str, int]:
        """
        Split-adjust `trades` (in place) once, then build, save and cache bars
        for every resolution. A resolution whose file can't be written keeps
        its previous cache entry.
        """
        log.info("Generating bars ticker=%s", ticker)
        apply_split(ticker, trades, self.split)

        counts: Dict[str, int] = {}
        for res in self.resolutions:
            bars = build_bars(trades, res.minutes, self.ignore_trades_before)
            try:
                self.storage.save_bars(ticker, res.label, bars)
            except OSError as e:
                log.error(
                    "Failed to save bars ticker=%s resolution=%s error=%r",
                    ticker,
                    res.label,
                    e,
                )
                continue
            self.cache.replace(ticker, res.label, bars)
            counts[res.label] = len(bars)
            log.info("Generated resolution ticker=%s resolution=%s bars=%d", ticker, res.label, len(bars))
        return counts

    def sync_all(self) -> Dict[str, Optional[SyncResult]]:
        """Sync every configured ticker in turn; a failure only skips that ticker."""
        results: Dict[str, Optional[SyncResult]] = {}
        for ticker in self.symbols.tickers():
            results[ticker] = self.sync_safely(ticker)
        return results

    def sync_safely(self, ticker: str) -> Optional[SyncResult]:
        try:
            return self.sync(ticker)
        except Exception as e:
            # Keep other tickers (and the loop) going; next tick retries.
            log.error("Sync failed ticker=%s error=%s", ticker, repr(e))
            log.error(traceback.format_exc())
            return None
