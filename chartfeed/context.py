from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from chartfeed.candles.resolutions import parse_resolutions
from chartfeed.candles.store import BarCache
from chartfeed.config import Settings, get_settings
from chartfeed.jobs.sync import SyncReconciler
from chartfeed.models.market import Resolution
from chartfeed.providers.base import TradeSource
from chartfeed.providers.loader import get_provider
from chartfeed.storage import JsonFileStore
from chartfeed.symbols import SymbolTable, default_symbols


@dataclass
class AppContext:
    """Everything the running API process shares: built once at startup."""
    settings: Settings
    resolutions: List[Resolution]
    symbols: SymbolTable
    storage: JsonFileStore
    cache: BarCache
    source: TradeSource
    reconciler: SyncReconciler

    @property
    def resolution_labels(self) -> List[str]:
        return [r.label for r in self.resolutions]


def build_context(
    settings: Optional[Settings] = None,
    source: Optional[TradeSource] = None,
    symbols: Optional[SymbolTable] = None,
) -> AppContext:
    settings = settings or get_settings()
    resolutions = parse_resolutions(settings.resolutions)
    labels = [r.label for r in resolutions]

    symbols = symbols or SymbolTable(default_symbols(labels, settings.exchange_name))
    storage = JsonFileStore(settings.data_dir)
    cache = BarCache(storage, resolutions)
    source = source or get_provider(settings)

    reconciler = SyncReconciler(
        symbols=symbols,
        storage=storage,
        cache=cache,
        source=source,
        resolutions=resolutions,
        split=settings.split,
        ignore_trades_before=settings.ignore_trades_before,
    )
    return AppContext(
        settings=settings,
        resolutions=resolutions,
        symbols=symbols,
        storage=storage,
        cache=cache,
        source=source,
        reconciler=reconciler,
    )
