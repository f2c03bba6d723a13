"""Error types raised by the sync and read paths."""

from __future__ import annotations


class ChartFeedError(Exception):
    """Base class for chartfeed errors."""


class SymbolNotFoundError(ChartFeedError):
    """Ticker is not in the configured symbol table."""

    def __init__(self, ticker: str) -> None:
        super().__init__(f"Symbol not found: {ticker}")
        self.ticker = ticker


class StorageError(ChartFeedError):
    """Persisted trade/bar file could not be read or written."""


class FetchError(ChartFeedError):
    """Trade source failed to return new trades."""


class BarsNotFoundError(ChartFeedError):
    """No cached or persisted bars for a (ticker, resolution) pair."""

    def __init__(self, ticker: str, resolution: str, reason: str = "") -> None:
        msg = f"No bars for {ticker}/{resolution}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.ticker = ticker
        self.resolution = resolution
