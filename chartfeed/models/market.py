from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class Trade:
    """
    Trade = a single fill on the DEX.

    time: when the trade happened (UTC)
    price: traded price (quote per unit)
    amount: traded amount (volume for this trade)
    """
    time: datetime
    price: float
    amount: float


@dataclass(frozen=True)
class Resolution:
    """
    Bar size as shown to the chart (label) and as used for bucketing (minutes).

    "30" -> 30, "1D" -> 1440, "1W" -> 10080, "1M" -> 43200
    """
    label: str
    minutes: int

    @property
    def duration(self) -> timedelta:
        return timedelta(minutes=self.minutes)


@dataclass
class Bar:
    """
    Bar (OHLCV) for a fixed resolution window.

    start: start of the bucket
    end: end boundary of the bucket (start + resolution)
    open/high/low/close: prices of the trades folded into the bar
    volume: summed trade amount
    """
    start: datetime
    end: datetime
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: float = 0.0
    trades: int = 0

    def update(self, price: float, amount: float) -> None:
        """Fold one trade into this bar."""
        if self.trades == 0:
            self.open = price
            self.high = price
            self.low = price
        else:
            self.high = max(self.high, price)
            self.low = min(self.low, price)
        self.close = price
        self.volume += amount
        self.trades += 1

    @property
    def unix_time(self) -> int:
        return int(self.start.timestamp())
