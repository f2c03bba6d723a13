from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from chartfeed.models.market import Trade


class TradeSource(ABC):
    """
    Provider contract (interface).

    Any provider must implement:
    - fetch_trades(): trades for a token pair at or after `since`, newest first
    """

    @abstractmethod
    def fetch_trades(
        self,
        token_address: str,
        base_token_address: str,
        since: datetime,
    ) -> List[Trade]:
        raise NotImplementedError

    def close(self) -> None:
        pass
