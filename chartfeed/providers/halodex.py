from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from chartfeed.models.market import Trade
from chartfeed.providers.base import TradeSource

log = logging.getLogger("halodex_provider")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class HaloDexProvider(TradeSource):
    """
    HaloDEX trade history over REST.

      GET {base_url}/trades?tokenAddress=...&baseTokenAddress=...&since=<ms>&limit=N&offset=K

    Pages until a short page comes back. Returns trades newest first.
    """

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 20.0,
        page_size: int = 500,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self._client = client or httpx.Client(timeout=timeout_s)

    def close(self) -> None:
        self._client.close()

    # -------------------------
    # Public interface used by the sync job
    # -------------------------
    def fetch_trades(self, token_address: str, base_token_address: str, since: datetime) -> list[Trade]:
        since_ms = max(0, int((since - EPOCH).total_seconds() * 1000))
        url = f"{self.base_url}/trades"

        out: list[Trade] = []
        offset = 0
        while True:
            params = {
                "tokenAddress": token_address,
                "baseTokenAddress": base_token_address,
                "since": str(since_ms),
                "limit": str(self.page_size),
                "offset": str(offset),
            }
            resp = self._client.get(url, params=params)
            resp.raise_for_status()

            rows = self._rows(resp.json())
            out.extend(self._parse_rows(rows, since))

            if len(rows) < self.page_size:
                break
            offset += len(rows)

        out.sort(key=lambda t: t.time, reverse=True)
        log.info(
            "Fetched trades token=%s base=%s since=%s count=%d",
            token_address,
            base_token_address,
            since.isoformat(),
            len(out),
        )
        return out

    # -------------------------
    # Payload parsing
    # -------------------------
    def _rows(self, data: Any) -> list:
        if isinstance(data, dict):
            data = data.get("data", data.get("trades"))
        if not isinstance(data, list):
            log.warning("Unexpected trades payload type=%s", type(data))
            return []
        return data

    def _parse_rows(self, rows: list, since: datetime) -> list[Trade]:
        out: list[Trade] = []
        for row in rows:
            if not isinstance(row, dict):
                continue

            ts_raw = row.get("time") or row.get("timestamp")
            price = row.get("price")
            amount = row.get("amount")

            # Skip partial/invalid rows
            if ts_raw is None or price is None or amount is None:
                log.warning("Skipping malformed trade row=%s", row)
                continue

            try:
                trade = Trade(time=self._parse_ts(ts_raw), price=float(price), amount=float(amount))
            except (TypeError, ValueError):
                log.warning("Skipping unparseable trade row=%s", row)
                continue

            # Source contract: nothing older than the watermark.
            if trade.time < since:
                continue
            out.append(trade)
        return out

    def _parse_ts(self, ts_raw: Any) -> datetime:
        """
        Converts timestamp to datetime (UTC).
        Handles:
          - epoch seconds/millis
          - ISO strings
        """
        if isinstance(ts_raw, (int, float)):
            if ts_raw > 1_000_000_000_000:  # millis
                return datetime.fromtimestamp(ts_raw / 1000.0, tz=timezone.utc)
            return datetime.fromtimestamp(ts_raw, tz=timezone.utc)

        s = str(ts_raw).strip().replace(" ", "T").replace("Z", "+00:00")
        dt = datetime.fromisoformat(s)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
