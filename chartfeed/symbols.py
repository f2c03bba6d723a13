from __future__ import annotations

from typing import List, Optional, Sequence

from chartfeed.models.datafeed import Symbol

BASE_TOKEN = "0xd314d564c36c1b9fbbf6b440122f84da9a551029"

# (name, ticker, description, token address)
HALODEX_TOKENS = [
    ("Halo", "HALO", "Halo Platform", "0x0000000000000000000000000000000000000000"),
    ("VET", "VET", "Vechain", "0x280750ccb7554faec2079e8d8719515d6decdc84"),
    ("VTHO", "VTHO", "Vechain Thor", "0x0343350a2b298370381cac03fe3c525c28600b21"),
    ("DBET", "DBET", "DecentBet", "0x59195ebd987bde65258547041e1baed5fbd18e8b"),
]


def default_symbols(resolutions: Sequence[str], exchange: str = "HaloDEX") -> List[Symbol]:
    return [
        Symbol(
            name=name,
            ticker=ticker,
            description=description,
            exchange=exchange,
            listed_exchange=exchange,
            supported_resolutions=list(resolutions),
            address=address,
            base_address=BASE_TOKEN,
        )
        for name, ticker, description, address in HALODEX_TOKENS
    ]


class SymbolTable:
    """Fixed set of symbols, looked up case-insensitively."""

    def __init__(self, symbols: Sequence[Symbol]):
        self._symbols = list(symbols)

    def __iter__(self):
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def tickers(self) -> List[str]:
        return [s.ticker.lower() for s in self._symbols]

    def find(self, ticker: str) -> Optional[Symbol]:
        """
        Accepts "TICKER" or "EXCHANGE:TICKER".
        With an exchange prefix the exchange must match too.
        """
        exchange = ""
        parts = ticker.split(":")
        if len(parts) > 1 and parts[1].strip():
            exchange, ticker = parts[0].strip(), parts[1].strip()

        for s in self._symbols:
            if s.ticker.lower() != ticker.lower():
                continue
            if not exchange or s.exchange.lower() == exchange.lower():
                return s
        return None

    def search(
        self,
        query: str,
        type_: str = "",
        exchange: str = "",
        limit: int = 0,
    ) -> List[Symbol]:
        """Substring match on ticker or name; type/exchange filter when given."""
        q = query.lower()
        out: List[Symbol] = []
        for s in self._symbols:
            if q not in s.name.lower() and q not in s.ticker.lower():
                continue
            if type_ and s.type.lower() != type_.lower():
                continue
            if exchange and s.exchange.lower() != exchange.lower():
                continue
            out.append(s)
            if limit and len(out) >= limit:
                break
        return out
