from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class Symbol(BaseModel):
    """
    Tradable token in TradingView symbology.

    Only the chart-facing fields are serialized. address/base_address are the
    token contract and its paired base token contract, used for trade sync.
    """

    ticker: str
    name: str
    description: str
    type: str = "bitcoin"
    session: str = "24x7"
    exchange: str = "HaloDEX"
    listed_exchange: str = "HaloDEX"
    timezone: str = "Etc/UTC"
    minmov: float = 0.01
    pricescale: int = 10_000_000_000
    minmov2: float = 0
    fractional: bool = False
    has_intraday: bool = True
    supported_resolutions: List[str] = []
    intraday_multipliers: List[str] = []
    has_seconds: bool = False
    has_daily: bool = False
    has_weekly_and_monthly: bool = False
    has_empty_bars: bool = False
    force_session_rebuild: bool = True
    has_no_volume: bool = False
    volume_precision: int = 0
    data_status: str = "pulsed"

    address: str = Field(exclude=True)
    base_address: str = Field(exclude=True)

    model_config = {"frozen": True}


class SearchResultSymbol(BaseModel):
    symbol: str
    full_name: str
    description: str
    exchange: str
    ticker: str
    type: str


class History(BaseModel):
    """
    UDF history response, column-wise.

    s: "ok" | "no_data" | "error"
    t/o/h/l/c/v: bar start (unix seconds) and OHLCV, only when s == "ok"
    nextTime: start of the closest earlier bar, only when s == "no_data"
    """

    s: str
    errmsg: Optional[str] = None
    t: Optional[List[int]] = None
    o: Optional[List[float]] = None
    h: Optional[List[float]] = None
    l: Optional[List[float]] = None
    c: Optional[List[float]] = None
    v: Optional[List[float]] = None
    nextTime: Optional[int] = None
