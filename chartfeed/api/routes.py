from __future__ import annotations

import logging
import time
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse

from chartfeed.candles.history import query_history
from chartfeed.context import AppContext
from chartfeed.errors import FetchError, StorageError, SymbolNotFoundError
from chartfeed.models.datafeed import History, SearchResultSymbol

log = logging.getLogger("api")

router = APIRouter()


def get_context(request: Request) -> AppContext:
    return request.app.state.ctx


@router.get("/config")
def config(ctx: AppContext = Depends(get_context)):
    """TradingView UDF datafeed configuration."""
    return {
        "supported_resolutions": ctx.resolution_labels,
        "supports_group_request": False,
        "supports_marks": False,
        "supports_search": True,
        "supports_timescale_marks": False,
        "supports_time": True,
    }


@router.get("/time", response_class=PlainTextResponse)
def server_time():
    return str(int(time.time()))


@router.get("/symbols")
def symbols(
    symbol: str = Query("", description="Ticker, or EXCHANGE:TICKER"),
    ctx: AppContext = Depends(get_context),
):
    if not symbol.strip():
        raise HTTPException(status_code=400, detail="symbol is required")

    found = ctx.symbols.find(symbol)
    if found is None:
        raise HTTPException(status_code=404, detail=f"Symbol not found: {symbol}")
    return found.model_dump()


@router.get("/search", response_model=List[SearchResultSymbol])
def search(
    query: str = Query("", description="Ticker or name fragment"),
    type: str = Query("", description="Symbol type filter"),
    exchange: str = Query("", description="Exchange filter"),
    limit: int = Query(0, ge=0, description="Max results, 0 = no limit"),
    ctx: AppContext = Depends(get_context),
):
    found = ctx.symbols.search(query, type_=type, exchange=exchange, limit=limit)
    if not found:
        raise HTTPException(status_code=404, detail="No symbols matched")

    return [
        SearchResultSymbol(
            symbol=s.ticker,
            full_name=s.description,
            description=s.description,
            exchange=s.exchange,
            ticker=s.ticker,
            type=s.type,
        )
        for s in found
    ]


@router.get("/symbol_info")
def symbol_info():
    # Group requests are off in /config, so the chart never asks for this.
    raise HTTPException(status_code=501, detail="Not Implemented")


@router.get("/history", response_model=History, response_model_exclude_none=True)
def history(
    symbol: str = Query(..., description="Ticker, e.g. HALO"),
    resolution: str = Query(..., description="Resolution label, e.g. 60 or 1D"),
    from_ts: int = Query(..., alias="from", description="Window start, unix seconds"),
    to_ts: int = Query(..., alias="to", description="Window end, unix seconds"),
    ctx: AppContext = Depends(get_context),
):
    found = ctx.symbols.find(symbol)
    if found is None:
        return History(s="no_data")
    return query_history(ctx.cache, found.ticker, resolution, from_ts, to_ts)


@router.post("/sync")
def sync(
    symbol: str = Query(..., description="Ticker to sync now"),
    ctx: AppContext = Depends(get_context),
):
    """
    On-demand sync for one ticker (same cycle the background loop runs).
    """
    log.info("On-demand sync requested ticker=%s", symbol)
    try:
        result = ctx.reconciler.sync(symbol)
    except SymbolNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except (FetchError, StorageError) as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    return {"ok": True, **asdict(result)}
