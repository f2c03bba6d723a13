import asyncio
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chartfeed.api.routes import router as api_router
from chartfeed.context import AppContext, build_context
from chartfeed.jobs.sync_loop import sync_loop

log = logging.getLogger("main")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(ctx: Optional[AppContext] = None, start_sync: bool = True) -> FastAPI:
    ctx = ctx or build_context()
    configure_logging(ctx.settings.log_level)

    app = FastAPI(title="Chart Feed API", version="0.1.0")
    app.state.ctx = ctx
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router)

    @app.on_event("startup")
    async def _startup():
        if not start_sync:
            return
        # Sync all tickers now, then on the configured interval.
        app.state.sync_task = asyncio.create_task(
            sync_loop(
                ctx.reconciler,
                interval_mins=ctx.settings.sync_interval_mins,
                run_first=ctx.settings.sync_on_startup,
            )
        )
        log.info(
            "Chart feed started tickers=%s interval_mins=%d",
            ctx.symbols.tickers(),
            ctx.settings.sync_interval_mins,
        )

    @app.on_event("shutdown")
    async def _shutdown():
        task = getattr(app.state, "sync_task", None)
        if task is not None:
            task.cancel()
        ctx.source.close()

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "app_env": ctx.settings.app_env,
            "provider_config": ctx.settings.provider,
            "provider_loaded": ctx.source.__class__.__name__,
        }

    return app


app = create_app()
