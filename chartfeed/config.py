# chartfeed/config.py
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv

# Loads variables from a local .env file into environment variables (dev only).
load_dotenv()

DEFAULT_RESOLUTIONS = ["30", "60", "360", "1D"]


@dataclass(frozen=True)
class SplitConfig:
    """
    One historical stock split to fold into the trade series.

    Trades for `ticker` before `cutover` get amount * ratio and price / ratio.
    """
    ticker: str
    amount: float
    cutover: Optional[datetime]


@dataclass(frozen=True)
class Settings:
    # App config
    app_env: str
    log_level: str
    provider: str
    exchange_name: str
    host: str
    port: int

    # Storage + sync
    data_dir: str
    sync_interval_mins: int
    sync_on_startup: bool
    resolutions: list[str]

    # Trade adjustments
    split: SplitConfig
    ignore_trades_before: Optional[datetime]

    # Provider config (HaloDEX)
    halodex_base_url: str
    halodex_timeout_seconds: float
    halodex_page_size: int


def parse_instant(raw: str, name: str) -> Optional[datetime]:
    """ISO-8601 -> aware UTC datetime. Empty means unset; naive means UTC."""
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as e:
        raise RuntimeError(f"{name} is not an ISO-8601 instant: {raw!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _number(name: str, default: str, kind=float):
    raw = os.getenv(name, default).strip()
    try:
        return kind(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from e


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def get_settings() -> Settings:
    """
    Reads env vars and returns a Settings object.
    """
    resolutions = [s.strip() for s in os.getenv("RESOLUTIONS", "").split(",") if s.strip()]
    if not resolutions:
        resolutions = list(DEFAULT_RESOLUTIONS)

    sync_interval_mins = _number("SYNC_INTERVAL_MINS", "5", int)
    if sync_interval_mins <= 0:
        raise RuntimeError("SYNC_INTERVAL_MINS must be positive")

    split = SplitConfig(
        ticker=os.getenv("SPLIT_TICKER", "").strip(),
        amount=_number("SPLIT_AMOUNT", "0"),
        cutover=parse_instant(os.getenv("PRE_SPLIT_TIME", ""), "PRE_SPLIT_TIME"),
    )

    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        provider=os.getenv("PROVIDER", "HALODEX"),
        exchange_name=os.getenv("EXCHANGE_NAME", "HaloDEX"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_number("PORT", "3000", int),
        data_dir=os.getenv("DATA_DIR", "./data"),
        sync_interval_mins=sync_interval_mins,
        sync_on_startup=_flag("SYNC_ON_STARTUP", "true"),
        resolutions=resolutions,
        split=split,
        ignore_trades_before=parse_instant(
            os.getenv("IGNORE_TRADES_BEFORE", ""), "IGNORE_TRADES_BEFORE"
        ),
        halodex_base_url=os.getenv("HALODEX_BASE_URL", "https://api.halodex.io").rstrip("/"),
        halodex_timeout_seconds=_number("HALODEX_TIMEOUT_SECONDS", "20"),
        halodex_page_size=_number("HALODEX_PAGE_SIZE", "500", int),
    )
