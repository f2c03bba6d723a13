from chartfeed.config import Settings
from chartfeed.providers.base import TradeSource
from chartfeed.providers.halodex import HaloDexProvider


def get_provider(settings: Settings) -> TradeSource:
    """
    Provider loader / factory.

    Reads PROVIDER from config and returns an instance of the selected provider.
    This is the single place that knows about concrete providers.
    """
    provider_name = settings.provider.strip().upper()

    if provider_name == "HALODEX":
        return HaloDexProvider(
            base_url=settings.halodex_base_url,
            timeout_s=settings.halodex_timeout_seconds,
            page_size=settings.halodex_page_size,
        )

    raise ValueError(f"Unknown PROVIDER='{settings.provider}'. Expected: HALODEX")
