"""Run the chart feed API: `python -m chartfeed` (same as `uvicorn chartfeed.main:app`)."""

import uvicorn

from chartfeed.config import get_settings


def main() -> int:
    settings = get_settings()
    uvicorn.run(
        "chartfeed.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
