from __future__ import annotations

import logging
from typing import Iterable, Optional

from chartfeed.config import DEFAULT_RESOLUTIONS
from chartfeed.models.market import Resolution

log = logging.getLogger("resolutions")

# Flat-days approximation: a month is 30 days, a week is 7. Not calendar math.
UNIT_MINUTES = {
    "D": 1440,
    "W": 10080,
    "M": 43200,
}


def resolution_minutes(label: str) -> Optional[int]:
    """
    "30" -> 30, "1D" -> 1440, "2W" -> 20160, "1M" -> 43200.

    Returns None when the count in front of the unit is not a positive int.
    """
    count = label.strip()
    multiplier = 1
    for unit, minutes in UNIT_MINUTES.items():
        if unit in count:
            count = count.split(unit, 1)[0]
            multiplier = minutes
            break

    try:
        n = int(count)
    except ValueError:
        return None
    if n <= 0:
        return None
    return n * multiplier


def parse_resolutions(labels: Iterable[str]) -> list[Resolution]:
    """
    Configured labels -> resolutions, in the same order.
    Empty config falls back to DEFAULT_RESOLUTIONS; bad labels are dropped.
    """
    labels = [s for s in labels if s]
    if not labels:
        labels = list(DEFAULT_RESOLUTIONS)

    out: list[Resolution] = []
    for label in labels:
        minutes = resolution_minutes(label)
        if minutes is None:
            log.warning("Dropping unparseable resolution label=%r", label)
            continue
        out.append(Resolution(label=label, minutes=minutes))

    log.info(
        "Supported resolutions: %s => minutes: %s",
        [r.label for r in out],
        [r.minutes for r in out],
    )
    return out
