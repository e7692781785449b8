"""
Fleet aggregation over normalized readings.

Computes dashboard statistics (mean AQI, best and worst city), the
critical-areas shortlist, and the filtered/sorted city list.
"""

import logging
import math
from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

SORT_AQI_DESC = "aqi-desc"
SORT_AQI_ASC = "aqi-asc"
SORT_NAME_ASC = "name-asc"
SORT_KEYS = (SORT_AQI_DESC, SORT_AQI_ASC, SORT_NAME_ASC)

CRITICAL_AQI_THRESHOLD = 100
CRITICAL_AREAS_LIMIT = 3

R = TypeVar("R")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 → 3, -2.5 → -2)."""
    return math.floor(value + 0.5)


@dataclass
class Stats(Generic[R]):
    """Fleet statistics. best/worst are None when there were no readings."""
    mean_aqi: int
    count: int
    worst: Optional[R] = None
    best: Optional[R] = None

    @property
    def is_empty(self) -> bool:
        return self.count == 0


def aggregate(readings: Sequence[R]) -> Stats[R]:
    """
    Compute mean/best/worst over readings exposing an `aqi` attribute.

    Ties keep the first reading encountered. An empty sequence yields
    mean_aqi=0 and no best/worst.
    """
    if not readings:
        return Stats(mean_aqi=0, count=0)

    worst = best = readings[0]
    total = 0.0
    for r in readings:
        total += r.aqi
        if r.aqi > worst.aqi:
            worst = r
        if r.aqi < best.aqi:
            best = r

    return Stats(
        mean_aqi=round_half_up(total / len(readings)),
        count=len(readings),
        worst=worst,
        best=best,
    )


def critical_areas(
    readings: Sequence[R],
    threshold: float = CRITICAL_AQI_THRESHOLD,
    limit: int = CRITICAL_AREAS_LIMIT,
) -> List[R]:
    """First `limit` readings, in input order, whose AQI exceeds `threshold`."""
    return [r for r in readings if r.aqi > threshold][:limit]


def _matches(reading, needle: str) -> bool:
    name = (getattr(reading, "name", "") or "").lower()
    pincode = (getattr(reading, "pincode", "") or "").lower()
    return needle in name or needle in pincode


def filter_and_sort(readings: Sequence[R], query: str = "", sort_key: str = SORT_AQI_DESC) -> List[R]:
    """
    Filter by case-insensitive substring of name or pincode, then sort.

    Args:
        readings: Normalized readings (need `name`, `pincode`, `aqi`).
        query: Substring to look for; empty matches everything.
        sort_key: One of SORT_KEYS. Sorting is stable, so ties keep
                  their input order. An unknown key leaves the order as is.
    """
    needle = (query or "").lower()
    result = [r for r in readings if _matches(r, needle)]

    if sort_key == SORT_AQI_DESC:
        result.sort(key=lambda r: r.aqi, reverse=True)
    elif sort_key == SORT_AQI_ASC:
        result.sort(key=lambda r: r.aqi)
    elif sort_key == SORT_NAME_ASC:
        result.sort(key=lambda r: r.name.casefold())
    else:
        logger.warning("Unknown sort key %r, keeping input order", sort_key)

    return result
