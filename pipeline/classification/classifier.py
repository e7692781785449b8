"""
AQI Classifier — Parisar

Two deliberately separate mappings:

  category_of(aqi)    numeric AQI → one of six canonical categories, using
                      fixed inclusive upper bounds. Used for predicted values.
  tier_of(status)     caller-supplied status label (eight-label closed set)
                      → one of four display tiers. Used for stored readings.

Stored readings carry whatever status the writer supplied; it is never
recomputed from the numeric AQI, so the two contracts can disagree for the
same reading.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# (inclusive upper bound, label, color); the last row catches everything above 300
CATEGORY_BREAKPOINTS: List[Tuple[Optional[float], str, str]] = [
    (50,   "Good",         "emerald"),
    (100,  "Satisfactory", "emerald"),
    (150,  "Moderate",     "amber"),
    (200,  "Poor",         "orange"),
    (300,  "Very Poor",    "red"),
    (None, "Severe",       "red"),
]

CATEGORIES = tuple(label for _, label, _ in CATEGORY_BREAKPOINTS)

TIER_GOOD = "good"
TIER_MODERATE = "moderate"
TIER_POOR = "poor"
TIER_SEVERE = "severe"

STATUS_TIERS: Dict[str, str] = {
    "Good":                TIER_GOOD,
    "Satisfactory":        TIER_GOOD,
    "Moderate":            TIER_MODERATE,
    "Moderately Polluted": TIER_POOR,
    "Poor":                TIER_POOR,
    "Very Poor":           TIER_SEVERE,
    "Critical":            TIER_SEVERE,
    "Severe":              TIER_SEVERE,
}

TIER_COLORS: Dict[str, str] = {
    TIER_GOOD:     "emerald",
    TIER_MODERATE: "amber",
    TIER_POOR:     "orange",
    TIER_SEVERE:   "red",
}

# Unknown labels fall back to the mildest tier. This matches what the
# dashboard has always shown; it may hide a bad label, so it is logged.
FALLBACK_TIER = TIER_GOOD


@dataclass(frozen=True)
class Category:
    """A canonical AQI category with its display color."""
    label: str
    color: str

    @property
    def severity(self) -> int:
        """0 (Good) … 5 (Severe)."""
        return CATEGORIES.index(self.label)


def category_of(aqi: float) -> Category:
    """
    Classify a numeric AQI into one of the six canonical categories.

    Bounds are inclusive: 50 is Good, 51 is Satisfactory, 300 is Very Poor,
    301 is Severe. Values below 0 classify as Good.
    """
    for upper, label, color in CATEGORY_BREAKPOINTS[:-1]:
        if aqi <= upper:
            return Category(label=label, color=color)
    _, label, color = CATEGORY_BREAKPOINTS[-1]
    return Category(label=label, color=color)


def tier_of(status: Optional[str]) -> str:
    """
    Map a caller-supplied status label to its display tier.

    Unrecognized or missing labels resolve to FALLBACK_TIER ("good").
    """
    tier = STATUS_TIERS.get(status) if status is not None else None
    if tier is None:
        logger.warning("Unknown status label %r, using fallback tier %r", status, FALLBACK_TIER)
        return FALLBACK_TIER
    return tier
