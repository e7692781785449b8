"""
Insights routes — dashboard city list, fleet statistics and refreshed snapshot.
"""
from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from api.database import get_db
from pipeline.aggregation.stats import SORT_AQI_DESC, aggregate, critical_areas, filter_and_sort
from pipeline.classification.normalizer import NormalizedReading, normalize
from store.gateway import list_readings

router = APIRouter()


def _normalized(db: Session) -> List[NormalizedReading]:
    return [normalize(r) for r in list_readings(db)]


@router.get("/cities")
def list_cities(
    q: str = Query("", description="Substring of city name or pincode"),
    sort: str = Query(SORT_AQI_DESC, pattern="^(aqi-desc|aqi-asc|name-asc)$"),
    db: Session = Depends(get_db),
):
    """Normalized, tier-annotated readings filtered and sorted for display."""
    return [c.to_dict() for c in filter_and_sort(_normalized(db), q, sort)]


@router.get("/stats")
def fleet_stats(db: Session = Depends(get_db)):
    """Mean AQI, best/worst city and the critical-areas shortlist."""
    cities = _normalized(db)
    stats = aggregate(cities)
    return {
        "mean_aqi": stats.mean_aqi,
        "count": stats.count,
        "worst": stats.worst.to_dict() if stats.worst else None,
        "best": stats.best.to_dict() if stats.best else None,
        "critical": [c.to_dict() for c in critical_areas(cities)],
    }


@router.get("/dashboard")
def dashboard(request: Request):
    """Latest snapshot computed by the background refresher."""
    return request.app.state.refresher.snapshot.to_dict()
