"""
Readings routes — list and upsert city AQI readings.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from api.database import get_db
from store.exceptions import ReadingError, UnknownError
from store.gateway import list_readings, serialize_reading, upsert_reading

logger = logging.getLogger(__name__)

router = APIRouter()


def _unexpected(e: Exception) -> UnknownError:
    logger.exception("Unexpected error while handling readings request")
    return UnknownError(str(e) or "Unknown error")


@router.get("")
def get_readings(
    city: Optional[str] = Query(None, description="Case-insensitive substring of the city name"),
    db: Session = Depends(get_db),
):
    """List readings, most recently updated first."""
    try:
        rows = list_readings(db, city)
    except ReadingError:
        raise
    except Exception as e:
        raise _unexpected(e) from e
    return [serialize_reading(r) for r in rows]


@router.post("", status_code=status.HTTP_201_CREATED)
def post_reading(
    body: dict = Body(...),
    db: Session = Depends(get_db),
):
    """
    Insert or replace the reading for body['city_name'].
    Requires city_name, latitude, longitude and aqi.
    """
    try:
        rows = upsert_reading(db, body)
    except ReadingError:
        raise
    except Exception as e:
        raise _unexpected(e) from e
    return [serialize_reading(r) for r in rows]
