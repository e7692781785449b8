"""
Reading Store Gateway — Parisar

Validates incoming city readings and persists them keyed by city_name.
The write is a single INSERT ... ON CONFLICT (city_name) DO UPDATE, so
concurrent writers for the same city can never produce two rows.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.models.db_models import AqiReading, MUTABLE_FIELDS
from pipeline.ingestion.validator import validate_payload
from store.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)


def _dialect_insert(db: Session):
    """Return the dialect-specific insert() that supports ON CONFLICT."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise StorageError(f"Upsert is not supported on the '{dialect}' dialect")
    return insert


def upsert_reading(db: Session, payload: Mapping[str, Any]) -> List[AqiReading]:
    """
    Insert or replace the reading for payload['city_name'].

    Args:
        db: SQLAlchemy session.
        payload: Raw reading fields (e.g. a decoded JSON body).

    Returns:
        The stored row(s) as returned by the database.

    Raises:
        ValidationError: A required field is missing or a field is malformed.
        StorageError: The database rejected the write or timed out.
    """
    validation = validate_payload(payload)
    if not validation.is_valid:
        raise ValidationError(validation.message)

    values = validation.cleaned
    now = datetime.now(timezone.utc)

    insert = _dialect_insert(db)
    stmt = insert(AqiReading).values(created_at=now, updated_at=now, **values)
    stmt = stmt.on_conflict_do_update(
        index_elements=["city_name"],
        set_={
            **{name: stmt.excluded[name] for name in MUTABLE_FIELDS},
            "updated_at": now,
        },
    )

    try:
        rows = db.scalars(
            stmt.returning(AqiReading),
            execution_options={"populate_existing": True},
        ).all()
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Upsert failed for city %s: %s", values["city_name"], e)
        raise StorageError(str(e)) from e

    logger.info("Reading upserted: city=%s aqi=%s", values["city_name"], values["aqi"])
    return list(rows)


def list_readings(db: Session, city: Optional[str] = None) -> List[AqiReading]:
    """
    Return stored readings, most recently updated first.

    Args:
        db: SQLAlchemy session.
        city: Optional case-insensitive substring of city_name.

    Returns:
        Matching rows; an empty list when nothing matches.

    Raises:
        StorageError: The database query failed or timed out.
    """
    query = select(AqiReading)
    if city:
        query = query.where(AqiReading.city_name.icontains(city, autoescape=True))
    query = query.order_by(desc(AqiReading.updated_at), desc(AqiReading.id))

    try:
        return list(db.scalars(query).all())
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Listing readings failed (city=%s): %s", city, e)
        raise StorageError(str(e)) from e


def serialize_reading(r: AqiReading) -> dict:
    """Stored row → JSON-safe dict with every column."""
    return {
        "id": r.id,
        "city_name": r.city_name,
        "pincode": r.pincode,
        "latitude": r.latitude,
        "longitude": r.longitude,
        "aqi": r.aqi,
        "pm25": r.pm25,
        "pm10": r.pm10,
        "temperature": r.temperature,
        "humidity": r.humidity,
        "visibility": r.visibility,
        "weather_condition": r.weather_condition,
        "no2": r.no2,
        "so2": r.so2,
        "o3": r.o3,
        "wind_speed": r.wind_speed,
        "wind_direction": r.wind_direction,
        "pressure": r.pressure,
        "status": r.status,
        "created_at": r.created_at.isoformat() if r.created_at else None,
        "updated_at": r.updated_at.isoformat() if r.updated_at else None,
    }
