"""
Reading normalizer.

Turns a stored reading (ORM row or plain dict) into a presentation record:
null numbers become 0.0, null text becomes "", and the display tier is
attached. Never used before storage — the store keeps nulls distinct from 0.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Optional

from pipeline.classification.classifier import TIER_COLORS, tier_of


@dataclass
class NormalizedReading:
    """Flat, null-free view of one city's reading."""
    id: Optional[int]
    name: str
    latitude: float
    longitude: float
    aqi: float
    pm25: float
    pm10: float
    no2: float
    so2: float
    o3: float
    temperature: float
    humidity: float
    visibility: float
    wind_speed: float
    pressure: float
    weather_condition: str
    wind_direction: str
    pincode: str
    status: str
    tier: str
    color: str
    updated_at: Optional[str]

    def to_dict(self) -> dict:
        return asdict(self)


def _field(raw: Any, name: str):
    if isinstance(raw, dict):
        return raw.get(name)
    return getattr(raw, name, None)


def _number(raw: Any, name: str) -> float:
    value = _field(raw, name)
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _text(raw: Any, name: str) -> str:
    value = _field(raw, name)
    return "" if value is None else str(value)


def normalize(raw: Any) -> NormalizedReading:
    """Normalize a stored reading. Never raises."""
    status = _text(raw, "status")
    tier = tier_of(status)
    updated_at = _field(raw, "updated_at")
    if isinstance(updated_at, datetime):
        updated_at = updated_at.isoformat()

    return NormalizedReading(
        id=_field(raw, "id"),
        name=_text(raw, "city_name"),
        latitude=_number(raw, "latitude"),
        longitude=_number(raw, "longitude"),
        aqi=_number(raw, "aqi"),
        pm25=_number(raw, "pm25"),
        pm10=_number(raw, "pm10"),
        no2=_number(raw, "no2"),
        so2=_number(raw, "so2"),
        o3=_number(raw, "o3"),
        temperature=_number(raw, "temperature"),
        humidity=_number(raw, "humidity"),
        visibility=_number(raw, "visibility"),
        wind_speed=_number(raw, "wind_speed"),
        pressure=_number(raw, "pressure"),
        weather_condition=_text(raw, "weather_condition"),
        wind_direction=_text(raw, "wind_direction"),
        pincode=_text(raw, "pincode"),
        status=status,
        tier=tier,
        color=TIER_COLORS[tier],
        updated_at=updated_at,
    )
