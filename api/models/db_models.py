"""
SQLAlchemy ORM models for Parisar.
Tables: aqi_readings
"""

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func


Base = declarative_base()


class AqiReading(Base):
    __tablename__ = "aqi_readings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    city_name = Column(String(200), nullable=False)
    pincode = Column(String(20), nullable=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    # Pollutants (μg/m³)
    aqi = Column(Float, nullable=False)
    pm25 = Column(Float, nullable=True)
    pm10 = Column(Float, nullable=True)
    no2 = Column(Float, nullable=True)
    so2 = Column(Float, nullable=True)
    o3 = Column(Float, nullable=True)
    # Meteorological context
    temperature = Column(Float, nullable=True)
    humidity = Column(Float, nullable=True)
    visibility = Column(Float, nullable=True)
    wind_speed = Column(Float, nullable=True)
    pressure = Column(Float, nullable=True)
    weather_condition = Column(String(100), nullable=True)
    wind_direction = Column(String(20), nullable=True)
    # Stored as free text; unknown labels are tolerated and resolved at display time
    status = Column(String(30), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("city_name", name="uq_aqi_readings_city_name"),
        Index("ix_aqi_readings_updated_at", "updated_at"),
    )


# Columns a write replaces wholesale; city_name is the key, id/created_at are kept.
MUTABLE_FIELDS = (
    "pincode", "latitude", "longitude",
    "aqi", "pm25", "pm10", "no2", "so2", "o3",
    "temperature", "humidity", "visibility", "wind_speed", "pressure",
    "weather_condition", "wind_direction",
    "status",
)
