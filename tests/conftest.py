"""Shared test fixtures and configuration for the Parisar test suite."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from api.database import get_db, make_engine
from api.main import app
from api.models.db_models import Base


@pytest.fixture()
def db_engine(tmp_path):
    """SQLite engine on a throwaway file, built the same way as production."""
    engine = make_engine(f"sqlite:///{tmp_path / 'parisar_test.db'}", timeout=5)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture()
def db_session(session_factory):
    """Provide a database session that is closed after each test."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    """TestClient with get_db pointed at the test database (lifespan not run)."""
    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_payload(city_name="Delhi", aqi=142.0, **overrides):
    payload = {
        "city_name": city_name,
        "pincode": "110001",
        "latitude": 28.6139,
        "longitude": 77.2090,
        "aqi": aqi,
        "pm25": 88.5,
        "pm10": 140.0,
        "temperature": 31.0,
        "humidity": 40.0,
        "weather_condition": "Haze",
        "wind_direction": "NW",
        "status": "Poor",
    }
    payload.update(overrides)
    return payload
