"""
Validator for incoming city readings.

Validates:
- Required fields (city_name, latitude, longitude, aqi) are present and non-null
- Numeric fields are finite numbers (numeric strings are accepted)
- Text fields are strings that fit their column width

Produces a cleaned payload holding only known columns. Absent optional
fields are carried as None so a write replaces every mutable field.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("city_name", "latitude", "longitude", "aqi")
MISSING_FIELDS_MESSAGE = "Missing required fields: city_name, latitude, longitude, aqi"

NUMERIC_FIELDS = (
    "latitude", "longitude",
    "aqi", "pm25", "pm10", "no2", "so2", "o3",
    "temperature", "humidity", "visibility", "wind_speed", "pressure",
)
TEXT_FIELDS = ("pincode", "weather_condition", "wind_direction", "status")

# Column widths of aqi_readings
MAX_TEXT_LENGTHS = {
    "city_name":         200,
    "pincode":           20,
    "weather_condition": 100,
    "wind_direction":    20,
    "status":            30,
}


@dataclass
class ValidationResult:
    """Result of validating a single reading payload."""
    is_valid: bool
    reasons: List[str] = field(default_factory=list)
    cleaned: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, msg: str):
        self.reasons.append(msg)
        self.is_valid = False

    @property
    def message(self) -> str:
        return "; ".join(self.reasons)

    def __str__(self) -> str:
        if self.is_valid:
            return "Valid"
        return "Invalid: " + self.message


def _to_float(value) -> Optional[float]:
    """Convert to a finite float, or None when it cannot be."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def missing_required(payload: Mapping[str, Any]) -> List[str]:
    """Names of required fields that are absent or null (empty city_name counts)."""
    missing = [name for name in REQUIRED_FIELDS if payload.get(name) is None]
    if "city_name" not in missing and payload.get("city_name") == "":
        missing.insert(0, "city_name")
    return missing


def validate_payload(payload: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a raw reading payload (e.g. a decoded JSON body).

    A falsy-but-present value such as latitude 0 is valid; only absent or
    null required fields are rejected.

    Returns:
        ValidationResult with is_valid flag, failure reasons and, when valid,
        the cleaned column dict ready for storage.
    """
    result = ValidationResult(is_valid=True)

    if not isinstance(payload, Mapping):
        result.add_error(f"Reading must be a JSON object, got {type(payload).__name__}")
        return result

    # 1. Required fields must be present
    missing = missing_required(payload)
    if missing:
        result.add_error(MISSING_FIELDS_MESSAGE)
        logger.warning("Reading rejected, missing fields: %s", missing)
        return result

    city_name = payload["city_name"]
    if not isinstance(city_name, str):
        result.add_error(f"city_name must be a string, got {type(city_name).__name__}")
    cleaned: Dict[str, Any] = {"city_name": city_name}

    # 2. Numeric fields
    for name in NUMERIC_FIELDS:
        raw = payload.get(name)
        if raw is None:
            cleaned[name] = None
            continue
        number = _to_float(raw)
        if number is None:
            result.add_error(f"{name} must be numeric, got {type(raw).__name__}")
            continue
        cleaned[name] = number

    # 3. Text fields
    for name in TEXT_FIELDS:
        raw = payload.get(name)
        if raw is None:
            cleaned[name] = None
        elif isinstance(raw, str):
            cleaned[name] = raw
        elif name == "pincode" and isinstance(raw, int) and not isinstance(raw, bool) and 0 <= raw < 10 ** 20:
            cleaned[name] = str(raw)
        else:
            result.add_error(f"{name} must be a string, got {type(raw).__name__}")

    # 4. Text lengths
    for name, max_len in MAX_TEXT_LENGTHS.items():
        value = cleaned.get(name)
        if isinstance(value, str) and len(value) > max_len:
            result.add_error(f"{name} exceeds {max_len} characters")

    if not result.is_valid:
        logger.warning(
            "Validation failed for city %s: %s",
            payload.get("city_name", "unknown"),
            result.reasons,
        )
        return result

    result.cleaned = cleaned
    return result
