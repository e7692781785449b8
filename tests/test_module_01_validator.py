"""
Tests for Module 01 — Reading Validator.
"""
import pytest
from pipeline.ingestion.validator import (
    MISSING_FIELDS_MESSAGE, missing_required, validate_payload,
)

from conftest import make_payload


class TestRequiredFields:
    @pytest.mark.parametrize("field", ["city_name", "latitude", "longitude", "aqi"])
    def test_missing_required_field_rejected(self, field):
        payload = make_payload()
        del payload[field]
        result = validate_payload(payload)
        assert result.is_valid is False
        assert result.message == MISSING_FIELDS_MESSAGE

    @pytest.mark.parametrize("field", ["city_name", "latitude", "longitude", "aqi"])
    def test_null_required_field_rejected(self, field):
        result = validate_payload(make_payload(**{field: None}))
        assert not result.is_valid
        assert result.message == MISSING_FIELDS_MESSAGE

    def test_empty_city_name_rejected(self):
        assert missing_required(make_payload(city_name="")) == ["city_name"]

    def test_zero_latitude_is_present(self):
        """latitude 0 is falsy but defined — must pass."""
        result = validate_payload(make_payload(latitude=0, longitude=0, aqi=0))
        assert result.is_valid
        assert result.cleaned["latitude"] == 0.0
        assert result.cleaned["aqi"] == 0.0

    def test_only_required_fields(self):
        result = validate_payload({"city_name": "Pune", "latitude": 18.5, "longitude": 73.8, "aqi": 60})
        assert result.is_valid
        assert result.cleaned["pm25"] is None
        assert result.cleaned["status"] is None


class TestMalformedFields:
    def test_non_numeric_aqi_rejected(self):
        result = validate_payload(make_payload(aqi="very bad"))
        assert not result.is_valid
        assert "aqi must be numeric" in result.message

    def test_numeric_string_accepted(self):
        result = validate_payload(make_payload(aqi="142"))
        assert result.is_valid
        assert result.cleaned["aqi"] == 142.0

    def test_boolean_is_not_numeric(self):
        result = validate_payload(make_payload(pm25=True))
        assert not result.is_valid

    def test_nan_rejected(self):
        result = validate_payload(make_payload(pm10=float("nan")))
        assert not result.is_valid

    def test_oversized_integer_rejected(self):
        result = validate_payload(make_payload(aqi=10 ** 400))
        assert not result.is_valid
        assert "aqi must be numeric" in result.message

    def test_integer_pincode_is_stringified(self):
        result = validate_payload(make_payload(pincode=400001))
        assert result.cleaned["pincode"] == "400001"

    def test_non_string_status_rejected(self):
        result = validate_payload(make_payload(status=3))
        assert not result.is_valid
        assert "status must be a string" in result.message

    def test_non_mapping_rejected(self):
        result = validate_payload(["Delhi"])
        assert not result.is_valid

    def test_unknown_keys_dropped(self):
        result = validate_payload(make_payload(id=99, created_at="yesterday"))
        assert result.is_valid
        assert "id" not in result.cleaned
        assert "created_at" not in result.cleaned


class TestTextLengths:
    def test_long_status_rejected(self):
        result = validate_payload(make_payload(status="Moderately Polluted (PM2.5 dominated)"))
        assert not result.is_valid
        assert "status exceeds 30 characters" in result.message

    def test_long_city_name_rejected(self):
        result = validate_payload(make_payload(city_name="X" * 201))
        assert not result.is_valid
        assert "city_name exceeds 200 characters" in result.message

    def test_status_at_column_width_accepted(self):
        result = validate_payload(make_payload(status="S" * 30))
        assert result.is_valid

    def test_huge_integer_pincode_rejected(self):
        result = validate_payload(make_payload(pincode=10 ** 5000))
        assert not result.is_valid
        assert "pincode must be a string" in result.message
