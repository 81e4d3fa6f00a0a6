"""
Unit tests for location models and geocoder payload parsing
"""
import pytest
from pydantic import ValidationError

from storefront.location_service.clients.geocoding_client import extract_address_fields
from storefront.location_service.models import Address, GeocodedAddress, ValidationResult

pytestmark = pytest.mark.unit


class TestExtractAddressFields:

    def test_city_preferred(self):
        fields = extract_address_fields({
            "display_name": "Mall Road, Kanpur",
            "address": {"city": "Kanpur", "town": "Other", "state": "Uttar Pradesh", "postcode": "208001"},
        })

        assert fields == {
            "display_address": "Mall Road, Kanpur",
            "city": "Kanpur",
            "state": "Uttar Pradesh",
            "pincode": "208001",
        }

    @pytest.mark.parametrize("key", ["town", "village", "county", "district"])
    def test_locality_fallbacks(self, key):
        fields = extract_address_fields({"address": {key: "Bithoor", "state": "UP"}})

        assert fields["city"] == "Bithoor"

    def test_locality_order(self):
        fields = extract_address_fields({"address": {"village": "V", "county": "C", "district": "D"}})

        assert fields["city"] == "V"

    def test_region_used_for_state(self):
        assert extract_address_fields({"address": {"region": "North"}})["state"] == "North"

    def test_display_fallback(self):
        fields = extract_address_fields({"address": {"city": "Kanpur", "state": "Uttar Pradesh"}})

        assert fields["display_address"] == "Kanpur, Uttar Pradesh"
        assert fields["pincode"] == ""


class TestAddress:

    def test_partial_pincode_allowed(self):
        assert Address(pincode="208").pincode == "208"

    @pytest.mark.parametrize("pincode", ["2080071", "20800a"])
    def test_bad_pincode_rejected(self, pincode):
        with pytest.raises(ValidationError):
            Address(pincode=pincode)

    def test_latitude_range(self):
        with pytest.raises(ValidationError):
            Address(latitude=91.0, longitude=0.0)

    def test_has_coordinates(self):
        assert Address(latitude=1.0, longitude=2.0).has_coordinates
        assert not Address(latitude=1.0).has_coordinates

    def test_order_payload(self):
        payload = Address(street="12 Mall Road", city="Kanpur", state="UP", pincode="208007").to_order_payload()

        assert payload["fullAddress"] == "12 Mall Road, Kanpur, UP - 208007"
        assert "latitude" not in payload


class TestGeocodedAddress:

    def test_street_from_display(self):
        address = GeocodedAddress(latitude=0, longitude=0, display_address=" Mall Road , Kanpur")

        assert address.street == "Mall Road"

    def test_no_street_without_display(self):
        assert GeocodedAddress(latitude=0, longitude=0).street == ""


class TestValidationResult:

    def test_reads_camel_case(self):
        result = ValidationResult.model_validate({"valid": False, "distanceKm": 412.371})

        assert result.distance_km == 412.371
        assert result.display_distance == "412.37"

    def test_negative_distance_rejected(self):
        with pytest.raises(ValidationError):
            ValidationResult(valid=True, distance_km=-1)
