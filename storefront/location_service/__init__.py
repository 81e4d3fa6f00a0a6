"""
Location Service

Device geolocation, reverse geocoding and delivery geofence validation.
"""

from .address_validator import AddressValidator
from .geo_resolver import GeoResolver
from .models import Address, GeocodedAddress, LocationResult, ValidationResult, ValidationState

__all__ = [
    "AddressValidator",
    "GeoResolver",
    "Address",
    "GeocodedAddress",
    "LocationResult",
    "ValidationResult",
    "ValidationState",
]
