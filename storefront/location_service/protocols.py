"""
Location Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from .models import GeoLocation, LocationErrorCode, PositionOptions


# ============================================================================
# Custom Exceptions
# ============================================================================

class LocationServiceError(Exception):
    """Base exception for location service errors"""
    pass


class ValidationInputError(LocationServiceError):
    """Address input cannot be validated (bad pincode, no location signal)"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class PositionError(LocationServiceError):
    """Raised by a location provider when a position fix fails"""

    def __init__(self, code: LocationErrorCode, message: str = ""):
        super().__init__(message or code.value)
        self.code = code


class GeolocationUnavailable(LocationServiceError):
    """Device location could not be obtained; manual entry required"""

    def __init__(self, code: LocationErrorCode, message: str):
        super().__init__(message)
        self.code = code


class GeocodingDegraded(LocationServiceError):
    """Reverse geocoding timed out or the service was unreachable"""
    pass


class GeocodingServiceError(LocationServiceError):
    """Reverse geocoding failed for a reason other than the network"""
    pass


class AddressServiceError(LocationServiceError):
    """Remote address validation failed or timed out"""
    pass


class OutOfServiceArea(LocationServiceError):
    """Address lies outside the delivery geofence"""

    def __init__(self, distance_km: float, max_radius_km: float):
        super().__init__(
            f"Delivery not available. Distance: {distance_km:.2f}km (max {max_radius_km:g}km)"
        )
        self.distance_km = distance_km
        self.max_radius_km = max_radius_km


# ============================================================================
# Client Protocols
# ============================================================================

@runtime_checkable
class LocationProviderProtocol(Protocol):
    """Device geolocation capability"""

    async def get_current_position(self, options: PositionOptions) -> GeoLocation:
        """Return a single position fix or raise PositionError"""
        ...


@runtime_checkable
class GeocodingClientProtocol(Protocol):
    """Reverse-geocoding service"""

    async def reverse(self, latitude: float, longitude: float) -> Dict[str, Any]:
        """
        Return the raw geocoder payload

        Raises GeocodingDegraded on timeout/network failure and
        GeocodingServiceError otherwise.
        """
        ...


@runtime_checkable
class AddressClientProtocol(Protocol):
    """Storefront address endpoints"""

    async def validate_address(
        self,
        pincode: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        address: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """POST /address/validate"""
        ...

    async def check_pincode(self, pincode: str) -> Dict[str, Any]:
        """GET /address/check/{pincode}"""
        ...
