"""
GeoResolver

Device position acquisition and reverse geocoding. Position failures come
back as a LocationResult instead of an exception so callers can fall back to
manual entry; geocoder outages degrade to bare coordinates.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from core.config import GeoConfig

from .clients.geocoding_client import extract_address_fields
from .models import (
    GeocodedAddress, GeoLocation, LocationErrorCode, LocationResult, PositionOptions
)
from .protocols import (
    GeocodingClientProtocol, GeocodingDegraded, GeocodingServiceError,
    GeolocationUnavailable, LocationProviderProtocol, PositionError
)

logger = logging.getLogger(__name__)


LOCATION_ERROR_MESSAGES = {
    LocationErrorCode.PERMISSION_DENIED: (
        "Failed to get location. Please allow location access in your browser settings, "
        "or enter address manually."
    ),
    LocationErrorCode.POSITION_UNAVAILABLE: (
        "Failed to get location. Location information is unavailable. "
        "Please enter address manually."
    ),
    LocationErrorCode.TIMEOUT: (
        "Failed to get location. Location request timed out. "
        "Please try again or enter address manually."
    ),
    LocationErrorCode.UNSUPPORTED: (
        "Geolocation is not supported by your browser. Please enter address manually."
    ),
    LocationErrorCode.UNKNOWN: "Failed to get location. Please enter address manually.",
}


class GeoResolver:
    """
    Wraps the device location capability and the reverse geocoder

    Keeps the last position fix and reuses it while it is younger than the
    configured maximum age.
    """

    def __init__(
        self,
        location_provider: Optional[LocationProviderProtocol] = None,
        geocoding_client: Optional[GeocodingClientProtocol] = None,
        config: Optional[GeoConfig] = None
    ):
        """
        Initialize GeoResolver

        Args:
            location_provider: Device location capability (None when unsupported)
            geocoding_client: Reverse-geocoding client (optional)
            config: Geo settings (defaults to GeoConfig())
        """
        self.location_provider = location_provider
        self.geocoding_client = geocoding_client
        self.config = config or GeoConfig()
        self._last_fix: Optional[GeoLocation] = None

    @property
    def position_options(self) -> PositionOptions:
        return PositionOptions(
            enable_high_accuracy=self.config.location_high_accuracy,
            timeout=self.config.location_timeout,
            maximum_age=self.config.location_max_age
        )

    def _cached_fix(self, maximum_age: float) -> Optional[GeoLocation]:
        if not self._last_fix:
            return None
        age = (datetime.now(timezone.utc) - self._last_fix.timestamp).total_seconds()
        return self._last_fix if age <= maximum_age else None

    @staticmethod
    def _failure(code: LocationErrorCode) -> LocationResult:
        return LocationResult(
            success=False,
            error_code=code,
            message=LOCATION_ERROR_MESSAGES[code]
        )

    # ==================== Position ====================

    async def acquire_location(self) -> LocationResult:
        """
        Request a single position fix

        Returns:
            LocationResult with the fix, or with an error code and message
        """
        if self.location_provider is None:
            return self._failure(LocationErrorCode.UNSUPPORTED)

        options = self.position_options
        cached = self._cached_fix(options.maximum_age)
        if cached:
            logger.debug("Using cached position fix")
            return LocationResult(success=True, location=cached)

        try:
            location = await asyncio.wait_for(
                self.location_provider.get_current_position(options),
                timeout=options.timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Position request exceeded {options.timeout}s")
            return self._failure(LocationErrorCode.TIMEOUT)
        except PositionError as e:
            logger.warning(f"Position request failed: {e.code.value}")
            return self._failure(e.code)
        except Exception as e:
            logger.error(f"Location provider error: {e}")
            return self._failure(LocationErrorCode.UNKNOWN)

        self._last_fix = location
        logger.info(f"Location obtained: ({location.latitude}, {location.longitude})")
        return LocationResult(success=True, location=location)

    # ==================== Reverse geocoding ====================

    async def reverse_geocode(self, latitude: float, longitude: float) -> GeocodedAddress:
        """
        Resolve coordinates to a postal address

        Waits the courtesy delay first. Timeouts and network failures return
        bare coordinates (degraded=True).

        Raises:
            GeocodingServiceError: the geocoder answered but gave no usable data
        """
        bare = GeocodedAddress(latitude=latitude, longitude=longitude, degraded=True)
        if self.geocoding_client is None:
            return bare

        await asyncio.sleep(self.config.geocoding_delay)

        try:
            data = await asyncio.wait_for(
                self.geocoding_client.reverse(latitude, longitude),
                timeout=self.config.geocoding_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("Geocoding service timed out, using coordinates only")
            return bare
        except GeocodingDegraded as e:
            logger.warning(f"Geocoding service unavailable, using coordinates only: {e}")
            return bare

        fields = extract_address_fields(data)
        logger.debug(f"Geocoded data: {fields}")
        return GeocodedAddress(latitude=latitude, longitude=longitude, **fields)

    async def detect(self) -> GeocodedAddress:
        """
        Acquire the device position and reverse-geocode it

        Raises:
            GeolocationUnavailable: no position fix
            GeocodingServiceError: geocoder failure; ``location`` carries the fix
        """
        result = await self.acquire_location()
        if not result.success:
            raise GeolocationUnavailable(result.error_code, result.message)

        location = result.location
        try:
            return await self.reverse_geocode(location.latitude, location.longitude)
        except GeocodingServiceError as e:
            logger.error(f"Reverse geocoding error: {e}")
            e.location = location
            raise
