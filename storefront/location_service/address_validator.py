"""
AddressValidator

Decides delivery eligibility against the circular service-area geofence.
Coordinates are measured locally; a bare pincode is delegated to the
backend's /address/validate check.
"""

import asyncio
import logging
from typing import Optional

from core.config import GeofenceConfig
from core.exceptions import ServiceClientError

from .geo_utils import haversine_km, is_complete_pincode, pincode_digits
from .models import Address, PincodeCheckResponse, ValidationResult
from .protocols import (
    AddressClientProtocol, AddressServiceError, OutOfServiceArea, ValidationInputError
)

logger = logging.getLogger(__name__)


class AddressValidator:
    """Delivery-eligibility checks for a candidate address"""

    def __init__(
        self,
        address_client: Optional[AddressClientProtocol] = None,
        geofence: Optional[GeofenceConfig] = None,
        validate_timeout: float = 15.0
    ):
        """
        Initialize AddressValidator

        Args:
            address_client: Storefront address endpoints (needed for pincode-only checks)
            geofence: Service area (defaults to GeofenceConfig())
            validate_timeout: Hard timeout for remote validation, seconds
        """
        self.address_client = address_client
        self.geofence = geofence or GeofenceConfig()
        self.validate_timeout = validate_timeout

    def distance_from_base(self, latitude: float, longitude: float) -> float:
        return haversine_km(
            self.geofence.base_latitude, self.geofence.base_longitude,
            latitude, longitude
        )

    def evaluate(self, latitude: float, longitude: float) -> ValidationResult:
        """Local geofence decision; the radius itself is inside the area"""
        distance_km = self.distance_from_base(latitude, longitude)
        return ValidationResult(
            valid=distance_km <= self.geofence.max_radius_km,
            distance_km=distance_km
        )

    async def validate(self, address: Address) -> ValidationResult:
        """
        Validate an address for delivery

        Args:
            address: Candidate address with a pincode and/or coordinates

        Returns:
            ValidationResult; distance_km is present on rejection too

        Raises:
            ValidationInputError: no coordinates and no complete 6-digit pincode
            AddressServiceError: remote check failed or timed out
        """
        if address.has_coordinates:
            result = self.evaluate(address.latitude, address.longitude)
            logger.info(
                f"Coordinate check: {result.distance_km:.2f}km from base, valid={result.valid}"
            )
            return result

        if not address.pincode:
            raise ValidationInputError(
                "Enter a pincode or detect your location to check delivery", field="pincode"
            )
        return await self.validate_pincode(address.pincode)

    async def validate_pincode(
        self,
        pincode: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None
    ) -> ValidationResult:
        """Delegate a pincode check to the backend, with any known coordinates"""
        pincode = pincode_digits(pincode)
        if not is_complete_pincode(pincode):
            raise ValidationInputError("Please enter a valid 6-digit pincode", field="pincode")
        if self.address_client is None:
            raise AddressServiceError("Address validation service not configured")

        try:
            payload = await asyncio.wait_for(
                self.address_client.validate_address(
                    pincode=pincode, latitude=latitude, longitude=longitude
                ),
                timeout=self.validate_timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Address validation for {pincode} timed out")
            raise AddressServiceError("Address validation timed out. Please try again.") from e
        except ServiceClientError as e:
            logger.error(f"Address validation failed for {pincode}: {e}")
            raise AddressServiceError(str(e)) from e

        result = ValidationResult.model_validate(payload)
        logger.info(f"Pincode check {pincode}: {result.distance_km}km, valid={result.valid}")
        return result

    async def check_pincode(self, pincode: str) -> PincodeCheckResponse:
        """
        Quick pincode eligibility lookup

        Raises:
            ValidationInputError: pincode is not exactly 6 digits once non-digits are stripped
            AddressServiceError: remote failure
        """
        pincode = pincode_digits(pincode)
        if not is_complete_pincode(pincode):
            raise ValidationInputError("Please enter a valid 6-digit pincode", field="pincode")
        if self.address_client is None:
            raise AddressServiceError("Address validation service not configured")

        try:
            payload = await asyncio.wait_for(
                self.address_client.check_pincode(pincode),
                timeout=self.validate_timeout
            )
        except asyncio.TimeoutError as e:
            raise AddressServiceError("Pincode check timed out. Please try again.") from e
        except ServiceClientError as e:
            raise AddressServiceError(str(e)) from e

        return PincodeCheckResponse.model_validate({"pincode": pincode, **payload})

    def require_serviceable(self, result: ValidationResult) -> ValidationResult:
        """Raise OutOfServiceArea for a rejected address"""
        if not result.valid:
            raise OutOfServiceArea(result.distance_km, self.geofence.max_radius_km)
        return result
