"""
Address Client

HTTP client for the storefront's delivery-eligibility endpoints
"""

import logging
from typing import Any, Dict, Optional

from core.service_client_base import BaseServiceClient

logger = logging.getLogger(__name__)


class AddressClient(BaseServiceClient):
    """Client for /address endpoints"""

    service_name = "address_service"

    async def validate_address(
        self,
        pincode: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        address: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Ask the backend whether an address is inside the delivery area

        Args:
            pincode: 6-digit pincode
            latitude: Latitude, when known
            longitude: Longitude, when known
            address: Full address payload (optional)

        Returns:
            {"valid": bool, "distanceKm": float}
        """
        payload: Dict[str, Any] = {}
        if pincode:
            payload["pincode"] = pincode
        if latitude is not None and longitude is not None:
            payload["latitude"] = latitude
            payload["longitude"] = longitude
        if address:
            payload["address"] = address

        logger.debug(f"Validating address: {payload}")
        return await self.request("POST", "/address/validate", json=payload)

    async def check_pincode(self, pincode: str) -> Dict[str, Any]:
        """
        Pincode-only eligibility check

        Args:
            pincode: 6-digit pincode

        Returns:
            Backend verdict for the pincode
        """
        return await self.request("GET", f"/address/check/{pincode}")
