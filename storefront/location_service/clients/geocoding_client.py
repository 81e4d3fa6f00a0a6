"""
Reverse Geocoding Client

HTTP client for a Nominatim-compatible reverse-geocoding service
"""

import httpx
import logging
from typing import Any, Dict, Optional

from ..protocols import GeocodingDegraded, GeocodingServiceError

logger = logging.getLogger(__name__)


class GeocodingClient:
    """Client for the external reverse-geocoding service"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[Any] = None
    ):
        """
        Initialize geocoding client

        Args:
            base_url: Geocoder base URL (defaults to GEOCODING_URL)
            user_agent: Identifying User-Agent, required by public Nominatim
            timeout: Request timeout in seconds
            client: Pre-built HTTP client (dependency injection)
        """
        if base_url is None or user_agent is None or timeout is None:
            from core.config import get_settings
            geo_config = get_settings().geo
            base_url = base_url or geo_config.geocoding_url
            user_agent = user_agent or geo_config.geocoding_user_agent
            timeout = timeout if timeout is not None else geo_config.geocoding_timeout

        self.base_url = base_url.rstrip('/')
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json",
            }
        )

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def reverse(self, latitude: float, longitude: float) -> Dict[str, Any]:
        """
        Resolve coordinates to a geocoder payload

        Args:
            latitude: Latitude
            longitude: Longitude

        Returns:
            Raw payload with ``address`` and ``display_name``

        Raises:
            GeocodingDegraded: timeout or network failure
            GeocodingServiceError: non-2xx response, unreadable body or no address data
        """
        try:
            response = await self.client.get(
                f"{self.base_url}/reverse",
                params={
                    "format": "json",
                    "lat": latitude,
                    "lon": longitude,
                    "zoom": 18,
                    "addressdetails": 1,
                }
            )
        except httpx.TimeoutException as e:
            raise GeocodingDegraded("Reverse geocoding timed out") from e
        except httpx.TransportError as e:
            raise GeocodingDegraded(f"Geocoding service unreachable: {e}") from e

        if response.status_code >= 400:
            raise GeocodingServiceError(f"Reverse geocoding failed: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise GeocodingServiceError("Geocoding service returned an unreadable response") from e
        if not isinstance(data, dict) or not data.get("address"):
            raise GeocodingServiceError("No address data returned")
        return data


def extract_address_fields(data: Dict[str, Any]) -> Dict[str, str]:
    """
    Pick locality, region and postcode out of a geocoder payload

    Locality prefers city, then town, village, county, district.
    """
    address = data.get("address") or {}

    city = (
        address.get("city")
        or address.get("town")
        or address.get("village")
        or address.get("county")
        or address.get("district")
        or ""
    )
    state = address.get("state") or address.get("region") or ""
    pincode = address.get("postcode") or ""

    return {
        "display_address": data.get("display_name") or f"{city}, {state}",
        "city": city,
        "state": state,
        "pincode": pincode,
    }
