"""
Location Service Factory

Factory functions for creating location components with real dependencies.
This is the ONLY place that builds HTTP clients for this package.

Usage:
    from .factory import create_address_validator, create_geo_resolver
    validator = create_address_validator(token_provider=session.get_token)
"""
from typing import Optional

from core.config import StorefrontConfig, get_settings
from core.service_client_base import TokenProvider

from .address_validator import AddressValidator
from .geo_resolver import GeoResolver
from .protocols import LocationProviderProtocol


def create_address_validator(
    config: Optional[StorefrontConfig] = None,
    token_provider: Optional[TokenProvider] = None,
) -> AddressValidator:
    """Create AddressValidator backed by the storefront API"""
    from .clients.address_client import AddressClient

    config = config or get_settings()
    client = AddressClient(
        base_url=config.api.base_url,
        token_provider=token_provider,
        timeout=config.api.validate_timeout,
        retry_attempts=config.api.retry_attempts,
    )
    return AddressValidator(
        address_client=client,
        geofence=config.geofence,
        validate_timeout=config.api.validate_timeout,
    )


def create_geo_resolver(
    config: Optional[StorefrontConfig] = None,
    location_provider: Optional[LocationProviderProtocol] = None,
) -> GeoResolver:
    """Create GeoResolver with the configured reverse geocoder"""
    from .clients.geocoding_client import GeocodingClient

    config = config or get_settings()
    geocoding_client = GeocodingClient(
        base_url=config.geo.geocoding_url,
        user_agent=config.geo.geocoding_user_agent,
        timeout=config.geo.geocoding_timeout,
    )
    return GeoResolver(
        location_provider=location_provider,
        geocoding_client=geocoding_client,
        config=config.geo,
    )
