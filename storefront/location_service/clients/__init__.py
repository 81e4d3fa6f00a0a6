"""
Location Service Clients Module

HTTP clients for the storefront address endpoints and the reverse-geocoding
service, plus device location providers
"""

from .address_client import AddressClient
from .geocoding_client import GeocodingClient
from .location_provider import FixedLocationProvider

__all__ = [
    "AddressClient",
    "GeocodingClient",
    "FixedLocationProvider",
]
