#!/usr/bin/env python3
"""Remote endpoint configuration

The storefront API (orders, address validation, owner console) and the
external reverse-geocoding service.
"""
import os
from dataclasses import dataclass


def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class ApiConfig:
    """Storefront REST API"""
    base_url: str = "http://localhost:3000/api"
    timeout: float = 15.0
    validate_timeout: float = 15.0
    retry_attempts: int = 3
    notification_path: str = "/notifications"

    @classmethod
    def from_env(cls) -> 'ApiConfig':
        return cls(
            base_url=os.getenv("STOREFRONT_API_URL") or os.getenv("VITE_API_URL", "http://localhost:3000/api"),
            timeout=_float(os.getenv("API_TIMEOUT", ""), 15.0),
            validate_timeout=_float(os.getenv("ADDRESS_VALIDATE_TIMEOUT", ""), 15.0),
            retry_attempts=_int(os.getenv("API_RETRY_ATTEMPTS", ""), 3),
            notification_path=os.getenv("NOTIFICATION_PATH", "/notifications"),
        )


@dataclass
class GeoConfig:
    """Device location and reverse-geocoding settings"""

    # ===========================================
    # Reverse geocoding (Nominatim-compatible)
    # ===========================================
    geocoding_url: str = "https://nominatim.openstreetmap.org"
    geocoding_timeout: float = 10.0
    geocoding_delay: float = 1.0  # rate-limit courtesy before every lookup
    geocoding_user_agent: str = "GSGroceryShop/1.0 (contact@gsgrocery.com)"

    # ===========================================
    # Device position request
    # ===========================================
    location_timeout: float = 15.0
    location_max_age: float = 60.0
    location_high_accuracy: bool = True

    @classmethod
    def from_env(cls) -> 'GeoConfig':
        return cls(
            geocoding_url=os.getenv("GEOCODING_URL", "https://nominatim.openstreetmap.org"),
            geocoding_timeout=_float(os.getenv("GEOCODING_TIMEOUT", ""), 10.0),
            geocoding_delay=_float(os.getenv("GEOCODING_DELAY", ""), 1.0),
            geocoding_user_agent=os.getenv(
                "GEOCODING_USER_AGENT", "GSGroceryShop/1.0 (contact@gsgrocery.com)"
            ),
            location_timeout=_float(os.getenv("LOCATION_TIMEOUT", ""), 15.0),
            location_max_age=_float(os.getenv("LOCATION_MAX_AGE", ""), 60.0),
            location_high_accuracy=_bool(os.getenv("LOCATION_HIGH_ACCURACY", "true")),
        )
