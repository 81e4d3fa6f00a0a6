"""
Geographic helpers for delivery checks
"""
import math
import re

EARTH_RADIUS_KM = 6371.0
PINCODE_LENGTH = 6

_NON_DIGITS = re.compile(r"\D")


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two points using Haversine formula (in km)"""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def pincode_digits(raw: str) -> str:
    """Strip everything but digits"""
    if not raw:
        return ""
    return _NON_DIGITS.sub("", raw)


def normalize_pincode(raw: str) -> str:
    """Typed pincode input: digits only, at most the first six"""
    return pincode_digits(raw)[:PINCODE_LENGTH]


def is_complete_pincode(pincode: str) -> bool:
    return len(pincode) == PINCODE_LENGTH and pincode.isdigit()
