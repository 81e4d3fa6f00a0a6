"""
Common/Shared Fixtures

Base factories and generators used across storefront tests.
"""
import math
import uuid
from datetime import datetime, timezone
from typing import Optional, Tuple

# Geofence defaults (pincode 208007)
BASE_LATITUDE = 26.4124
BASE_LONGITUDE = 80.3153
BASE_PINCODE = "208007"

# Far outside the service area
MUMBAI = (19.0760, 72.8777)
DELHI_PINCODE = "110001"


def make_user_id() -> str:
    """Generate a unique user ID"""
    return f"usr_test_{uuid.uuid4().hex[:12]}"


def make_order_id() -> str:
    """Generate a unique order ID"""
    return f"ord_test_{uuid.uuid4().hex[:12]}"


def make_product_id() -> str:
    """Generate a unique product ID"""
    return f"prod_{uuid.uuid4().hex[:8]}"


def make_email(prefix: Optional[str] = None) -> str:
    """Generate a unique email"""
    prefix = prefix or f"test_{uuid.uuid4().hex[:8]}"
    return f"{prefix}@example.com"


def make_timestamp() -> str:
    """Generate current UTC timestamp"""
    return datetime.now(timezone.utc).isoformat()


def point_north_of_base(distance_km: float) -> Tuple[float, float]:
    """Coordinates ``distance_km`` due north of the base location"""
    delta_lat = math.degrees(distance_km / 6371.0)
    return BASE_LATITUDE + delta_lat, BASE_LONGITUDE
