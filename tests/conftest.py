"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - component/ : Services with mocked clients (no network)
    - unit/      : Pure functions and models (no I/O)
"""
import os
import sys

import pytest

# Set testing environment BEFORE any project imports
os.environ.setdefault("ENV", "testing")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from core.config import GeoConfig, GeofenceConfig
from storefront.session_service import SessionContext, UserRole
from tests.fixtures import make_user


@pytest.fixture
def geofence() -> GeofenceConfig:
    """Default 5 km service area around pincode 208007"""
    return GeofenceConfig()


@pytest.fixture
def geo_config() -> GeoConfig:
    """Geo settings without the courtesy delay"""
    return GeoConfig(geocoding_delay=0, geocoding_timeout=1.0, location_timeout=1.0)


@pytest.fixture
def session() -> SessionContext:
    """Session without a signed-in user or cart snapshot"""
    return SessionContext()


@pytest.fixture
def customer_session(session) -> SessionContext:
    session.start(make_user(UserRole.CUSTOMER), token="tok_customer")
    return session


@pytest.fixture
def owner_session(session) -> SessionContext:
    session.start(make_user(UserRole.OWNER), token="tok_owner")
    return session
