"""
Component Test Layer Configuration

Services run against in-memory doubles; no network access.

Structure:
    tests/component/
    ├── mocks/              Shared HTTP client double
    ├── clients/            Storefront API and geocoding clients
    ├── order_service/      Lifecycle, returns, submission
    ├── location_service/   GeoResolver, AddressValidator
    └── checkout_service/   CheckoutCoordinator

Usage:
    pytest tests/component -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.mocks import MockHttpClient


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# HTTP Mocks
# =============================================================================

@pytest.fixture
def mock_http() -> MockHttpClient:
    """Mock httpx.AsyncClient"""
    return MockHttpClient()
