"""
Checkout Service Factory

Wires a CheckoutCoordinator with real location and order components.

Usage:
    from storefront.checkout_service.factory import create_checkout_coordinator
    checkout = create_checkout_coordinator(session, location_provider=provider)
"""
from typing import Optional

from core.config import StorefrontConfig, get_settings

from .checkout_coordinator import CheckoutCoordinator
from ..location_service.factory import create_address_validator, create_geo_resolver
from ..location_service.protocols import LocationProviderProtocol
from ..order_service.factory import create_order_service
from ..session_service.session import SessionContext


def create_checkout_coordinator(
    session: SessionContext,
    config: Optional[StorefrontConfig] = None,
    location_provider: Optional[LocationProviderProtocol] = None,
) -> CheckoutCoordinator:
    """Create CheckoutCoordinator for a session"""
    config = config or get_settings()
    return CheckoutCoordinator(
        session=session,
        geo_resolver=create_geo_resolver(config, location_provider=location_provider),
        address_validator=create_address_validator(config, token_provider=session.get_token),
        order_service=create_order_service(config, session=session),
    )
