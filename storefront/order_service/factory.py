"""
Order Service Factory

Factory functions for creating order components with real dependencies.
This is the ONLY place that builds HTTP clients for this package.

Usage:
    from .factory import create_order_lifecycle
    lifecycle = create_order_lifecycle(session=session)
"""
from typing import Optional

from core.config import StorefrontConfig, get_settings

from .order_lifecycle import OrderLifecycle
from .order_service import OrderService
from .return_workflow import ReturnRefundWorkflow
from ..session_service.session import SessionContext


def _clients(config: StorefrontConfig, session: Optional[SessionContext]):
    from .clients import NotificationClient, OrderClient

    token_provider = session.get_token if session else None
    order_client = OrderClient(
        base_url=config.api.base_url,
        token_provider=token_provider,
        timeout=config.api.timeout,
        retry_attempts=config.api.retry_attempts,
    )
    notification_client = NotificationClient(
        base_url=config.api.base_url,
        token_provider=token_provider,
        timeout=config.api.timeout,
        retry_attempts=config.api.retry_attempts,
        notification_path=config.api.notification_path,
    )
    return order_client, notification_client


def create_order_service(
    config: Optional[StorefrontConfig] = None,
    session: Optional[SessionContext] = None,
) -> OrderService:
    """Create OrderService backed by the storefront API"""
    config = config or get_settings()
    order_client, _ = _clients(config, session)
    return OrderService(order_client=order_client)


def create_order_lifecycle(
    config: Optional[StorefrontConfig] = None,
    session: Optional[SessionContext] = None,
) -> OrderLifecycle:
    """Create OrderLifecycle with notifications honoring the session preferences"""
    config = config or get_settings()
    order_client, notification_client = _clients(config, session)
    return OrderLifecycle(
        order_client=order_client,
        notification_client=notification_client,
        notification_channels=session.notification_channels if session else None,
    )


def create_return_workflow(
    config: Optional[StorefrontConfig] = None,
    session: Optional[SessionContext] = None,
) -> ReturnRefundWorkflow:
    """Create ReturnRefundWorkflow backed by the storefront API"""
    config = config or get_settings()
    order_client, notification_client = _clients(config, session)
    return ReturnRefundWorkflow(
        order_client=order_client,
        notification_client=notification_client,
        notification_channels=session.notification_channels if session else None,
    )
