"""
Order Service Business Logic

Order submission and queries against the order store. Status changes go
through OrderLifecycle and returns through ReturnRefundWorkflow.
"""

import logging
from typing import Any, Dict, List, Optional

from core.exceptions import ServiceClientError

from .models import Order, OrderCreateRequest, OrderLineRequest, OrderStatus
from .protocols import (
    OrderClientProtocol, OrderNotFoundError, OrderServiceError, OrderSubmissionFailure
)
from ..location_service.models import Address

logger = logging.getLogger(__name__)


def _read_orders(payload: List[Dict[str, Any]]) -> List[Order]:
    """Parse order store payloads; unreadable ones raise OrderServiceError"""
    try:
        return [Order.model_validate(item) for item in payload]
    except ValueError as e:
        logger.error(f"Order store returned an unreadable order: {e}")
        raise OrderServiceError(f"Order data could not be read: {e}") from e


class OrderService:
    """
    Order submission and lookup

    Handles cash-on-delivery order creation and the customer and owner
    order views.
    """

    def __init__(self, order_client: OrderClientProtocol):
        """
        Initialize Order Service

        Args:
            order_client: Order store client (dependency injection)
        """
        self.order_client = order_client

    # Order Submission

    async def submit_order(
        self,
        items: List[Dict[str, Any]],
        address: Address
    ) -> Order:
        """
        Create a cash-on-delivery order

        Args:
            items: Cart lines [{id, quantity}]
            address: Validated delivery address

        Returns:
            Created Order

        Raises:
            OrderSubmissionFailure: any failure from order creation
        """
        try:
            request = OrderCreateRequest(
                items=[OrderLineRequest(**line) for line in items],
                address=address
            )
        except ValueError as e:
            raise OrderSubmissionFailure(f"Invalid order: {e}") from e

        try:
            payload = await self.order_client.create_order(request.to_payload())
        except ServiceClientError as e:
            logger.error(f"Failed to create order: {e}")
            raise OrderSubmissionFailure(str(e) or "Failed to place order") from e

        try:
            order = Order.model_validate(payload)
        except ValueError as e:
            logger.error(f"Order store returned an unreadable order: {e}")
            raise OrderSubmissionFailure("Order placed but the response could not be read") from e

        logger.info(f"Order created: {order.id} ({len(order.items)} items, total {order.total})")
        return order

    # Order Query Operations

    async def get_order(self, order_id: str) -> Order:
        """Get order by ID"""
        try:
            payload = await self.order_client.get_order(order_id)
        except ServiceClientError as e:
            if e.status_code == 404:
                raise OrderNotFoundError(f"Order not found: {order_id}") from e
            logger.error(f"Failed to get order {order_id}: {e}")
            raise OrderServiceError(f"Failed to get order: {e}") from e
        return _read_orders([payload])[0]

    async def list_orders(self) -> List[Order]:
        """Orders of the signed-in user, newest first"""
        try:
            payload = await self.order_client.list_orders()
        except ServiceClientError as e:
            logger.error(f"Failed to list orders: {e}")
            raise OrderServiceError(f"Failed to list orders: {e}") from e
        orders = _read_orders(payload)
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    async def list_owner_orders(
        self,
        status: Optional[OrderStatus] = None,
        limit: Optional[int] = None
    ) -> List[Order]:
        """Owner console order list"""
        try:
            payload = await self.order_client.list_owner_orders(
                status=status.value if status else None,
                limit=limit
            )
        except ServiceClientError as e:
            logger.error(f"Failed to list owner orders: {e}")
            raise OrderServiceError(f"Failed to list owner orders: {e}") from e
        return _read_orders(payload)

    async def get_dashboard(self) -> Dict[str, Any]:
        """Owner dashboard summary"""
        try:
            return await self.order_client.get_dashboard()
        except ServiceClientError as e:
            logger.error(f"Failed to load dashboard: {e}")
            raise OrderServiceError(f"Failed to load dashboard: {e}") from e

    async def get_payment_status(self, order_id: str) -> Dict[str, Any]:
        """Cash-on-delivery payment status"""
        try:
            return await self.order_client.get_payment_status(order_id)
        except ServiceClientError as e:
            if e.status_code == 404:
                raise OrderNotFoundError(f"Order not found: {order_id}") from e
            raise OrderServiceError(f"Failed to get payment status: {e}") from e
