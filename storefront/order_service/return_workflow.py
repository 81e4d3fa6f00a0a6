"""
Return/Refund Workflow

Secondary request lifecycle attached to delivered orders. It never changes
Order.status; it only moves Order.return_status.

    (none) -> pending -> approved -> returned -> refunded
    (none) -> pending -> rejected
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Union

from core.exceptions import ServiceClientError

from .models import Order, OrderStatus, ReturnReason, ReturnRequest, ReturnStatus
from .notifier import StatusNotifier
from .protocols import (
    InvalidTransition, NotificationClientProtocol, OrderClientProtocol,
    OrderNotFoundError, OrderServiceError, ReturnRequestError
)
from ..session_service.models import UserRole

logger = logging.getLogger(__name__)


# Owner-side advancement; filing (none -> pending) is the customer's only move
RETURN_TRANSITIONS: Dict[ReturnStatus, FrozenSet[ReturnStatus]] = {
    ReturnStatus.PENDING: frozenset({ReturnStatus.APPROVED, ReturnStatus.REJECTED}),
    ReturnStatus.APPROVED: frozenset({ReturnStatus.RETURNED}),
    ReturnStatus.RETURNED: frozenset({ReturnStatus.REFUNDED}),
    ReturnStatus.REJECTED: frozenset(),
    ReturnStatus.REFUNDED: frozenset(),
}


def can_file_return(order: Order, role: UserRole) -> bool:
    return (
        role == UserRole.CUSTOMER
        and order.status == OrderStatus.DELIVERED
        and order.return_status is None
    )


def resolve_return_transition(
    current: Optional[ReturnStatus],
    target: ReturnStatus,
    role: UserRole
) -> ReturnStatus:
    """
    Validate a return status change

    Raises:
        InvalidTransition: change not in the workflow for ``role``
    """
    if current is None:
        if role == UserRole.CUSTOMER and target == ReturnStatus.PENDING:
            return target
        raise InvalidTransition(
            "A return must be filed by the customer first", role=role, target=target
        )

    if role != UserRole.OWNER or target not in RETURN_TRANSITIONS[current]:
        raise InvalidTransition(
            f"Cannot move return from {current.value} to {target.value} as {role.value}",
            role=role, target=target
        )
    return target


class ReturnRefundWorkflow:
    """Files return/refund requests for delivered orders"""

    def __init__(
        self,
        order_client: OrderClientProtocol,
        notification_client: Optional[NotificationClientProtocol] = None,
        notification_channels: Optional[List[str]] = None
    ):
        self.order_client = order_client
        self.notifier = StatusNotifier(notification_client, notification_channels)

    def build_request(
        self,
        order: Order,
        reason: Union[ReturnReason, str],
        description: Optional[str] = None,
        item_refs: Optional[Iterable[str]] = None
    ) -> ReturnRequest:
        """
        Build a return request; items default to the whole order

        Raises:
            ReturnRequestError: empty/unknown reason or items not in the order
        """
        if not reason:
            raise ReturnRequestError("Please select a reason for return/refund")
        try:
            reason = ReturnReason(reason)
        except ValueError:
            raise ReturnRequestError(f"Unknown return reason: {reason}") from None

        if item_refs is None:
            items: List = list(order.items)
        else:
            wanted = set(item_refs)
            items = [item for item in order.items if item.product_ref in wanted]
            unknown = wanted - {item.product_ref for item in items}
            if unknown:
                raise ReturnRequestError(f"Items not in order {order.id}: {sorted(unknown)}")
            if not items:
                raise ReturnRequestError("Select at least one item to return")

        return ReturnRequest(reason=reason, description=description, items=items)

    async def file_return(
        self,
        order: Order,
        role: UserRole,
        reason: Union[ReturnReason, str],
        description: Optional[str] = None,
        item_refs: Optional[Iterable[str]] = None
    ) -> Order:
        """
        File a return/refund request

        Returns:
            The store's Order with return_status=pending

        Raises:
            InvalidTransition: not a delivered order, not the customer, or already filed
            ReturnRequestError: malformed request
        """
        if order.status != OrderStatus.DELIVERED:
            raise InvalidTransition(
                f"Returns are only possible for delivered orders (order is {order.status.value})",
                current_status=order.status, role=role, target=ReturnStatus.PENDING
            )
        if order.return_status is not None:
            raise InvalidTransition(
                f"A return request already exists for this order ({order.return_status.value})",
                current_status=order.status, role=role, target=ReturnStatus.PENDING
            )
        resolve_return_transition(None, ReturnStatus.PENDING, role)

        request = self.build_request(order, reason, description, item_refs)

        try:
            payload = await self.order_client.request_return(order.id, request.to_payload())
        except ServiceClientError as e:
            if e.status_code == 404:
                raise OrderNotFoundError(f"Order not found: {order.id}") from e
            if e.is_rejection:
                raise InvalidTransition(
                    str(e), current_status=order.status, role=role, target=ReturnStatus.PENDING
                ) from e
            logger.error(f"Failed to submit return for order {order.id}: {e}")
            raise OrderServiceError(f"Failed to submit return/refund request: {e}") from e

        try:
            updated = Order.model_validate(payload)
        except ValueError as e:
            logger.error(f"Return for order {order.id} sent, store response unreadable: {e}")
            raise OrderServiceError(
                f"Return request for order {order.id} was filed but the response could not be read"
            ) from e
        logger.info(f"Return filed for order {order.id}: reason={request.reason.value}")

        self.notifier.dispatch(updated, return_status=updated.return_status)
        return updated
