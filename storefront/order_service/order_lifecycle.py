"""
Order Lifecycle

Role-gated order status state machine. Every legal change is listed in
ORDER_TRANSITIONS; the owner's manual override is the only open-ended rule
and still cannot leave a terminal status. A change is committed only once
the order store acknowledges it.
"""

import logging
from typing import Dict, FrozenSet, List, Optional, Tuple

from core.exceptions import ServiceClientError

from .models import Order, OrderAction, OrderStatus
from .notifier import StatusNotifier
from .protocols import (
    InvalidTransition, NotificationClientProtocol, OrderClientProtocol,
    OrderNotFoundError, OrderServiceError
)
from ..session_service.models import UserRole

logger = logging.getLogger(__name__)


ORDER_TRANSITIONS: Dict[Tuple[OrderStatus, OrderAction, UserRole], OrderStatus] = {
    # Owner accepts or rejects a new order
    (OrderStatus.PENDING, OrderAction.ACCEPT, UserRole.OWNER): OrderStatus.PROCESSING,
    (OrderStatus.PENDING, OrderAction.REJECT, UserRole.OWNER): OrderStatus.CANCELLED,
    # Customer cancels before delivery
    (OrderStatus.PENDING, OrderAction.CANCEL, UserRole.CUSTOMER): OrderStatus.CANCELLED,
    (OrderStatus.PROCESSING, OrderAction.CANCEL, UserRole.CUSTOMER): OrderStatus.CANCELLED,
    (OrderStatus.SHIPPED, OrderAction.CANCEL, UserRole.CUSTOMER): OrderStatus.CANCELLED,
}

TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset({
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
})


def resolve_transition(
    current: OrderStatus,
    action: OrderAction,
    role: UserRole,
    target: Optional[OrderStatus] = None
) -> OrderStatus:
    """
    Return the status an action leads to

    Raises:
        InvalidTransition: the action is not allowed from ``current`` for ``role``
    """
    if action == OrderAction.SET_STATUS:
        if role != UserRole.OWNER:
            raise InvalidTransition(
                "Only the owner can set an order status directly",
                current_status=current, action=action, role=role, target=target
            )
        if current in TERMINAL_STATUSES:
            raise InvalidTransition(
                f"Cannot change status of a {current.value} order",
                current_status=current, action=action, role=role, target=target
            )
        if target is None or target == current:
            raise InvalidTransition(
                f"Order is already {current.value}",
                current_status=current, action=action, role=role, target=target
            )
        return target

    new_status = ORDER_TRANSITIONS.get((current, action, role))
    if new_status is None:
        raise InvalidTransition(
            f"Cannot {action.value} a {current.value} order as {role.value}",
            current_status=current, action=action, role=role
        )
    return new_status


def allowed_actions(status: OrderStatus, role: UserRole) -> List[OrderAction]:
    """Actions a role may take on an order in ``status``"""
    actions = [
        action for (from_status, action, allowed_role) in ORDER_TRANSITIONS
        if from_status == status and allowed_role == role
    ]
    if role == UserRole.OWNER and status not in TERMINAL_STATUSES:
        actions.append(OrderAction.SET_STATUS)
    return actions


class OrderLifecycle:
    """
    Applies status transitions through the order store

    The caller's Order is never modified; a committed transition returns
    the store's updated Order.
    """

    def __init__(
        self,
        order_client: OrderClientProtocol,
        notification_client: Optional[NotificationClientProtocol] = None,
        notification_channels: Optional[List[str]] = None
    ):
        """
        Initialize OrderLifecycle

        Args:
            order_client: Order store client
            notification_client: Customer notifier (optional)
            notification_channels: Channels to notify on ("email", "sms")
        """
        self.order_client = order_client
        self.notifier = StatusNotifier(notification_client, notification_channels)

    async def accept(self, order: Order, role: UserRole) -> Order:
        """Owner accepts a pending order"""
        return await self._transition(order, OrderAction.ACCEPT, role)

    async def reject(self, order: Order, role: UserRole) -> Order:
        """Owner rejects a pending order"""
        return await self._transition(order, OrderAction.REJECT, role)

    async def cancel(self, order: Order, role: UserRole) -> Order:
        """Customer cancels an undelivered order"""
        return await self._transition(order, OrderAction.CANCEL, role)

    async def set_status(self, order: Order, target: OrderStatus, role: UserRole) -> Order:
        """Owner manual status update from the management console"""
        return await self._transition(order, OrderAction.SET_STATUS, role, target)

    def allowed_actions(self, order: Order, role: UserRole) -> List[OrderAction]:
        return allowed_actions(order.status, role)

    async def _transition(
        self,
        order: Order,
        action: OrderAction,
        role: UserRole,
        target: Optional[OrderStatus] = None
    ) -> Order:
        new_status = resolve_transition(order.status, action, role, target)

        try:
            payload = await self.order_client.update_order_status(order.id, new_status.value)
        except ServiceClientError as e:
            if e.status_code == 404:
                raise OrderNotFoundError(f"Order not found: {order.id}") from e
            if e.is_rejection:
                # Another writer got there first, or the store's rules differ
                logger.warning(f"Order store rejected {action.value} on {order.id}: {e}")
                raise InvalidTransition(
                    str(e), current_status=order.status, action=action, role=role, target=new_status
                ) from e
            logger.error(f"Failed to {action.value} order {order.id}: {e}")
            raise OrderServiceError(f"Failed to update order status: {e}") from e

        try:
            updated = Order.model_validate(payload)
        except ValueError as e:
            logger.error(f"Order {order.id} {action.value} sent, store response unreadable: {e}")
            raise OrderServiceError(
                f"Order {order.id} was updated to {new_status.value} but the response could not be read"
            ) from e
        logger.info(f"Order {order.id}: {order.status.value} -> {updated.status.value} ({action.value})")

        self.notifier.dispatch(updated, previous_status=order.status)
        return updated
