"""
Order Service

Order submission, the role-gated status state machine and the return/refund
workflow for delivered orders.
"""

from .models import Order, OrderAction, OrderItem, OrderStatus, ReturnReason, ReturnStatus
from .order_lifecycle import OrderLifecycle, allowed_actions, resolve_transition
from .notifier import StatusNotifier
from .order_service import OrderService
from .protocols import (
    InvalidTransition, OrderNotFoundError, OrderServiceError,
    OrderSubmissionFailure, ReturnRequestError
)
from .return_workflow import ReturnRefundWorkflow, can_file_return, resolve_return_transition

__all__ = [
    "Order",
    "OrderAction",
    "OrderItem",
    "OrderStatus",
    "ReturnReason",
    "ReturnStatus",
    "OrderLifecycle",
    "OrderService",
    "StatusNotifier",
    "ReturnRefundWorkflow",
    "allowed_actions",
    "resolve_transition",
    "can_file_return",
    "resolve_return_transition",
    "InvalidTransition",
    "OrderNotFoundError",
    "OrderServiceError",
    "OrderSubmissionFailure",
    "ReturnRequestError",
]
