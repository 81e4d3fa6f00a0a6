"""
Order Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import Order, OrderAction, OrderStatus, ReturnStatus
from ..session_service.models import UserRole


# ============================================================================
# Custom Exceptions - defined here to avoid importing clients
# ============================================================================

class OrderServiceError(Exception):
    """Base exception for order service errors"""
    pass


class OrderNotFoundError(OrderServiceError):
    """Order not found error"""
    pass


class InvalidTransition(OrderServiceError):
    """Requested status or return change is not allowed for this role"""

    def __init__(
        self,
        message: str,
        current_status: Optional[OrderStatus] = None,
        action: Optional[OrderAction] = None,
        role: Optional[UserRole] = None,
        target: Optional[Any] = None
    ):
        super().__init__(message)
        self.current_status = current_status
        self.action = action
        self.role = role
        self.target = target


class ReturnRequestError(OrderServiceError):
    """Return request is malformed (unknown reason, foreign items)"""
    pass


class OrderSubmissionFailure(OrderServiceError):
    """Order creation failed"""
    pass


# ============================================================================
# Client Protocols
# ============================================================================

@runtime_checkable
class OrderClientProtocol(Protocol):
    """Interface for the order store"""

    async def create_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST /orders"""
        ...

    async def list_orders(self) -> List[Dict[str, Any]]:
        """GET /orders"""
        ...

    async def get_order(self, order_id: str) -> Dict[str, Any]:
        """GET /orders/{id}"""
        ...

    async def update_order_status(self, order_id: str, status: str) -> Dict[str, Any]:
        """PATCH /orders/{id}/status"""
        ...

    async def request_return(self, order_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST /orders/{id}/return"""
        ...


@runtime_checkable
class NotificationClientProtocol(Protocol):
    """Interface for customer notifications (email/SMS)"""

    async def notify_order_status(
        self,
        order: Order,
        previous_status: Optional[OrderStatus] = None,
        return_status: Optional[ReturnStatus] = None,
        channels: Optional[List[str]] = None
    ) -> bool:
        """Send an order update notification"""
        ...
