"""
Notification Client for Order Service

Sends order update notifications (email/SMS) through the storefront API
"""

import logging
from typing import List, Optional

from core.service_client_base import BaseServiceClient

from ..models import Order, OrderStatus, ReturnStatus

logger = logging.getLogger(__name__)

DEFAULT_CHANNELS = ["email", "sms"]


class NotificationClient(BaseServiceClient):
    """Client for order notifications"""

    service_name = "notification_service"

    def __init__(self, *args, notification_path: str = "/notifications", **kwargs):
        super().__init__(*args, **kwargs)
        self.notification_path = notification_path

    async def notify_order_status(
        self,
        order: Order,
        previous_status: Optional[OrderStatus] = None,
        return_status: Optional[ReturnStatus] = None,
        channels: Optional[List[str]] = None
    ) -> bool:
        """
        Notify the customer about an order update

        Args:
            order: Updated order
            previous_status: Status before the change
            return_status: Return request status, for return updates
            channels: Delivery channels (defaults to email and SMS)

        Returns:
            True if the notification was accepted
        """
        channels = DEFAULT_CHANNELS if channels is None else channels
        if not channels:
            logger.debug(f"All notification channels disabled, skipping order {order.id}")
            return False

        payload = {
            "orderId": order.id,
            "event": "order.return_requested" if return_status else "order.status_changed",
            "status": order.status.value,
            "previousStatus": previous_status.value if previous_status else None,
            "returnStatus": return_status.value if return_status else None,
            "channels": channels,
        }
        await self.request("POST", self.notification_path, json=payload)
        logger.info(f"Notification sent for order {order.id} via {', '.join(channels)}")
        return True
