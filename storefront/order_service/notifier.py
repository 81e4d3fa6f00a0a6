"""
Status notices

Customer notifications go out as background tasks so a slow notifier never
holds up an order change. Failures are logged; pending notices can be
awaited with ``drain()``.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Set

from .models import Order
from .protocols import NotificationClientProtocol

logger = logging.getLogger(__name__)


class StatusNotifier:
    """Background dispatcher for order status notices"""

    def __init__(
        self,
        client: Optional[NotificationClientProtocol] = None,
        channels: Optional[List[str]] = None
    ):
        self.client = client
        self.channels = channels
        self._background_tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._background_tasks)

    def dispatch(self, order: Order, **notice: Any) -> Optional[asyncio.Task]:
        """Schedule a notice for ``order``; returns the task, or None without a client"""
        if self.client is None:
            logger.debug(f"Notification client not configured, skipping notice for {order.id}")
            return None

        task = asyncio.create_task(self._send(order, notice))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return task

    async def _send(self, order: Order, notice: Dict[str, Any]) -> bool:
        try:
            return await self.client.notify_order_status(
                order, channels=self.channels, **notice
            )
        except Exception as e:
            logger.error(f"Failed to send notification for order {order.id}: {e}")
            return False

    async def drain(self) -> List[bool]:
        """Wait for every scheduled notice; True per notice that was sent"""
        if not self._background_tasks:
            return []
        return list(await asyncio.gather(*self._background_tasks))
