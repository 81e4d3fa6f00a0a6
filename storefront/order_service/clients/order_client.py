"""
Order Client

HTTP client for the storefront order store and owner console endpoints
"""

import logging
from typing import Any, Dict, List, Optional

from core.service_client_base import BaseServiceClient

logger = logging.getLogger(__name__)


class OrderClient(BaseServiceClient):
    """Order store HTTP client"""

    service_name = "order_service"

    # =============================================================================
    # Orders
    # =============================================================================

    async def create_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new order

        Args:
            payload: {items: [{id, quantity}], address, paymentMethod: "cod"}

        Returns:
            Created order data
        """
        return await self.request("POST", "/orders", json=payload)

    async def list_orders(self) -> List[Dict[str, Any]]:
        """List the signed-in user's orders"""
        return await self.request("GET", "/orders")

    async def get_order(self, order_id: str) -> Dict[str, Any]:
        """Get order by ID"""
        return await self.request("GET", f"/orders/{order_id}")

    async def update_order_status(self, order_id: str, status: str) -> Dict[str, Any]:
        """
        Request a status change

        The store rejects changes the caller's role may not make.
        """
        return await self.request("PATCH", f"/orders/{order_id}/status", json={"status": status})

    async def request_return(self, order_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """File a return/refund request: {reason, items, description?}"""
        return await self.request("POST", f"/orders/{order_id}/return", json=payload)

    # =============================================================================
    # Owner console and payment
    # =============================================================================

    async def list_owner_orders(
        self,
        status: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """All orders, optionally filtered by status"""
        params: Dict[str, Any] = {}
        if status:
            params["status"] = status
        if limit:
            params["limit"] = limit
        return await self.request("GET", "/owner/orders", params=params)

    async def get_dashboard(self) -> Dict[str, Any]:
        """Owner dashboard summary"""
        return await self.request("GET", "/owner/dashboard")

    async def get_payment_status(self, order_id: str) -> Dict[str, Any]:
        """Cash-on-delivery payment status"""
        return await self.request("GET", f"/payment/status/{order_id}")
