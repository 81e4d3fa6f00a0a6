"""
Order Service Clients Module

HTTP clients for the order store and customer notifications
"""

from .notification_client import NotificationClient
from .order_client import OrderClient

__all__ = [
    "NotificationClient",
    "OrderClient",
]
