"""
Session Service

Signed-in user, bearer token, cart and notification preferences.
"""

from .cart import Cart, CartSnapshotStore
from .models import CartItem, User, UserRole
from .session import SessionContext

__all__ = [
    "Cart",
    "CartSnapshotStore",
    "CartItem",
    "User",
    "UserRole",
    "SessionContext",
]
