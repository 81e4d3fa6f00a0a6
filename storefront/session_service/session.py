"""
SessionContext

Explicit store for the signed-in user, their bearer token, cart and
notification preferences. Created at session start and torn down on logout.
"""

import logging
from typing import List, Optional

from .cart import Cart, CartSnapshotStore
from .models import User, UserRole

logger = logging.getLogger(__name__)


class SessionContext:
    """State shared by the checkout and order components of one session"""

    def __init__(self, cart_store: Optional[CartSnapshotStore] = None):
        self.user: Optional[User] = None
        self.token: Optional[str] = None
        self.cart = Cart(store=cart_store).load()
        self.email_notifications = True
        self.sms_notifications = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def role(self) -> UserRole:
        return self.user.role if self.user else UserRole.CUSTOMER

    @property
    def is_owner(self) -> bool:
        return self.user is not None and self.user.is_owner

    @property
    def notification_channels(self) -> List[str]:
        channels = []
        if self.email_notifications:
            channels.append("email")
        if self.sms_notifications:
            channels.append("sms")
        return channels

    def get_token(self) -> Optional[str]:
        """Token provider for API clients"""
        return self.token

    def start(self, user: User, token: Optional[str] = None) -> None:
        self.user = user
        self.token = token
        logger.info(f"Session started for user {user.id} ({user.role.value})")

    def logout(self) -> None:
        """Clear user, token and cart"""
        if self.user:
            logger.info(f"Session ended for user {self.user.id}")
        self.user = None
        self.token = None
        self.cart.clear()

    def set_notification_preferences(
        self,
        email: Optional[bool] = None,
        sms: Optional[bool] = None
    ) -> None:
        if email is not None:
            self.email_notifications = email
        if sms is not None:
            self.sms_notifications = sms
