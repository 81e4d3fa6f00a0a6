"""
Session Service - Data Models
"""

from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from enum import Enum


class UserRole(str, Enum):
    """Role determining which order transitions a user may request"""
    CUSTOMER = "customer"
    OWNER = "owner"


class User(BaseModel):
    """Signed-in user"""
    id: str
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER

    @property
    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER


class CartItem(BaseModel):
    """Cart line keyed by product id"""
    id: str
    name: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=0)
    quantity: int = Field(default=1, gt=0)
    weight: str = ""
    image: str = ""

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
