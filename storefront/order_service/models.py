"""
Order Service Data Models

Pydantic models for grocery orders, status changes and return requests.
"""

from pydantic import AliasChoices, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum

from ..location_service.models import Address, CamelModel


class OrderStatus(str, Enum):
    """Order status enumeration"""
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class ReturnStatus(str, Enum):
    """Return/refund request status"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    RETURNED = "returned"
    REFUNDED = "refunded"


class ReturnReason(str, Enum):
    """Reasons a customer may give for a return"""
    BROKEN = "broken"
    SPOILED = "spoiled"
    EXPIRED = "expired"
    WRONG_ITEM = "wrong_item"
    OTHER = "other"


class OrderAction(str, Enum):
    """Status change requests"""
    ACCEPT = "accept"
    REJECT = "reject"
    CANCEL = "cancel"
    SET_STATUS = "set_status"  # owner manual update


PAYMENT_METHOD_COD = "cod"
PAISA = Decimal("0.01")


# Core Order Models

class OrderItem(CamelModel):
    """Order line, immutable after order creation"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    product_ref: str = Field(
        ..., validation_alias=AliasChoices("productRef", "product_ref", "productId", "id"),
        serialization_alias="productRef"
    )
    name: str = ""
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(
        ..., ge=0, validation_alias=AliasChoices("unitPrice", "unit_price", "price"),
        serialization_alias="unitPrice"
    )

    @field_validator('product_ref', mode='before')
    @classmethod
    def coerce_ref(cls, v):
        return str(v) if v is not None else v

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class Order(CamelModel):
    """Order as held by the order store"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., validation_alias=AliasChoices("id", "_id", "orderId", "order_id"))
    status: OrderStatus
    return_status: Optional[ReturnStatus] = None
    return_reason: Optional[str] = None
    items: List[OrderItem] = Field(default_factory=list)
    address: Address = Field(default_factory=Address)
    total: Decimal = Decimal("0")
    payment_method: str = PAYMENT_METHOD_COD
    created_at: datetime

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return str(v) if v is not None else v

    @model_validator(mode='before')
    @classmethod
    def fill_total(cls, data: Any) -> Any:
        """Total defaults to the sum of the item lines"""
        if isinstance(data, dict) and data.get("total") is None:
            items = [
                item if isinstance(item, OrderItem) else OrderItem.model_validate(item)
                for item in data.get("items") or []
            ]
            data = {**data, "total": sum((i.line_total for i in items), Decimal("0"))}
        return data

    @model_validator(mode='after')
    def check_consistency(self) -> 'Order':
        expected = sum((item.line_total for item in self.items), Decimal("0"))
        # Store totals are float sums; agree to the paisa
        if self.total.quantize(PAISA) != expected.quantize(PAISA):
            raise ValueError(f"total {self.total} does not match item sum {expected}")
        if (self.return_status is None) != (self.return_reason is None):
            raise ValueError("return_reason must be set together with return_status")
        return self

    @property
    def is_terminal(self) -> bool:
        return self.status in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


# Request Models

class OrderLineRequest(CamelModel):
    """Cart line sent with a new order"""
    id: str
    quantity: int = Field(..., gt=0)


class OrderCreateRequest(CamelModel):
    """POST /orders body"""
    items: List[OrderLineRequest] = Field(..., min_length=1)
    address: Address
    payment_method: str = PAYMENT_METHOD_COD

    @field_validator('payment_method')
    @classmethod
    def validate_payment_method(cls, v: str) -> str:
        if v != PAYMENT_METHOD_COD:
            raise ValueError('only cash on delivery is supported')
        return v

    def to_payload(self) -> Dict[str, Any]:
        return {
            "items": [line.model_dump(by_alias=True) for line in self.items],
            "address": self.address.to_order_payload(),
            "paymentMethod": self.payment_method,
        }


class ReturnRequest(CamelModel):
    """POST /orders/{id}/return body"""
    reason: ReturnReason
    description: Optional[str] = Field(None, max_length=1000)
    items: List[OrderItem] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "reason": self.reason.value,
            "items": [item.model_dump(mode="json", by_alias=True) for item in self.items],
        }
        if self.description:
            payload["description"] = self.description
        return payload


# Response Models

class OrderResponse(CamelModel):
    """Outcome of an order action, for presentation"""
    success: bool
    order: Optional[Order] = None
    message: str
    error_code: Optional[str] = None
