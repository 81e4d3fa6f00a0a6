"""
Unit tests for order models
"""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from storefront.order_service.models import (
    Order, OrderCreateRequest, OrderItem, OrderLineRequest, OrderStatus
)

from tests.fixtures import make_address, make_order_payload

pytestmark = pytest.mark.unit


class TestOrderItem:

    def test_accepts_store_field_names(self):
        item = OrderItem.model_validate({"productId": 42, "name": "Maggi", "quantity": 2, "price": "14"})

        assert item.product_ref == "42"
        assert item.unit_price == Decimal("14")
        assert item.line_total == Decimal("28")

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderItem(product_ref="p1", quantity=0, unit_price=Decimal("1"))


class TestOrder:

    def test_total_defaults_to_item_sum(self):
        order = Order.model_validate(make_order_payload())

        assert order.total == Decimal("196")

    def test_mongo_style_id(self):
        payload = make_order_payload()
        payload["_id"] = payload.pop("id")

        assert Order.model_validate(payload).id == payload["_id"]

    def test_mismatched_total_rejected(self):
        with pytest.raises(ValidationError):
            Order.model_validate(make_order_payload(total=10))

    def test_matching_total_accepted(self):
        assert Order.model_validate(make_order_payload(total="196.00")).total == Decimal("196")

    def test_float_summed_total_accepted(self):
        items = [
            {"productId": "prod_toffee", "quantity": 1, "price": 0.1},
            {"productId": "prod_mint", "quantity": 1, "price": 0.2},
        ]

        order = Order.model_validate(make_order_payload(items=items, total=0.1 + 0.2))

        assert order.total.quantize(Decimal("0.01")) == Decimal("0.30")

    def test_total_off_by_a_paisa_rejected(self):
        with pytest.raises(ValidationError):
            Order.model_validate(make_order_payload(total="196.01"))

    def test_return_status_requires_reason(self):
        payload = make_order_payload(status="delivered")
        payload["returnStatus"] = "pending"

        with pytest.raises(ValidationError):
            Order.model_validate(payload)

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            Order.model_validate(make_order_payload(status="lost"))

    def test_orders_are_immutable(self):
        order = Order.model_validate(make_order_payload())

        with pytest.raises(ValidationError):
            order.status = OrderStatus.SHIPPED

    @pytest.mark.parametrize("status,terminal", [
        ("pending", False), ("shipped", False), ("delivered", True), ("cancelled", True)
    ])
    def test_is_terminal(self, status, terminal):
        assert Order.model_validate(make_order_payload(status=status)).is_terminal is terminal


class TestOrderCreateRequest:

    def test_payload(self):
        request = OrderCreateRequest(
            items=[OrderLineRequest(id="prod_milk", quantity=2)],
            address=make_address()
        )

        payload = request.to_payload()

        assert payload["paymentMethod"] == "cod"
        assert payload["items"] == [{"id": "prod_milk", "quantity": 2}]
        assert payload["address"]["fullAddress"] == "12 Mall Road, Kanpur, Uttar Pradesh - 208007"

    def test_only_cash_on_delivery(self):
        with pytest.raises(ValidationError):
            OrderCreateRequest(
                items=[OrderLineRequest(id="prod_milk", quantity=1)],
                address=make_address(),
                payment_method="card"
            )

    def test_needs_items(self):
        with pytest.raises(ValidationError):
            OrderCreateRequest(items=[], address=make_address())
