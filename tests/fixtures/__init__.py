"""
Test Fixtures Package

Factories shared by unit and component tests.
"""

from .common import (
    BASE_LATITUDE,
    BASE_LONGITUDE,
    BASE_PINCODE,
    DELHI_PINCODE,
    MUMBAI,
    make_email,
    make_order_id,
    make_product_id,
    make_timestamp,
    make_user_id,
    point_north_of_base,
)
from .storefront_fixtures import (
    make_address,
    make_cart_item,
    make_order,
    make_order_items,
    make_order_payload,
    make_user,
)

__all__ = [
    "BASE_LATITUDE",
    "BASE_LONGITUDE",
    "BASE_PINCODE",
    "DELHI_PINCODE",
    "MUMBAI",
    "make_email",
    "make_order_id",
    "make_product_id",
    "make_timestamp",
    "make_user_id",
    "point_north_of_base",
    "make_address",
    "make_cart_item",
    "make_order",
    "make_order_items",
    "make_order_payload",
    "make_user",
]
