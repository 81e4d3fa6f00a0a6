"""
Checkout Service

Delivery-address entry, geofence validation and order submission.
"""

from .address_form import AddressForm
from .checkout_coordinator import CheckoutCoordinator
from .models import CheckoutErrorCode, CheckoutResult

__all__ = [
    "AddressForm",
    "CheckoutCoordinator",
    "CheckoutErrorCode",
    "CheckoutResult",
]
