"""
Checkout Service - Data Models
"""

from pydantic import BaseModel
from typing import Optional

from ..location_service.models import Address, ValidationResult
from ..order_service.models import Order


class CheckoutErrorCode:
    """Machine-readable reasons carried by CheckoutResult"""
    INVALID_INPUT = "INVALID_INPUT"
    GEOLOCATION_UNAVAILABLE = "GEOLOCATION_UNAVAILABLE"
    GEOCODING_FAILED = "GEOCODING_FAILED"
    OUT_OF_SERVICE_AREA = "OUT_OF_SERVICE_AREA"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    STALE_VALIDATION = "STALE_VALIDATION"
    SIGN_IN_REQUIRED = "SIGN_IN_REQUIRED"
    ADDRESS_NOT_VALIDATED = "ADDRESS_NOT_VALIDATED"
    ADDRESS_INCOMPLETE = "ADDRESS_INCOMPLETE"
    CART_EMPTY = "CART_EMPTY"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class CheckoutResult(BaseModel):
    """Outcome of a checkout action, with a user-facing message"""
    success: bool
    message: str
    error_code: Optional[str] = None
    address: Optional[Address] = None
    validation: Optional[ValidationResult] = None
    order: Optional[Order] = None
