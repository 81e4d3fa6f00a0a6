"""
Checkout Service Protocols (Interfaces)

NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from ..location_service.models import Address, GeocodedAddress, ValidationResult
from ..order_service.models import Order


class CheckoutServiceError(Exception):
    """Base exception for checkout errors"""
    pass


class CheckoutNotAllowed(CheckoutServiceError):
    """Order submission preconditions are not met"""

    def __init__(self, message: str, error_code: str):
        super().__init__(message)
        self.error_code = error_code


@runtime_checkable
class GeoResolverProtocol(Protocol):
    """Interface for GeoResolver"""

    async def detect(self) -> GeocodedAddress:
        ...


@runtime_checkable
class AddressValidatorProtocol(Protocol):
    """Interface for AddressValidator"""

    async def validate(self, address: Address) -> ValidationResult:
        ...

    async def validate_pincode(
        self,
        pincode: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None
    ) -> ValidationResult:
        ...

    def require_serviceable(self, result: ValidationResult) -> ValidationResult:
        ...


@runtime_checkable
class OrderSubmitterProtocol(Protocol):
    """Interface for OrderService.submit_order"""

    async def submit_order(self, items: List[Dict[str, Any]], address: Address) -> Order:
        ...
