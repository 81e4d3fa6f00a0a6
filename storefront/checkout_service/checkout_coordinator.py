"""
CheckoutCoordinator

Drives delivery-address entry and order submission for one session:
manual pincode entry or device auto-detection, geofence validation, and
the cash-on-delivery order. Every action returns a CheckoutResult; failures
never propagate to the caller.
"""

import logging
from functools import partial
from typing import Any, Dict, Optional

from .address_form import AddressForm
from .models import CheckoutErrorCode, CheckoutResult
from .protocols import (
    AddressValidatorProtocol, CheckoutNotAllowed, GeoResolverProtocol, OrderSubmitterProtocol
)
from ..location_service.geo_utils import is_complete_pincode, normalize_pincode
from ..location_service.models import Address, GeocodedAddress, ValidationResult
from ..location_service.protocols import (
    AddressServiceError, GeocodingServiceError, GeolocationUnavailable,
    OutOfServiceArea, ValidationInputError
)
from ..order_service.protocols import OrderSubmissionFailure
from ..session_service.session import SessionContext

logger = logging.getLogger(__name__)


class CheckoutCoordinator:
    """
    Orchestrates GeoResolver, AddressValidator and order submission

    Sequencing: detect -> merge -> validate, strictly in that order. Manual
    edits made while detection is in flight are kept, and a validation that
    finishes after its input changed is discarded.
    """

    def __init__(
        self,
        session: SessionContext,
        geo_resolver: GeoResolverProtocol,
        address_validator: AddressValidatorProtocol,
        order_service: OrderSubmitterProtocol,
        address: Optional[Address] = None
    ):
        """
        Initialize CheckoutCoordinator

        Args:
            session: Active session (user, cart)
            geo_resolver: Device location and reverse geocoding
            address_validator: Geofence validation
            order_service: Order submission
            address: Pre-filled address (optional)
        """
        self.session = session
        self.geo_resolver = geo_resolver
        self.address_validator = address_validator
        self.order_service = order_service
        self.form = AddressForm(address)

    @property
    def address(self) -> Address:
        return self.form.address

    # ==================== Address input ====================

    def set_pincode(self, raw: str) -> Address:
        """
        Manual pincode edit; resets any previous verdict

        Typing a different pincode drops detected coordinates, which belong
        to the old location.
        """
        if normalize_pincode(raw) != self.form.address.pincode:
            return self.form.update(pincode=raw, latitude=None, longitude=None)
        return self.form.update(pincode=raw)

    def update_address(self, **fields: Any) -> Address:
        """Manual edit of any address fields"""
        return self.form.update(**fields)

    # ==================== Validation ====================

    async def validate_manual(self) -> CheckoutResult:
        """
        Validate the typed address on user request

        Requires a complete 6-digit pincode; coordinates detected for the
        same pincode are sent along.
        """
        address = self.form.address
        if not is_complete_pincode(address.pincode):
            return CheckoutResult(
                success=False,
                message="Please enter a valid 6-digit pincode",
                error_code=CheckoutErrorCode.INVALID_INPUT,
                address=address
            )
        return await self._validate(
            partial(
                self.address_validator.validate_pincode,
                address.pincode, address.latitude, address.longitude
            ),
            success_prefix="Delivery available!"
        )

    async def auto_detect(self) -> CheckoutResult:
        """
        Detect the device location, merge it into the address and validate

        A location failure falls back to manual entry without validating.
        """
        before = self.form.address
        warning = ""

        try:
            detected = await self.geo_resolver.detect()
        except GeolocationUnavailable as e:
            logger.info(f"Auto-detection failed ({e.code.value}), manual entry required")
            return CheckoutResult(
                success=False,
                message=str(e),
                error_code=CheckoutErrorCode.GEOLOCATION_UNAVAILABLE,
                address=before
            )
        except GeocodingServiceError as e:
            location = getattr(e, "location", None)
            if location is None:
                return CheckoutResult(
                    success=False,
                    message=f"Failed to look up your address: {e}",
                    error_code=CheckoutErrorCode.GEOCODING_FAILED,
                    address=before
                )
            detected = GeocodedAddress(
                latitude=location.latitude, longitude=location.longitude, degraded=True
            )
            warning = f"Could not look up your address ({e}); please fill it in. "
        except Exception as e:
            logger.error(f"Unexpected error detecting location: {e}")
            return CheckoutResult(
                success=False,
                message="Failed to detect your location. Please enter your pincode.",
                error_code=CheckoutErrorCode.UNEXPECTED_ERROR,
                address=before
            )

        address = self._merge_detected(before, detected)

        if is_complete_pincode(address.pincode):
            check = partial(
                self.address_validator.validate_pincode,
                address.pincode, address.latitude, address.longitude
            )
        else:
            check = partial(self.address_validator.validate, address)

        result = await self._validate(check, success_prefix="Location detected and validated!")
        if warning:
            result.message = warning + result.message
        return result

    def _merge_detected(self, before: Address, detected: GeocodedAddress) -> Address:
        """
        Copy detected fields that carry data and that the user has not
        edited since detection started
        """
        current = self.form.address
        candidates: Dict[str, Any] = {
            "latitude": detected.latitude,
            "longitude": detected.longitude,
            "city": detected.city,
            "state": detected.state,
            "pincode": normalize_pincode(detected.pincode),
            "street": detected.street,
        }
        updates = {
            name: value for name, value in candidates.items()
            if value not in (None, "") and getattr(current, name) == getattr(before, name)
        }
        return self.form.update(**updates)

    async def _validate(self, check, success_prefix: str) -> CheckoutResult:
        version = self.form.version
        try:
            result: ValidationResult = await check()
        except ValidationInputError as e:
            return CheckoutResult(
                success=False, message=str(e),
                error_code=CheckoutErrorCode.INVALID_INPUT, address=self.form.address
            )
        except AddressServiceError as e:
            return CheckoutResult(
                success=False, message=str(e) or "Failed to validate address",
                error_code=CheckoutErrorCode.VALIDATION_FAILED, address=self.form.address
            )
        except Exception as e:
            logger.error(f"Unexpected error validating address: {e}")
            return CheckoutResult(
                success=False, message="Failed to validate address",
                error_code=CheckoutErrorCode.UNEXPECTED_ERROR, address=self.form.address
            )

        if not self.form.apply_result(version, result):
            return CheckoutResult(
                success=False,
                message="Address changed while it was being checked. Please validate again.",
                error_code=CheckoutErrorCode.STALE_VALIDATION,
                address=self.form.address
            )

        try:
            self.address_validator.require_serviceable(result)
        except OutOfServiceArea as e:
            return CheckoutResult(
                success=False, message=str(e),
                error_code=CheckoutErrorCode.OUT_OF_SERVICE_AREA,
                address=self.form.address, validation=result
            )

        return CheckoutResult(
            success=True,
            message=f"{success_prefix} Distance: {result.display_distance}km",
            address=self.form.address,
            validation=result
        )

    # ==================== Submission ====================

    def _check_can_submit(self) -> None:
        if not self.session.is_authenticated:
            raise CheckoutNotAllowed("Please sign in to checkout", CheckoutErrorCode.SIGN_IN_REQUIRED)
        if not self.form.is_checkoutable:
            raise CheckoutNotAllowed(
                "Please validate your address first", CheckoutErrorCode.ADDRESS_NOT_VALIDATED
            )
        if self.form.missing_required_fields():
            raise CheckoutNotAllowed(
                "Please fill in all required address fields", CheckoutErrorCode.ADDRESS_INCOMPLETE
            )
        if self.session.cart.is_empty:
            raise CheckoutNotAllowed("Your cart is empty", CheckoutErrorCode.CART_EMPTY)

    async def submit_order(self) -> CheckoutResult:
        """
        Place a cash-on-delivery order for the cart

        The cart is cleared only after the order store confirms the order.
        """
        try:
            self._check_can_submit()
        except CheckoutNotAllowed as e:
            return CheckoutResult(
                success=False, message=str(e), error_code=e.error_code, address=self.form.address
            )

        try:
            order = await self.order_service.submit_order(
                self.session.cart.to_order_items(), self.form.address
            )
        except OrderSubmissionFailure as e:
            return CheckoutResult(
                success=False, message=str(e) or "Failed to place order",
                error_code=CheckoutErrorCode.SUBMISSION_FAILED, address=self.form.address
            )
        except Exception as e:
            logger.error(f"Unexpected error placing order: {e}")
            return CheckoutResult(
                success=False, message="Failed to place order",
                error_code=CheckoutErrorCode.UNEXPECTED_ERROR, address=self.form.address
            )

        self.session.cart.clear()
        logger.info(f"Order {order.id} placed by user {self.session.user.id}")
        return CheckoutResult(
            success=True,
            message="Order placed successfully!",
            address=self.form.address,
            order=order
        )
