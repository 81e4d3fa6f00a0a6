"""
CheckoutCoordinator Component Tests

Address entry, auto-detection, validation sequencing and order submission
with real GeoResolver/AddressValidator/OrderService over in-memory doubles.
"""
import asyncio

import httpx
import pytest

from core.exceptions import ServiceClientError
from storefront.checkout_service import CheckoutCoordinator, CheckoutErrorCode
from storefront.location_service import AddressValidator, GeoResolver, ValidationState
from storefront.location_service.clients import GeocodingClient
from storefront.location_service.models import LocationErrorCode
from storefront.location_service.protocols import GeocodingDegraded, GeocodingServiceError
from storefront.order_service import OrderService, OrderStatus

from tests.fixtures import BASE_PINCODE, DELHI_PINCODE, make_address, make_cart_item
from ..location_service.mocks import MockAddressClient, MockGeocodingClient, MockLocationProvider
from ..order_service.mocks import MockOrderClient

pytestmark = [pytest.mark.component, pytest.mark.asyncio]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def provider():
    return MockLocationProvider()


@pytest.fixture
def geocoder():
    return MockGeocodingClient()


@pytest.fixture
def address_client():
    return MockAddressClient(valid=True, distance_km=0.4)


@pytest.fixture
def order_client():
    return MockOrderClient()


@pytest.fixture
def make_coordinator(provider, geocoder, address_client, order_client, geo_config, geofence):
    def _make(session, address=None):
        return CheckoutCoordinator(
            session=session,
            geo_resolver=GeoResolver(provider, geocoder, geo_config),
            address_validator=AddressValidator(address_client, geofence, validate_timeout=1.0),
            order_service=OrderService(order_client),
            address=address,
        )
    return _make


@pytest.fixture
def checkout(make_coordinator, customer_session):
    return make_coordinator(customer_session)


async def wait_until(predicate):
    for _ in range(200):
        if predicate():
            return
        await asyncio.sleep(0.005)
    raise AssertionError("condition not reached")


# =============================================================================
# Auto-detection
# =============================================================================

class TestAutoDetect:

    async def test_detected_address_is_merged_and_validated(self, checkout, address_client):
        result = await checkout.auto_detect()

        assert result.success is True
        assert result.message == "Location detected and validated! Distance: 0.40km"
        assert checkout.address.city == "Kanpur"
        assert checkout.address.pincode == BASE_PINCODE
        assert checkout.address.street == "Mall Road"
        assert checkout.form.state == ValidationState.VALID
        assert address_client.calls[0]["pincode"] == BASE_PINCODE
        assert address_client.calls[0]["latitude"] == 26.4124

    async def test_denied_location_falls_back_without_validation(
        self, checkout, provider, address_client, geocoder
    ):
        provider.set_error(LocationErrorCode.PERMISSION_DENIED)

        result = await checkout.auto_detect()

        assert result.success is False
        assert result.error_code == CheckoutErrorCode.GEOLOCATION_UNAVAILABLE
        assert "allow location access" in result.message
        assert result.validation is None
        assert address_client.calls == []
        assert geocoder.calls == []
        assert checkout.form.state == ValidationState.UNKNOWN

    async def test_unreachable_geocoder_validates_coordinates_locally(
        self, checkout, geocoder, address_client
    ):
        geocoder.set_error(GeocodingDegraded("unreachable"))

        result = await checkout.auto_detect()

        assert result.success is True
        assert result.validation.distance_km == pytest.approx(0.0, abs=1e-9)
        assert checkout.address.city == ""
        assert checkout.address.latitude == 26.4124
        assert address_client.calls == []

    async def test_geocoder_failure_keeps_coordinates_with_warning(self, checkout, geocoder):
        geocoder.set_error(GeocodingServiceError("Reverse geocoding failed: 500"))

        result = await checkout.auto_detect()

        assert result.success is True
        assert result.message.startswith("Could not look up your address")
        assert checkout.address.has_coordinates

    async def test_unreadable_geocoder_reply_keeps_coordinates(
        self, customer_session, provider, geo_config, geofence, address_client
    ):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>rate limited</html>")
        )
        async with httpx.AsyncClient(transport=transport) as http:
            geocoder = GeocodingClient(
                base_url="https://geo.test", user_agent="test-agent", timeout=1.0, client=http
            )
            checkout = CheckoutCoordinator(
                session=customer_session,
                geo_resolver=GeoResolver(provider, geocoder, geo_config),
                address_validator=AddressValidator(address_client, geofence, validate_timeout=1.0),
                order_service=OrderService(MockOrderClient()),
            )

            result = await checkout.auto_detect()

        assert result.success is True
        assert result.message.startswith("Could not look up your address")
        assert checkout.address.latitude == 26.4124
        assert address_client.calls == []

    async def test_unexpected_detection_error_is_reported(self, checkout, geocoder):
        geocoder.set_error(RuntimeError("geocoder bug"))

        result = await checkout.auto_detect()

        assert result.success is False
        assert result.error_code == CheckoutErrorCode.UNEXPECTED_ERROR
        assert checkout.form.state == ValidationState.UNKNOWN

    async def test_far_location_is_out_of_area(self, checkout, provider, geocoder):
        provider.set_position(19.0760, 72.8777)
        geocoder.set_error(GeocodingDegraded("unreachable"))

        result = await checkout.auto_detect()

        assert result.success is False
        assert result.error_code == CheckoutErrorCode.OUT_OF_SERVICE_AREA
        assert result.validation.valid is False
        assert result.validation.distance_km > 1000
        assert checkout.form.state == ValidationState.INVALID

    async def test_manual_edit_during_detection_is_kept(self, checkout, provider):
        provider.set_delay(0.05)

        task = asyncio.create_task(checkout.auto_detect())
        await wait_until(lambda: provider.requests)
        checkout.update_address(city="Kalyanpur")
        await task

        assert checkout.address.city == "Kalyanpur"
        assert checkout.address.pincode == BASE_PINCODE


# =============================================================================
# Manual validation
# =============================================================================

class TestManualValidation:

    async def test_incomplete_pincode_makes_no_call(self, checkout, address_client):
        checkout.set_pincode("2080")

        result = await checkout.validate_manual()

        assert result.success is False
        assert result.error_code == CheckoutErrorCode.INVALID_INPUT
        assert address_client.calls == []

    async def test_pincode_input_is_normalized(self, checkout):
        address = checkout.set_pincode("208 007 99")

        assert address.pincode == BASE_PINCODE

    async def test_valid_pincode(self, checkout, address_client):
        checkout.set_pincode(BASE_PINCODE)

        result = await checkout.validate_manual()

        assert result.success is True
        assert result.message == "Delivery available! Distance: 0.40km"
        assert checkout.form.is_checkoutable

    async def test_distant_pincode_is_rejected(self, checkout, address_client):
        address_client.set_result(valid=False, distance_km=412.37)
        checkout.set_pincode(DELHI_PINCODE)

        result = await checkout.validate_manual()

        assert result.error_code == CheckoutErrorCode.OUT_OF_SERVICE_AREA
        assert result.message == "Delivery not available. Distance: 412.37km (max 5km)"
        assert result.validation.distance_km == 412.37
        assert not checkout.form.is_checkoutable

    async def test_backend_failure(self, checkout, address_client):
        address_client.set_error(ServiceClientError("Service down", status_code=503))
        checkout.set_pincode(BASE_PINCODE)

        result = await checkout.validate_manual()

        assert result.error_code == CheckoutErrorCode.VALIDATION_FAILED
        assert result.message == "Service down"

    async def test_result_for_changed_pincode_is_discarded(self, checkout, address_client):
        gate = address_client.hold()
        checkout.set_pincode(BASE_PINCODE)

        task = asyncio.create_task(checkout.validate_manual())
        await wait_until(lambda: address_client.calls)
        checkout.set_pincode(DELHI_PINCODE)
        gate.set()
        result = await task

        assert result.success is False
        assert result.error_code == CheckoutErrorCode.STALE_VALIDATION
        assert checkout.form.state == ValidationState.UNKNOWN
        assert not checkout.form.is_checkoutable

    async def test_new_pincode_drops_detected_coordinates(self, checkout, address_client):
        await checkout.auto_detect()

        address = checkout.set_pincode(DELHI_PINCODE)
        await checkout.validate_manual()

        assert address.latitude is None
        assert address.longitude is None
        assert address_client.calls[-1] == {
            "pincode": DELHI_PINCODE, "latitude": None, "longitude": None
        }

    async def test_same_pincode_keeps_detected_coordinates(self, checkout):
        await checkout.auto_detect()

        address = checkout.set_pincode(BASE_PINCODE)

        assert address.latitude == 26.4124
        assert checkout.form.is_checkoutable

    async def test_pincode_change_resets_verdict(self, checkout):
        checkout.set_pincode(BASE_PINCODE)
        await checkout.validate_manual()

        checkout.set_pincode("208002")

        assert checkout.form.state == ValidationState.UNKNOWN


# =============================================================================
# Submission
# =============================================================================

class TestSubmitOrder:

    async def _validated(self, make_coordinator, session, **address_overrides):
        coordinator = make_coordinator(session, address=make_address(**address_overrides))
        await coordinator.validate_manual()
        return coordinator

    async def test_requires_sign_in(self, make_coordinator, session):
        coordinator = await self._validated(make_coordinator, session)
        session.cart.add(make_cart_item())

        result = await coordinator.submit_order()

        assert result.error_code == CheckoutErrorCode.SIGN_IN_REQUIRED

    async def test_requires_validated_address(self, checkout, order_client):
        checkout.session.cart.add(make_cart_item())
        checkout.update_address(**make_address().model_dump())

        result = await checkout.submit_order()

        assert result.error_code == CheckoutErrorCode.ADDRESS_NOT_VALIDATED
        order_client.assert_not_called("create_order")

    async def test_requires_complete_address(self, make_coordinator, customer_session):
        coordinator = await self._validated(make_coordinator, customer_session, street="")
        customer_session.cart.add(make_cart_item())

        result = await coordinator.submit_order()

        assert result.error_code == CheckoutErrorCode.ADDRESS_INCOMPLETE

    async def test_requires_items(self, make_coordinator, customer_session):
        coordinator = await self._validated(make_coordinator, customer_session)

        result = await coordinator.submit_order()

        assert result.error_code == CheckoutErrorCode.CART_EMPTY

    async def test_success_clears_cart(self, make_coordinator, customer_session, order_client):
        coordinator = await self._validated(make_coordinator, customer_session)
        customer_session.cart.add(make_cart_item("prod_milk"))
        customer_session.cart.add(make_cart_item("prod_milk"))

        result = await coordinator.submit_order()

        assert result.success is True
        assert result.message == "Order placed successfully!"
        assert result.order.status == OrderStatus.PENDING
        assert result.order.payment_method == "cod"
        assert customer_session.cart.is_empty
        payload = order_client.get_calls("create_order")[0]["payload"]
        assert payload["items"] == [{"id": "prod_milk", "quantity": 2}]

    async def test_failure_keeps_cart(self, make_coordinator, customer_session, order_client):
        coordinator = await self._validated(make_coordinator, customer_session)
        customer_session.cart.add(make_cart_item("prod_milk"))
        order_client.set_error(ServiceClientError("Product out of stock", status_code=400))

        result = await coordinator.submit_order()

        assert result.success is False
        assert result.error_code == CheckoutErrorCode.SUBMISSION_FAILED
        assert "out of stock" in result.message
        assert customer_session.cart.quantity_of("prod_milk") == 1
