"""Tests for storefront.checkout.orchestrator (CheckoutOrchestrator)."""

import asyncio
import logging
from unittest.mock import MagicMock, patch

import pytest

from storefront import create_checkout
from storefront.checkout import (
    CheckoutOrchestrator,
    CheckoutState,
    CheckoutStatus,
    ZoneResolver,
)
from storefront.checkout.orchestrator import FAILURE_MESSAGE, SUCCESS_MESSAGE
from storefront.domain.cart import Cart
from storefront.domain.errors import (
    HttpError,
    OrderSubmitError,
    ZoneFetchError,
    ZoneNotFound,
)
from storefront.domain.models import CustomerDetails, LineItem, Zone
from storefront.domain.validation import PHONE_FORMAT_INVALID, PHONE_LENGTH_INVALID

VALID_CUSTOMER = CustomerDetails("Rahim Uddin", "House 1, Road 2", "01712345678")
TOKEN = "token-123"
ZONE_NAME = "Dhanmondi"


# ------------------------------------------------------------------ #
#  Helpers                                                              #
# ------------------------------------------------------------------ #


class FakeApi:
    """In-memory zone directory and order gateway."""

    def __init__(self, zones=None, zone_error=None, order_error=None):
        self.zones = zones if zones is not None else [Zone(1, "Gulshan"), Zone(4, ZONE_NAME)]
        self.zone_error = zone_error
        self.order_error = order_error
        self.zone_calls = 0
        self.submitted = []

    def list_zones(self):
        self.zone_calls += 1
        if self.zone_error is not None:
            raise self.zone_error
        return list(self.zones)

    def submit_order(self, order, token):
        self.submitted.append((order, token))
        if self.order_error is not None:
            raise self.order_error
        return {"id": 1}


def _confirm(answer=True):
    calls = []

    async def confirm():
        calls.append(True)
        return answer

    confirm.calls = calls
    return confirm


def _cart():
    return Cart([
        LineItem(id=10, name="Tomato", price="80", quantity=2, unit="kg"),
        LineItem(id=11, name="Potato", price="40", quantity=1, unit="kg"),
    ])


def _orchestrator(api=None, cart=None, confirm=None, **kwargs):
    api = api or FakeApi()
    cart = cart if cart is not None else _cart()
    notifier = kwargs.pop("notifier", MagicMock())
    orchestrator = CheckoutOrchestrator(
        cart=cart,
        zones=ZoneResolver(api),
        orders=api,
        confirm=confirm or _confirm(),
        notifier=notifier,
        **kwargs,
    )
    return orchestrator, api, cart, notifier


def _submit(orchestrator, customer=VALID_CUSTOMER, token=TOKEN, zone=ZONE_NAME):
    return asyncio.run(
        orchestrator.submit_order(customer, auth_token=token, zone_name=zone)
    )


# ------------------------------------------------------------------ #
#  Success                                                              #
# ------------------------------------------------------------------ #


class TestSuccess:
    def test_clears_cart_and_redirects(self):
        orchestrator, api, cart, notifier = _orchestrator()

        outcome = _submit(orchestrator)

        assert outcome.status is CheckoutStatus.SUCCESS
        assert outcome.ok
        assert outcome.redirect_to == "/"
        assert cart.is_empty
        assert orchestrator.state is CheckoutState.SETTLED
        notifier.success.assert_called_once_with(SUCCESS_MESSAGE)
        notifier.error.assert_not_called()

    def test_order_built_from_cart_zone_and_customer(self):
        orchestrator, api, _, _ = _orchestrator()

        _submit(orchestrator)

        order, token = api.submitted[0]
        assert token == TOKEN
        assert order.to_payload() == {
            "zone_id": 4,
            "product": [
                {"product_id": 10, "quantity": 2},
                {"product_id": 11, "quantity": 1},
            ],
            "customer": {
                "name": "Rahim Uddin",
                "address": "House 1, Road 2",
                "phone": "01712345678",
            },
        }

    def test_steps_run_in_order(self):
        seen = []
        api = FakeApi()

        async def confirm():
            seen.append(("confirm", orchestrator.state))
            return True

        original_list = api.list_zones

        def list_zones():
            seen.append(("zones", orchestrator.state))
            return original_list()

        api.list_zones = list_zones
        orchestrator, _, _, _ = _orchestrator(api=api, confirm=confirm)

        _submit(orchestrator)

        assert seen == [
            ("confirm", CheckoutState.AWAITING_CONFIRMATION),
            ("zones", CheckoutState.RESOLVING_ZONE),
        ]


# ------------------------------------------------------------------ #
#  Gates: auth, validation, confirmation                               #
# ------------------------------------------------------------------ #


class TestGates:
    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token_requests_login(self, token):
        request_login = MagicMock()
        confirm = _confirm()
        orchestrator, api, cart, notifier = _orchestrator(
            confirm=confirm, request_login=request_login,
        )

        outcome = _submit(orchestrator, token=token)

        assert outcome.status is CheckoutStatus.AUTH_REQUIRED
        assert outcome.error is None
        request_login.assert_called_once()
        assert orchestrator.state is CheckoutState.IDLE
        assert orchestrator.errors == {}
        assert confirm.calls == []
        assert api.zone_calls == 0
        assert len(cart) == 2
        notifier.error.assert_not_called()

    def test_invalid_input_makes_no_network_calls(self):
        confirm = _confirm()
        orchestrator, api, cart, notifier = _orchestrator(confirm=confirm)

        outcome = _submit(orchestrator, customer=CustomerDetails("", "", ""))

        assert outcome.status is CheckoutStatus.INVALID
        assert set(outcome.errors) == {"name", "address", "phone"}
        assert orchestrator.errors == outcome.errors
        assert orchestrator.state is CheckoutState.IDLE
        assert confirm.calls == []
        assert api.zone_calls == 0
        assert api.submitted == []
        assert len(cart) == 2
        notifier.error.assert_not_called()

    def test_valid_submit_clears_previous_field_errors(self):
        orchestrator, _, _, _ = _orchestrator()
        _submit(orchestrator, customer=CustomerDetails("", "B", "01712345678"))
        assert "name" in orchestrator.errors

        _submit(orchestrator)

        assert orchestrator.errors == {}

    def test_failing_prompt_counts_as_declined(self):
        async def confirm():
            raise RuntimeError("dialog crashed")

        orchestrator, api, cart, notifier = _orchestrator(confirm=confirm)

        outcome = _submit(orchestrator)

        assert outcome.status is CheckoutStatus.CANCELLED
        assert orchestrator.state is CheckoutState.IDLE
        assert orchestrator.in_flight is False
        assert api.zone_calls == 0
        assert len(cart) == 2
        notifier.error.assert_not_called()

    @pytest.mark.parametrize("answer", [False, None])
    def test_declined_confirmation_has_no_side_effects(self, answer):
        orchestrator, api, cart, notifier = _orchestrator(confirm=_confirm(answer))

        outcome = _submit(orchestrator)

        assert outcome.status is CheckoutStatus.CANCELLED
        assert orchestrator.state is CheckoutState.IDLE
        assert api.zone_calls == 0
        assert api.submitted == []
        assert len(cart) == 2
        notifier.success.assert_not_called()
        notifier.error.assert_not_called()


# ------------------------------------------------------------------ #
#  Failures                                                             #
# ------------------------------------------------------------------ #


class TestFailures:
    def test_zone_not_found(self):
        orchestrator, api, cart, notifier = _orchestrator(api=FakeApi(zones=[Zone(1, "Gulshan")]))

        outcome = _submit(orchestrator)

        assert outcome.status is CheckoutStatus.FAILURE
        assert isinstance(outcome.error, ZoneNotFound)
        assert outcome.reason == "ZoneNotFound"
        assert api.submitted == []
        assert len(cart) == 2
        assert orchestrator.state is CheckoutState.SETTLED
        notifier.error.assert_called_once_with(FAILURE_MESSAGE)

    def test_missing_zone_name_is_not_found(self):
        orchestrator, api, _, _ = _orchestrator()

        outcome = _submit(orchestrator, zone=None)

        assert isinstance(outcome.error, ZoneNotFound)
        assert api.submitted == []

    def test_zone_fetch_error(self):
        api = FakeApi(zone_error=HttpError("HTTP 500: oops", status=500))
        orchestrator, _, cart, notifier = _orchestrator(api=api)

        outcome = _submit(orchestrator)

        assert isinstance(outcome.error, ZoneFetchError)
        assert api.submitted == []
        assert len(cart) == 2
        notifier.error.assert_called_once_with(FAILURE_MESSAGE)

    def test_order_rejected_keeps_cart(self):
        api = FakeApi(order_error=HttpError("HTTP 422: invalid", status=422))
        orchestrator, _, cart, notifier = _orchestrator(api=api)
        before = cart.items

        outcome = _submit(orchestrator)

        assert outcome.status is CheckoutStatus.FAILURE
        assert isinstance(outcome.error, OrderSubmitError)
        assert outcome.error.status == 422
        assert cart.items == before
        assert len(api.submitted) == 1
        notifier.error.assert_called_once_with(FAILURE_MESSAGE)
        notifier.success.assert_not_called()

    def test_unexpected_gateway_error_is_contained(self):
        api = FakeApi(order_error=RuntimeError("socket closed"))
        orchestrator, _, cart, _ = _orchestrator(api=api)

        outcome = _submit(orchestrator)

        assert isinstance(outcome.error, OrderSubmitError)
        assert isinstance(outcome.error.__cause__, RuntimeError)
        assert len(cart) == 2

    def test_unexpected_zone_directory_error_is_contained(self):
        api = FakeApi(zone_error=RuntimeError("boom"))
        orchestrator, _, cart, notifier = _orchestrator(api=api)

        outcome = _submit(orchestrator)

        assert outcome.status is CheckoutStatus.FAILURE
        assert isinstance(outcome.error, ZoneFetchError)
        assert isinstance(outcome.error.__cause__, RuntimeError)
        assert orchestrator.state is CheckoutState.SETTLED
        assert orchestrator.in_flight is False
        assert api.submitted == []
        assert len(cart) == 2
        notifier.error.assert_called_once_with(FAILURE_MESSAGE)

    def test_failure_logged_with_traceback(self, caplog):
        api = FakeApi(order_error=HttpError("HTTP 500", status=500))
        orchestrator, _, _, _ = _orchestrator(api=api)

        with caplog.at_level(logging.ERROR, logger="storefront.checkout.orchestrator"):
            _submit(orchestrator)

        record = next(r for r in caplog.records if "Error sending order data" in r.getMessage())
        assert record.exc_info is not None
        assert record.exc_info[0] is OrderSubmitError

    def test_retry_after_failure_succeeds(self):
        api = FakeApi(order_error=HttpError("HTTP 503", status=503))
        orchestrator, _, cart, _ = _orchestrator(api=api)

        assert _submit(orchestrator).status is CheckoutStatus.FAILURE
        api.order_error = None
        assert _submit(orchestrator).status is CheckoutStatus.SUCCESS
        assert cart.is_empty
        assert len(api.submitted) == 2


# ------------------------------------------------------------------ #
#  Live form feedback                                                   #
# ------------------------------------------------------------------ #


class TestLiveFeedback:
    def test_check_phone_sets_first_error(self):
        orchestrator, _, _, _ = _orchestrator()
        assert orchestrator.check_phone("123") == PHONE_LENGTH_INVALID
        assert orchestrator.errors == {"phone": PHONE_LENGTH_INVALID}
        assert orchestrator.check_phone("02712345678") == PHONE_FORMAT_INVALID

    def test_check_phone_clears_when_valid_or_empty(self):
        orchestrator, _, _, _ = _orchestrator()
        orchestrator.check_phone("123")
        orchestrator.check_phone("01712345678")
        assert "phone" not in orchestrator.errors
        orchestrator.check_phone("123")
        orchestrator.check_phone("")
        assert "phone" not in orchestrator.errors

    def test_check_phone_leaves_other_fields(self):
        orchestrator, _, _, _ = _orchestrator()
        _submit(orchestrator, customer=CustomerDetails("", "", "1"))
        orchestrator.check_phone("01712345678")
        assert set(orchestrator.errors) == {"name", "address"}

    def test_clear_error(self):
        orchestrator, _, _, _ = _orchestrator()
        _submit(orchestrator, customer=CustomerDetails("", "B", "01712345678"))
        orchestrator.clear_error("name")
        assert orchestrator.errors == {}

    def test_in_flight(self):
        orchestrator, _, _, _ = _orchestrator()
        assert orchestrator.in_flight is False
        orchestrator.state = CheckoutState.SUBMITTING
        assert orchestrator.in_flight is True


# ------------------------------------------------------------------ #
#  Factory                                                              #
# ------------------------------------------------------------------ #


class TestCreateCheckout:
    def test_wires_api(self):
        api = FakeApi()
        cart = _cart()

        checkout = create_checkout(cart, _confirm(), api=api, notifier=MagicMock())
        outcome = asyncio.run(
            checkout.submit_order(VALID_CUSTOMER, auth_token=TOKEN, zone_name=ZONE_NAME)
        )

        assert outcome.ok
        assert cart.is_empty
        assert api.zone_calls == 1

    def test_builds_api_from_settings(self):
        with patch("storefront.StorefrontApi") as mock_api, \
                patch("storefront.load_settings") as mock_load:
            create_checkout(_cart(), _confirm())
        mock_api.assert_called_once_with(mock_load.return_value)
