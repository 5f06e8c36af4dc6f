"""Checkout orchestration: validate, confirm, resolve zone, submit, settle.

One call to ``CheckoutOrchestrator.submit_order`` is one checkout
attempt. Steps run strictly in sequence; the zone fetch and the order
POST are ``await`` points. Failures never escape ``submit_order``: they
come back as a ``CheckoutOutcome`` and the cart is only cleared on
success.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from ..domain.cart import Cart
from ..domain.errors import HttpError, OrderSubmitError, StorefrontError
from ..domain.models import CustomerDetails, OrderRequest
from ..domain.ports import OrderGateway
from ..domain.validation import validate, validate_phone
from .zones import ZoneResolver

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Order placed successfully"
FAILURE_MESSAGE = "Error placing the order"
STOREFRONT_ROOT = "/"

Confirm = Callable[[], Awaitable[bool]]


class CheckoutState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    RESOLVING_ZONE = "resolving_zone"
    SUBMITTING = "submitting"
    SETTLED = "settled"


class CheckoutStatus(Enum):
    """How a checkout attempt ended."""

    SUCCESS = "success"
    FAILURE = "failure"
    INVALID = "invalid"
    CANCELLED = "cancelled"
    AUTH_REQUIRED = "auth_required"


@dataclass(frozen=True)
class CheckoutOutcome:
    status: CheckoutStatus
    errors: dict[str, str] = field(default_factory=dict)
    error: StorefrontError | None = None
    redirect_to: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is CheckoutStatus.SUCCESS

    @property
    def reason(self) -> str | None:
        """Name of the failure type, e.g. ``'ZoneNotFound'``."""
        return type(self.error).__name__ if self.error else None


class Notifier(Protocol):
    """User-visible toast/notification sink."""

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class LogNotifier:
    """Notifier that writes to the log; used when no UI is attached."""

    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.error(message)


class CheckoutOrchestrator:
    """Runs checkout attempts against an injected cart.

    Args:
        cart: The session's cart. Only cleared after a successful order.
        zones: Resolver for the persisted zone name.
        orders: Gateway that accepts the order submission.
        confirm: Async yes/no prompt shown before anything is sent.
        notifier: Receives the single success or failure message.
        request_login: Called when checkout is started without a token.

    ``errors`` holds the current field errors for the checkout form.
    Re-entry while an attempt is running is not guarded here; front ends
    should check ``in_flight``.
    """

    def __init__(
        self,
        cart: Cart,
        zones: ZoneResolver,
        orders: OrderGateway,
        confirm: Confirm,
        notifier: Notifier | None = None,
        request_login: Callable[[], None] | None = None,
    ):
        self._cart = cart
        self._zones = zones
        self._orders = orders
        self._confirm = confirm
        self._notifier = notifier or LogNotifier()
        self._request_login = request_login
        self.state = CheckoutState.IDLE
        self.errors: dict[str, str] = {}

    @property
    def in_flight(self) -> bool:
        return self.state not in (CheckoutState.IDLE, CheckoutState.SETTLED)

    # ------------------------------------------------------------------ #
    #  Live form feedback                                                  #
    # ------------------------------------------------------------------ #

    def check_phone(self, phone: str) -> str | None:
        """Re-validate the phone field alone after every edit.

        An empty field clears the message instead of nagging while typing.
        """
        message = validate_phone(phone) if phone else None
        if message:
            self.errors["phone"] = message
        else:
            self.errors.pop("phone", None)
        return message

    def clear_error(self, field_name: str) -> None:
        self.errors.pop(field_name, None)

    # ------------------------------------------------------------------ #
    #  Checkout attempt                                                    #
    # ------------------------------------------------------------------ #

    async def submit_order(
        self,
        customer: CustomerDetails,
        *,
        auth_token: str | None,
        zone_name: str | None,
    ) -> CheckoutOutcome:
        """Run one checkout attempt and return how it ended."""
        if not auth_token:
            logger.info("Checkout requires sign-in")
            if self._request_login is not None:
                self._request_login()
            return CheckoutOutcome(CheckoutStatus.AUTH_REQUIRED)

        self.state = CheckoutState.VALIDATING
        errors = validate(customer)
        if errors:
            self.errors = errors
            self.state = CheckoutState.IDLE
            logger.info("Checkout blocked by invalid fields: %s", ", ".join(errors))
            return CheckoutOutcome(CheckoutStatus.INVALID, errors=dict(errors))
        self.errors = {}

        self.state = CheckoutState.AWAITING_CONFIRMATION
        if not await self._ask_confirmation():
            self.state = CheckoutState.IDLE
            logger.info("Checkout cancelled at confirmation")
            return CheckoutOutcome(CheckoutStatus.CANCELLED)

        try:
            self.state = CheckoutState.RESOLVING_ZONE
            zone = await self._zones.resolve(zone_name or "")

            self.state = CheckoutState.SUBMITTING
            order = OrderRequest.build(zone, self._cart.items, customer)
            await self._submit(order, auth_token)
        except StorefrontError as exc:
            return self._settle_failure(exc)

        self._cart.clear()
        self.state = CheckoutState.SETTLED
        self._notifier.success(SUCCESS_MESSAGE)
        return CheckoutOutcome(CheckoutStatus.SUCCESS, redirect_to=STOREFRONT_ROOT)

    async def _ask_confirmation(self) -> bool:
        """A dismissed prompt resolves to a falsy value; a broken one counts as "no"."""
        try:
            return bool(await self._confirm())
        except Exception:
            logger.exception("Confirmation prompt failed")
            return False

    async def _submit(self, order: OrderRequest, token: str) -> None:
        try:
            await asyncio.to_thread(self._orders.submit_order, order, token)
        except HttpError as exc:
            raise OrderSubmitError(
                f"Failed to send order data: {exc}", status=exc.status,
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error while submitting order")
            raise OrderSubmitError(f"Failed to send order data: {exc!r}") from exc

    def _settle_failure(self, exc: StorefrontError) -> CheckoutOutcome:
        logger.error("Error sending order data: %s", exc, exc_info=exc)
        self.state = CheckoutState.SETTLED
        self._notifier.error(FAILURE_MESSAGE)
        return CheckoutOutcome(CheckoutStatus.FAILURE, error=exc)
