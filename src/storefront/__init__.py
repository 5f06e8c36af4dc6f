"""storefront: cart and checkout engine for the grocery delivery storefront.

Usage:
    from storefront import Cart, CustomerDetails, LineItem, create_checkout

    cart = Cart()
    cart.add_item(LineItem(id=7, name="Potato", price="40", quantity=2, unit="kg"))

    async def confirm() -> bool:
        return True

    checkout = create_checkout(cart, confirm)
    outcome = await checkout.submit_order(
        CustomerDetails("Rahim", "House 1, Road 2", "01712345678"),
        auth_token=token,
        zone_name="Dhanmondi",
    )
"""

from collections.abc import Callable

from .checkout import (
    CheckoutOrchestrator,
    CheckoutOutcome,
    CheckoutState,
    CheckoutStatus,
    Notifier,
    ZoneResolver,
)
from .checkout.orchestrator import Confirm
from .config import Settings, load_settings
from .domain import Cart, CustomerDetails, LineItem, Product, Zone, validate
from .infra.api import StorefrontApi


def create_checkout(
    cart: Cart,
    confirm: Confirm,
    *,
    api: StorefrontApi | None = None,
    settings: Settings | None = None,
    notifier: Notifier | None = None,
    request_login: Callable[[], None] | None = None,
) -> CheckoutOrchestrator:
    """Wire a ``CheckoutOrchestrator`` to the storefront REST API.

    Args:
        cart: The session's cart.
        confirm: Async yes/no prompt.
        api: Existing API client to share; built from ``settings`` otherwise.
        settings: Used only when ``api`` is not given. Defaults to
            ``load_settings()``.
    """
    if api is None:
        api = StorefrontApi(settings or load_settings())
    return CheckoutOrchestrator(
        cart=cart,
        zones=ZoneResolver(api),
        orders=api,
        confirm=confirm,
        notifier=notifier,
        request_login=request_login,
    )


__all__ = [
    "Cart",
    "CheckoutOrchestrator",
    "CheckoutOutcome",
    "CheckoutState",
    "CheckoutStatus",
    "CustomerDetails",
    "LineItem",
    "Product",
    "Settings",
    "StorefrontApi",
    "Zone",
    "create_checkout",
    "load_settings",
    "validate",
]
