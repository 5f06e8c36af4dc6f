#!/usr/bin/env python3
"""Place a storefront order from the command line.

The cart is read from a JSON file holding a list of line items
(``id``, ``name``, ``price``, ``quantity``, ``unit``, ``image``). The
auth token and selected zone come from flags or from the
``STOREFRONT_TOKEN`` / ``STOREFRONT_ZONE`` environment variables.

Usage examples:
    # Place an order (asks for confirmation)
    uv run scripts/place_order.py --cart cart.json --zone Dhanmondi \
        --name "Rahim Uddin" --address "House 1, Road 2" --phone 01712345678

    # Skip the confirmation prompt
    uv run scripts/place_order.py --cart cart.json --zone Dhanmondi ... --yes

    # Browse
    uv run scripts/place_order.py --list-zones
    uv run scripts/place_order.py --list-categories
    uv run scripts/place_order.py --orders
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from storefront import (
    Cart,
    CheckoutStatus,
    CustomerDetails,
    StorefrontApi,
    create_checkout,
    load_settings,
)
from storefront.catalog import home_page_sections
from storefront.config import Settings
from storefront.domain.ports import Catalog

CURRENCY_SYMBOL = "৳"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Submit a grocery order to the storefront API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--cart", help="Path to the cart JSON file")
    parser.add_argument("--name", default="", help="Customer name")
    parser.add_argument("--address", default="", help="Delivery address")
    parser.add_argument("--phone", default="", help="Mobile number (01XXXXXXXXX)")
    parser.add_argument(
        "--zone", default=os.getenv("STOREFRONT_ZONE"),
        help="Selected zone name (default: $STOREFRONT_ZONE)",
    )
    parser.add_argument(
        "--token", default=os.getenv("STOREFRONT_TOKEN"),
        help="Bearer token (default: $STOREFRONT_TOKEN)",
    )
    parser.add_argument("--base-url", default=None, help="Override STOREFRONT_BASE_URL")
    parser.add_argument("--log-level", default=None, help="Override STOREFRONT_LOG_LEVEL")
    parser.add_argument(
        "--yes", "-y", action="store_true",
        help="Confirm the order without prompting",
    )
    parser.add_argument(
        "--list-zones", action="store_true", help="List delivery zones and exit",
    )
    parser.add_argument(
        "--list-categories", action="store_true",
        help="List categories and their products and exit",
    )
    parser.add_argument(
        "--orders", action="store_true", help="List your orders and exit",
    )
    return parser.parse_args(argv)


def load_cart(path: Path) -> Cart:
    """Read a cart file. Raises ValueError on malformed content."""
    rows = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(rows, list):
        raise ValueError(f"{path}: expected a JSON list of line items")
    try:
        return Cart.from_dicts(rows)
    except (KeyError, TypeError) as exc:
        raise ValueError(f"{path}: invalid line item ({exc})") from exc


def print_cart(cart: Cart, settings: Settings) -> None:
    print("=" * 60)
    print("Checkout Items")
    print("=" * 60)
    if cart.is_empty:
        print("  Your cart is empty.")
    for item in cart:
        print(
            f"  {item.name:<24} {item.quantity} {item.unit} x "
            f"{CURRENCY_SYMBOL}{item.price} = {CURRENCY_SYMBOL}{item.subtotal}"
        )
        if item.image:
            print(f"  {'':<24} {settings.image_url(item.image)}")
    print("-" * 60)
    print(f"  Items: {cart.total_quantity()}   Total Price: {CURRENCY_SYMBOL}{cart.total_price()}")
    print("=" * 60)


def make_prompt(assume_yes: bool):
    async def confirm() -> bool:
        if assume_yes:
            return True
        answer = await asyncio.to_thread(
            input, "Do you want to confirm this order? [y/N] ",
        )
        return answer.strip().lower() in ("y", "yes")

    return confirm


def list_zones(api: StorefrontApi) -> int:
    for zone in api.list_zones():
        print(f"  {zone.id:>5}  {zone.name}")
    return 0


def list_categories(catalog: Catalog, settings: Settings) -> int:
    for category in home_page_sections(catalog.list_categories()):
        print(f"\n{category.name} (id={category.id})")
        for product in category.products:
            print(f"  {product.id:>5}  {product.name:<24} {CURRENCY_SYMBOL}{product.price} / {product.unit}")
            if product.image:
                print(f"         {settings.image_url(product.image)}")
    return 0


def list_orders(catalog: Catalog, token: str | None) -> int:
    if not token:
        print("Error: sign in first (--token or $STOREFRONT_TOKEN)", file=sys.stderr)
        return 1
    print(f"{'Order ID':>10}  {'Amount':>10}  Status")
    for order in catalog.list_orders(token):
        print(f"{order.id!s:>10}  {order.total_amount!s:>9}{CURRENCY_SYMBOL}  {order.status}")
    return 0


def run_checkout(args: argparse.Namespace, api: StorefrontApi, settings: Settings) -> int:
    if not args.cart:
        print("Error: --cart is required", file=sys.stderr)
        return 1
    try:
        cart = load_cart(Path(args.cart))
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_cart(cart, settings)

    def request_login() -> None:
        print("Please sign in first (--token or $STOREFRONT_TOKEN).", file=sys.stderr)

    checkout = create_checkout(
        cart, make_prompt(args.yes), api=api, request_login=request_login,
    )
    customer = CustomerDetails(name=args.name, address=args.address, phone=args.phone)
    outcome = asyncio.run(
        checkout.submit_order(customer, auth_token=args.token, zone_name=args.zone)
    )

    if outcome.status is CheckoutStatus.SUCCESS:
        print("Order placed successfully")
        return 0
    if outcome.status is CheckoutStatus.INVALID:
        for field_name, message in outcome.errors.items():
            print(f"  {field_name}: {message}", file=sys.stderr)
        return 1
    if outcome.status is CheckoutStatus.CANCELLED:
        print("Order not confirmed.")
        return 0
    if outcome.status is CheckoutStatus.AUTH_REQUIRED:
        return 1
    print(f"Error placing the order: {outcome.error}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.base_url:
        settings = replace(settings, base_url=args.base_url.rstrip("/"))
    if args.log_level:
        settings = replace(settings, log_level=args.log_level.upper())

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    with StorefrontApi(settings) as api:
        try:
            if args.list_zones:
                return list_zones(api)
            if args.list_categories:
                return list_categories(api, settings)
            if args.orders:
                return list_orders(api, args.token)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return run_checkout(args, api, settings)


if __name__ == "__main__":
    sys.exit(main())
