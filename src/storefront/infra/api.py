"""Storefront REST API adapter.

Implements the ``ZoneDirectory``, ``OrderGateway`` and ``Catalog``
protocols on top of ``HttpClient`` and maps raw JSON to domain types.
"""

import logging

from ..config import Settings
from ..domain.models import Category, OrderRequest, OrderSummary, Product, Zone
from .http_client import HttpClient

logger = logging.getLogger(__name__)


class StorefrontApi:
    """Client for the grocery storefront backend."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self._http = HttpClient(
            timeout=self.settings.request_timeout,
            max_retries=self.settings.max_retries,
        )

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    # ------------------------------------------------------------------ #
    #  Checkout                                                            #
    # ------------------------------------------------------------------ #

    def list_zones(self) -> list[Zone]:
        # Zone lookups are single-shot; the caller decides about retrying.
        raw = self._http.get(self.settings.url(self.settings.routes.zones), retry=False)
        zones = [Zone.from_dict(z) for z in raw]
        logger.info("Fetched %d zones", len(zones))
        return zones

    def submit_order(self, order: OrderRequest, token: str) -> dict:
        url = self.settings.url(self.settings.routes.order)
        body = self._http.post(url, order.to_payload(), token=token)
        logger.info(
            "Order accepted for zone %r (%d lines)", order.zone_id, len(order.items),
        )
        return body

    # ------------------------------------------------------------------ #
    #  Catalogue                                                           #
    # ------------------------------------------------------------------ #

    def list_categories(self) -> list[Category]:
        raw = self._http.get(self.settings.url(self.settings.routes.category_products))
        categories = [Category.from_dict(c) for c in raw]
        logger.info("Fetched %d categories", len(categories))
        return categories

    def list_category_products(self, category_id: int | str) -> list[Product]:
        path = f"{self.settings.routes.category_products}/{category_id}"
        raw = self._http.get(self.settings.url(path))
        products = [Product.from_dict(p) for p in raw]
        logger.info("[category %s] Fetched %d products", category_id, len(products))
        return products

    def list_orders(self, token: str) -> list[OrderSummary]:
        raw = self._http.get(
            self.settings.url(self.settings.routes.my_orders), token=token,
        )
        return [OrderSummary.from_dict(o) for o in raw]
